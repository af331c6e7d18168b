"""Name-binding registry for transform functions.

A template can carry transform functions next to its attribute bundles.
Each one must be tagged with the name of the node it produces records
for, using ``using()``::

    @using("C")
    def type_to_label(props):
        return {"label": props["type"], "id": props["id"]}

At bind time the transform for ``C`` receives the whole value bundle
and returns a record, a list of records, or None.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, overload

from graph_config.errors import ConfigurationError

logger = logging.getLogger(__name__)

RecordFn = Callable[[Any], Any]
Transform = Callable[[Mapping[str, Any]], Any]


class NamedTransform:
    """A record function bound to the node name it reads from the value bundle.

    Reads ``values[name]``. A list is mapped element-wise (results that
    are themselves lists are flattened in place); a single value is passed
    through once. An absent value yields None without calling ``fn``.
    """

    def __init__(self, name: str, fn: RecordFn) -> None:
        self.name = name
        self.fn = fn

    def __call__(self, values: Mapping[str, Any]) -> Any:
        raw = values.get(self.name)
        if raw is None:
            return None
        if isinstance(raw, (list, tuple)):
            results: list[Any] = []
            for item in raw:
                out = self.fn(item)
                if isinstance(out, (list, tuple)):
                    results.extend(out)
                else:
                    results.append(out)
            return results
        return self.fn(raw)

    def __repr__(self) -> str:
        fn_name = getattr(self.fn, "__name__", type(self.fn).__name__)
        return f"NamedTransform({self.name!r}, {fn_name})"


@overload
def using(name: str) -> Callable[[RecordFn], NamedTransform]: ...


@overload
def using(name: str, fn: RecordFn) -> NamedTransform: ...


def using(name: str, fn: RecordFn | None = None) -> Any:
    """Tag a record function with the node name it transforms.

    Works called directly (``using("C", fn)``), curried
    (``using("C")(fn)``) or as a decorator (``@using("C")``).
    """
    if not isinstance(name, str) or not name:
        raise ConfigurationError(f"using() needs a non-empty node name, got {name!r}")

    def wrap(f: RecordFn) -> NamedTransform:
        if not callable(f):
            raise ConfigurationError(f"using({name!r}) expects a callable, got {f!r}")
        return NamedTransform(name, f)

    if fn is None:
        return wrap
    return wrap(fn)


def transform_name(fn: Any) -> str | None:
    """The name a transform was tagged with, or None for an untagged callable."""
    name = getattr(fn, "name", None)
    if isinstance(name, str) and name:
        return name
    return None


def create_name_to_function_map(fns: Iterable[Transform] = ()) -> Mapping[str, Transform]:
    """Index transforms by name.

    Returns a read-only mapping, since it is shared by every binding call
    made against the template.

    Raises:
        ConfigurationError: If a transform has no name, or two transforms
            share one.
    """
    name_to_function: dict[str, Transform] = {}

    for fn in fns:
        name = transform_name(fn)
        if name is None:
            raise ConfigurationError(
                "Functions passed into a graph must be wrapped with using() and given a name "
                f"(got {fn!r})"
            )
        if name in name_to_function:
            raise ConfigurationError(
                f"More than one function was registered for the node {name!r}"
            )
        name_to_function[name] = fn

    logger.debug("Registered transforms: %s", ", ".join(name_to_function) or "(none)")
    return MappingProxyType(name_to_function)
