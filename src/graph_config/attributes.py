"""Attribute codec: structured attribute bundles to DOT attribute text.

A template interpolates attribute bundles straight into an attribute
list: ``digraph("A [idName=aId,", bundle, "]")`` needs ``bundle``
flattened into ``key=value,key=value`` text first.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from graph_config.errors import AttributeFormatError


_BARE_ID = re.compile(r"^(?:[A-Za-z_][A-Za-z0-9_]*|-?(?:\d+(?:\.\d*)?|\.\d+))$")


def _format_value(value: Any) -> str:
    """Render a value as a DOT ID, quoting anything that is not a bare ID."""
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    if _BARE_ID.match(text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _format_pair(item: Any) -> str:
    if isinstance(item, Mapping):
        try:
            key, value = item["key"], item["value"]
        except KeyError as e:
            raise AttributeFormatError(
                f"Attribute pairs given as mappings need 'key' and 'value', got {dict(item)!r}"
            ) from e
    else:
        try:
            key, value = item
        except (TypeError, ValueError) as e:
            raise AttributeFormatError(
                f"Attribute pairs must be (key, value) sequences, got {item!r}"
            ) from e
    return f"{key}={_format_value(value)}"


def to_attributes(value: Any) -> str:
    """Encode an attribute bundle as ``key=value,...`` text.

    Accepts a mapping, a list of ``(key, value)`` pairs or
    ``{"key": ..., "value": ...}`` mappings, or text that is already in
    ``key=value`` form. None encodes as an empty string.

    Raises:
        AttributeFormatError: If text holds no ``=``, a mapping value is
            None, or the value is of an unsupported type.
    """
    if value is None:
        return ""

    if isinstance(value, str):
        if "=" not in value:
            raise AttributeFormatError(
                f"Strings passed into to_attributes() must contain an equals sign, "
                f"e.g. idName=id (got {value!r})"
            )
        return value

    if isinstance(value, Mapping):
        parts: list[str] = []
        for key, item in value.items():
            if item is None:
                raise AttributeFormatError(
                    f"The key {key!r} has no value in the attributes passed in"
                )
            parts.append(f"{key}={_format_value(item)}")
        return ",".join(parts)

    if isinstance(value, (list, tuple)):
        return ",".join(_format_pair(item) for item in value)

    raise AttributeFormatError(
        f"Cannot convert {type(value).__name__} into attributes; "
        "expected a mapping, a list of pairs or key=value text"
    )
