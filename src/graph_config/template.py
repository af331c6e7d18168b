"""Graph templates: assemble a DOT description once, bind it many times.

Usage::

    from graph_config import digraph, using

    sides = {"sides": 5}

    @using("C")
    def type_to_label(props):
        return {"label": props["type"], "id": props["id"]}

    save = digraph(
        "A [idName=aId,", sides, "];",
        "C [", type_to_label, "];",
        'A -> C [label="LOVES"]',
    )
    statements = save({"A": {"aId": 10}, "C": {"type": ["C", "X"], "id": 100}})

String parts are literal DOT text. A transform tagged with ``using()``
contributes no text and is registered under its name; every other value
is encoded with ``to_attributes()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from graph_config.ast import ParsedGraph
from graph_config.attributes import to_attributes
from graph_config.compiler import BindingCompiler, BindingDiagnostic
from graph_config.config import StatementFactories
from graph_config.parser import parse_dot
from graph_config.registry import Transform, create_name_to_function_map

logger = logging.getLogger(__name__)


def wrap_dot(description: str) -> str:
    return description


def wrap_graph(description: str) -> str:
    return f"graph {{ {description} }}"


def wrap_digraph(description: str) -> str:
    return f"digraph {{ {description} }}"


def split_parts(parts: Iterable[Any]) -> tuple[list[Any], list[Transform]]:
    """Separate interpolated transforms from text and attribute bundles.

    Transforms are replaced by empty text so the surrounding fragments
    keep their positions.
    """
    text_parts: list[Any] = []
    transforms: list[Transform] = []
    for part in parts:
        if callable(part):
            transforms.append(part)
            text_parts.append("")
        else:
            text_parts.append(part)
    return text_parts, transforms


def create_description(parts: Iterable[Any]) -> str:
    """Join literal fragments with encoded attribute bundles."""
    return "".join(part if isinstance(part, str) else to_attributes(part) for part in parts)


@dataclass(frozen=True)
class BindingResult:
    """Statements from one binding call plus the data gaps found on the way."""

    statements: list[Any]
    diagnostics: list[BindingDiagnostic] = field(default_factory=list)


class BoundTemplate:
    """A parsed graph description with its transforms, ready to bind.

    Calling the template with a value bundle returns the statements;
    ``bind()`` also returns the diagnostics. The parsed graphs and the
    transform map are never modified, so one template can be bound from
    several threads at once.
    """

    def __init__(
        self,
        description: str,
        graphs: list[ParsedGraph],
        name_to_function: Mapping[str, Transform],
        compiler: BindingCompiler,
    ) -> None:
        self.description = description
        self.graphs = tuple(graphs)
        self.name_to_function = name_to_function
        self._compiler = compiler

    def bind(self, values: Mapping[str, Any] | None = None) -> BindingResult:
        diagnostics: list[BindingDiagnostic] = []
        statements: list[Any] = []
        for graph in self.graphs:
            statements.extend(
                self._compiler.compile(graph, self.name_to_function, values or {}, diagnostics)
            )
        return BindingResult(statements=statements, diagnostics=diagnostics)

    def __call__(self, values: Mapping[str, Any] | None = None) -> list[Any]:
        return self.bind(values).statements

    def __repr__(self) -> str:
        return f"BoundTemplate({self.description!r})"


class GraphConfig:
    """Template factory bound to one set of statement factories.

    ``dot`` takes complete DOT text, ``graph`` wraps the text in an
    undirected ``graph { }`` and ``digraph`` in a directed ``digraph { }``.
    """

    def __init__(self, factories: StatementFactories | None = None) -> None:
        self.factories = factories or StatementFactories()
        self._compiler = BindingCompiler(self.factories)

    def _build(self, parts: tuple[Any, ...], wrap: Callable[[str], str]) -> BoundTemplate:
        text_parts, transforms = split_parts(parts)
        name_to_function = create_name_to_function_map(transforms)
        description = wrap(create_description(text_parts))
        logger.debug("created dot: %s", description)
        graphs = parse_dot(description)
        return BoundTemplate(description, graphs, name_to_function, self._compiler)

    def dot(self, *parts: Any) -> BoundTemplate:
        return self._build(parts, wrap_dot)

    def graph(self, *parts: Any) -> BoundTemplate:
        return self._build(parts, wrap_graph)

    def digraph(self, *parts: Any) -> BoundTemplate:
        return self._build(parts, wrap_digraph)

    def template(self, kind: str, *parts: Any) -> BoundTemplate:
        """Build a template by flavour name: "dot", "graph" or "digraph"."""
        builders = {"dot": self.dot, "graph": self.graph, "digraph": self.digraph}
        try:
            builder = builders[kind]
        except KeyError:
            raise ValueError(
                f"Unknown template kind {kind!r}. Available: {', '.join(builders)}"
            ) from None
        return builder(*parts)


_default = GraphConfig()

dot = _default.dot
graph = _default.graph
digraph = _default.digraph
