"""Graph description syntax tree.

Defines the parsed form of a DOT graph description: the graph kind and
an ordered list of top-level statements. These are produced by the DOT
parser and consumed by the walker and the binding compiler.

Everything here is frozen. A parsed graph is shared by every binding
call made against the same template, so it must never change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class GraphKind(StrEnum):
    """Whether a graph's edges carry a direction."""

    GRAPH = "graph"  # undirected, edges written with --
    DIGRAPH = "digraph"  # directed, edges written with ->


@dataclass(frozen=True)
class Attribute:
    """A single ``key=value`` pair from an attribute list."""

    key: str
    value: str


@dataclass(frozen=True)
class NodeDeclaration:
    """``name [key=value, ...]``"""

    name: str
    attributes: tuple[Attribute, ...] = ()

    def get(self, key: str) -> str | None:
        """Return the first value for ``key``, or None."""
        for attr in self.attributes:
            if attr.key == key:
                return attr.value
        return None


@dataclass(frozen=True)
class EdgeDeclaration:
    """``a -> b -> c [key=value, ...]``

    The chain keeps every name in the order written; it is not expanded
    into pairs here.
    """

    chain: tuple[str, ...]
    attributes: tuple[Attribute, ...] = ()

    def get(self, key: str) -> str | None:
        """Return the first value for ``key``, or None."""
        for attr in self.attributes:
            if attr.key == key:
                return attr.value
        return None

    @property
    def description(self) -> str:
        return " -> ".join(self.chain)


@dataclass(frozen=True)
class AttributeStatement:
    """``graph [...]``, ``node [...]``, ``edge [...]`` or a bare ``key=value``.

    ``target`` is "graph", "node" or "edge".
    """

    target: str
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class Subgraph:
    """``subgraph name { ... }`` with its own statement list."""

    name: str = ""
    statements: tuple[GraphStatement, ...] = ()


GraphStatement = NodeDeclaration | EdgeDeclaration | AttributeStatement | Subgraph


@dataclass(frozen=True)
class ParsedGraph:
    """One ``[strict] graph|digraph [name] { ... }`` block."""

    kind: GraphKind
    name: str = ""
    strict: bool = False
    statements: tuple[GraphStatement, ...] = field(default_factory=tuple)

    @property
    def directed(self) -> bool:
        return self.kind == GraphKind.DIGRAPH
