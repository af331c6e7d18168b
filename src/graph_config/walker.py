"""Read-only views over a parsed graph description.

GraphWalker splits a graph's top-level statements into node and edge
declarations and answers the per-declaration questions binding needs:
which label, which id field, which declared properties.

Attribute statements and subgraphs are not part of the bound shape and
are skipped.
"""

from __future__ import annotations

from graph_config.ast import EdgeDeclaration, NodeDeclaration, ParsedGraph
from graph_config.config import DEFAULT_ID_NAME, GENERIC_NODE_TYPE

ID_NAME_ATTR = "idName"
LABEL_ATTR = "label"


class GraphWalker:
    """Node/edge partition and lookups for one ParsedGraph."""

    def __init__(self, graph: ParsedGraph) -> None:
        self.graph = graph
        self.node_declarations: tuple[NodeDeclaration, ...] = tuple(
            s for s in graph.statements if isinstance(s, NodeDeclaration)
        )
        self.edge_declarations: tuple[EdgeDeclaration, ...] = tuple(
            s for s in graph.statements if isinstance(s, EdgeDeclaration)
        )

        # First declaration wins when a name is declared twice.
        self._by_name: dict[str, NodeDeclaration] = {}
        for decl in self.node_declarations:
            self._by_name.setdefault(decl.name, decl)

    def find_node_declaration(self, name: str) -> NodeDeclaration | None:
        return self._by_name.get(name)

    def implied_node_names(self) -> list[str]:
        """Names used in edge chains that have no node declaration, in first-seen order."""
        seen: dict[str, None] = {}
        for edge in self.edge_declarations:
            for name in edge.chain:
                if name not in self._by_name:
                    seen.setdefault(name, None)
        return list(seen)

    @staticmethod
    def label_of(declaration: NodeDeclaration) -> str:
        """Explicit ``label`` attribute, else the node name, else the generic node type."""
        label = declaration.get(LABEL_ATTR)
        if label:
            return label
        if declaration.name:
            return declaration.name
        return GENERIC_NODE_TYPE

    @staticmethod
    def id_name_of(declaration: NodeDeclaration) -> str:
        id_name = declaration.get(ID_NAME_ATTR)
        if id_name:
            return id_name
        return DEFAULT_ID_NAME

    @staticmethod
    def props_of(declaration: NodeDeclaration) -> dict[str, str]:
        """Declared attributes minus ``idName``; later duplicates win."""
        return {
            attr.key: attr.value for attr in declaration.attributes if attr.key != ID_NAME_ATTR
        }
