"""End-to-end tests for template assembly and binding."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from graph_config import (
    AttributeFormatError,
    BindingResult,
    BoundTemplate,
    ConfigurationError,
    DiagnosticKind,
    Direction,
    GraphConfig,
    NodeDescriptor,
    ParseError,
    RelationshipDescriptor,
    digraph,
    dot,
    graph,
    neo4j_factories,
    using,
)
from graph_config.neo4j import CypherStatement
from graph_config.template import create_description, split_parts


def _type_to_label(props: dict[str, Any]) -> dict[str, Any]:
    return {"label": props["type"], "id": props["id"]}


def _nodes(statements: list[Any]) -> list[NodeDescriptor]:
    return [s for s in statements if isinstance(s, NodeDescriptor)]


def _rels(statements: list[Any]) -> list[RelationshipDescriptor]:
    return [s for s in statements if isinstance(s, RelationshipDescriptor)]


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


class TestAssembly:
    def test_split_parts_leaves_empty_text_for_transforms(self) -> None:
        fn = using("C", _type_to_label)
        text_parts, transforms = split_parts(["C [", fn, "];"])
        assert text_parts == ["C [", "", "];"]
        assert transforms == [fn]

    def test_create_description_encodes_bundles(self) -> None:
        assert create_description(["A [idName=aId,", {"sides": 3}, "];"]) == "A [idName=aId,sides=3];"

    def test_none_bundle_encodes_as_nothing(self) -> None:
        assert create_description(["A [", None, "]"]) == "A []"

    def test_graph_wraps_undirected(self) -> None:
        template = graph("A -> B")
        assert template.description == "graph { A -> B }"
        assert template.graphs[0].directed is False

    def test_digraph_wraps_directed(self) -> None:
        template = digraph("A -> B")
        assert template.description == "digraph { A -> B }"
        assert template.graphs[0].directed is True

    def test_dot_is_verbatim(self) -> None:
        template = dot("digraph g { A }")
        assert template.description == "digraph g { A }"
        assert template.graphs[0].name == "g"

    def test_transform_mid_template_does_not_shift_bundles(self) -> None:
        """A transform between two bundles leaves the second bundle in place."""
        template = digraph(
            "A [", {"x": 1}, "]; C [", using("C", _type_to_label), "]; D [", {"y": 2}, "]"
        )
        assert template.description == "digraph { A [x=1]; C []; D [y=2] }"
        assert set(template.name_to_function) == {"C"}

    def test_assembled_description_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="graph_config.template"):
            digraph("A")
        assert "created dot: digraph { A }" in caplog.text

    def test_repr(self) -> None:
        assert repr(digraph("A")) == "BoundTemplate('digraph { A }')"


class TestConstructionErrors:
    def test_unnamed_function_rejected(self) -> None:
        """Functions must be tagged with using() before interpolation."""
        with pytest.raises(ConfigurationError, match="wrapped with using"):
            digraph("C [", _type_to_label, "]")

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="node 'C'"):
            digraph(
                "C [", using("C", _type_to_label), "]; D [", using("C", _type_to_label), "]"
            )

    def test_bad_bundle_rejected(self) -> None:
        with pytest.raises(AttributeFormatError):
            digraph("A [", {"sides": None}, "]")

    def test_parse_error_at_construction(self) -> None:
        """Syntax errors surface when the template is built, not when bound."""
        with pytest.raises(ParseError):
            digraph("A -> [")

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="Unknown template kind"):
            GraphConfig().template("hypergraph", "A")


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestSimpleGraph:
    """Undirected graph, every node implied by edges."""

    def test_statements(self) -> None:
        save = graph(
            """
            A -> B [label="LIKES"];
            A -> C [label="LOVES"];
            """
        )
        statements = save(
            {
                "A": {"id": 10, "body": "body text"},
                "B": {"id": 25},
                "C": {"type": ["C", "LABEL_OF_C"], "id": 100},
            }
        )

        assert _nodes(statements) == [
            NodeDescriptor(label="A", id_name="id", props={"id": 10, "body": "body text"}),
            NodeDescriptor(label="B", id_name="id", props={"id": 25}),
            NodeDescriptor(label="C", id_name="id", props={"type": ["C", "LABEL_OF_C"], "id": 100}),
        ]
        rels = _rels(statements)
        assert [(r.left.id, r.right.id, r.type) for r in rels] == [(10, 25, "LIKES"), (10, 100, "LOVES")]
        assert all(r.direction == Direction.NONE for r in rels)


class TestComplexGraph:
    """Declared attribute bundles, transforms and one-to-many expansion."""

    VALUES = {
        "A": {"aId": 10, "body": "body text"},
        "B": [{"bId": 25}, {"bId": 30}, {"bId": 35}, {"bId": 40}, {"bId": 45}],
        "C": {"type": ["C", "LABEL_OF_C"], "id": 100},
        "D": {"type": ["D", "LABEL_OF_D"], "id": 500},
    }

    @pytest.fixture
    def save(self) -> BoundTemplate:
        return digraph(
            "A [idName=aId,", {"sides": 3}, "];\n",
            "B [idName=bId,", {"sides": 5}, "]\n",
            "C [idName=id,", using("C")(_type_to_label), "];\n",
            "D [idName=id,", using("D")(_type_to_label), "];\n",
            'A -> B [label="LIKES"];\n',
            'A -> C -> D [label="LOVES"];\n',
        )

    def test_counts(self, save: BoundTemplate) -> None:
        statements = save(self.VALUES)
        assert len(_nodes(statements)) == 8
        assert len(_rels(statements)) == 7

    def test_declared_nodes(self, save: BoundTemplate) -> None:
        nodes = _nodes(save(self.VALUES))
        assert nodes[0] == NodeDescriptor(
            label="A", id_name="aId", props={"sides": "3", "aId": 10, "body": "body text"}
        )
        assert [n.props["bId"] for n in nodes[1:6]] == [25, 30, 35, 40, 45]
        assert all(n.label == "B" and n.props["sides"] == "5" for n in nodes[1:6])
        assert nodes[6].label == ["C", "LABEL_OF_C"]
        assert nodes[7].label == ["D", "LABEL_OF_D"]

    def test_relationships(self, save: BoundTemplate) -> None:
        rels = _rels(save(self.VALUES))
        assert [(r.left.id, r.right.id) for r in rels[:5]] == [(10, b) for b in (25, 30, 35, 40, 45)]
        assert all(r.type == "LIKES" and r.right.id_name == "bId" for r in rels[:5])
        assert rels[5].right.label == ["C", "LABEL_OF_C"]
        assert (rels[6].left.id, rels[6].right.id, rels[6].type) == (100, 500, "LOVES")

    def test_reusable(self, save: BoundTemplate) -> None:
        """The same template binds different bundles independently."""
        first = save(self.VALUES)
        second = save({**self.VALUES, "B": {"bId": 1}})
        assert len(_rels(first)) == 7
        assert len(_rels(second)) == 3


class TestDirections:
    def test_forward_and_back(self) -> None:
        save = digraph(
            """
            A -> B [dir="forward",label="LIKES"];
            A -> C -> D [dir="back",label="LOVES"];
            """
        )
        statements = save(
            {
                "A": {"id": 10, "body": "body text"},
                "B": [{"id": 25}, {"id": 30}, {"id": 35}, {"id": 40}, {"id": 45}],
                "C": {"type": ["C", "LABEL_OF_C"], "id": 100},
                "D": {"type": ["D", "LABEL_OF_D"], "id": 500},
            }
        )
        assert len(_nodes(statements)) == 8
        assert [r.direction for r in _rels(statements)] == [Direction.RIGHT] * 5 + [Direction.LEFT] * 2


class TestSelfConnected:
    """Declared nodes with a shared label linked to each other."""

    def test_statements(self) -> None:
        save = digraph(
            """
            opinion

            fact_1 [label="fact"]
            fact_2 [label="fact"]

            fact_1 -> fact_2
            """
        )
        statements = save(
            {
                "opinion": {"id": 1, "message": "this is probably broken"},
                "fact_1": {"id": 101, "message": "1 + 1 = 2"},
                "fact_2": {"id": 9000, "message": "snapshots are cool"},
            }
        )
        assert [n.label for n in _nodes(statements)] == ["opinion", "fact", "fact"]
        (rel,) = _rels(statements)
        assert rel.type == "Relationship"
        assert (rel.left.label, rel.left.id) == ("fact", 101)
        assert (rel.right.label, rel.right.id) == ("fact", 9000)


# ---------------------------------------------------------------------------
# Results and factories
# ---------------------------------------------------------------------------


class TestBindingResult:
    def test_bind_returns_diagnostics(self) -> None:
        result = digraph("A -> B").bind({"A": {"id": 1}})
        assert isinstance(result, BindingResult)
        assert len(result.statements) == 1
        assert [d.kind for d in result.diagnostics] == [
            DiagnosticKind.MISSING_NODE,
            DiagnosticKind.MISSING_ENDPOINT,
            DiagnosticKind.SHORT_EDGE,
        ]

    def test_no_values(self) -> None:
        """Binding with nothing yields nothing."""
        assert digraph("A -> B")() == []

    def test_multiple_graphs_concatenate(self) -> None:
        save = dot("digraph { A } graph { B }")
        statements = save({"A": {"id": 1}, "B": {"id": 2}})
        assert [n.label for n in _nodes(statements)] == ["A", "B"]


class TestNeo4jFactories:
    def test_cypher_output(self) -> None:
        config = GraphConfig(neo4j_factories())
        save = config.digraph('A [idName=aId]; A -> B [label="KNOWS",dir=forward]')
        statements = save({"A": {"aId": 1, "tags": ["x"]}, "B": {"id": 2}})

        assert all(isinstance(s, CypherStatement) for s in statements)
        node_a, node_b, rel = statements
        assert node_a.query == "MERGE (n:`A` {`aId`: $id}) SET n += $props"
        assert node_a.parameters == {"id": 1, "props": {"aId": 1, "tags": '["x"]'}}
        assert node_b.parameters["id"] == 2
        assert "MERGE (a)-[r:`KNOWS`]->(b)" in rel.query
        assert rel.parameters == {"left_id": 1, "right_id": 2}
