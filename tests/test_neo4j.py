"""Tests for the Cypher statement factories and the property cleaner."""

from __future__ import annotations

from graph_config.neo4j import (
    clean_properties,
    create_node_statement,
    create_relationship_statement,
    quote_identifier,
)
from graph_config.statements import Direction, Endpoint


class TestCleanProperties:
    def test_drops_none(self) -> None:
        assert clean_properties({"a": 1, "b": None}) == {"a": 1}

    def test_nested_values_become_json(self) -> None:
        cleaned = clean_properties({"tags": ["x", "y"], "meta": {"k": 1}, "pair": (1, 2)})
        assert cleaned == {"tags": '["x", "y"]', "meta": '{"k": 1}', "pair": "[1, 2]"}

    def test_input_not_modified(self) -> None:
        props = {"a": None, "b": [1]}
        clean_properties(props)
        assert props == {"a": None, "b": [1]}


class TestQuoteIdentifier:
    def test_plain(self) -> None:
        assert quote_identifier("Person") == "`Person`"

    def test_inner_backtick_doubled(self) -> None:
        assert quote_identifier("we`ird") == "`we``ird`"


class TestNodeStatement:
    def test_merge_on_id(self) -> None:
        stmt = create_node_statement(label="Person", id_name="personId", props={"personId": 7, "name": "Ada"})
        assert stmt.query == "MERGE (n:`Person` {`personId`: $id}) SET n += $props"
        assert stmt.parameters == {"id": 7, "props": {"personId": 7, "name": "Ada"}}

    def test_label_list_gives_several_labels(self) -> None:
        stmt = create_node_statement(
            label=["C", "LABEL_OF_C"], id_name="id", props={"id": 100, "label": ["C", "LABEL_OF_C"]}
        )
        assert stmt.query.startswith("MERGE (n:`C`:`LABEL_OF_C` {`id`: $id})")
        assert "label" not in stmt.parameters["props"]

    def test_create_without_id(self) -> None:
        """A node without its id value cannot be merged and is created instead."""
        stmt = create_node_statement(label="Note", id_name="id", props={"text": "hi"})
        assert stmt.query == "CREATE (n:`Note`) SET n = $props"
        assert stmt.parameters == {"props": {"text": "hi"}}


class TestRelationshipStatement:
    LEFT = Endpoint(id=1, label="Person", id_name="personId")
    RIGHT = Endpoint(id="p1", label="Post", id_name="id")

    def test_right(self) -> None:
        stmt = create_relationship_statement(
            left=self.LEFT, right=self.RIGHT, type="LIKES", direction=Direction.RIGHT
        )
        assert stmt.query == (
            "MATCH (a:`Person` {`personId`: $left_id}), (b:`Post` {`id`: $right_id}) "
            "MERGE (a)-[r:`LIKES`]->(b)"
        )
        assert stmt.parameters == {"left_id": 1, "right_id": "p1"}

    def test_left(self) -> None:
        stmt = create_relationship_statement(
            left=self.LEFT, right=self.RIGHT, type="LIKES", direction=Direction.LEFT
        )
        assert stmt.query.endswith("MERGE (a)<-[r:`LIKES`]-(b)")

    def test_none(self) -> None:
        stmt = create_relationship_statement(
            left=self.LEFT, right=self.RIGHT, type="LIKES", direction=Direction.NONE
        )
        assert stmt.query.endswith("MERGE (a)-[r:`LIKES`]-(b)")
