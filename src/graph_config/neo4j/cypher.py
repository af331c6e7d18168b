"""Statement factories that emit parameterised Cypher.

Nodes are merged on their id property so that binding the same template
twice against the same data does not duplicate anything. Relationships
match both endpoints by label and id, then merge the typed relationship
between them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from graph_config.neo4j.clean_properties import clean_properties
from graph_config.statements import Direction, Endpoint, Label


class CypherStatement(BaseModel):
    """A Cypher query plus the parameters it expects."""

    model_config = ConfigDict(frozen=True)

    query: str
    parameters: dict[str, Any] = Field(default_factory=dict)


def quote_identifier(name: str) -> str:
    """Backtick-quote a label, type or property name."""
    return "`" + str(name).replace("`", "``") + "`"


def _labels(label: Label) -> str:
    names = label if isinstance(label, list) else [label]
    return "".join(f":{quote_identifier(name)}" for name in names)


def _match_pattern(var: str, endpoint: Endpoint, param: str) -> str:
    return f"({var}{_labels(endpoint.label)} {{{quote_identifier(endpoint.id_name)}: ${param}}})"


def create_node_statement(*, label: Label, id_name: str, props: dict[str, Any]) -> CypherStatement:
    # The label attribute becomes the node label; it is not stored twice.
    stored = clean_properties({k: v for k, v in props.items() if k != "label"})
    node_id = props.get(id_name)

    if node_id is None:
        return CypherStatement(
            query=f"CREATE (n{_labels(label)}) SET n = $props",
            parameters={"props": stored},
        )

    return CypherStatement(
        query=(
            f"MERGE (n{_labels(label)} {{{quote_identifier(id_name)}: $id}}) "
            "SET n += $props"
        ),
        parameters={"id": node_id, "props": stored},
    )


def create_relationship_statement(
    *,
    left: Endpoint,
    right: Endpoint,
    type: str,  # noqa: A002
    direction: Direction,
) -> CypherStatement:
    rel = f"[r:{quote_identifier(type)}]"
    match direction:
        case Direction.RIGHT:
            pattern = f"(a)-{rel}->(b)"
        case Direction.LEFT:
            pattern = f"(a)<-{rel}-(b)"
        case _:
            pattern = f"(a)-{rel}-(b)"

    return CypherStatement(
        query=(
            f"MATCH {_match_pattern('a', left, 'left_id')}, "
            f"{_match_pattern('b', right, 'right_id')} "
            f"MERGE {pattern}"
        ),
        parameters={"left_id": left.id, "right_id": right.id},
    )
