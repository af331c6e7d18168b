"""Statement types produced by binding.

A binding call returns a flat list of statements: one NodeDescriptor per
resolved record and one RelationshipDescriptor per resolved pair of
endpoints. The default statement factories below build these models;
other factories (see graph_config.neo4j) can turn the same inputs into
whatever the downstream writer expects.

All types use Pydantic v2 so the output can be dumped straight to JSON.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# A record may set its own label; a list gives a node several labels.
Label = str | list[str]


class Direction(StrEnum):
    """Which way a relationship points, relative to its written order."""

    RIGHT = "right"  # left -> right
    LEFT = "left"  # left <- right
    NONE = "none"


class Endpoint(BaseModel):
    """One end of a relationship: enough to find the node it attaches to."""

    model_config = ConfigDict(frozen=True)

    id: Any = None
    label: Label
    id_name: str


class NodeDescriptor(BaseModel):
    """A node to create: its label, the property holding its id, and its properties."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["node"] = "node"
    label: Label
    id_name: str
    props: dict[str, Any] = Field(default_factory=dict)


class RelationshipDescriptor(BaseModel):
    """A relationship to create between two already-described nodes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["relationship"] = "relationship"
    left: Endpoint
    right: Endpoint
    type: str
    direction: Direction = Direction.NONE


Statement = NodeDescriptor | RelationshipDescriptor


def create_node_statement(*, label: Label, id_name: str, props: dict[str, Any]) -> NodeDescriptor:
    return NodeDescriptor(label=label, id_name=id_name, props=props)


def create_relationship_statement(
    *,
    left: Endpoint,
    right: Endpoint,
    type: str,  # noqa: A002
    direction: Direction,
) -> RelationshipDescriptor:
    return RelationshipDescriptor(left=left, right=right, type=type, direction=direction)
