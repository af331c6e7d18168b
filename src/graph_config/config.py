"""Configuration for graph-config.

Holds the generic fallbacks used when a graph description leaves a
label, relationship type or id field unspecified, and the choice of
statement factories a GraphConfig builds its output with.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from graph_config.statements import create_node_statement, create_relationship_statement

GENERIC_NODE_TYPE = "Node"
GENERIC_RELATIONSHIP_TYPE = "Relationship"
DEFAULT_ID_NAME = "id"

# Read by the CLI when --verbose is not given.
LOG_LEVEL_ENV = "GRAPH_CONFIG_LOG_LEVEL"


@dataclass(frozen=True)
class StatementFactories:
    """The two callables that turn resolved nodes and pairs into statements.

    ``create_node`` is called as ``create_node(label=..., id_name=...,
    props=...)`` and ``create_relationship`` as ``create_relationship(
    left=..., right=..., type=..., direction=...)``.
    """

    create_node: Callable[..., Any] = create_node_statement
    create_relationship: Callable[..., Any] = create_relationship_statement


def default_factories() -> StatementFactories:
    """Factories returning NodeDescriptor / RelationshipDescriptor models."""
    return StatementFactories()


def neo4j_factories() -> StatementFactories:
    """Factories returning parameterised Cypher statements."""
    from graph_config.neo4j import create_node_statement as node_cypher
    from graph_config.neo4j import create_relationship_statement as relationship_cypher

    return StatementFactories(create_node=node_cypher, create_relationship=relationship_cypher)


FACTORY_PRESETS: dict[str, Callable[[], StatementFactories]] = {
    "descriptors": default_factories,
    "cypher": neo4j_factories,
}


def get_factories(name: str) -> StatementFactories:
    """Look up a factory preset by name ("descriptors" or "cypher")."""
    try:
        return FACTORY_PRESETS[name]()
    except KeyError:
        available = ", ".join(sorted(FACTORY_PRESETS))
        raise ValueError(f"Unknown output format {name!r}. Available: {available}") from None


def log_level_from_env(default: str = "WARNING") -> str:
    return os.environ.get(LOG_LEVEL_ENV, default).upper()
