"""Neo4j output: Cypher statement factories and property cleaning."""

from graph_config.neo4j.clean_properties import clean_properties
from graph_config.neo4j.cypher import (
    CypherStatement,
    create_node_statement,
    create_relationship_statement,
    quote_identifier,
)

__all__ = [
    "CypherStatement",
    "clean_properties",
    "create_node_statement",
    "create_relationship_statement",
    "quote_identifier",
]
