"""graph-config: bind DOT graph templates to data.

Describe a graph shape in DOT, tag per-node transforms with ``using()``,
and bind the resulting template against value bundles to get node and
relationship statements for a graph database writer.
"""

from graph_config.ast import (
    Attribute,
    AttributeStatement,
    EdgeDeclaration,
    GraphKind,
    NodeDeclaration,
    ParsedGraph,
    Subgraph,
)
from graph_config.attributes import to_attributes
from graph_config.compiler import (
    BindingCompiler,
    BindingDiagnostic,
    DiagnosticKind,
    Many,
    One,
)
from graph_config.config import (
    DEFAULT_ID_NAME,
    GENERIC_NODE_TYPE,
    GENERIC_RELATIONSHIP_TYPE,
    StatementFactories,
    default_factories,
    get_factories,
    neo4j_factories,
)
from graph_config.errors import (
    AttributeFormatError,
    BindingError,
    CardinalityError,
    ConfigurationError,
    GraphConfigError,
)
from graph_config.parser import ParseError, parse_dot
from graph_config.registry import NamedTransform, create_name_to_function_map, using
from graph_config.statements import (
    Direction,
    Endpoint,
    NodeDescriptor,
    RelationshipDescriptor,
    Statement,
)
from graph_config.template import (
    BindingResult,
    BoundTemplate,
    GraphConfig,
    digraph,
    dot,
    graph,
)
from graph_config.walker import GraphWalker

__all__ = [
    # Templates
    "GraphConfig",
    "BoundTemplate",
    "BindingResult",
    "dot",
    "graph",
    "digraph",
    "using",
    "NamedTransform",
    "create_name_to_function_map",
    "to_attributes",
    # Parser and graph model
    "parse_dot",
    "ParseError",
    "ParsedGraph",
    "GraphKind",
    "Attribute",
    "AttributeStatement",
    "NodeDeclaration",
    "EdgeDeclaration",
    "Subgraph",
    "GraphWalker",
    # Binding
    "BindingCompiler",
    "BindingDiagnostic",
    "DiagnosticKind",
    "One",
    "Many",
    # Statements
    "Statement",
    "NodeDescriptor",
    "RelationshipDescriptor",
    "Endpoint",
    "Direction",
    # Configuration
    "StatementFactories",
    "default_factories",
    "neo4j_factories",
    "get_factories",
    "GENERIC_NODE_TYPE",
    "GENERIC_RELATIONSHIP_TYPE",
    "DEFAULT_ID_NAME",
    # Errors
    "GraphConfigError",
    "ConfigurationError",
    "AttributeFormatError",
    "BindingError",
    "CardinalityError",
]
