"""DOT parser for graph descriptions."""

from graph_config.parser.parser import ParseError, parse_dot

__all__ = ["ParseError", "parse_dot"]
