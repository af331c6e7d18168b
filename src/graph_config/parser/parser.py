"""Recursive-descent parser for the DOT graph-description language.

Parses one or more ``[strict] graph|digraph [name] { ... }`` blocks into
ParsedGraph structures. This covers the part of DOT that graph templates
use, NOT the full Graphviz grammar:

- node statements, edge chains (a -> b -> c), attribute statements
  (graph/node/edge [...] and bare key=value) and subgraphs
- quoted strings, numerals and identifiers as IDs
- comments (//, # and /* */)

Unlike a layout engine, the parser does not expand edge chains or merge
repeated node statements: every statement is kept, in order, exactly as
written. Binding relies on that order. Both edge operators are accepted
in either kind of graph; the graph kind alone decides directedness.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from graph_config.ast import (
    Attribute,
    AttributeStatement,
    EdgeDeclaration,
    GraphKind,
    GraphStatement,
    NodeDeclaration,
    ParsedGraph,
    Subgraph,
)
from graph_config.errors import GraphConfigError


@dataclass
class _Token:
    """A lexer token with position tracking."""

    kind: str  # IDENT, STRING, NUMBER, EDGEOP, SYMBOL, EOF
    value: str
    line: int
    col: int


class ParseError(GraphConfigError):
    """Error during DOT parsing with position info."""

    def __init__(self, message: str, line: int = 0, col: int = 0) -> None:
        self.line = line
        self.col = col
        super().__init__(f"Line {line}, col {col}: {message}")


# ------------------------------------------------------------------ #
# Lexer
# ------------------------------------------------------------------ #

# Token patterns (order matters -- first match wins)
_TOKEN_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("COMMENT_LINE", re.compile(r"(?://|#)[^\n]*")),
    ("COMMENT_BLOCK", re.compile(r"/\*.*?\*/", re.DOTALL)),
    ("WS", re.compile(r"\s+")),
    ("STRING", re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)),
    ("EDGEOP", re.compile(r"->|--")),
    ("NUMBER", re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")),
    ("SYMBOL", re.compile(r"[{}\[\]=;,]")),
    ("IDENT", re.compile(r"[a-zA-Z_\u0080-\uffff][a-zA-Z0-9_\u0080-\uffff]*")),
]

_KEYWORDS = frozenset({"strict", "graph", "digraph", "node", "edge", "subgraph"})

# Escapes undone inside quoted IDs: \", \\ and backslash-newline.
_ESCAPE = re.compile(r'\\(\n|["\\])')


def _tokenize(source: str) -> list[_Token]:
    """Tokenize a DOT source string."""
    tokens: list[_Token] = []
    pos = 0
    line = 1
    col = 1

    while pos < len(source):
        matched = False
        for kind, pattern in _TOKEN_PATTERNS:
            m = pattern.match(source, pos)
            if m:
                value = m.group(0)
                if kind not in ("WS", "COMMENT_LINE", "COMMENT_BLOCK"):
                    tokens.append(_Token(kind=kind, value=value, line=line, col=col))

                newlines = value.count("\n")
                if newlines:
                    line += newlines
                    col = len(value) - value.rfind("\n")
                else:
                    col += len(value)

                pos = m.end()
                matched = True
                break

        if not matched:
            raise ParseError(
                f"Unexpected character: {source[pos]!r}",
                line=line,
                col=col,
            )

    tokens.append(_Token(kind="EOF", value="", line=line, col=col))
    return tokens


# ------------------------------------------------------------------ #
# Parser
# ------------------------------------------------------------------ #


class _Parser:
    """Recursive-descent parser for the DOT subset."""

    def __init__(self, tokens: list[_Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> _Token:
        return self._tokens[self._pos]

    def _advance(self) -> _Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _expect(self, kind: str, value: str | None = None) -> _Token:
        tok = self._advance()
        if tok.kind != kind:
            raise ParseError(
                f"Expected {value or kind}, got {tok.kind} ({tok.value!r})",
                line=tok.line,
                col=tok.col,
            )
        if value is not None and tok.value != value:
            raise ParseError(
                f"Expected {value!r}, got {tok.value!r}",
                line=tok.line,
                col=tok.col,
            )
        return tok

    def _at(self, kind: str, value: str | None = None) -> bool:
        tok = self._peek()
        if tok.kind != kind:
            return False
        if value is not None and tok.value != value:
            return False
        return True

    def _at_keyword(self, keyword: str) -> bool:
        """DOT keywords are case-insensitive."""
        tok = self._peek()
        return tok.kind == "IDENT" and tok.value.lower() == keyword

    def _at_id(self) -> bool:
        tok = self._peek()
        if tok.kind in ("STRING", "NUMBER"):
            return True
        return tok.kind == "IDENT" and tok.value.lower() not in _KEYWORDS

    def _expect_id(self) -> str:
        tok = self._advance()
        if tok.kind not in ("IDENT", "STRING", "NUMBER"):
            raise ParseError(
                f"Expected an ID, got {tok.kind} ({tok.value!r})",
                line=tok.line,
                col=tok.col,
            )
        return self._unquote(tok.value)

    def _unquote(self, s: str) -> str:
        """Remove surrounding quotes and unescape \\", \\\\ and line continuations."""
        if s.startswith('"') and s.endswith('"'):
            s = _ESCAPE.sub(lambda m: "" if m.group(1) == "\n" else m.group(1), s[1:-1])
        return s

    # ---------------------------------------------------------------- #
    # Grammar productions
    # ---------------------------------------------------------------- #

    def parse(self) -> list[ParsedGraph]:
        """Parse: graph+"""
        graphs: list[ParsedGraph] = []
        while not self._at("EOF"):
            graphs.append(self._parse_graph())
        return graphs

    def _parse_graph(self) -> ParsedGraph:
        """Parse: [strict] (graph|digraph) [ID] { stmt_list }"""
        strict = False
        if self._at_keyword("strict"):
            self._advance()
            strict = True

        tok = self._advance()
        if tok.kind != "IDENT" or tok.value.lower() not in ("graph", "digraph"):
            raise ParseError(
                f"Expected 'graph' or 'digraph', got {tok.value!r}",
                line=tok.line,
                col=tok.col,
            )
        kind = GraphKind(tok.value.lower())

        name = ""
        if self._at_id():
            name = self._expect_id()

        self._expect("SYMBOL", "{")
        statements = self._parse_stmt_list()
        self._expect("SYMBOL", "}")

        return ParsedGraph(
            kind=kind,
            name=name,
            strict=strict,
            statements=tuple(statements),
        )

    def _parse_stmt_list(self) -> list[GraphStatement]:
        """Parse a list of statements inside { }."""
        statements: list[GraphStatement] = []
        while not self._at("SYMBOL", "}") and not self._at("EOF"):
            statements.append(self._parse_stmt())
            # Optional semicolon
            if self._at("SYMBOL", ";"):
                self._advance()
        return statements

    def _parse_stmt(self) -> GraphStatement:
        """Parse a single statement: node, edge, attr or subgraph."""
        for target in ("graph", "node", "edge"):
            if self._at_keyword(target):
                self._advance()
                return AttributeStatement(target=target, attributes=self._parse_attr_lists())

        if self._at_keyword("subgraph") or self._at("SYMBOL", "{"):
            subgraph = self._parse_subgraph()
            if self._at("EDGEOP"):
                tok = self._peek()
                raise ParseError(
                    "Subgraphs cannot be used as edge endpoints",
                    line=tok.line,
                    col=tok.col,
                )
            return subgraph

        if self._at_id():
            return self._parse_node_or_edge()

        tok = self._peek()
        raise ParseError(
            f"Unexpected token {tok.value!r}",
            line=tok.line,
            col=tok.col,
        )

    def _parse_subgraph(self) -> Subgraph:
        """Parse: [subgraph [ID]] { stmt_list }"""
        name = ""
        if self._at_keyword("subgraph"):
            self._advance()
            if self._at_id():
                name = self._expect_id()

        self._expect("SYMBOL", "{")
        statements = self._parse_stmt_list()
        self._expect("SYMBOL", "}")
        return Subgraph(name=name, statements=tuple(statements))

    def _parse_node_or_edge(self) -> GraphStatement:
        """Parse a node definition, an edge chain or a bare ``ID = ID``.

        Determines which by looking ahead for an edge operator or '='.
        """
        first_id = self._expect_id()

        if self._at("SYMBOL", "="):
            self._advance()
            value = self._expect_id()
            return AttributeStatement(
                target="graph", attributes=(Attribute(key=first_id, value=value),)
            )

        if self._at("EDGEOP"):
            chain = [first_id]
            while self._at("EDGEOP"):
                self._advance()
                if self._at_keyword("subgraph") or self._at("SYMBOL", "{"):
                    tok = self._peek()
                    raise ParseError(
                        "Subgraphs cannot be used as edge endpoints",
                        line=tok.line,
                        col=tok.col,
                    )
                chain.append(self._expect_id())
            return EdgeDeclaration(chain=tuple(chain), attributes=self._parse_attr_lists())

        return NodeDeclaration(name=first_id, attributes=self._parse_attr_lists())

    def _parse_attr_lists(self) -> tuple[Attribute, ...]:
        """Parse zero or more consecutive [ ... ] lists."""
        attrs: list[Attribute] = []
        while self._at("SYMBOL", "["):
            attrs.extend(self._parse_attr_list())
        return tuple(attrs)

    def _parse_attr_list(self) -> list[Attribute]:
        """Parse: [ key = value, key = value, ... ]"""
        self._expect("SYMBOL", "[")
        attrs: list[Attribute] = []

        while not self._at("SYMBOL", "]") and not self._at("EOF"):
            key = self._expect_id()
            self._expect("SYMBOL", "=")
            value = self._expect_id()
            attrs.append(Attribute(key=key, value=value))

            # Optional comma or semicolon separator
            if self._at("SYMBOL", ",") or self._at("SYMBOL", ";"):
                self._advance()

        self._expect("SYMBOL", "]")
        return attrs


# ------------------------------------------------------------------ #
# Public API
# ------------------------------------------------------------------ #


def parse_dot(source: str) -> list[ParsedGraph]:
    """Parse DOT source into its graphs.

    Args:
        source: DOT text holding zero or more graph blocks.

    Returns:
        The parsed graphs, in the order they appear.

    Raises:
        ParseError: If the source is not valid DOT syntax.
    """
    tokens = _tokenize(source)
    parser = _Parser(tokens)
    return parser.parse()
