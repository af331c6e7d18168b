"""Binding compiler: parsed graph + transforms + values -> statements.

Binding resolves every node name in a graph description against the
value bundle, either through the transform registered for that name or
by reading ``values[name]`` directly, and turns the results into node
and relationship statements.

Output order is part of the contract:

1. declared nodes, in declaration order
2. implied nodes (named only by edges), in first-seen order
3. relationships, in edge order, then chain position, then fan-out order

Missing data is tolerated: a name that resolves to nothing is left out
and a BindingDiagnostic is recorded. Ambiguous data is not: an edge
whose two sides both resolve to several records raises CardinalityError.

A BindingCompiler holds no per-call state. Each ``compile()`` call works
on its own _Binding, so one compiler, graph and registry can serve
concurrent calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from graph_config.ast import EdgeDeclaration, NodeDeclaration, ParsedGraph
from graph_config.config import (
    DEFAULT_ID_NAME,
    GENERIC_NODE_TYPE,
    GENERIC_RELATIONSHIP_TYPE,
    StatementFactories,
)
from graph_config.errors import BindingError, CardinalityError
from graph_config.registry import Transform
from graph_config.statements import Direction, Endpoint, Label
from graph_config.walker import LABEL_ATTR, GraphWalker

logger = logging.getLogger(__name__)

DIR_ATTR = "dir"

_DIRECTIONS: dict[str, Direction] = {
    "forward": Direction.RIGHT,
    "back": Direction.LEFT,
    "both": Direction.NONE,
    "none": Direction.NONE,
}


# ------------------------------------------------------------------ #
# Resolved values
# ------------------------------------------------------------------ #


@dataclass(frozen=True)
class One:
    """A name that resolved to a single record."""

    record: dict[str, Any]

    @property
    def records(self) -> tuple[dict[str, Any], ...]:
        return (self.record,)


@dataclass(frozen=True)
class Many:
    """A name that resolved to a list of records. Never empty."""

    records: tuple[dict[str, Any], ...]


Resolution = One | Many


def to_resolution(name: str, result: Any) -> Resolution | None:
    """Classify a transform result. None, ``{}`` and ``[]`` are all absent.

    Raises:
        BindingError: If the result is not a record or a list of records.
    """
    if result is None:
        return None

    if isinstance(result, Mapping):
        return One(dict(result)) if result else None

    if isinstance(result, (list, tuple)):
        records: list[dict[str, Any]] = []
        for item in result:
            if item is None:
                continue
            if not isinstance(item, Mapping):
                raise BindingError(
                    f"The values for {name!r} contain {type(item).__name__} items; "
                    "expected records (mappings)",
                    name=name,
                )
            records.append(dict(item))
        return Many(tuple(records)) if records else None

    raise BindingError(
        f"The values for {name!r} resolved to {type(result).__name__}; "
        "expected a record, a list of records or None",
        name=name,
    )


def _merge(declared: dict[str, Any], resolution: Resolution) -> Resolution:
    """Overlay each record on the declared attributes; record fields win."""
    match resolution:
        case One(record=record):
            return One({**declared, **record})
        case Many(records=records):
            return Many(tuple({**declared, **record} for record in records))


def _label_for(record: Mapping[str, Any], default_label: str) -> Label:
    """The record's own ``label`` field, else ``default_label``.

    An empty label falls back like a missing one. Scalar labels are
    rendered as text; a list gives one label per item.
    """
    label = record.get(LABEL_ATTR)
    if label is None or label == "":
        return default_label
    if isinstance(label, (list, tuple)):
        labels = [str(item) for item in label if item is not None and item != ""]
        return labels or default_label
    return str(label)


@dataclass(frozen=True)
class ResolvedEndpoint:
    """One name in an edge chain, with its records and defaults."""

    name: str
    default_label: str
    id_name: str
    resolution: Resolution

    def endpoint(self, record: Mapping[str, Any]) -> Endpoint:
        return Endpoint(
            id=record.get(self.id_name),
            label=_label_for(record, self.default_label),
            id_name=self.id_name,
        )


# ------------------------------------------------------------------ #
# Diagnostics
# ------------------------------------------------------------------ #


class DiagnosticKind(StrEnum):
    MISSING_NODE = "missing-node"
    MISSING_ENDPOINT = "missing-endpoint"
    SHORT_EDGE = "short-edge"
    MISSING_ID = "missing-id"


@dataclass(frozen=True)
class BindingDiagnostic:
    """A data gap found while binding. Never fatal."""

    kind: DiagnosticKind
    message: str
    name: str = ""


# ------------------------------------------------------------------ #
# Edge attributes
# ------------------------------------------------------------------ #


def relationship_type(edge: EdgeDeclaration) -> str:
    label = edge.get(LABEL_ATTR)
    return label if label else GENERIC_RELATIONSHIP_TYPE


def relationship_direction(directed: bool, edge: EdgeDeclaration) -> Direction:
    """Map the ``dir`` attribute to a Direction. Undirected graphs are always NONE."""
    if not directed:
        return Direction.NONE
    dir_attr = edge.get(DIR_ATTR)
    if not dir_attr:
        return Direction.NONE
    return _DIRECTIONS.get(dir_attr, Direction.NONE)


# ------------------------------------------------------------------ #
# Compiler
# ------------------------------------------------------------------ #


class BindingCompiler:
    """Compiles parsed graphs into statements using a pair of statement factories."""

    def __init__(self, factories: StatementFactories | None = None) -> None:
        self.factories = factories or StatementFactories()

    def compile(
        self,
        graph: ParsedGraph,
        name_to_function: Mapping[str, Transform] | None = None,
        values: Mapping[str, Any] | None = None,
        diagnostics: list[BindingDiagnostic] | None = None,
    ) -> list[Any]:
        """Bind one parsed graph against ``values``.

        Args:
            graph: The parsed graph description.
            name_to_function: Transforms by node name.
            values: The value bundle for this call.
            diagnostics: If given, data gaps are appended to it.

        Returns:
            The statements, in output order.

        Raises:
            CardinalityError: If an edge joins two multi-record endpoints.
            BindingError: If a transform returns an unsupported type.
        """
        binding = _Binding(
            factories=self.factories,
            walker=GraphWalker(graph),
            name_to_function=name_to_function or {},
            values=values or {},
        )
        statements = binding.run()
        if diagnostics is not None:
            diagnostics.extend(binding.diagnostics)
        return statements


@dataclass
class _Binding:
    """Working state for a single compile() call."""

    factories: StatementFactories
    walker: GraphWalker
    name_to_function: Mapping[str, Transform]
    values: Mapping[str, Any]
    diagnostics: list[BindingDiagnostic] = field(default_factory=list, init=False)
    _resolved: dict[str, Resolution | None] = field(default_factory=dict, init=False)

    def run(self) -> list[Any]:
        statements: list[Any] = []
        for decl in self.walker.node_declarations:
            statements.extend(self._declared_node_statements(decl))
        for name in self.walker.implied_node_names():
            statements.extend(self._implied_node_statements(name))
        for edge in self.walker.edge_declarations:
            statements.extend(self._edge_statements(edge))
        return statements

    def _diagnose(self, kind: DiagnosticKind, message: str, name: str = "") -> None:
        logger.debug(message)
        self.diagnostics.append(BindingDiagnostic(kind=kind, message=message, name=name))

    def _resolve(self, name: str) -> Resolution | None:
        """Apply the transform for ``name`` (or read ``values[name]``) once per call."""
        if name not in self._resolved:
            transform = self.name_to_function.get(name)
            result = transform(self.values) if transform is not None else self.values.get(name)
            self._resolved[name] = to_resolution(name, result)
        return self._resolved[name]

    # -- nodes ------------------------------------------------------- #

    def _node_statements(
        self, resolution: Resolution, default_label: str, id_name: str
    ) -> list[Any]:
        return [
            self.factories.create_node(
                label=_label_for(record, default_label),
                id_name=id_name,
                props=record,
            )
            for record in resolution.records
        ]

    def _declared_node_statements(self, decl: NodeDeclaration) -> list[Any]:
        resolution = self._resolve(decl.name)
        if resolution is None:
            self._diagnose(
                DiagnosticKind.MISSING_NODE,
                f"No node named {decl.name} could be found within the values",
                decl.name,
            )
            return []
        return self._node_statements(
            _merge(self.walker.props_of(decl), resolution),
            self.walker.label_of(decl),
            self.walker.id_name_of(decl),
        )

    def _implied_node_statements(self, name: str) -> list[Any]:
        resolution = self._resolve(name)
        if resolution is None:
            self._diagnose(
                DiagnosticKind.MISSING_NODE,
                f"No node named {name} could be found within the values",
                name,
            )
            return []
        return self._node_statements(resolution, name or GENERIC_NODE_TYPE, DEFAULT_ID_NAME)

    # -- edges ------------------------------------------------------- #

    def _endpoint(self, name: str, edge: EdgeDeclaration) -> ResolvedEndpoint | None:
        resolution = self._resolve(name)
        if resolution is None:
            self._diagnose(
                DiagnosticKind.MISSING_ENDPOINT,
                f"No node named {name} required by the relationship "
                f"{edge.description} could be found within the values",
                name,
            )
            return None

        decl = self.walker.find_node_declaration(name)
        if decl is None:
            return ResolvedEndpoint(
                name=name,
                default_label=name or GENERIC_NODE_TYPE,
                id_name=DEFAULT_ID_NAME,
                resolution=resolution,
            )
        return ResolvedEndpoint(
            name=name,
            default_label=self.walker.label_of(decl),
            id_name=self.walker.id_name_of(decl),
            resolution=_merge(self.walker.props_of(decl), resolution),
        )

    def _edge_statements(self, edge: EdgeDeclaration) -> list[Any]:
        rel_type = relationship_type(edge)
        direction = relationship_direction(self.walker.graph.directed, edge)

        endpoints = [self._endpoint(name, edge) for name in edge.chain]
        if sum(1 for e in endpoints if e is not None) < 2:
            self._diagnose(
                DiagnosticKind.SHORT_EDGE,
                f"Found an invalid relationship {edge.description} with less than two "
                "nodes. This is possibly due to a node not existing within the values.",
                edge.description,
            )
            return []

        statements: list[Any] = []
        for left, right in zip(endpoints, endpoints[1:]):
            if left is None or right is None:
                break
            statements.extend(self._pair_statements(edge, left, right, rel_type, direction))
        return statements

    def _pair_statements(
        self,
        edge: EdgeDeclaration,
        left: ResolvedEndpoint,
        right: ResolvedEndpoint,
        rel_type: str,
        direction: Direction,
    ) -> list[Any]:
        left_records = left.resolution.records
        right_records = right.resolution.records

        # One-to-many and many-to-one fan out; many-to-many would need
        # relationship attributes to say which records pair up.
        if len(left_records) > 1 and len(right_records) > 1:
            raise CardinalityError(
                f"Both the left and the right side of {left.name} -> {right.name} in "
                f"{edge.description} are multiple nodes (left: {len(left_records)}, "
                f"right: {len(right_records)})",
                chain=edge.chain,
                left_count=len(left_records),
                right_count=len(right_records),
            )

        statements: list[Any] = []
        for left_record in left_records:
            for right_record in right_records:
                left_end = left.endpoint(left_record)
                right_end = right.endpoint(right_record)
                for resolved, end in ((left, left_end), (right, right_end)):
                    if end.id is None:
                        self._diagnose(
                            DiagnosticKind.MISSING_ID,
                            f"Node {resolved.name} in {edge.description} has no "
                            f"{resolved.id_name!r} value",
                            resolved.name,
                        )
                statements.append(
                    self.factories.create_relationship(
                        left=left_end,
                        right=right_end,
                        type=rel_type,
                        direction=direction,
                    )
                )
        return statements
