"""Lenient snapshot of a submitted flow.

Raw payloads are normalized once here so the rule modules never probe for
optional keys or node shapes themselves. Nothing in the snapshot refers back
to mutable caller data except the opaque input ``value`` objects.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from flowlint.schema.utils import extract_handle_id


class NodeShape(str, Enum):
    # inputs/outputs at the top level of the node
    LEGACY = "legacy"
    # inputs/outputs under node["data"], as stored by the editor
    ESSENTIAL = "essential"


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _sequence(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


@dataclass(frozen=True)
class FieldRecord:
    index: int
    id: Optional[str]
    value: Any = None
    has_is_deleted: bool = False
    is_deleted: Any = None


@dataclass(frozen=True)
class NodeRecord:
    index: int
    id: Optional[str]
    type: Any
    position: Any
    shape: NodeShape
    inputs: tuple[FieldRecord, ...] = ()
    outputs: tuple[FieldRecord, ...] = ()
    has_version: bool = False
    version: Any = None

    @property
    def input_ids(self) -> list[str]:
        return [item.id for item in self.inputs if item.id is not None]

    @property
    def output_ids(self) -> list[str]:
        return [item.id for item in self.outputs if item.id is not None]

    def find_input(self, field_id: str) -> FieldRecord | None:
        for item in self.inputs:
            if item.id == field_id:
                return item
        return None

    @property
    def coordinates(self) -> tuple[float, float] | None:
        """Numeric (x, y) or None when the position is missing or malformed."""
        if not isinstance(self.position, Mapping):
            return None
        x = self.position.get("x")
        y = self.position.get("y")
        if is_number(x) and is_number(y):
            return float(x), float(y)
        return None


@dataclass(frozen=True)
class EdgeRecord:
    index: int
    id: Optional[str]
    source: Optional[str]
    source_handle: Optional[str]
    target: Optional[str]
    target_handle: Optional[str]

    @property
    def source_field(self) -> Optional[str]:
        return extract_handle_id(self.source_handle) if self.source_handle else None

    @property
    def target_field(self) -> Optional[str]:
        return extract_handle_id(self.target_handle) if self.target_handle else None


@dataclass(frozen=True)
class FlowSnapshot:
    nodes: tuple[NodeRecord, ...]
    edges: tuple[EdgeRecord, ...]
    node_map: Mapping[str, NodeRecord] = field(default_factory=dict)
    inbound_fields: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def inbound_handles(self, node_id: str) -> tuple[str, ...]:
        return self.inbound_fields.get(node_id, ())


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _ingest_input(index: int, raw: Any) -> FieldRecord:
    data = _mapping(raw)
    return FieldRecord(index=index, id=_text(data.get("id")), value=data.get("value"))


def _ingest_output(index: int, raw: Any) -> FieldRecord:
    data = _mapping(raw)
    return FieldRecord(
        index=index,
        id=_text(data.get("id")),
        has_is_deleted="isDeleted" in data,
        is_deleted=data.get("isDeleted"),
    )


def _node_shape(data: Mapping[str, Any]) -> NodeShape:
    if "inputs" in data or "outputs" in data:
        return NodeShape.LEGACY
    nested = data.get("data")
    if isinstance(nested, Mapping) and ("inputs" in nested or "outputs" in nested):
        return NodeShape.ESSENTIAL
    return NodeShape.LEGACY


def ingest_node(index: int, raw: Any) -> NodeRecord:
    data = _mapping(raw)
    shape = _node_shape(data)
    fields = _mapping(data.get("data")) if shape is NodeShape.ESSENTIAL else data
    return NodeRecord(
        index=index,
        id=_text(data.get("id")),
        type=data.get("type"),
        position=data.get("position"),
        shape=shape,
        inputs=tuple(_ingest_input(i, item) for i, item in enumerate(_sequence(fields.get("inputs")))),
        outputs=tuple(_ingest_output(i, item) for i, item in enumerate(_sequence(fields.get("outputs")))),
        has_version="version" in data,
        version=data.get("version"),
    )


def ingest_edge(index: int, raw: Any) -> EdgeRecord:
    data = _mapping(raw)
    return EdgeRecord(
        index=index,
        id=_text(data.get("id")),
        source=_text(data.get("source")),
        source_handle=_text(data.get("sourceHandle")),
        target=_text(data.get("target")),
        target_handle=_text(data.get("targetHandle")),
    )


def ingest(nodes: Sequence[Any], edges: Sequence[Any]) -> FlowSnapshot:
    node_records = tuple(ingest_node(i, raw) for i, raw in enumerate(nodes))
    edge_records = tuple(ingest_edge(i, raw) for i, raw in enumerate(edges))

    node_map: dict[str, NodeRecord] = {}
    for record in node_records:
        if record.id is not None and record.id not in node_map:
            node_map[record.id] = record

    inbound: dict[str, list[str]] = {}
    for edge in edge_records:
        if edge.target is not None and edge.target_field is not None:
            inbound.setdefault(edge.target, []).append(edge.target_field)

    return FlowSnapshot(
        nodes=node_records,
        edges=edge_records,
        node_map=node_map,
        inbound_fields={key: tuple(value) for key, value in inbound.items()},
    )
