"""Projection between the essential and full flow views."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from .types import (
    EssentialEdge,
    EssentialFlow,
    EssentialInput,
    EssentialNode,
    EssentialNodeData,
    EssentialOutput,
    FullEdge,
    FullFlow,
    FullInput,
    FullNode,
    FullNodeData,
    FullOutput,
    MenuItem,
)

_BASE_NODE_WIDTH = 300
_MAX_NODE_WIDTH = 500
_BASE_NODE_HEIGHT = 200
_ROW_HEIGHT = 40


class FlowFormatError(ValueError):
    """Raised when a saved payload is neither an essential nor a full flow."""


def clean_input(field: FullInput) -> EssentialInput:
    payload = field.model_dump(include=set(EssentialInput.model_fields))
    if not field.options:
        payload.pop("options", None)
    return EssentialInput.model_validate(payload)


def expand_input(field: EssentialInput) -> FullInput:
    return FullInput.model_validate(field.model_dump())


def clean_output(field: FullOutput) -> EssentialOutput:
    return EssentialOutput.model_validate(field.model_dump(include=set(EssentialOutput.model_fields)))


def expand_output(field: EssentialOutput) -> FullOutput:
    return FullOutput.model_validate(field.model_dump())


def _default_menu_items() -> list[MenuItem]:
    return [
        MenuItem(key="duplicate", label="Duplicate"),
        MenuItem(key="delete", label="Delete", danger=True),
    ]


def clean_node_data(data: FullNodeData) -> EssentialNodeData:
    return EssentialNodeData(
        title=data.title,
        description=data.description,
        collection=data.collection,
        inputs=[clean_input(item) for item in data.inputs],
        outputs=[clean_output(item) for item in data.outputs],
    )


def expand_node_data(data: EssentialNodeData, node_id: str) -> FullNodeData:
    return FullNodeData(
        title=data.title,
        description=data.description,
        collection=data.collection,
        inputs=[expand_input(item) for item in data.inputs],
        outputs=[expand_output(item) for item in data.outputs],
        id=node_id,
        menu_items=_default_menu_items(),
    )


def node_width(node: EssentialNode) -> int:
    return min(_BASE_NODE_WIDTH + len(node.data.inputs) * 10, _MAX_NODE_WIDTH)


def node_height(node: EssentialNode) -> int:
    rows = len(node.data.inputs) + len(node.data.outputs)
    return _BASE_NODE_HEIGHT + rows * _ROW_HEIGHT


def clean_node(node: FullNode) -> EssentialNode:
    return EssentialNode(
        id=node.id,
        type=node.type,
        position=node.position,
        version=node.version,
        data=clean_node_data(node.data),
    )


def expand_node(node: EssentialNode) -> FullNode:
    return FullNode(
        id=node.id,
        type=node.type,
        position=node.position,
        version=node.version,
        data=expand_node_data(node.data, node.id),
        width=node_width(node),
        height=node_height(node),
    )


def clean_edge(edge: FullEdge) -> EssentialEdge:
    return EssentialEdge.model_validate(edge.model_dump(include=set(EssentialEdge.model_fields)))


def expand_edge(edge: EssentialEdge) -> FullEdge:
    return FullEdge.model_validate(edge.model_dump())


def to_essential(flow: FullFlow) -> EssentialFlow:
    """Drop editor state from ``flow``."""
    return EssentialFlow(
        name=flow.name,
        thumbnail_url=flow.thumbnail_url,
        nodes=[clean_node(node) for node in flow.nodes],
        edges=[clean_edge(edge) for edge in flow.edges],
    )


def to_full(flow: EssentialFlow) -> FullFlow:
    """Rebuild editor state for ``flow``.

    Each node's ``data.edges`` is filled with the flow edges touching it.
    """
    full_edges = [expand_edge(edge) for edge in flow.edges]
    full_nodes = []
    for node in flow.nodes:
        full_node = expand_node(node)
        full_node.data.edges = [
            edge for edge in full_edges if edge.source == node.id or edge.target == node.id
        ]
        full_nodes.append(full_node)
    return FullFlow(
        name=flow.name,
        thumbnail_url=flow.thumbnail_url,
        nodes=full_nodes,
        edges=full_edges,
    )


def _looks_full(nodes: list[Any]) -> bool:
    return any(isinstance(node, dict) and ("width" in node or "className" in node) for node in nodes)


def restore_full_flow(payload: Any) -> FullFlow:
    """Load a saved payload in either view and return the full view."""
    if not isinstance(payload, dict):
        raise FlowFormatError("saved flow must be an object")
    if not isinstance(payload.get("nodes"), list):
        raise FlowFormatError("invalid flow data: missing nodes array")
    if not isinstance(payload.get("edges"), list):
        raise FlowFormatError("invalid flow data: missing edges array")

    try:
        if _looks_full(payload["nodes"]):
            return FullFlow.model_validate(payload)
        return to_full(EssentialFlow.model_validate(payload))
    except ValidationError as exc:
        raise FlowFormatError(str(exc)) from exc
