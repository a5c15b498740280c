"""Helpers shared by the flow views and the linter."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Union

from .converters import to_essential
from .types import EssentialFlow, FullFlow

HANDLE_SUFFIX = "-handle"


def get_handle_id(field_id: str) -> str:
    return field_id if field_id.endswith(HANDLE_SUFFIX) else f"{field_id}{HANDLE_SUFFIX}"


def extract_handle_id(handle_id: str) -> str:
    """Strip the editor's ``-handle`` suffix from a handle id."""
    if handle_id.endswith(HANDLE_SUFFIX):
        return handle_id[: -len(HANDLE_SUFFIX)]
    return handle_id


def is_empty_value(value: Any) -> bool:
    """None, empty strings and empty containers count as empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def generate_node_id(node_type: str, existing_ids: Iterable[str] = ()) -> str:
    taken = set(existing_ids)
    index = 1
    while f"{node_type}_{index}" in taken:
        index += 1
    return f"{node_type}_{index}"


def generate_edge_id(source: str, source_handle: str, target: str, target_handle: str) -> str:
    return f"edge_{source}_{source_handle}_to_{target}_{target_handle}"


def _as_essential(flow: Union[EssentialFlow, FullFlow]) -> EssentialFlow:
    if isinstance(flow, FullFlow):
        return to_essential(flow)
    return flow


def compare_flows(left: Union[EssentialFlow, FullFlow], right: Union[EssentialFlow, FullFlow]) -> bool:
    """Compare two flows ignoring editor-only state."""
    return _as_essential(left).to_wire() == _as_essential(right).to_wire()


def calculate_flow_stats(flow: Union[EssentialFlow, FullFlow]) -> dict[str, Any]:
    node_types: dict[str, int] = {}
    for node in flow.nodes:
        node_types[node.type] = node_types.get(node.type, 0) + 1

    connected: set[str] = set()
    for edge in flow.edges:
        connected.add(edge.source)
        connected.add(edge.target)
    node_ids = {node.id for node in flow.nodes}

    node_count = len(flow.nodes)
    average = (len(flow.edges) * 2 / node_count) if node_count else 0.0
    return {
        "node_count": node_count,
        "edge_count": len(flow.edges),
        "node_types": node_types,
        "isolated_nodes": len(node_ids - connected),
        "average_connections": round(average, 2),
    }


def is_valid_flow(payload: Any) -> bool:
    """Cheap shape test for a saved flow in either view."""
    return (
        isinstance(payload, dict)
        and isinstance(payload.get("nodes"), list)
        and isinstance(payload.get("edges"), list)
        and isinstance(payload.get("name"), str)
    )


def validate_essential_flow(flow: EssentialFlow) -> list[str]:
    """Save-time checks on a named flow; returns error messages, empty when valid."""
    errors: list[str] = []
    if not flow.name.strip():
        errors.append("Flow name is required")
    if not flow.nodes:
        errors.append("Flow must contain at least one node")

    node_ids: set[str] = set()
    for node in flow.nodes:
        if node.id in node_ids:
            errors.append(f"Duplicate node id: {node.id}")
        node_ids.add(node.id)

    for index, edge in enumerate(flow.edges):
        if edge.source not in node_ids:
            errors.append(f"Edge at index {index} references non-existent source node: {edge.source}")
        if edge.target not in node_ids:
            errors.append(f"Edge at index {index} references non-existent target node: {edge.target}")
    return errors
