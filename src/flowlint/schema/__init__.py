from .converters import FlowFormatError, restore_full_flow, to_essential, to_full
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
    HandleConfig,
    Position,
)
from .utils import (
    HANDLE_SUFFIX,
    calculate_flow_stats,
    compare_flows,
    extract_handle_id,
    generate_edge_id,
    generate_node_id,
    get_handle_id,
    is_empty_value,
    is_valid_flow,
    validate_essential_flow,
)

__all__ = [
    "EssentialEdge",
    "EssentialFlow",
    "EssentialInput",
    "EssentialNode",
    "EssentialNodeData",
    "EssentialOutput",
    "FlowFormatError",
    "FullEdge",
    "FullFlow",
    "FullInput",
    "FullNode",
    "FullNodeData",
    "FullOutput",
    "HANDLE_SUFFIX",
    "HandleConfig",
    "Position",
    "calculate_flow_stats",
    "compare_flows",
    "extract_handle_id",
    "generate_edge_id",
    "generate_node_id",
    "get_handle_id",
    "is_empty_value",
    "is_valid_flow",
    "restore_full_flow",
    "to_essential",
    "to_full",
    "validate_essential_flow",
]
