"""Edge field presence and reference checks."""

from __future__ import annotations

from flowlint.diagnostics import DiagnosticCode, ElementType, LintIssue, error
from flowlint.registry import NodeTypeRegistry

from .ingest import EdgeRecord, FlowSnapshot, NodeRecord
from .structure import dynamic_input_names


class EdgeValidator:
    """Checks that every edge names existing nodes and handles."""

    def __init__(self, registry: NodeTypeRegistry):
        self.registry = registry

    def validate(self, snapshot: FlowSnapshot) -> list[LintIssue]:
        issues: list[LintIssue] = []
        for edge in snapshot.edges:
            issues.extend(self._check_edge(edge, snapshot))
        return issues

    def valid_output_handles(self, node: NodeRecord) -> set[str]:
        handles = set(node.output_ids)
        contract = self.registry.get(node.type) if isinstance(node.type, str) else None
        if contract is not None:
            handles |= contract.declared_outputs
        return handles

    def valid_input_handles(self, node: NodeRecord) -> set[str]:
        handles = set(node.input_ids)
        contract = self.registry.get(node.type) if isinstance(node.type, str) else None
        if contract is not None:
            handles |= contract.declared_inputs | dynamic_input_names(node, contract)
        return handles

    def _check_edge(self, edge: EdgeRecord, snapshot: FlowSnapshot) -> list[LintIssue]:
        issues: list[LintIssue] = []
        for value, field_name, code in (
            (edge.source, "source", DiagnosticCode.MISSING_EDGE_SOURCE),
            (edge.source_handle, "sourceHandle", DiagnosticCode.MISSING_EDGE_SOURCEHANDLE),
            (edge.target, "target", DiagnosticCode.MISSING_EDGE_TARGET),
            (edge.target_handle, "targetHandle", DiagnosticCode.MISSING_EDGE_TARGETHANDLE),
        ):
            if value is None:
                issues.append(
                    self._edge_error(
                        edge, code, f"Edge at index {edge.index} is missing required field: {field_name}"
                    )
                )

        source_node = snapshot.node_map.get(edge.source) if edge.source else None
        target_node = snapshot.node_map.get(edge.target) if edge.target else None
        if edge.source and source_node is None:
            issues.append(
                self._edge_error(
                    edge,
                    DiagnosticCode.INVALID_EDGE_SOURCE_NODE,
                    f"Edge references non-existent source node: {edge.source}",
                )
            )
        if edge.target and target_node is None:
            issues.append(
                self._edge_error(
                    edge,
                    DiagnosticCode.INVALID_EDGE_TARGET_NODE,
                    f"Edge references non-existent target node: {edge.target}",
                )
            )

        if source_node is not None and edge.source_field is not None:
            if edge.source_field not in self.valid_output_handles(source_node):
                issues.append(
                    self._edge_error(
                        edge,
                        DiagnosticCode.INVALID_EDGE_SOURCE_HANDLE,
                        f"Edge references non-existent output handle {edge.source_handle} on node {edge.source}",
                    )
                )
        if target_node is not None and edge.target_field is not None:
            if edge.target_field not in self.valid_input_handles(target_node):
                issues.append(
                    self._edge_error(
                        edge,
                        DiagnosticCode.INVALID_EDGE_TARGET_HANDLE,
                        f"Edge references non-existent input handle {edge.target_handle} on node {edge.target}",
                    )
                )
        return issues

    @staticmethod
    def _edge_error(edge: EdgeRecord, code: DiagnosticCode, message: str) -> LintIssue:
        return error(code, message, element_id=edge.id, element_type=ElementType.EDGE)
