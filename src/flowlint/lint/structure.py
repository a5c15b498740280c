"""Per-node structural checks."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flowlint.diagnostics import (
    DiagnosticCode,
    ElementType,
    FieldType,
    LintIssue,
    error,
    warning,
)
from flowlint.registry import NodeTypeContract, NodeTypeRegistry
from flowlint.schema.utils import is_empty_value

from .ingest import FieldRecord, FlowSnapshot, NodeRecord
from .options import HANDLE_SEPARATOR, NODE_HEIGHT, NODE_WIDTH, LintOptions
from .versions import parse_version_spec


def dynamic_input_names(node: NodeRecord, contract: NodeTypeContract) -> set[str]:
    """Names declared inside the contract's parameter-list input, if any.

    Entries may be ``{"name": ...}`` / ``{"key": ...}`` mappings, ``[name, value]``
    rows or bare strings.
    """
    if not contract.dynamic_inputs_field:
        return set()
    holder = node.find_input(contract.dynamic_inputs_field)
    if holder is None or not isinstance(holder.value, (list, tuple)):
        return set()

    names: set[str] = set()
    for entry in holder.value:
        name: Any = None
        if isinstance(entry, Mapping):
            name = entry.get("name", entry.get("key"))
        elif isinstance(entry, (list, tuple)) and entry:
            name = entry[0]
        elif isinstance(entry, str):
            name = entry
        if isinstance(name, str) and name:
            names.add(name)
    return names


def positions_overlap(first: tuple[float, float], second: tuple[float, float]) -> bool:
    return (
        first[0] < second[0] + NODE_WIDTH
        and first[0] + NODE_WIDTH > second[0]
        and first[1] < second[1] + NODE_HEIGHT
        and first[1] + NODE_HEIGHT > second[1]
    )


class StructuralValidator:
    """Checks each node against its type contract."""

    def __init__(self, registry: NodeTypeRegistry, options: LintOptions):
        self.registry = registry
        self.options = options

    def validate(self, snapshot: FlowSnapshot) -> list[LintIssue]:
        issues: list[LintIssue] = []
        seen_ids: set[str] = set()
        for node in snapshot.nodes:
            issues.extend(self._check_node(node, snapshot, seen_ids))
        return issues

    def _check_node(self, node: NodeRecord, snapshot: FlowSnapshot, seen_ids: set[str]) -> list[LintIssue]:
        if node.id is None:
            return [
                error(
                    DiagnosticCode.MISSING_NODE_ID,
                    f"Node at index {node.index} is missing required field: id",
                    element_type=ElementType.NODE,
                )
            ]

        issues: list[LintIssue] = []
        if node.id in seen_ids:
            issues.append(
                self._node_error(node, DiagnosticCode.DUPLICATE_NODE_ID, f"Duplicate node ID: {node.id}")
            )
        seen_ids.add(node.id)

        contract = self._check_type(node, issues)
        self._check_position(node, issues)
        if contract is not None:
            issues.extend(self._check_inputs(node, contract, snapshot))
            issues.extend(self._check_outputs(node, contract))
        issues.extend(self._check_version(node))
        if self.options.checks_whole_flow:
            issues.extend(self._check_overlap(node, snapshot))
        return issues

    def _check_type(self, node: NodeRecord, issues: list[LintIssue]) -> NodeTypeContract | None:
        if not node.type:
            issues.append(
                self._node_error(node, DiagnosticCode.MISSING_NODE_TYPE, "Node is missing required field: type")
            )
            return None
        contract = self.registry.get(node.type) if isinstance(node.type, str) else None
        if contract is None:
            issues.append(
                self._node_error(node, DiagnosticCode.INVALID_NODE_TYPE, f"Unknown node type: {node.type}")
            )
        return contract

    def _check_position(self, node: NodeRecord, issues: list[LintIssue]) -> None:
        if node.position is None:
            issues.append(
                self._node_error(
                    node, DiagnosticCode.MISSING_NODE_POSITION, "Node is missing required field: position"
                )
            )
        elif node.coordinates is None:
            issues.append(
                self._node_error(
                    node,
                    DiagnosticCode.INVALID_NODE_POSITION,
                    "Node position must have numeric x and y coordinates",
                )
            )

    def _is_unset(self, field: FieldRecord) -> bool:
        if self.options.strict:
            return is_empty_value(field.value)
        return field.value is None

    def _has_inbound_edge(self, node: NodeRecord, field_id: str, snapshot: FlowSnapshot) -> bool:
        for handle in snapshot.inbound_handles(node.id):
            if handle == field_id:
                return True
            parts = handle.split(HANDLE_SEPARATOR)
            if len(parts) > 1 and parts[1] == field_id:
                return True
        return False

    def _check_inputs(
        self, node: NodeRecord, contract: NodeTypeContract, snapshot: FlowSnapshot
    ) -> list[LintIssue]:
        issues: list[LintIssue] = []
        for required in contract.required_inputs:
            field = node.find_input(required)
            if field is None:
                issues.append(
                    self._field_error(
                        node,
                        required,
                        FieldType.INPUT,
                        DiagnosticCode.MISSING_REQUIRED_INPUT,
                        f"Node {node.id} is missing required input: {required}",
                    )
                )
            elif self._is_unset(field) and not self._has_inbound_edge(node, required, snapshot):
                issues.append(
                    self._field_error(
                        node,
                        required,
                        FieldType.INPUT,
                        DiagnosticCode.REQUIRED_INPUT_EMPTY,
                        f"Node {node.id} required input {required} has no value and no incoming connection",
                    )
                )

        valid_inputs = contract.declared_inputs | dynamic_input_names(node, contract)
        for field in node.inputs:
            if field.id is None:
                issues.append(
                    self._node_error(
                        node,
                        DiagnosticCode.MISSING_INPUT_ID,
                        f"Node {node.id} input at index {field.index} is missing id",
                    )
                )
            elif field.id not in valid_inputs:
                issues.append(
                    warning(
                        DiagnosticCode.UNKNOWN_INPUT,
                        f"Node {node.id} has unknown input: {field.id}",
                        element_id=node.id,
                        element_type=ElementType.NODE,
                        field_id=field.id,
                        field_type=FieldType.INPUT,
                    )
                )
        return issues

    def _check_outputs(self, node: NodeRecord, contract: NodeTypeContract) -> list[LintIssue]:
        issues: list[LintIssue] = []
        for field in node.outputs:
            if field.id is None:
                issues.append(
                    self._node_error(
                        node,
                        DiagnosticCode.MISSING_OUTPUT_ID,
                        f"Node {node.id} output at index {field.index} is missing id",
                    )
                )

            deleted_flag_required = self.options.strict or field.has_is_deleted
            if deleted_flag_required and not isinstance(field.is_deleted, bool):
                label = field.id if field.id is not None else f"at index {field.index}"
                issues.append(
                    self._field_error(
                        node,
                        field.id,
                        FieldType.OUTPUT,
                        DiagnosticCode.INVALID_OUTPUT_ISDELETED,
                        f"Node {node.id} output {label} must have boolean isDeleted field",
                    )
                )

            if field.id is not None and field.id not in contract.declared_outputs:
                issues.append(
                    warning(
                        DiagnosticCode.UNKNOWN_OUTPUT,
                        f"Node {node.id} has unknown output: {field.id}",
                        element_id=node.id,
                        element_type=ElementType.NODE,
                        field_id=field.id,
                        field_type=FieldType.OUTPUT,
                    )
                )
        return issues

    def _check_version(self, node: NodeRecord) -> list[LintIssue]:
        if not node.has_version or node.version is None:
            if not self.options.require_versions:
                return []
            return [
                warning(
                    DiagnosticCode.MISSING_NODE_VERSION,
                    f"Node {node.id} has no version, defaulting to latest",
                    element_id=node.id,
                    element_type=ElementType.NODE,
                )
            ]

        spec = parse_version_spec(node.version) if isinstance(node.version, str) else None
        if spec is None:
            return [
                self._node_error(
                    node,
                    DiagnosticCode.INVALID_VERSION_SYNTAX,
                    f"Node {node.id} has invalid version syntax: {node.version}",
                )
            ]
        if spec.is_prerelease:
            return [
                warning(
                    DiagnosticCode.PRERELEASE_VERSION,
                    f"Node {node.id} uses prerelease version {spec.raw}",
                    element_id=node.id,
                    element_type=ElementType.NODE,
                )
            ]
        return []

    def _check_overlap(self, node: NodeRecord, snapshot: FlowSnapshot) -> list[LintIssue]:
        here = node.coordinates
        if here is None:
            return []
        issues: list[LintIssue] = []
        for other in snapshot.nodes:
            # Pairs are reported once, from the earlier node unless it has no id.
            if other.index == node.index or (other.index < node.index and other.id is not None):
                continue
            there = other.coordinates
            if other.id == node.id or there is None:
                continue
            if positions_overlap(here, there):
                label = other.id if other.id is not None else f"at index {other.index}"
                issues.append(
                    warning(
                        DiagnosticCode.NODE_POSITION_OVERLAP,
                        f"Node overlaps with node {label}",
                        element_id=node.id,
                        element_type=ElementType.NODE,
                    )
                )
        return issues

    @staticmethod
    def _node_error(node: NodeRecord, code: DiagnosticCode, message: str) -> LintIssue:
        return error(code, message, element_id=node.id, element_type=ElementType.NODE)

    @staticmethod
    def _field_error(
        node: NodeRecord,
        field_id: str | None,
        field_type: FieldType,
        code: DiagnosticCode,
        message: str,
    ) -> LintIssue:
        return error(
            code,
            message,
            element_id=node.id,
            element_type=ElementType.NODE,
            field_id=field_id,
            field_type=field_type,
        )
