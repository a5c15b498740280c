"""Diagnostic records produced by the flow linter."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class ElementType(str, Enum):
    NODE = "node"
    EDGE = "edge"


class FieldType(str, Enum):
    INPUT = "input"
    OUTPUT = "output"


class DiagnosticCode(str, Enum):
    """Stable machine-readable diagnostic codes.

    Consumers match on these strings, so values must never change.
    """

    INVALID_FLOW_DATA = "invalid-flow-data"
    MISSING_NODES_ARRAY = "missing-nodes-array"
    MISSING_EDGES_ARRAY = "missing-edges-array"

    MISSING_NODE_ID = "missing-node-id"
    DUPLICATE_NODE_ID = "duplicate-node-id"
    MISSING_NODE_TYPE = "missing-node-type"
    INVALID_NODE_TYPE = "invalid-node-type"
    MISSING_NODE_POSITION = "missing-node-position"
    INVALID_NODE_POSITION = "invalid-node-position"
    MISSING_REQUIRED_INPUT = "missing-required-input"
    REQUIRED_INPUT_EMPTY = "required-input-empty"
    MISSING_INPUT_ID = "missing-input-id"
    UNKNOWN_INPUT = "unknown-input"
    MISSING_OUTPUT_ID = "missing-output-id"
    INVALID_OUTPUT_ISDELETED = "invalid-output-isdeleted"
    UNKNOWN_OUTPUT = "unknown-output"
    MISSING_NODE_VERSION = "missing-node-version"
    INVALID_VERSION_SYNTAX = "invalid-version-syntax"
    PRERELEASE_VERSION = "prerelease-version"
    NODE_POSITION_OVERLAP = "node-position-overlap"

    MISSING_EDGE_SOURCE = "missing-edge-source"
    MISSING_EDGE_SOURCEHANDLE = "missing-edge-sourcehandle"
    MISSING_EDGE_TARGET = "missing-edge-target"
    MISSING_EDGE_TARGETHANDLE = "missing-edge-targethandle"
    INVALID_EDGE_SOURCE_NODE = "invalid-edge-source-node"
    INVALID_EDGE_TARGET_NODE = "invalid-edge-target-node"
    INVALID_EDGE_SOURCE_HANDLE = "invalid-edge-source-handle"
    INVALID_EDGE_TARGET_HANDLE = "invalid-edge-target-handle"

    ISOLATED_NODE = "isolated-node"
    CIRCULAR_DEPENDENCY = "circular-dependency"


@dataclass(frozen=True)
class LintIssue:
    """One reported problem about a flow graph."""

    severity: Severity
    message: str
    code: DiagnosticCode
    element_id: Optional[str] = None
    element_type: Optional[ElementType] = None
    field_id: Optional[str] = None
    field_type: Optional[FieldType] = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "severity": self.severity.value,
            "message": self.message,
            "code": self.code.value,
        }
        if self.element_id is not None:
            payload["elementId"] = self.element_id
        if self.element_type is not None:
            payload["elementType"] = self.element_type.value
        if self.field_id is not None:
            payload["fieldId"] = self.field_id
        if self.field_type is not None:
            payload["fieldType"] = self.field_type.value
        return payload

    def __str__(self) -> str:
        location = ""
        if self.element_id:
            location = f" [{self.element_type.value if self.element_type else 'element'}={self.element_id}]"
        return f"{self.severity.value}{location} {self.code.value}: {self.message}"


def error(code: DiagnosticCode, message: str, **location: Any) -> LintIssue:
    return LintIssue(severity=Severity.ERROR, message=message, code=code, **location)


def warning(code: DiagnosticCode, message: str, **location: Any) -> LintIssue:
    return LintIssue(severity=Severity.WARNING, message=message, code=code, **location)


def has_errors(issues: Iterable[LintIssue]) -> bool:
    return any(issue.is_error for issue in issues)


def split_by_severity(issues: Iterable[LintIssue]) -> tuple[list[LintIssue], list[LintIssue]]:
    """Return ``(errors, warnings)`` preserving report order."""
    errors: list[LintIssue] = []
    warnings: list[LintIssue] = []
    for issue in issues:
        if issue.is_error:
            errors.append(issue)
        else:
            warnings.append(issue)
    return errors, warnings
