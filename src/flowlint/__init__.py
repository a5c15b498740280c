"""Workflow graph linter."""

from .diagnostics import DiagnosticCode, LintIssue, Severity
from .lint import FlowLinter, LintMode, LintOptions, lint, lint_for_node_execution
from .registry import NodeTypeContract, NodeTypeRegistry

__all__ = [
    "__version__",
    "DiagnosticCode",
    "FlowLinter",
    "LintIssue",
    "LintMode",
    "LintOptions",
    "NodeTypeContract",
    "NodeTypeRegistry",
    "Severity",
    "lint",
    "lint_for_node_execution",
]

__version__ = "0.1.0"
