from .edges import EdgeValidator
from .graph import GraphAnalyzer
from .ingest import FlowSnapshot, NodeShape, ingest
from .linter import FlowLinter, lint, lint_for_node_execution
from .options import LintMode, LintOptions
from .structure import StructuralValidator
from .versions import VersionSpec, parse_version_spec

__all__ = [
    "EdgeValidator",
    "FlowLinter",
    "FlowSnapshot",
    "GraphAnalyzer",
    "LintMode",
    "LintOptions",
    "NodeShape",
    "StructuralValidator",
    "VersionSpec",
    "ingest",
    "lint",
    "lint_for_node_execution",
    "parse_version_spec",
]
