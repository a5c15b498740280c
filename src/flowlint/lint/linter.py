"""Flow linter orchestration."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel

from flowlint.diagnostics import DiagnosticCode, LintIssue, error, split_by_severity
from flowlint.registry import NodeTypeContract, NodeTypeRegistry
from flowlint.schema import FullFlow, to_essential

from .edges import EdgeValidator
from .graph import GraphAnalyzer
from .ingest import ingest, is_sequence
from .options import LintMode, LintOptions
from .structure import StructuralValidator

logger = logging.getLogger(__name__)


def _as_payload(graph: Any) -> Any:
    if isinstance(graph, FullFlow):
        return to_essential(graph).to_wire()
    if isinstance(graph, BaseModel):
        return graph.model_dump(by_alias=True, exclude_none=True)
    return graph


class FlowLinter:
    """Runs structural, referential and graph checks over a flow.

    The linter never raises for problems in the flow itself; every finding is
    returned as a ``LintIssue``.
    """

    def __init__(
        self,
        registry: Optional[NodeTypeRegistry] = None,
        options: Optional[LintOptions] = None,
    ):
        self.registry = registry if registry is not None else NodeTypeRegistry.from_settings()
        self.options = options or LintOptions.from_settings()
        self.structural_validator = StructuralValidator(self.registry, self.options)
        self.edge_validator = EdgeValidator(self.registry)
        self.graph_analyzer = GraphAnalyzer()

    def lint(self, graph: Any) -> list[LintIssue]:
        payload = _as_payload(graph)
        if payload is None:
            return [error(DiagnosticCode.INVALID_FLOW_DATA, "Flow data is null or undefined")]
        if not isinstance(payload, Mapping):
            return [error(DiagnosticCode.INVALID_FLOW_DATA, "Flow data must be an object")]
        if not is_sequence(payload.get("nodes")):
            return [error(DiagnosticCode.MISSING_NODES_ARRAY, "Flow data must have a nodes array")]
        if not is_sequence(payload.get("edges")):
            return [error(DiagnosticCode.MISSING_EDGES_ARRAY, "Flow data must have an edges array")]

        snapshot = ingest(payload["nodes"], payload["edges"])
        issues = self.structural_validator.validate(snapshot)
        if self.options.checks_whole_flow:
            issues.extend(self.edge_validator.validate(snapshot))
            issues.extend(self.graph_analyzer.analyze(snapshot))

        errors, warnings = split_by_severity(issues)
        logger.debug(
            "linted flow in %s mode: %d nodes, %d edges, %d errors, %d warnings",
            self.options.mode.value,
            len(snapshot.nodes),
            len(snapshot.edges),
            len(errors),
            len(warnings),
        )
        return issues

    def get_node_type_contract(self, node_type: str) -> NodeTypeContract | None:
        return self.registry.get(node_type)

    def list_supported_node_types(self) -> list[str]:
        return self.registry.supported_types()


def lint(
    graph: Any,
    options: Optional[LintOptions] = None,
    registry: Optional[NodeTypeRegistry] = None,
) -> list[LintIssue]:
    return FlowLinter(registry=registry, options=options).lint(graph)


def lint_for_node_execution(
    graph: Any,
    options: Optional[LintOptions] = None,
    registry: Optional[NodeTypeRegistry] = None,
) -> list[LintIssue]:
    """Lint a flow before running a single node: structural checks only."""
    node_options = (options or LintOptions.from_settings()).model_copy(update={"mode": LintMode.NODE})
    return FlowLinter(registry=registry, options=node_options).lint(graph)
