"""Whole-graph checks: isolated nodes and circular dependencies."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from flowlint.diagnostics import DiagnosticCode, ElementType, LintIssue, error, warning

from .ingest import FlowSnapshot

_EXHAUSTED = object()


def build_adjacency(snapshot: FlowSnapshot) -> dict[str, list[str]]:
    adjacency: dict[str, list[str]] = {}
    for edge in snapshot.edges:
        if edge.source is None or edge.target is None:
            continue
        adjacency.setdefault(edge.source, []).append(edge.target)
    return adjacency


def find_cycle_from(
    root: str, adjacency: Mapping[str, list[str]], visited: set[str]
) -> list[str] | None:
    """Depth-first walk from ``root``; return the first cycle path met, if any.

    Uses an explicit stack so deep graphs do not hit the recursion limit. The
    walk order matches a recursive DFS over edges in their given order.
    """
    path = [root]
    on_path = {root}
    visited.add(root)
    stack: list[Iterator[str]] = [iter(adjacency.get(root, ()))]

    while stack:
        successor = next(stack[-1], _EXHAUSTED)
        if successor is _EXHAUSTED:
            stack.pop()
            on_path.discard(path.pop())
            continue
        if successor in on_path:
            start = path.index(successor)
            return path[start:] + [successor]
        if successor in visited:
            continue
        visited.add(successor)
        on_path.add(successor)
        path.append(successor)
        stack.append(iter(adjacency.get(successor, ())))
    return None


class GraphAnalyzer:
    """Connectivity and cycle analysis over the whole flow."""

    def analyze(self, snapshot: FlowSnapshot) -> list[LintIssue]:
        return self.find_isolated_nodes(snapshot) + self.detect_cycles(snapshot)

    def find_isolated_nodes(self, snapshot: FlowSnapshot) -> list[LintIssue]:
        if len(snapshot.nodes) <= 1:
            return []
        connected: set[str] = set()
        for edge in snapshot.edges:
            if edge.source is not None:
                connected.add(edge.source)
            if edge.target is not None:
                connected.add(edge.target)

        return [
            warning(
                DiagnosticCode.ISOLATED_NODE,
                f"Node {node.id} is isolated (not connected to any other nodes)",
                element_id=node.id,
                element_type=ElementType.NODE,
            )
            for node in snapshot.nodes
            if node.id is not None and node.id not in connected
        ]

    def detect_cycles(self, snapshot: FlowSnapshot) -> list[LintIssue]:
        adjacency = build_adjacency(snapshot)
        visited: set[str] = set()
        issues: list[LintIssue] = []
        for node in snapshot.nodes:
            if node.id is None or node.id in visited:
                continue
            cycle = find_cycle_from(node.id, adjacency, visited)
            if cycle is not None:
                issues.append(
                    error(
                        DiagnosticCode.CIRCULAR_DEPENDENCY,
                        f"Circular dependency detected: {' -> '.join(cycle)}",
                        element_id=cycle[0],
                        element_type=ElementType.NODE,
                    )
                )
        return issues
