import unittest

from _test_support import ai_model, code_node, codes, make_edge, make_node, x_listener

from flowlint import FlowLinter, LintMode, LintOptions, lint, lint_for_node_execution
from flowlint.diagnostics import has_errors, split_by_severity
from flowlint.schema import EssentialFlow, to_full

_WHOLE_FLOW_CODES = {
    "isolated-node",
    "circular-dependency",
    "node-position-overlap",
    "missing-edge-source",
    "missing-edge-sourcehandle",
    "missing-edge-target",
    "missing-edge-targethandle",
    "invalid-edge-source-node",
    "invalid-edge-target-node",
    "invalid-edge-source-handle",
    "invalid-edge-target-handle",
}


def _messy_flow():
    return {
        "nodes": [
            code_node("A", x=0, y=0),
            code_node("B", x=10, y=10),
            code_node("C", x=400, y=0),
            make_node("lonely", "bogus_node", x=800, y=0),
        ],
        "edges": [
            make_edge("A", "output_data", "B", "python_code"),
            make_edge("B", "output_data", "A", "python_code"),
            make_edge("C", "nope", "ghost", "python_code"),
            {"source": "A"},
        ],
    }


class FlowShapeTests(unittest.TestCase):
    def test_empty_flow(self):
        self.assertEqual(lint({"nodes": [], "edges": []}), [])

    def test_none_flow(self):
        issues = lint(None)
        self.assertEqual(codes(issues), ["invalid-flow-data"])
        self.assertTrue(issues[0].is_error)

    def test_non_object_flow(self):
        self.assertEqual(codes(lint("not a flow")), ["invalid-flow-data"])

    def test_missing_nodes_array(self):
        self.assertEqual(codes(lint({"edges": []})), ["missing-nodes-array"])
        self.assertEqual(codes(lint({"nodes": "n1", "edges": []})), ["missing-nodes-array"])

    def test_missing_edges_array(self):
        self.assertEqual(codes(lint({"nodes": []})), ["missing-edges-array"])


class FlowLinterTests(unittest.TestCase):
    def test_valid_connected_flow(self):
        flow = {
            "nodes": [x_listener("listener", x=0), ai_model("model", x=200)],
            "edges": [make_edge("listener", "latest tweets-handle", "model", "prompt-handle")],
        }
        self.assertEqual(lint(flow), [])

    def test_lint_is_idempotent(self):
        linter = FlowLinter()
        flow = _messy_flow()
        first = linter.lint(flow)
        second = linter.lint(flow)
        self.assertEqual(first, second)
        self.assertTrue(first)

    def test_node_mode_skips_whole_flow_checks(self):
        flow_codes = set(codes(lint(_messy_flow())))
        node_codes = set(codes(lint_for_node_execution(_messy_flow())))
        self.assertTrue(flow_codes & _WHOLE_FLOW_CODES)
        self.assertFalse(node_codes & _WHOLE_FLOW_CODES)
        self.assertIn("invalid-node-type", node_codes)

    def test_flow_mode_report_order(self):
        issues = lint(_messy_flow())
        self.assertEqual(
            codes(issues),
            [
                "node-position-overlap",
                "invalid-node-type",
                "invalid-edge-target-node",
                "invalid-edge-source-handle",
                "missing-edge-sourcehandle",
                "missing-edge-target",
                "missing-edge-targethandle",
                "isolated-node",
                "circular-dependency",
            ],
        )

    def test_node_execution_keeps_other_options(self):
        node = x_listener()
        node["outputs"] = [{"id": "latest tweets"}]
        issues = lint_for_node_execution({"nodes": [node], "edges": []}, LintOptions(strict=True))
        self.assertEqual(codes(issues), ["invalid-output-isdeleted"])

    def test_overlap_scenario(self):
        flow = {
            "nodes": [
                make_node("node1", "x_listener_node", x=0, y=0),
                make_node("node2", "ai_model_node", x=10, y=10),
            ],
            "edges": [],
        }
        found = codes(lint(flow))
        self.assertEqual(found.count("node-position-overlap"), 1)
        self.assertEqual(found.count("isolated-node"), 2)

    def test_unknown_type_scenario(self):
        issues = lint({"nodes": [{"id": "n1", "type": "bogus_node"}], "edges": []})
        self.assertEqual(sorted(codes(issues)), ["invalid-node-type", "missing-node-position"])

    def test_lints_essential_and_full_models(self):
        flow = EssentialFlow.model_validate(
            {
                "name": "tweets",
                "nodes": [
                    {
                        "id": "listener",
                        "type": "x_listener_node",
                        "position": {"x": 0, "y": 0},
                        "data": {
                            "collection": "input",
                            "inputs": [{"id": "accounts", "value": ["a"]}],
                            "outputs": [{"id": "latest tweets"}],
                        },
                    },
                    {
                        "id": "model",
                        "type": "ai_model_node",
                        "position": {"x": 300, "y": 0},
                        "data": {
                            "collection": "compute",
                            "inputs": [{"id": "model", "value": "gpt-4"}, {"id": "prompt"}],
                            "outputs": [{"id": "ai_response"}],
                        },
                    },
                ],
                "edges": [
                    {
                        "id": "e1",
                        "source": "listener",
                        "sourceHandle": "latest tweets-handle",
                        "target": "model",
                        "targetHandle": "prompt-handle",
                    }
                ],
            }
        )
        self.assertEqual(lint(flow), [])
        self.assertEqual(lint(to_full(flow)), [])

    def test_severity_helpers(self):
        issues = lint(_messy_flow())
        errors, warnings = split_by_severity(issues)
        self.assertTrue(has_errors(issues))
        self.assertEqual(len(errors) + len(warnings), len(issues))
        self.assertEqual({issue.code.value for issue in warnings}, {"node-position-overlap", "isolated-node"})

    def test_issue_serialization(self):
        issue = lint({"nodes": [ai_model(prompt=None)], "edges": []})[0]
        self.assertEqual(
            issue.to_dict(),
            {
                "severity": "error",
                "message": "Node model required input prompt has no value and no incoming connection",
                "code": "required-input-empty",
                "elementId": "model",
                "elementType": "node",
                "fieldId": "prompt",
                "fieldType": "input",
            },
        )

    def test_options_from_settings(self):
        options = LintOptions.from_settings()
        self.assertEqual(options.mode, LintMode.FLOW)
        self.assertFalse(options.strict)


if __name__ == "__main__":
    unittest.main()
