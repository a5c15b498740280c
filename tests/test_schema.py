import unittest

from flowlint.schema import (
    EssentialFlow,
    FlowFormatError,
    FullFlow,
    calculate_flow_stats,
    compare_flows,
    extract_handle_id,
    generate_edge_id,
    generate_node_id,
    get_handle_id,
    is_empty_value,
    is_valid_flow,
    restore_full_flow,
    to_essential,
    to_full,
    validate_essential_flow,
)


def _essential_payload():
    return {
        "name": "tweet analysis",
        "nodes": [
            {
                "id": "listener",
                "type": "x_listener_node",
                "position": {"x": 0, "y": 0},
                "data": {
                    "title": "Twitter Monitor",
                    "collection": "input",
                    "inputs": [
                        {"id": "accounts", "inputType": "searchSelect", "value": ["a"]},
                        {"id": "keywords", "value": "crypto"},
                    ],
                    "outputs": [{"id": "latest tweets", "handle": {"color": "sky"}}],
                },
            },
            {
                "id": "model",
                "type": "ai_model_node",
                "position": {"x": 300, "y": 0},
                "data": {"collection": "compute", "inputs": [{"id": "prompt"}], "outputs": []},
            },
            {
                "id": "spare",
                "type": "code_node",
                "position": {"x": 600, "y": 0},
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


class ConverterTests(unittest.TestCase):
    def setUp(self):
        self.essential = EssentialFlow.model_validate(_essential_payload())

    def test_to_full_adds_editor_state(self):
        full = to_full(self.essential)
        listener = full.nodes[0]
        self.assertEqual(listener.width, 320)
        self.assertEqual(listener.height, 320)
        self.assertEqual(listener.data.id, "listener")
        self.assertEqual([item.key for item in listener.data.menu_items], ["duplicate", "delete"])
        self.assertFalse(listener.data.inputs[0].is_deleted)
        self.assertEqual([edge.id for edge in listener.data.edges], ["e1"])
        self.assertEqual(full.nodes[2].data.edges, [])
        self.assertEqual(full.edges[0].type.value, "default")

    def test_to_essential_drops_editor_state(self):
        wire = to_essential(to_full(self.essential)).to_wire()
        node = wire["nodes"][0]
        self.assertNotIn("width", node)
        self.assertNotIn("className", node)
        self.assertNotIn("isDeleted", node["data"]["inputs"][0])
        self.assertNotIn("animated", wire["edges"][0])
        self.assertEqual(wire, self.essential.to_wire())

    def test_restore_full_flow_from_essential(self):
        restored = restore_full_flow(_essential_payload())
        self.assertIsInstance(restored, FullFlow)
        self.assertEqual(restored.nodes[1].height, 240)

    def test_restore_full_flow_keeps_full_payload(self):
        payload = to_full(self.essential).to_wire()
        payload["nodes"][0]["width"] = 999
        restored = restore_full_flow(payload)
        self.assertEqual(restored.nodes[0].width, 999)

    def test_restore_full_flow_rejects_bad_payloads(self):
        for payload in (None, {"edges": []}, {"nodes": []}, {"nodes": [{"id": "x"}], "edges": []}):
            with self.assertRaises(FlowFormatError):
                restore_full_flow(payload)


class SchemaUtilsTests(unittest.TestCase):
    def test_handle_ids(self):
        self.assertEqual(get_handle_id("price"), "price-handle")
        self.assertEqual(get_handle_id("price-handle"), "price-handle")
        self.assertEqual(extract_handle_id("price-handle"), "price")
        self.assertEqual(extract_handle_id("price"), "price")

    def test_is_empty_value(self):
        for value in (None, "", [], {}):
            self.assertTrue(is_empty_value(value), value)
        for value in (0, False, " ", [None], {"a": 1}):
            self.assertFalse(is_empty_value(value), value)

    def test_generate_ids(self):
        self.assertEqual(generate_node_id("code_node"), "code_node_1")
        self.assertEqual(generate_node_id("code_node", ["code_node_1", "code_node_2"]), "code_node_3")
        self.assertEqual(generate_edge_id("a", "out", "b", "in"), "edge_a_out_to_b_in")

    def test_compare_flows_ignores_editor_state(self):
        essential = EssentialFlow.model_validate(_essential_payload())
        full = to_full(essential)
        full.nodes[0].selected = True
        self.assertTrue(compare_flows(full, essential))

        changed = EssentialFlow.model_validate(_essential_payload())
        changed.nodes[0].position.x = 50
        self.assertFalse(compare_flows(changed, essential))

    def test_is_valid_flow(self):
        self.assertTrue(is_valid_flow(_essential_payload()))
        self.assertTrue(is_valid_flow(to_full(EssentialFlow.model_validate(_essential_payload())).to_wire()))
        self.assertFalse(is_valid_flow({"nodes": [], "edges": []}))
        self.assertFalse(is_valid_flow({"name": "x", "nodes": {}, "edges": []}))
        self.assertFalse(is_valid_flow(None))

    def test_validate_essential_flow(self):
        self.assertEqual(validate_essential_flow(EssentialFlow.model_validate(_essential_payload())), [])

        self.assertEqual(
            validate_essential_flow(EssentialFlow(name="  ")),
            ["Flow name is required", "Flow must contain at least one node"],
        )

        payload = _essential_payload()
        payload["nodes"].append(dict(payload["nodes"][2]))
        payload["edges"][0]["target"] = "ghost"
        errors = validate_essential_flow(EssentialFlow.model_validate(payload))
        self.assertEqual(
            errors,
            [
                "Duplicate node id: spare",
                "Edge at index 0 references non-existent target node: ghost",
            ],
        )

    def test_flow_stats(self):
        stats = calculate_flow_stats(EssentialFlow.model_validate(_essential_payload()))
        self.assertEqual(stats["node_count"], 3)
        self.assertEqual(stats["edge_count"], 1)
        self.assertEqual(stats["isolated_nodes"], 1)
        self.assertEqual(stats["node_types"]["code_node"], 1)
        self.assertEqual(stats["average_connections"], 0.67)


if __name__ == "__main__":
    unittest.main()
