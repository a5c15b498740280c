import os

os.environ.setdefault("FLOWLINT_DEFAULT_MODE", "flow")
os.environ.setdefault("FLOWLINT_STRICT", "false")
os.environ.setdefault("FLOWLINT_REQUIRE_VERSIONS", "false")


def make_node(node_id, node_type, x=0, y=0, inputs=None, outputs=None, **extra):
    node = {
        "id": node_id,
        "type": node_type,
        "position": {"x": x, "y": y},
    }
    if inputs is not None:
        node["inputs"] = inputs
    if outputs is not None:
        node["outputs"] = outputs
    node.update(extra)
    return node


def make_edge(source, source_handle, target, target_handle, **extra):
    edge = {
        "source": source,
        "sourceHandle": source_handle,
        "target": target,
        "targetHandle": target_handle,
    }
    edge.update(extra)
    return edge


def x_listener(node_id="listener", x=0, y=0):
    return make_node(
        node_id,
        "x_listener_node",
        x=x,
        y=y,
        inputs=[{"id": "accounts", "value": ["realDonaldTrump"]}, {"id": "keywords", "value": "crypto"}],
        outputs=[{"id": "latest tweets", "isDeleted": False}],
    )


def ai_model(node_id="model", x=200, y=0, prompt="Analyze this"):
    return make_node(
        node_id,
        "ai_model_node",
        x=x,
        y=y,
        inputs=[{"id": "model", "value": "gpt-4"}, {"id": "prompt", "value": prompt}],
        outputs=[{"id": "ai_response", "isDeleted": False}],
    )


def code_node(node_id, x=0, y=0, variables=None):
    inputs = [{"id": "python_code", "value": "print('hi')"}]
    if variables is not None:
        inputs.append({"id": "input_data", "value": variables})
    return make_node(
        node_id,
        "code_node",
        x=x,
        y=y,
        inputs=inputs,
        outputs=[{"id": "output_data", "isDeleted": False}],
    )


def codes(issues):
    return [issue.code.value for issue in issues]
