from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from pathtree.models import ExtractedDocument, KnowledgeGraph


def _node(node_id, level, parent=None, children=(), node_type="concept"):
    data = {
        "id": node_id,
        "title": node_id.title(),
        "description": f"About {node_id}",
        "children": list(children),
        "level": level,
        "type": node_type,
    }
    if parent is not None:
        data["parent"] = parent
    return data


def _edge(edge_id, source, target):
    return {"id": edge_id, "source": source, "target": target, "type": "default"}


def _valid_graph() -> dict:
    return {
        "nodes": [
            _node("root", 0, children=["cells", "energy"], node_type="topic"),
            _node("cells", 1, parent="root", children=["nucleus"]),
            _node("energy", 1, parent="root"),
            _node("nucleus", 2, parent="cells", node_type="detail"),
        ],
        "edges": [
            _edge("e1", "root", "cells"),
            _edge("e2", "root", "energy"),
            _edge("e3", "cells", "nucleus"),
        ],
    }


def test_consistent_graph_validates():
    graph = KnowledgeGraph.model_validate_json(json.dumps(_valid_graph()))
    assert [node.id for node in graph.nodes] == ["root", "cells", "energy", "nucleus"]
    node_ids = {node.id for node in graph.nodes}
    for edge in graph.edges:
        assert edge.source in node_ids and edge.target in node_ids


def test_missing_edge_is_rejected():
    data = _valid_graph()
    data["edges"].pop()
    with pytest.raises(ValidationError, match="edges do not match"):
        KnowledgeGraph.model_validate_json(json.dumps(data))


def test_extra_edge_is_rejected():
    data = _valid_graph()
    data["edges"].append(_edge("e4", "energy", "nucleus"))
    with pytest.raises(ValidationError):
        KnowledgeGraph.model_validate_json(json.dumps(data))


def test_edge_to_unknown_node_is_rejected():
    data = _valid_graph()
    data["edges"][0]["target"] = "ghost"
    with pytest.raises(ValidationError):
        KnowledgeGraph.model_validate_json(json.dumps(data))


def test_unknown_child_is_rejected():
    data = _valid_graph()
    data["nodes"][2]["children"] = ["ghost"]
    with pytest.raises(ValidationError, match="unknown child"):
        KnowledgeGraph.model_validate_json(json.dumps(data))


def test_child_level_must_follow_parent():
    data = _valid_graph()
    data["nodes"][3]["level"] = 3
    with pytest.raises(ValidationError, match="one level below"):
        KnowledgeGraph.model_validate_json(json.dumps(data))


def test_root_level_node_cannot_have_parent():
    data = {
        "nodes": [_node("a", 0, parent="b"), _node("b", 0, children=["a"])],
        "edges": [_edge("e1", "b", "a")],
    }
    with pytest.raises(ValidationError):
        KnowledgeGraph.model_validate_json(json.dumps(data))


def test_one_sided_parent_link_is_rejected():
    data = _valid_graph()
    data["nodes"][0]["children"] = ["cells"]
    with pytest.raises(ValidationError):
        KnowledgeGraph.model_validate_json(json.dumps(data))


def test_duplicate_ids_are_rejected():
    data = _valid_graph()
    data["edges"][1]["id"] = "e1"
    with pytest.raises(ValidationError, match="edge ids"):
        KnowledgeGraph.model_validate_json(json.dumps(data))

    data = _valid_graph()
    data["nodes"].append(_node("energy", 1, parent="root"))
    with pytest.raises(ValidationError, match="node ids"):
        KnowledgeGraph.model_validate_json(json.dumps(data))


def test_edge_type_is_free_text():
    data = _valid_graph()
    data["edges"][0]["type"] = "smoothstep"
    del data["edges"][1]["type"]
    graph = KnowledgeGraph.model_validate_json(json.dumps(data))
    assert [edge.type for edge in graph.edges] == ["smoothstep", "default", "default"]


def test_empty_graph_is_rejected():
    with pytest.raises(ValidationError):
        KnowledgeGraph.model_validate_json('{"nodes": [], "edges": []}')


def test_unknown_node_type_is_rejected():
    data = _valid_graph()
    data["nodes"][2]["type"] = "chapter"
    with pytest.raises(ValidationError):
        KnowledgeGraph.model_validate_json(json.dumps(data))


def test_extracted_document_is_immutable():
    document = ExtractedDocument(raw_text="text", topics=("A",))
    with pytest.raises(ValidationError):
        document.raw_text = "changed"
