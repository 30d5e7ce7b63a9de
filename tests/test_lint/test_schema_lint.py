"""Tests for scene document shape validation."""

import pytest

from sceneforge.errors import SchemaViolation
from sceneforge.lint.schema import parse_scene, validate_document
from tests.conftest import HEADLINE_NODE, PANEL_NODE, make_document


def test_valid_document(base_document):
    assert validate_document(base_document) == []
    scene = parse_scene(base_document)
    assert scene.nodes[0].id == "headline"


def test_root_must_be_object():
    assert validate_document([]) == ["(root): document must be an object"]


def test_collects_every_issue():
    doc = make_document(HEADLINE_NODE, dict(HEADLINE_NODE), PANEL_NODE)
    doc["meta"]["version"] = "0.2"
    del doc["theme"]["palette"]["accent"]
    doc["animations"] = [
        {
            "id": "intro",
            "type": "timeline",
            "tracks": [
                {"target": "ghost", "property": "opacity", "keyframes": [{"t": 0, "value": 0}, {"t": 1, "value": 1}]},
                {"target": "panel", "property": "opacity", "keyframes": [{"t": 0.8, "value": 0}, {"t": 0.2, "value": 1}]},
            ],
        }
    ]
    issues = validate_document(doc)
    assert any(i.startswith("meta.version") for i in issues)
    assert any(i.startswith("theme.palette.accent") for i in issues)
    assert "duplicate node id: headline" in issues
    assert "track.target not found: ghost" in issues
    assert "keyframes must be non-decreasing by t: intro/panel" in issues


def test_empty_text_node():
    issues = validate_document(make_document(dict(HEADLINE_NODE, text="")))
    assert len(issues) == 1
    assert issues[0].startswith("nodes[0]")
    assert "non-empty 'text'" in issues[0]


def test_canvas_width_must_be_number():
    doc = make_document(HEADLINE_NODE)
    doc["canvas"]["width"] = "1200"
    assert any(i.startswith("canvas.width") for i in validate_document(doc))


def test_nodes_required():
    issues = validate_document(make_document())
    assert any(i.startswith("nodes") for i in issues)


def test_keyframe_t_out_of_range():
    doc = make_document(HEADLINE_NODE)
    doc["animations"] = [
        {"type": "timeline", "tracks": [
            {"target": "headline", "property": "opacity", "keyframes": [{"t": 0, "value": 0}, {"t": 1.5, "value": 1}]},
        ]}
    ]
    issues = validate_document(doc)
    assert any("keyframes[1].t" in i for i in issues)


def test_nested_children_ids_checked():
    group = {"id": "grp", "type": "group", "children": [dict(PANEL_NODE), dict(PANEL_NODE)]}
    assert "duplicate node id: panel" in validate_document(make_document(group))


def test_extra_fields_allowed(base_document):
    base_document["meta"]["author"] = "studio"
    base_document["nodes"][0]["data"] = {"k": 1}
    assert validate_document(base_document) == []


def test_boolean_and_null_attrs_allowed():
    doc = make_document({"id": "a", "type": "rect", "attrs": {"visible": True, "fill": None, "x": 0}})
    assert validate_document(doc) == []


def test_parse_scene_raises_with_issues():
    with pytest.raises(SchemaViolation) as exc:
        parse_scene(make_document())
    assert exc.value.issues
    assert exc.value.exit_code == 1
