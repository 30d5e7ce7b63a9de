"""Tests for slot filling and motif injection."""

import copy
import json

import pytest

from sceneforge.compose import compose_scene, fill_slots, inject_motifs
from sceneforge.errors import ResourceError
from sceneforge.models.brief import Brief
from sceneforge.models.motifs import MotifManifest
from tests.conftest import HEADLINE_NODE, SYMBOL_LIBRARY_SVG, make_document

BRIEF = Brief.model_validate({
    "meta": {"title": "Payments", "lang": "de", "seed": 12},
    "layout": {"slots": {"headline": "Get paid faster", "kicker": "STRIPE", "count": 3}},
})


def test_fill_slots():
    assert fill_slots("{{slot:kicker}} / {{ slot:headline }}", BRIEF) == "STRIPE / Get paid faster"
    assert fill_slots("{{slot:unknown}}!", BRIEF) == "!"
    assert fill_slots("{{slot:count}}", BRIEF) == ""
    assert fill_slots(14, BRIEF) == 14


def test_compose_fills_text_attrs_and_children():
    group = {
        "id": "grp",
        "type": "group",
        "attrs": {"aria-label": "{{slot:headline}}"},
        "children": [dict(HEADLINE_NODE, id="inner")],
    }
    doc = make_document(HEADLINE_NODE, group)
    doc["nodes"][0]["style"] = {"content": "{{slot:kicker}}"}
    out = compose_scene(BRIEF, doc)
    assert out["nodes"][0]["text"] == "Get paid faster"
    assert out["nodes"][0]["style"]["content"] == "STRIPE"
    assert out["nodes"][1]["attrs"]["aria-label"] == "Get paid faster"
    assert out["nodes"][1]["children"][0]["text"] == "Get paid faster"
    # Numbers pass through
    assert out["nodes"][0]["attrs"]["font-size"] == 28


def test_compose_meta_and_a11y():
    doc = make_document(HEADLINE_NODE)
    doc["meta"]["title"] = ""
    out = compose_scene(BRIEF, doc)
    assert out["meta"]["title"] == "Payments"
    assert out["meta"]["lang"] == "de"
    assert out["meta"]["seed"] == 12
    assert out["a11y"]["title"] == "Get paid faster"


def test_compose_keeps_existing_titles():
    doc = make_document(HEADLINE_NODE)
    doc["a11y"]["title"] = "Authored"
    out = compose_scene(BRIEF, doc)
    assert out["meta"]["title"] == "Test scene"
    assert out["a11y"]["title"] == "Authored"


def test_compose_does_not_mutate_input():
    doc = make_document(HEADLINE_NODE)
    before = copy.deepcopy(doc)
    compose_scene(BRIEF, doc)
    assert doc == before


def test_compose_leaves_animations_alone():
    doc = make_document(HEADLINE_NODE)
    doc["animations"] = [{"type": "timeline", "tracks": [{"target": "{{slot:headline}}"}]}]
    assert compose_scene(BRIEF, doc)["animations"] == doc["animations"]


@pytest.fixture
def library(tmp_path):
    path = tmp_path / "motifs.svg"
    path.write_text(SYMBOL_LIBRARY_SVG, encoding="utf-8")
    manifest = MotifManifest.model_validate({
        "version": 1,
        "motifs": [
            {"id": "card", "path": "motifs.svg", "symbolId": "motif_card"},
            {"id": "card_alias", "path": "motifs.svg", "symbolId": "motif_card"},
            {"id": "lock", "path": "motifs.svg", "symbolId": "motif_lock"},
            {"id": "broken", "path": "motifs.svg", "symbolId": "motif_broken"},
        ],
    })
    return tmp_path, manifest


def test_inject_motifs(library):
    base, manifest = library
    doc = make_document(HEADLINE_NODE)
    doc["defs"] = {"motifs": ["card", "card_alias", "lock"], "raw": "  <filter id='f'/>  "}
    out = inject_motifs(doc, manifest, base_dir=base)
    raw = out["defs"]["raw"]
    assert raw.startswith("<filter id='f'/>\n")
    assert raw.count('id="motif_card"') == 1
    assert "id='motif_lock'" in raw
    assert doc["defs"]["raw"] == "  <filter id='f'/>  "


def test_inject_missing_ids(library):
    base, manifest = library
    doc = make_document(HEADLINE_NODE)
    doc["defs"]["motifs"] = ["card", "ghost", "phantom"]
    with pytest.raises(ResourceError, match="missing motif ids: ghost, phantom"):
        inject_motifs(doc, manifest, base_dir=base)


def test_inject_extraction_failure(library):
    base, manifest = library
    doc = make_document(HEADLINE_NODE)
    doc["defs"]["motifs"] = ["broken"]
    with pytest.raises(ResourceError, match="motif_broken"):
        inject_motifs(doc, manifest, base_dir=base)


def test_inject_missing_file(tmp_path):
    manifest = MotifManifest.model_validate(
        {"motifs": [{"id": "card", "path": "nowhere.svg", "symbolId": "motif_card"}]}
    )
    doc = make_document(HEADLINE_NODE)
    doc["defs"]["motifs"] = ["card"]
    with pytest.raises(ResourceError):
        inject_motifs(doc, manifest, base_dir=tmp_path)


def test_inject_without_motifs_is_a_copy(library):
    base, manifest = library
    doc = make_document(HEADLINE_NODE)
    out = inject_motifs(doc, manifest, base_dir=base)
    assert json.dumps(out, sort_keys=True) == json.dumps(doc, sort_keys=True)
    assert out is not doc
