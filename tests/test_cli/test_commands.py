"""Tests for the sceneforge command line."""

import json

import pytest

from sceneforge.cli import main
from sceneforge.config import settings
from tests.conftest import HEADLINE_NODE, SIMPLE_SVG, make_document, subject

BRIEF = {
    "meta": {"title": "Invoices", "seed": 4},
    "intent": {"primaryGoal": "Send an invoice, get paid"},
    "layout": {"slots": {"kicker": "PAYMENTS", "headline": "Get paid faster", "subhead": "Invoices and receipts"}},
}


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_autofill(tmp_path, capsys):
    brief = _write(tmp_path / "brief.json", BRIEF)
    out = tmp_path / "mother.json"
    assert main(["autofill", "--brief", brief, "--out", str(out), "--candidates", "3"]) == 0
    scene = json.loads(out.read_text(encoding="utf-8"))
    assert scene["meta"]["auto"]["domain"] == "payments"
    assert scene["meta"]["auto"]["seed"] == 4
    stdout = capsys.readouterr().out
    assert stdout.startswith("OK: auto-filled scene mother (payments/glass) candidates=3 score=")
    assert stdout.strip().endswith(f"-> {out}")


def test_autofill_missing_brief(tmp_path, capsys):
    code = main(["autofill", "--brief", str(tmp_path / "nope.json"), "--out", str(tmp_path / "o.json")])
    assert code == 3
    assert "autofill: cannot read" in capsys.readouterr().err


def test_missing_required_argument():
    with pytest.raises(SystemExit) as exc:
        main(["render", "--scene", "x.json"])
    assert exc.value.code == 2


def test_lint_ok_and_failing(tmp_path, capsys):
    good = _write(tmp_path / "good.json", make_document(HEADLINE_NODE))
    assert main(["lint", "--scene", good]) == 0
    assert capsys.readouterr().out == f"OK: {good}\n"

    bad_doc = make_document(HEADLINE_NODE, HEADLINE_NODE)
    bad_doc["meta"]["version"] = "9"
    bad = _write(tmp_path / "bad.json", bad_doc)
    assert main(["lint", "--scene", bad]) == 1
    err = [line for line in capsys.readouterr().err.splitlines() if line.startswith("lint: ")]
    assert len(err) == 2
    assert "lint: duplicate node id: headline" in err


def test_lint_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{nope", encoding="utf-8")
    assert main(["lint", "--scene", str(path)]) == 3


def test_visual_lint_failure(tmp_path, capsys):
    scene = _write(tmp_path / "scene.json", make_document(subject("person", 700, -20, 320, 392)))
    assert main(["visual-lint", "--scene", scene]) == 1
    assert "clipped at the top" in capsys.readouterr().err


def test_render(tmp_path):
    scene = _write(tmp_path / "scene.json", make_document(HEADLINE_NODE))
    out = tmp_path / "out" / "scene.svg"
    assert main(["render", "--scene", scene, "--out", str(out)]) == 0
    svg = out.read_text(encoding="utf-8")
    assert '<g id="layer_text"><text' in svg


def test_symbols_requires_svgs(tmp_path):
    assert main(["symbols", str(tmp_path), "--out", str(tmp_path / "lib.svg")]) == 3


def _mother_with_library(tmp_path):
    brief = _write(tmp_path / "brief.json", BRIEF)
    mother = tmp_path / "mother.json"
    assert main(["autofill", "--brief", brief, "--out", str(mother), "--candidates", "3"]) == 0

    motif_dir = tmp_path / "motifs"
    motif_dir.mkdir()
    for motif_id in json.loads(mother.read_text(encoding="utf-8"))["defs"]["motifs"]:
        (motif_dir / f"{motif_id}.svg").write_text(SIMPLE_SVG, encoding="utf-8")
    manifest = tmp_path / "manifest.json"
    code = main([
        "symbols", str(motif_dir), "--out", str(tmp_path / "lib.svg"), "--no-flip", "--manifest", str(manifest),
    ])
    assert code == 0
    return brief, mother, manifest


def test_pipeline_end_to_end(tmp_path, capsys):
    brief, mother, manifest = _mother_with_library(tmp_path)
    out_scene = tmp_path / "final.json"
    out_svg = tmp_path / "final.svg"
    code = main([
        "pipeline", "--brief", brief, "--scene", str(mother),
        "--out-scene", str(out_scene), "--out-svg", str(out_svg), "--manifest", str(manifest),
    ])
    assert code == 0

    final = json.loads(out_scene.read_text(encoding="utf-8"))
    headline = next(n for n in final["nodes"] if n["id"] == "headline")
    assert headline["text"] == "Get paid faster"
    assert final["a11y"]["title"]
    for motif_id in final["defs"]["motifs"]:
        assert f'id="motif_{motif_id}"' in final["defs"]["raw"]

    svg = out_svg.read_text(encoding="utf-8")
    assert ">Get paid faster</text>" in svg
    assert "<defs>" in svg
    assert f"OK: wrote {out_svg}" in capsys.readouterr().out


def test_pipeline_stops_at_first_failure(tmp_path, capsys):
    brief, mother, manifest = _mother_with_library(tmp_path)
    # No subhead: the composed text node is empty and schema lint fails
    thin = dict(BRIEF, layout={"slots": {"kicker": "PAYMENTS", "headline": "Get paid faster"}})
    brief = _write(tmp_path / "thin.json", thin)
    out_svg = tmp_path / "final.svg"
    code = main([
        "pipeline", "--brief", brief, "--scene", str(mother),
        "--out-scene", str(tmp_path / "final.json"), "--out-svg", str(out_svg), "--manifest", str(manifest),
    ])
    assert code == 1
    assert not out_svg.exists()
    assert "lint: nodes[" in capsys.readouterr().err


def test_inject_missing_manifest_entry(tmp_path, capsys):
    doc = make_document(HEADLINE_NODE)
    doc["defs"]["motifs"] = ["ghost"]
    scene = _write(tmp_path / "scene.json", doc)
    manifest = _write(tmp_path / "manifest.json", {"version": 1, "motifs": []})
    code = main(["inject", "--scene", scene, "--out", str(tmp_path / "o.json"), "--manifest", manifest])
    assert code == 3
    assert "missing motif ids: ghost" in capsys.readouterr().err


def test_inject_without_manifest_is_usage_error(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "motif_manifest_path", "")
    scene = _write(tmp_path / "scene.json", make_document(HEADLINE_NODE))
    assert main(["inject", "--scene", scene, "--out", str(tmp_path / "o.json")]) == 2
