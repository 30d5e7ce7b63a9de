"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from sceneforge.main import app
from tests.conftest import HEADLINE_NODE, PAYMENTS_MOTIFS, make_document, subject

client = TestClient(app)


def test_health():
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["templates_registered"] >= 3
    assert data["motifs_loaded"] > 0


def test_generate_payments():
    resp = client.post("/api/generate", json={"domain": "payments", "style": "glass", "seed": 1, "candidates": 5})
    assert resp.status_code == 200
    data = resp.json()
    assert data["domain"] == "payments"
    assert data["candidates"] == 5
    scene = data["scene"]
    assert scene["meta"]["auto"]["score"] == data["score"]
    assert 70 <= scene["meta"]["auto"]["layout"]["panelX"] <= 120
    assert set(scene["defs"]["motifs"]) <= set(data["motifs"])


def test_generate_is_deterministic():
    body = {"seed": 3, "candidates": 3, "brief": {"intent": {"keywords": ["booking"]}}}
    a = client.post("/api/generate", json=body).json()
    b = client.post("/api/generate", json=body).json()
    assert a["domain"] == "booking"
    assert a == b


def test_generate_with_explicit_motifs():
    resp = client.post(
        "/api/generate",
        json={"domain": "payments", "seed": 2, "candidates": 2, "motifs": PAYMENTS_MOTIFS},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["motifs"] == sorted(PAYMENTS_MOTIFS)
    assert data["style"] == "glass"


def test_generate_invalid_brief():
    resp = client.post("/api/generate", json={"brief": {"meta": {"seed": "abc"}}})
    assert resp.status_code == 422


def test_lint_valid():
    resp = client.post("/api/lint", json={"scene": make_document(HEADLINE_NODE)})
    assert resp.status_code == 200
    assert resp.json() == {"valid": True, "issues": []}


def test_lint_schema_issues():
    resp = client.post("/api/lint", json={"scene": make_document()})
    data = resp.json()
    assert data["valid"] is False
    assert data["issues"][0]["kind"] == "schema"


def test_lint_geometry_issue():
    scene = make_document(subject("person", 700, -20, 320, 392))
    data = client.post("/api/lint", json={"scene": scene}).json()
    assert data["valid"] is False
    assert data["issues"] == [
        {"kind": "subject_top", "message": 'subject "person" is clipped at the top (y=-20)', "node_id": "person"}
    ]


def test_render():
    resp = client.post("/api/render", json={"scene": make_document(HEADLINE_NODE)})
    assert resp.status_code == 200
    data = resp.json()
    assert data["svg"].startswith('<?xml version="1.0"')
    assert data["layers"]["text"] == ["headline"]


def test_render_invalid_scene():
    resp = client.post("/api/render", json={"scene": make_document()})
    assert resp.status_code == 422
    assert any(issue.startswith("nodes") for issue in resp.json()["detail"])
