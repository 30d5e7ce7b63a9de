"""Shared test fixtures."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from sceneforge.engine.catalog import MotifCatalog
from sceneforge.models.scene import Scene

# Fixed motif universe for payments/glass
PAYMENTS_MOTIFS = [
    "credit_card_handdrawn",
    "invoice_handdrawn",
    "lucide_lock",
    "lucide_shield_check",
    "lucide_wallet",
    "opeeps_effigy_finance_paper",
    "receipt_handdrawn",
]

PORTAL_MOTIFS = [
    "chat_bubble_handdrawn",
    "lucide_file_text",
    "lucide_message_circle",
    "lucide_user",
    "opeeps_effigy_support_coffee",
    "paper_frame",
    "pencil_shade_bl",
    "phone_handdrawn",
    "receipt_handdrawn",
    "tape_strip",
]

BOOKING_MOTIFS = [
    "calendar_handdrawn",
    "lucide_badge",
    "lucide_calendar_clock",
    "lucide_map",
    "lucide_timer",
    "opeeps_effigy_fieldtech_jacket",
]

BASE_DOCUMENT: dict[str, Any] = {
    "meta": {"version": "0.1", "title": "Test scene", "lang": "en", "seed": 7},
    "canvas": {"width": 1200, "height": 600, "viewBox": "0 0 1200 600"},
    "theme": {
        "palette": {
            "bg": "#0B0F14",
            "fg": "#EAF2FF",
            "primary": "#4F8CFF",
            "accent": "#8B5BFF",
            "muted": "#9AA4B2",
        },
        "typography": {"fontFamily": "Inter, sans-serif", "baseSize": 16},
    },
    "defs": {"motifs": [], "raw": ""},
    "nodes": [],
    "animations": [],
    "a11y": {"title": "", "desc": "", "reducedMotion": {"strategy": "none"}},
}

HEADLINE_NODE = {
    "id": "headline",
    "type": "text",
    "attrs": {"x": 600, "y": 96, "text-anchor": "middle", "font-size": 28},
    "text": "{{slot:headline}}",
}

PANEL_NODE = {
    "id": "panel",
    "type": "rect",
    "attrs": {
        "data-role": "prop",
        "data-layer": "bg",
        "data-prop-kind": "container",
        "x": 100,
        "y": 200,
        "width": 800,
        "height": 300,
        "rx": 26,
    },
}

SIMPLE_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 50" width="100" height="50">
  <rect x="10" y="10" width="80" height="30" fill="#4F8CFF"/>
</svg>'''

SYMBOL_LIBRARY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" style="display:none">
<symbol id="motif_card" viewBox="0 0 10 10"><rect width="10" height="10"/></symbol>
<symbol viewBox="0 0 20 20" id='motif_lock'><circle cx="10" cy="10" r="8"/></symbol>
</svg>'''


def make_document(*nodes: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    doc = copy.deepcopy(BASE_DOCUMENT)
    doc["nodes"] = [copy.deepcopy(n) for n in nodes]
    doc.update(overrides)
    return doc


def make_scene(*nodes: dict[str, Any]) -> Scene:
    return Scene.model_validate(make_document(*nodes))


def rect(node_id: str, x: float, y: float, w: float, h: float, **attrs: Any) -> dict[str, Any]:
    a = {k.replace("_", "-"): v for k, v in attrs.items()}
    return {"id": node_id, "type": "rect", "attrs": {**a, "x": x, "y": y, "width": w, "height": h}}


def subject(node_id: str, x: float, y: float, w: float, h: float) -> dict[str, Any]:
    return rect(node_id, x, y, w, h, data_role="subject")


@pytest.fixture(scope="session")
def catalog() -> MotifCatalog:
    return MotifCatalog.from_file()


@pytest.fixture
def base_document() -> dict[str, Any]:
    return make_document(copy.deepcopy(HEADLINE_NODE))
