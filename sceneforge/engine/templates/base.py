"""Shared scaffolding for scene templates.

Builders assemble plain node dicts (the scene document's JSON shape) and hand
them to ``finalize``, which validates the result into a ``Scene``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from sceneforge.engine.catalog import PERSON_PREFIX, MotifCatalog
from sceneforge.engine.rng import Mulberry32, micro_seed
from sceneforge.models.scene import SCENE_VERSION, Scene

CANVAS_W = 1200
CANVAS_H = 600
CANVAS_BG = "#0B0F14"

PALETTE = {
    "bg": CANVAS_BG,
    "fg": "rgba(234,242,255,0.92)",
    "primary": "#4F8CFF",
    "accent": "#8B5BFF",
    "muted": "rgba(234,242,255,0.60)",
}
FONT_FAMILY = "ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial"

DEFS_RAW = (
    "\n"
    '      <linearGradient id="g_accent" x1="0" y1="0" x2="1" y2="1">\n'
    '        <stop offset="0%" stop-color="rgba(79,140,255,0.95)"/>\n'
    '        <stop offset="100%" stop-color="rgba(139,91,255,0.95)"/>\n'
    "      </linearGradient>\n"
    '      <filter id="f_soft" x="-20%" y="-20%" width="140%" height="140%">\n'
    '        <feGaussianBlur stdDeviation="14"/>\n'
    "      </filter>\n"
)

# Person silhouette box shared by all templates
PERSON_W = 320
PERSON_H = 392
PERSON_OPACITY = 0.96

# Horizontal gap kept between interior props and the person's left edge
PERSON_GUTTER = 18

_MOTIF_HREF_RE = re.compile(r"^#motif_(.+)$")


@dataclass(frozen=True)
class BuildContext:
    seed: int
    motifs: tuple[str, ...]
    catalog: MotifCatalog | None = None

    def has(self, motif_id: str) -> bool:
        return motif_id in self.motifs

    def available(self, pool: tuple[str, ...]) -> list[str]:
        return [m for m in pool if m in self.motifs]

    def person_motif(self) -> str | None:
        """First person silhouette of the motif set."""
        for motif_id in self.motifs:
            if self.catalog is not None and motif_id in self.catalog:
                if self.catalog.is_person(motif_id):
                    return motif_id
            elif motif_id.startswith(PERSON_PREFIX):
                return motif_id
        return None

    def micro_rand(self) -> Mulberry32:
        """Fresh interior stream; independent of layout sampling."""
        return Mulberry32(micro_seed(self.seed))


@dataclass(frozen=True)
class PanelFrame:
    """Panel box plus the interior area props may occupy."""

    x: int
    y: int
    w: int
    h: int
    person_x: int
    pad: int

    @property
    def safe_right(self) -> int:
        return self.person_x - PERSON_GUTTER

    @property
    def inner_left(self) -> int:
        return self.x + self.pad

    def clamp_x(self, x: float, width: float) -> float:
        lo = self.inner_left
        return clamp(x, lo, max(lo, self.safe_right - width))

    def clamp_y(self, y: float, height: float) -> float:
        lo = self.y + self.pad
        return clamp(y, lo, max(lo, self.y + self.h - self.pad - height))

    def icon_row(self, icons: list[str], step: int, start: float | None = None) -> list[tuple[str, float]]:
        """(motif, x) pairs for one row; truncated to what fits left of the person."""
        x0 = self.inner_left + 8 if start is None else start
        row_max = max(0, int((self.safe_right - (x0 - 8)) // step))
        count = min(len(icons), row_max)
        return [(icons[i], x0 + i * step) for i in range(count)]


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


@dataclass
class SceneDraft:
    """Mutable scene document under construction."""

    title: str
    desc: str
    seed: int
    motifs: tuple[str, ...]
    nodes: list[dict[str, Any]] = field(default_factory=list)
    defs_raw: str = DEFS_RAW

    def add(self, *nodes: dict[str, Any]) -> None:
        self.nodes.extend(nodes)

    def document(self) -> dict[str, Any]:
        return {
            "meta": {"version": SCENE_VERSION, "title": self.title, "lang": "en", "seed": self.seed},
            "canvas": {
                "width": CANVAS_W,
                "height": CANVAS_H,
                "viewBox": f"0 0 {CANVAS_W} {CANVAS_H}",
                "bg": CANVAS_BG,
            },
            "theme": {
                "palette": dict(PALETTE),
                "typography": {"fontFamily": FONT_FAMILY, "baseSize": 16},
            },
            "defs": {"motifs": list(self.motifs), "raw": self.defs_raw},
            "nodes": self.nodes,
            "animations": [],
            "a11y": {"title": self.title, "desc": self.desc, "reducedMotion": {"strategy": "none"}},
        }


# -- node constructors --


def decor(node_id: str, node_type: str, decor_type: str, **attrs: Any) -> dict[str, Any]:
    return {
        "id": node_id,
        "type": node_type,
        "attrs": {"data-role": "decor", "data-decor-type": decor_type, **_svg_attrs(attrs)},
    }


def background_fill(fill: str = CANVAS_BG) -> dict[str, Any]:
    return decor("bg", "rect", "texture", x=0, y=0, width=CANVAS_W, height=CANVAS_H, fill=fill)


def soft_orb(node_id: str, cx: float, cy: float, r: float, fill: str) -> dict[str, Any]:
    return decor(node_id, "circle", "shadow", cx=cx, cy=cy, r=r, fill=fill, filter="url(#f_soft)")


def panel_rect(frame: PanelFrame, rx: int, fill: str, stroke: str, node_id: str = "panel") -> dict[str, Any]:
    return {
        "id": node_id,
        "type": "rect",
        "attrs": {
            "data-role": "prop",
            "data-layer": "bg",
            "data-prop-kind": "container",
            "x": frame.x,
            "y": frame.y,
            "width": frame.w,
            "height": frame.h,
            "rx": rx,
            "fill": fill,
            "stroke": stroke,
            "stroke-width": 1,
        },
    }


def card_rect(node_id: str, x: float, y: float, width: float, height: float, rx: int = 18) -> dict[str, Any]:
    return {
        "id": node_id,
        "type": "rect",
        "attrs": {
            "data-role": "prop",
            "data-layer": "bg",
            "x": x,
            "y": y,
            "width": width,
            "height": height,
            "rx": rx,
            "fill": "rgba(255,255,255,0.03)",
            "stroke": "rgba(255,255,255,0.10)",
            "stroke-width": 1,
        },
    }


def motif_use(
    node_id: str,
    motif_id: str,
    x: float,
    y: float,
    width: float,
    height: float,
    opacity: float,
    role: str = "prop",
    **attrs: Any,
) -> dict[str, Any]:
    node_attrs: dict[str, Any] = {"data-role": role}
    if role == "prop":
        node_attrs["data-layer"] = "bg"
    node_attrs.update(_svg_attrs(attrs))
    node_attrs.update(
        {
            "href": f"#motif_{motif_id}",
            "x": x,
            "y": y,
            "width": width,
            "height": height,
            "opacity": opacity,
        }
    )
    return {"id": node_id, "type": "use", "attrs": node_attrs}


def person_use(motif_id: str, x: float, y: float) -> dict[str, Any]:
    return motif_use("person", motif_id, x, y, PERSON_W, PERSON_H, PERSON_OPACITY, role="subject")


def label(node_id: str, x: float, y: float, text: str, fill: str, font_size: int, **attrs: Any) -> dict[str, Any]:
    return {
        "id": node_id,
        "type": "text",
        "attrs": {
            "data-role": "text",
            "data-layer": "text",
            "x": x,
            "y": y,
            **_svg_attrs(attrs),
            "fill": fill,
            "font-size": font_size,
        },
        "text": text,
    }


def title_slots() -> list[dict[str, Any]]:
    center = CANVAS_W // 2
    return [
        label("kicker", center, 64, "{{slot:kicker}}", "rgba(234,242,255,0.66)", 14,
              text_anchor="middle", letter_spacing=1),
        label("headline", center, 96, "{{slot:headline}}", "rgba(234,242,255,0.92)", 28,
              text_anchor="middle", font_weight=740),
        label("subhead", center, 126, "{{slot:subhead}}", "rgba(234,242,255,0.64)", 16,
              text_anchor="middle"),
    ]


def _svg_attrs(attrs: dict[str, Any]) -> dict[str, Any]:
    """Keyword arguments to SVG attribute names (text_anchor -> text-anchor)."""
    return {k.replace("_", "-"): v for k, v in attrs.items()}


def referenced_motifs(nodes: list[dict[str, Any]]) -> list[str]:
    used: set[str] = set()
    stack = list(nodes)
    while stack:
        node = stack.pop()
        stack.extend(node.get("children") or [])
        if node.get("type") != "use":
            continue
        m = _MOTIF_HREF_RE.match(str(node.get("attrs", {}).get("href", "")))
        if m:
            used.add(m.group(1))
    return sorted(used)


def finalize(draft: SceneDraft) -> Scene:
    """Validate the draft; ``defs.motifs`` becomes exactly the referenced motif ids."""
    doc = draft.document()
    doc["defs"]["motifs"] = referenced_motifs(draft.nodes)
    return Scene.model_validate(doc)
