"""Write static SVG from a scene: four fixed layer groups, then the node markup."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from sceneforge.models.scene import Node, Scene
from sceneforge.models.tags import LAYER_ORDER, Layer

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"

TAGS = {
    "group": "g",
    "rect": "rect",
    "circle": "circle",
    "ellipse": "ellipse",
    "line": "line",
    "path": "path",
    "text": "text",
    "image": "image",
    "use": "use",
}

# Shapes written as <tag ... /> when they have no children
LEAF_TAGS = frozenset({"rect", "circle", "ellipse", "line", "path", "image", "use"})


def format_value(value: Any) -> str:
    """Attribute value as text; integral floats lose their trailing ``.0``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def escape_text(value: Any) -> str:
    return format_value(value).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attr(value: Any) -> str:
    return escape_text(value).replace('"', "&quot;")


def style_string(style: Mapping[str, Any] | None) -> str:
    if not style:
        return ""
    return ";".join(f"{k}:{format_value(v)}" for k, v in style.items() if v is not None and v != "")


def attrs_string(attrs: Mapping[str, Any]) -> str:
    parts = [f'{k}="{escape_attr(v)}"' for k, v in attrs.items() if v is not None]
    return " " + " ".join(parts) if parts else ""


def node_to_svg(node: Node) -> str:
    tag = TAGS[node.type]
    attrs: dict[str, Any] = dict(node.attrs)
    attrs["id"] = node.id
    style = style_string(node.style)
    if style:
        attrs["style"] = style

    children = "".join(node_to_svg(child) for child in node.children or [])
    if tag == "text":
        text = escape_text(node.text) if node.text is not None else ""
        return f"<{tag}{attrs_string(attrs)}>{text}{children}</{tag}>"
    if not children and tag in LEAF_TAGS:
        return f"<{tag}{attrs_string(attrs)} />"
    return f"<{tag}{attrs_string(attrs)}>{children}</{tag}>"


def partition_layers(nodes: Iterable[Node]) -> dict[Layer, list[Node]]:
    """Stable partition of top-level nodes into the four layer buckets."""
    buckets: dict[Layer, list[Node]] = {layer: [] for layer in LAYER_ORDER}
    for node in nodes:
        buckets[node.layer].append(node)
    return buckets


def render_layers(nodes: Iterable[Node]) -> str:
    buckets = partition_layers(nodes)
    return "".join(
        f'<g id="layer_{layer.value}">' + "".join(node_to_svg(n) for n in buckets[layer]) + "</g>"
        for layer in LAYER_ORDER
    )


def render_scene(scene: Scene) -> str:
    """Full SVG document, newline-terminated."""
    canvas = scene.canvas
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="{SVG_NS}" viewBox="{escape_attr(canvas.view_box)}"'
        f' width="{escape_attr(canvas.width)}" height="{escape_attr(canvas.height)}" role="img">',
    ]
    if scene.a11y.title:
        lines.append(f"<title>{escape_text(scene.a11y.title)}</title>")
    if scene.a11y.desc:
        lines.append(f"<desc>{escape_text(scene.a11y.desc)}</desc>")
    if scene.defs.raw:
        lines.append(f"<defs>{scene.defs.raw}</defs>")
    lines.append(render_layers(scene.nodes))
    lines.append("</svg>")
    svg = "\n".join(lines) + "\n"
    logger.debug("Rendered %d top-level nodes (%d bytes)", len(scene.nodes), len(svg))
    return svg
