"""Read rendered scene SVG back: which node ids landed in which layer group."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from sceneforge.errors import ResourceError
from sceneforge.models.tags import LAYER_ORDER

logger = logging.getLogger(__name__)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


@dataclass
class RenderedScene:
    view_box: str = ""
    title: str = ""
    desc: str = ""
    # layer name -> top-level node ids, in document order
    layers: dict[str, list[str]] = field(default_factory=dict)

    def layer_of(self, node_id: str) -> str | None:
        for name, ids in self.layers.items():
            if node_id in ids:
                return name
        return None


def parse_rendered(svg_text: str) -> RenderedScene:
    try:
        root = ET.fromstring(svg_text.encode("utf-8"))
    except ET.ParseError as e:
        raise ResourceError(f"invalid SVG: {e}") from e
    if _local(root.tag) != "svg":
        raise ResourceError(f"root element is <{_local(root.tag)}>, expected <svg>")

    out = RenderedScene(view_box=root.get("viewBox", ""))
    for child in root:
        name = _local(child.tag)
        if name == "title":
            out.title = child.text or ""
        elif name == "desc":
            out.desc = child.text or ""
        elif name == "g":
            group_id = child.get("id", "")
            if group_id.startswith("layer_"):
                out.layers[group_id[len("layer_"):]] = [el.get("id", "") for el in child]
    missing = [layer.value for layer in LAYER_ORDER if layer.value not in out.layers]
    if missing:
        logger.warning("Rendered SVG lacks layer groups: %s", ", ".join(missing))
    return out


def read_layers(svg_text: str) -> dict[str, list[str]]:
    """Layer name -> node ids, for the four ``layer_*`` groups."""
    return parse_rendered(svg_text).layers
