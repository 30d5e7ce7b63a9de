"""Leaf-node geometry helpers: axis-aligned boxes for scene nodes. No engine imports."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from shapely.geometry import box as shapely_box

if TYPE_CHECKING:
    from sceneforge.models.scene import Node

_LEADING_NUMBER_RE = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# Crude Latin-heavy text metrics: advance ~0.56em, line box 1.2em.
TEXT_ADVANCE_EM = 0.56
TEXT_LINE_EM = 1.2
DEFAULT_FONT_SIZE = 16.0


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    w: float
    h: float

    @property
    def area(self) -> float:
        return max(0.0, self.w) * max(0.0, self.h)

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    def expand(self, pad: float) -> BoundingBox:
        return BoundingBox(self.x - pad, self.y - pad, self.w + 2 * pad, self.h + 2 * pad)

    def intersect(self, other: BoundingBox) -> BoundingBox | None:
        """Intersection box, or None when the boxes only touch or are disjoint."""
        if self.w <= 0 or self.h <= 0 or other.w <= 0 or other.h <= 0:
            return None
        inter = shapely_box(self.x, self.y, self.right, self.bottom).intersection(
            shapely_box(other.x, other.y, other.right, other.bottom)
        )
        if inter.is_empty:
            return None
        x1, y1, x2, y2 = inter.bounds
        if x2 <= x1 or y2 <= y1:
            return None
        return BoundingBox(x1, y1, x2 - x1, y2 - y1)

    def overlap_area(self, other: BoundingBox) -> float:
        inter = self.intersect(other)
        return inter.area if inter is not None else 0.0


def as_number(value: Any, default: float = 0.0) -> float:
    """Leading-number parse of an attribute value ("12px" -> 12.0); default if none."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else default
    if value is None:
        return default
    m = _LEADING_NUMBER_RE.match(str(value))
    if not m:
        return default
    n = float(m.group(0))
    return n if math.isfinite(n) else default


def overlap_ratio(a: BoundingBox, b: BoundingBox) -> float:
    """Intersection area over the smaller of the two areas (denominator floored at 1)."""
    inter = a.intersect(b)
    if inter is None:
        return 0.0
    return inter.area / max(1.0, min(a.area, b.area))


def text_bbox(node: Node) -> BoundingBox:
    a = node.attrs
    x = as_number(a.get("x"))
    y = as_number(a.get("y"))
    font_size = as_number(a.get("font-size"), DEFAULT_FONT_SIZE)
    anchor = str(a.get("text-anchor", "start"))

    width = max(1, len(node.text or "")) * font_size * TEXT_ADVANCE_EM
    height = font_size * TEXT_LINE_EM

    left = x
    if anchor == "middle":
        left = x - width / 2
    elif anchor == "end":
        left = x - width
    # y is the baseline; the box sits above it
    return BoundingBox(left, y - height, width, height)


def node_bbox(node: Node) -> BoundingBox | None:
    """Axis-aligned box from geometry attrs. None for path and group nodes."""
    a = node.attrs
    t = node.type
    if t in ("rect", "image", "use"):
        return BoundingBox(
            as_number(a.get("x")),
            as_number(a.get("y")),
            as_number(a.get("width")),
            as_number(a.get("height")),
        )
    if t == "circle":
        cx, cy, r = as_number(a.get("cx")), as_number(a.get("cy")), as_number(a.get("r"))
        return BoundingBox(cx - r, cy - r, 2 * r, 2 * r)
    if t == "ellipse":
        cx, cy = as_number(a.get("cx")), as_number(a.get("cy"))
        rx, ry = as_number(a.get("rx")), as_number(a.get("ry"))
        return BoundingBox(cx - rx, cy - ry, 2 * rx, 2 * ry)
    if t == "line":
        x1, y1 = as_number(a.get("x1")), as_number(a.get("y1"))
        x2, y2 = as_number(a.get("x2")), as_number(a.get("y2"))
        return BoundingBox(min(x1, x2), min(y1, y2), abs(x2 - x1), abs(y2 - y1))
    if t == "text":
        return text_bbox(node)
    return None
