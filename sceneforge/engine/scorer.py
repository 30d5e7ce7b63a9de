"""LayoutScorer — geometric heuristic score of a finished scene, higher is better.

Each heuristic is a function registered with ``@scoring_rule``; it receives the
precomputed ``SceneGeometry`` plus the ``ScoringRules`` table and returns a
delta. The score is the baseline plus the sum of all deltas.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import combinations

import numpy as np

from sceneforge.engine.config import ScoringRules
from sceneforge.models.scene import Node, Scene
from sceneforge.models.tags import CONTAINER_KIND, Layer, Role
from sceneforge.utils.geometry import BoundingBox, node_bbox, overlap_ratio

logger = logging.getLogger(__name__)

RuleFn = Callable[["SceneGeometry", ScoringRules], float]

_RULES: list[tuple[str, RuleFn]] = []


def scoring_rule(name: str):
    """Register a scoring heuristic. Rules run in registration order."""

    def decorator(fn: RuleFn) -> RuleFn:
        _RULES.append((name, fn))
        return fn

    return decorator


@dataclass
class SceneGeometry:
    """Boxes the rules need, computed once per scene."""

    canvas: BoundingBox
    key_boxes: list[BoundingBox] = field(default_factory=list)
    panel: BoundingBox | None = None
    person: BoundingBox | None = None
    # (node id, box) for every top-level node on layer bg
    background: list[tuple[str, BoundingBox]] = field(default_factory=list)
    # Non-container bg props with a positive area
    bg_props: list[BoundingBox] = field(default_factory=list)

    @classmethod
    def from_scene(cls, scene: Scene, rules: ScoringRules) -> SceneGeometry:
        by_id: dict[str, Node] = {}
        for node in scene.nodes:
            by_id.setdefault(node.id, node)

        geo = cls(canvas=BoundingBox(0, 0, scene.canvas.width, scene.canvas.height))
        geo.panel = _first_box(by_id, rules.panel_ids)
        geo.person = _first_box(by_id, rules.person_ids)

        for key_id in rules.panel_ids + rules.person_ids:
            node = by_id.get(key_id)
            box = node_bbox(node) if node is not None else None
            if box is not None:
                geo.key_boxes.append(box)

        for node in scene.nodes:
            if node.layer is not Layer.BG:
                continue
            box = node_bbox(node)
            if box is None:
                continue
            geo.background.append((node.id, box))
            if node.role is Role.PROP and node.prop_kind != CONTAINER_KIND and box.area > 0:
                geo.bg_props.append(box)
        return geo


def _first_box(by_id: dict[str, Node], ids: tuple[str, ...]) -> BoundingBox | None:
    for node_id in ids:
        node = by_id.get(node_id)
        if node is not None:
            return node_bbox(node)
    return None


# -- rules --


@scoring_rule("out_of_canvas")
def out_of_canvas(geo: SceneGeometry, rules: ScoringRules) -> float:
    m = rules.canvas_margin
    c = geo.canvas
    delta = 0.0
    for b in geo.key_boxes:
        edges = (b.x < c.x - m, b.y < c.y - m, b.right > c.w + m, b.bottom > c.h + m)
        delta += rules.out_of_canvas_penalty * sum(edges)
    return delta


@scoring_rule("panel_person_overlap")
def panel_person_overlap(geo: SceneGeometry, rules: ScoringRules) -> float:
    if geo.panel is None or geo.person is None:
        return 0.0
    ratio = geo.panel.overlap_area(geo.person) / max(1.0, geo.person.area)
    for upper, delta in rules.overlap_bands:
        if ratio < upper:
            return delta
    if ratio > rules.overlap_excess_threshold:
        return rules.overlap_excess_delta
    return rules.overlap_target_bonus


@scoring_rule("center_distance")
def center_distance(geo: SceneGeometry, rules: ScoringRules) -> float:
    if geo.panel is None or geo.person is None:
        return 0.0
    dx = abs(geo.person.center[0] - geo.panel.center[0])
    excess = (dx - rules.center_distance_free) / rules.center_distance_divisor
    return -min(rules.center_distance_cap, max(0.0, excess))


@scoring_rule("title_band")
def title_band(geo: SceneGeometry, rules: ScoringRules) -> float:
    band = BoundingBox(0, 0, geo.canvas.w, rules.title_band_height)
    hits = sum(1 for _, b in geo.background if b.overlap_area(band) > rules.title_band_min_area)
    return rules.title_band_penalty * hits


@scoring_rule("prop_overlap")
def prop_overlap(geo: SceneGeometry, rules: ScoringRules) -> float:
    delta = 0.0
    for a, b in combinations(geo.bg_props, 2):
        ratio = overlap_ratio(a, b)
        if ratio > rules.prop_overlap_threshold:
            delta += rules.prop_overlap_weight * ratio
    return delta


@scoring_rule("clutter")
def clutter(geo: SceneGeometry, rules: ScoringRules) -> float:
    extra = len(geo.bg_props) - rules.clutter_limit
    return rules.clutter_penalty * extra if extra > 0 else 0.0


@scoring_rule("balance")
def balance(geo: SceneGeometry, rules: ScoringRules) -> float:
    if geo.panel is None:
        return 0.0
    boxes = [b for node_id, b in geo.background if node_id not in rules.balance_exclude_ids]
    weights = np.array([b.area for b in boxes], dtype=float)
    if not boxes or weights.sum() <= 0:
        return 0.0
    xs = np.array([b.center[0] for b in boxes], dtype=float)
    cx = float(np.average(xs, weights=weights))
    return -min(rules.balance_cap, abs(cx - geo.panel.center[0]) / rules.balance_divisor)


class LayoutScorer:
    """Pure and deterministic; the same scene always gets the same score."""

    def __init__(self, rules: ScoringRules | None = None) -> None:
        self.rules = rules or ScoringRules()

    def breakdown(self, scene: Scene) -> dict[str, float]:
        geo = SceneGeometry.from_scene(scene, self.rules)
        return {name: float(fn(geo, self.rules)) for name, fn in _RULES}

    def score(self, scene: Scene) -> float:
        total = self.rules.baseline
        for delta in self.breakdown(scene).values():
            total += delta
        return total
