"""GeometryValidator — static visual rules for a finished scene.

Works on any scene, generated or hand-authored. Rules run in a fixed order and
validation stops at the first rule that fails; only the final decor-overlap
rule reports every offending pair it finds.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from sceneforge.errors import GeometryViolation
from sceneforge.models.scene import Node, Scene
from sceneforge.models.tags import CONTAINER_KIND, DecorType, Layer, Role
from sceneforge.utils.geometry import BoundingBox, as_number, node_bbox, overlap_ratio

logger = logging.getLogger(__name__)

# Props
FOREGROUND_PROP_PAD = 8
PROP_SUBJECT_MAX_RATIO = 0.01

# Accent safe zones
SAFE_PAD_SUBJECT = 56
SAFE_PAD_PROP = 40

# Decor that covers more than this share of the canvas is treated as a backdrop
FULL_COVERAGE = 0.82
DECOR_BUDGET = 10

# Overlap thresholds per target kind: (strict, lenient)
SUBJECT_THRESHOLDS = (0.03, 0.6)
PROP_THRESHOLDS = (0.04, 0.6)
TEXT_THRESHOLDS = (0.06, 0.6)
OPAQUE_OPACITY = 0.22
OPAQUE_OPACITY_TEXT = 0.25

# Soft-blur filters cap how visible a decor node can be
SOFT_FILTER_MARK = "f_soft"
SOFT_OPACITY_CAP = 0.18

# Container heuristics
CONTAINER_ID_RE = re.compile(r"(^|_)(panel|frame|container)(_|$)", re.IGNORECASE)
CONTAINER_MIN_COVERAGE = 0.12
CONTAINER_MIN_RADIUS = 14

_RGBA_ALPHA_RE = re.compile(r"rgba\(\s*[^,]+,\s*[^,]+,\s*[^,]+,\s*([0-9.]+)\s*\)", re.IGNORECASE)

ALLOWED_LAYERS: dict[Role, tuple[Layer, ...]] = {
    Role.TEXT: (Layer.TEXT,),
    Role.DECOR: (Layer.BG_BASE, Layer.BG),
    Role.SUBJECT: (Layer.FG,),
    Role.PROP: (Layer.FG, Layer.BG),
}


@dataclass
class Violation:
    rule: str
    node_id: str
    message: str
    # (decor id, target, ratio) pairs for the decor overlap rule
    details: list[tuple[str, str, float]] = field(default_factory=list)


@dataclass
class _Boxed:
    node: Node
    box: BoundingBox


@dataclass
class _Decor:
    node: Node
    box: BoundingBox
    coverage: float
    opacity: float
    kind: DecorType


def parse_rgba_alpha(fill: object) -> float | None:
    if not isinstance(fill, str):
        return None
    m = _RGBA_ALPHA_RE.search(fill)
    if not m:
        return None
    try:
        return float(m.group(1))
    except ValueError:
        return None


def effective_opacity(node: Node) -> float:
    """Explicit opacity times fill alpha; soft-blurred nodes are capped."""
    attrs = node.attrs
    explicit = as_number(attrs["opacity"], 1.0) if "opacity" in attrs else None
    alpha = parse_rgba_alpha(attrs.get("fill"))
    if SOFT_FILTER_MARK in str(attrs.get("filter", "")):
        return min(SOFT_OPACITY_CAP, explicit if explicit is not None else 1.0) * (
            alpha if alpha is not None else 1.0
        )
    base = explicit if explicit is not None else 1.0
    return base * alpha if alpha is not None else base


def infer_decor_type(node: Node, coverage: float) -> DecorType:
    if node.decor_type is not None:
        return node.decor_type
    if coverage > FULL_COVERAGE:
        return DecorType.TEXTURE
    if SOFT_FILTER_MARK in str(node.attrs.get("filter", "")):
        return DecorType.SHADOW
    return DecorType.ACCENT


def is_container(node: Node, box: BoundingBox, canvas_area: float) -> bool:
    if node.prop_kind == CONTAINER_KIND:
        return True
    if node.layer is not Layer.BG:
        return False
    if CONTAINER_ID_RE.search(node.id):
        return True
    if node.type == "rect":
        coverage = box.area / max(1.0, canvas_area)
        return coverage >= CONTAINER_MIN_COVERAGE and as_number(node.attrs.get("rx")) >= CONTAINER_MIN_RADIUS
    return False


def _intersects(a: BoundingBox, b: BoundingBox) -> bool:
    return a.intersect(b) is not None


class GeometryValidator:
    """Returns at most one violation per failing rule; an empty list means the scene passes."""

    def validate(self, scene: Scene) -> list[Violation]:
        nodes = list(scene.iter_nodes())
        canvas = BoundingBox(0, 0, scene.canvas.width, scene.canvas.height)
        canvas_area = canvas.area or 1.0

        violation = self._check_layers(nodes)
        if violation:
            return [violation]

        subjects = self._boxed(n for n in nodes if n.role is Role.SUBJECT)
        props = self._boxed(n for n in nodes if n.role is Role.PROP)
        texts = self._boxed(n for n in nodes if n.role is Role.TEXT)
        decor = self._decor(nodes, canvas_area)

        for check in (
            lambda: self._check_prop_subject(props, subjects, canvas_area),
            lambda: self._check_safe_zone(decor, subjects, props),
            lambda: self._check_decor_budget(decor),
            lambda: self._check_subject_top(nodes),
            lambda: self._check_decor_overlap(decor, subjects, props, texts),
        ):
            violation = check()
            if violation:
                logger.debug("Visual rule %s failed: %s", violation.rule, violation.message)
                return [violation]
        return []

    def check(self, scene: Scene) -> None:
        violations = self.validate(scene)
        if violations:
            raise GeometryViolation(violations)

    # -- collection --

    @staticmethod
    def _boxed(nodes) -> list[_Boxed]:
        out = []
        for n in nodes:
            box = node_bbox(n)
            if box is not None and box.area > 0:
                out.append(_Boxed(n, box))
        return out

    @staticmethod
    def _decor(nodes: list[Node], canvas_area: float) -> list[_Decor]:
        out = []
        for n in nodes:
            if n.role is not Role.DECOR:
                continue
            box = node_bbox(n)
            if box is None or box.area <= 0:
                continue
            coverage = box.area / canvas_area
            out.append(_Decor(n, box, coverage, effective_opacity(n), infer_decor_type(n, coverage)))
        return out

    # -- rules --

    @staticmethod
    def _check_layers(nodes: list[Node]) -> Violation | None:
        for n in nodes:
            allowed = ALLOWED_LAYERS.get(n.role)
            if allowed is not None and n.layer not in allowed:
                names = " or ".join(f'"{layer.value}"' for layer in allowed)
                return Violation(
                    "layer", n.id,
                    f'{n.role.value} node "{n.id}" must be in data-layer={names}',
                )
        return None

    @staticmethod
    def _check_prop_subject(props: list[_Boxed], subjects: list[_Boxed], canvas_area: float) -> Violation | None:
        for p in props:
            if is_container(p.node, p.box, canvas_area):
                continue
            padded = p.box.expand(FOREGROUND_PROP_PAD)
            for s in subjects:
                if s.node.layer is not Layer.FG:
                    continue
                inter = padded.intersect(s.box)
                if inter is None:
                    continue
                ratio = inter.area / max(1.0, min(p.box.area, s.box.area))
                if ratio > PROP_SUBJECT_MAX_RATIO:
                    return Violation(
                        "prop_subject", p.node.id,
                        f'prop "{p.node.id}" overlaps subject "{s.node.id}"; move it away '
                        f'or mark it data-prop-kind="container" if it is a background panel',
                    )
        return None

    @staticmethod
    def _check_safe_zone(decor: list[_Decor], subjects: list[_Boxed], props: list[_Boxed]) -> Violation | None:
        for d in decor:
            if d.kind is not DecorType.ACCENT or d.node.layer is not Layer.BG or d.coverage > FULL_COVERAGE:
                continue
            for s in subjects:
                if _intersects(d.box, s.box.expand(SAFE_PAD_SUBJECT)):
                    return Violation(
                        "safe_zone", d.node.id,
                        f'accent decor "{d.node.id}" is too close to subject "{s.node.id}" (safe zone)',
                    )
            for p in props:
                if p.node.layer is not Layer.FG:
                    continue
                if _intersects(d.box, p.box.expand(SAFE_PAD_PROP)):
                    return Violation(
                        "safe_zone", d.node.id,
                        f'accent decor "{d.node.id}" is too close to prop "{p.node.id}" (safe zone)',
                    )
        return None

    @staticmethod
    def _check_decor_budget(decor: list[_Decor]) -> Violation | None:
        count = sum(1 for d in decor if d.coverage <= FULL_COVERAGE)
        if count > DECOR_BUDGET:
            return Violation("decor_budget", "", f"too many decor nodes ({count} > {DECOR_BUDGET})")
        return None

    @staticmethod
    def _check_subject_top(nodes: list[Node]) -> Violation | None:
        for n in nodes:
            if n.role is not Role.SUBJECT:
                continue
            box = node_bbox(n)
            if box is not None and box.y < 0:
                return Violation(
                    "subject_top", n.id,
                    f'subject "{n.id}" is clipped at the top (y={box.y:g})',
                )
        return None

    @staticmethod
    def _check_decor_overlap(
        decor: list[_Decor],
        subjects: list[_Boxed],
        props: list[_Boxed],
        texts: list[_Boxed],
    ) -> Violation | None:
        problems: list[tuple[str, str, float]] = []
        for d in decor:
            if d.coverage > FULL_COVERAGE:
                continue
            if d.node.layer is Layer.BG_BASE or d.kind in (DecorType.SHADOW, DecorType.TEXTURE):
                continue
            accent = d.kind is DecorType.ACCENT
            opaque = d.opacity >= OPAQUE_OPACITY
            targets = (
                ("subject", subjects, SUBJECT_THRESHOLDS, opaque),
                ("prop", [p for p in props if p.node.layer is Layer.FG], PROP_THRESHOLDS, opaque),
                ("text", texts, TEXT_THRESHOLDS, d.opacity >= OPAQUE_OPACITY_TEXT),
            )
            for kind, boxes, (strict, lenient), is_opaque in targets:
                threshold = strict if accent or is_opaque else lenient
                for t in boxes:
                    ratio = overlap_ratio(d.box, t.box)
                    if ratio > threshold:
                        problems.append((d.node.id, f"{kind}:{t.node.id}", round(ratio, 3)))

        if not problems:
            return None
        lines = "\n".join(f"  - decor={dec} target={tgt} ratio={r}" for dec, tgt, r in problems[:8])
        return Violation(
            "decor_overlap", problems[0][0],
            f"decor overlaps foreground (too much):\n{lines}",
            details=problems,
        )
