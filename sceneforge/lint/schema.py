"""Scene document shape validation. Collects every issue in one pass."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from sceneforge.errors import SchemaViolation
from sceneforge.models.scene import Scene

logger = logging.getLogger(__name__)


def _format_loc(loc: tuple[Any, ...]) -> str:
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out or "(root)"


def _shape_issues(exc: ValidationError) -> list[str]:
    issues = []
    for err in exc.errors():
        # Tagged-union and function validators add their own location parts
        loc = tuple(p for p in err["loc"] if not (isinstance(p, str) and p.startswith("function-")))
        issues.append(f"{_format_loc(loc)}: {err['msg']}")
    return issues


def _walk(nodes: Any, out: list[dict[str, Any]]) -> list[dict[str, Any]]:
    if not isinstance(nodes, list):
        return out
    for node in nodes:
        if isinstance(node, dict):
            out.append(node)
            _walk(node.get("children"), out)
    return out


def _reference_issues(data: dict[str, Any]) -> list[str]:
    """Checks that span several parts of the document."""
    issues: list[str] = []

    ids: set[str] = set()
    for node in _walk(data.get("nodes"), []):
        node_id = node.get("id")
        if not isinstance(node_id, str) or not node_id:
            continue
        if node_id in ids:
            issues.append(f"duplicate node id: {node_id}")
        ids.add(node_id)

    animations = data.get("animations")
    for a_idx, anim in enumerate(animations if isinstance(animations, list) else []):
        if not isinstance(anim, dict):
            continue
        label = anim.get("id") or f"animations[{a_idx}]"
        tracks = anim.get("tracks")
        for track in tracks if isinstance(tracks, list) else []:
            if not isinstance(track, dict):
                continue
            target = track.get("target")
            if isinstance(target, str) and target and target not in ids:
                issues.append(f"track.target not found: {target}")
            prev_t = float("-inf")
            keyframes = track.get("keyframes")
            for kf in keyframes if isinstance(keyframes, list) else []:
                if not isinstance(kf, dict):
                    continue
                t = kf.get("t")
                if not isinstance(t, (int, float)) or isinstance(t, bool):
                    continue
                if t < prev_t:
                    issues.append(f"keyframes must be non-decreasing by t: {label}/{target}")
                prev_t = t
    return issues


def _validate(data: Any) -> tuple[Scene | None, list[str]]:
    if not isinstance(data, dict):
        return None, ["(root): document must be an object"]
    scene: Scene | None = None
    issues: list[str] = []
    try:
        scene = Scene.model_validate(data)
    except ValidationError as e:
        issues.extend(_shape_issues(e))
    issues.extend(_reference_issues(data))
    return scene, issues


def validate_document(data: Any) -> list[str]:
    """Every shape and cross-reference problem of ``data``; empty when valid."""
    _, issues = _validate(data)
    if issues:
        logger.debug("Scene document has %d issue(s)", len(issues))
    return issues


def parse_scene(data: Any) -> Scene:
    """Validated Scene, or SchemaViolation carrying all issues."""
    scene, issues = _validate(data)
    if issues or scene is None:
        raise SchemaViolation(issues)
    return scene
