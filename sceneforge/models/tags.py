"""Semantic node tags: role, render layer, decor type.

Tags arrive as raw ``data-*`` attribute strings. They are resolved once, when a
Node is constructed, and everything downstream reads the resolved values.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any


class Role(str, enum.Enum):
    DECOR = "decor"
    SUBJECT = "subject"
    PROP = "prop"
    TEXT = "text"
    UNKNOWN = "unknown"


class Layer(str, enum.Enum):
    BG_BASE = "bg_base"
    BG = "bg"
    FG = "fg"
    TEXT = "text"


class DecorType(str, enum.Enum):
    TEXTURE = "texture"
    SHADOW = "shadow"
    ACCENT = "accent"
    # Any other explicit tag, e.g. "glow"; never treated as accent
    OTHER = "other"


# Fixed render order of the layer buckets
LAYER_ORDER: tuple[Layer, ...] = (Layer.BG_BASE, Layer.BG, Layer.FG, Layer.TEXT)

CONTAINER_KIND = "container"


def _tag(attrs: Mapping[str, Any], name: str) -> str:
    raw = attrs.get(name)
    if raw is None:
        return ""
    return str(raw).strip()


def resolve_role(node_type: str, attrs: Mapping[str, Any]) -> Role:
    raw = _tag(attrs, "data-role")
    if raw:
        try:
            return Role(raw)
        except ValueError:
            return Role.UNKNOWN
    if node_type == "text":
        return Role.TEXT
    return Role.UNKNOWN


def resolve_decor_type(attrs: Mapping[str, Any]) -> DecorType | None:
    raw = _tag(attrs, "data-decor-type")
    if not raw:
        return None
    try:
        return DecorType(raw)
    except ValueError:
        return DecorType.OTHER


def resolve_layer(role: Role, decor_type: DecorType | None, attrs: Mapping[str, Any]) -> Layer:
    """Explicit ``data-layer`` wins; otherwise infer from role and decor type."""
    try:
        return Layer(_tag(attrs, "data-layer"))
    except ValueError:
        pass
    if role is Role.TEXT:
        return Layer.TEXT
    if role is Role.DECOR:
        if decor_type in (DecorType.TEXTURE, DecorType.SHADOW):
            return Layer.BG_BASE
        return Layer.BG
    return Layer.FG


def resolve_prop_kind(attrs: Mapping[str, Any]) -> str:
    return _tag(attrs, "data-prop-kind") or "default"
