"""Template registry — every scene template is a builder function registered via decorator.

Usage:
    @template(domain="payments", style="glass", default=True, fields=PAYMENTS_FIELDS)
    def payments_glass(ctx: BuildContext, layout: LayoutParams) -> Scene:
        ...

Adding a new (domain, style) template = creating one module with the decorator
and importing it from ``sceneforge.engine.templates``.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sceneforge.engine.sampler import LayoutParams
    from sceneforge.engine.templates.base import BuildContext
    from sceneforge.models.scene import Scene

logger = logging.getLogger(__name__)

# Used when neither the exact pair nor the domain has a template
FALLBACK_KEY = ("booking", "glass")

Bound = int | Callable[[Mapping[str, int]], int]


@dataclass(frozen=True)
class FieldRange:
    """One sampled layout field: inclusive draw range, then clamp to ``valid``.

    Bounds may depend on fields drawn earlier in the same table.
    """

    name: str
    low: Bound
    high: Bound
    valid: tuple[int, int] | None = None

    def draw_bounds(self, drawn: Mapping[str, int]) -> tuple[int, int]:
        lo = self.low(drawn) if callable(self.low) else self.low
        hi = self.high(drawn) if callable(self.high) else self.high
        return lo, hi

    def clamp(self, value: int, drawn: Mapping[str, int]) -> int:
        lo, hi = self.valid if self.valid is not None else self.draw_bounds(drawn)
        return max(min(lo, hi), min(max(lo, hi), value))


@dataclass
class TemplateSpec:
    domain: str
    style: str
    fn: Callable[["BuildContext", "LayoutParams"], "Scene"]
    fields: tuple[FieldRange, ...] = ()
    default: bool = False
    description: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.domain, self.style)


class TemplateRegistry:
    """Registry of scene templates keyed by (domain, style)."""

    def __init__(self) -> None:
        self._templates: dict[tuple[str, str], TemplateSpec] = {}

    def register(self, spec: TemplateSpec) -> None:
        if spec.key in self._templates:
            raise ValueError(f"Duplicate template: {spec.domain}/{spec.style}")
        self._templates[spec.key] = spec
        logger.debug("Registered template %s/%s", spec.domain, spec.style)

    def get(self, domain: str, style: str) -> TemplateSpec:
        return self._templates[(domain, style)]

    def resolve(self, domain: str, style: str) -> TemplateSpec:
        """Exact pair, else the domain's default-style template, else the generic fallback."""
        spec = self._templates.get((domain, style))
        if spec is not None:
            return spec
        for candidate in self._templates.values():
            if candidate.domain == domain and candidate.default:
                logger.debug("No template for %s/%s, using %s/%s", domain, style, *candidate.key)
                return candidate
        if FALLBACK_KEY not in self._templates:
            raise KeyError(f"No template for {domain}/{style} and no fallback registered")
        logger.debug("Unknown domain %s, using fallback %s/%s", domain, *FALLBACK_KEY)
        return self._templates[FALLBACK_KEY]

    def all(self) -> list[TemplateSpec]:
        return sorted(self._templates.values(), key=lambda s: s.key)

    @property
    def count(self) -> int:
        return len(self._templates)


# Module-level singleton
_registry = TemplateRegistry()
_loaded = False


def get_registry() -> TemplateRegistry:
    """The shared registry, with the built-in templates imported on first use."""
    global _loaded
    if not _loaded:
        _loaded = True
        importlib.import_module("sceneforge.engine.templates")
    return _registry


def template(
    *,
    domain: str,
    style: str,
    fields: tuple[FieldRange, ...] = (),
    default: bool = False,
    description: str = "",
):
    """Decorator to register a scene builder."""

    def decorator(fn: Callable[["BuildContext", "LayoutParams"], "Scene"]):
        spec = TemplateSpec(
            domain=domain,
            style=style,
            fn=fn,
            fields=fields,
            default=default,
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
