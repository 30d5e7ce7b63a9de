"""LayoutSampler — draws candidate layout parameters from a seeded stream."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sceneforge.engine.registry import FieldRange, TemplateRegistry, get_registry
from sceneforge.engine.rng import Mulberry32, layout_seed

logger = logging.getLogger(__name__)

CORE_FIELDS = ("panel_x", "panel_y", "panel_w", "panel_h", "person_x")


class LayoutParams(BaseModel):
    """Panel box, person x, and any template-specific offsets."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    panel_x: int
    panel_y: int
    panel_w: int
    panel_h: int
    person_x: int
    offsets: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_fields(cls, values: Mapping[str, int]) -> LayoutParams:
        core = {name: values[name] for name in CORE_FIELDS}
        offsets = {k: v for k, v in values.items() if k not in CORE_FIELDS}
        return cls(**core, offsets=offsets)

    def offset(self, name: str, default: int = 0) -> int:
        return self.offsets.get(name, default)

    def to_meta(self) -> dict[str, Any]:
        """Flat camelCase record, in draw order, as embedded in ``meta.auto.layout``."""
        out: dict[str, Any] = {to_camel(name): getattr(self, name) for name in CORE_FIELDS}
        out.update({to_camel(k): v for k, v in self.offsets.items()})
        return out


class LayoutSampler:
    """Deterministic sampler: identical (domain, style, seed, n) gives identical layouts.

    The stream is seeded from the caller seed mixed with a hash of
    ``"<domain>:<style>"``, so changing style alone changes every draw.
    """

    def __init__(self, registry: TemplateRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def sample(self, domain: str, style: str, seed: int, n: int) -> list[LayoutParams]:
        spec = self.registry.resolve(domain, style)
        rand = Mulberry32(layout_seed(seed, domain, style))
        layouts = [self._draw(spec.fields, rand) for _ in range(n)]
        logger.debug("Sampled %d layouts for %s/%s seed=%d", n, domain, style, seed)
        return layouts

    @staticmethod
    def _draw(fields: tuple[FieldRange, ...], rand: Mulberry32) -> LayoutParams:
        drawn: dict[str, int] = {}
        for f in fields:
            lo, hi = f.draw_bounds(drawn)
            drawn[f.name] = f.clamp(rand.randint(lo, hi), drawn)
        return LayoutParams.from_fields(drawn)
