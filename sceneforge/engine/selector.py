"""CandidateSelector — sample, build, score, keep the best."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sceneforge.engine.catalog import MotifCatalog
from sceneforge.engine.config import GenerationConfig
from sceneforge.engine.registry import TemplateRegistry, get_registry
from sceneforge.engine.sampler import LayoutParams, LayoutSampler
from sceneforge.engine.scorer import LayoutScorer
from sceneforge.engine.templates.base import BuildContext
from sceneforge.models.scene import AutoMeta, Scene

logger = logging.getLogger(__name__)


@dataclass
class Candidate:
    index: int
    layout: LayoutParams
    scene: Scene
    score: float


class CandidateSelector:
    """Enumerate-and-score over a bounded sample. Ties keep the earliest candidate."""

    def __init__(
        self,
        catalog: MotifCatalog | None = None,
        registry: TemplateRegistry | None = None,
        scorer: LayoutScorer | None = None,
        config: GenerationConfig | None = None,
    ) -> None:
        self.catalog = catalog
        self.registry = registry or get_registry()
        self.sampler = LayoutSampler(self.registry)
        self.scorer = scorer or LayoutScorer()
        self.config = config or GenerationConfig()

    def candidates(
        self,
        domain: str,
        style: str,
        seed: int,
        motifs: Iterable[str],
        n: int | None = None,
    ) -> list[Candidate]:
        """Every candidate of the batch, in sampling order."""
        count = self.config.clamp_candidates(n)
        spec = self.registry.resolve(domain, style)
        ctx = BuildContext(seed=seed, motifs=tuple(motifs), catalog=self.catalog)

        out: list[Candidate] = []
        for i, layout in enumerate(self.sampler.sample(domain, style, seed, count)):
            scene = spec.fn(ctx, layout)
            score = self.scorer.score(scene)
            logger.debug("Candidate %d: score=%.1f layout=%s", i, score, layout.to_meta())
            out.append(Candidate(index=i, layout=layout, scene=scene, score=score))
        return out

    def generate(
        self,
        domain: str,
        style: str,
        seed: int,
        motifs: Iterable[str],
        n: int | None = None,
    ) -> Candidate:
        batch = self.candidates(domain, style, seed, motifs, n)
        best = batch[0]
        for cand in batch[1:]:
            if cand.score > best.score:
                best = cand

        best.scene.meta.auto = AutoMeta(
            domain=domain,
            style=style,
            seed=seed,
            candidates=len(batch),
            score=best.score,
            layout=best.layout.to_meta(),
        )
        logger.info(
            "Selected candidate %d/%d for %s/%s seed=%d score=%.1f",
            best.index, len(batch), domain, style, seed, best.score,
        )
        return best
