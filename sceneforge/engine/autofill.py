"""Auto-fill: brief -> (domain, style, seed) -> motif set -> best scene mother."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from sceneforge.engine.catalog import MotifCatalog, pick_motifs
from sceneforge.engine.selector import Candidate, CandidateSelector
from sceneforge.models.brief import Brief

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "glass"
DEFAULT_DOMAIN = "payments"

# First match wins, in this order
STYLE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("paper", re.compile(r"\b(paper|journal|doodle|notebook|sketch|handwritten|sticky)\b")),
    ("glow", re.compile(r"\b(glow|gradient|neon|orbs|electric|ai)\b")),
    ("glass", re.compile(r"\b(glass|framer|workshop|saas|modern|minimal|premium)\b")),
)

# Each matching pattern adds 2 to its domain
DOMAIN_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("payments", re.compile(r"\b(stripe|payment|payments|charge|receipt|invoice|refund|payout|payroll)\b")),
    ("portal", re.compile(r"\b(portal|customer|profile|order|orders|status|support|chat)\b")),
    ("booking", re.compile(r"\b(booking|availability|time slot|timeslot|schedule|duration|service area)\b")),
    ("payments", re.compile(r"支付|收据|发票|结算|提成|工时|薪资")),
    ("portal", re.compile(r"客户|门户|订单|工单|状态|消息|客服")),
    ("booking", re.compile(r"预约|时间段|时长|服务区域|满单")),
)
DOMAIN_ORDER = ("payments", "portal", "booking")


def _blob(parts: Iterable[str | None]) -> str:
    return " ".join(str(p or "").lower() for p in parts)


def _beats(brief: Brief) -> list[str | None]:
    return [b.text for b in brief.story.beats]


def detect_style(brief: Brief, forced: str | None = None) -> str:
    if forced:
        return forced
    blob = _blob(
        [brief.style.illustration_style, brief.style.palette_hint, brief.intent.tone]
        + list(brief.intent.keywords)
        + _beats(brief)
        + list(brief.layout.slots.values())
    )
    for style, pattern in STYLE_PATTERNS:
        if pattern.search(blob):
            return style
    return DEFAULT_STYLE


def detect_domain(brief: Brief, forced: str | None = None) -> str:
    if forced:
        return forced
    blob = _blob(
        [brief.intent.primary_goal, brief.intent.audience]
        + list(brief.intent.keywords)
        + _beats(brief)
        + list(brief.layout.slots.values())
    )
    scores = dict.fromkeys(DOMAIN_ORDER, 0)
    for domain, pattern in DOMAIN_PATTERNS:
        if pattern.search(blob):
            scores[domain] += 2
    best = max(DOMAIN_ORDER, key=lambda d: scores[d])
    return best if scores[best] > 0 else DEFAULT_DOMAIN


def resolve_seed(brief: Brief, forced: int | None = None) -> int:
    if forced is not None:
        return forced
    if brief.meta.seed is not None:
        return brief.meta.seed
    return 1


@dataclass
class AutoFillResult:
    domain: str
    style: str
    seed: int
    motifs: list[str]
    best: Candidate


def auto_fill(
    brief: Brief,
    catalog: MotifCatalog,
    *,
    domain: str | None = None,
    style: str | None = None,
    seed: int | None = None,
    candidates: int | None = None,
    selector: CandidateSelector | None = None,
) -> AutoFillResult:
    """Pick domain/style/seed for the brief and generate its best scene."""
    style = detect_style(brief, style)
    domain = detect_domain(brief, domain)
    seed = resolve_seed(brief, seed)
    motifs = pick_motifs(catalog, domain, style, seed)
    logger.info("Auto-fill %s/%s seed=%d with %d motifs", domain, style, seed, len(motifs))

    selector = selector or CandidateSelector(catalog=catalog)
    best = selector.generate(domain, style, seed, motifs, candidates)
    return AutoFillResult(domain=domain, style=style, seed=seed, motifs=motifs, best=best)
