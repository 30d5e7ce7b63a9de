"""sceneforge layout engine: sample, build, score, select."""

from sceneforge.engine.autofill import auto_fill, detect_domain, detect_style
from sceneforge.engine.catalog import MotifCatalog, pick_motifs
from sceneforge.engine.config import GenerationConfig, ScoringRules
from sceneforge.engine.registry import get_registry, template
from sceneforge.engine.sampler import LayoutParams, LayoutSampler
from sceneforge.engine.scorer import LayoutScorer
from sceneforge.engine.selector import Candidate, CandidateSelector

__all__ = [
    "auto_fill",
    "detect_domain",
    "detect_style",
    "MotifCatalog",
    "pick_motifs",
    "GenerationConfig",
    "ScoringRules",
    "get_registry",
    "template",
    "LayoutParams",
    "LayoutSampler",
    "LayoutScorer",
    "Candidate",
    "CandidateSelector",
]
