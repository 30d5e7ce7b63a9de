"""Engine configuration — candidate search bounds and the scoring rule table."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GenerationConfig:
    """Controls how many candidate layouts are sampled per request."""

    default_candidates: int = 40
    # Hard bounds on n; the upper one caps worst-case latency
    min_candidates: int = 1
    max_candidates: int = 200

    def clamp_candidates(self, n: int | None) -> int:
        if n is None:
            n = self.default_candidates
        return max(self.min_candidates, min(self.max_candidates, int(n)))


@dataclass(frozen=True)
class ScoringRules:
    """Weights and thresholds of the layout heuristics.

    The defaults are tuned values that existing scenes were selected with;
    changing them changes which candidate wins for a given seed.
    """

    baseline: float = 1000.0

    # Key objects, looked up by top-level node id (first present wins)
    panel_ids: tuple[str, ...] = ("panel", "portal_panel")
    person_ids: tuple[str, ...] = ("person", "finance", "customer", "owner")

    # Out-of-canvas: per key object, per violated edge
    canvas_margin: float = 8.0
    out_of_canvas_penalty: float = -50.0

    # Panel/person overlap ratio (overlap area / person area).
    # Bands are (upper bound, delta) checked in order; above the last band the
    # excess rule applies, otherwise the target bonus.
    overlap_bands: tuple[tuple[float, float], ...] = field(
        default_factory=lambda: ((0.05, -160.0), (0.10, -80.0))
    )
    overlap_excess_threshold: float = 0.50
    overlap_excess_delta: float = -140.0
    overlap_target_bonus: float = 40.0

    # Horizontal distance between panel and person centers
    center_distance_free: float = 360.0
    center_distance_divisor: float = 4.0
    center_distance_cap: float = 120.0

    # Background nodes intruding into the title band
    title_band_height: float = 150.0
    title_band_min_area: float = 10.0
    title_band_penalty: float = -40.0

    # Pairwise background-prop overlap (overlap / smaller area)
    prop_overlap_threshold: float = 0.02
    prop_overlap_weight: float = -280.0

    # Clutter
    clutter_limit: int = 9
    clutter_penalty: float = -45.0

    # Area-weighted centroid of background nodes vs panel center
    # The panel itself is left out of the centroid
    balance_exclude_ids: tuple[str, ...] = ("panel",)
    balance_divisor: float = 3.0
    balance_cap: float = 120.0
