# rigmap/core/placement.py
"""
Single-anchor placement: walk candidates in order, return the first one that is
inside the region and clear of the placed set. Greedy first-fit; the only side
effect is appending the new bubble to the caller's placed list.
"""

from __future__ import annotations

import logging
import math

from rigmap.core.bounds import is_within_bounds
from rigmap.core.candidates import candidates_for_strategy, ring_of
from rigmap.core.collision import is_clear, obstacle_array, pairwise_separation
from rigmap.core.config import BUBBLE_RADIUS, DEFAULT_STRATEGY
from rigmap.core.error_codes import (
    INVALID_ANCHOR,
    INVALID_CONFIG,
    PLACEMENT_EXHAUSTED,
    ConfigurationError,
)
from rigmap.core.geometry import connector_segment, is_finite_point
from rigmap.core.types import (
    Anchor,
    BoundsRegion,
    PlacedBubble,
    PlacedSet,
    PlacementFailure,
    PlacementOutcome,
    PlacementResult,
    Point,
)

logger = logging.getLogger(__name__)


def _check_config(step_size: float, max_rings: int, bubble_radius: float) -> str | None:
    """Return a problem description, or None if the settings are usable."""
    if not isinstance(step_size, (int, float)) or not math.isfinite(step_size) or step_size <= 0:
        return f"step_size must be > 0 (got {step_size!r})"
    if not isinstance(max_rings, int) or max_rings <= 0:
        return f"max_rings must be a positive integer (got {max_rings!r})"
    if not math.isfinite(bubble_radius) or bubble_radius < 0:
        return f"bubble_radius must be >= 0 (got {bubble_radius!r})"
    return None


def _search(
    candidates: list[Point],
    placed: PlacedSet,
    region: BoundsRegion | None,
    min_separation: float | None,
    bubble_radius: float,
) -> tuple[int | None, list[str]]:
    """
    Index of the first usable candidate, or None. Also returns warnings.
    Collision-free candidates rejected only by the region are counted for the warning.
    """
    warnings: list[str] = []
    obstacles, _, radii = obstacle_array(placed)
    if min_separation is None:
        min_separation = pairwise_separation(radii, bubble_radius)
    blocked_only_by_region = 0
    for i, cand in enumerate(candidates):
        clear = is_clear(cand, obstacles, min_separation)
        if region is not None and not is_within_bounds(cand, region):
            if clear:
                blocked_only_by_region += 1
            continue
        if clear:
            return i, warnings
    if blocked_only_by_region:
        warnings.append(
            f"{blocked_only_by_region} collision-free candidate(s) rejected as out of bounds."
        )
    return None, warnings


def place_bubble(
    anchor: Anchor,
    placed: PlacedSet,
    step_size: float,
    max_rings: int,
    region: BoundsRegion | None = None,
    bubble_radius: float = BUBBLE_RADIUS,
    min_separation: float | None = None,
    strategy: str = DEFAULT_STRATEGY,
    pass_index: int = 0,
) -> PlacementOutcome:
    """
    Place one bubble for anchor. On success the bubble is appended to placed and a
    PlacementResult is returned; otherwise a PlacementFailure and placed is untouched.
    Without min_separation each placed bubble is kept at
    MIN_SEPARATION_FACTOR / 2 * (its radius + bubble_radius).
    """
    problem = _check_config(step_size, max_rings, bubble_radius)
    if problem is not None:
        logger.debug("Anchor %s: invalid config: %s", anchor.id, problem)
        return PlacementFailure(anchor=anchor, reason=INVALID_CONFIG, pass_index=pass_index, warnings=[problem])

    anchor_pt = anchor.xy
    if not is_finite_point(anchor_pt):
        return PlacementFailure(
            anchor=anchor,
            reason=INVALID_ANCHOR,
            pass_index=pass_index,
            warnings=[f"Anchor coordinates not finite: lat={anchor.lat!r}, lng={anchor.lng!r}"],
        )

    try:
        candidates = candidates_for_strategy(strategy, anchor_pt, step_size, max_rings)
    except ConfigurationError as exc:
        return PlacementFailure(anchor=anchor, reason=INVALID_CONFIG, pass_index=pass_index, warnings=[str(exc)])

    idx, warnings = _search(candidates, placed, region, min_separation, bubble_radius)
    if idx is None:
        logger.debug(
            "Anchor %s: no slot among %d candidates (pass %d)", anchor.id, len(candidates), pass_index
        )
        return PlacementFailure(
            anchor=anchor,
            reason=PLACEMENT_EXHAUSTED,
            pass_index=pass_index,
            warnings=warnings + [f"No free slot among {len(candidates)} candidates."],
        )

    pos = candidates[idx]
    bubble = PlacedBubble(id=anchor.id, position=pos, radius=bubble_radius)
    placed.append(bubble)
    return PlacementResult(
        anchor=anchor,
        bubble=bubble,
        connector=connector_segment(anchor_pt, pos),
        ring=ring_of(idx) if strategy == "square" else 0,
        candidate_index=idx,
        pass_index=pass_index,
        warnings=warnings,
    )
