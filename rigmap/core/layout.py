# rigmap/core/layout.py
"""
Multi-rig placement with retry. Anchors are placed in input order against one
shared placed set, so later rigs see earlier bubbles as obstacles. Rigs that
fail are retried with a widened search; rigs still failing are reported, never dropped.
"""

from __future__ import annotations

import logging
import math

from rigmap.core.config import (
    BUBBLE_RADIUS,
    DEFAULT_STRATEGY,
    MAX_RINGS,
    RETRY_MULTIPLIER,
    RETRY_PASSES,
    RETRY_WIDEN_RINGS,
    RETRY_WIDEN_STEP,
    STEP_SIZE,
)
from rigmap.core.error_codes import INVALID_CONFIG, TERMINAL_REASONS, user_message
from rigmap.core.placement import place_bubble
from rigmap.core.types import (
    Anchor,
    AnchorState,
    BoundsRegion,
    LayoutSummary,
    PlacedSet,
    PlacementFailure,
    PlacementResult,
)
from rigmap.core.zoom import bubble_radius_for_zoom

logger = logging.getLogger(__name__)


def widened_params(
    step_size: float,
    max_rings: int,
    retry_multiplier: float,
    pass_index: int,
    widen_step: bool = RETRY_WIDEN_STEP,
    widen_rings: bool = RETRY_WIDEN_RINGS,
) -> tuple[float, int]:
    """(step_size, max_rings) for a pass; pass 0 is the unwidened first pass."""
    factor = retry_multiplier ** pass_index
    step = step_size * factor if widen_step else step_size
    rings = max_rings
    if widen_rings and isinstance(max_rings, int) and max_rings > 0:
        rings = int(math.ceil(max_rings * factor))
    return step, rings


def _check_retry(retry_multiplier: float, retry_passes: int) -> str | None:
    """Return a problem description, or None if the retry settings are usable."""
    if not isinstance(retry_passes, int) or retry_passes < 0:
        return f"retry_passes must be a non-negative integer (got {retry_passes!r})"
    if not isinstance(retry_multiplier, (int, float)) or not math.isfinite(retry_multiplier) or retry_multiplier < 1.0:
        return f"retry_multiplier must be >= 1 (got {retry_multiplier!r})"
    return None


def place_all(
    anchors: list[Anchor],
    step_size: float = STEP_SIZE,
    max_rings: int = MAX_RINGS,
    retry_multiplier: float = RETRY_MULTIPLIER,
    retry_passes: int = RETRY_PASSES,
    region: BoundsRegion | None = None,
    bubble_radius: float = BUBBLE_RADIUS,
    min_separation: float | None = None,
    strategy: str = DEFAULT_STRATEGY,
    widen_step: bool = RETRY_WIDEN_STEP,
    widen_rings: bool = RETRY_WIDEN_RINGS,
    placed: PlacedSet | None = None,
) -> LayoutSummary:
    """
    Place every anchor. Returns LayoutSummary with results in input order and
    one failure per anchor that could not be placed after all retry passes.
    Pass placed to start from existing obstacles; it is appended to in place.
    Unusable retry settings fail every anchor with INVALID_CONFIG.
    """
    placed_set: PlacedSet = placed if placed is not None else []
    n = len(anchors)
    states: list[AnchorState] = ["pending"] * n
    outcomes: list[PlacementResult | PlacementFailure | None] = [None] * n
    first_pass_failed: list[str] = []

    todo = list(range(n))
    problem = _check_retry(retry_multiplier, retry_passes)
    if problem is not None:
        logger.warning("Invalid retry settings, no rig placed: %s", problem)
        for i in todo:
            outcomes[i] = PlacementFailure(anchor=anchors[i], reason=INVALID_CONFIG, warnings=[problem])
            states[i] = "failed"
            first_pass_failed.append(anchors[i].id)
        todo = []

    last_pass = retry_passes if problem is None else -1
    for pass_index in range(last_pass + 1):
        if not todo:
            break
        step, rings = widened_params(
            step_size, max_rings, retry_multiplier, pass_index,
            widen_step=widen_step, widen_rings=widen_rings,
        )
        if pass_index > 0:
            logger.info(
                "Retry pass %d: %d rig(s), step_size=%g, max_rings=%d",
                pass_index, len(todo), step, rings,
            )
        still_failing: list[int] = []
        for i in todo:
            out = place_bubble(
                anchors[i],
                placed_set,
                step,
                rings,
                region=region,
                bubble_radius=bubble_radius,
                min_separation=min_separation,
                strategy=strategy,
                pass_index=pass_index,
            )
            outcomes[i] = out
            if isinstance(out, PlacementResult):
                states[i] = "placed"
                continue
            if pass_index == 0:
                first_pass_failed.append(anchors[i].id)
            if out.reason in TERMINAL_REASONS or pass_index == retry_passes:
                states[i] = "failed"
            else:
                states[i] = "retry_pending"
                still_failing.append(i)
        todo = still_failing

    results: list[PlacementResult] = []
    failures: list[PlacementFailure] = []
    for i, out in enumerate(outcomes):
        if isinstance(out, PlacementResult):
            results.append(out)
        elif isinstance(out, PlacementFailure):
            failures.append(out)
            logger.warning(
                "Rig %s unplaced (%s): %s", out.anchor_id, out.reason, user_message(out.reason)
            )

    logger.info(
        "Layout: %d/%d rig(s) placed, %d failed on first pass, %d unplaced",
        len(results), n, len(first_pass_failed), len(failures),
    )
    return LayoutSummary(
        results=results,
        failures=failures,
        placed=placed_set,
        states=[(anchors[i].id, states[i]) for i in range(n)],
        first_pass_failed_ids=first_pass_failed,
    )


def relayout(
    anchors: list[Anchor],
    zoom: float,
    **kwargs,
) -> LayoutSummary:
    """
    Full re-run from an empty placed set after a view change. Bubble radius follows
    the zoom level (a bubble_radius argument is ignored); step_size defaults to that radius.
    """
    radius = bubble_radius_for_zoom(zoom)
    kwargs.pop("placed", None)
    if kwargs.pop("bubble_radius", None) is not None:
        logger.warning("relayout: bubble_radius ignored, zoom %s uses radius %g", zoom, radius)
    kwargs.setdefault("step_size", radius)
    return place_all(anchors, bubble_radius=radius, **kwargs)
