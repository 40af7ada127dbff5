"""
Zoom level parsing and zoom-dependent bubble radius. A view change re-runs the
whole layout with the radius for the new zoom.
"""

from __future__ import annotations

import logging

from rigmap.core.config import (
    ZOOM_LEVELS_DEFAULT,
    ZOOM_RADIUS_FALLBACK,
    ZOOM_RADIUS_THRESHOLDS,
)

logger = logging.getLogger(__name__)


def parse_zoom_levels(s: str) -> list[int]:
    """
    Zoom levels from a comma list such as '6,8,10', in the given order with repeats
    dropped. Parts that are not non-negative integers are skipped with a warning.
    Empty input, or nothing usable, gives ZOOM_LEVELS_DEFAULT.
    """
    levels: list[int] = []
    for part in (s or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            zoom = int(part)
        except ValueError:
            logger.warning("Skipping zoom level %r: not an integer", part)
            continue
        if zoom < 0:
            logger.warning("Skipping zoom level %d: negative", zoom)
            continue
        if zoom not in levels:
            levels.append(zoom)
    return levels or list(ZOOM_LEVELS_DEFAULT)


def bubble_radius_for_zoom(zoom: float) -> float:
    """Bubble radius (degrees) for a map zoom level; closer zoom, smaller radius."""
    for min_zoom, radius in ZOOM_RADIUS_THRESHOLDS:
        if zoom >= min_zoom:
            return radius
    return ZOOM_RADIUS_FALLBACK
