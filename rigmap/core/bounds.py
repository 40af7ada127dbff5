# rigmap/core/bounds.py
"""
Rectangular bounds filter for bubble candidates (x = lng, y = lat). Edges inclusive.
"""

from __future__ import annotations

from typing import Any

from rigmap.core.config import MAP_BOUNDS
from rigmap.core.geometry import is_finite_point
from rigmap.core.types import BoundsRegion, Point

DEFAULT_REGION: BoundsRegion = BoundsRegion.from_dict(MAP_BOUNDS)


def is_within_bounds(candidate: Any, region: BoundsRegion | None) -> bool:
    """True if candidate lies inside region. No region means unbounded."""
    if not is_finite_point(candidate):
        return False
    if region is None:
        return True
    x, y = float(candidate[0]), float(candidate[1])
    return region.min_lng <= x <= region.max_lng and region.min_lat <= y <= region.max_lat


def filter_in_bounds(candidates: list[Point], region: BoundsRegion | None) -> list[Point]:
    """Keep candidates inside region, preserving order."""
    return [c for c in candidates if is_within_bounds(c, region)]
