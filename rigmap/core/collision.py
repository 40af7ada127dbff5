# rigmap/core/collision.py
"""
Collision test of a candidate bubble against the placed set.
A candidate is valid iff every placed bubble is at distance >= its separation;
exactly equal counts as valid. Separation is either one fixed distance or, by
default, scaled from the radius sum of the candidate and each placed bubble.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Union

import numpy as np

from rigmap.core.config import BUBBLE_RADIUS, MIN_SEPARATION_FACTOR
from rigmap.core.geometry import is_finite_point
from rigmap.core.types import PlacedBubble, Point

logger = logging.getLogger(__name__)

# Scalar, or one value per obstacle row of obstacle_array
Separation = Union[float, np.ndarray]


def min_separation_for(radius: float, factor: float = MIN_SEPARATION_FACTOR) -> float:
    """Minimum centre-to-centre distance for bubbles of the given radius."""
    return factor * radius


def pairwise_separation(
    obstacle_radii: np.ndarray,
    bubble_radius: float,
    factor: float = MIN_SEPARATION_FACTOR,
) -> np.ndarray:
    """
    Per-obstacle minimum distance for a bubble of bubble_radius:
    factor / 2 * (obstacle radius + bubble_radius). With equal radii this is
    min_separation_for(bubble_radius); with the default factor it is the radius sum.
    """
    return 0.5 * factor * (np.asarray(obstacle_radii, dtype=float) + bubble_radius)


def _is_malformed(b: Any) -> bool:
    return b is None or not is_finite_point(getattr(b, "position", None))


def _usable_radius(b: PlacedBubble) -> float:
    try:
        r = float(b.radius)
    except (TypeError, ValueError):
        r = math.nan
    if not math.isfinite(r) or r < 0:
        logger.warning("Placed bubble %r has unusable radius %r; treating it as 0", b.id, b.radius)
        return 0.0
    return r


def malformed_obstacles(placed: list[PlacedBubble]) -> list[str]:
    """Ids of placed entries with a missing or non-finite position."""
    return [getattr(b, "id", None) for b in placed if _is_malformed(b)]


def obstacle_array(placed: list[PlacedBubble]) -> tuple[np.ndarray, list[str], np.ndarray]:
    """
    (N, 2) positions of well-formed obstacles, their ids and their (N,) radii.
    Malformed ones are logged and skipped.
    """
    coords: list[Point] = []
    ids: list[str] = []
    radii: list[float] = []
    for b in placed:
        if _is_malformed(b):
            logger.warning(
                "Ignoring placed bubble %r with malformed position %r",
                getattr(b, "id", None),
                getattr(b, "position", None),
            )
            continue
        coords.append((float(b.position[0]), float(b.position[1])))
        ids.append(b.id)
        radii.append(_usable_radius(b))
    if not coords:
        return np.zeros((0, 2)), ids, np.zeros(0)
    return np.asarray(coords, dtype=float), ids, np.asarray(radii, dtype=float)


def _distances(candidate: Point, obstacles: np.ndarray) -> np.ndarray:
    if obstacles.shape[0] == 0:
        return np.zeros(0)
    diff = obstacles - np.asarray(candidate, dtype=float)
    return np.hypot(diff[:, 0], diff[:, 1])


def _separation(
    min_separation: float | None,
    radii: np.ndarray,
    bubble_radius: float,
) -> Separation:
    if min_separation is not None:
        return min_separation
    return pairwise_separation(radii, bubble_radius)


def is_clear(candidate: Point, obstacles: np.ndarray, min_separation: Separation) -> bool:
    """is_valid_placement against a prebuilt obstacle array (see obstacle_array)."""
    if not is_finite_point(candidate):
        return False
    return bool(np.all(_distances(candidate, obstacles) >= min_separation))


def is_valid_placement(
    candidate: Any,
    placed: list[PlacedBubble],
    min_separation: float | None = None,
    bubble_radius: float = BUBBLE_RADIUS,
) -> bool:
    """
    True if candidate keeps at least min_separation from every placed bubble.
    Without min_separation, each placed bubble needs pairwise_separation from a
    candidate of bubble_radius. A None / non-finite candidate is never valid.
    """
    if not is_finite_point(candidate):
        return False
    if not placed:
        return True
    obstacles, _, radii = obstacle_array(placed)
    return is_clear(candidate, obstacles, _separation(min_separation, radii, bubble_radius))


def find_conflicts(
    candidate: Point,
    placed: list[PlacedBubble],
    min_separation: float | None = None,
    bubble_radius: float = BUBBLE_RADIUS,
) -> list[str]:
    """Ids of placed bubbles closer than the required separation to candidate."""
    if not is_finite_point(candidate) or not placed:
        return []
    obstacles, ids, radii = obstacle_array(placed)
    d = _distances(candidate, obstacles)
    sep = _separation(min_separation, radii, bubble_radius)
    return [ids[i] for i in np.flatnonzero(d < sep)]
