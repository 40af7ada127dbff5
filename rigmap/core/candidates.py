# rigmap/core/candidates.py
"""
Candidate bubble positions around an anchor.
Square strategy: rings of a lattice at Chebyshev distance 1..max_rings, scanned
dx outer / dy inner, center skipped. Spiral strategy: polar spiral with a
growing radius. Both are pure functions of their inputs.
"""

from __future__ import annotations

import math

import numpy as np

from rigmap.core.config import (
    MAX_SPIRAL_ATTEMPTS,
    SPIRAL_ANGLE_STEP_DEG,
    SPIRAL_GROWTH_PERIOD,
)
from rigmap.core.error_codes import ConfigurationError
from rigmap.core.geometry import offset_point
from rigmap.core.types import Point


def _check_step(step_size: float) -> None:
    if not isinstance(step_size, (int, float)) or not math.isfinite(step_size) or step_size <= 0:
        raise ConfigurationError(f"step_size must be a positive number, got {step_size!r}")


def ring_size(r: int) -> int:
    """Number of lattice points on square ring r (8r for r >= 1)."""
    return 8 * r if r >= 1 else 0


def ring_of(index: int) -> int:
    """Ring number of the index-th square candidate (0-based)."""
    if index < 0:
        raise ValueError("index must be >= 0")
    r = 1
    while index >= ring_size(r):
        index -= ring_size(r)
        r += 1
    return r


def generate_candidates(
    anchor: Point,
    step_size: float,
    max_rings: int,
) -> list[Point]:
    """
    Square rings around anchor, closest ring first.
    Ring r holds every lattice point with max(|dx|, |dy|) == r, ordered by dx then dy.
    max_rings <= 0 gives an empty list.
    """
    _check_step(step_size)
    if max_rings <= 0:
        return []
    ax, ay = float(anchor[0]), float(anchor[1])
    out: list[Point] = []
    for r in range(1, int(max_rings) + 1):
        for dx in range(-r, r + 1):
            for dy in range(-r, r + 1):
                if max(abs(dx), abs(dy)) != r:
                    continue
                out.append(offset_point((ax, ay), dx * step_size, dy * step_size))
    return out


def generate_spiral_candidates(
    anchor: Point,
    step_size: float,
    max_attempts: int = MAX_SPIRAL_ATTEMPTS,
) -> list[Point]:
    """
    Polar spiral: candidate i sits at angle (i + 1) * SPIRAL_ANGLE_STEP_DEG and
    distance step_size * (1 + i / SPIRAL_GROWTH_PERIOD). Used for screen-space labels.
    """
    _check_step(step_size)
    if max_attempts <= 0:
        return []
    ax, ay = float(anchor[0]), float(anchor[1])
    angle_step = math.radians(SPIRAL_ANGLE_STEP_DEG)
    out: list[Point] = []
    for i in range(int(max_attempts)):
        angle = angle_step * (i + 1)
        dist = step_size * (1 + i / SPIRAL_GROWTH_PERIOD)
        out.append(offset_point((ax, ay), math.cos(angle) * dist, math.sin(angle) * dist))
    return out


def candidates_for_strategy(
    strategy: str,
    anchor: Point,
    step_size: float,
    max_rings: int,
) -> list[Point]:
    """
    Dispatch by strategy name. For "spiral", max_rings scales the attempt budget
    so that retry widening also widens the spiral.
    """
    if strategy == "square":
        return generate_candidates(anchor, step_size, max_rings)
    if strategy == "spiral":
        if max_rings <= 0:
            _check_step(step_size)
            return []
        return generate_spiral_candidates(anchor, step_size, SPIRAL_GROWTH_PERIOD * 2 * int(max_rings))
    raise ConfigurationError(f"Unknown candidate strategy: {strategy!r}")


def candidate_array(candidates: list[Point]) -> np.ndarray:
    """Candidates as an (N, 2) float array."""
    if not candidates:
        return np.zeros((0, 2))
    return np.asarray(candidates, dtype=float)
