# rigmap/core/config.py
"""
Central configuration for rig bubble placement.
All tunable values live here; no magic numbers in other modules.
Distances are in degrees when working on lat/lng anchors, pixels for screen space.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
DEFAULT_RIGS_PATH: str = "data/rigs.json"
REPORTS_DIR: str = "reports"

# ----- Candidate search -----
STEP_SIZE: float = 0.05
"""Spatial increment per ring (degrees). Same as BUBBLE_RADIUS so rings sit one radius apart."""

MAX_RINGS: int = 3
"""Number of square rings searched around each anchor on the first pass."""

MAX_SPIRAL_ATTEMPTS: int = 60
"""Candidates produced by the polar spiral strategy."""

SPIRAL_ANGLE_STEP_DEG: float = 30.0
"""Angle advance per spiral candidate."""

SPIRAL_GROWTH_PERIOD: int = 6
"""Spiral distance grows by one step_size every this many candidates."""

CANDIDATE_STRATEGIES: tuple[str, ...] = ("square", "spiral")
DEFAULT_STRATEGY: str = "square"

# ----- Collision -----
BUBBLE_RADIUS: float = 0.05
"""Collision radius of one bubble (degrees, ~5 km)."""

MIN_SEPARATION_FACTOR: float = 2.0
"""min_separation = factor * radius; 2x keeps two bubbles of the same radius apart."""

# ----- Retry / fallback -----
RETRY_MULTIPLIER: float = 2.0
"""Widening factor applied on each retry pass."""

RETRY_PASSES: int = 1
"""Number of retry passes over anchors that failed. 0 disables retry."""

RETRY_WIDEN_STEP: bool = True
"""Multiply step_size by the retry multiplier on retry."""

RETRY_WIDEN_RINGS: bool = True
"""Multiply max_rings by the retry multiplier on retry (rounded up)."""

# ----- Bounds -----
MAP_BOUNDS: dict[str, float] = {
    "minLat": 20.0,
    "maxLat": 32.0,
    "minLng": 34.0,
    "maxLng": 56.0,
}
"""Permitted bubble region for the demo map (Arabian peninsula)."""

# ----- Zoom -----
ZOOM_RADIUS_THRESHOLDS: tuple[tuple[int, float], ...] = ((10, 0.01), (8, 0.05))
"""(min_zoom, radius) pairs checked in order; first match wins."""

ZOOM_RADIUS_FALLBACK: float = 0.1
"""Bubble radius below the lowest zoom threshold."""

ZOOM_LEVELS_DEFAULT: tuple[int, ...] = (6, 8, 10)

# ----- Output -----
SCHEMA_VERSION: str = "1.0"

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Root log level for the CLI. Set env LOG_LEVEL=DEBUG for per-candidate output."""
