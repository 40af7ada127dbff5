# rigmap/core/metrics.py
"""
Layout quality metrics: separation between bubbles, connector lengths,
connector crossings, bounds violations.
"""

from __future__ import annotations

import numpy as np

from rigmap.core.bounds import is_within_bounds
from rigmap.core.geometry import segment_length, segments_cross
from rigmap.core.types import BoundsRegion, LayoutSummary, Point


def min_pairwise_distance(points: list[Point]) -> float | None:
    """Smallest distance between any two points; None for fewer than two."""
    if len(points) < 2:
        return None
    xy = np.asarray(points, dtype=float)
    diff = xy[:, None, :] - xy[None, :, :]
    d = np.hypot(diff[..., 0], diff[..., 1])
    iu = np.triu_indices(len(points), k=1)
    return float(d[iu].min())


def count_connector_crossings(summary: LayoutSummary) -> int:
    """Number of connector pairs that cross each other."""
    segs = [r.connector for r in summary.results]
    n = 0
    for i in range(len(segs)):
        for j in range(i + 1, len(segs)):
            if segments_cross(segs[i], segs[j]):
                n += 1
    return n


def layout_metrics(summary: LayoutSummary, region: BoundsRegion | None = None) -> dict:
    """Summary metrics for reports and the CLI."""
    positions = [r.position for r in summary.results]
    lengths = [segment_length(r.connector) for r in summary.results]
    min_sep = min_pairwise_distance(positions)
    return {
        "n_anchors": summary.n_anchors,
        "success_count": summary.success_count,
        "failed_count": len(summary.failures),
        "first_pass_failed_count": len(summary.first_pass_failed_ids),
        "retried_placed_count": sum(1 for r in summary.results if r.pass_index > 0),
        "min_bubble_separation": round(min_sep, 6) if min_sep is not None else None,
        "mean_connector_length": round(float(np.mean(lengths)), 6) if lengths else None,
        "max_connector_length": round(float(np.max(lengths)), 6) if lengths else None,
        "connector_crossings": count_connector_crossings(summary),
        "out_of_bounds": sum(1 for p in positions if not is_within_bounds(p, region)),
    }
