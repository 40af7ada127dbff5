# rigmap/core/geometry.py
"""
Geometry helpers: point distances, connector segments, segment crossing,
region rectangle. Points are plain (x, y) tuples; shapely is used where a
segment or polygon is needed.
"""

from __future__ import annotations

import math
from typing import Any

from shapely.geometry import LineString, Point as ShapelyPoint, Polygon, box

from rigmap.core.types import BoundsRegion, Point, Segment


def is_finite_point(p: Any) -> bool:
    """True if p is an (x, y) pair of finite numbers."""
    if p is None:
        return False
    try:
        x, y = p
        return math.isfinite(float(x)) and math.isfinite(float(y))
    except (TypeError, ValueError):
        return False


def distance(a: Point, b: Point) -> float:
    """Euclidean distance."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def chebyshev_distance(a: Point, b: Point) -> float:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def offset_point(p: Point, dx: float, dy: float) -> Point:
    return (p[0] + dx, p[1] + dy)


def connector_segment(anchor: Point, bubble: Point) -> Segment:
    """Straight stick from the anchor to its bubble."""
    return ((float(anchor[0]), float(anchor[1])), (float(bubble[0]), float(bubble[1])))


def segment_to_linestring(seg: Segment) -> LineString:
    return LineString([seg[0], seg[1]])


def segment_length(seg: Segment) -> float:
    return distance(seg[0], seg[1])


def point_segment_distance(p: Point, seg: Segment) -> float:
    """Shortest distance from p to the closed segment."""
    if seg[0] == seg[1]:
        return distance(p, seg[0])
    return float(segment_to_linestring(seg).distance(ShapelyPoint(p)))


def segments_cross(a: Segment, b: Segment) -> bool:
    """
    True if the two segments intersect anywhere other than a shared endpoint.
    Two connectors meeting at the same anchor do not count as a crossing.
    """
    la = segment_to_linestring(a)
    lb = segment_to_linestring(b)
    if not la.intersects(lb):
        return False
    shared = {a[0], a[1]} & {b[0], b[1]}
    if not shared:
        return True
    inter = la.intersection(lb)
    if inter.geom_type == "Point":
        return (inter.x, inter.y) not in shared
    # Collinear overlap
    return inter.length > 0


def region_to_polygon(region: BoundsRegion) -> Polygon:
    """Rectangle (x = lng, y = lat)."""
    return box(region.min_lng, region.min_lat, region.max_lng, region.max_lat)
