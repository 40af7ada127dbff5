"""
Deterministic tests for geometry helpers: distances, connectors, crossings, region polygon.
"""

from __future__ import annotations

import math

import pytest

from rigmap.core.geometry import (
    chebyshev_distance,
    connector_segment,
    distance,
    is_finite_point,
    offset_point,
    point_segment_distance,
    region_to_polygon,
    segment_length,
    segments_cross,
)
from rigmap.core.types import BoundsRegion


def test_distance_and_chebyshev() -> None:
    assert distance((0.0, 0.0), (3.0, 4.0)) == 5.0
    assert chebyshev_distance((0.0, 0.0), (3.0, -4.0)) == 4.0
    assert offset_point((1.0, 1.0), 2.0, -1.0) == (3.0, 0.0)


def test_is_finite_point() -> None:
    assert is_finite_point((1.0, 2.0))
    assert not is_finite_point(None)
    assert not is_finite_point((math.nan, 1.0))
    assert not is_finite_point((1.0, math.inf))
    assert not is_finite_point("ab")
    assert not is_finite_point((1.0, 2.0, 3.0))


def test_connector_segment_runs_anchor_to_bubble() -> None:
    seg = connector_segment((10, 10), (9, 11))
    assert seg == ((10.0, 10.0), (9.0, 11.0))
    assert segment_length(seg) == pytest.approx(math.sqrt(2))


def test_point_segment_distance() -> None:
    seg = ((0.0, 0.0), (10.0, 0.0))
    assert point_segment_distance((5.0, 3.0), seg) == pytest.approx(3.0)
    # Beyond the end: distance to endpoint
    assert point_segment_distance((13.0, 4.0), seg) == pytest.approx(5.0)
    # Degenerate segment
    assert point_segment_distance((3.0, 4.0), ((0.0, 0.0), (0.0, 0.0))) == pytest.approx(5.0)


def test_segments_cross() -> None:
    a = ((0.0, 0.0), (2.0, 2.0))
    b = ((0.0, 2.0), (2.0, 0.0))
    assert segments_cross(a, b) is True
    # Parallel, disjoint
    assert segments_cross(((0.0, 0.0), (1.0, 0.0)), ((0.0, 1.0), (1.0, 1.0))) is False


def test_segments_sharing_anchor_do_not_cross() -> None:
    # Two connectors from the same anchor
    a = ((10.0, 10.0), (9.0, 9.0))
    b = ((10.0, 10.0), (11.0, 9.0))
    assert segments_cross(a, b) is False
    # Same anchor, collinear overlap counts
    c = ((10.0, 10.0), (12.0, 10.0))
    d = ((10.0, 10.0), (11.0, 10.0))
    assert segments_cross(c, d) is True


def test_region_to_polygon() -> None:
    region = BoundsRegion(min_lat=20, max_lat=32, min_lng=34, max_lng=56)
    poly = region_to_polygon(region)
    assert poly.bounds == (34.0, 20.0, 56.0, 32.0)
    assert poly.area == pytest.approx(12 * 22)
