"""Tests for rigmap.core.metrics (separation, connector lengths, crossings)."""

from __future__ import annotations

import pytest

from rigmap.core.metrics import count_connector_crossings, layout_metrics, min_pairwise_distance
from rigmap.core.types import Anchor, BoundsRegion, LayoutSummary, PlacedBubble, PlacementResult


def _placed(id_: str, anchor: tuple[float, float], bubble: tuple[float, float]) -> PlacementResult:
    return PlacementResult(
        anchor=Anchor(id=id_, lat=anchor[1], lng=anchor[0]),
        bubble=PlacedBubble(id=id_, position=bubble, radius=1.0),
        connector=(anchor, bubble),
    )


def _summary(results: list[PlacementResult]) -> LayoutSummary:
    return LayoutSummary(
        results=results,
        failures=[],
        placed=[r.bubble for r in results],
        states=[(r.anchor_id, "placed") for r in results],
    )


def test_min_pairwise_distance() -> None:
    assert min_pairwise_distance([]) is None
    assert min_pairwise_distance([(0.0, 0.0)]) is None
    assert min_pairwise_distance([(0.0, 0.0), (3.0, 4.0), (10.0, 0.0)]) == pytest.approx(5.0)


def test_crossing_connectors_counted() -> None:
    crossing = _summary([
        _placed("a", (0.0, 0.0), (2.0, 2.0)),
        _placed("b", (0.0, 2.0), (2.0, 0.0)),
    ])
    assert count_connector_crossings(crossing) == 1
    apart = _summary([
        _placed("a", (0.0, 0.0), (0.0, 1.0)),
        _placed("b", (5.0, 0.0), (5.0, 1.0)),
    ])
    assert count_connector_crossings(apart) == 0


def test_layout_metrics() -> None:
    s = _summary([
        _placed("a", (0.0, 0.0), (0.0, 1.0)),
        _placed("b", (5.0, 0.0), (5.0, 3.0)),
    ])
    m = layout_metrics(s, BoundsRegion(min_lat=0, max_lat=2, min_lng=0, max_lng=10))
    assert m["success_count"] == 2
    assert m["failed_count"] == 0
    assert m["mean_connector_length"] == pytest.approx(2.0)
    assert m["max_connector_length"] == pytest.approx(3.0)
    assert m["out_of_bounds"] == 1
    assert m["min_bubble_separation"] == pytest.approx(((5.0 ** 2) + 4.0) ** 0.5, rel=1e-5)


def test_layout_metrics_empty() -> None:
    m = layout_metrics(_summary([]))
    assert m["n_anchors"] == 0
    assert m["min_bubble_separation"] is None
    assert m["mean_connector_length"] is None
