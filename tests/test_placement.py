"""
Single-anchor placement: first-fit order, side effect on the placed set,
bounds-only failures, configuration failures.
"""

from __future__ import annotations

import math

import pytest

from rigmap.core.error_codes import INVALID_ANCHOR, INVALID_CONFIG, PLACEMENT_EXHAUSTED
from rigmap.core.geometry import distance
from rigmap.core.placement import place_bubble
from rigmap.core.types import Anchor, BoundsRegion, PlacedBubble, PlacementFailure, PlacementResult


def test_two_anchors_same_coordinate_get_separate_slots() -> None:
    placed: list[PlacedBubble] = []
    a1 = Anchor(id="A1", lat=10.0, lng=10.0)
    a2 = Anchor(id="A2", lat=10.0, lng=10.0)
    r1 = place_bubble(a1, placed, step_size=1.0, max_rings=3, bubble_radius=1.0, min_separation=2.0)
    r2 = place_bubble(a2, placed, step_size=1.0, max_rings=3, bubble_radius=1.0, min_separation=2.0)
    assert isinstance(r1, PlacementResult) and isinstance(r2, PlacementResult)
    # First ring candidate, never the anchor itself
    assert r1.position == (9.0, 9.0)
    assert r1.position != a1.xy
    assert r1.connector == ((10.0, 10.0), (9.0, 9.0))
    assert r1.ring == 1
    # First candidate at distance >= 2 from the first bubble
    assert r2.position == (9.0, 11.0)
    assert distance(r1.position, r2.position) >= 2.0
    assert [b.id for b in placed] == ["A1", "A2"]
    assert placed[0].radius == 1.0


def test_all_candidates_out_of_region_fails_without_mutation() -> None:
    region = BoundsRegion(min_lat=0.0, max_lat=9.0, min_lng=0.0, max_lng=9.0)
    existing = PlacedBubble(id="other", position=(50.0, 50.0), radius=1.0)
    placed = [existing]
    out = place_bubble(Anchor(id="R", lat=10.0, lng=10.0), placed, step_size=0.25, max_rings=3, region=region)
    assert isinstance(out, PlacementFailure)
    assert out.anchor_id == "R"
    assert out.reason == PLACEMENT_EXHAUSTED
    assert placed == [existing]
    assert any("out of bounds" in w for w in out.warnings)


def test_only_free_slots_outside_region_is_failure() -> None:
    # Obstacle blocks every in-region candidate; free candidates exist only east of max_lng.
    region = BoundsRegion(min_lat=9.0, max_lat=11.0, min_lng=8.5, max_lng=10.0)
    anchor = Anchor(id="R", lat=10.0, lng=10.0)
    obstacle = PlacedBubble(id="X", position=(9.5, 10.0), radius=1.0)

    placed = [obstacle]
    out = place_bubble(anchor, placed, step_size=1.0, max_rings=2, region=region, bubble_radius=1.0)
    assert isinstance(out, PlacementFailure)
    assert len(placed) == 1

    unbounded = [obstacle]
    ok = place_bubble(anchor, unbounded, step_size=1.0, max_rings=2, bubble_radius=1.0)
    assert isinstance(ok, PlacementResult)
    assert ok.position[0] > region.max_lng or ok.position[1] < region.min_lat or ok.position[1] > region.max_lat


def test_result_respects_region_when_possible() -> None:
    region = BoundsRegion(min_lat=10.0, max_lat=20.0, min_lng=10.0, max_lng=20.0)
    out = place_bubble(Anchor(id="R", lat=10.0, lng=10.0), [], step_size=1.0, max_rings=2, region=region)
    assert isinstance(out, PlacementResult)
    # First in-region candidate in scan order: dx=0, dy=+1
    assert out.position == (10.0, 11.0)


@pytest.mark.parametrize(
    "step,rings",
    [(1.0, 0), (1.0, -2), (0.0, 3), (-0.5, 3)],
)
def test_invalid_config_fails_fast(step: float, rings: int) -> None:
    placed: list[PlacedBubble] = []
    out = place_bubble(Anchor(id="R", lat=1.0, lng=1.0), placed, step_size=step, max_rings=rings)
    assert isinstance(out, PlacementFailure)
    assert out.reason == INVALID_CONFIG
    assert placed == []


def test_unknown_strategy_is_config_failure() -> None:
    out = place_bubble(Anchor(id="R", lat=1.0, lng=1.0), [], 1.0, 2, strategy="hexagon")
    assert isinstance(out, PlacementFailure)
    assert out.reason == INVALID_CONFIG


def test_non_finite_anchor() -> None:
    out = place_bubble(Anchor(id="R", lat=math.nan, lng=1.0), [], 1.0, 2)
    assert isinstance(out, PlacementFailure)
    assert out.reason == INVALID_ANCHOR


def test_spiral_strategy_places() -> None:
    placed: list[PlacedBubble] = []
    anchor = Anchor(id="S", lat=0.0, lng=0.0)
    r1 = place_bubble(anchor, placed, 1.0, 2, bubble_radius=0.5, strategy="spiral")
    r2 = place_bubble(anchor, placed, 1.0, 2, bubble_radius=0.5, strategy="spiral")
    assert isinstance(r1, PlacementResult) and isinstance(r2, PlacementResult)
    assert r1.ring == 0
    assert distance(r1.position, r2.position) >= 1.0


def test_failure_when_neighbourhood_full() -> None:
    # Ring 1 only; a bubble on the anchor blocks all 8 neighbours at separation 2.
    placed = [PlacedBubble(id="X", position=(0.0, 0.0), radius=1.0)]
    out = place_bubble(Anchor(id="R", lat=0.0, lng=0.0), placed, 1.0, 1, bubble_radius=1.0)
    assert isinstance(out, PlacementFailure)
    assert out.reason == PLACEMENT_EXHAUSTED
    assert len(placed) == 1


def test_result_position_requires_bubble_position() -> None:
    anchor = Anchor(id="A", lat=0.0, lng=0.0)
    result = PlacementResult(
        anchor=anchor,
        bubble=PlacedBubble(id="A", position=None, radius=1.0),
        connector=((0.0, 0.0), (0.0, 0.0)),
    )
    with pytest.raises(ValueError, match="no position"):
        result.position
