# rigmap/core/types.py
"""
Dataclasses for anchors, placed bubbles, placement results and layout summaries.
Points are (x, y) tuples: (lng, lat) for geographic anchors, pixels for screen space.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from rigmap.core.error_codes import ConfigurationError


Point = tuple[float, float]
Segment = tuple[Point, Point]

AnchorState = Literal["pending", "retry_pending", "placed", "failed"]


@dataclass(frozen=True)
class Anchor:
    """True location a label refers to (one rig). Never mutated."""
    id: str
    lat: float
    lng: float
    attributes: dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @property
    def xy(self) -> Point:
        return (self.lng, self.lat)


@dataclass
class PlacedBubble:
    """A finalized bubble. position is None only for malformed external entries."""
    id: str
    position: Point | None
    radius: float


# Caller-owned, append-only during a pass.
PlacedSet = list[PlacedBubble]


@dataclass
class PlacementResult:
    """Successful placement: bubble position plus connector from anchor to bubble."""
    anchor: Anchor
    bubble: PlacedBubble
    connector: Segment

    # diagnostics
    ring: int = 0
    candidate_index: int = 0
    pass_index: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def anchor_id(self) -> str:
        return self.anchor.id

    @property
    def position(self) -> Point:
        if self.bubble.position is None:
            raise ValueError(f"Placed bubble {self.bubble.id!r} has no position")
        return self.bubble.position


@dataclass
class PlacementFailure:
    """No valid slot for the anchor. reason is an error_codes key."""
    anchor: Anchor
    reason: str
    pass_index: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def anchor_id(self) -> str:
        return self.anchor.id


PlacementOutcome = Union[PlacementResult, PlacementFailure]


@dataclass(frozen=True)
class BoundsRegion:
    """Axis-aligned rectangle bubbles must stay inside. Edges are inclusive."""
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def __post_init__(self) -> None:
        if self.min_lat > self.max_lat or self.min_lng > self.max_lng:
            raise ConfigurationError(
                f"Inverted bounds: lat [{self.min_lat}, {self.max_lat}], "
                f"lng [{self.min_lng}, {self.max_lng}]"
            )

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "BoundsRegion":
        """Accepts minLat/maxLat/minLng/maxLng or min_lat/... keys."""
        def pick(camel: str, snake: str) -> float:
            if camel in d:
                return float(d[camel])
            if snake in d:
                return float(d[snake])
            raise ConfigurationError(f"Bounds missing key: {camel}")

        return cls(
            min_lat=pick("minLat", "min_lat"),
            max_lat=pick("maxLat", "max_lat"),
            min_lng=pick("minLng", "min_lng"),
            max_lng=pick("maxLng", "max_lng"),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "minLat": self.min_lat,
            "maxLat": self.max_lat,
            "minLng": self.min_lng,
            "maxLng": self.max_lng,
        }


@dataclass
class LayoutSummary:
    """Complete accounting of one placement pass: every anchor is placed or failed."""
    results: list[PlacementResult]
    failures: list[PlacementFailure]
    placed: PlacedSet
    states: list[tuple[str, AnchorState]]
    first_pass_failed_ids: list[str] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.results)

    @property
    def n_anchors(self) -> int:
        return len(self.states)
