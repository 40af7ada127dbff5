"""
Zoom levels: parsing and zoom-dependent bubble radius.
"""

from __future__ import annotations

import logging

import pytest

from rigmap.core.zoom import bubble_radius_for_zoom, parse_zoom_levels


def test_parse_zoom_levels_empty_default() -> None:
    out = parse_zoom_levels("")
    assert len(out) >= 1
    assert all(isinstance(x, int) for x in out)


def test_parse_zoom_levels_custom() -> None:
    assert parse_zoom_levels("6,8,10") == [6, 8, 10]
    assert parse_zoom_levels("10,6,10") == [10, 6]


def test_parse_zoom_levels_skips_bad_parts_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="rigmap.core.zoom"):
        assert parse_zoom_levels(" 12 , x, -3, 14") == [12, 14]
    assert "'x'" in caplog.text
    assert "-3" in caplog.text
    assert parse_zoom_levels("x,y") == parse_zoom_levels("")


@pytest.mark.parametrize(
    "zoom,radius",
    [(12, 0.01), (10, 0.01), (9, 0.05), (8, 0.05), (7.5, 0.1), (3, 0.1)],
)
def test_bubble_radius_for_zoom(zoom: float, radius: float) -> None:
    assert bubble_radius_for_zoom(zoom) == radius
