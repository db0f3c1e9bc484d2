from __future__ import annotations

import pytest

from polygeo import PointStore, Polyline, is_line_segment_intersecting


@pytest.fixture
def zigzag() -> Polyline:
    store = PointStore([(0, 0), (4, 0), (4, 4), (8, 4)])
    return Polyline(store, [0, 1, 2, 3])


def test_proper_crossing(zigzag):
    assert is_line_segment_intersecting(zigzag, (2, -1), (2, 1))
    assert is_line_segment_intersecting(zigzag, (3, 2), (5, 2))
    assert is_line_segment_intersecting(zigzag, (6, 5, 7.0), (6, 3, -1.0))


def test_no_crossing(zigzag):
    assert not is_line_segment_intersecting(zigzag, (0, 1), (3, 3))
    assert not is_line_segment_intersecting(zigzag, (5, 0), (9, 3))


def test_segment_ending_on_polyline_is_not_intersecting(zigzag):
    assert not is_line_segment_intersecting(zigzag, (2, -1), (2, 0))
    assert not is_line_segment_intersecting(zigzag, (4, 0), (6, -2))


def test_collinear_overlap_is_not_intersecting(zigzag):
    assert not is_line_segment_intersecting(zigzag, (1, 0), (3, 0))
    assert not is_line_segment_intersecting(zigzag, (-2, 0), (10, 0))


def test_short_polyline_never_intersects():
    store = PointStore([(0, 0)])
    assert not is_line_segment_intersecting(Polyline(store, [0]), (-1, -1), (1, 1))
