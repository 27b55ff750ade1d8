"""
Tests for the memoized placement wrapper.

Run with: python -m pytest tests/test_memo.py
"""

from logic.collision import resolve_marker_placement
from logic.markers import Marker, Venue
from logic.memo import MarkerPlacementMemo


def make_marker(marker_id, event_count=1, lat=41.0, lng=29.0):
    return Marker(
        id=marker_id,
        venue=Venue(id=marker_id),
        event_count=event_count,
        priority=1,
        lat=lat,
        lng=lng,
    )


class CountingResolver:
    """Resolver stub that records how often it runs."""

    def __init__(self):
        self.calls = 0

    def __call__(self, markers, zoom):
        self.calls += 1
        return resolve_marker_placement(markers, zoom)


def test_reuses_result_for_same_inputs():
    resolver = CountingResolver()
    memo = MarkerPlacementMemo(resolver)
    markers = [make_marker("a"), make_marker("b")]

    first = memo(markers, 10)
    second = memo(markers, 10)

    assert resolver.calls == 1
    assert first == second
    assert (memo.hits, memo.misses) == (1, 1)


def test_equal_markers_in_new_list_hit():
    resolver = CountingResolver()
    memo = MarkerPlacementMemo(resolver)

    memo([make_marker("a"), make_marker("b")], 10)
    memo([make_marker("a"), make_marker("b")], 10)

    assert resolver.calls == 1


def test_recomputes_on_change():
    resolver = CountingResolver()
    memo = MarkerPlacementMemo(resolver)
    markers = [make_marker("a"), make_marker("b")]

    memo(markers, 10)
    memo(markers, 11)
    memo(markers + [make_marker("c")], 11)
    memo([make_marker("a"), make_marker("b", event_count=5)], 11)

    assert resolver.calls == 4
    assert memo.hits == 0


def test_result_matches_resolver():
    memo = MarkerPlacementMemo()
    markers = [make_marker("a", 12), make_marker("b", 3)]

    assert memo(markers, 10) == resolve_marker_placement(markers, 10)


def test_returned_list_is_a_copy():
    memo = MarkerPlacementMemo()
    markers = [make_marker("a"), make_marker("b")]

    result = memo(markers, 10)
    result.clear()

    assert len(memo(markers, 10)) == 2


def test_clear():
    resolver = CountingResolver()
    memo = MarkerPlacementMemo(resolver)
    markers = [make_marker("a")]

    memo(markers, 10)
    memo.clear()
    memo(markers, 10)

    assert resolver.calls == 2


def test_empty_markers_are_cached():
    resolver = CountingResolver()
    memo = MarkerPlacementMemo(resolver)

    assert memo([], 10) == []
    assert memo([], 10) == []
    assert resolver.calls == 1
