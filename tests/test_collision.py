"""
Tests for marker collision resolution.

Tests:
- Empty and single-marker layouts
- Priority order respected
- No displacement when markers are far apart
- Direction choice avoids crowded slots
- Deterministic layouts

Run with: python -m pytest tests/test_collision.py -v
"""

import pytest

from logic.collision import (
    DIRECTIONS,
    choose_direction,
    count_conflicts,
    resolve_collisions,
    resolve_marker_placement,
)
from logic.geometry import marker_radius_in_map_units, pixels_per_degree
from logic.markers import Marker, Venue, priority_for_event_count

SLOT_OFFSETS = {(d.x, d.y) for d in DIRECTIONS}


def make_marker(marker_id, lat, lng, event_count):
    return Marker(
        id=marker_id,
        venue=Venue(id=marker_id, coordinates={"lat": lat, "lng": lng}),
        event_count=event_count,
        priority=priority_for_event_count(event_count),
        lat=lat,
        lng=lng,
    )


def offsets(positioned):
    return [(m.id, m.offset_x, m.offset_y, m.is_displaced) for m in positioned]


class TestSpecialCases:
    """Test empty and single-marker inputs."""

    def test_empty(self):
        assert resolve_marker_placement([], 10) == []

    @pytest.mark.parametrize("event_count", [0, 1, 3, 7, 50])
    @pytest.mark.parametrize("zoom", [3, 10, 18])
    def test_single_marker_keeps_default(self, event_count, zoom):
        (positioned,) = resolve_marker_placement([make_marker("a", 41.0, 29.0, event_count)], zoom)

        assert (positioned.offset_x, positioned.offset_y) == (0, -30)
        assert positioned.is_displaced is False
        assert positioned.id == "a"

    def test_accepts_any_iterable(self):
        markers = (make_marker(str(i), 41.0 + i, 29.0, 1) for i in range(3))
        assert len(resolve_marker_placement(markers, 10)) == 3


class TestPriority:
    """Test that higher tiers keep their anchor."""

    def test_same_position_scenario(self):
        a = make_marker("A", 41.0, 29.0, 12)
        b = make_marker("B", 41.0, 29.0, 3)

        result = resolve_marker_placement([a, b], 10)

        assert offsets(result) == [
            ("A", 0, -30, False),
            ("B", 0, -60, True),
        ]

    def test_heavier_marker_wins_regardless_of_input_order(self):
        light = make_marker("light", 41.0, 29.0, 1)
        heavy = make_marker("heavy", 41.0, 29.0, 10)

        result = resolve_marker_placement([light, heavy], 10)

        assert result[0].id == "light"
        assert result[0].is_displaced is True
        assert (result[0].offset_x, result[0].offset_y) in SLOT_OFFSETS
        assert result[1].id == "heavy"
        assert result[1].is_displaced is False
        assert (result[1].offset_x, result[1].offset_y) == (0, -30)

    def test_equal_tiers_keep_input_order(self):
        first = make_marker("first", 41.0, 29.0, 1)
        second = make_marker("second", 41.0, 29.0, 0)

        result = resolve_marker_placement([first, second], 12)

        assert result[0].is_displaced is False
        assert result[1].is_displaced is True

        swapped = resolve_marker_placement([second, first], 12)
        assert swapped[0].id == "second"
        assert swapped[0].is_displaced is False
        assert swapped[1].is_displaced is True


class TestNoCollision:
    """Test that well separated markers are untouched."""

    def test_far_apart(self):
        markers = [
            make_marker("a", 41.0, 29.0, 12),
            make_marker("b", 42.0, 29.0, 6),
            make_marker("c", 41.0, 30.0, 2),
            make_marker("d", 40.0, 28.0, 1),
        ]

        result = resolve_marker_placement(markers, 10)

        assert all(not m.is_displaced for m in result)
        assert all((m.offset_x, m.offset_y) == (0, -30) for m in result)

    def test_collision_depends_on_zoom(self):
        # 0.05 degrees apart: overlapping when zoomed out, clear when zoomed in
        markers = [make_marker("a", 41.0, 29.0, 10), make_marker("b", 41.05, 29.0, 10)]
        gap = 0.05
        assert gap < 2 * marker_radius_in_map_units(10, 10)
        assert gap > 2 * marker_radius_in_map_units(10, 13)

        assert resolve_marker_placement(markers, 10)[1].is_displaced is True
        assert resolve_marker_placement(markers, 13)[1].is_displaced is False


class TestDirectionChoice:
    """Test slot selection for displaced markers."""

    def test_residual_conflicts_measured_at_anchor(self):
        ppd = pixels_per_degree(10)
        # C sits 60px north of A and B, right where B's N bubble goes
        a = make_marker("A", 41.0, 29.0, 10)
        b = make_marker("B", 41.0, 29.0, 1)
        c = make_marker("C", 41.0 + 60 / ppd, 29.0, 10)

        result = resolve_marker_placement([b, a, c], 10)
        by_id = {m.id: m for m in result}

        assert [m.id for m in result] == ["B", "A", "C"]
        assert (by_id["A"].offset_x, by_id["A"].offset_y, by_id["A"].is_displaced) == (0, -30, False)
        assert (by_id["C"].offset_x, by_id["C"].offset_y, by_id["C"].is_displaced) == (0, -60, True)
        # Every slot scores the same from the anchor, so N wins the tie
        assert (by_id["B"].offset_x, by_id["B"].offset_y, by_id["B"].is_displaced) == (0, -60, True)

    def test_conflict_count_is_the_same_for_every_slot(self):
        markers = [
            make_marker("a", 41.0, 29.0, 10),
            make_marker("b", 41.0, 29.0, 1),
            make_marker("c", 41.0, 29.001, 3),
            make_marker("d", 45.0, 29.0, 3),
        ]
        radii = [marker_radius_in_map_units(m.event_count, 10) for m in markers]

        assert count_conflicts(1, markers, radii) == 2

    def test_shared_anchor_all_take_north(self):
        markers = [make_marker(str(i), 41.0, 29.0, 1) for i in range(4)]

        result = resolve_marker_placement(markers, 10)

        assert offsets(result) == [
            ("0", 0, -30, False),
            ("1", 0, -60, True),
            ("2", 0, -60, True),
            ("3", 0, -60, True),
        ]

    def test_skips_taken_directions(self):
        markers = [make_marker("a", 41.0, 29.0, 10), make_marker("b", 41.0, 29.0, 1)]
        radii = [marker_radius_in_map_units(m.event_count, 10) for m in markers]

        assert choose_direction(1, markers, radii, set()).key == "N"
        assert choose_direction(1, markers, radii, {("b", "N")}).key == "NE"
        assert choose_direction(1, markers, radii, {("b", "N"), ("b", "NE")}).key == "E"
        # Another marker's taken slot does not block this one
        assert choose_direction(1, markers, radii, {("a", "N")}).key == "N"


class TestDeterminism:
    """Test that layouts depend only on their inputs."""

    def test_idempotent(self):
        markers = [
            make_marker(str(i), 41.0 + (i % 3) * 0.01, 29.0 + (i // 3) * 0.01, i)
            for i in range(12)
        ]

        first = resolve_marker_placement(markers, 11)
        second = resolve_marker_placement(markers, 11)

        assert offsets(first) == offsets(second)

    def test_same_length_and_identity(self):
        markers = [make_marker(str(i), 41.0, 29.0 + i * 0.001, i) for i in range(8)]

        result = resolve_collisions(markers, 9)

        assert [m.id for m in result] == [m.id for m in markers]
        assert all(
            (m.offset_x, m.offset_y) in SLOT_OFFSETS for m in result if m.is_displaced
        )

    def test_inputs_are_not_modified(self):
        markers = [make_marker("a", 41.0, 29.0, 10), make_marker("b", 41.0, 29.0, 1)]
        before = [m.model_dump() for m in markers]

        resolve_marker_placement(markers, 10)

        assert [m.model_dump() for m in markers] == before
