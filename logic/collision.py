"""
Marker collision resolution.

This module lays out venue markers so that overlapping bubbles are pushed
apart, keeping the most important markers on their anchors.

Algorithm Overview:
- Phase 0: Every marker starts at the default offset (0, -30)
- Phase 1: Order markers by priority tier, highest first (stable)
- Phase 2: Test each marker against the markers placed before it
- Phase 3: Move colliding markers into the least crowded of eight slots

Author: Venue Map team
Date: 2026-10-17
"""

import logging
from typing import Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

from .geometry import marker_radius_in_map_units, planar_distance
from .markers import Marker, PositionedMarker

logger = logging.getLogger(__name__)


class Direction(NamedTuple):
    """A candidate bubble slot, as a pixel offset from the anchor."""

    key: str
    x: int
    y: int


# Candidate slots in preference order (ties go to the earliest)
DIRECTIONS: Tuple[Direction, ...] = (
    Direction("N", 0, -60),
    Direction("NE", 40, -40),
    Direction("E", 60, 0),
    Direction("SE", 40, 40),
    Direction("S", 0, 60),
    Direction("SW", -40, 40),
    Direction("W", -60, 0),
    Direction("NW", -40, -40),
)

# Residual conflicts are counted against a looser threshold than detection
RELAXED_THRESHOLD = 0.8


def _place(marker: Marker, direction: Optional[Direction] = None) -> PositionedMarker:
    """Build a positioned copy of a marker, displaced when a slot is given."""
    if direction is None:
        return PositionedMarker(**dict(marker))
    return PositionedMarker(
        **dict(marker),
        offset_x=direction.x,
        offset_y=direction.y,
        is_displaced=True,
    )


def has_collision(
    index: int,
    placed: Sequence[int],
    markers: Sequence[Marker],
    radii: Sequence[float],
) -> bool:
    """Check whether a marker overlaps any marker placed before it."""
    current = markers[index]
    for other_index in placed:
        other = markers[other_index]
        distance = planar_distance(current.lat, current.lng, other.lat, other.lng)
        if distance < radii[index] + radii[other_index]:
            return True
    return False


def count_conflicts(
    index: int,
    markers: Sequence[Marker],
    radii: Sequence[float],
) -> int:
    """Count markers that still overlap a marker, using the relaxed threshold.

    Every other marker is considered, not just the ones already placed.
    Distances are measured from the marker's anchor.
    """
    current = markers[index]
    conflicts = 0
    for other_index, other in enumerate(markers):
        if other_index == index:
            continue
        distance = planar_distance(current.lat, current.lng, other.lat, other.lng)
        if distance < (radii[index] + radii[other_index]) * RELAXED_THRESHOLD:
            conflicts += 1
    return conflicts


def choose_direction(
    index: int,
    markers: Sequence[Marker],
    radii: Sequence[float],
    taken: Set[Tuple[str, str]],
) -> Direction:
    """Pick the slot with the fewest residual conflicts for a marker.

    Args:
        index: Index of the marker being displaced.
        markers: All markers in the layout.
        radii: Footprint radius of each marker, in degrees.
        taken: (marker id, direction key) pairs already assigned.

    Returns:
        The chosen direction. Ties resolve to the earliest in DIRECTIONS.
    """
    current = markers[index]
    best = DIRECTIONS[0]
    fewest = None

    for direction in DIRECTIONS:
        if (current.id, direction.key) in taken:
            continue

        conflicts = count_conflicts(index, markers, radii)

        if fewest is None or conflicts < fewest:
            fewest = conflicts
            best = direction

    return best


def resolve_collisions(markers: Sequence[Marker], zoom: float) -> List[PositionedMarker]:
    """Resolve bubble overlaps for a set of markers.

    Higher priority markers are placed first and keep their anchor; a
    marker that overlaps an already placed one is moved into one of the
    eight slots in DIRECTIONS.

    Args:
        markers: Markers to lay out.
        zoom: Map zoom level.

    Returns:
        Positioned markers in input order.
    """
    positioned = [_place(marker) for marker in markers]
    radii = [marker_radius_in_map_units(marker.event_count, zoom) for marker in markers]

    # sorted() is stable, so equal tiers keep their input order
    order = sorted(range(len(markers)), key=lambda i: -markers[i].priority)

    taken: Set[Tuple[str, str]] = set()
    displaced = 0

    for rank, index in enumerate(order):
        if not has_collision(index, order[:rank], markers, radii):
            continue

        direction = choose_direction(index, markers, radii, taken)
        taken.add((markers[index].id, direction.key))
        positioned[index] = _place(markers[index], direction)
        displaced += 1

    logger.debug(
        "Resolved %d markers at zoom %s (%d displaced)", len(markers), zoom, displaced
    )
    return positioned


def resolve_marker_placement(markers: Iterable[Marker], zoom: float) -> List[PositionedMarker]:
    """Lay out markers for the given zoom level.

    Args:
        markers: Markers produced by ``convert_to_markers``.
        zoom: Map zoom level.

    Returns:
        One positioned marker per input marker, in input order.
    """
    markers = list(markers)
    if not markers:
        return []

    # A lone marker cannot collide
    if len(markers) == 1:
        return [_place(markers[0])]

    return resolve_collisions(markers, zoom)
