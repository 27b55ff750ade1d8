"""
Distance and marker footprint helpers.

Overlap tests run directly in degree space: marker footprints are converted
from pixels to degrees for the current zoom instead of projecting every
marker to screen pixels. Distances use a planar approximation, which holds
for the small regions visible in one viewport. The radius thresholds are
calibrated against it, so the two must change together.

Author: Venue Map team
Date: 2026-10-17
"""

import math

# Web map tiles are 256px wide and span 360 degrees at zoom 0
TILE_SIZE = 256

# Footprints are doubled to leave clearance between bubbles
COLLISION_PADDING = 2


def planar_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Approximate distance between two points in raw degrees."""
    lat_diff = lat1 - lat2
    lng_diff = lng1 - lng2
    return math.sqrt(lat_diff * lat_diff + lng_diff * lng_diff)


def base_marker_radius(event_count: int) -> int:
    """Get the bubble radius in pixels for an event count.

    Args:
        event_count: Number of upcoming events at the venue.

    Returns:
        24, 20, 16 or 12 pixels.
    """
    if event_count >= 10:
        return 24
    if event_count >= 5:
        return 20
    if event_count >= 2:
        return 16
    return 12


def pixels_per_degree(zoom: float) -> float:
    """Pixels covered by one degree at the given zoom level."""
    return math.pow(2, zoom) * TILE_SIZE / 360


def pixels_to_degrees(pixels: float, zoom: float) -> float:
    """Convert a pixel length into degrees at the given zoom level."""
    return pixels / pixels_per_degree(zoom)


def marker_radius_in_map_units(event_count: int, zoom: float) -> float:
    """Get the padded marker footprint radius in degrees.

    Args:
        event_count: Number of upcoming events at the venue.
        zoom: Map zoom level.

    Returns:
        Footprint radius in the same unit as marker positions.
    """
    return pixels_to_degrees(base_marker_radius(event_count) * COLLISION_PADDING, zoom)
