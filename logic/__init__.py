"""
Marker layout logic for the venue map.

This package contains the marker builder, the footprint model, and the
collision resolver that lays out venue markers for a zoom level.

Author: Venue Map team
Date: 2026-10-17
"""

from .collision import resolve_marker_placement
from .markers import Marker, PositionedMarker, VenueEventCount, convert_to_markers
from .memo import MarkerPlacementMemo

__all__ = [
    "Marker",
    "MarkerPlacementMemo",
    "PositionedMarker",
    "VenueEventCount",
    "convert_to_markers",
    "resolve_marker_placement",
]
