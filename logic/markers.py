"""
Venue markers and the marker builder.

This module contains the models that flow through the placement engine and
the helper that turns venue/event-count pairs into weighted map markers.

Priority tiers:
- 4: 10+ upcoming events
- 3: 5-9 upcoming events
- 2: 2-4 upcoming events
- 1: everything else

Author: Venue Map team
Date: 2026-10-17
"""

import json
import logging
import math
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Default bubble offset: centred horizontally, 30px above the anchor
DEFAULT_OFFSET_X = 0
DEFAULT_OFFSET_Y = -30


class Coordinates(BaseModel):
    """A WGS-84 position in degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Venue(BaseModel):
    """A venue as stored in the venue catalogue."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    city: Optional[str] = None
    capacity: Optional[int] = None
    coordinates: Optional[Coordinates] = None

    @field_validator("coordinates", mode="before")
    @classmethod
    def parse_coordinates(cls, value: Any) -> Optional[Any]:
        return normalize_coordinates(value)


class VenueEventCount(BaseModel):
    """A venue paired with its number of upcoming events."""

    model_config = ConfigDict(frozen=True)

    venue: Venue
    event_count: int = Field(default=0, ge=0)


class Marker(BaseModel):
    """A weighted point marker ready for collision resolution."""

    model_config = ConfigDict(frozen=True)

    id: str
    venue: Venue
    event_count: int
    priority: int  # 1-4, higher = more important
    lat: float
    lng: float


class PositionedMarker(Marker):
    """A marker with its resolved bubble displacement in pixels."""

    offset_x: int = DEFAULT_OFFSET_X
    offset_y: int = DEFAULT_OFFSET_Y
    is_displaced: bool = False


def normalize_coordinates(value: Any) -> Optional[Any]:
    """Normalize the coordinate formats found in venue data.

    Accepts ``{"lat", "lng"}`` or ``{"latitude", "longitude"}`` mappings, a
    JSON string holding either, an existing ``Coordinates`` or ``None``.

    Args:
        value: Raw coordinates value.

    Returns:
        ``Coordinates``, or None when the value is missing, unparseable or
        not a finite position.
    """
    if value is None or isinstance(value, Coordinates):
        return value

    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Failed to parse coordinates: %r", value)
            return None

    if not isinstance(value, dict):
        logger.warning("Unsupported coordinates value: %r", value)
        return None

    lat = value.get("lat", value.get("latitude"))
    lng = value.get("lng", value.get("longitude"))
    if lat is None or lng is None:
        return None

    try:
        lat = float(lat)
        lng = float(lng)
    except (TypeError, ValueError):
        logger.warning("Non-numeric coordinates: %r", value)
        return None

    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None

    return Coordinates(lat=lat, lng=lng)


def priority_for_event_count(event_count: int) -> int:
    """Map an event count to its priority tier (1-4)."""
    if event_count >= 10:
        return 4
    if event_count >= 5:
        return 3
    if event_count >= 2:
        return 2
    return 1


def _as_venue_event_count(item: Any) -> VenueEventCount:
    if isinstance(item, VenueEventCount):
        return item
    if isinstance(item, tuple):
        venue, event_count = item
        return VenueEventCount(venue=venue, event_count=event_count)
    return VenueEventCount.model_validate(item)


def convert_to_markers(venue_events: Iterable[Any]) -> List[Marker]:
    """Convert venue/event-count pairs into weighted markers.

    Venues without coordinates cannot be plotted and are skipped. Output
    order follows input order, which the resolver relies on for tie-breaks
    between markers of equal priority.

    Args:
        venue_events: ``VenueEventCount`` records, mappings with ``venue``
            and ``event_count`` keys, or ``(venue, event_count)`` tuples.

    Returns:
        List of markers for the plottable venues.
    """
    markers = []
    for item in venue_events:
        pair = _as_venue_event_count(item)
        coordinates = pair.venue.coordinates
        if coordinates is None:
            continue

        markers.append(
            Marker(
                id=pair.venue.id,
                venue=pair.venue,
                event_count=pair.event_count,
                priority=priority_for_event_count(pair.event_count),
                lat=coordinates.lat,
                lng=coordinates.lng,
            )
        )

    return markers
