"""
Venue and event-count loading.

This module reads the venue catalogue and counts upcoming events per venue,
producing the venue/event-count pairs the marker builder consumes.

Author: Venue Map team
Date: 2026-10-15
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from database import Event, Venue
from .markers import VenueEventCount

logger = logging.getLogger(__name__)


class Bounds(BaseModel):
    """A map viewport in degrees."""

    model_config = ConfigDict(frozen=True)

    north: float
    south: float
    east: float
    west: float

    @property
    def crosses_antimeridian(self) -> bool:
        """True when the viewport wraps past 180 degrees longitude."""
        return self.west > self.east


def count_upcoming_events(db: Session, now: Optional[datetime] = None) -> Dict[str, int]:
    """Count events starting at or after ``now`` for each venue.

    Args:
        db: Database session.
        now: Reference time (defaults to the current UTC time).

    Returns:
        Mapping of venue id to upcoming event count. Venues without
        upcoming events are absent.
    """
    now = now or datetime.utcnow()
    rows = (
        db.query(Event.venue_id, func.count(Event.id))
        .filter(Event.venue_id.isnot(None), Event.starts_at >= now)
        .group_by(Event.venue_id)
        .all()
    )
    return {venue_id: count for venue_id, count in rows}


def load_venue_event_counts(
    db: Session,
    bounds: Optional[Bounds] = None,
    limit: int = 500,
    include_empty: bool = False,
    now: Optional[datetime] = None,
) -> List[VenueEventCount]:
    """Load venues paired with their upcoming event counts.

    Results are ordered by venue id so layouts are reproducible. When bounds
    are given, only geocoded venues inside them are returned; otherwise
    venues without coordinates are kept and left to the marker builder.

    Args:
        db: Database session.
        bounds: Optional viewport to restrict venues to.
        limit: Maximum number of records.
        include_empty: Whether venues with no upcoming events are included.
        now: Reference time for "upcoming".

    Returns:
        List of venue/event-count records.
    """
    counts = count_upcoming_events(db, now)

    query = db.query(Venue)
    if bounds is not None:
        query = query.filter(
            Venue.latitude.isnot(None),
            Venue.longitude.isnot(None),
            Venue.latitude >= bounds.south,
            Venue.latitude <= bounds.north,
        )
        if bounds.crosses_antimeridian:
            query = query.filter(
                or_(Venue.longitude >= bounds.west, Venue.longitude <= bounds.east)
            )
        else:
            query = query.filter(
                Venue.longitude >= bounds.west,
                Venue.longitude <= bounds.east,
            )
    if not include_empty:
        if not counts:
            return []
        query = query.filter(Venue.id.in_(list(counts)))

    venues = query.order_by(Venue.id).limit(limit).all()

    records = [
        VenueEventCount(venue=venue.to_dict(), event_count=counts.get(venue.id, 0))
        for venue in venues
    ]
    logger.debug("Loaded %d venues (bounds=%s)", len(records), bounds)
    return records
