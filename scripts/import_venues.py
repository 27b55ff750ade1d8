#!/usr/bin/env python3
"""Import venues and their events into the venue catalogue.

The input is a JSON list of venues:

    [
      {
        "id": "v1",
        "name": "Zorlu PSM",
        "city": "Istanbul",
        "capacity": 2000,
        "coordinates": {"lat": 41.067, "lng": 29.017},
        "events": [{"name": "Concert", "starts_at": "2026-11-02T20:00:00"}]
      }
    ]

Coordinates may use lat/lng or latitude/longitude keys, or be omitted.
Existing venues with the same id are updated; events are appended.
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, List

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session

from database import Event, SessionLocal, Venue, init_db
from logic.logging_config import setup_logging
from logic.markers import normalize_coordinates

logger = logging.getLogger("import_venues")


def import_venues(db: Session, records: List[Dict[str, Any]]) -> Dict[str, int]:
    """Upsert venues and add their events.

    Args:
        db: Database session.
        records: Venue dictionaries as described in the module docstring.

    Returns:
        Dictionary with counts of venues and events imported.
    """
    venue_count = 0
    event_count = 0

    for record in records:
        venue_id = str(record.get("id") or "").strip()
        if not venue_id:
            logger.warning("Skipping venue without id: %r", record.get("name"))
            continue

        venue = db.get(Venue, venue_id)
        if venue is None:
            venue = Venue(id=venue_id)
            db.add(venue)

        venue.name = record.get("name", "") or ""
        venue.city = record.get("city")
        venue.capacity = record.get("capacity")

        coordinates = normalize_coordinates(record.get("coordinates"))
        venue.latitude = coordinates.lat if coordinates else None
        venue.longitude = coordinates.lng if coordinates else None
        venue_count += 1

        for event in record.get("events", []):
            db.add(
                Event(
                    name=event["name"],
                    starts_at=datetime.fromisoformat(event["starts_at"]),
                    venue_id=venue_id,
                )
            )
            event_count += 1

    db.commit()
    return {"venues": venue_count, "events": event_count}


def main():
    """Main entry point for the import script."""
    parser = argparse.ArgumentParser(description="Import venues into the venue map")
    parser.add_argument("path", help="JSON file with a list of venues")
    args = parser.parse_args()

    setup_logging("INFO")

    try:
        with open(args.path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except FileNotFoundError:
        logger.error("File not found: %s", args.path)
        sys.exit(1)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", args.path, e)
        sys.exit(1)

    if not isinstance(records, list):
        logger.error("Expected a JSON list of venues")
        sys.exit(1)

    init_db()
    db = SessionLocal()
    try:
        counts = import_venues(db, records)
    finally:
        db.close()

    logger.info("Imported %d venues and %d events", counts["venues"], counts["events"])


if __name__ == "__main__":
    main()
