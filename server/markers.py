"""
Marker layout API routes.

This module exposes the marker placement engine: laying out venues posted
by the client, laying out venues from the catalogue for a viewport, and a
PNG preview of the same layout.

Author: Venue Map team
Date: 2026-10-15
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import get_db
from logic.config import load_config
from logic.markers import PositionedMarker, VenueEventCount, convert_to_markers
from logic.memo import MarkerPlacementMemo
from logic.render import render_markers_to_image
from logic.validation import sanitise_bounds, sanitise_limit, sanitise_zoom
from logic.venues import load_venue_event_counts

logger = logging.getLogger(__name__)

router = APIRouter()

# Shared by all requests; repeated viewport queries reuse the last layout
placement_memo = MarkerPlacementMemo()


class LayoutRequest(BaseModel):
    """Request model for laying out client-supplied venues."""

    zoom: float
    venues: List[VenueEventCount] = []


def _layout_response(positioned: List[PositionedMarker], zoom: float) -> Dict[str, Any]:
    return {
        "zoom": zoom,
        "count": len(positioned),
        "displaced": sum(1 for m in positioned if m.is_displaced),
        "markers": [m.model_dump() for m in positioned],
    }


def _catalogue_layout(
    db: Session,
    zoom: Optional[float],
    north: Optional[float],
    south: Optional[float],
    east: Optional[float],
    west: Optional[float],
    limit: Optional[int],
) -> Dict[str, Any]:
    """Resolve the layout of catalogue venues for a viewport."""
    config = load_config()
    map_config = config["map"]

    zoom = sanitise_zoom(
        map_config["default_zoom"] if zoom is None else zoom,
        map_config["min_zoom"],
        map_config["max_zoom"],
    )
    bounds = sanitise_bounds(north, south, east, west)
    limit = sanitise_limit(limit, int(config["venues"]["limit"]))

    venue_events = load_venue_event_counts(
        db,
        bounds=bounds,
        limit=limit,
        include_empty=config["venues"]["include_empty"] is True,
    )
    markers = convert_to_markers(venue_events)
    positioned = placement_memo(markers, zoom)

    logger.info(
        "Laid out %d of %d venues at zoom %s", len(positioned), len(venue_events), zoom
    )
    return {"zoom": zoom, "positioned": positioned, "config": config}


@router.post("/api/markers/layout")
def layout_markers(request: LayoutRequest):
    """Lay out client-supplied venues for a zoom level.

    Venues without coordinates are skipped.

    Args:
        request: Zoom level and venue/event-count pairs.

    Returns:
        Dictionary with zoom, marker count, displaced count and the
        positioned markers in input order.

    Raises:
        HTTPException: If zoom is outside the supported range.
    """
    map_config = load_config()["map"]
    zoom = sanitise_zoom(request.zoom, map_config["min_zoom"], map_config["max_zoom"])

    markers = convert_to_markers(request.venues)
    positioned = placement_memo(markers, zoom)
    return _layout_response(positioned, zoom)


@router.get("/api/venues/markers")
def venue_markers(
    zoom: Optional[float] = None,
    north: Optional[float] = None,
    south: Optional[float] = None,
    east: Optional[float] = None,
    west: Optional[float] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """Lay out catalogue venues with upcoming events.

    Args:
        zoom: Map zoom level (defaults to the configured default zoom).
        north, south, east, west: Optional viewport bounds.
        limit: Maximum number of venues.
        db: Database session.

    Returns:
        Dictionary with zoom, marker count, displaced count and markers.
    """
    layout = _catalogue_layout(db, zoom, north, south, east, west, limit)
    return _layout_response(layout["positioned"], layout["zoom"])


@router.get("/api/venues/markers.png")
def venue_markers_preview(
    zoom: Optional[float] = None,
    north: Optional[float] = None,
    south: Optional[float] = None,
    east: Optional[float] = None,
    west: Optional[float] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """Render the catalogue layout to a PNG preview.

    Returns:
        PNG image response.
    """
    layout = _catalogue_layout(db, zoom, north, south, east, west, limit)
    preview = layout["config"]["preview"]

    png = render_markers_to_image(
        layout["positioned"],
        layout["zoom"],
        width=int(preview["width"]),
        height=int(preview["height"]),
    )
    return Response(content=png, media_type="image/png")


@router.get("/api/map/settings")
def map_settings():
    """Get the map's zoom range and default view.

    Returns:
        Dictionary with min_zoom, max_zoom, default_zoom and default_center.
    """
    return load_config()["map"]
