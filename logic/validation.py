"""
Validation and sanitization utilities.

This module contains functions for validating map query parameters at the
API boundary. Invalid input is rejected with HTTP 400.

Author: Venue Map team
Date: 2026-10-16
"""

import math
from typing import Any, Optional

from fastapi import HTTPException

from .venues import Bounds


def sanitise_float(value: Any, name: str) -> float:
    """Sanitize and validate a finite float value.

    Args:
        value: Value to convert to float.
        name: Parameter name used in the error message.

    Returns:
        Float value.

    Raises:
        HTTPException: If value is not a finite number.
    """
    if isinstance(value, bool):
        raise HTTPException(400, f"Invalid {name}")
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise HTTPException(400, f"Invalid {name}")
    if not math.isfinite(result):
        raise HTTPException(400, f"Invalid {name}")
    return result


def sanitise_zoom(value: Any, min_zoom: float, max_zoom: float) -> float:
    """Sanitize and validate a zoom level against the map's supported range.

    Args:
        value: Zoom value to validate.
        min_zoom: Lowest zoom the map exposes.
        max_zoom: Highest zoom the map exposes.

    Returns:
        Zoom as a float.

    Raises:
        HTTPException: If zoom is not numeric or outside the range.
    """
    zoom = sanitise_float(value, "zoom")
    if not min_zoom <= zoom <= max_zoom:
        raise HTTPException(400, f"Zoom must be between {min_zoom} and {max_zoom}")
    return zoom


def sanitise_bounds(
        north: Any = None, south: Any = None, east: Any = None, west: Any = None
) -> Optional[Bounds]:
    """Sanitize and validate viewport bounds.

    Args:
        north: Northern latitude edge.
        south: Southern latitude edge.
        east: Eastern longitude edge.
        west: Western longitude edge.

    Returns:
        Bounds, or None when no edge is supplied.

    Raises:
        HTTPException: If only some edges are supplied or they are invalid.
    """
    edges = (north, south, east, west)
    if all(edge is None for edge in edges):
        return None
    if any(edge is None for edge in edges):
        raise HTTPException(400, "Bounds require north, south, east and west")

    bounds = Bounds(
        north=sanitise_float(north, "north"),
        south=sanitise_float(south, "south"),
        east=sanitise_float(east, "east"),
        west=sanitise_float(west, "west"),
    )

    if not -90 <= bounds.south <= bounds.north <= 90:
        raise HTTPException(400, "Invalid latitude bounds")
    # west > east is a viewport wrapping past 180 degrees, not an error
    if not (-180 <= bounds.west <= 180 and -180 <= bounds.east <= 180):
        raise HTTPException(400, "Invalid longitude bounds")
    return bounds


def sanitise_limit(value: Any, maximum: int) -> int:
    """Sanitize a result limit, clamping it to the configured maximum.

    Raises:
        HTTPException: If the limit is not a positive integer.
    """
    if value is None:
        return maximum
    if isinstance(value, bool):
        raise HTTPException(400, "Invalid limit")
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise HTTPException(400, "Invalid limit")
    if limit < 1:
        raise HTTPException(400, "Invalid limit")
    return min(limit, maximum)
