"""
Server-side marker layout preview.

This module renders positioned markers to a PNG so a layout can be checked
without the browser map. Anchors are projected with Web-Mercator pixel math
around the markers' centre; bubbles use the same pin styles as the map.

Author: Venue Map team
Date: 2026-10-15
"""

import io
import math
from typing import Dict, List, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from .geometry import TILE_SIZE, base_marker_radius
from .markers import PositionedMarker

BACKGROUND = (15, 23, 42, 255)  # #0f172a
ANCHOR_COLOR = (226, 232, 240, 255)  # #e2e8f0

# Pin styles per priority tier
PIN_STYLES: Dict[int, Dict[str, str]] = {
    4: {"color": "#dc2626", "shadow": "#991b1b"},  # red-600 / red-800
    3: {"color": "#ea580c", "shadow": "#c2410c"},  # orange-600 / orange-700
    2: {"color": "#2563eb", "shadow": "#1d4ed8"},  # blue-600 / blue-700
    1: {"color": "#059669", "shadow": "#047857"},  # emerald-600 / emerald-700
}


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color string to RGB tuple.

    Args:
        hex_color: Hex color string (e.g., "#16a34a").

    Returns:
        RGB tuple (r, g, b).
    """
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def project(lat: float, lng: float, zoom: float) -> Tuple[float, float]:
    """Project a position to Web-Mercator world pixels at a zoom level.

    Args:
        lat: Latitude in degrees.
        lng: Longitude in degrees.
        zoom: Map zoom level.

    Returns:
        World pixel (x, y), y growing southward.
    """
    scale = TILE_SIZE * math.pow(2, zoom)
    # Mercator is undefined at the poles
    lat = max(min(lat, 85.05112878), -85.05112878)
    lat_rad = math.radians(lat)

    x = (lng + 180.0) / 360.0 * scale
    y = (1 - math.log(math.tan(lat_rad) + 1 / math.cos(lat_rad)) / math.pi) / 2 * scale
    return x, y


def _load_font(size: int):
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", size)
    except OSError:
        return ImageFont.load_default()


def render_markers_to_image(
    markers: Sequence[PositionedMarker],
    zoom: float,
    width: int = 800,
    height: int = 600,
) -> bytes:
    """Render a marker layout to a PNG image.

    Args:
        markers: Positioned markers to draw.
        zoom: Zoom level the layout was resolved for.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        PNG image as bytes.
    """
    img = Image.new('RGBA', (width, height), BACKGROUND)
    draw = ImageDraw.Draw(img)
    font = _load_font(12)

    projected: List[Tuple[float, float]] = [project(m.lat, m.lng, zoom) for m in markers]

    if projected:
        center_x = sum(p[0] for p in projected) / len(projected)
        center_y = sum(p[1] for p in projected) / len(projected)
    else:
        center_x = center_y = 0.0

    # Lowest priority first so important bubbles end up on top
    order = sorted(range(len(markers)), key=lambda i: markers[i].priority)

    for index in order:
        marker = markers[index]
        style = PIN_STYLES.get(marker.priority, PIN_STYLES[1])
        color = hex_to_rgb(style["color"]) + (255,)
        shadow = hex_to_rgb(style["shadow"]) + (255,)
        radius = base_marker_radius(marker.event_count)

        anchor_x = projected[index][0] - center_x + width / 2
        anchor_y = projected[index][1] - center_y + height / 2
        bubble_x = anchor_x + marker.offset_x
        bubble_y = anchor_y + marker.offset_y

        # Tail from anchor to bubble
        tail_width = max(4, int(radius * 0.3))
        draw.line([(anchor_x, anchor_y), (bubble_x, bubble_y)], fill=shadow, width=tail_width)

        draw.ellipse(
            [(bubble_x - radius, bubble_y - radius), (bubble_x + radius, bubble_y + radius)],
            fill=color,
            outline=(255, 255, 255, 255) if marker.is_displaced else shadow,
            width=2,
        )

        draw.ellipse(
            [(anchor_x - 2, anchor_y - 2), (anchor_x + 2, anchor_y + 2)],
            fill=ANCHOR_COLOR,
        )

        label = str(marker.event_count)
        bbox = draw.textbbox((0, 0), label, font=font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]
        draw.text(
            (bubble_x - text_width / 2, bubble_y - text_height / 2),
            label,
            font=font,
            fill=(255, 255, 255, 255),
        )

    img_bytes = io.BytesIO()
    img.save(img_bytes, format='PNG')
    return img_bytes.getvalue()
