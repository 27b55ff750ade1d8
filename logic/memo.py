"""
Memoized marker placement.

Map views re-render far more often than their markers or zoom change. The
memo keeps the last layout and hands it back while the inputs are the
same, so unchanged renders skip the collision pass.

Author: Venue Map team
Date: 2026-10-17
"""

import logging
import threading
from typing import Callable, List, Optional, Sequence, Tuple

from .collision import resolve_marker_placement
from .markers import Marker, PositionedMarker

logger = logging.getLogger(__name__)


def _same_markers(previous: Tuple[Marker, ...], current: Sequence[Marker]) -> bool:
    """Shallow comparison: same length, each element identical or equal."""
    if len(previous) != len(current):
        return False
    return all(a is b or a == b for a, b in zip(previous, current))


class MarkerPlacementMemo:
    """Single-slot cache in front of ``resolve_marker_placement``.

    Attributes:
        hits: Number of calls answered from the cache.
        misses: Number of calls that ran the resolver.
    """

    def __init__(
        self,
        resolver: Callable[[Sequence[Marker], float], List[PositionedMarker]] = resolve_marker_placement,
    ):
        self._resolver = resolver
        self._lock = threading.Lock()
        self._markers: Optional[Tuple[Marker, ...]] = None
        self._zoom: Optional[float] = None
        self._result: List[PositionedMarker] = []
        self.hits = 0
        self.misses = 0

    def __call__(self, markers: Sequence[Marker], zoom: float) -> List[PositionedMarker]:
        """Get the layout for markers at zoom, reusing the last one if unchanged.

        Args:
            markers: Markers to lay out.
            zoom: Map zoom level.

        Returns:
            Positioned markers. The returned list is a copy, so callers may
            modify it without affecting the cache.
        """
        with self._lock:
            if (
                self._markers is not None
                and self._zoom == zoom
                and _same_markers(self._markers, markers)
            ):
                self.hits += 1
                return list(self._result)

            self.misses += 1
            snapshot = tuple(markers)
            result = self._resolver(snapshot, zoom)

            self._markers = snapshot
            self._zoom = zoom
            self._result = result

            logger.debug("Placement cache miss (%d markers, zoom %s)", len(snapshot), zoom)
            return list(result)

    def clear(self):
        """Forget the cached layout."""
        with self._lock:
            self._markers = None
            self._zoom = None
            self._result = []
