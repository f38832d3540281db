"""
In-memory collaborators driven by the SelectionCoordinator.

They hold what a screen would show (markers, suggestion rows, the detail
overlay, keyboard visibility) so the HTTP session can render it as JSON.
"""
import logging
from typing import List, Optional

from spotmap.core.config import settings
from spotmap.models import Marker, OverlayView, Region, Spot, SpotDetail

logger = logging.getLogger(__name__)

NO_IMAGE_TEXT = "No image available"
NO_SPOT_TEXT = "No spot selected"


def initial_region() -> Region:
    return Region(
        latitude=settings.INITIAL_LATITUDE,
        longitude=settings.INITIAL_LONGITUDE,
        latitude_delta=settings.INITIAL_DELTA,
        longitude_delta=settings.INITIAL_DELTA,
    )


class MapViewport:
    def __init__(self, region: Optional[Region] = None):
        self.region = region or initial_region()
        self.markers: List[Marker] = []
        self.transition_ms: Optional[int] = None

    def render_markers(self, spots: List[Spot]):
        self.markers = [
            Marker(id=s.id, latitude=s.latitude, longitude=s.longitude) for s in spots
        ]

    def animate_to_region(self, region: Region, duration_ms: int):
        logger.debug(
            f"Recenter to ({region.latitude}, {region.longitude}) over {duration_ms}ms"
        )
        self.region = region
        self.transition_ms = duration_ms


class SuggestionList:
    def __init__(self):
        self.items: List[Spot] = []

    def render(self, spots: List[Spot]):
        self.items = list(spots)


class SpotDetailOverlay:
    """Bottom sheet showing one spot. Driven only through open()/close()."""

    def __init__(self):
        self.spot: Optional[Spot] = None
        self.visible = False

    def open(self, spot: Spot):
        self.spot = spot
        self.visible = True

    def close(self):
        self.visible = False
        self.spot = None

    def render(self) -> OverlayView:
        if self.spot is None:
            return OverlayView(visible=self.visible, message=NO_SPOT_TEXT)

        # Spots without images still render, with a placeholder
        images = self.spot.image_url or []
        image = images[0] if images else None
        detail = SpotDetail(
            name=self.spot.name,
            image=image,
            image_placeholder=None if image else NO_IMAGE_TEXT,
            criteria=[c.attribute for c in self.spot.criteria],
        )
        return OverlayView(visible=self.visible, detail=detail)


class Keyboard:
    def __init__(self):
        self.visible = False

    def show(self):
        self.visible = True

    def dismiss(self):
        self.visible = False
