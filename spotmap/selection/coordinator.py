import logging
from typing import List, Optional

from spotmap.catalog import Catalog
from spotmap.core.config import settings
from spotmap.filtering.engine import filter_engine
from spotmap.models import CriterionChip, FilterState, Region, Spot
from spotmap.selection.widgets import (
    Keyboard,
    MapViewport,
    SpotDetailOverlay,
    SuggestionList,
)

logger = logging.getLogger(__name__)


class SelectionCoordinator:
    """
    Owns the live query, the selected criteria, the filtered spot list and
    the focused spot for one catalog.

    Every handler runs to completion synchronously and pushes the new
    markers and suggestions to the collaborators before returning.
    """

    def __init__(
        self,
        catalog: Catalog,
        map_surface=None,
        suggestion_list=None,
        overlay=None,
        keyboard=None,
    ):
        self.catalog = catalog
        self.map_surface = map_surface or MapViewport()
        self.suggestion_list = suggestion_list or SuggestionList()
        self.overlay = overlay or SpotDetailOverlay()
        self.keyboard = keyboard or Keyboard()

        self._query = ""
        self._selected = []
        self._filtered: List[Spot] = []
        self._focus: Optional[Spot] = None
        self._recompute()

    # --- Derived view ---

    @property
    def query(self) -> str:
        return self._query

    @property
    def selected_criterion_ids(self) -> List[int]:
        return [c.id for c in self._selected]

    @property
    def filter_state(self) -> FilterState:
        return FilterState(query=self._query, selected_criteria=list(self._selected))

    @property
    def focus(self) -> Optional[Spot]:
        return self._focus

    @property
    def visible_spots(self) -> List[Spot]:
        return list(self._filtered)

    @property
    def suggestions(self) -> List[Spot]:
        # No dropdown for an empty query or an empty result
        if self._query.strip() == "" or not self._filtered:
            return []
        return list(self._filtered)

    def criterion_chips(self) -> List[CriterionChip]:
        selected_ids = set(self.selected_criterion_ids)
        return [
            CriterionChip(id=c.id, attribute=c.attribute, selected=c.id in selected_ids)
            for c in self.catalog.criteria
        ]

    # --- Events ---

    def on_query_changed(self, text: str):
        logger.debug(f"Query changed: {text!r}")
        self._query = text
        self._recompute()

    def on_criterion_toggled(self, criterion_id: int):
        if any(c.id == criterion_id for c in self._selected):
            self._selected = [c for c in self._selected if c.id != criterion_id]
        else:
            criterion = self.catalog.find_criterion(criterion_id)
            if criterion is None:
                # Stale toggle from the UI, nothing to select
                logger.debug(f"Ignoring toggle of unknown criterion {criterion_id}")
                return
            self._selected = self._selected + [criterion]

        logger.debug(f"Selected criteria: {self.selected_criterion_ids}")
        self._recompute()

    def on_suggestion_picked(self, spot: Spot):
        logger.debug(f"Suggestion picked: {spot.id} ({spot.name})")
        self._query = spot.name
        # Explicit override, kept until the next query/criteria event
        self._filtered = [spot]
        self._focus = spot
        self._publish()

        region = Region(
            latitude=spot.latitude,
            longitude=spot.longitude,
            latitude_delta=settings.FOCUS_ZOOM_DELTA,
            longitude_delta=settings.FOCUS_ZOOM_DELTA,
        )
        self.map_surface.animate_to_region(region, settings.FOCUS_TRANSITION_MS)
        self.keyboard.dismiss()

    def on_marker_picked(self, spot: Spot):
        logger.debug(f"Marker picked: {spot.id} ({spot.name})")
        self._focus = spot
        self.overlay.open(spot)

    def on_overlay_closed(self):
        logger.debug("Overlay closed")
        self._focus = None
        self.overlay.close()

    # --- Internals ---

    def _recompute(self):
        self._filtered = filter_engine.compute(
            self.catalog.spots, self._query, self._selected
        )
        self._publish()

    def _publish(self):
        self.map_surface.render_markers(self.visible_spots)
        self.suggestion_list.render(self.suggestions)
