import logging

from spotmap.catalog import Catalog, load_catalog
from spotmap.core.errors import CatalogFileMissing, SpotNotFound
from spotmap.models import SessionView, Spot
from spotmap.selection.coordinator import SelectionCoordinator
from spotmap.selection.widgets import (
    Keyboard,
    MapViewport,
    SpotDetailOverlay,
    SuggestionList,
)

logger = logging.getLogger(__name__)


class MapSession:
    """One map screen: a coordinator plus the widgets it drives."""

    def __init__(self, catalog: Catalog):
        self.map_surface = MapViewport()
        self.suggestion_list = SuggestionList()
        self.overlay = SpotDetailOverlay()
        self.keyboard = Keyboard()
        self.coordinator = SelectionCoordinator(
            catalog,
            map_surface=self.map_surface,
            suggestion_list=self.suggestion_list,
            overlay=self.overlay,
            keyboard=self.keyboard,
        )

    @property
    def catalog(self) -> Catalog:
        return self.coordinator.catalog

    def get_spot(self, spot_id: int) -> Spot:
        spot = self.catalog.find_spot(spot_id)
        if spot is None:
            raise SpotNotFound(spot_id)
        return spot

    def type_query(self, text: str):
        # Typing implies the text input has focus
        self.keyboard.show()
        self.coordinator.on_query_changed(text)

    def view(self) -> SessionView:
        focus = self.coordinator.focus
        return SessionView(
            query=self.coordinator.query,
            selected_criteria=self.coordinator.selected_criterion_ids,
            chips=self.coordinator.criterion_chips(),
            suggestions=self.suggestion_list.items,
            markers=self.map_surface.markers,
            region=self.map_surface.region,
            transition_ms=self.map_surface.transition_ms,
            focus=focus.id if focus else None,
            overlay=self.overlay.render(),
            keyboard_visible=self.keyboard.visible,
        )


class SessionManager:
    def __init__(self):
        self.current = MapSession(Catalog())

    def start(self, catalog: Catalog) -> MapSession:
        # A new catalog always means a fresh session
        logger.info(
            f"Starting session with {len(catalog.spots)} spots, "
            f"{len(catalog.criteria)} criteria"
        )
        self.current = MapSession(catalog)
        return self.current

    def start_from_file(self, path: str) -> MapSession:
        try:
            catalog = load_catalog(path)
        except CatalogFileMissing as e:
            logger.warning(f"No catalog loaded, starting empty: {e}")
            return self.start(Catalog())
        return self.start(catalog)


session_manager = SessionManager()
