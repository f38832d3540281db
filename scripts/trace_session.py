import json
import logging
import os
import sys

from spotmap.catalog import load_catalog
from spotmap.core.config import settings
from spotmap.session import MapSession

os.makedirs(settings.LOG_DIR, exist_ok=True)
logging.basicConfig(
    level=logging.DEBUG,
    handlers=[logging.StreamHandler(), logging.FileHandler(settings.TRACE_LOG_PATH)],
)
logger = logging.getLogger("trace_session")


def dump(step: str, session: MapSession):
    view = session.view()
    logger.info(f"\n{'='*60}\n{step}\n{'='*60}")
    logger.info(
        json.dumps(
            {
                "query": view.query,
                "selected_criteria": view.selected_criteria,
                "suggestions": [s.name for s in view.suggestions],
                "markers": [m.id for m in view.markers],
                "region": view.region.model_dump(),
                "focus": view.focus,
                "overlay": view.overlay.model_dump(),
                "keyboard_visible": view.keyboard_visible,
            },
            indent=2,
            ensure_ascii=False,
        )
    )


def trace(path: str, query: str):
    session = MapSession(load_catalog(path))
    coordinator = session.coordinator
    dump("[0] Initial", session)

    session.type_query(query)
    dump(f"[1] Query {query!r}", session)

    if session.catalog.criteria:
        first = session.catalog.criteria[0]
        coordinator.on_criterion_toggled(first.id)
        dump(f"[2] Toggle criterion {first.id} ({first.attribute})", session)
        coordinator.on_criterion_toggled(first.id)
        dump(f"[3] Toggle criterion {first.id} again", session)

    if coordinator.suggestions:
        picked = coordinator.suggestions[0]
        coordinator.on_suggestion_picked(picked)
        dump(f"[4] Suggestion picked: {picked.name}", session)

        coordinator.on_marker_picked(picked)
        dump(f"[5] Marker picked: {picked.name}", session)

        coordinator.on_overlay_closed()
        dump("[6] Overlay closed", session)


if __name__ == "__main__":
    catalog_path = sys.argv[1] if len(sys.argv) > 1 else settings.CATALOG_PATH
    search_query = sys.argv[2] if len(sys.argv) > 2 else "li"
    trace(catalog_path, search_query)
