import logging

import uvicorn
from fastapi import FastAPI

from spotmap.catalog import Catalog
from spotmap.core.config import settings
from spotmap.core.errors import CatalogError
from spotmap.filtering.engine import filter_engine
from spotmap.models import QueryUpdate, SearchRequest, SearchResponse, SessionView
from spotmap.session import session_manager

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Spot Map Service", version="1.0")


@app.on_event("startup")
async def startup_event():
    logger.info(f"Loading catalog from {settings.CATALOG_PATH}")
    try:
        session_manager.start_from_file(settings.CATALOG_PATH)
    except CatalogError as e:
        logger.error(f"Refusing to start with a malformed catalog: {e}")
        raise


@app.post("/search", response_model=SearchResponse)
async def search(req: SearchRequest):
    catalog = session_manager.current.catalog

    # Unknown criterion ids are ignored, same as a stale toggle
    selected = []
    for cid in req.criteria_ids:
        criterion = catalog.find_criterion(cid)
        if criterion is not None and criterion not in selected:
            selected.append(criterion)

    results = filter_engine.compute(catalog.spots, req.query, selected)
    return SearchResponse(count=len(results), results=results)


@app.get("/session", response_model=SessionView)
async def get_session():
    return session_manager.current.view()


@app.put("/session/catalog", response_model=SessionView)
async def replace_catalog(catalog: Catalog):
    return session_manager.start(catalog).view()


@app.post("/session/query", response_model=SessionView)
async def change_query(update: QueryUpdate):
    session = session_manager.current
    session.type_query(update.text)
    return session.view()


@app.post("/session/criteria/{criterion_id}/toggle", response_model=SessionView)
async def toggle_criterion(criterion_id: int):
    session = session_manager.current
    session.coordinator.on_criterion_toggled(criterion_id)
    return session.view()


@app.post("/session/suggestions/{spot_id}/pick", response_model=SessionView)
async def pick_suggestion(spot_id: int):
    session = session_manager.current
    spot = session.get_spot(spot_id)
    session.coordinator.on_suggestion_picked(spot)
    return session.view()


@app.post("/session/markers/{spot_id}/pick", response_model=SessionView)
async def pick_marker(spot_id: int):
    session = session_manager.current
    spot = session.get_spot(spot_id)
    session.coordinator.on_marker_picked(spot)
    return session.view()


@app.post("/session/overlay/close", response_model=SessionView)
async def close_overlay():
    session = session_manager.current
    session.coordinator.on_overlay_closed()
    return session.view()


@app.get("/health")
async def health():
    catalog = session_manager.current.catalog
    return {"status": "ok", "spots": len(catalog.spots)}


if __name__ == "__main__":
    uvicorn.run(app, host=settings.SERVICE_HOST, port=settings.APP_PORT)
