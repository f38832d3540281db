import json

import pytest
from httpx import AsyncClient, ASGITransport

from spotmap.catalog import Catalog
from spotmap.core.config import settings
from spotmap.core.errors import CatalogError
from spotmap.main import app, startup_event
from spotmap.session import session_manager

MOCK_CATALOG = {
    "criteria": [
        {"id": 1, "attribute": "Quiet"},
        {"id": 2, "attribute": "Outlets"},
    ],
    "spots": [
        {
            "id": 1,
            "name": "Koerner Library",
            "latitude": 49.269,
            "longitude": -123.255,
            "criteria": [{"id": 1, "attribute": "Quiet"}],
            "image_url": ["https://example.org/koerner.jpg"],
        },
        {
            "id": 2,
            "name": "Life Sciences Library",
            "latitude": 49.262,
            "longitude": -123.245,
            "criteria": [
                {"id": 1, "attribute": "Quiet"},
                {"id": 2, "attribute": "Outlets"},
            ],
        },
        {
            "id": 3,
            "name": "The Nest",
            "latitude": 49.266,
            "longitude": -123.249,
            "criteria": [{"id": 2, "attribute": "Outlets"}],
        },
    ],
}


@pytest.fixture(autouse=True)
def fresh_session():
    session_manager.start(Catalog.from_records(MOCK_CATALOG))
    yield
    session_manager.start(Catalog())


def client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_health():
    async with client() as ac:
        response = await ac.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "spots": 3}


@pytest.mark.asyncio
async def test_search_ranks_and_filters():
    async with client() as ac:
        response = await ac.post("/search", json={"query": "li", "criteria_ids": []})
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [r["name"] for r in data["results"]] == [
            "Life Sciences Library",
            "Koerner Library",
        ]

        # Unknown criterion ids are ignored
        response = await ac.post("/search", json={"query": "", "criteria_ids": [2, 42]})
        assert [r["id"] for r in response.json()["results"]] == [2, 3]


@pytest.mark.asyncio
async def test_initial_session_view():
    async with client() as ac:
        response = await ac.get("/session")
    data = response.json()
    assert data["query"] == ""
    assert data["suggestions"] == []
    assert [m["id"] for m in data["markers"]] == [1, 2, 3]
    assert data["region"]["latitude"] == 49.2642
    assert data["overlay"] == {"visible": False, "detail": None, "message": "No spot selected"}
    assert [c["selected"] for c in data["chips"]] == [False, False]


@pytest.mark.asyncio
async def test_session_flow():
    async with client() as ac:
        # 1. Typing
        data = (await ac.post("/session/query", json={"text": "library"})).json()
        assert [s["id"] for s in data["suggestions"]] == [1, 2]
        assert data["keyboard_visible"] is True

        # 2. Criteria toggle
        data = (await ac.post("/session/criteria/2/toggle")).json()
        assert data["selected_criteria"] == [2]
        assert [m["id"] for m in data["markers"]] == [2]

        # Unknown criterion is a silent no-op
        response = await ac.post("/session/criteria/99/toggle")
        assert response.status_code == 200
        assert response.json()["selected_criteria"] == [2]

        data = (await ac.post("/session/criteria/2/toggle")).json()
        assert data["selected_criteria"] == []

        # 3. Suggestion pick
        data = (await ac.post("/session/suggestions/2/pick")).json()
        assert data["query"] == "Life Sciences Library"
        assert [m["id"] for m in data["markers"]] == [2]
        assert data["focus"] == 2
        assert data["region"] == {
            "latitude": 49.262,
            "longitude": -123.245,
            "latitude_delta": 0.01,
            "longitude_delta": 0.01,
        }
        assert data["transition_ms"] == 1000
        assert data["keyboard_visible"] is False
        assert data["overlay"]["visible"] is False

        # 4. Marker pick opens the overlay
        data = (await ac.post("/session/markers/1/pick")).json()
        assert data["focus"] == 1
        assert data["overlay"]["visible"] is True
        assert data["overlay"]["detail"]["image"] == "https://example.org/koerner.jpg"
        assert data["query"] == "Life Sciences Library"

        # 5. Close
        data = (await ac.post("/session/overlay/close")).json()
        assert data["focus"] is None
        assert data["overlay"]["visible"] is False
        assert [m["id"] for m in data["markers"]] == [2]


@pytest.mark.asyncio
async def test_pick_unknown_spot_is_404():
    async with client() as ac:
        response = await ac.post("/session/markers/404/pick")
        assert response.status_code == 404
        assert response.json()["detail"] == "Spot 404 not found"

        response = await ac.post("/session/suggestions/404/pick")
        assert response.status_code == 404


@pytest.mark.asyncio
async def test_replace_catalog_restarts_session():
    async with client() as ac:
        await ac.post("/session/query", json={"text": "nest"})

        response = await ac.put(
            "/session/catalog",
            json={
                "criteria": [],
                "spots": [{"id": 9, "name": "Rose Garden", "latitude": 49.27, "longitude": -123.26}],
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["query"] == ""
        assert [m["id"] for m in data["markers"]] == [9]


@pytest.mark.asyncio
async def test_replace_catalog_rejects_duplicates():
    async with client() as ac:
        spot = {"id": 1, "name": "A", "latitude": 0, "longitude": 0}
        response = await ac.put("/session/catalog", json={"spots": [spot, spot], "criteria": []})
        assert response.status_code == 422

        # Previous session untouched
        response = await ac.get("/health")
        assert response.json()["spots"] == 3


def test_start_from_missing_file_starts_empty(tmp_path):
    session = session_manager.start_from_file(str(tmp_path / "missing.json"))
    assert session.catalog.spots == []
    assert session.view().markers == []


def test_start_from_file_rejects_duplicate_ids(tmp_path):
    spot = {"id": 1, "name": "A", "latitude": 0, "longitude": 0}
    path = tmp_path / "spots.json"
    path.write_text(json.dumps({"spots": [spot, spot], "criteria": []}), encoding="utf-8")

    with pytest.raises(CatalogError):
        session_manager.start_from_file(str(path))


def test_start_from_file_rejects_invalid_json(tmp_path):
    path = tmp_path / "spots.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogError):
        session_manager.start_from_file(str(path))

    # The running session is kept
    assert len(session_manager.current.catalog.spots) == 3


@pytest.mark.asyncio
async def test_startup_loads_catalog_path(tmp_path, monkeypatch):
    path = tmp_path / "spots.json"
    catalog = {
        "criteria": [],
        "spots": [
            {"id": 1, "name": "Rose Garden", "latitude": 49.27, "longitude": -123.26},
            {"id": 2, "name": "Museum", "latitude": 49.26, "longitude": -123.25},
        ],
    }
    path.write_text(json.dumps(catalog), encoding="utf-8")
    monkeypatch.setattr(settings, "CATALOG_PATH", str(path))

    await startup_event()

    async with client() as ac:
        response = await ac.get("/health")
    assert response.json() == {"status": "ok", "spots": 2}


@pytest.mark.asyncio
async def test_startup_fails_on_malformed_catalog(tmp_path, monkeypatch):
    path = tmp_path / "spots.json"
    path.write_text(json.dumps({"spots": [{"id": 1, "name": "No coordinates"}]}), encoding="utf-8")
    monkeypatch.setattr(settings, "CATALOG_PATH", str(path))

    with pytest.raises(CatalogError):
        await startup_event()
