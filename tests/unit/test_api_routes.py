from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

import httpx
import pytest

from src.adapters.api.dependencies import get_routing_service, get_timetable_store
from src.app.services.routing_service import RoutingService
from src.app.services.timetable_service import TimetableStore
from src.domain.models import Trip, TripStop
from src.main import app

EIGHT_AM = 8 * 3600


@dataclass(slots=True)
class FakeTimetableRepository:
    def load_stations(self) -> tuple[tuple[str, str], ...]:
        return (("A", "Alpha"), ("B", "Bravo"), ("C", "Charlie"), ("D", "Delta"))

    def load_trips(self, station_ids: Collection[str]) -> tuple[Trip, ...]:
        return (
            Trip(
                trip_id="T1",
                stops=(
                    TripStop("A", EIGHT_AM, EIGHT_AM + 60, track="1"),
                    TripStop("B", EIGHT_AM + 600, EIGHT_AM + 660, track="3"),
                    TripStop("C", EIGHT_AM + 1200, EIGHT_AM + 1200, track="5"),
                ),
                trip_type="RE",
            ),
            Trip(
                trip_id="T2",
                stops=(
                    TripStop("A", EIGHT_AM + 120, EIGHT_AM + 120),
                    TripStop("C", EIGHT_AM + 900, EIGHT_AM + 900),
                ),
            ),
        )


def _override(store: TimetableStore) -> None:
    app.dependency_overrides[get_timetable_store] = lambda: store
    app.dependency_overrides[get_routing_service] = lambda: RoutingService(
        timetable_store=store, max_routes=3
    )


def _ready_store() -> TimetableStore:
    store = TimetableStore(repository=FakeTimetableRepository())
    store.refresh()
    return store


async def _post(path: str, json: dict | None = None) -> httpx.Response:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.post(path, json=json)


async def _get(path: str) -> httpx.Response:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(path)


@pytest.fixture(autouse=True)
def _clear_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_returns_journeys_sorted_by_arrival() -> None:
    _override(_ready_store())

    resp = await _post(
        "/routes",
        json={
            "origin": "A",
            "destination": "C",
            "depart_at": "2026-01-08T08:00:00",
            "num_routes": 2,
        },
    )

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["status"] == "ok"
    journeys = payload["journeys"]
    assert [j["arrive_at"] for j in journeys] == [
        "2026-01-08T08:15:00",
        "2026-01-08T08:20:00",
    ]
    direct, via_b = journeys
    assert direct["legs"][0]["trip_id"] == "T2"
    assert via_b["transfers"] == 0
    leg = via_b["legs"][0]
    assert [s["station_id"] for s in leg["stops"]] == ["A", "B", "C"]
    assert (leg["dep_track"], leg["arr_track"]) == ("1", "5")
    assert leg["trip_type"] == "RE"
    assert direct["legs"][0]["trip_type"] is None
    assert len(via_b["connections"]) == 2


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_reports_no_route() -> None:
    _override(_ready_store())

    resp = await _post("/routes", json={"origin": "A", "destination": "D"})

    assert resp.status_code == 200
    assert resp.json()["status"] == "no_route"
    assert resp.json()["journeys"] == []


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_before_timetable_loaded() -> None:
    _override(TimetableStore(repository=FakeTimetableRepository()))

    resp = await _post("/routes", json={"origin": "A", "destination": "C"})

    assert resp.status_code == 200
    assert resp.json() == {
        "status": "no_route",
        "reason": "Timetable not ready",
        "journeys": [],
    }


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_unknown_station_is_404() -> None:
    _override(_ready_store())

    resp = await _post("/routes", json={"origin": "A", "destination": "Nowhere"})

    assert resp.status_code == 404
    assert "Nowhere" in resp.json()["detail"]


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_too_many_routes_is_400() -> None:
    _override(_ready_store())

    resp = await _post(
        "/routes", json={"origin": "A", "destination": "C", "num_routes": 4}
    )

    assert resp.status_code == 400


@pytest.mark.unit
@pytest.mark.anyio
async def test_stations_and_timetable_status() -> None:
    store = TimetableStore(repository=FakeTimetableRepository())
    _override(store)

    assert (await _get("/stations")).json() == []
    assert (await _get("/timetable")).json()["ready"] is False

    refreshed = await _post("/timetable/refresh")
    assert refreshed.status_code == 200
    assert refreshed.json()["ready"] is True
    # 3 connections, each with a next-day copy.
    assert refreshed.json()["connections"] == 6

    stations = (await _get("/stations")).json()
    assert [s["station_id"] for s in stations] == ["A", "B", "C", "D"]
    assert stations[2] == {"index": 2, "station_id": "C", "name": "Charlie"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_health() -> None:
    resp = await _get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
