from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_timetable_store
from src.adapters.api.schemas.routes import StationSchema, TimetableStatusSchema
from src.app.services.timetable_service import TimetableStore
from src.domain.exceptions import TimetableNotReady

router = APIRouter(tags=["timetable"])


def _status(store: TimetableStore) -> TimetableStatusSchema:
    try:
        snapshot = store.current()
    except TimetableNotReady:
        return TimetableStatusSchema(ready=False)
    return TimetableStatusSchema(
        ready=True,
        stations=len(snapshot.registry),
        connections=len(snapshot.timetable),
        loaded_at=snapshot.loaded_at,
    )


@router.get("/stations", response_model=list[StationSchema])
def list_stations(
    store: TimetableStore = Depends(get_timetable_store),
) -> list[StationSchema]:
    try:
        snapshot = store.current()
    except TimetableNotReady:
        return []
    return [
        StationSchema(index=s.index, station_id=s.station_id, name=s.name)
        for s in snapshot.registry.stations
    ]


@router.get("/timetable", response_model=TimetableStatusSchema)
def timetable_status(
    store: TimetableStore = Depends(get_timetable_store),
) -> TimetableStatusSchema:
    return _status(store)


@router.post("/timetable/refresh", response_model=TimetableStatusSchema)
def refresh_timetable(
    store: TimetableStore = Depends(get_timetable_store),
) -> TimetableStatusSchema:
    store.refresh()
    return _status(store)
