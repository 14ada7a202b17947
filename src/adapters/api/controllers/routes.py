from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_routing_service
from src.adapters.api.schemas.routes import (
    ConnectionSchema,
    JourneyLegSchema,
    JourneySchema,
    RouteRequestSchema,
    RoutesResponseSchema,
    StationSchema,
)
from src.app.services.routing_helpers import service_datetime_from_seconds
from src.app.services.routing_service import TIMETABLE_NOT_READY, RoutingService
from src.domain.exceptions import TimetableNotReady
from src.domain.models import Journey, NoRouteFound, StationRegistry

router = APIRouter(tags=["routes"])


def _station_to_schema(registry: StationRegistry, index: int) -> StationSchema:
    station = registry.station(index)
    return StationSchema(
        index=station.index, station_id=station.station_id, name=station.name
    )


def _journey_to_schema(
    journey: Journey,
    *,
    registry: StationRegistry,
    trip_types: Mapping[str, str],
    depart_at: datetime,
) -> JourneySchema:
    def _at(seconds: int) -> datetime:
        return service_datetime_from_seconds(depart_at, seconds)

    return JourneySchema(
        depart_at=_at(journey.departure_time_s),
        arrive_at=_at(journey.arrival_time_s),
        duration_s=journey.duration_s,
        transfers=journey.transfers,
        legs=[
            JourneyLegSchema(
                trip_id=leg.trip_id,
                trip_type=trip_types.get(leg.trip_id),
                origin=_station_to_schema(registry, leg.dep_station),
                destination=_station_to_schema(registry, leg.arr_station),
                dep_track=leg.dep_track,
                arr_track=leg.arr_track,
                depart_at=_at(leg.dep_time_s),
                arrive_at=_at(leg.arr_time_s),
                stops=[_station_to_schema(registry, leg.dep_station)]
                + [_station_to_schema(registry, c.arr_station) for c in leg.connections],
            )
            for leg in journey.legs
        ],
        connections=[
            ConnectionSchema(
                trip_id=c.trip_id,
                dep_station=_station_to_schema(registry, c.dep_station),
                arr_station=_station_to_schema(registry, c.arr_station),
                dep_track=c.dep_track,
                arr_track=c.arr_track,
                dep_time_s=c.dep_time_s,
                arr_time_s=c.arr_time_s,
            )
            for c in journey.connections
        ],
    )


@router.post("/routes", response_model=RoutesResponseSchema)
def find_routes(
    req: RouteRequestSchema,
    service: RoutingService = Depends(get_routing_service),
) -> RoutesResponseSchema:
    try:
        snapshot = service.timetable_store.current()
    except TimetableNotReady:
        return RoutesResponseSchema(status="no_route", reason=TIMETABLE_NOT_READY)

    depart_at = req.depart_at or datetime.now()
    result = service.find_routes_between(
        origin_id=req.origin,
        destination_id=req.destination,
        depart_at=depart_at,
        num_routes=req.num_routes,
        snapshot=snapshot,
    )
    if isinstance(result, NoRouteFound):
        return RoutesResponseSchema(status="no_route", reason=result.reason)

    return RoutesResponseSchema(
        status="ok",
        journeys=[
            _journey_to_schema(
                j,
                registry=snapshot.registry,
                trip_types=snapshot.trip_types,
                depart_at=depart_at,
            )
            for j in result
        ],
    )
