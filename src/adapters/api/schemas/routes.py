from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class StationSchema(BaseModel):
    index: int
    station_id: str
    name: str


class ConnectionSchema(BaseModel):
    trip_id: str
    dep_station: StationSchema
    arr_station: StationSchema
    dep_track: str | None = None
    arr_track: str | None = None
    dep_time_s: int
    arr_time_s: int


class JourneyLegSchema(BaseModel):
    trip_id: str
    trip_type: str | None = None
    origin: StationSchema
    destination: StationSchema
    dep_track: str | None = None
    arr_track: str | None = None
    depart_at: datetime
    arrive_at: datetime
    stops: list[StationSchema] = []


class JourneySchema(BaseModel):
    depart_at: datetime
    arrive_at: datetime
    duration_s: int
    transfers: int
    legs: list[JourneyLegSchema] = []
    connections: list[ConnectionSchema] = []


class RouteRequestSchema(BaseModel):
    origin: str = Field(..., min_length=1, description="Departure station id")
    destination: str = Field(..., min_length=1, description="Arrival station id")
    depart_at: datetime | None = None
    num_routes: int = Field(1, ge=1)


class RoutesResponseSchema(BaseModel):
    status: Literal["ok", "no_route"]
    reason: str | None = None
    journeys: list[JourneySchema] = []


class TimetableStatusSchema(BaseModel):
    ready: bool
    stations: int | None = None
    connections: int | None = None
    loaded_at: datetime | None = None
