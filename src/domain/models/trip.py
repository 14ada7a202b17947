from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TripStop:
    station_id: str
    arrival_time_s: int
    departure_time_s: int
    track: str | None = None


@dataclass(frozen=True, slots=True)
class Trip:
    """A single vehicle run as an ordered sequence of stops."""

    trip_id: str
    stops: tuple[TripStop, ...]
    trip_type: str | None = None
