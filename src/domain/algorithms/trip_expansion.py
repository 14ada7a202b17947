from __future__ import annotations

from typing import Iterable, Iterator

from src.domain.models.station import StationRegistry
from src.domain.models.timetable import Connection, Timetable
from src.domain.models.trip import Trip

SECONDS_PER_DAY = 24 * 60 * 60


def connections_for_trip(trip: Trip, registry: StationRegistry) -> list[Connection]:
    """Pair every two consecutive stops of a trip into one connection."""

    return [
        Connection(
            trip_id=trip.trip_id,
            dep_station=registry.index_of(a.station_id),
            arr_station=registry.index_of(b.station_id),
            dep_time_s=a.departure_time_s,
            arr_time_s=b.arrival_time_s,
            dep_track=a.track,
            arr_track=b.track,
        )
        for a, b in zip(trip.stops, trip.stops[1:])
    ]


def with_next_day_copies(
    connections: Iterable[Connection], *, day_s: int = SECONDS_PER_DAY
) -> Iterator[Connection]:
    # Journeys crossing midnight are queried against same-day departure times.
    for c in connections:
        yield c
        yield c.shifted(day_s)


def build_timetable(
    trips: Iterable[Trip],
    registry: StationRegistry,
    *,
    include_next_day: bool = True,
) -> Timetable:
    connections: list[Connection] = []
    for trip in trips:
        connections.extend(connections_for_trip(trip, registry))

    if include_next_day:
        connections = list(with_next_day_copies(connections))

    return Timetable.from_unsorted(connections)
