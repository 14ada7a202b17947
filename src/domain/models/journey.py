from __future__ import annotations

from dataclasses import dataclass

from .timetable import Connection


@dataclass(frozen=True, slots=True)
class JourneyLeg:
    """Consecutive connections ridden on the same trip."""

    trip_id: str
    connections: tuple[Connection, ...]

    @property
    def dep_station(self) -> int:
        return self.connections[0].dep_station

    @property
    def arr_station(self) -> int:
        return self.connections[-1].arr_station

    @property
    def dep_track(self) -> str | None:
        return self.connections[0].dep_track

    @property
    def arr_track(self) -> str | None:
        return self.connections[-1].arr_track

    @property
    def dep_time_s(self) -> int:
        return self.connections[0].dep_time_s

    @property
    def arr_time_s(self) -> int:
        return self.connections[-1].arr_time_s


@dataclass(frozen=True, slots=True)
class Journey:
    connections: tuple[Connection, ...]

    def __post_init__(self) -> None:
        if not self.connections:
            raise ValueError("A journey needs at least one connection")

    @property
    def departure_time_s(self) -> int:
        return self.connections[0].dep_time_s

    @property
    def arrival_time_s(self) -> int:
        return self.connections[-1].arr_time_s

    @property
    def duration_s(self) -> int:
        return self.arrival_time_s - self.departure_time_s

    @property
    def legs(self) -> tuple[JourneyLeg, ...]:
        groups: list[list[Connection]] = []
        for c in self.connections:
            if groups and groups[-1][-1].trip_id == c.trip_id:
                groups[-1].append(c)
            else:
                groups.append([c])
        return tuple(JourneyLeg(trip_id=g[0].trip_id, connections=tuple(g)) for g in groups)

    @property
    def transfers(self) -> int:
        return max(0, len(self.legs) - 1)


@dataclass(frozen=True, slots=True)
class NoRouteFound:
    """Query outcome when the arrival station cannot be reached.

    This is a regular result value, distinct from any list of journeys.
    """

    reason: str = "No route found"
