from __future__ import annotations

import math

from src.domain.exceptions import InvalidStationIndex
from src.domain.models.timetable import Connection

UNREACHED = math.inf


class ArrivalFrontier:
    """Earliest known arrival and improvement history per station.

    A frontier belongs to exactly one query: allocate a new one per call and
    never share it between threads.
    """

    __slots__ = ("_arrival_s", "_witnesses")

    def __init__(self, station_count: int) -> None:
        if station_count < 0:
            raise ValueError(f"Invalid station count: {station_count}")
        self._arrival_s: list[float] = [UNREACHED] * station_count
        self._witnesses: list[tuple[Connection, ...]] = [()] * station_count

    @classmethod
    def seeded(cls, station_count: int, station: int, time_s: int) -> ArrivalFrontier:
        frontier = cls(station_count)
        frontier.update(station, time_s, ())
        return frontier

    @property
    def station_count(self) -> int:
        return len(self._arrival_s)

    def _check(self, station: int) -> None:
        if not 0 <= station < len(self._arrival_s):
            raise InvalidStationIndex(station, len(self._arrival_s))

    def read(self, station: int) -> tuple[float, tuple[Connection, ...]]:
        self._check(station)
        return self._arrival_s[station], self._witnesses[station]

    def update(
        self, station: int, time_s: float, witnesses: tuple[Connection, ...]
    ) -> None:
        self._check(station)
        if time_s > self._arrival_s[station]:
            raise ValueError(
                f"Arrival at station {station} cannot move later "
                f"({self._arrival_s[station]} -> {time_s})"
            )
        self._arrival_s[station] = time_s
        self._witnesses[station] = tuple(witnesses)
