from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator

from src.domain.exceptions import UnsortedTimetable


@dataclass(frozen=True, slots=True)
class Connection:
    """One board-to-alight segment of a single trip.

    Times are seconds since service day midnight (may exceed 24h).
    """

    trip_id: str
    dep_station: int
    arr_station: int
    dep_time_s: int
    arr_time_s: int
    dep_track: str | None = None
    arr_track: str | None = None

    def shifted(self, seconds: int) -> Connection:
        return replace(
            self,
            dep_time_s=self.dep_time_s + seconds,
            arr_time_s=self.arr_time_s + seconds,
        )


@dataclass(frozen=True, slots=True)
class Timetable:
    """Connections ordered by non-decreasing departure time.

    The scan relies on this ordering, so it is checked once here and never
    re-established later.
    """

    connections: tuple[Connection, ...] = ()

    def __post_init__(self) -> None:
        for i in range(1, len(self.connections)):
            prev = self.connections[i - 1].dep_time_s
            cur = self.connections[i].dep_time_s
            if cur < prev:
                raise UnsortedTimetable(i, cur, prev)

    @classmethod
    def from_unsorted(cls, connections: Iterable[Connection]) -> Timetable:
        ordered = sorted(connections, key=lambda c: (c.dep_time_s, c.arr_time_s))
        return cls(connections=tuple(ordered))

    def __len__(self) -> int:
        return len(self.connections)

    def __iter__(self) -> Iterator[Connection]:
        return iter(self.connections)

    def max_station_index(self) -> int:
        return max(
            (max(c.dep_station, c.arr_station) for c in self.connections),
            default=-1,
        )
