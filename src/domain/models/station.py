from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from src.domain.exceptions import InvalidStationIndex, UnknownStation


@dataclass(frozen=True, slots=True)
class Station:
    index: int
    station_id: str
    name: str


@dataclass(frozen=True, slots=True)
class StationRegistry:
    """Dense station indices assigned at load time.

    The number of registered stations is the upper bound for every station
    index used by a query.
    """

    stations: tuple[Station, ...] = ()
    _index_by_id: dict[str, int] = field(
        init=False, default_factory=dict, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for pos, station in enumerate(self.stations):
            if station.index != pos:
                raise ValueError(
                    f"Station {station.station_id!r} has index {station.index}, expected {pos}"
                )
            if station.station_id in self._index_by_id:
                raise ValueError(f"Duplicate station id: {station.station_id}")
            self._index_by_id[station.station_id] = pos

    @classmethod
    def from_stations(cls, entries: Iterable[tuple[str, str]]) -> StationRegistry:
        return cls(
            stations=tuple(
                Station(index=i, station_id=station_id, name=name)
                for i, (station_id, name) in enumerate(entries)
            )
        )

    def __len__(self) -> int:
        return len(self.stations)

    def __contains__(self, station_id: object) -> bool:
        return station_id in self._index_by_id

    def index_of(self, station_id: str) -> int:
        try:
            return self._index_by_id[station_id]
        except KeyError:
            raise UnknownStation(station_id) from None

    def check_index(self, index: int) -> None:
        if not 0 <= index < len(self.stations):
            raise InvalidStationIndex(index, len(self.stations))

    def station(self, index: int) -> Station:
        self.check_index(index)
        return self.stations[index]
