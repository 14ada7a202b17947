from __future__ import annotations

import os
from collections.abc import Collection
from dataclasses import dataclass
from pathlib import Path

from src.app.ports.output import ITimetableRepository
from src.domain.models.trip import Trip

from .gtfs_parsing import parse_platforms, parse_stations, parse_trip_types, parse_trips


@dataclass(slots=True)
class LocalTimetableRepository(ITimetableRepository):
    """Loads stations and trips from a directory of GTFS .txt files.

    Env vars:
      - GTFS_PATH: path to directory containing stops.txt, stop_times.txt
        (trips.txt is optional)
    """

    base_path: str | Path | None = None

    def _base(self) -> Path:
        value = self.base_path or os.getenv("GTFS_PATH") or "data/gtfs"
        return Path(value)

    def load_stations(self) -> tuple[tuple[str, str], ...]:
        with (self._base() / "stops.txt").open("r", encoding="utf-8", newline="") as fp:
            return parse_stations(fp)

    def load_trips(self, station_ids: Collection[str]) -> tuple[Trip, ...]:
        base = self._base()

        trip_types: dict[str, str] = {}
        trips_path = base / "trips.txt"
        if trips_path.exists():
            with trips_path.open("r", encoding="utf-8", newline="") as fp:
                trip_types = parse_trip_types(fp)

        with (base / "stops.txt").open("r", encoding="utf-8", newline="") as fp:
            platforms = parse_platforms(fp)

        with (base / "stop_times.txt").open("r", encoding="utf-8", newline="") as fp:
            return parse_trips(
                fp,
                known_stations=station_ids,
                trip_types=trip_types,
                platforms=platforms,
            )
