from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection

from src.domain.models.trip import Trip


class ITimetableRepository(ABC):
    """Port for loading stations and trips that feed the timetable."""

    @abstractmethod
    def load_stations(self) -> tuple[tuple[str, str], ...]:
        """Return (station_id, name) pairs; their order defines station indices."""

    @abstractmethod
    def load_trips(self, station_ids: Collection[str]) -> tuple[Trip, ...]:
        """Return trips restricted to `station_ids`, the stations already loaded."""
