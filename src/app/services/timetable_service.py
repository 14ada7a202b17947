from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from src.app.ports.output import ITimetableRepository
from src.domain.algorithms.trip_expansion import build_timetable
from src.domain.exceptions import InvalidStationIndex, TimetableNotReady
from src.domain.models import StationRegistry, Timetable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TimetableSnapshot:
    registry: StationRegistry
    timetable: Timetable
    loaded_at: datetime
    trip_types: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class TimetableStore:
    """Holds the currently published timetable snapshot.

    A refresh builds a complete snapshot first and publishes it with a single
    reference swap, so a query that grabbed a snapshot keeps seeing it for
    its whole duration.
    """

    repository: ITimetableRepository
    include_next_day: bool = True

    _snapshot: TimetableSnapshot | None = field(default=None, init=False)
    _refresh_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    @property
    def is_ready(self) -> bool:
        return self._snapshot is not None

    def current(self) -> TimetableSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise TimetableNotReady("No timetable has been loaded yet")
        return snapshot

    def publish(self, snapshot: TimetableSnapshot) -> None:
        highest = snapshot.timetable.max_station_index()
        if highest >= len(snapshot.registry):
            raise InvalidStationIndex(highest, len(snapshot.registry))
        self._snapshot = snapshot

    def refresh(self) -> TimetableSnapshot:
        with self._refresh_lock:
            registry = StationRegistry.from_stations(self.repository.load_stations())
            trips = self.repository.load_trips(
                tuple(s.station_id for s in registry.stations)
            )

            timetable = build_timetable(
                trips, registry, include_next_day=self.include_next_day
            )
            snapshot = TimetableSnapshot(
                registry=registry,
                timetable=timetable,
                loaded_at=datetime.now(timezone.utc),
                trip_types={t.trip_id: t.trip_type for t in trips if t.trip_type},
            )
            self.publish(snapshot)

        logger.info(
            "Published timetable: %d stations, %d trips, %d connections",
            len(registry),
            len(trips),
            len(timetable),
        )
        return snapshot
