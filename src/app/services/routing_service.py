from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from src.domain.algorithms.csa import MIN_TRANSFER_TIME_S, find_routes
from src.domain.exceptions import TimetableNotReady
from src.domain.models import Journey, NoRouteFound

from .routing_helpers import seconds_since_midnight
from .timetable_service import TimetableSnapshot, TimetableStore

logger = logging.getLogger(__name__)

RouteResult = tuple[Journey, ...] | NoRouteFound

TIMETABLE_NOT_READY = "Timetable not ready"


@dataclass(slots=True)
class RoutingService:
    """Application service (use case) for journey planning.

    Every query works on one timetable snapshot and its own frontier, so
    concurrent queries and refreshes never see each other's state. Callers
    that need to resolve station indices in the result afterwards pass the
    snapshot they hold.
    """

    timetable_store: TimetableStore
    transfer_time_s: int = MIN_TRANSFER_TIME_S
    max_routes: int = 10

    def find_routes(
        self,
        *,
        departure_station: int,
        arrival_station: int,
        departure_time_s: int,
        num_routes: int = 1,
        snapshot: TimetableSnapshot | None = None,
    ) -> RouteResult:
        self._check_num_routes(num_routes)
        if snapshot is None:
            try:
                snapshot = self.timetable_store.current()
            except TimetableNotReady:
                logger.warning("Route query received before any timetable was loaded")
                return NoRouteFound(reason=TIMETABLE_NOT_READY)

        registry = snapshot.registry
        registry.check_index(departure_station)
        registry.check_index(arrival_station)

        result = find_routes(
            snapshot.timetable,
            departure_station=departure_station,
            arrival_station=arrival_station,
            departure_time_s=departure_time_s,
            num_routes=num_routes,
            station_count=len(registry),
            transfer_time_s=self.transfer_time_s,
        )
        if isinstance(result, NoRouteFound):
            logger.info(
                "No route from station %d to %d departing at %ds",
                departure_station,
                arrival_station,
                departure_time_s,
            )
        return result

    def find_routes_between(
        self,
        *,
        origin_id: str,
        destination_id: str,
        depart_at: datetime,
        num_routes: int = 1,
        snapshot: TimetableSnapshot | None = None,
    ) -> RouteResult:
        self._check_num_routes(num_routes)
        if snapshot is None:
            try:
                snapshot = self.timetable_store.current()
            except TimetableNotReady:
                logger.warning("Route query received before any timetable was loaded")
                return NoRouteFound(reason=TIMETABLE_NOT_READY)

        return self.find_routes(
            departure_station=snapshot.registry.index_of(origin_id),
            arrival_station=snapshot.registry.index_of(destination_id),
            departure_time_s=seconds_since_midnight(depart_at),
            num_routes=num_routes,
            snapshot=snapshot,
        )

    def _check_num_routes(self, num_routes: int) -> None:
        if not 1 <= num_routes <= self.max_routes:
            raise ValueError(
                f"num_routes must be between 1 and {self.max_routes}, got {num_routes}"
            )
