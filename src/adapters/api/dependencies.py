from __future__ import annotations

from functools import lru_cache

from src.adapters.persistence.local_timetable_repository import LocalTimetableRepository
from src.adapters.persistence.s3_timetable_repository import S3TimetableRepository
from src.adapters.settings import RoutingSettings
from src.app.ports.output import ITimetableRepository
from src.app.services.routing_service import RoutingService
from src.app.services.timetable_service import TimetableStore


@lru_cache(maxsize=1)
def get_settings() -> RoutingSettings:
    return RoutingSettings.from_env()


@lru_cache(maxsize=1)
def get_timetable_store() -> TimetableStore:
    # One store per process: every request must see the same published snapshot.
    settings = get_settings()

    repository: ITimetableRepository
    if settings.timetable_source == "s3":
        repository = S3TimetableRepository()
    else:
        repository = LocalTimetableRepository()

    return TimetableStore(
        repository=repository, include_next_day=settings.include_next_day
    )


def get_routing_service() -> RoutingService:
    settings = get_settings()
    return RoutingService(
        timetable_store=get_timetable_store(),
        transfer_time_s=settings.transfer_time_s,
        max_routes=settings.max_routes,
    )
