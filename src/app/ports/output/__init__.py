from .timetable_repository import ITimetableRepository

__all__ = [
    "ITimetableRepository",
]
