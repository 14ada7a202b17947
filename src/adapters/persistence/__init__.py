from .local_timetable_repository import LocalTimetableRepository
from .s3_timetable_repository import S3TimetableRepository

__all__ = [
    "LocalTimetableRepository",
    "S3TimetableRepository",
]
