from .routing import (
    InvalidStationIndex,
    RoutingError,
    TimetableNotReady,
    UnknownStation,
    UnsortedTimetable,
)

__all__ = [
    "InvalidStationIndex",
    "RoutingError",
    "TimetableNotReady",
    "UnknownStation",
    "UnsortedTimetable",
]
