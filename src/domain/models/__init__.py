from .journey import Journey, JourneyLeg, NoRouteFound
from .station import Station, StationRegistry
from .timetable import Connection, Timetable
from .trip import Trip, TripStop

__all__ = [
    "Connection",
    "Journey",
    "JourneyLeg",
    "NoRouteFound",
    "Station",
    "StationRegistry",
    "Timetable",
    "Trip",
    "TripStop",
]
