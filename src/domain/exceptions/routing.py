class RoutingError(Exception):
    """Base exception for route calculation failures."""


class InvalidStationIndex(RoutingError, IndexError):
    """Raised when a station index falls outside the loaded station range."""

    def __init__(self, index: int, station_count: int) -> None:
        super().__init__(
            f"Station index {index} outside [0, {station_count})"
        )
        self.index = index
        self.station_count = station_count


class UnknownStation(RoutingError, KeyError):
    """Raised when a station identifier is not part of the loaded registry."""

    def __init__(self, station_id: str) -> None:
        super().__init__(station_id)
        self.station_id = station_id

    def __str__(self) -> str:
        return f"Unknown station: {self.station_id}"


class UnsortedTimetable(RoutingError, ValueError):
    """Raised when connections are not ordered by departure time."""

    def __init__(self, position: int, dep_time_s: int, previous_dep_time_s: int) -> None:
        super().__init__(
            f"Connection {position} departs at {dep_time_s}s, "
            f"before its predecessor ({previous_dep_time_s}s)"
        )
        self.position = position


class TimetableNotReady(RoutingError):
    """Raised when no timetable snapshot has been published yet."""
