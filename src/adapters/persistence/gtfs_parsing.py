from __future__ import annotations

import csv
from typing import IO, Iterable

from src.domain.models.trip import Trip, TripStop


def parse_gtfs_time_to_seconds(raw: str) -> int:
    # GTFS time can be HH:MM:SS with HH possibly > 24.
    hh, mm, ss = raw.strip().split(":")
    return int(hh) * 3600 + int(mm) * 60 + int(ss)


def _clean(value: str | None) -> str | None:
    return (value or "").strip() or None


def parse_stations(fp: IO[str]) -> tuple[tuple[str, str], ...]:
    """Read stops.txt into (station_id, name) pairs in file order."""

    out: list[tuple[str, str]] = []
    for row in csv.DictReader(fp):
        stop_id = _clean(row.get("stop_id"))
        if not stop_id:
            continue
        out.append((stop_id, _clean(row.get("stop_name")) or stop_id))
    return tuple(out)


def parse_trip_types(fp: IO[str]) -> dict[str, str]:
    """Read trips.txt into trip_id -> route_id (used as the trip type)."""

    out: dict[str, str] = {}
    for row in csv.DictReader(fp):
        trip_id = _clean(row.get("trip_id"))
        route_id = _clean(row.get("route_id"))
        if trip_id and route_id:
            out[trip_id] = route_id
    return out


def parse_platforms(fp: IO[str]) -> dict[str, str]:
    """Read stops.txt platform codes, used as track labels."""

    out: dict[str, str] = {}
    for row in csv.DictReader(fp):
        stop_id = _clean(row.get("stop_id"))
        platform = _clean(row.get("platform_code"))
        if stop_id and platform:
            out[stop_id] = platform
    return out


def parse_trips(
    fp: IO[str],
    *,
    known_stations: Iterable[str],
    trip_types: dict[str, str] | None = None,
    platforms: dict[str, str] | None = None,
) -> tuple[Trip, ...]:
    """Build trips from stop_times.txt, ordered by stop_sequence.

    Stop times referencing unknown stations are dropped.
    """

    stations = set(known_stations)
    trip_types = trip_types or {}
    platforms = platforms or {}

    stop_times_by_trip: dict[str, list[tuple[int, TripStop]]] = {}
    for row in csv.DictReader(fp):
        trip_id = _clean(row.get("trip_id"))
        stop_id = _clean(row.get("stop_id"))
        if not trip_id or not stop_id or stop_id not in stations:
            continue

        seq = int(row.get("stop_sequence") or 0)
        arr_s = parse_gtfs_time_to_seconds(row["arrival_time"])
        dep_s = parse_gtfs_time_to_seconds(row["departure_time"])

        stop_times_by_trip.setdefault(trip_id, []).append(
            (
                seq,
                TripStop(
                    station_id=stop_id,
                    arrival_time_s=arr_s,
                    departure_time_s=dep_s,
                    track=platforms.get(stop_id),
                ),
            )
        )

    trips: list[Trip] = []
    for trip_id, entries in stop_times_by_trip.items():
        entries.sort(key=lambda x: x[0])
        trips.append(
            Trip(
                trip_id=trip_id,
                stops=tuple(stop for _, stop in entries),
                trip_type=trip_types.get(trip_id),
            )
        )
    return tuple(trips)
