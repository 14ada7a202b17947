from __future__ import annotations

from typing import AbstractSet

from src.domain.models.journey import Journey, NoRouteFound
from src.domain.models.timetable import Connection, Timetable

from .frontier import ArrivalFrontier

MIN_TRANSFER_TIME_S = 30 * 60


def required_transfer_s(
    previous: Connection | None, connection: Connection, *, transfer_time_s: int
) -> int:
    """Dwell time needed before boarding `connection` after `previous`.

    Staying on the same trip (or starting the journey) needs none.
    """

    if previous is None or previous.trip_id == connection.trip_id:
        return 0
    return transfer_time_s


def scan(
    timetable: Timetable,
    frontier: ArrivalFrontier,
    *,
    transfer_time_s: int = MIN_TRANSFER_TIME_S,
    excluded: AbstractSet[Connection] = frozenset(),
) -> None:
    """Run one Connection Scan pass over the timetable, updating `frontier`.

    This implementation assumes:
        - connections are sorted by dep_time_s (guaranteed by Timetable)
        - a station's latest witness is the connection behind its current
          earliest arrival, so its trip decides whether boarding is a transfer
    """

    for c in timetable.connections:
        if excluded and c in excluded:
            continue

        origin_s, origin_witnesses = frontier.read(c.dep_station)
        latest = origin_witnesses[-1] if origin_witnesses else None
        wait_s = required_transfer_s(latest, c, transfer_time_s=transfer_time_s)
        if c.dep_time_s < origin_s + wait_s:
            continue

        dest_s, dest_witnesses = frontier.read(c.arr_station)
        if c.arr_time_s < dest_s:
            frontier.update(c.arr_station, c.arr_time_s, dest_witnesses + (c,))


def reconstruct_journey(
    frontier: ArrivalFrontier,
    witness: Connection,
    *,
    departure_station: int,
    transfer_time_s: int = MIN_TRANSFER_TIME_S,
) -> Journey | None:
    """Walk backwards from `witness` to `departure_station`.

    At each step the predecessor is the first witness recorded at the current
    origin that arrives there no later than the current connection arrives
    and early enough to catch it. Zero-duration hops share a timestamp with
    their predecessor, so a connection is never used twice in one walk.
    Returns None when the walk cannot reach the departure station.
    """

    out: list[Connection] = [witness]
    used: set[Connection] = {witness}
    cur = witness
    while cur.dep_station != departure_station:
        _, candidates = frontier.read(cur.dep_station)
        prev = next(
            (
                c
                for c in candidates
                if c not in used
                and c.arr_station == cur.dep_station
                and c.arr_time_s <= cur.arr_time_s
                and c.arr_time_s
                + required_transfer_s(c, cur, transfer_time_s=transfer_time_s)
                <= cur.dep_time_s
            ),
            None,
        )
        if prev is None:
            return None
        out.append(prev)
        used.add(prev)
        cur = prev
    out.reverse()
    return Journey(connections=tuple(out))


def find_routes(
    timetable: Timetable,
    *,
    departure_station: int,
    arrival_station: int,
    departure_time_s: int,
    num_routes: int,
    station_count: int,
    transfer_time_s: int = MIN_TRANSFER_TIME_S,
) -> tuple[Journey, ...] | NoRouteFound:
    """Find up to `num_routes` journeys ordered by arrival time.

    The first pass is a plain earliest-arrival scan; the improvement history
    at the arrival station yields one journey per improving connection.
    Each further pass runs on a fresh frontier with every connection that
    reached the arrival station in earlier passes excluded, which surfaces
    journeys arriving by a different last connection. Excluding connections can only delay
    arrivals, so the earliest journey never depends on `num_routes`.
    """

    if num_routes < 1:
        raise ValueError(f"num_routes must be >= 1, got {num_routes}")

    journeys: list[Journey] = []
    seen: set[tuple[Connection, ...]] = set()
    excluded: set[Connection] = set()

    for _ in range(num_routes):
        # Seeding validates the departure station; the read validates arrival.
        frontier = ArrivalFrontier.seeded(
            station_count, departure_station, departure_time_s
        )
        frontier.read(arrival_station)

        scan(timetable, frontier, transfer_time_s=transfer_time_s, excluded=excluded)

        _, witnesses = frontier.read(arrival_station)
        if not witnesses:
            break

        for witness in witnesses:
            journey = reconstruct_journey(
                frontier,
                witness,
                departure_station=departure_station,
                transfer_time_s=transfer_time_s,
            )
            if journey is None or journey.connections in seen:
                continue
            seen.add(journey.connections)
            journeys.append(journey)

        if len(journeys) >= num_routes:
            break
        excluded.update(witnesses)

    if not journeys:
        return NoRouteFound()

    journeys.sort(key=lambda j: j.arrival_time_s)
    return tuple(journeys[:num_routes])
