from __future__ import annotations

import os
from dataclasses import dataclass

from src.domain.algorithms.csa import MIN_TRANSFER_TIME_S


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True, slots=True)
class RoutingSettings:
    """Runtime tuning for the routing service.

    Env vars:
      - MIN_TRANSFER_TIME_S: dwell time when changing trips (default: 1800)
      - MAX_ROUTES: upper bound for num_routes per query (default: 10)
      - TIMETABLE_SOURCE: local|s3 (default: local)
      - TIMETABLE_NEXT_DAY: add +24h copies of every connection (default: true)
      - TIMETABLE_PRELOAD: load the timetable at API startup (default: true)
    """

    transfer_time_s: int
    max_routes: int
    timetable_source: str
    include_next_day: bool
    preload: bool

    @staticmethod
    def from_env() -> "RoutingSettings":
        source = (os.getenv("TIMETABLE_SOURCE") or "local").strip().lower()
        if source not in {"local", "s3"}:
            raise RuntimeError(f"Unsupported TIMETABLE_SOURCE: {source}")

        return RoutingSettings(
            transfer_time_s=env_int("MIN_TRANSFER_TIME_S", MIN_TRANSFER_TIME_S),
            max_routes=env_int("MAX_ROUTES", 10),
            timetable_source=source,
            include_next_day=env_bool("TIMETABLE_NEXT_DAY", True),
            preload=env_bool("TIMETABLE_PRELOAD", True),
        )
