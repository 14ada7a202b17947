from __future__ import annotations

import io
import os
from collections.abc import Collection
from dataclasses import dataclass

from botocore.exceptions import ClientError

from src.adapters.aws import s3_client
from src.app.ports.output import ITimetableRepository
from src.domain.models.trip import Trip

from .gtfs_parsing import parse_platforms, parse_stations, parse_trip_types, parse_trips


@dataclass(slots=True)
class S3TimetableRepository(ITimetableRepository):
    """Loads GTFS .txt files stored under an S3 prefix.

    Env vars:
      - TIMETABLE_BUCKET: bucket name
      - TIMETABLE_PREFIX: key prefix (default: gtfs)
      - ENDPOINT_URL: preferred LocalStack endpoint (e.g. http://localhost:4566)
      - AWS_REGION: defaults to eu-west-1
    """

    bucket: str | None = None
    prefix: str | None = None

    def _bucket(self) -> str:
        value = self.bucket or os.getenv("TIMETABLE_BUCKET")
        if not value:
            raise RuntimeError("Missing TIMETABLE_BUCKET")
        return value

    def _prefix(self) -> str:
        return (self.prefix or os.getenv("TIMETABLE_PREFIX") or "gtfs").strip("/")

    def _read_text(self, name: str) -> str:
        s3 = s3_client()
        obj = s3.get_object(Bucket=self._bucket(), Key=f"{self._prefix()}/{name}")
        return obj["Body"].read().decode("utf-8")

    def _read_optional_text(self, name: str) -> str | None:
        try:
            return self._read_text(name)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in {"NoSuchKey", "404"}:
                return None
            raise

    def load_stations(self) -> tuple[tuple[str, str], ...]:
        text = self._read_text("stops.txt")
        return parse_stations(io.StringIO(text, newline=""))

    def load_trips(self, station_ids: Collection[str]) -> tuple[Trip, ...]:
        stops_text = self._read_text("stops.txt")
        stop_times_text = self._read_text("stop_times.txt")
        trips_text = self._read_optional_text("trips.txt")

        platforms = parse_platforms(io.StringIO(stops_text, newline=""))
        trip_types = (
            parse_trip_types(io.StringIO(trips_text, newline="")) if trips_text else {}
        )

        return parse_trips(
            io.StringIO(stop_times_text, newline=""),
            known_stations=station_ids,
            trip_types=trip_types,
            platforms=platforms,
        )
