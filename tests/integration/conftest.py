from __future__ import annotations

import os
import urllib.error
import urllib.request
from collections.abc import Callable, Iterator
from uuid import uuid4

import pytest
from botocore.exceptions import ClientError

from src.adapters.aws import AwsRuntimeConfig, s3_client

TIMETABLE_BUCKET = "transit-test-timetables"

# Minimal two-stop feed; trips.txt is left out unless a test uploads it.
GTFS_FEED = {
    "stops.txt": (
        "stop_id,stop_name,stop_lat,stop_lon,platform_code\n"
        "A,Alpha,0.0,0.0,1\n"
        "B,Bravo,0.0,0.1,2\n"
    ),
    "stop_times.txt": (
        "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
        "T1,08:00:00,08:00:00,A,1\n"
        "T1,08:10:00,08:10:00,B,2\n"
    ),
}


@pytest.fixture(scope="session", autouse=True)
def localstack_env() -> None:
    """Point boto3 at LocalStack unless the environment says otherwise."""

    os.environ.setdefault("USE_LOCALSTACK", "true")
    os.environ.setdefault("ENDPOINT_URL", "http://localhost:4566")
    os.environ.setdefault("AWS_REGION", "eu-west-1")
    # LocalStack accepts any credentials, but boto3 refuses to sign without.
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")


@pytest.fixture(scope="session")
def require_localstack(localstack_env: None) -> str:
    endpoint_url = AwsRuntimeConfig.from_env().resolved_endpoint_url()
    if not endpoint_url:
        pytest.skip("No LocalStack endpoint configured")

    health_url = endpoint_url.rstrip("/") + "/_localstack/health"
    try:
        with urllib.request.urlopen(health_url, timeout=1.5) as resp:  # nosec B310
            healthy = 200 <= resp.status < 300
    except (urllib.error.URLError, OSError):
        healthy = False

    if not healthy:
        msg = f"LocalStack not reachable at {endpoint_url}"
        # CI starts LocalStack, so a missing one there is a failure.
        if os.getenv("CI") or os.getenv("REQUIRE_LOCALSTACK"):
            pytest.fail(msg, pytrace=False)
        pytest.skip(msg)
    return endpoint_url


@pytest.fixture
def timetable_bucket(require_localstack: str) -> str:
    s3 = s3_client()
    try:
        s3.create_bucket(
            Bucket=TIMETABLE_BUCKET,
            CreateBucketConfiguration={
                "LocationConstraint": AwsRuntimeConfig.from_env().region
            },
        )
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code")
        if code not in {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}:
            raise
    return TIMETABLE_BUCKET


@pytest.fixture
def upload_feed(
    timetable_bucket: str, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Callable[..., str]]:
    """Upload GTFS files under a fresh prefix and point the S3 repository at it.

    `extra` adds or replaces files by name, e.g. {"trips.txt": ...}.
    """

    s3 = s3_client()
    keys: list[str] = []

    def _upload(extra: dict[str, str] | None = None) -> str:
        prefix = f"gtfs-test-{uuid4()}"
        files = {**GTFS_FEED, **(extra or {})}
        for name, body in files.items():
            key = f"{prefix}/{name}"
            s3.put_object(Bucket=timetable_bucket, Key=key, Body=body.encode("utf-8"))
            keys.append(key)

        monkeypatch.setenv("TIMETABLE_BUCKET", timetable_bucket)
        monkeypatch.setenv("TIMETABLE_PREFIX", prefix)
        return prefix

    yield _upload

    for key in keys:
        s3.delete_object(Bucket=timetable_bucket, Key=key)
