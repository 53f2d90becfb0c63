"""Pytest fixtures for s3-usage tests."""

from collections.abc import Callable
from typing import Any

import pytest

RecordFactory = Callable[..., dict[str, Any]]


def make_raw_record(**overrides: Any) -> dict[str, Any]:
    """Build a raw inventory record the way a CSV parser would produce it."""
    record: dict[str, Any] = {
        "Bucket": "bucket",
        "Key": "folder1/item.txt",
        "VersionId": "version-id-hash-string",
        "IsLatest": "TRUE",
        "IsDeleteMarker": "FALSE",
        "Size": "500",
        "LastModifiedDate": "2016-11-22T15:24:09.000Z",
        "ETag": "etag-hash-string",
        "StorageClass": "STANDARD",
        "IsMultipartUploaded": "FALSE",
        "ReplicationStatus": "",
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_record() -> RecordFactory:
    """Factory for raw inventory records."""
    return make_raw_record


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    # Unset AWS_ENDPOINT_URL to ensure moto intercepts requests
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
