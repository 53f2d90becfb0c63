"""Unit test fixtures using moto."""

import csv
import gzip
import io
import json
from collections.abc import Callable

import boto3
import pytest
from moto import mock_aws

INVENTORY_BUCKET = "inventory-dest"
SOURCE_BUCKET = "source-bucket"
MANIFEST_KEY = f"{SOURCE_BUCKET}/daily/2024-01-15T01-00Z/manifest.json"
FILE_SCHEMA = (
    "Bucket, Key, VersionId, IsLatest, IsDeleteMarker, Size, LastModifiedDate, "
    "ETag, StorageClass, IsMultipartUploaded, ReplicationStatus"
)


def gzip_csv(rows: list[list[str]]) -> bytes:
    """Encode rows as a headerless gzip CSV, like an inventory data file."""
    buffer = io.StringIO()
    csv.writer(buffer, quoting=csv.QUOTE_ALL).writerows(rows)
    return gzip.compress(buffer.getvalue().encode("utf-8"))


def inventory_row(
    key: str,
    size: str,
    storage_class: str = "STANDARD",
    delete_marker: str = "false",
    bucket: str = SOURCE_BUCKET,
) -> list[str]:
    return [
        bucket,
        key,
        "v1",
        "true",
        delete_marker,
        size,
        "2024-01-14T10:00:00.000Z",
        "etag",
        storage_class,
        "false",
        "",
    ]


@pytest.fixture
def mock_s3(aws_credentials):
    """Mock S3 for tests."""
    with mock_aws():
        yield boto3.client("s3", region_name="us-east-1")


PutInventory = Callable[..., str]


@pytest.fixture
def put_inventory(mock_s3) -> PutInventory:
    """Write a manifest and its data files to the mocked destination bucket."""
    mock_s3.create_bucket(Bucket=INVENTORY_BUCKET)

    def _put(
        files: list[list[list[str]]],
        manifest_key: str = MANIFEST_KEY,
        file_format: str = "CSV",
        file_schema: str = FILE_SCHEMA,
    ) -> str:
        entries = []
        for idx, rows in enumerate(files):
            key = f"{SOURCE_BUCKET}/daily/data/part-{idx}.csv.gz"
            mock_s3.put_object(Bucket=INVENTORY_BUCKET, Key=key, Body=gzip_csv(rows))
            entries.append({"key": key, "size": 0, "MD5checksum": "x"})

        manifest = {
            "sourceBucket": SOURCE_BUCKET,
            "destinationBucket": f"arn:aws:s3:::{INVENTORY_BUCKET}",
            "version": "2016-11-30",
            "fileFormat": file_format,
            "fileSchema": file_schema,
            "files": entries,
        }
        mock_s3.put_object(
            Bucket=INVENTORY_BUCKET, Key=manifest_key, Body=json.dumps(manifest).encode()
        )
        return manifest_key

    return _put


@pytest.fixture
def make_row() -> Callable[..., list[str]]:
    """Factory for inventory CSV rows."""
    return inventory_row


@pytest.fixture
def encode_csv() -> Callable[[list[list[str]]], bytes]:
    """Encoder for gzip inventory data files."""
    return gzip_csv
