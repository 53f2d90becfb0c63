"""S3 Inventory CSV reader.

S3 Inventory delivers a ``manifest.json`` per report date plus a set of
gzip-compressed, headerless CSV data files. The manifest's ``fileSchema``
gives the column order. Rows are streamed one at a time so arbitrarily
large inventories can be fed to the processor.
"""

from __future__ import annotations

import csv
import gzip
import io
import json
import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Any
from urllib.parse import unquote_plus, urlparse

from .exceptions import InventoryError
from .schema import DEFAULT_INVENTORY_COLUMNS, FIELD_KEY, REQUIRED_INVENTORY_COLUMNS

logger = logging.getLogger(__name__)

CSV_FORMAT = "CSV"


def parse_file_schema(schema: str) -> list[str]:
    """Split a manifest ``fileSchema`` string into column names."""
    return [c.strip() for c in schema.split(",") if c.strip()]


def check_columns(columns: Sequence[str], location: str) -> None:
    """
    Ensure an inventory schema has the columns aggregation depends on.

    Raises:
        InventoryError: If Bucket, Key, Size or StorageClass is missing
    """
    missing = sorted(REQUIRED_INVENTORY_COLUMNS - set(columns))
    if missing:
        raise InventoryError(
            location,
            f"Inventory schema is missing required columns {missing}; "
            "enable the Size and StorageClass optional fields",
        )


def iter_csv_records(
    lines: Iterable[str],
    columns: Sequence[str] = DEFAULT_INVENTORY_COLUMNS,
) -> Iterator[dict[str, str]]:
    """
    Map headerless inventory CSV rows to raw record dicts.

    Short rows are padded with empty strings, matching how the export
    leaves optional fields blank. The export URL-encodes object keys, so
    ``Key`` is decoded before the record is yielded.
    """
    width = len(columns)
    for row in csv.reader(lines):
        if not row:
            continue
        if len(row) < width:
            row = row + [""] * (width - len(row))
        record = dict(zip(columns, row, strict=False))
        if FIELD_KEY in record:
            record[FIELD_KEY] = unquote_plus(record[FIELD_KEY])
        yield record


def iter_local_records(
    path: str | Path,
    columns: Sequence[str] = DEFAULT_INVENTORY_COLUMNS,
) -> Iterator[dict[str, str]]:
    """Stream records from a local ``.csv`` or ``.csv.gz`` inventory file."""
    path = Path(path)
    logger.debug("Reading local inventory file: %s", path)
    opener = gzip.open if path.suffix == ".gz" else open
    with opener(path, "rt", encoding="utf-8", newline="") as f:
        yield from iter_csv_records(f, columns)


def parse_s3_url(url: str) -> tuple[str, str]:
    """
    Split ``s3://bucket/key`` into bucket and key.

    Raises:
        InventoryError: If the URL is not an s3:// URL with a key
    """
    parsed = urlparse(url)
    key = parsed.path.lstrip("/")
    if parsed.scheme != "s3" or not parsed.netloc or not key:
        raise InventoryError(url, "Expected an s3://bucket/key URL")
    return parsed.netloc, key


def read_manifest(s3_client: Any, bucket: str, key: str) -> dict[str, Any]:
    """Download and parse an S3 inventory manifest."""
    response = s3_client.get_object(Bucket=bucket, Key=key)
    try:
        manifest = json.loads(response["Body"].read().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InventoryError(f"s3://{bucket}/{key}", f"Invalid manifest: {e}") from e
    if not isinstance(manifest, dict):
        raise InventoryError(f"s3://{bucket}/{key}", "Manifest must be a JSON object")
    return manifest


def resolve_destination_bucket(manifest: dict[str, Any], default: str) -> str:
    """Extract the bucket holding the data files from a manifest."""
    dest = manifest.get("destinationBucket", "")
    if dest.startswith("arn:aws:s3:::"):
        return dest.split(":")[-1]
    return dest or default


def iter_manifest_records(
    s3_client: Any,
    bucket: str,
    manifest_key: str,
) -> Iterator[dict[str, str]]:
    """
    Stream raw records from every data file listed in an inventory manifest.

    Args:
        s3_client: boto3 S3 client
        bucket: Bucket holding the manifest
        manifest_key: Key of ``manifest.json``

    Raises:
        InventoryError: If the manifest is not a CSV inventory or its schema
            lacks required columns
    """
    location = f"s3://{bucket}/{manifest_key}"
    manifest = read_manifest(s3_client, bucket, manifest_key)

    file_format = manifest.get("fileFormat", "")
    if file_format != CSV_FORMAT:
        raise InventoryError(location, f"Unsupported inventory format: {file_format!r}")

    columns = parse_file_schema(manifest.get("fileSchema", ""))
    check_columns(columns, location)

    dest_bucket = resolve_destination_bucket(manifest, bucket)
    files = manifest.get("files", [])
    logger.info("Reading %d inventory file(s) from %s", len(files), location)

    for file_info in files:
        key = file_info["key"]
        logger.debug("Reading inventory file: s3://%s/%s", dest_bucket, key)
        response = s3_client.get_object(Bucket=dest_bucket, Key=key)
        with gzip.GzipFile(fileobj=response["Body"]) as raw:
            text = io.TextIOWrapper(raw, encoding="utf-8", newline="")
            yield from iter_csv_records(text, columns)
