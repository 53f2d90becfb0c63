"""Validation and normalization of raw inventory records."""

from collections.abc import Mapping
from typing import Any

from ..exceptions import InvalidSizeError, MalformedRecordError
from ..models import InventoryRecord
from ..schema import (
    BOOLEAN_TRUE,
    FIELD_BUCKET,
    FIELD_ETAG,
    FIELD_IS_DELETE_MARKER,
    FIELD_IS_LATEST,
    FIELD_IS_MULTIPART_UPLOADED,
    FIELD_KEY,
    FIELD_LAST_MODIFIED_DATE,
    FIELD_REPLICATION_STATUS,
    FIELD_SIZE,
    FIELD_STORAGE_CLASS,
    FIELD_VERSION_ID,
)


def normalize_record(raw: Any) -> InventoryRecord | None:
    """
    Validate a raw inventory record and convert it to an InventoryRecord.

    Values are assumed to come from a CSV parser, so most of them are strings
    (empty when missing). The caller's mapping is never modified.

    Args:
        raw: Field mapping for one object version

    Returns:
        InventoryRecord, or None if the record is a delete marker or some
        other non-object entity with an empty StorageClass

    Raises:
        MalformedRecordError: If the record is absent or has no bucket/key
        InvalidSizeError: If Size is not a non-negative integer
    """
    if raw is None:
        raise MalformedRecordError(raw)
    if not isinstance(raw, Mapping):
        raise MalformedRecordError(raw, "S3 Inventory object definition must be a mapping")

    if is_skipped(raw):
        return None

    bucket = raw.get(FIELD_BUCKET)
    key = raw.get(FIELD_KEY)
    if not isinstance(bucket, str) or not bucket:
        raise MalformedRecordError(raw, "S3 Inventory object has no Bucket")
    if not isinstance(key, str):
        raise MalformedRecordError(raw, "S3 Inventory object has no Key")

    return InventoryRecord(
        bucket=bucket,
        key=key,
        size=parse_size(raw),
        storage_class=raw[FIELD_STORAGE_CLASS],
        version_id=_text(raw.get(FIELD_VERSION_ID)),
        is_latest=parse_bool(raw.get(FIELD_IS_LATEST)),
        is_delete_marker=False,
        last_modified_date=_text(raw.get(FIELD_LAST_MODIFIED_DATE)),
        etag=_text(raw.get(FIELD_ETAG)),
        is_multipart_uploaded=parse_bool(raw.get(FIELD_IS_MULTIPART_UPLOADED)),
        replication_status=_text(raw.get(FIELD_REPLICATION_STATUS)),
    )


def is_skipped(raw: Mapping[str, Any]) -> bool:
    """True for delete markers and entries without a storage tier."""
    if parse_bool(raw.get(FIELD_IS_DELETE_MARKER)):
        return True
    storage_class = raw.get(FIELD_STORAGE_CLASS)
    return not isinstance(storage_class, str) or storage_class == ""


def parse_bool(value: Any) -> bool:
    """Parse an inventory boolean ('TRUE'/'FALSE' in any case, or a real bool)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().upper() == BOOLEAN_TRUE
    return False


def parse_size(raw: Mapping[str, Any]) -> int:
    """
    Coerce the Size field to a non-negative integer.

    Integers pass through unchanged; numeric strings are parsed base 10.

    Raises:
        InvalidSizeError: If the value is missing, non-numeric or negative
    """
    value = raw.get(FIELD_SIZE)

    if isinstance(value, bool):
        raise InvalidSizeError(raw, value)
    if isinstance(value, int):
        size = value
    elif isinstance(value, float) and value.is_integer():
        size = int(value)
    elif isinstance(value, str):
        try:
            size = int(value.strip(), 10)
        except ValueError:
            raise InvalidSizeError(raw, value) from None
    else:
        raise InvalidSizeError(raw, value)

    if size < 0:
        raise InvalidSizeError(raw, value)
    return size


def _text(value: Any) -> str:
    return "" if value is None else str(value)
