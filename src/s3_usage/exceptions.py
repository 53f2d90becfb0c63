"""Exceptions for s3-usage."""

import json
from typing import Any

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class S3UsageError(Exception):
    """
    Base exception for all s3-usage errors.

    All exceptions raised by this library inherit from this class,
    allowing callers to catch all library-specific errors with a single
    except clause.
    """

    pass


# ---------------------------------------------------------------------------
# Category Exceptions
# ---------------------------------------------------------------------------


class RecordError(S3UsageError):
    """
    Base exception for errors caused by a single inventory record.

    A record error is fatal to the record: the processing step stops and
    the error is surfaced to the caller rather than skipped, so running
    totals are never silently corrupted.
    """

    pass


def _describe(record: Any) -> str:
    try:
        return json.dumps(record, default=str)
    except (TypeError, ValueError):
        return repr(record)


# ---------------------------------------------------------------------------
# Record Exceptions
# ---------------------------------------------------------------------------


class MalformedRecordError(RecordError):
    """
    Raised when an inventory record is absent or cannot be grouped.

    Attributes:
        record: The offending input (may be None)
        reason: Why the record was rejected
    """

    def __init__(self, record: Any, reason: str = "Invalid S3 Inventory object definition") -> None:
        self.record = record
        self.reason = reason
        super().__init__(f"{reason}: {_describe(record)}")


class InvalidSizeError(RecordError):
    """
    Raised when a record's Size cannot be coerced to a non-negative integer.

    Attributes:
        record: The offending record
        size: The raw Size value
    """

    def __init__(self, record: Any, size: Any) -> None:
        self.record = record
        self.size = size
        super().__init__(f"Invalid S3 Inventory object Size property {size!r}: {_describe(record)}")


# ---------------------------------------------------------------------------
# Configuration and Lifecycle Exceptions
# ---------------------------------------------------------------------------


class ValidationError(S3UsageError):
    """
    Raised when a configuration value is invalid.

    Attributes:
        field: Name of the option that failed validation
        value: The rejected value
        reason: Human-readable explanation
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class ProcessorClosedError(S3UsageError):
    """Raised when a record is submitted to a processor that was already closed."""

    def __init__(self) -> None:
        super().__init__("Cannot process records after the processor has been closed")


class InventoryError(S3UsageError):
    """
    Raised when an inventory manifest or data file cannot be used.

    Attributes:
        location: Manifest or file the error refers to
    """

    def __init__(self, location: str, message: str) -> None:
        self.location = location
        super().__init__(f"{message} [{location}]")
