"""Inventory record processor for running usage totals."""

import json
import os
import sys
import time as time_module
import traceback
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, TextIO

from ..exceptions import ProcessorClosedError
from ..models import Snapshot, UsageOptions
from .accumulator import UsageAccumulator
from .emitter import SnapshotEmitter
from .grouper import group_key
from .validator import normalize_record

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


class StructuredLogger:
    """JSON-formatted logger for CloudWatch Logs Insights.

    Entries below ``S3_USAGE_LOG_LEVEL`` (default INFO) are dropped.
    """

    def __init__(self, name: str, stream: TextIO | None = None):
        self._name = name
        self._stream = stream

    @property
    def threshold(self) -> int:
        level = os.environ.get("S3_USAGE_LOG_LEVEL", "INFO").upper()
        return _LEVELS.get(level, _LEVELS["INFO"])

    def _log(self, level: str, message: str, **extra: Any) -> None:
        if _LEVELS[level] < self.threshold:
            return
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": level,
            "logger": self._name,
            "message": message,
            **extra,
        }
        print(json.dumps(log_entry, default=str), file=self._stream or sys.stdout)

    def debug(self, message: str, **extra: Any) -> None:
        self._log("DEBUG", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        self._log("INFO", message, **extra)

    def error(self, message: str, exc_info: bool = False, **extra: Any) -> None:
        if exc_info:
            extra["exception"] = traceback.format_exc()
        self._log("ERROR", message, **extra)


logger = StructuredLogger(__name__)


@dataclass
class ProcessResult:
    """Result of processing a batch of inventory records."""

    processed_count: int
    skipped_count: int
    accumulated_count: int
    snapshots_emitted: int
    snapshot: Snapshot


class InventoryUsageProcessor:
    """
    Turns a stream of inventory records into running usage snapshots.

    Each call to :meth:`process` runs one record through the pipeline:

    1. Validate and normalize the raw record (delete markers and entries
       without a storage tier are skipped)
    2. Derive the group key from bucket and key
    3. Add the record to its group/tier tally
    4. Emit a snapshot if ``output_factor`` records have accumulated

    All versions are counted towards the totals. A record that fails
    validation raises before any state is touched, so the aggregate always
    reflects exactly the records that were fully processed.

    Example:
        processor = InventoryUsageProcessor(UsageOptions(depth=1))
        for snapshot in processor.transform(records):
            print(snapshot.as_list())
    """

    def __init__(self, options: UsageOptions | None = None) -> None:
        self.options = options or UsageOptions()
        self._accumulator = UsageAccumulator(self.options.storage_classes)
        self._emitter = SnapshotEmitter(self.options.output_factor)
        self._processed = 0
        self._skipped = 0
        self._closed = False

    @property
    def processed_count(self) -> int:
        """Records submitted, including skipped ones."""
        return self._processed

    @property
    def skipped_count(self) -> int:
        return self._skipped

    @property
    def accumulated_count(self) -> int:
        return self._accumulator.accumulated_count

    @property
    def emitted_count(self) -> int:
        return self._emitter.emitted_count

    @property
    def closed(self) -> bool:
        return self._closed

    def process(self, raw: Any) -> Snapshot | None:
        """
        Process one raw inventory record.

        Args:
            raw: Field mapping for one object version

        Returns:
            Snapshot if this record completed a batch of ``output_factor``
            records, None otherwise

        Raises:
            MalformedRecordError: If the record is absent or cannot be grouped
            InvalidSizeError: If Size is not a non-negative integer
            ProcessorClosedError: If :meth:`close` was already called
        """
        if self._closed:
            raise ProcessorClosedError()

        record = normalize_record(raw)
        self._processed += 1
        if record is None:
            self._skipped += 1
            return None

        group = group_key(record.bucket, record.key, self.options.delimiter, self.options.depth)
        self._accumulator.add(group, record)
        return self._emitter.after_accumulate(self._accumulator)

    def close(self) -> Snapshot | None:
        """
        Finish the stream.

        Returns:
            Final snapshot covering records not yet emitted, or None if
            there are none. Calling close again returns None.
        """
        if self._closed:
            return None
        self._closed = True
        return self._emitter.finish(self._accumulator)

    def snapshot(self) -> Snapshot:
        """Read the current aggregate without affecting the emission throttle."""
        return self._accumulator.snapshot()

    def transform(self, records: Iterable[Any]) -> Iterator[Snapshot]:
        """
        Yield snapshots as records are processed, then the final snapshot.

        If the consumer stops iterating early or a record raises, the stream
        is left open and no final snapshot is produced.
        """
        for raw in records:
            snapshot = self.process(raw)
            if snapshot is not None:
                yield snapshot

        final = self.close()
        if final is not None:
            yield final

    async def atransform(
        self, records: AsyncIterable[Any] | Iterable[Any]
    ) -> AsyncIterator[Snapshot]:
        """Async variant of :meth:`transform` for asyncio transports."""
        if isinstance(records, AsyncIterable):
            async for raw in records:
                snapshot = self.process(raw)
                if snapshot is not None:
                    yield snapshot
        else:
            for raw in records:
                snapshot = self.process(raw)
                if snapshot is not None:
                    yield snapshot

        final = self.close()
        if final is not None:
            yield final


def process_inventory_records(
    records: Iterable[Any],
    options: UsageOptions | None = None,
) -> ProcessResult:
    """
    Drain inventory records and return the final usage totals.

    Record errors are logged and re-raised: a bad record fails the batch
    rather than producing totals that silently leave it out.

    Args:
        records: Raw inventory records
        options: Aggregation options (defaults apply if omitted)

    Returns:
        ProcessResult with counts and the final snapshot
    """
    start_time = time_module.perf_counter()
    processor = InventoryUsageProcessor(options)

    logger.info(
        "Inventory processing started",
        delimiter=processor.options.delimiter,
        depth=processor.options.depth,
        output_factor=processor.options.output_factor,
    )

    try:
        for _ in processor.transform(records):
            logger.debug(
                "Snapshot emitted",
                sequence=processor.emitted_count,
                accumulated_count=processor.accumulated_count,
            )
    except Exception as e:
        logger.error(
            f"Inventory processing failed: {e}",
            processed_count=processor.processed_count,
            error_type=type(e).__name__,
        )
        raise

    snapshot = processor.snapshot()
    processing_time_ms = (time_module.perf_counter() - start_time) * 1000
    logger.info(
        "Inventory processing completed",
        processed_count=processor.processed_count,
        skipped_count=processor.skipped_count,
        accumulated_count=processor.accumulated_count,
        snapshots_emitted=processor.emitted_count,
        group_count=len(snapshot),
        processing_time_ms=round(processing_time_ms, 2),
    )

    return ProcessResult(
        processed_count=processor.processed_count,
        skipped_count=processor.skipped_count,
        accumulated_count=processor.accumulated_count,
        snapshots_emitted=processor.emitted_count,
        snapshot=snapshot,
    )
