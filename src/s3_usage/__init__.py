"""
s3-usage: Running storage usage totals from S3 Inventory reports.

This library turns a stream of S3 Inventory records into periodic
snapshots of object count and size with:
- Grouping by bucket and key prefix at a configurable folder depth
- Per-storage-class tallies (every version counts, delete markers don't)
- Throttled emission so huge inventories stay cheap to follow
- Constant memory per group, whatever the number of records

Example:
    from s3_usage import InventoryUsageProcessor, UsageOptions

    processor = InventoryUsageProcessor(UsageOptions(depth=1, output_factor=1000))
    for snapshot in processor.transform(records):
        for entry in snapshot:
            print(entry.path, entry.count, entry.size)
"""

from .aggregator import (
    InventoryUsageProcessor,
    ProcessResult,
    SnapshotEmitter,
    UsageAccumulator,
    group_key,
    normalize_record,
    process_inventory_records,
)
from .config import load_options, options_from_environment, options_from_mapping
from .exceptions import (
    InvalidSizeError,
    InventoryError,
    MalformedRecordError,
    ProcessorClosedError,
    RecordError,
    S3UsageError,
    ValidationError,
)
from .models import (
    InventoryRecord,
    Snapshot,
    SnapshotEntry,
    StorageClassTally,
    TierUsage,
    UsageOptions,
)
from .schema import DEFAULT_STORAGE_CLASSES

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "InventoryUsageProcessor",
    "ProcessResult",
    "process_inventory_records",
    "normalize_record",
    "group_key",
    "UsageAccumulator",
    "SnapshotEmitter",
    # Models
    "InventoryRecord",
    "Snapshot",
    "SnapshotEntry",
    "StorageClassTally",
    "TierUsage",
    "UsageOptions",
    "DEFAULT_STORAGE_CLASSES",
    # Config
    "load_options",
    "options_from_environment",
    "options_from_mapping",
    # Exceptions
    "S3UsageError",
    "RecordError",
    "MalformedRecordError",
    "InvalidSizeError",
    "ValidationError",
    "ProcessorClosedError",
    "InventoryError",
]
