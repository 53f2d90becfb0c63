"""Inventory usage aggregation pipeline."""

from .accumulator import UsageAccumulator
from .emitter import SnapshotEmitter
from .grouper import group_key
from .handler import handler
from .processor import InventoryUsageProcessor, ProcessResult, process_inventory_records
from .validator import normalize_record

__all__ = [
    "handler",
    "process_inventory_records",
    "InventoryUsageProcessor",
    "ProcessResult",
    "UsageAccumulator",
    "SnapshotEmitter",
    "group_key",
    "normalize_record",
]
