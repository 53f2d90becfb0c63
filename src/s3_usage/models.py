"""Core models for s3-usage."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .exceptions import ValidationError
from .schema import (
    DEFAULT_DELIMITER,
    DEFAULT_DEPTH,
    DEFAULT_OUTPUT_FACTOR,
    DEFAULT_STORAGE_CLASSES,
    SNAPSHOT_PATH,
    SNAPSHOT_STORAGE_CLASS,
    TALLY_COUNT,
    TALLY_SIZE,
)


@dataclass(frozen=True)
class UsageOptions:
    """
    Aggregation options.

    Attributes:
        delimiter: How to split keys into folders
        depth: Number of leading folders included in the group key.
            0 groups by bucket only.
        output_factor: Records accumulated between snapshots. At 1 a snapshot
            is emitted for every object; larger values trade freshness for
            fewer (expensive) snapshots on very large buckets or depths.
        storage_classes: Tiers pre-seeded at zero in every group
    """

    delimiter: str = DEFAULT_DELIMITER
    depth: int = DEFAULT_DEPTH
    output_factor: int = DEFAULT_OUTPUT_FACTOR
    storage_classes: tuple[str, ...] = DEFAULT_STORAGE_CLASSES

    def __post_init__(self) -> None:
        if not isinstance(self.delimiter, str) or not self.delimiter:
            raise ValidationError("delimiter", self.delimiter, "must be a non-empty string")
        if not _is_int(self.depth) or self.depth < 0:
            raise ValidationError("depth", self.depth, "must be an integer >= 0")
        if not _is_int(self.output_factor) or self.output_factor < 1:
            raise ValidationError("output_factor", self.output_factor, "must be an integer >= 1")
        classes = tuple(self.storage_classes)
        if not classes:
            raise ValidationError("storage_classes", self.storage_classes, "must not be empty")
        if any(not isinstance(c, str) or not c for c in classes):
            raise ValidationError(
                "storage_classes", self.storage_classes, "must contain non-empty strings"
            )
        if len(set(classes)) != len(classes):
            raise ValidationError("storage_classes", self.storage_classes, "contains duplicates")
        object.__setattr__(self, "storage_classes", classes)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class InventoryRecord:
    """
    A validated inventory record for one stored object version.

    Produced by the validator from a raw field mapping. Booleans are parsed
    from the export's 'TRUE'/'FALSE' strings and ``size`` is always a
    non-negative integer. Records that reach the accumulator never have an
    empty ``storage_class`` and are never delete markers.
    """

    bucket: str
    key: str
    size: int
    storage_class: str
    version_id: str = ""
    is_latest: bool = False
    is_delete_marker: bool = False
    last_modified_date: str = ""
    etag: str = ""
    is_multipart_uploaded: bool = False
    replication_status: str = ""


@dataclass
class StorageClassTally:
    """Running count and byte size for one (group, tier) pair."""

    count: int = 0
    size: int = 0

    def add(self, size: int) -> None:
        self.count += 1
        self.size += size

    def freeze(self) -> "TierUsage":
        return TierUsage(count=self.count, size=self.size)


@dataclass(frozen=True)
class TierUsage:
    """Point-in-time count and byte size for one tier within a snapshot."""

    count: int = 0
    size: int = 0

    def as_dict(self) -> dict[str, int]:
        return {TALLY_COUNT: self.count, TALLY_SIZE: self.size}


@dataclass(frozen=True)
class SnapshotEntry:
    """
    Totals for one group key within a snapshot.

    Attributes:
        path: Group key (bucket plus key prefix)
        storage_class: Read-only mapping of tier name to usage
    """

    path: str
    storage_class: Mapping[str, TierUsage]

    @property
    def count(self) -> int:
        """Objects counted across all tiers."""
        return sum(t.count for t in self.storage_class.values())

    @property
    def size(self) -> int:
        """Bytes counted across all tiers."""
        return sum(t.size for t in self.storage_class.values())

    def as_dict(self) -> dict[str, Any]:
        return {
            SNAPSHOT_PATH: self.path,
            SNAPSHOT_STORAGE_CLASS: {
                name: usage.as_dict() for name, usage in self.storage_class.items()
            },
        }


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable point-in-time read of the running aggregate.

    Entries are ordered by the first time each group key was seen.

    Attributes:
        entries: One entry per group key known when the snapshot was taken
        accumulated_count: Records accumulated into the aggregate so far
        sequence: 1-based emission number (0 for on-demand reads)
    """

    entries: tuple[SnapshotEntry, ...] = field(default_factory=tuple)
    accumulated_count: int = 0
    sequence: int = 0

    def __iter__(self) -> Iterator[SnapshotEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, path: str) -> SnapshotEntry | None:
        """Return the entry for a group key, or None if it has not been seen."""
        for entry in self.entries:
            if entry.path == path:
                return entry
        return None

    @property
    def paths(self) -> list[str]:
        return [entry.path for entry in self.entries]

    def as_list(self) -> list[dict[str, Any]]:
        """Render as ``[{"path": ..., "storageClass": {tier: {"count", "size"}}}]``."""
        return [entry.as_dict() for entry in self.entries]


def make_snapshot_entry(path: str, tallies: Mapping[str, StorageClassTally]) -> SnapshotEntry:
    """Copy live tallies into a read-only snapshot entry."""
    frozen = {name: tally.freeze() for name, tally in tallies.items()}
    return SnapshotEntry(path=path, storage_class=MappingProxyType(frozen))
