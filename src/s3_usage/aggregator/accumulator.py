"""Running per-group, per-tier usage totals."""

from collections.abc import Iterable

from ..models import (
    InventoryRecord,
    Snapshot,
    StorageClassTally,
    make_snapshot_entry,
)
from ..schema import DEFAULT_STORAGE_CLASSES


class UsageAccumulator:
    """
    Owns the running aggregate for one stream.

    State is a table of group key -> tier name -> StorageClassTally. Groups
    are created lazily with every pre-seeded tier at zero; tiers outside the
    seeded set are added the first time they are seen. Nothing is ever
    removed, so memory is bounded by the number of distinct groups and tiers,
    not by the number of records.

    The accumulator also counts records added since the last emission; the
    emitter reads and resets that counter.
    """

    def __init__(self, storage_classes: Iterable[str] = DEFAULT_STORAGE_CLASSES) -> None:
        self._storage_classes = tuple(storage_classes)
        self._groups: dict[str, dict[str, StorageClassTally]] = {}
        self._pending = 0
        self._accumulated = 0

    @property
    def storage_classes(self) -> tuple[str, ...]:
        return self._storage_classes

    @property
    def pending(self) -> int:
        """Records accumulated since the last emission."""
        return self._pending

    @property
    def accumulated_count(self) -> int:
        """Records accumulated over the lifetime of the stream."""
        return self._accumulated

    @property
    def group_count(self) -> int:
        return len(self._groups)

    def add(self, group: str, record: InventoryRecord) -> None:
        """Merge one validated record into its group/tier tally."""
        tiers = self._groups.get(group)
        if tiers is None:
            tiers = {name: StorageClassTally() for name in self._storage_classes}
            self._groups[group] = tiers

        tally = tiers.get(record.storage_class)
        if tally is None:
            tally = tiers[record.storage_class] = StorageClassTally()

        tally.add(record.size)
        self._pending += 1
        self._accumulated += 1

    def tally(self, group: str, storage_class: str) -> StorageClassTally | None:
        """Live tally for a (group, tier) pair, or None if never created."""
        tiers = self._groups.get(group)
        if tiers is None:
            return None
        return tiers.get(storage_class)

    def reset_pending(self) -> None:
        self._pending = 0

    def snapshot(self, sequence: int = 0) -> Snapshot:
        """Copy the current aggregate into an immutable Snapshot."""
        return Snapshot(
            entries=tuple(make_snapshot_entry(path, tiers) for path, tiers in self._groups.items()),
            accumulated_count=self._accumulated,
            sequence=sequence,
        )
