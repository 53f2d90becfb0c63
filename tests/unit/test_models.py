"""Tests for core models."""

import dataclasses

import pytest

from s3_usage.exceptions import ValidationError
from s3_usage.models import (
    InventoryRecord,
    Snapshot,
    StorageClassTally,
    TierUsage,
    UsageOptions,
    make_snapshot_entry,
)
from s3_usage.schema import DEFAULT_STORAGE_CLASSES


class TestUsageOptions:
    """Tests for UsageOptions validation."""

    def test_defaults(self) -> None:
        options = UsageOptions()

        assert options.delimiter == "/"
        assert options.depth == 0
        assert options.output_factor == 100
        assert options.storage_classes == DEFAULT_STORAGE_CLASSES

    def test_storage_classes_list_becomes_tuple(self) -> None:
        options = UsageOptions(storage_classes=["STANDARD", "GLACIER"])  # type: ignore[arg-type]

        assert options.storage_classes == ("STANDARD", "GLACIER")

    @pytest.mark.parametrize(
        ("kwargs", "field"),
        [
            ({"delimiter": ""}, "delimiter"),
            ({"delimiter": 5}, "delimiter"),
            ({"depth": -1}, "depth"),
            ({"depth": "2"}, "depth"),
            ({"depth": True}, "depth"),
            ({"output_factor": 0}, "output_factor"),
            ({"output_factor": 1.5}, "output_factor"),
            ({"storage_classes": ()}, "storage_classes"),
            ({"storage_classes": ("STANDARD", "")}, "storage_classes"),
            ({"storage_classes": ("STANDARD", "STANDARD")}, "storage_classes"),
        ],
    )
    def test_invalid_values(self, kwargs, field) -> None:
        with pytest.raises(ValidationError) as exc_info:
            UsageOptions(**kwargs)

        assert exc_info.value.field == field

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            UsageOptions().depth = 3  # type: ignore[misc]


class TestInventoryRecord:
    """Tests for InventoryRecord."""

    def test_frozen(self) -> None:
        record = InventoryRecord(bucket="b", key="k", size=1, storage_class="STANDARD")

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.size = 2  # type: ignore[misc]


class TestStorageClassTally:
    """Tests for StorageClassTally."""

    def test_add(self) -> None:
        tally = StorageClassTally()

        tally.add(10)
        tally.add(0)

        assert tally.count == 2
        assert tally.size == 10

    def test_freeze_copies(self) -> None:
        tally = StorageClassTally(count=1, size=5)

        frozen = tally.freeze()
        tally.add(5)

        assert frozen == TierUsage(count=1, size=5)


class TestSnapshot:
    """Tests for Snapshot and SnapshotEntry."""

    def _snapshot(self) -> Snapshot:
        entry = make_snapshot_entry(
            "bucket/a",
            {"STANDARD": StorageClassTally(2, 30), "GLACIER": StorageClassTally(1, 5)},
        )
        return Snapshot(entries=(entry,), accumulated_count=3, sequence=1)

    def test_as_list_wire_shape(self) -> None:
        assert self._snapshot().as_list() == [
            {
                "path": "bucket/a",
                "storageClass": {
                    "STANDARD": {"count": 2, "size": 30},
                    "GLACIER": {"count": 1, "size": 5},
                },
            }
        ]

    def test_entry_totals(self) -> None:
        entry = self._snapshot().get("bucket/a")

        assert entry is not None
        assert entry.count == 3
        assert entry.size == 35

    def test_get_unknown_path(self) -> None:
        assert self._snapshot().get("bucket/missing") is None

    def test_iteration_and_len(self) -> None:
        snapshot = self._snapshot()

        assert len(snapshot) == 1
        assert [e.path for e in snapshot] == ["bucket/a"]
        assert snapshot.paths == ["bucket/a"]

    def test_storage_class_is_read_only(self) -> None:
        entry = self._snapshot().get("bucket/a")

        with pytest.raises(TypeError):
            entry.storage_class["STANDARD"] = TierUsage(0, 0)  # type: ignore[index]

    def test_entry_isolated_from_source_tallies(self) -> None:
        tallies = {"STANDARD": StorageClassTally(1, 1)}
        entry = make_snapshot_entry("b", tallies)

        tallies["STANDARD"].add(100)
        tallies["GLACIER"] = StorageClassTally(1, 1)

        assert entry.storage_class == {"STANDARD": TierUsage(1, 1)}
