"""Tests for record validation and normalization."""

import pytest

from s3_usage.aggregator.validator import (
    is_skipped,
    normalize_record,
    parse_bool,
    parse_size,
)
from s3_usage.exceptions import InvalidSizeError, MalformedRecordError, RecordError
from s3_usage.models import InventoryRecord


class TestNormalizeRecord:
    """Tests for normalize_record."""

    def test_csv_strings_are_parsed(self, make_record) -> None:
        """String booleans and numeric sizes are converted once."""
        record = normalize_record(make_record(Size="500", IsLatest="TRUE"))

        assert isinstance(record, InventoryRecord)
        assert record.bucket == "bucket"
        assert record.key == "folder1/item.txt"
        assert record.size == 500
        assert record.storage_class == "STANDARD"
        assert record.is_latest is True
        assert record.is_delete_marker is False
        assert record.is_multipart_uploaded is False
        assert record.version_id == "version-id-hash-string"
        assert record.last_modified_date == "2016-11-22T15:24:09.000Z"
        assert record.etag == "etag-hash-string"
        assert record.replication_status == ""

    def test_integer_size_passes_through(self, make_record) -> None:
        """Size already converted to an int is used unchanged."""
        record = normalize_record(make_record(Size=20))

        assert record is not None
        assert record.size == 20

    def test_input_mapping_not_mutated(self, make_record) -> None:
        """The caller's record keeps its original string values."""
        raw = make_record(Size="42")

        normalize_record(raw)

        assert raw["Size"] == "42"

    def test_none_raises_malformed(self) -> None:
        """A null record is an error, not a skip."""
        with pytest.raises(MalformedRecordError, match="Invalid S3 Inventory object definition"):
            normalize_record(None)

    def test_non_mapping_raises_malformed(self) -> None:
        with pytest.raises(MalformedRecordError):
            normalize_record(["bucket", "key"])

    def test_missing_bucket_raises_malformed(self, make_record) -> None:
        raw = make_record()
        del raw["Bucket"]

        with pytest.raises(MalformedRecordError, match="no Bucket"):
            normalize_record(raw)

    def test_missing_key_raises_malformed(self, make_record) -> None:
        raw = make_record()
        del raw["Key"]

        with pytest.raises(MalformedRecordError, match="no Key"):
            normalize_record(raw)

    def test_malformed_error_carries_record(self) -> None:
        with pytest.raises(MalformedRecordError) as exc_info:
            normalize_record(None)

        assert exc_info.value.record is None
        assert isinstance(exc_info.value, RecordError)

    def test_delete_marker_skipped(self, make_record) -> None:
        """Delete markers never reach the accumulator."""
        assert normalize_record(make_record(IsDeleteMarker="TRUE")) is None

    def test_delete_marker_skipped_even_with_bad_size(self, make_record) -> None:
        """Skipping happens before size coercion."""
        raw = make_record(IsDeleteMarker="TRUE", Size="", StorageClass="")

        assert normalize_record(raw) is None

    def test_empty_storage_class_skipped(self, make_record) -> None:
        assert normalize_record(make_record(StorageClass="")) is None

    def test_missing_storage_class_skipped(self, make_record) -> None:
        raw = make_record()
        del raw["StorageClass"]

        assert normalize_record(raw) is None

    def test_non_latest_version_is_kept(self, make_record) -> None:
        """Every version counts, not just the latest."""
        record = normalize_record(make_record(IsLatest="FALSE"))

        assert record is not None
        assert record.is_latest is False

    def test_invalid_size_raises(self, make_record) -> None:
        with pytest.raises(InvalidSizeError) as exc_info:
            normalize_record(make_record(Size="abc"))

        assert exc_info.value.size == "abc"
        assert exc_info.value.record["Size"] == "abc"


class TestParseSize:
    """Tests for parse_size."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("0", 0),
            ("500", 500),
            (" 1024 ", 1024),
            ("007", 7),
            (123, 123),
            (5.0, 5),
            (10**15, 10**15),
        ],
    )
    def test_valid_sizes(self, value, expected) -> None:
        assert parse_size({"Size": value}) == expected

    @pytest.mark.parametrize(
        "value",
        ["abc", "", "12abc", "1.5", "-1", -5, 2.5, None, True, [], {}],
    )
    def test_invalid_sizes(self, value) -> None:
        with pytest.raises(InvalidSizeError):
            parse_size({"Size": value})

    def test_missing_size(self) -> None:
        with pytest.raises(InvalidSizeError):
            parse_size({})


class TestParseBool:
    """Tests for parse_bool."""

    @pytest.mark.parametrize("value", ["TRUE", "true", "True", " TRUE ", True])
    def test_true_values(self, value) -> None:
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["FALSE", "false", "", "yes", None, False, 1])
    def test_false_values(self, value) -> None:
        assert parse_bool(value) is False


class TestIsSkipped:
    """Tests for is_skipped."""

    def test_regular_object_not_skipped(self, make_record) -> None:
        assert is_skipped(make_record()) is False

    def test_delete_marker_with_storage_class_skipped(self, make_record) -> None:
        assert is_skipped(make_record(IsDeleteMarker="TRUE", StorageClass="STANDARD")) is True

    def test_lowercase_delete_marker_skipped(self, make_record) -> None:
        assert is_skipped(make_record(IsDeleteMarker="true")) is True
