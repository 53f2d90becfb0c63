"""Lambda handler for S3 Inventory manifest deliveries."""

import time
from typing import Any
from urllib.parse import unquote_plus

import boto3  # type: ignore[import-untyped]

from ..config import options_from_environment
from ..inventory import iter_manifest_records
from .processor import StructuredLogger, process_inventory_records

logger = StructuredLogger(__name__)

MANIFEST_SUFFIX = "manifest.json"


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Lambda handler for S3 Inventory reports.

    Accepts either a direct invocation ``{"bucket": ..., "manifest_key": ...}``
    or an S3 event notification for a delivered ``manifest.json``, and
    aggregates the report's records into usage totals.

    Environment variables:
        S3_USAGE_DELIMITER: Folder delimiter (default: /)
        S3_USAGE_DEPTH: Folder depth to group by (default: 0)
        S3_USAGE_OUTPUT_FACTOR: Records between snapshots (default: 100)
        S3_USAGE_STORAGE_CLASSES: Comma-separated pre-seeded tiers

    Args:
        event: Direct invocation payload or S3 event notification
        context: Lambda context

    Returns:
        Processing result summary with the final snapshot
    """
    start_time = time.perf_counter()
    request_id = getattr(context, "aws_request_id", "unknown")
    manifests = get_manifest_locations(event)
    options = options_from_environment()

    logger.info(
        "Lambda invocation started",
        request_id=request_id,
        function_name=getattr(context, "function_name", "unknown"),
        manifest_count=len(manifests),
        depth=options.depth,
        output_factor=options.output_factor,
    )

    s3_client = boto3.client("s3")
    reports = []
    for bucket, key in manifests:
        result = process_inventory_records(
            records=iter_manifest_records(s3_client, bucket, key),
            options=options,
        )
        reports.append(
            {
                "manifest": f"s3://{bucket}/{key}",
                "processed": result.processed_count,
                "skipped": result.skipped_count,
                "accumulated": result.accumulated_count,
                "snapshots_emitted": result.snapshots_emitted,
                "snapshot": result.snapshot.as_list(),
            }
        )

    processing_time_ms = (time.perf_counter() - start_time) * 1000
    logger.info(
        "Lambda invocation completed",
        request_id=request_id,
        manifest_count=len(reports),
        processed=sum(r["processed"] for r in reports),
        processing_time_ms=round(processing_time_ms, 2),
    )

    return {
        "statusCode": 200,
        "body": {"reports": reports},
    }


def get_manifest_locations(event: dict[str, Any]) -> list[tuple[str, str]]:
    """
    Extract (bucket, manifest_key) pairs from a Lambda event.

    S3 notifications for objects other than ``manifest.json`` (the data
    files and checksum delivered alongside it) are ignored.
    """
    if "bucket" in event and "manifest_key" in event:
        return [(event["bucket"], event["manifest_key"])]

    locations = []
    for record in event.get("Records", []):
        s3_info = record.get("s3", {})
        bucket = s3_info.get("bucket", {}).get("name")
        key = unquote_plus(s3_info.get("object", {}).get("key", ""))
        if bucket and key.endswith(MANIFEST_SUFFIX):
            locations.append((bucket, key))
    return locations
