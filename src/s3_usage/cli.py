"""Command-line interface for summarizing S3 Inventory usage."""

import csv
import itertools
import json
import logging
import sys
from collections.abc import Iterator

import boto3  # type: ignore[import-untyped]
import click
import yaml
from botocore.exceptions import BotoCoreError, ClientError

from .aggregator import InventoryUsageProcessor
from .config import load_options, options_from_mapping
from .exceptions import S3UsageError
from .inventory import (
    check_columns,
    iter_local_records,
    iter_manifest_records,
    parse_file_schema,
    parse_s3_url,
)
from .schema import DEFAULT_INVENTORY_COLUMNS
from .visualization import SnapshotFormatter, format_snapshot

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="s3-usage")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """s3-usage inventory usage CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option(
    "--manifest",
    help="S3 Inventory manifest URL (s3://bucket/path/manifest.json)",
)
@click.option(
    "--region",
    help="AWS region (default: use boto3 defaults)",
)
@click.option(
    "--endpoint-url",
    help="AWS endpoint URL (e.g., http://localhost:4566 for LocalStack)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file with delimiter/depth/outputFactor/storageClasses",
)
@click.option("--delimiter", help="Folder delimiter (default: /)")
@click.option(
    "--depth",
    type=click.IntRange(min=0),
    help="Folder depth to group by (default: 0, bucket only)",
)
@click.option(
    "--output-factor",
    type=click.IntRange(min=1),
    help="Records between emitted snapshots (default: 100)",
)
@click.option(
    "--columns",
    help="Comma-separated CSV column order for local files (default: full inventory schema)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in SnapshotFormatter]),
    default=SnapshotFormatter.TABLE.value,
    help="Output format for the final totals (default: table)",
)
@click.option(
    "--show-empty",
    is_flag=True,
    help="Include pre-seeded storage classes with no objects in table output",
)
@click.option(
    "--follow",
    is_flag=True,
    help="Print every emitted snapshot as a JSON line instead of the final totals",
)
def summarize(
    files: tuple[str, ...],
    manifest: str | None,
    region: str | None,
    endpoint_url: str | None,
    config_path: str | None,
    delimiter: str | None,
    depth: int | None,
    output_factor: int | None,
    columns: str | None,
    output_format: str,
    show_empty: bool,
    follow: bool,
) -> None:
    """Summarize object count and size by folder and storage class.

    FILES are local inventory data files (.csv or .csv.gz). Use --manifest to
    read a delivered inventory report from S3 instead.
    """
    if not files and not manifest:
        raise click.UsageError("Provide inventory FILES or --manifest")

    try:
        overrides = {"delimiter": delimiter, "depth": depth, "output_factor": output_factor}
        if config_path:
            options = load_options(config_path, **overrides)
        else:
            options = options_from_mapping(None, **overrides)

        if manifest:
            bucket, key = parse_s3_url(manifest)
            s3_client = boto3.client("s3", region_name=region, endpoint_url=endpoint_url)
            records = itertools.chain(
                iter_manifest_records(s3_client, bucket, key),
                _local_records(files, columns),
            )
        else:
            records = _local_records(files, columns)

        processor = InventoryUsageProcessor(options)
        for snapshot in processor.transform(records):
            logger.debug(
                "Snapshot %d emitted after %d records",
                snapshot.sequence,
                snapshot.accumulated_count,
            )
            if follow:
                click.echo(json.dumps(snapshot.as_list()))

    except S3UsageError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    except (ClientError, BotoCoreError) as e:
        click.echo(f"✗ Failed to read inventory: {e}", err=True)
        sys.exit(1)
    except (OSError, UnicodeDecodeError, csv.Error, yaml.YAMLError) as e:
        click.echo(f"✗ Failed to read input: {e}", err=True)
        sys.exit(1)

    if follow:
        return

    snapshot = processor.snapshot()
    if not snapshot.entries:
        click.echo("No objects found.", err=True)
        return

    formatter = SnapshotFormatter(output_format)
    click.echo(format_snapshot(snapshot, formatter, show_empty=show_empty))
    if formatter == SnapshotFormatter.TABLE:
        click.echo(
            f"\n{processor.accumulated_count:,} object version(s) counted, "
            f"{processor.skipped_count:,} skipped",
            err=True,
        )


def _local_records(files: tuple[str, ...], columns: str | None) -> Iterator[dict[str, str]]:
    column_names = parse_file_schema(columns) if columns else list(DEFAULT_INVENTORY_COLUMNS)
    check_columns(column_names, "--columns")
    for path in files:
        yield from iter_local_records(path, column_names)


if __name__ == "__main__":
    cli()
