"""
Visualization module for usage snapshots.

Provides formatters for displaying snapshots in various formats:
- TABLE: Aligned text table with a totals row (default)
- JSON: The ``[{"path", "storageClass"}]`` wire shape

Example:
    from s3_usage.visualization import SnapshotFormatter, format_snapshot

    output = format_snapshot(snapshot, formatter=SnapshotFormatter.JSON)
    print(output)
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from .formatters import BaseFormatter, JsonFormatter, TableFormatter, format_bytes

if TYPE_CHECKING:
    from ..models import Snapshot


class SnapshotFormatter(Enum):
    """Output format for snapshots."""

    TABLE = "table"
    JSON = "json"


def get_formatter(formatter_type: SnapshotFormatter, **options: Any) -> BaseFormatter:
    """
    Get formatter instance for the requested type.

    Args:
        formatter_type: Desired formatter (TABLE or JSON)
        **options: Formatter-specific options:
            - show_empty (bool): Include zero tiers (TABLE only, default: False)
            - indent (int | None): JSON indentation (JSON only, default: 2)

    Raises:
        ValueError: If unknown formatter type requested
    """
    if formatter_type == SnapshotFormatter.TABLE:
        return TableFormatter(show_empty=bool(options.get("show_empty", False)))
    if formatter_type == SnapshotFormatter.JSON:
        return JsonFormatter(indent=options.get("indent", 2))
    raise ValueError(f"Unknown formatter type: {formatter_type}")


def format_snapshot(
    snapshot: Snapshot,
    formatter: SnapshotFormatter = SnapshotFormatter.TABLE,
    **options: Any,
) -> str:
    """
    Format a snapshot for display.

    Args:
        snapshot: Snapshot to render
        formatter: Output format type (TABLE or JSON)
        **options: Formatter-specific options, see :func:`get_formatter`

    Returns:
        Formatted string ready for printing
    """
    return get_formatter(formatter, **options).format(snapshot)


__all__ = [
    "SnapshotFormatter",
    "format_snapshot",
    "format_bytes",
    "get_formatter",
]
