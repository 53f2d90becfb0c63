"""
Snapshot formatters.

This module provides formatters for rendering Snapshot data
as a text table or JSON.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..models import Snapshot

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


def format_bytes(size: int) -> str:
    """Render a byte count with a binary unit, e.g. ``1.5 KiB``."""
    value = float(size)
    for unit in _UNITS:
        if abs(value) < 1024 or unit == _UNITS[-1]:
            if unit == "B":
                return f"{int(value)} B"
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"  # pragma: no cover


class BaseFormatter(Protocol):
    """Protocol for snapshot formatters."""

    def format(self, snapshot: Snapshot) -> str:
        """
        Format a snapshot into an output string.

        Args:
            snapshot: Usage snapshot

        Returns:
            Formatted string representation
        """
        ...


class TableFormatter:
    """Format a snapshot as a table with one row per (path, tier)."""

    def __init__(self, show_empty: bool = False) -> None:
        """
        Args:
            show_empty: Include pre-seeded tiers that have no objects
        """
        self.show_empty = show_empty

    def format(self, snapshot: Snapshot) -> str:
        """
        Generate table with columns: Path, Storage Class, Objects, Size, Bytes.

        Ends with a totals row across all groups.
        """
        if not snapshot.entries:
            return ""

        rows: list[tuple[str, str, str, str, str]] = []
        total_count = 0
        total_size = 0
        for entry in snapshot:
            for name, usage in entry.storage_class.items():
                if usage.count == 0 and not self.show_empty:
                    continue
                rows.append(
                    (
                        entry.path,
                        name,
                        f"{usage.count:,}",
                        format_bytes(usage.size),
                        f"{usage.size:,}",
                    )
                )
                total_count += usage.count
                total_size += usage.size

        headers = ("Path", "Storage Class", "Objects", "Size", "Bytes")
        totals = ("Total", "", f"{total_count:,}", format_bytes(total_size), f"{total_size:,}")
        widths = [
            max(len(r[i]) for r in (headers, totals, *rows)) for i in range(len(headers))
        ]

        def line(cells: tuple[str, ...]) -> str:
            return (
                f"{cells[0]:<{widths[0]}}  {cells[1]:<{widths[1]}}  "
                f"{cells[2]:>{widths[2]}}  {cells[3]:>{widths[3]}}  {cells[4]:>{widths[4]}}"
            )

        rule = "-" * len(line(headers))
        lines = [line(headers), rule]
        lines.extend(line(r) for r in rows)
        lines.append(rule)
        lines.append(line(totals))
        return "\n".join(lines)


class JsonFormatter:
    """Format a snapshot as its JSON wire shape."""

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def format(self, snapshot: Snapshot) -> str:
        return json.dumps(snapshot.as_list(), indent=self.indent)
