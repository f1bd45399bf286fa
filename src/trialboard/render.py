# Copyright (c) Syntropy Systems
"""Rendering of row-oriented build output."""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence


def to_csv_text(rows: Sequence[Sequence[str]]) -> str:
    """Render rows as comma-separated lines, header first."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def rich_table(rows: Sequence[Sequence[str]], title: str | None = None) -> Table:
    """Build a rich table whose first row is the header.

    Empty cells are shown as ``-``.
    """
    table = Table(
        title=escape(title) if title else None,
        show_header=True,
        header_style="bold",
    )
    if not rows:
        return table

    for column in rows[0]:
        table.add_column(escape(column))
    for row in rows[1:]:
        table.add_row(*(escape(cell) if cell else "[dim]-[/dim]" for cell in row))
    return table
