# Copyright (c) Syntropy Systems
"""Helpers shared by trialboard commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from trialboard.config import DATA_DIR_ENV, OUTPUT_FORMATS, load_config
from trialboard.sources import DirectorySource

console = Console()

DATA_DIR_OPTION = typer.Option(
    None,
    "--data-dir",
    "-d",
    envvar=DATA_DIR_ENV,
    help="Experiment store directory (default: from .trialboard/config.yaml)",
)
FORMAT_OPTION = typer.Option(
    None,
    "--format",
    "-f",
    help="Output format: table, csv or json",
)
OUTPUT_OPTION = typer.Option(
    None,
    "--output",
    "-o",
    help="Write csv/json output to a file instead of stdout",
)


def open_source(data_dir: Optional[Path]) -> DirectorySource:
    """Open the experiment store, exiting if it does not exist."""
    root = data_dir or load_config().data_dir
    if not root.is_dir():
        console.print(f"[red]Error:[/red] Experiment store not found: {root}")
        console.print("Run 'trialboard init' or pass --data-dir.")
        raise typer.Exit(1)
    return DirectorySource(root)


def resolve_format(output_format: Optional[str]) -> str:
    """Validate the requested format, falling back to the configured default."""
    resolved = output_format or load_config().output_format
    if resolved not in OUTPUT_FORMATS:
        console.print(
            f"[red]Error:[/red] Unknown format '{resolved}' "
            f"(choose from {', '.join(OUTPUT_FORMATS)})"
        )
        raise typer.Exit(1)
    return resolved


def emit(text: str, output: Optional[Path]) -> None:
    """Write rendered text to ``output`` or stdout."""
    if output is None:
        typer.echo(text, nl=not text.endswith("\n"))
        return
    _ = output.write_text(text)
    console.print(f"[green]Wrote {output}[/green]")
