# Copyright (c) Syntropy Systems
"""trialboard series command - per-second metric history of a trial."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from trialboard.cli.common import (
    DATA_DIR_OPTION,
    FORMAT_OPTION,
    OUTPUT_OPTION,
    console,
    emit,
    open_source,
    resolve_format,
)
from trialboard.errors import FetchFailure
from trialboard.render import rich_table, to_csv_text
from trialboard.series import build_trial_series


def series(
    experiment: str = typer.Argument(..., help="Experiment the trial belongs to"),
    trial: str = typer.Argument(..., help="Trial to show"),
    output_format: Optional[str] = FORMAT_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
    data_dir: Optional[Path] = DATA_DIR_OPTION,
) -> None:
    """Show a trial's metrics with one best value per metric and second.

    Examples:
        trialboard series mnist-random mnist-random-abc12
        trialboard series mnist-random mnist-random-abc12 --format json

    """
    resolved = resolve_format(output_format)
    source = open_source(data_dir)

    try:
        metric_series = build_trial_series(source, experiment, trial)
    except FetchFailure as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if resolved == "json":
        emit(metric_series.model_dump_json(indent=2), output)
        return
    if resolved == "csv" or output is not None:
        emit(to_csv_text(metric_series.rows()), output)
        return

    if not metric_series.points:
        console.print("[dim]No metrics logged[/dim]")
    else:
        console.print(rich_table(metric_series.rows(), title=trial))
    if metric_series.skipped:
        console.print(
            f"[yellow]Skipped {len(metric_series.skipped)} observation(s) "
            "with invalid timestamps[/yellow]"
        )
