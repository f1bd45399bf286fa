# Copyright (c) Syntropy Systems
"""trialboard matrix command - best metric values per trial."""
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
from trialboard.errors import FetchFailure, SchemaViolation
from trialboard.matrix import build_experiment_matrix
from trialboard.render import rich_table, to_csv_text


def matrix(
    name: str = typer.Argument(..., help="Experiment to tabulate"),
    output_format: Optional[str] = FORMAT_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
    data_dir: Optional[Path] = DATA_DIR_OPTION,
) -> None:
    """Show one row per trial with its best metric values and parameters.

    Metric cells stay empty for trials that have not succeeded.

    Examples:
        trialboard matrix mnist-random
        trialboard matrix mnist-random --format csv -o trials.csv

    """
    resolved = resolve_format(output_format)
    source = open_source(data_dir)

    try:
        trial_matrix = build_experiment_matrix(source, name)
    except (FetchFailure, SchemaViolation) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if resolved == "json":
        emit(trial_matrix.model_dump_json(indent=2), output)
    elif resolved == "csv" or output is not None:
        emit(to_csv_text(trial_matrix.as_rows()), output)
    elif not trial_matrix.rows:
        console.print("[dim]No trials found[/dim]")
    else:
        console.print(rich_table(trial_matrix.as_rows(), title=name))
