# Copyright (c) Syntropy Systems
"""trialboard experiments and show commands."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from trialboard.cli.common import DATA_DIR_OPTION, console, open_source
from trialboard.errors import FetchFailure
from trialboard.sources import list_experiments

STATUS_STYLES = {
    "Created": "dim",
    "Running": "blue",
    "Restarting": "blue",
    "Succeeded": "green",
    "Failed": "red",
}


def experiments(data_dir: Optional[Path] = DATA_DIR_OPTION) -> None:
    """List experiments in the store."""
    source = open_source(data_dir)
    try:
        summaries = list_experiments(source)
    except FetchFailure as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if not summaries:
        console.print("[dim]No experiments found[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Objective")
    table.add_column("Trials", justify="right")
    table.add_column("Created", style="dim")

    for summary in summaries:
        style = STATUS_STYLES.get(summary.status, "white")
        status = summary.status or "-"
        table.add_row(
            summary.name,
            f"[{style}]{status}[/{style}]",
            f"{summary.objective_type.value} {summary.objective_metric_name}",
            str(summary.trial_count),
            summary.created_at or "-",
        )

    console.print(table)


def show(
    name: str = typer.Argument(..., help="Experiment to show"),
    data_dir: Optional[Path] = DATA_DIR_OPTION,
) -> None:
    """Show an experiment's objective, parameters and conditions."""
    source = open_source(data_dir)
    try:
        experiment = source.fetch_experiment(name)
    except FetchFailure as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    objective = experiment.objective
    console.print(f"\n[bold]Experiment {experiment.name}[/bold]")
    console.print(f"  [dim]status:[/dim] {experiment.status or '-'}")
    console.print(
        f"  [dim]objective:[/dim] {objective.type.value} "
        f"{objective.objective_metric_name}"
    )
    if objective.goal is not None:
        console.print(f"  [dim]goal:[/dim] {objective.goal}")
    if objective.additional_metric_names:
        console.print(
            f"  [dim]additional metrics:[/dim] "
            f"{', '.join(objective.additional_metric_names)}"
        )

    if experiment.parameters:
        console.print("\n[bold]Parameters[/bold]")
        for parameter in experiment.parameters:
            space = ", ".join(f"{k}={v}" for k, v in parameter.feasible_space.items())
            console.print(f"  {parameter.name} ({parameter.parameter_type}) {space}")

    if experiment.conditions:
        console.print("\n[bold]Conditions[/bold]")
        for condition in experiment.conditions:
            reason = f" {condition.reason}" if condition.reason else ""
            console.print(f"  {condition.type}={condition.status}{reason}")

    console.print()
