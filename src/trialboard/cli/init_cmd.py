# Copyright (c) Syntropy Systems
"""trialboard init command."""

from pathlib import Path

import typer
import yaml
from rich.console import Console

from trialboard.config import CONFIG_FILE, EXPERIMENTS_DIR, PROJECT_DIR_NAME

console = Console()


def init(
    path: Path = typer.Argument(
        Path(),
        help="Directory to initialize (default: current directory)",
    ),
) -> None:
    """Initialize a new trialboard project.

    Creates a .trialboard directory with configuration and an empty
    experiment store.
    """
    target = path.resolve()
    project_dir = target / PROJECT_DIR_NAME

    if project_dir.exists():
        console.print(f"[yellow]Already initialized:[/yellow] {project_dir}")
        return

    # Create directory structure
    experiments_dir = project_dir / EXPERIMENTS_DIR
    experiments_dir.mkdir(parents=True)

    # Create default config
    config = {
        "data_dir": EXPERIMENTS_DIR,
        "log_level": "WARNING",
        "host": "127.0.0.1",
        "port": 8080,
        "output_format": "table",
    }

    config_path = project_dir / CONFIG_FILE
    with config_path.open("w") as f:
        yaml.dump(config, f, default_flow_style=False)

    console.print(f"[green]Initialized trialboard project:[/green] {project_dir}")
    console.print(f"  [dim]config:[/dim] {config_path}")
    console.print(f"  [dim]experiments:[/dim] {experiments_dir}")
