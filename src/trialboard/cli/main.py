# Copyright (c) Syntropy Systems
"""Main CLI entry point for trialboard."""

from typing import Optional

import typer

from trialboard.cli.experiments import experiments, show
from trialboard.cli.init_cmd import init
from trialboard.cli.matrix import matrix
from trialboard.cli.series import series
from trialboard.cli.server_cmd import server
from trialboard.config import configure_logging, load_config

app = typer.Typer(
    name="trialboard",
    help=(
        "Inspect tuning experiments: best metric values per trial and "
        "per-second metric histories."
    ),
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        envvar="TRIALBOARD_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """Configure logging before running a command."""
    configure_logging(log_level or load_config().log_level)


# Register commands
_ = app.command()(init)
_ = app.command()(experiments)
_ = app.command()(show)
_ = app.command()(matrix)
_ = app.command()(series)
_ = app.command()(server)


if __name__ == "__main__":
    app()
