# Copyright (c) Syntropy Systems
"""CLI command for running the trialboard server."""

from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from trialboard.config import DATA_DIR_ENV, load_config
from trialboard.server.app import create_app

console = Console()


def server(
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        "-d",
        envvar=DATA_DIR_ENV,
        help="Experiment store directory",
    ),
):
    """
    Start the trialboard HTTP server.

    Serves experiment listings, trial matrices and metric series as JSON.

    Examples:

        # Serve the store of the current project
        trialboard server

        # Bind to all interfaces (for remote access)
        trialboard server --host 0.0.0.0 --port 8080
    """
    config = load_config()
    resolved_dir = data_dir or config.data_dir
    resolved_host = host or config.host
    resolved_port = port or config.port

    if not resolved_dir.is_dir():
        console.print(f"[red]Error:[/red] Experiment store not found: {resolved_dir}")
        raise typer.Exit(1)

    console.print("[bold]trialboard server[/bold]")
    console.print(f"  Host: {resolved_host}")
    console.print(f"  Port: {resolved_port}")
    console.print(f"  Data Dir: {resolved_dir}")
    console.print()

    app = create_app(data_dir=resolved_dir)
    uvicorn.run(
        app,
        host=resolved_host,
        port=resolved_port,
        log_level=config.log_level.lower(),
    )
