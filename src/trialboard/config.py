# Copyright (c) Syntropy Systems
"""Configuration management for trialboard."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

import yaml
from rich.console import Console
from rich.logging import RichHandler

PROJECT_DIR_NAME = ".trialboard"
CONFIG_FILE = "config.yaml"
EXPERIMENTS_DIR = "experiments"

DATA_DIR_ENV = "TRIALBOARD_DATA_DIR"
LOG_LEVEL_ENV = "TRIALBOARD_LOG_LEVEL"

OUTPUT_FORMATS = ("table", "csv", "json")


@dataclass
class TrialboardConfig:
    """Configuration for trialboard."""

    # Root of the experiment store
    data_dir: Path = field(default_factory=lambda: Path(PROJECT_DIR_NAME) / EXPERIMENTS_DIR)

    # Level name for the root logger
    log_level: str = "WARNING"

    # Bind address for `trialboard server`
    host: str = "127.0.0.1"
    port: int = 8080

    # Default CLI output: table, csv or json
    output_format: str = "table"


def find_trialboard_dir(start_path: Path | None = None) -> Path | None:
    """Find the nearest .trialboard directory by walking up from start_path.

    Returns None if no .trialboard directory is found.
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while current != current.parent:
        project_dir = current / PROJECT_DIR_NAME
        if project_dir.is_dir():
            return project_dir
        current = current.parent

    # Check root
    project_dir = current / PROJECT_DIR_NAME
    if project_dir.is_dir():
        return project_dir

    return None


def get_global_config_dir() -> Path:
    """Get the global trialboard config directory (~/.trialboard)."""
    return Path.home() / PROJECT_DIR_NAME


def load_config(project_dir: Path | None = None) -> TrialboardConfig:
    """Load configuration from .trialboard/config.yaml or defaults.

    Looks for config in:
    1. Provided project_dir
    2. Nearest .trialboard directory walking up
    3. ~/.trialboard/config.yaml
    4. Defaults

    A relative ``data_dir`` is resolved against the directory holding the
    config file. TRIALBOARD_DATA_DIR and TRIALBOARD_LOG_LEVEL override
    file values.
    """
    config = TrialboardConfig()

    if project_dir is None:
        project_dir = find_trialboard_dir()
    if project_dir is None:
        global_dir = get_global_config_dir()
        if (global_dir / CONFIG_FILE).exists():
            project_dir = global_dir

    if project_dir is not None:
        config.data_dir = project_dir / EXPERIMENTS_DIR
        config_path = project_dir / CONFIG_FILE
        if config_path.exists():
            with config_path.open() as f:
                data = cast("dict[str, object]", yaml.safe_load(f) or {})

            data_dir = data.get("data_dir")
            if isinstance(data_dir, str):
                config.data_dir = project_dir / Path(data_dir).expanduser()
            log_level = data.get("log_level")
            if isinstance(log_level, str):
                config.log_level = log_level.upper()
            host = data.get("host")
            if isinstance(host, str):
                config.host = host
            port = data.get("port")
            if isinstance(port, int):
                config.port = port
            output_format = data.get("output_format")
            if isinstance(output_format, str) and output_format in OUTPUT_FORMATS:
                config.output_format = output_format

    env_data_dir = os.environ.get(DATA_DIR_ENV)
    if env_data_dir:
        config.data_dir = Path(env_data_dir).expanduser()
    env_log_level = os.environ.get(LOG_LEVEL_ENV)
    if env_log_level:
        config.log_level = env_log_level.upper()

    return config


def configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
            ),
        ],
        force=True,
    )
