# Copyright (c) Syntropy Systems
"""Pytest fixtures for trialboard tests."""

import json
import os
from collections.abc import Generator
from pathlib import Path
from typing import Optional

import pytest
import yaml

# Store original cwd at module load time
_original_cwd = Path.cwd()

EXPERIMENT = "random-example"

OBJECTIVE = {
    "type": "minimize",
    "objectiveMetricName": "loss",
    "additionalMetricNames": ["accuracy"],
    "goal": 0.01,
}

SUCCEEDED = [
    {"type": "Created", "status": "True"},
    {"type": "Running", "status": "False"},
    {"type": "Succeeded", "status": "True"},
]
RUNNING = [
    {"type": "Created", "status": "True"},
    {"type": "Running", "status": "True"},
]
FAILED = [
    {"type": "Created", "status": "True"},
    {"type": "Running", "status": "False"},
    {"type": "Failed", "status": "True"},
]


def write_experiment(
    root: Path,
    name: str,
    objective: dict,
    parameters: list[str],
    conditions: Optional[list[dict]] = None,
) -> Path:
    """Write experiment.yaml for a store experiment."""
    experiment_dir = root / name
    (experiment_dir / "trials").mkdir(parents=True)
    data = {
        "name": name,
        "objective": objective,
        "parameters": [
            {"name": p, "parameterType": "double", "feasibleSpace": {"min": "0", "max": "1"}}
            for p in parameters
        ],
        "conditions": conditions or [],
        "createdAt": "2021-01-01T00:00:00Z",
    }
    with (experiment_dir / "experiment.yaml").open("w") as f:
        yaml.safe_dump(data, f)
    return experiment_dir


def write_trial(
    root: Path,
    experiment: str,
    name: str,
    objective: dict,
    assignments: dict[str, str],
    conditions: list[dict],
    observations: Optional[list[tuple[str, str, str]]] = None,
) -> Path:
    """Write trial.json and observations.jsonl for a store trial."""
    trial_dir = root / experiment / "trials" / name
    trial_dir.mkdir(parents=True)
    trial = {
        "name": name,
        "objective": objective,
        "parameterAssignments": [
            {"name": k, "value": v} for k, v in assignments.items()
        ],
        "conditions": conditions,
    }
    _ = (trial_dir / "trial.json").write_text(json.dumps(trial))
    if observations is not None:
        lines = [
            json.dumps({"metricName": metric, "timeStamp": ts, "value": value})
            for metric, ts, value in observations
        ]
        _ = (trial_dir / "observations.jsonl").write_text("\n".join(lines) + "\n")
    return trial_dir


@pytest.fixture
def store(tmp_path: Path) -> Path:
    """Create an experiment store with one sample experiment.

    trial-a succeeded, trial-b is still running, trial-c failed and has no
    batch_size assignment.
    """
    root = tmp_path / "experiments"
    root.mkdir()
    write_experiment(
        root,
        EXPERIMENT,
        OBJECTIVE,
        ["lr", "batch_size"],
        conditions=[{"type": "Created"}, {"type": "Running"}],
    )
    write_trial(
        root,
        EXPERIMENT,
        "trial-a",
        OBJECTIVE,
        {"lr": "0.01", "batch_size": "32"},
        SUCCEEDED,
        [
            ("loss", "2021-01-01T00:00:00.100000000Z", "0.5"),
            ("accuracy", "2021-01-01T00:00:00.200000000Z", "0.7"),
            ("loss", "2021-01-01T00:00:00.900000000Z", "0.3"),
            ("loss", "2021-01-01T00:00:01Z", "0.4"),
            ("accuracy", "2021-01-01T00:00:01.5Z", "0.9"),
        ],
    )
    write_trial(
        root,
        EXPERIMENT,
        "trial-b",
        OBJECTIVE,
        {"lr": "0.1", "batch_size": "64"},
        RUNNING,
        [("loss", "2021-01-01T00:00:00Z", "0.9")],
    )
    write_trial(
        root,
        EXPERIMENT,
        "trial-c",
        OBJECTIVE,
        {"lr": "0.001"},
        FAILED,
    )
    return root


@pytest.fixture
def project(tmp_path: Path, store: Path) -> Generator[Path, None, None]:
    """Create a .trialboard project whose config points at the store."""
    project_dir = tmp_path / ".trialboard"
    project_dir.mkdir()
    with (project_dir / "config.yaml").open("w") as f:
        yaml.safe_dump({"data_dir": str(store), "output_format": "table"}, f)

    # Change to temp directory
    os.chdir(tmp_path)

    yield tmp_path

    # Always return to original cwd
    os.chdir(_original_cwd)
