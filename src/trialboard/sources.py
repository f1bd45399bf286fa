# Copyright (c) Syntropy Systems
"""Sources of experiments, trials and observation logs.

Builders only depend on the :class:`ExperimentSource` protocol. The
:class:`DirectorySource` implementation reads an on-disk store laid out as::

    <root>/<experiment>/experiment.yaml
    <root>/<experiment>/trials/<trial>/trial.json
    <root>/<experiment>/trials/<trial>/observations.jsonl
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, cast

import yaml
from pydantic import JsonValue, TypeAdapter, ValidationError

from trialboard.errors import FetchFailure, NotFound
from trialboard.models.experiment import Experiment, ExperimentSummary
from trialboard.models.trial import Observation, ObservationLog, Trial

if TYPE_CHECKING:
    from pathlib import Path

    from trialboard.models.experiment import ObjectiveSpec

logger = logging.getLogger(__name__)

EXPERIMENT_FILE = "experiment.yaml"
TRIALS_DIR = "trials"
TRIAL_FILE = "trial.json"
OBSERVATIONS_FILE = "observations.jsonl"

_TRIAL_DOCUMENT = TypeAdapter(dict[str, JsonValue])


class ExperimentSource(Protocol):
    """Read-only access to experiment metadata and observation logs."""

    def experiment_names(self) -> list[str]:
        ...

    def fetch_experiment(self, experiment_name: str) -> Experiment:
        ...

    def fetch_experiment_objective(self, experiment_name: str) -> ObjectiveSpec:
        ...

    def fetch_trial_list(self, experiment_name: str) -> list[Trial]:
        ...

    def fetch_trial(self, experiment_name: str, trial_name: str) -> Trial:
        ...

    def fetch_observation_log(
        self,
        experiment_name: str,
        trial_name: str,
    ) -> ObservationLog:
        ...


def read_observations(path: Path, trial_name: str) -> ObservationLog:
    """Read an observation log from a JSONL file.

    A missing file is an empty log. A truncated final line, left by a writer
    that is still appending, is dropped.

    Raises:
        FetchFailure: If the file cannot be read or an earlier line is invalid.

    """
    if not path.exists():
        return ObservationLog(trial_name=trial_name)

    try:
        lines = [line.strip() for line in path.read_text(encoding="utf-8").splitlines()]
    except (OSError, UnicodeDecodeError) as exc:
        raise FetchFailure(trial_name, f"cannot read {path.name}: {exc}") from exc
    lines = [line for line in lines if line]

    observations: list[Observation] = []
    for number, line in enumerate(lines, start=1):
        try:
            observations.append(Observation.model_validate_json(line))
        except ValidationError as exc:
            if number == len(lines):
                logger.debug("Dropping partial last line of %s", path)
                break
            raise FetchFailure(
                trial_name,
                f"invalid observation on line {number} of {path.name}",
            ) from exc

    return ObservationLog(trial_name=trial_name, observations=tuple(observations))


def _check_name(name: str) -> None:
    # Names map to single path components below the store root.
    if not name or name.startswith(".") or "/" in name or "\\" in name:
        raise NotFound(name, "invalid name")


class DirectorySource:
    """Experiment source backed by a directory tree."""

    root: Path

    def __init__(self, root: Path) -> None:
        self.root = root

    def _experiment_dir(self, experiment_name: str) -> Path:
        _check_name(experiment_name)
        experiment_dir = self.root / experiment_name
        if not (experiment_dir / EXPERIMENT_FILE).is_file():
            raise NotFound(experiment_name, "experiment not found")
        return experiment_dir

    def _trial_dir(self, experiment_name: str, trial_name: str) -> Path:
        _check_name(trial_name)
        trial_dir = self._experiment_dir(experiment_name) / TRIALS_DIR / trial_name
        if not (trial_dir / TRIAL_FILE).is_file():
            raise NotFound(trial_name, f"trial not found in {experiment_name}")
        return trial_dir

    def experiment_names(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(
            path.name
            for path in self.root.iterdir()
            if not path.name.startswith(".") and (path / EXPERIMENT_FILE).is_file()
        )

    def fetch_experiment(self, experiment_name: str) -> Experiment:
        path = self._experiment_dir(experiment_name) / EXPERIMENT_FILE
        try:
            with path.open(encoding="utf-8") as f:
                data = cast("object", yaml.safe_load(f) or {})
            if not isinstance(data, dict):
                raise FetchFailure(experiment_name, f"{EXPERIMENT_FILE} is not a mapping")
            # The directory name is the store key.
            cast("dict[str, object]", data)["name"] = experiment_name
            return Experiment.model_validate(data)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as exc:
            raise FetchFailure(experiment_name, f"invalid {EXPERIMENT_FILE}: {exc}") from exc

    def fetch_experiment_objective(self, experiment_name: str) -> ObjectiveSpec:
        return self.fetch_experiment(experiment_name).objective

    def _read_trial(self, trial_dir: Path) -> Trial:
        try:
            data = _TRIAL_DOCUMENT.validate_json(
                (trial_dir / TRIAL_FILE).read_text(encoding="utf-8"),
            )
            data["name"] = trial_dir.name
            return Trial.model_validate(data)
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            raise FetchFailure(trial_dir.name, f"invalid {TRIAL_FILE}: {exc}") from exc

    def fetch_trial_list(self, experiment_name: str) -> list[Trial]:
        trials_dir = self._experiment_dir(experiment_name) / TRIALS_DIR
        if not trials_dir.is_dir():
            return []
        return [
            self._read_trial(trial_dir)
            for trial_dir in sorted(trials_dir.iterdir())
            if (trial_dir / TRIAL_FILE).is_file()
        ]

    def fetch_trial(self, experiment_name: str, trial_name: str) -> Trial:
        return self._read_trial(self._trial_dir(experiment_name, trial_name))

    def fetch_observation_log(
        self,
        experiment_name: str,
        trial_name: str,
    ) -> ObservationLog:
        trial_dir = self._trial_dir(experiment_name, trial_name)
        return read_observations(trial_dir / OBSERVATIONS_FILE, trial_name)


def list_experiments(source: ExperimentSource) -> list[ExperimentSummary]:
    """Summarize every experiment known to ``source``."""
    summaries: list[ExperimentSummary] = []
    for name in source.experiment_names():
        experiment = source.fetch_experiment(name)
        summaries.append(
            ExperimentSummary(
                name=experiment.name,
                status=experiment.status,
                objective_metric_name=experiment.objective.objective_metric_name,
                objective_type=experiment.objective.type,
                trial_count=len(source.fetch_trial_list(name)),
                created_at=experiment.created_at,
            ),
        )
    return summaries
