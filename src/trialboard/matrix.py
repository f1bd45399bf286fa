# Copyright (c) Syntropy Systems
"""Trial matrix: one pivoted row of best metric values and parameters per trial."""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING, Callable

from trialboard import selector
from trialboard.columns import ColumnIndex, assign
from trialboard.models.results import STATUS_COLUMN, TRIAL_NAME_COLUMN, TrialMatrix

if TYPE_CHECKING:
    from collections.abc import Iterable

    from trialboard.models.experiment import ObjectiveSpec
    from trialboard.models.trial import ObservationLog, Trial
    from trialboard.sources import ExperimentSource

logger = logging.getLogger(__name__)

ObservationLogFetcher = Callable[[str], "ObservationLog"]


def build_row(
    trial: Trial,
    objective: ObjectiveSpec,
    columns: ColumnIndex,
    fetch_observation_log: ObservationLogFetcher,
) -> list[str]:
    """Build the pivot row of one trial, prefixed with its name and state.

    Metric cells hold the best value ever observed for the metric and stay
    empty unless the trial succeeded. Parameter cells are always filled.

    Raises:
        FetchFailure: If the observation log cannot be fetched.
        SchemaViolation: If an observation or assignment names a column
            absent from ``columns``.

    """
    cells = columns.empty_row()

    if trial.succeeded:
        log = fetch_observation_log(trial.name)
        for observation in log.observations:
            offset = columns.metric_offset(observation.metric_name)
            if cells[offset] == "":
                cells[offset] = observation.value
            else:
                cells[offset] = selector.select(
                    objective.type,
                    cells[offset],
                    observation.value,
                )

    for assignment in trial.parameter_assignments:
        cells[columns.parameter_offset(assignment.name)] = assignment.value

    return [trial.name, trial.current_state, *cells]


def build_matrix(
    trials: Iterable[Trial],
    objective: ObjectiveSpec,
    parameter_names: Iterable[str],
    fetch_observation_log: ObservationLogFetcher,
    columns: ColumnIndex | None = None,
) -> TrialMatrix:
    """Build the trial matrix of one experiment.

    Args:
        trials: Trials of the experiment, one output row each, in order
        objective: Experiment objective; declares the metric columns and the
            direction used to pick best values
        parameter_names: Declared experiment parameters, in column order
        fetch_observation_log: Returns the observation log of a trial by name
        columns: Column layout to use; assigned from ``objective`` and
            ``parameter_names`` when omitted

    Returns:
        The matrix. Nothing is returned if any trial fails.

    """
    if columns is None:
        columns = assign(objective, parameter_names)

    rows = [
        build_row(trial, objective, columns, fetch_observation_log)
        for trial in trials
    ]
    logger.info("Built trial matrix with %d row(s), %d column(s)", len(rows), len(columns))
    return TrialMatrix(
        header=[TRIAL_NAME_COLUMN, STATUS_COLUMN, *columns.names],
        rows=rows,
    )


def build_experiment_matrix(source: ExperimentSource, experiment_name: str) -> TrialMatrix:
    """Fetch an experiment's trials and build its matrix from ``source``."""
    experiment = source.fetch_experiment(experiment_name)
    trials = source.fetch_trial_list(experiment_name)
    return build_matrix(
        trials,
        experiment.objective,
        experiment.parameter_names,
        partial(source.fetch_observation_log, experiment_name),
    )
