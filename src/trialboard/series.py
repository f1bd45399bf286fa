# Copyright (c) Syntropy Systems
"""Per-trial metric time series with one point per metric and second."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from trialboard import selector
from trialboard.errors import TimestampParseFailure
from trialboard.models.results import MetricSeries, SkippedObservation, TimeSeriesPoint
from trialboard.timestamps import normalize

if TYPE_CHECKING:
    from trialboard.models.experiment import ObjectiveSpec, ObjectiveType
    from trialboard.models.trial import Observation, ObservationLog
    from trialboard.sources import ExperimentSource

logger = logging.getLogger(__name__)


@dataclass
class _Cursor:
    """Last normalized time seen for a metric and where its point lives."""

    time: str
    position: int


@dataclass
class MetricSeriesBuilder:
    """Accumulates observations of one trial into deduplicated points.

    Points keep first-append order across metrics. Observations of a metric
    that fall in the same second as its previous point update that point in
    place when the selector prefers them.
    """

    direction: ObjectiveType
    points: list[TimeSeriesPoint] = field(default_factory=list)
    skipped: list[SkippedObservation] = field(default_factory=list)
    _cursors: dict[str, _Cursor] = field(default_factory=dict, repr=False)

    def add(self, observation: Observation) -> None:
        try:
            time = normalize(observation.timestamp)
        except TimestampParseFailure as exc:
            logger.debug("Skipping observation of %s: %s", observation.metric_name, exc)
            self.skipped.append(
                SkippedObservation(observation=observation, reason=str(exc)),
            )
            return

        cursor = self._cursors.get(observation.metric_name)
        if cursor is None or cursor.time != time:
            self._cursors[observation.metric_name] = _Cursor(
                time=time,
                position=len(self.points),
            )
            self.points.append(
                TimeSeriesPoint(
                    metric_name=observation.metric_name,
                    time=time,
                    value=observation.value,
                ),
            )
            return

        current = self.points[cursor.position]
        if selector.prefers(self.direction, current.value, observation.value):
            self.points[cursor.position] = current.model_copy(
                update={"value": observation.value},
            )

    def extend(self, observations: tuple[Observation, ...]) -> None:
        for observation in observations:
            self.add(observation)

    def result(self, trial_name: str) -> MetricSeries:
        return MetricSeries(
            trial_name=trial_name,
            points=list(self.points),
            skipped=list(self.skipped),
        )


def build_series(log: ObservationLog, objective: ObjectiveSpec) -> MetricSeries:
    """Build the metric time series of one trial from its observation log.

    Args:
        log: Observations of the trial in arrival order
        objective: Objective whose direction picks the best value per second

    Returns:
        The series; ``rows()`` yields the ``metricName,time,value`` header first

    """
    builder = MetricSeriesBuilder(direction=objective.type)
    builder.extend(log.observations)
    series = builder.result(log.trial_name)
    if series.skipped:
        logger.info(
            "Skipped %d observation(s) with invalid timestamps for trial %s",
            len(series.skipped),
            log.trial_name,
        )
    return series


def build_trial_series(
    source: ExperimentSource,
    experiment_name: str,
    trial_name: str,
) -> MetricSeries:
    """Fetch a trial and its observation log and build its series.

    The trial's own objective direction decides same-second duplicates.
    """
    trial = source.fetch_trial(experiment_name, trial_name)
    log = source.fetch_observation_log(experiment_name, trial_name)
    return build_series(log, trial.objective)
