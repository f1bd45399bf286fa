# Copyright (c) Syntropy Systems
"""Pydantic models for build outputs."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .base import FrozenModel, TrialboardBaseModel
from .trial import Observation

SERIES_HEADER = ("metricName", "time", "value")
TRIAL_NAME_COLUMN = "trialName"
STATUS_COLUMN = "Status"


class TimeSeriesPoint(FrozenModel):
    """Best value of one metric within one second."""

    metric_name: str
    time: str
    value: str

    def as_row(self) -> list[str]:
        return [self.metric_name, self.time, self.value]


class SkippedObservation(FrozenModel):
    """Observation dropped from a series, kept for diagnostics."""

    observation: Observation
    reason: str


class MetricSeries(TrialboardBaseModel):
    """Deduplicated metric history of a single trial."""

    header: ClassVar[tuple[str, str, str]] = SERIES_HEADER

    trial_name: str
    points: list[TimeSeriesPoint] = Field(default_factory=list)
    skipped: list[SkippedObservation] = Field(default_factory=list)

    def rows(self) -> list[list[str]]:
        """Header row followed by one row per point."""
        return [list(self.header), *(point.as_row() for point in self.points)]


class TrialMatrix(TrialboardBaseModel):
    """Pivot table with one row per trial."""

    header: list[str]
    rows: list[list[str]] = Field(default_factory=list)

    def as_rows(self) -> list[list[str]]:
        """Header row followed by the trial rows."""
        return [list(self.header), *(list(row) for row in self.rows)]
