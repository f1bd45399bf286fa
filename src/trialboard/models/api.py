# Copyright (c) Syntropy Systems
"""Pydantic models for trialboard API responses."""

from __future__ import annotations

from pydantic import Field

from .base import TrialboardBaseModel
from .experiment import ExperimentSummary
from .results import SkippedObservation, TimeSeriesPoint


class ExperimentListResponse(TrialboardBaseModel):
    """Response containing experiment summaries."""

    experiments: list[ExperimentSummary]


class TrialMatrixResponse(TrialboardBaseModel):
    """Pivoted trial table of one experiment."""

    experiment: str
    header: list[str]
    rows: list[list[str]] = Field(default_factory=list)
    text: str


class MetricSeriesResponse(TrialboardBaseModel):
    """Metric time series of one trial."""

    experiment: str
    trial: str
    header: list[str]
    points: list[TimeSeriesPoint] = Field(default_factory=list)
    skipped: list[SkippedObservation] = Field(default_factory=list)
    text: str


class ErrorResponse(TrialboardBaseModel):
    """Error response."""

    detail: str


class HealthResponse(TrialboardBaseModel):
    """Health check response."""

    status: str
