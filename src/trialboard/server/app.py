# Copyright (c) Syntropy Systems
"""FastAPI application for the trialboard server."""

import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request

from trialboard.config import DATA_DIR_ENV
from trialboard.errors import FetchFailure, NotFound, SchemaViolation
from trialboard.matrix import build_experiment_matrix
from trialboard.models.api import (
    ErrorResponse,
    ExperimentListResponse,
    HealthResponse,
    MetricSeriesResponse,
    TrialMatrixResponse,
)
from trialboard.models.experiment import Experiment
from trialboard.render import to_csv_text
from trialboard.series import build_trial_series
from trialboard.sources import DirectorySource, ExperimentSource, list_experiments

logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def get_source(request: Request) -> ExperimentSource:
    """Get the experiment source of the running app."""
    return request.app.state.source


def _build_failed(exc: Exception, what: str) -> HTTPException:
    if isinstance(exc, NotFound):
        return HTTPException(status_code=404, detail=str(exc))
    logger.exception("Building %s failed", what, exc_info=exc)
    return HTTPException(status_code=500, detail=f"Failed to build {what}")


def create_app(
    data_dir: Optional[Path] = None,
    source: Optional[ExperimentSource] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        data_dir: Root of the experiment store
        source: Experiment source to serve; overrides data_dir

    Returns:
        Configured FastAPI application
    """
    if source is None:
        if data_dir is None:
            env_dir = os.environ.get(DATA_DIR_ENV)
            if not env_dir:
                raise ValueError("No experiment store configured")
            data_dir = Path(env_dir)
        source = DirectorySource(data_dir)

    app = FastAPI(
        title="trialboard server",
        description="Trial matrices and metric series for tuning experiments",
        version="0.1.0",
    )
    app.state.source = source

    # --- Experiment Endpoints ---

    @app.get(
        "/api/v1/experiments",
        response_model=ExperimentListResponse,
        responses=_ERROR_RESPONSES,
    )
    def get_experiments(source: ExperimentSource = Depends(get_source)):
        """List all experiments."""
        try:
            experiments = list_experiments(source)
        except FetchFailure as exc:
            raise _build_failed(exc, "experiment list") from exc
        return ExperimentListResponse(experiments=experiments)

    @app.get(
        "/api/v1/experiments/{name}",
        response_model=Experiment,
        responses=_ERROR_RESPONSES,
    )
    def get_experiment(name: str, source: ExperimentSource = Depends(get_source)):
        """Get the experiment definition."""
        try:
            return source.fetch_experiment(name)
        except FetchFailure as exc:
            raise _build_failed(exc, f"experiment {name}") from exc

    # --- Trial Endpoints ---

    @app.get(
        "/api/v1/experiments/{name}/trials",
        response_model=TrialMatrixResponse,
        responses=_ERROR_RESPONSES,
    )
    def get_trial_matrix(name: str, source: ExperimentSource = Depends(get_source)):
        """Get one row per trial with best metric values and parameters."""
        try:
            matrix = build_experiment_matrix(source, name)
        except (FetchFailure, SchemaViolation) as exc:
            raise _build_failed(exc, f"trial matrix of {name}") from exc

        return TrialMatrixResponse(
            experiment=name,
            header=matrix.header,
            rows=matrix.rows,
            text=to_csv_text(matrix.as_rows()),
        )

    @app.get(
        "/api/v1/experiments/{name}/trials/{trial}/metrics",
        response_model=MetricSeriesResponse,
        responses=_ERROR_RESPONSES,
    )
    def get_trial_metrics(
        name: str,
        trial: str,
        source: ExperimentSource = Depends(get_source),
    ):
        """Get the per-second metric series of a trial."""
        try:
            series = build_trial_series(source, name, trial)
        except FetchFailure as exc:
            raise _build_failed(exc, f"metrics of {trial}") from exc

        return MetricSeriesResponse(
            experiment=name,
            trial=trial,
            header=list(series.header),
            points=series.points,
            skipped=series.skipped,
            text=to_csv_text(series.rows()),
        )

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    return app
