# Copyright (c) Syntropy Systems
"""Pydantic models for experiments, objectives and lifecycle conditions."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, cast

from pydantic import Field, JsonValue, field_validator

from .base import FrozenModel, TrialboardBaseModel

SUCCEEDED = "Succeeded"
CONDITION_TRUE = "True"


def _isoformat(value: object) -> Optional[str]:
    # YAML loaders turn unquoted timestamps into datetime objects.
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return cast("str", value)


class ObjectiveType(str, Enum):
    """Whether lower or higher metric values are better."""

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


class ObjectiveSpec(FrozenModel):
    """Optimization objective shared by an experiment and its trials."""

    type: ObjectiveType
    objective_metric_name: str = Field(alias="objectiveMetricName")
    additional_metric_names: tuple[str, ...] = Field(
        default=(),
        alias="additionalMetricNames",
    )
    goal: Optional[float] = None

    @property
    def metric_names(self) -> list[str]:
        """Objective metric first, then additional metrics in declared order."""
        return [self.objective_metric_name, *self.additional_metric_names]


class Condition(FrozenModel):
    """One lifecycle condition reported for an experiment or trial."""

    type: str
    status: str = CONDITION_TRUE
    reason: Optional[str] = None
    message: Optional[str] = None
    last_transition_time: Optional[str] = Field(
        default=None,
        alias="lastTransitionTime",
    )

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: object) -> object:
        # Unquoted YAML booleans.
        if isinstance(value, bool):
            return str(value)
        return value

    @field_validator("last_transition_time", mode="before")
    @classmethod
    def _parse_time(cls, value: object) -> Optional[str]:
        return _isoformat(value)

    @property
    def is_success(self) -> bool:
        return self.type == SUCCEEDED and self.status == CONDITION_TRUE


def current_state(conditions: tuple[Condition, ...]) -> str:
    """Type of the last condition in arrival order, or "" when there is none."""
    if not conditions:
        return ""
    return conditions[-1].type


class ParameterSpec(FrozenModel):
    """Declared experiment parameter."""

    name: str
    parameter_type: str = Field(default="double", alias="parameterType")
    feasible_space: dict[str, JsonValue] = Field(
        default_factory=dict,
        alias="feasibleSpace",
    )


class Experiment(FrozenModel):
    """Hyperparameter tuning experiment definition."""

    name: str
    objective: ObjectiveSpec
    parameters: tuple[ParameterSpec, ...] = ()
    conditions: tuple[Condition, ...] = ()
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value: object) -> Optional[str]:
        return _isoformat(value)

    @property
    def parameter_names(self) -> list[str]:
        return [p.name for p in self.parameters]

    @property
    def status(self) -> str:
        return current_state(self.conditions)


class ExperimentSummary(TrialboardBaseModel):
    """One row of the experiment listing."""

    name: str
    status: str
    objective_metric_name: str
    objective_type: ObjectiveType
    trial_count: int
    created_at: Optional[str] = None
