# Copyright (c) Syntropy Systems
"""Pydantic models for trials and their observation logs."""

from __future__ import annotations

from pydantic import Field, field_validator

from .base import FrozenModel
from .experiment import Condition, ObjectiveSpec, current_state


class Observation(FrozenModel):
    """One reported (metric, timestamp, value) fact from a trial."""

    metric_name: str = Field(alias="metricName")
    timestamp: str = Field(alias="timeStamp")
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: object) -> object:
        # Numbers written by hand into JSONL keep their textual form.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class ObservationLog(FrozenModel):
    """Observations for exactly one trial, in arrival order."""

    trial_name: str = Field(alias="trialName")
    observations: tuple[Observation, ...] = ()

    def __len__(self) -> int:
        return len(self.observations)


class ParameterAssignment(FrozenModel):
    """Value assigned to one declared parameter for one trial."""

    name: str
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Trial(FrozenModel):
    """One evaluation run within an experiment."""

    name: str
    objective: ObjectiveSpec
    parameter_assignments: tuple[ParameterAssignment, ...] = Field(
        default=(),
        alias="parameterAssignments",
    )
    conditions: tuple[Condition, ...] = ()

    @property
    def succeeded(self) -> bool:
        """True iff any lifecycle condition carries the success marker."""
        return any(condition.is_success for condition in self.conditions)

    @property
    def current_state(self) -> str:
        return current_state(self.conditions)
