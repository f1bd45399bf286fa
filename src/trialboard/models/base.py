# Copyright (c) Syntropy Systems
"""Shared Pydantic model helpers for trialboard."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class TrialboardBaseModel(BaseModel):
    """Base model with shared config for trialboard schemas."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )


class FrozenModel(TrialboardBaseModel):
    """Immutable input record, read once per build."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )
