# Copyright (c) Syntropy Systems
"""Stable column layout for the trial matrix."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from trialboard.errors import SchemaViolation

if TYPE_CHECKING:
    from collections.abc import Iterable

    from trialboard.models.experiment import ObjectiveSpec


@dataclass
class ColumnIndex:
    """Bijective mapping from metric and parameter names to row offsets.

    Metrics occupy offsets ``0..len(metrics)-1`` (objective metric first),
    parameters the contiguous block after them.
    """

    metric_names: list[str] = field(default_factory=list)
    parameter_names: list[str] = field(default_factory=list)
    _offsets: dict[str, int] = field(default_factory=dict, repr=False)

    def _add(self, name: str) -> None:
        if name in self._offsets:
            msg = f"Column name assigned twice: {name!r}"
            raise SchemaViolation(msg)
        self._offsets[name] = len(self._offsets)

    def add_metric(self, name: str) -> None:
        if self.parameter_names:
            msg = f"Metric {name!r} added after parameter columns"
            raise SchemaViolation(msg)
        self._add(name)
        self.metric_names.append(name)

    def add_parameter(self, name: str) -> None:
        self._add(name)
        self.parameter_names.append(name)

    @property
    def names(self) -> list[str]:
        """Column names in offset order."""
        return [*self.metric_names, *self.parameter_names]

    def __len__(self) -> int:
        return len(self._offsets)

    def metric_offset(self, name: str) -> int:
        """Offset of a declared metric.

        Raises:
            SchemaViolation: If ``name`` is not a declared metric.

        """
        offset = self._offsets.get(name)
        if offset is None or offset >= len(self.metric_names):
            msg = f"Metric {name!r} is not declared by the objective"
            raise SchemaViolation(msg)
        return offset

    def parameter_offset(self, name: str) -> int:
        """Offset of a declared parameter.

        Raises:
            SchemaViolation: If ``name`` is not a declared parameter.

        """
        offset = self._offsets.get(name)
        if offset is None or offset < len(self.metric_names):
            msg = f"Parameter {name!r} is not declared by the experiment"
            raise SchemaViolation(msg)
        return offset

    def empty_row(self) -> list[str]:
        return [""] * len(self._offsets)


def assign(objective: ObjectiveSpec, parameter_names: Iterable[str]) -> ColumnIndex:
    """Assign offsets: objective metric, additional metrics, then parameters."""
    columns = ColumnIndex()
    for metric_name in objective.metric_names:
        columns.add_metric(metric_name)
    for parameter_name in parameter_names:
        columns.add_parameter(parameter_name)
    return columns
