# Copyright (c) Syntropy Systems
"""Best-value selection under an objective direction.

Every minimize/maximize comparison in trialboard goes through this module so
that the series and matrix builders share one tie-break rule: on equal values
the value already stored is kept.
"""

from __future__ import annotations

import logging
import math

from trialboard.errors import ValueParseFailure
from trialboard.models.experiment import ObjectiveType

logger = logging.getLogger(__name__)


def parse_value(raw: str) -> float:
    """Parse a decimal-formatted metric value.

    Raises:
        ValueParseFailure: If the value is not a number. NaN counts as
            unparsable since it compares false against everything.

    """
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        msg = f"Metric value is not a number: {raw!r}"
        raise ValueParseFailure(msg) from exc
    if math.isnan(value):
        msg = f"Metric value is NaN: {raw!r}"
        raise ValueParseFailure(msg)
    return value


def _try_parse(raw: str) -> float | None:
    try:
        return parse_value(raw)
    except ValueParseFailure as exc:
        logger.debug("%s", exc)
        return None


def prefers(direction: ObjectiveType, current: str, candidate: str) -> bool:
    """Return True if ``candidate`` should replace ``current``.

    An unparsable value always loses to a parsable one. When neither parses,
    the candidate (the most recently seen value) wins.
    """
    current_value = _try_parse(current)
    candidate_value = _try_parse(candidate)

    if candidate_value is None:
        return current_value is None
    if current_value is None:
        return True

    if direction == ObjectiveType.MINIMIZE:
        return candidate_value < current_value
    return candidate_value > current_value


def select(direction: ObjectiveType, current: str, candidate: str) -> str:
    """Return the winner of ``current`` and ``candidate``; ties keep ``current``."""
    if prefers(direction, current, candidate):
        return candidate
    return current
