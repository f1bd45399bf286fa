# Copyright (c) Syntropy Systems
"""Exceptions raised by trialboard builds and sources."""

from __future__ import annotations


class TrialboardError(Exception):
    """Base class for trialboard errors."""


class FetchFailure(TrialboardError):
    """A source could not return the requested data.

    Fatal to the current build: no partial result is produced.
    """

    subject: str

    def __init__(self, subject: str, detail: str) -> None:
        super().__init__(f"{subject}: {detail}")
        self.subject = subject


class NotFound(FetchFailure):
    """The requested experiment or trial does not exist."""


class SchemaViolation(TrialboardError):
    """A metric or parameter name is absent from the declared schema.

    Indicates inconsistent upstream metadata rather than a user error.
    """


class TimestampParseFailure(TrialboardError, ValueError):
    """An observation timestamp is not RFC 3339."""


class ValueParseFailure(TrialboardError, ValueError):
    """A reported metric value does not parse as a number."""
