# Copyright (c) Syntropy Systems
"""Second-resolution normalization of RFC 3339 timestamps."""

from __future__ import annotations

import re
from datetime import datetime

from trialboard.errors import TimestampParseFailure

SECOND_FORMAT = "%Y-%m-%dT%H:%M:%S"

_RFC3339 = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})[Tt]"
    r"(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.\d{1,9})?"
    r"(?:[Zz]|[+-](?P<offset_hours>\d{2}):(?P<offset_minutes>\d{2}))"
)


def normalize(timestamp: str) -> str:
    """Truncate an RFC 3339 timestamp to whole seconds.

    The result is ``YYYY-MM-DDTHH:MM:SS`` in the wall-clock time of the
    source offset; nothing is converted to UTC and fractional seconds are
    dropped, never rounded.

    >>> normalize("2021-01-01T10:20:30.123456789+02:00")
    '2021-01-01T10:20:30'

    Raises:
        TimestampParseFailure: If the input is not RFC 3339.

    """
    match = _RFC3339.fullmatch(timestamp)
    if match is None:
        msg = f"Not an RFC 3339 timestamp: {timestamp!r}"
        raise TimestampParseFailure(msg)

    if match.group("offset_hours") is not None and (
        int(match.group("offset_hours")) > 23
        or int(match.group("offset_minutes")) > 59
    ):
        msg = f"Invalid UTC offset in timestamp: {timestamp!r}"
        raise TimestampParseFailure(msg)

    normalized = f"{match.group('date')}T{match.group('time')}"
    try:
        # Rejects out-of-range fields such as month 13 or second 61.
        _ = datetime.strptime(normalized, SECOND_FORMAT)
    except ValueError as exc:
        msg = f"Not an RFC 3339 timestamp: {timestamp!r}"
        raise TimestampParseFailure(msg) from exc

    return normalized
