"""Shared service-layer helpers for points in time."""

from __future__ import annotations

from datetime import date, datetime, time


def local_now() -> datetime:
    """Current wall-clock time as an aware local datetime."""
    return datetime.now().astimezone()


def parse_moment(value: str) -> datetime:
    """Parse a ``--now`` value into an aware local datetime.

    Accepts ``YYYY-MM-DD`` (midnight) or any ISO 8601 datetime. Naive
    values are taken as local time.

    Raises:
        ValueError: *value* is not an ISO date or datetime.

    Examples:
        >>> parse_moment("2024-01-15").strftime("%Y-%m-%d %H:%M")
        '2024-01-15 00:00'
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if "T" not in text and " " not in text:
        moment = datetime.combine(date.fromisoformat(text), time.min)
    else:
        moment = datetime.fromisoformat(text)
    return moment.astimezone() if moment.tzinfo is None else moment
