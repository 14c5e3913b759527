"""Calendar-date arithmetic for recurring tasks.

Every function here works on local calendar dates: inputs are reduced to
a :class:`datetime.date` before any arithmetic so that time-of-day and
UTC offsets can never shift a task by one day.

All functions are total. Unparsable input yields ``None`` (or the
:data:`NO_DUE_DATE` sentinel for day counts) instead of raising.
"""

from __future__ import annotations

import calendar
import logging
import math
import re
from datetime import date, datetime, timedelta
from typing import Any

from upkeepctl.domain.i18n import Locale, Message, format_long_date, translate, weekday_name

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

# Days-remaining sentinel for tasks with no computable due date.
NO_DUE_DATE = -9999

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DAY_UNITS = frozenset({"day", "days"})
WEEK_UNITS = frozenset({"week", "weeks"})
MONTH_UNITS = frozenset({"month", "months"})
YEAR_UNITS = frozenset({"year", "years"})


def today_local() -> date:
    """Today's date in the local timezone."""
    return datetime.now().astimezone().date()


def parse_local_date(value: Any) -> date | None:
    """Reduce *value* to a local calendar date.

    Accepts ``YYYY-MM-DD`` strings, ISO-8601 timestamps (everything from
    ``T`` onward is ignored), :class:`date`/:class:`datetime` objects and
    any object with a ``strftime`` method. Returns ``None`` for anything
    else.

    Examples:
        >>> parse_local_date("2025-05-19T00:00:00.000+02:00")
        datetime.date(2025, 5, 19)
        >>> parse_local_date("19.05.2025") is None
        True
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        formatter = getattr(value, "strftime", None)
        try:
            value = formatter(DATE_FORMAT) if callable(formatter) else str(value)
        except Exception:
            logger.debug("Could not format date-like value %r", value, exc_info=True)
            return None

    text = str(value).strip()
    if "T" in text:
        text = text.split("T", 1)[0]

    if not _DATE_RE.match(text):
        logger.debug("Invalid date format, expected YYYY-MM-DD but got %r", value)
        return None

    year, month, day = (int(part) for part in text.split("-"))
    try:
        return date(year, month, day)
    except ValueError:
        logger.debug("Date components out of range: %r", text)
        return None


def coerce_interval(interval: Any) -> int | float | None:
    """Return *interval* as a positive number, or ``None``.

    Whole values come back as ``int``; fractions are kept. Booleans are
    rejected.
    """
    if interval is None or isinstance(interval, bool):
        return None
    try:
        number = float(interval)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number) if number.is_integer() else number


def add_months(start: date, months: int) -> date:
    """Add *months* to *start*, clamping to the last day of the target month.

    ``add_months(date(2024, 1, 31), 1)`` is ``2024-02-29``, never March.
    """
    index = start.year * 12 + (start.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def calculate_next_due_date(last_done: Any, interval: Any, interval_unit: Any) -> str | None:
    """Compute the next due date as ``YYYY-MM-DD``.

    Returns ``None`` when *last_done* is unparsable, *interval* is not a
    positive number, or *interval_unit* is not a day/week/month/year unit.
    """
    start = parse_local_date(last_done)
    if start is None:
        return None

    amount = coerce_interval(interval)
    if amount is None:
        logger.debug("Invalid interval: %r", interval)
        return None

    unit = str(interval_unit or "").strip().lower()
    try:
        # Fractions are kept until the final count, which is truncated.
        if unit in DAY_UNITS:
            due = start + timedelta(days=math.trunc(amount))
        elif unit in WEEK_UNITS:
            due = start + timedelta(days=math.trunc(amount * 7))
        elif unit in MONTH_UNITS:
            due = add_months(start, math.trunc(amount))
        elif unit in YEAR_UNITS:
            due = add_months(start, math.trunc(amount) * 12)
        else:
            logger.debug("Unknown interval unit: %r", interval_unit)
            return None
    except (OverflowError, ValueError):
        logger.debug("Next due date out of range for %r + %r %s", last_done, interval, unit)
        return None

    return due.strftime(DATE_FORMAT)


def _resolve_now(now: Any) -> date | None:
    if now is None:
        return today_local()
    return parse_local_date(now)


def calculate_days_remaining(due_date: Any, now: Any = None) -> int:
    """Signed whole days from *now* until *due_date*.

    Fractional days round up. Returns :data:`NO_DUE_DATE` when either
    date is missing or unparsable.
    """
    due = parse_local_date(due_date)
    today = _resolve_now(now)
    if due is None or today is None:
        return NO_DUE_DATE
    return math.ceil((due - today) / timedelta(days=1))


def is_today(value: Any, now: Any = None) -> bool:
    """True when *value* falls on the same calendar day as *now*."""
    day = parse_local_date(value)
    today = _resolve_now(now)
    if day is None or today is None:
        return False
    return day == today


def days_between_dates(start: Any, end: Any) -> int | None:
    """Whole calendar days from *start* to *end*, or ``None``."""
    first = parse_local_date(start)
    second = parse_local_date(end)
    if first is None or second is None:
        return None
    return (second - first).days


def _round_half_up(value: float) -> int:
    # round() is banker's rounding; display buckets round .5 up.
    return math.floor(value + 0.5)


def format_days_to_period(days: int, *, locale: Locale = Locale.EN) -> str:
    """Bucket a signed day count into the coarsest readable unit.

    Examples:
        >>> format_days_to_period(10)
        'in 1 week'
        >>> format_days_to_period(-45)
        '2 months ago'
    """
    abs_days = abs(days)
    past = days < 0

    if abs_days == 0:
        return translate(Message.TODAY, locale=locale)
    if abs_days == 1:
        return translate(Message.YESTERDAY if past else Message.TOMORROW, locale=locale)

    if abs_days >= 365:
        count = _round_half_up(abs_days / 365)
        message = Message.YEARS_AGO if past else Message.IN_YEARS
    elif abs_days >= 30:
        count = _round_half_up(abs_days / 30)
        message = Message.MONTHS_AGO if past else Message.IN_MONTHS
    elif abs_days >= 7:
        count = _round_half_up(abs_days / 7)
        message = Message.WEEKS_AGO if past else Message.IN_WEEKS
    else:
        count = abs_days
        message = Message.DAYS_AGO if past else Message.IN_DAYS
    return translate(message, count, locale=locale)


def format_relative_date(value: Any, now: Any = None, *, locale: Locale = Locale.EN) -> str:
    """Describe *value* relative to *now* (``tomorrow``, ``on Friday``, ``3 weeks ago``)."""
    day = parse_local_date(value)
    today = _resolve_now(now)
    if day is None or today is None:
        return translate(Message.NEVER, locale=locale)

    diff = (day - today).days
    if 1 < diff < 7:
        return translate(Message.ON_WEEKDAY, weekday_name(day, locale=locale), locale=locale)
    return format_days_to_period(diff, locale=locale)


def format_date(value: Any, *, locale: Locale = Locale.EN) -> str:
    """Long display form of *value*, or the "never" label."""
    day = parse_local_date(value)
    if day is None:
        return translate(Message.NEVER, locale=locale)
    return format_long_date(day, locale=locale)
