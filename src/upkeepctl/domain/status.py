"""Task status classification.

Five-tier rule over a single task::

    never-completed -> overdue -> due-today -> due-soon -> up-to-date

The classification is a pure function of ``(last_done, interval,
interval_unit, complete_early_days, now)`` and is recomputed on every
read. Nothing derived is ever persisted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from upkeepctl.domain.dates import (
    DAY_UNITS,
    MONTH_UNITS,
    NO_DUE_DATE,
    WEEK_UNITS,
    YEAR_UNITS,
    calculate_days_remaining,
    calculate_next_due_date,
    coerce_interval,
    days_between_dates,
    is_today,
    today_local,
)
from upkeepctl.domain.i18n import Locale, Message, translate, unit_name

if TYPE_CHECKING:
    from upkeepctl.domain.tasks import Task

DEFAULT_COMPLETE_EARLY_DAYS = 7

# Upper bound of the due-soon band never drops below one week.
DUE_SOON_MIN_WINDOW = 7

NEVER_SENTINEL = "never"


class StatusCategory(StrEnum):
    """Computed status of a recurring task."""

    NEVER_COMPLETED = "never-completed"
    OVERDUE = "overdue"
    DUE_TODAY = "due-today"
    DUE_SOON = "due-soon"
    UP_TO_DATE = "up-to-date"


class IntervalUnit(StrEnum):
    """Canonical recurrence units."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


_UNIT_ALIASES: dict[frozenset[str], IntervalUnit] = {
    DAY_UNITS: IntervalUnit.DAY,
    WEEK_UNITS: IntervalUnit.WEEK,
    MONTH_UNITS: IntervalUnit.MONTH,
    YEAR_UNITS: IntervalUnit.YEAR,
}

# Approximate length of one unit, used for "days scheduled" and progress.
UNIT_DAYS: dict[IntervalUnit, int] = {
    IntervalUnit.DAY: 1,
    IntervalUnit.WEEK: 7,
    IntervalUnit.MONTH: 30,
    IntervalUnit.YEAR: 365,
}


@dataclass(frozen=True)
class TaskStatus:
    """Derived status of one task at one point in time.

    Instances compare structurally, so two classifications of the same
    inputs are equal.
    """

    category: StatusCategory
    days_remaining: int
    calculated_next_due: str | None
    is_eligible_for_completion: bool
    complete_early_days: int = DEFAULT_COMPLETE_EARLY_DAYS

    @property
    def days_overdue(self) -> int:
        return max(0, -self.days_remaining) if self.days_remaining != NO_DUE_DATE else 0


def normalize_unit(interval_unit: Any) -> IntervalUnit | None:
    """Map ``"Weeks"``, ``"week"`` etc. onto an :class:`IntervalUnit`."""
    unit = str(interval_unit or "").strip().lower()
    for aliases, canonical in _UNIT_ALIASES.items():
        if unit in aliases:
            return canonical
    return None


def calculate_interval_in_days(interval: Any, interval_unit: Any) -> int | float:
    """Approximate length of a recurrence interval in days.

    Months count as 30 days and years as 365; fractions are kept, so
    1.5 weeks is 10.5. An unrecognized unit returns the interval
    unchanged; an invalid interval returns 0.
    """
    amount = coerce_interval(interval)
    if amount is None:
        return 0
    unit = normalize_unit(interval_unit)
    if unit is None:
        return amount
    return amount * UNIT_DAYS[unit]


def get_complete_early_days(value: Any) -> int:
    """Early-completion window in days: 7 when unset, never negative."""
    if value is None or value == "" or isinstance(value, bool):
        return DEFAULT_COMPLETE_EARLY_DAYS
    try:
        days = int(float(value))
    except (TypeError, ValueError):
        return DEFAULT_COMPLETE_EARLY_DAYS
    return max(0, days)


def is_never_completed(last_done: Any) -> bool:
    """True when *last_done* marks a task that was never done."""
    if last_done is None:
        return True
    if isinstance(last_done, str):
        return last_done.strip() in ("", NEVER_SENTINEL)
    return False


def determine_status(
    last_done: Any,
    interval: Any,
    interval_unit: Any,
    complete_early_days: Any = None,
    now: Any = None,
) -> TaskStatus:
    """Classify a task from its raw frontmatter values.

    A malformed interval or unit yields no due date; the task then
    reports :data:`NO_DUE_DATE` days remaining and classifies as overdue.
    """
    early = get_complete_early_days(complete_early_days)
    today = now if now is not None else today_local()

    if is_never_completed(last_done):
        return TaskStatus(
            category=StatusCategory.NEVER_COMPLETED,
            days_remaining=NO_DUE_DATE,
            calculated_next_due=None,
            is_eligible_for_completion=True,
            complete_early_days=early,
        )

    next_due = calculate_next_due_date(last_done, interval, interval_unit)
    days_remaining = calculate_days_remaining(next_due, today)

    if is_today(last_done, today):
        return TaskStatus(
            category=StatusCategory.UP_TO_DATE,
            days_remaining=math.trunc(calculate_interval_in_days(interval, interval_unit)),
            calculated_next_due=next_due,
            is_eligible_for_completion=False,
            complete_early_days=early,
        )

    if days_remaining < 0:
        category = StatusCategory.OVERDUE
    elif days_remaining == 0:
        category = StatusCategory.DUE_TODAY
    elif days_remaining <= max(early, DUE_SOON_MIN_WINDOW):
        category = StatusCategory.DUE_SOON
    else:
        category = StatusCategory.UP_TO_DATE

    return TaskStatus(
        category=category,
        days_remaining=days_remaining,
        calculated_next_due=next_due,
        is_eligible_for_completion=days_remaining <= early,
        complete_early_days=early,
    )


def classify(task: Task, now: Any = None) -> TaskStatus:
    """Classify *task* as of *now* (default: today)."""
    return determine_status(
        task.last_done,
        task.interval,
        task.interval_unit,
        task.complete_early_days,
        now,
    )


def format_frequency(interval: Any, interval_unit: Any, *, locale: Locale = Locale.EN) -> str:
    """Human description of a schedule: ``Weekly``, ``Every 3 months``."""
    amount = coerce_interval(interval)
    unit = normalize_unit(interval_unit)

    if amount == 1 and unit is not None:
        return translate(
            {
                IntervalUnit.DAY: Message.DAILY,
                IntervalUnit.WEEK: Message.WEEKLY,
                IntervalUnit.MONTH: Message.MONTHLY,
                IntervalUnit.YEAR: Message.YEARLY,
            }[unit],
            locale=locale,
        )

    count = amount if amount is not None else interval
    name = unit_name(count, unit, locale=locale) if unit is not None else str(interval_unit)
    return translate(Message.EVERY, count, name, locale=locale)


def progress_percentage(task: Task, now: Any = None) -> float:
    """Share of the current interval already elapsed, as 0-100.

    Never-completed tasks are at 0, tasks completed today at 100.
    Unparsable dates report the midpoint.
    """
    today = now if now is not None else today_local()
    if is_never_completed(task.last_done):
        return 0.0
    if is_today(task.last_done, today):
        return 100.0

    interval_days = calculate_interval_in_days(task.interval, task.interval_unit)
    elapsed = days_between_dates(task.last_done, today)
    if elapsed is None or interval_days <= 0:
        return 50.0
    return max(0.0, min(100.0, elapsed / interval_days * 100))
