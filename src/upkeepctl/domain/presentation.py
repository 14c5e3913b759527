"""Status presentation: style tokens and display text.

:func:`status_to_presentation` is the single mapping from a status
category to how it looks. It holds no state and knows nothing about the
renderer; style tokens are resolved by the output layer's Rich theme.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from upkeepctl.domain.dates import format_relative_date, is_today, today_local
from upkeepctl.domain.i18n import Locale, Message, translate
from upkeepctl.domain.status import (
    StatusCategory,
    TaskStatus,
    calculate_interval_in_days,
    format_frequency,
    is_never_completed,
)
from upkeepctl.domain.tasks import ProcessedTask

FREQUENCY_SYMBOL = "🔁"
DATE_SYMBOL = "📅"
SEPARATOR = " • "


class Presentation(BaseModel):
    """How one status category is displayed."""

    model_config = {"frozen": True}

    style: str
    progress_style: str
    tooltip: Message


_PRESENTATIONS: dict[StatusCategory, Presentation] = {
    StatusCategory.NEVER_COMPLETED: Presentation(
        style="upkeep.overdue",
        progress_style="upkeep.progress.overdue",
        tooltip=Message.TOOLTIP_NEVER_COMPLETED,
    ),
    StatusCategory.OVERDUE: Presentation(
        style="upkeep.overdue",
        progress_style="upkeep.progress.overdue",
        tooltip=Message.TOOLTIP_OVERDUE,
    ),
    StatusCategory.DUE_TODAY: Presentation(
        style="upkeep.due_today",
        progress_style="upkeep.progress.overdue",
        tooltip=Message.TOOLTIP_DUE_TODAY,
    ),
    StatusCategory.DUE_SOON: Presentation(
        style="upkeep.due_soon",
        progress_style="upkeep.progress.due_soon",
        tooltip=Message.TOOLTIP_DUE_IN,
    ),
    StatusCategory.UP_TO_DATE: Presentation(
        style="upkeep.up_to_date",
        progress_style="upkeep.progress.up_to_date",
        tooltip=Message.TOOLTIP_DUE_IN,
    ),
}


def status_to_presentation(category: StatusCategory) -> Presentation:
    """Style token and tooltip message for *category*."""
    return _PRESENTATIONS[category]


def status_text(status: TaskStatus, *, locale: Locale = Locale.EN) -> str:
    """Primary status line, e.g. ``⚠️ Overdue by 3 days``."""
    category = status.category
    if category is StatusCategory.NEVER_COMPLETED:
        return translate(Message.NEVER_COMPLETED, locale=locale)
    if category is StatusCategory.OVERDUE:
        return translate(Message.OVERDUE, status.days_overdue, locale=locale)
    if category is StatusCategory.DUE_TODAY:
        return translate(Message.DUE_TODAY, locale=locale)
    if category is StatusCategory.DUE_SOON:
        return translate(Message.DUE_SOON, status.days_remaining, locale=locale)
    return translate(Message.UP_TO_DATE, locale=locale)


def status_tooltip(item: ProcessedTask, now: Any = None, *, locale: Locale = Locale.EN) -> str:
    """Tooltip describing why the task has its status."""
    status = item.status
    today = now if now is not None else today_local()
    if status.category is not StatusCategory.NEVER_COMPLETED and is_today(
        item.task.last_done, today
    ):
        return translate(Message.TOOLTIP_COMPLETED_TODAY, locale=locale)

    message = status_to_presentation(status.category).tooltip
    if message is Message.TOOLTIP_OVERDUE:
        return translate(message, status.days_overdue, locale=locale)
    if message is Message.TOOLTIP_DUE_IN:
        return translate(message, status.days_remaining, locale=locale)
    return translate(message, locale=locale)


def due_text(item: ProcessedTask, now: Any = None, *, locale: Locale = Locale.EN) -> str:
    """Due-date line, e.g. ``📅 Next Due in 2 weeks``."""
    status = item.status
    if is_never_completed(item.task.last_done):
        return f"{DATE_SYMBOL} {translate(Message.NEVER, locale=locale)}"

    next_due = status.calculated_next_due
    if next_due is None:
        return f"{DATE_SYMBOL} {translate(Message.NOT_SCHEDULED, locale=locale)}"
    if status.days_remaining < 0:
        was_due = translate(Message.WAS_DUE, locale=locale)
        return f"{DATE_SYMBOL} {was_due} {format_relative_date(next_due, now, locale=locale)}"
    if status.days_remaining == 0:
        return f"{DATE_SYMBOL} {translate(Message.TODAY, locale=locale)}"
    label = translate(Message.NEXT_DUE, locale=locale)
    return f"{DATE_SYMBOL} {label} {format_relative_date(next_due, now, locale=locale)}"


def frequency_text(item: ProcessedTask, *, locale: Locale = Locale.EN) -> str:
    """Schedule line, e.g. ``🔁 Every 2 weeks``."""
    task = item.task
    return f"{FREQUENCY_SYMBOL} {format_frequency(task.interval, task.interval_unit, locale=locale)}"


def secondary_text(item: ProcessedTask, now: Any = None, *, locale: Locale = Locale.EN) -> str:
    """Sentence combining schedule and last completion or next due date."""
    task = item.task
    status = item.status
    today = now if now is not None else today_local()
    frequency = format_frequency(task.interval, task.interval_unit, locale=locale)

    if is_never_completed(task.last_done):
        return translate(Message.THIS_IS_TASK, frequency, locale=locale)

    if is_today(task.last_done, today):
        if status.calculated_next_due:
            due = format_relative_date(status.calculated_next_due, today, locale=locale)
            return translate(Message.DUE_WITH_FREQUENCY, due, frequency, locale=locale)
        days = calculate_interval_in_days(task.interval, task.interval_unit)
        return translate(Message.DUE_IN_DAYS, days, frequency, locale=locale)

    if status.days_remaining <= 0:
        last = format_relative_date(task.last_done, today, locale=locale)
        return translate(Message.TASK_LAST_DONE, frequency, last, locale=locale)

    due = format_relative_date(status.calculated_next_due, today, locale=locale)
    return translate(Message.DUE_WITH_FREQUENCY, due, frequency, locale=locale)


def task_info_text(item: ProcessedTask, now: Any = None, *, locale: Locale = Locale.EN) -> str:
    """Frequency and due date on one line."""
    return f"{frequency_text(item, locale=locale)}{SEPARATOR}{due_text(item, now, locale=locale)}"
