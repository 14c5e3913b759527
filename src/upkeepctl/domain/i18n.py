"""Message catalogs for every supported display locale.

Each locale maps a :class:`Message` key to either a plain string or a
formatting callable. The active locale is always passed explicitly;
there is no process-wide "current locale".
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from enum import StrEnum


class Locale(StrEnum):
    """Supported display locales."""

    EN = "en"
    DE = "de"


class Message(StrEnum):
    """Keys of every translatable message."""

    # Status
    UP_TO_DATE = "status.up_to_date"
    OVERDUE = "status.overdue"
    DUE_TODAY = "status.due_today"
    DUE_SOON = "status.due_soon"
    NEVER_COMPLETED = "status.never_completed"

    # Frequencies
    DAILY = "frequency.daily"
    WEEKLY = "frequency.weekly"
    MONTHLY = "frequency.monthly"
    YEARLY = "frequency.yearly"
    EVERY = "frequency.every"

    # Relative dates
    TODAY = "relative.today"
    TOMORROW = "relative.tomorrow"
    YESTERDAY = "relative.yesterday"
    IN_DAYS = "relative.in_days"
    DAYS_AGO = "relative.days_ago"
    IN_WEEKS = "relative.in_weeks"
    WEEKS_AGO = "relative.weeks_ago"
    IN_MONTHS = "relative.in_months"
    MONTHS_AGO = "relative.months_ago"
    IN_YEARS = "relative.in_years"
    YEARS_AGO = "relative.years_ago"
    ON_WEEKDAY = "relative.on_weekday"

    # Labels
    TASK = "label.task"
    STATUS = "label.status"
    LAST_DONE = "label.last_done"
    NEXT_DUE = "label.next_due"
    FREQUENCY = "label.frequency"
    PROGRESS = "label.progress"
    WAS_DUE = "label.was_due"
    NEVER = "label.never"
    NOT_SCHEDULED = "label.not_scheduled"
    COMPLETION_HISTORY = "label.completion_history"
    DATE = "label.date"
    TIME = "label.time"
    DAYS_SINCE_LAST = "label.days_since_last"
    DAYS_SCHEDULED = "label.days_scheduled"
    USER = "label.user"
    RECURRING_TASKS = "label.recurring_tasks"
    TOTAL_TASKS = "label.total_tasks"
    NEEDS_ATTENTION = "label.needs_attention"

    # Secondary status text
    THIS_IS_TASK = "text.this_is_task"
    TASK_LAST_DONE = "text.task_last_done"
    DUE_WITH_FREQUENCY = "text.due_with_frequency"
    DUE_IN_DAYS = "text.due_in_days"

    # Tooltips
    TOOLTIP_NEVER_COMPLETED = "tooltip.never_completed"
    TOOLTIP_COMPLETED_TODAY = "tooltip.completed_today"
    TOOLTIP_OVERDUE = "tooltip.overdue"
    TOOLTIP_DUE_TODAY = "tooltip.due_today"
    TOOLTIP_DUE_IN = "tooltip.due_in"

    # Messages
    NO_TASKS = "message.no_tasks"
    NO_TASKS_FILTER = "message.no_tasks_filter"
    FAILED_TO_UPDATE_HISTORY = "message.failed_to_update_history"

    # Statistics
    TOTAL_COMPLETIONS = "stats.total_completions"
    AVG_DAYS_BETWEEN = "stats.avg_days_between"
    ON_TIME_RATE = "stats.on_time_rate"


def _en_plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


_EN: dict[Message, str | Callable[..., str]] = {
    Message.UP_TO_DATE: "✅ Up to date",
    Message.OVERDUE: lambda days: f"⚠️ Overdue by {_en_plural(days, 'day', 'days')}",
    Message.DUE_TODAY: "⏰ Due today",
    Message.DUE_SOON: lambda days: f"⏰ Due in {_en_plural(days, 'day', 'days')}",
    Message.NEVER_COMPLETED: "⚠️ Never completed",
    Message.DAILY: "Daily",
    Message.WEEKLY: "Weekly",
    Message.MONTHLY: "Monthly",
    Message.YEARLY: "Yearly",
    Message.EVERY: lambda count, unit: f"Every {count} {unit}",
    Message.TODAY: "today",
    Message.TOMORROW: "tomorrow",
    Message.YESTERDAY: "yesterday",
    Message.IN_DAYS: lambda n: f"in {_en_plural(n, 'day', 'days')}",
    Message.DAYS_AGO: lambda n: f"{_en_plural(n, 'day', 'days')} ago",
    Message.IN_WEEKS: lambda n: f"in {_en_plural(n, 'week', 'weeks')}",
    Message.WEEKS_AGO: lambda n: f"{_en_plural(n, 'week', 'weeks')} ago",
    Message.IN_MONTHS: lambda n: f"in {_en_plural(n, 'month', 'months')}",
    Message.MONTHS_AGO: lambda n: f"{_en_plural(n, 'month', 'months')} ago",
    Message.IN_YEARS: lambda n: f"in {_en_plural(n, 'year', 'years')}",
    Message.YEARS_AGO: lambda n: f"{_en_plural(n, 'year', 'years')} ago",
    Message.ON_WEEKDAY: lambda weekday: f"on {weekday}",
    Message.TASK: "Task",
    Message.STATUS: "Status",
    Message.LAST_DONE: "Last Done",
    Message.NEXT_DUE: "Next Due",
    Message.FREQUENCY: "Frequency",
    Message.PROGRESS: "Progress",
    Message.WAS_DUE: "Was due",
    Message.NEVER: "Never",
    Message.NOT_SCHEDULED: "Not scheduled",
    Message.COMPLETION_HISTORY: "Completion history",
    Message.DATE: "Date",
    Message.TIME: "Time",
    Message.DAYS_SINCE_LAST: "Days Since Last",
    Message.DAYS_SCHEDULED: "Days Scheduled",
    Message.USER: "User",
    Message.RECURRING_TASKS: "Recurring Tasks",
    Message.TOTAL_TASKS: "Total",
    Message.NEEDS_ATTENTION: "Needs Attention",
    Message.THIS_IS_TASK: lambda frequency: f"This is a {frequency} task",
    Message.TASK_LAST_DONE: lambda frequency, last: f"{frequency} task (last done {last})",
    Message.DUE_WITH_FREQUENCY: lambda due, frequency: f"Due {due} ({frequency})",
    Message.DUE_IN_DAYS: lambda days, frequency: (
        f"Due in {_en_plural(days, 'day', 'days')} ({frequency})"
    ),
    Message.TOOLTIP_NEVER_COMPLETED: "Task has never been completed",
    Message.TOOLTIP_COMPLETED_TODAY: "Task completed today",
    Message.TOOLTIP_OVERDUE: lambda days: f"Overdue by {_en_plural(days, 'day', 'days')}",
    Message.TOOLTIP_DUE_TODAY: "Due today",
    Message.TOOLTIP_DUE_IN: lambda days: f"Due in {_en_plural(days, 'day', 'days')}",
    Message.NO_TASKS: "No recurring tasks found",
    Message.NO_TASKS_FILTER: "No tasks found matching the current filter.",
    Message.FAILED_TO_UPDATE_HISTORY: "Failed to update completion history",
    Message.TOTAL_COMPLETIONS: "Total Completions",
    Message.AVG_DAYS_BETWEEN: "Avg Days Between",
    Message.ON_TIME_RATE: "On-Time Rate",
}


def _de_days(count: int) -> str:
    return f"{count} {'Tag' if count == 1 else 'Tagen'}"


_DE: dict[Message, str | Callable[..., str]] = {
    Message.UP_TO_DATE: "✅ Aktuell",
    Message.OVERDUE: lambda days: f"⚠️ Überfällig seit {_de_days(days)}",
    Message.DUE_TODAY: "⏰ Heute fällig",
    Message.DUE_SOON: lambda days: f"⏰ Fällig in {_de_days(days)}",
    Message.NEVER_COMPLETED: "⚠️ Nie erledigt",
    Message.DAILY: "Täglich",
    Message.WEEKLY: "Wöchentlich",
    Message.MONTHLY: "Monatlich",
    Message.YEARLY: "Jährlich",
    Message.EVERY: lambda count, unit: f"Alle {count} {unit}",
    Message.TODAY: "heute",
    Message.TOMORROW: "morgen",
    Message.YESTERDAY: "gestern",
    Message.IN_DAYS: lambda n: f"in {_de_days(n)}",
    Message.DAYS_AGO: lambda n: f"vor {_de_days(n)}",
    Message.IN_WEEKS: lambda n: f"in {n} {'Woche' if n == 1 else 'Wochen'}",
    Message.WEEKS_AGO: lambda n: f"vor {n} {'Woche' if n == 1 else 'Wochen'}",
    Message.IN_MONTHS: lambda n: f"in {n} {'Monat' if n == 1 else 'Monaten'}",
    Message.MONTHS_AGO: lambda n: f"vor {n} {'Monat' if n == 1 else 'Monaten'}",
    Message.IN_YEARS: lambda n: f"in {n} {'Jahr' if n == 1 else 'Jahren'}",
    Message.YEARS_AGO: lambda n: f"vor {n} {'Jahr' if n == 1 else 'Jahren'}",
    Message.ON_WEEKDAY: lambda weekday: f"am {weekday}",
    Message.TASK: "Aufgabe",
    Message.STATUS: "Status",
    Message.LAST_DONE: "Zuletzt erledigt",
    Message.NEXT_DUE: "Nächste Fälligkeit",
    Message.FREQUENCY: "Häufigkeit",
    Message.PROGRESS: "Fortschritt",
    Message.WAS_DUE: "War fällig",
    Message.NEVER: "Nie",
    Message.NOT_SCHEDULED: "Nicht geplant",
    Message.COMPLETION_HISTORY: "Erledigungsverlauf",
    Message.DATE: "Datum",
    Message.TIME: "Zeit",
    Message.DAYS_SINCE_LAST: "Tage seit letztem",
    Message.DAYS_SCHEDULED: "Tage vorgesehen",
    Message.USER: "Benutzer",
    Message.RECURRING_TASKS: "Wiederkehrende Aufgaben",
    Message.TOTAL_TASKS: "Gesamt",
    Message.NEEDS_ATTENTION: "Braucht Aufmerksamkeit",
    Message.THIS_IS_TASK: lambda frequency: f"Dies ist eine {frequency}",
    Message.TASK_LAST_DONE: lambda frequency, last: f"{frequency} (zuletzt erledigt {last})",
    Message.DUE_WITH_FREQUENCY: lambda due, frequency: f"Fällig {due} ({frequency})",
    Message.DUE_IN_DAYS: lambda days, frequency: f"Fällig in {_de_days(days)} ({frequency})",
    Message.TOOLTIP_NEVER_COMPLETED: "Aufgabe wurde noch nie erledigt",
    Message.TOOLTIP_COMPLETED_TODAY: "Aufgabe heute erledigt",
    Message.TOOLTIP_OVERDUE: lambda days: f"Überfällig seit {_de_days(days)}",
    Message.TOOLTIP_DUE_TODAY: "Heute fällig",
    Message.TOOLTIP_DUE_IN: lambda days: f"Fällig in {_de_days(days)}",
    Message.NO_TASKS: "Keine wiederkehrenden Aufgaben gefunden",
    Message.NO_TASKS_FILTER: "Keine Aufgaben entsprechen dem aktuellen Filter.",
    Message.FAILED_TO_UPDATE_HISTORY: "Erledigungsverlauf konnte nicht aktualisiert werden",
    Message.TOTAL_COMPLETIONS: "Erledigungen gesamt",
    Message.AVG_DAYS_BETWEEN: "Ø Tage dazwischen",
    Message.ON_TIME_RATE: "Pünktlichkeitsrate",
}

CATALOGS: dict[Locale, dict[Message, str | Callable[..., str]]] = {
    Locale.EN: _EN,
    Locale.DE: _DE,
}

# Monday-first, matching date.weekday().
_WEEKDAYS: dict[Locale, tuple[str, ...]] = {
    Locale.EN: ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    Locale.DE: ("Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag"),
}

_WEEKDAYS_SHORT: dict[Locale, tuple[str, ...]] = {
    Locale.EN: ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    Locale.DE: ("Mo.", "Di.", "Mi.", "Do.", "Fr.", "Sa.", "So."),
}

_MONTHS_SHORT: dict[Locale, tuple[str, ...]] = {
    Locale.EN: (
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ),
    Locale.DE: (
        "Jan.", "Feb.", "März", "Apr.", "Mai", "Juni",
        "Juli", "Aug.", "Sept.", "Okt.", "Nov.", "Dez.",
    ),
}  # fmt: skip

# (singular, plural) per canonical unit.
_UNITS: dict[Locale, dict[str, tuple[str, str]]] = {
    Locale.EN: {
        "day": ("day", "days"),
        "week": ("week", "weeks"),
        "month": ("month", "months"),
        "year": ("year", "years"),
    },
    Locale.DE: {
        "day": ("Tag", "Tage"),
        "week": ("Woche", "Wochen"),
        "month": ("Monat", "Monate"),
        "year": ("Jahr", "Jahre"),
    },
}


def resolve_locale(value: str | Locale | None) -> Locale:
    """Map a locale name (``"de"``, ``"de-AT"``, ``"EN"``) onto a supported locale.

    Unknown names fall back to English.
    """
    if isinstance(value, Locale):
        return value
    if not value:
        return Locale.EN
    primary = str(value).strip().lower().replace("_", "-").split("-", 1)[0]
    try:
        return Locale(primary)
    except ValueError:
        return Locale.EN


def translate(message: Message, *args: object, locale: Locale = Locale.EN) -> str:
    """Render *message* in *locale*, passing *args* to formatting callables."""
    entry = CATALOGS[locale].get(message)
    if entry is None:
        entry = CATALOGS[Locale.EN][message]
    if callable(entry):
        return entry(*args)
    return entry


def weekday_name(day: date, *, locale: Locale = Locale.EN) -> str:
    """Full weekday name of *day*."""
    return _WEEKDAYS[locale][day.weekday()]


def format_long_date(day: date, *, locale: Locale = Locale.EN) -> str:
    """Short weekday + date, e.g. ``Mon, Jan 15, 2024`` or ``Mo., 15. Jan. 2024``."""
    weekday = _WEEKDAYS_SHORT[locale][day.weekday()]
    month = _MONTHS_SHORT[locale][day.month - 1]
    if locale is Locale.DE:
        return f"{weekday}, {day.day}. {month} {day.year}"
    return f"{weekday}, {month} {day.day}, {day.year}"


def unit_name(count: int | float, unit: str, *, locale: Locale = Locale.EN) -> str:
    """Singular or plural name of a canonical interval *unit*."""
    singular, plural = _UNITS[locale][unit]
    return singular if count == 1 else plural
