"""Completion history: an append-only markdown table inside each task note.

The first completion appends a section::

    ## Completion history

    | Date | Time | Days Since Last | Days Scheduled | User |
    |------|------|----------------|----------------|------|
    | 2024-01-15 | 09:30 | 31 | 30 | alice |

Later completions append one row each. Appending never inserts a blank
line inside the table and never glues a row onto the previous line.
"""

from __future__ import annotations

import getpass
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from upkeepctl.domain.i18n import CATALOGS, Locale, Message, translate

logger = logging.getLogger(__name__)

# "## <heading>" in every locale, so a note started in one language is
# never given a second section in another.
HISTORY_HEADINGS: tuple[str, ...] = tuple(
    f"## {catalog[Message.COMPLETION_HISTORY]}" for catalog in CATALOGS.values()
)

NO_PREVIOUS = "-"
UNKNOWN_USER = "-"
UNKNOWN_INTERVAL = -1

_SEPARATOR_ROW = "|------|------|----------------|----------------|------|"

IdentityProvider = Callable[[], str]


@dataclass(frozen=True)
class HistoryRow:
    """One completion event as stored in the history table."""

    date: str
    time: str
    days_since_last: str
    days_scheduled: int | float
    user: str

    def to_markdown(self) -> str:
        cells = (self.date, self.time, self.days_since_last, self.days_scheduled, self.user)
        return "| " + " | ".join(str(c) for c in cells) + " |"


@dataclass(frozen=True)
class HistoryStatistics:
    """Summary of a completion history table."""

    total_completions: int
    avg_days_between: float
    on_time_count: int
    on_time_rate: int


# ---------------------------------------------------------------------------
# Row construction
# ---------------------------------------------------------------------------


def system_username() -> str:
    """OS login name, or ``-`` when it cannot be determined."""
    try:
        name = getpass.getuser()
    except Exception:
        logger.debug("OS user lookup failed", exc_info=True)
        return UNKNOWN_USER
    return name if isinstance(name, str) and name else UNKNOWN_USER


def _as_utc_datetime(value: Any) -> datetime | None:
    """Read a timestamp; naive and date-only values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment


def days_between(start: Any, end: Any) -> float | None:
    """Fractional days from *start* to *end*, keeping sub-day precision.

    Examples:
        >>> days_between("2024-01-01", "2024-01-02T12:00:00.000Z")
        1.5
    """
    first = _as_utc_datetime(start)
    second = _as_utc_datetime(end)
    if first is None or second is None:
        return None
    return (second - first).total_seconds() / 86400


def format_days_with_decimal(days: float) -> str:
    """Round to two decimals (half up) and drop trailing zeros.

    Examples:
        >>> format_days_with_decimal(1.0)
        '1'
        >>> format_days_with_decimal(1.256)
        '1.26'
    """
    rounded = Decimal(days).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = f"{rounded:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def safe_identity(provider: IdentityProvider | None) -> str:
    """Call *provider*, falling back to ``-`` on any failure."""
    if provider is None:
        return UNKNOWN_USER
    try:
        name = provider()
    except Exception:
        logger.debug("Identity lookup failed", exc_info=True)
        return UNKNOWN_USER
    return name if isinstance(name, str) and name.strip() else UNKNOWN_USER


def build_history_row(
    previous_last_done: Any,
    now: datetime,
    interval_days: int | float,
    *,
    identity_provider: IdentityProvider | None = system_username,
) -> HistoryRow:
    """Build the row recorded for a completion at *now*.

    *now* supplies the date and time columns as given; pass an aware
    local datetime to record local wall-clock time.
    """
    elapsed = days_between(previous_last_done, now)
    return HistoryRow(
        date=now.strftime("%Y-%m-%d"),
        time=now.strftime("%H:%M"),
        days_since_last=NO_PREVIOUS if elapsed is None else format_days_with_decimal(elapsed),
        days_scheduled=interval_days,
        user=safe_identity(identity_provider),
    )


# ---------------------------------------------------------------------------
# Table append
# ---------------------------------------------------------------------------


def has_history_section(text: str) -> bool:
    """True when *text* already contains a completion-history heading."""
    return any(heading in text for heading in HISTORY_HEADINGS)


def smart_append_to_table(content: str, row: str) -> str:
    """Append *row*, adding a newline only if *content* lacks a trailing one."""
    if not content.endswith("\n"):
        return content + "\n" + row
    return content + row


def history_section(row: str, *, locale: Locale = Locale.EN) -> str:
    """A new history section (heading, header, separator) ending in *row*."""
    headers = " | ".join(
        translate(m, locale=locale)
        for m in (
            Message.DATE,
            Message.TIME,
            Message.DAYS_SINCE_LAST,
            Message.DAYS_SCHEDULED,
            Message.USER,
        )
    )
    heading = translate(Message.COMPLETION_HISTORY, locale=locale)
    return f"\n\n## {heading}\n\n| {headers} |\n{_SEPARATOR_ROW}\n{row}"


def append_row(
    text: str,
    row: HistoryRow | str,
    *,
    has_existing_section: bool | None = None,
    locale: Locale = Locale.EN,
) -> str:
    """Append *row* to the note's history table, creating the section if needed."""
    line = row.to_markdown() if isinstance(row, HistoryRow) else row
    if has_existing_section is None:
        has_existing_section = has_history_section(text)
    if not has_existing_section:
        return text + history_section(line, locale=locale)
    return smart_append_to_table(text, line)


def append_completion_history(
    text: str,
    previous_last_done: Any,
    now: datetime,
    interval_days: int | float,
    *,
    identity_provider: IdentityProvider | None = system_username,
    locale: Locale = Locale.EN,
) -> str:
    """Record a completion at *now* in the note body *text*."""
    row = build_history_row(
        previous_last_done,
        now,
        interval_days,
        identity_provider=identity_provider,
    )
    return append_row(text, row, locale=locale)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def _split_cells(line: str) -> list[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def parse_history_rows(text: str) -> list[HistoryRow]:
    """Read every data row of the completion-history table in *text*."""
    lines = text.splitlines()
    start = next(
        (i for i, line in enumerate(lines) if line.strip() in HISTORY_HEADINGS),
        None,
    )
    if start is None:
        return []

    rows: list[HistoryRow] = []
    in_table = False
    for line in lines[start + 1 :]:
        stripped = line.strip()
        if not stripped:
            if in_table:
                break
            continue
        if not stripped.startswith("|"):
            break
        if not in_table:
            # Header row; the separator follows.
            in_table = True
            continue
        cells = _split_cells(stripped)
        if set("".join(cells)) <= {"-", ":"}:
            continue
        if len(cells) < 5:
            continue
        try:
            scheduled: int | float = int(cells[3])
        except ValueError:
            try:
                scheduled = float(cells[3])
            except ValueError:
                scheduled = UNKNOWN_INTERVAL
        rows.append(
            HistoryRow(
                date=cells[0],
                time=cells[1],
                days_since_last=cells[2],
                days_scheduled=scheduled,
                user=cells[4],
            )
        )
    return rows


def history_statistics(rows: list[HistoryRow]) -> HistoryStatistics:
    """Totals, mean spacing, and on-time rate over *rows*.

    Rows without a numeric "days since last" (the first completion) count
    toward the total but not toward spacing or punctuality.
    """
    measured: list[tuple[float, float]] = []
    for row in rows:
        try:
            since = float(row.days_since_last)
        except ValueError:
            continue
        measured.append((since, float(row.days_scheduled)))

    total = len(rows)
    if not measured:
        return HistoryStatistics(
            total_completions=total,
            avg_days_between=0.0,
            on_time_count=0,
            on_time_rate=0,
        )

    avg = math.floor(sum(since for since, _ in measured) / len(measured) * 10 + 0.5) / 10
    on_time = sum(1 for since, scheduled in measured if scheduled >= 0 and since <= scheduled)
    return HistoryStatistics(
        total_completions=total,
        avg_days_between=avg,
        on_time_count=on_time,
        on_time_rate=math.floor(on_time / len(measured) * 100 + 0.5),
    )
