"""Filter query language for task tables.

A query is a set of newline-separated clauses. Each clause is either
``key:value`` or a bare status keyword; ``OR`` unions several values of
one line::

    status:overdue OR status:due-soon
    tag:bicycle
    interval:week
    days:<=3
    sort:name
    limit:10

Filtering narrows by status, tag, interval, and day count, then sorts,
then truncates. Unknown keys and invalid values are ignored.
"""

from __future__ import annotations

import operator
import re
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, Field

from upkeepctl.domain.status import StatusCategory
from upkeepctl.domain.tasks import ProcessedTask, sort_tasks


class StatusFilter(StrEnum):
    """Status keywords accepted by ``status:`` and bare clauses."""

    ALL = "all"
    OVERDUE = "overdue"
    UP_TO_DATE = "up-to-date"
    DUE_TODAY = "due-today"
    DUE_SOON = "due-soon"
    NEVER_COMPLETED = "never-completed"


class SortOrder(StrEnum):
    """Sort modes accepted by ``sort:``."""

    DUE_DATE = "due-date"
    STATUS = "status"
    NAME = "name"


_OR_RE = re.compile(r"\s+OR\s+", re.IGNORECASE)
_DAYS_RE = re.compile(r"^(<=|>=|<|>|=)?\s*(-?\d+)$")

_COMPARATORS: dict[str, Callable[[int, int], bool]] = {
    "<=": operator.le,
    ">=": operator.ge,
    "<": operator.lt,
    ">": operator.gt,
    "=": operator.eq,
}

# Severity order for ``sort:status``.
_STATUS_ORDER: dict[StatusCategory, int] = {
    StatusCategory.NEVER_COMPLETED: 0,
    StatusCategory.OVERDUE: 1,
    StatusCategory.DUE_TODAY: 2,
    StatusCategory.DUE_SOON: 3,
    StatusCategory.UP_TO_DATE: 4,
}


class DaysFilter(BaseModel):
    """A ``days:`` comparison against days remaining."""

    model_config = {"frozen": True}

    op: str = "="
    value: int

    def matches(self, days_remaining: int) -> bool:
        return _COMPARATORS[self.op](days_remaining, self.value)


class FilterQuery(BaseModel):
    """Parsed filter query. Empty lists mean "no constraint".

    ``status:up-to-date`` means "not overdue" (``days_remaining >= 0``), so it
    also matches tasks that are due today or due soon.
    """

    status: list[StatusFilter] = Field(default_factory=list)
    tag: list[str] = Field(default_factory=list)
    interval: list[str] = Field(default_factory=list)
    days: list[DaysFilter] = Field(default_factory=list)
    limit: int | None = None
    sort: SortOrder | None = None

    @classmethod
    def parse(cls, query: str | None) -> FilterQuery:
        """Parse a query string. Never raises; bad clauses are dropped."""
        parsed = cls()
        if not query or not query.strip():
            return parsed

        for raw_line in query.strip().splitlines():
            line = raw_line.strip()
            if not line:
                continue
            for part in _OR_RE.split(line):
                part = part.strip()
                if not part:
                    continue
                if ":" in part:
                    key, _, value = part.partition(":")
                    parsed._add(key.strip().lower(), value.strip())
                else:
                    parsed._add("status", part)
        return parsed

    def _add(self, key: str, value: str) -> None:
        if key == "status":
            try:
                status = StatusFilter(value.lower())
            except ValueError:
                return
            if status not in self.status:
                self.status.append(status)
        elif key == "tag":
            if value and value not in self.tag:
                self.tag.append(value)
        elif key == "interval":
            if value and value not in self.interval:
                self.interval.append(value)
        elif key == "days":
            match = _DAYS_RE.match(value)
            if match:
                self.days.append(DaysFilter(op=match.group(1) or "=", value=int(match.group(2))))
        elif key == "limit":
            try:
                limit = int(value)
            except ValueError:
                return
            if limit > 0:
                self.limit = limit
        elif key == "sort":
            try:
                self.sort = SortOrder(value.lower())
            except ValueError:
                return


def _matches_status(item: ProcessedTask, wanted: StatusFilter) -> bool:
    if wanted is StatusFilter.ALL:
        return True
    if wanted is StatusFilter.OVERDUE:
        return item.days_remaining < 0
    if wanted is StatusFilter.UP_TO_DATE:
        return item.days_remaining >= 0
    return str(item.status.category) == str(wanted)


def _matches_tag(item: ProcessedTask, wanted: list[str]) -> bool:
    return any(needle in tag for needle in wanted for tag in item.task.tags)


def _matches_interval(item: ProcessedTask, wanted: list[str]) -> bool:
    unit = item.task.interval_unit.lower()
    return any(needle.lower() in unit for needle in wanted)


def _matches_days(item: ProcessedTask, wanted: list[DaysFilter]) -> bool:
    if item.calculated_next_due is None:
        return False
    return all(check.matches(item.days_remaining) for check in wanted)


def apply_filter(tasks: list[ProcessedTask], query: FilterQuery) -> list[ProcessedTask]:
    """Narrow, sort, then truncate *tasks* according to *query*."""
    result = list(tasks)

    if query.status and StatusFilter.ALL not in query.status:
        result = [t for t in result if any(_matches_status(t, s) for s in query.status)]

    if query.tag:
        result = [t for t in result if _matches_tag(t, query.tag)]

    if query.interval:
        result = [t for t in result if _matches_interval(t, query.interval)]

    if query.days:
        result = [t for t in result if _matches_days(t, query.days)]

    result = sort_by(result, query.sort or SortOrder.DUE_DATE)

    if query.limit:
        result = result[: query.limit]

    return result


def sort_by(tasks: list[ProcessedTask], order: SortOrder) -> list[ProcessedTask]:
    """Stable sort by the given mode."""
    if order is SortOrder.NAME:
        return sorted(tasks, key=lambda t: t.name.casefold())
    if order is SortOrder.STATUS:
        return sorted(tasks, key=lambda t: _STATUS_ORDER[t.status.category])
    return sort_tasks(tasks)
