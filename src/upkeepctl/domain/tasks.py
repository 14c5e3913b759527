"""Recurring task records and the processing pipeline.

A :class:`Task` is read straight from note frontmatter and never
mutated. :func:`process_tasks` attaches a freshly computed
:class:`~upkeepctl.domain.status.TaskStatus` to each task.
"""

from __future__ import annotations

import re
from datetime import date
from pathlib import PurePosixPath
from typing import Any

from pydantic import BaseModel, Field

from upkeepctl.domain.dates import parse_local_date
from upkeepctl.domain.status import TaskStatus, classify

DEFAULT_TASK_TAG = "recurring-task"

_TAG_SPLIT_RE = re.compile(r"[,\s]+")


class Task(BaseModel):
    """A recurring task as found in a note's frontmatter.

    Field values are kept raw (``last_done`` may be a string, a
    :class:`date`, or ``None``); the status engine tolerates all of them.
    """

    model_config = {"frozen": True}

    path: str
    name: str
    last_done: Any = None
    interval: Any = None
    interval_unit: str = ""
    complete_early_days: Any = None
    tags: list[str] = Field(default_factory=list)
    type: str | None = None

    @property
    def last_done_iso(self) -> str | None:
        """``last_done`` as ``YYYY-MM-DD`` when it is a parsable date."""
        parsed = parse_local_date(self.last_done)
        return parsed.isoformat() if parsed else None


class ProcessedTask(BaseModel):
    """A task paired with its computed status."""

    model_config = {"frozen": True}

    task: Task
    status: TaskStatus

    @property
    def path(self) -> str:
        return self.task.path

    @property
    def name(self) -> str:
        return self.task.name

    @property
    def days_remaining(self) -> int:
        return self.status.days_remaining

    @property
    def calculated_next_due(self) -> str | None:
        return self.status.calculated_next_due

    def to_dict(self) -> dict[str, Any]:
        """Flat JSON-friendly view used by service results."""
        return {
            "path": self.task.path,
            "name": self.task.name,
            "last_done": self.task.last_done_iso,
            "interval": self.task.interval,
            "interval_unit": self.task.interval_unit,
            "tags": list(self.task.tags),
            "status": str(self.status.category),
            "days_remaining": self.status.days_remaining,
            "next_due": self.status.calculated_next_due,
            "eligible": self.status.is_eligible_for_completion,
            "complete_early_days": self.status.complete_early_days,
        }


def normalize_tags(raw: Any) -> list[str]:
    """Normalize a frontmatter ``tags`` value into a list without ``#``.

    Accepts a YAML list or a comma/space separated string.

    Examples:
        >>> normalize_tags("#recurring-task, bike")
        ['recurring-task', 'bike']
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        items: list[Any] = _TAG_SPLIT_RE.split(raw)
    elif isinstance(raw, (list, tuple, set)):
        items = list(raw)
    else:
        items = [raw]

    tags: list[str] = []
    for item in items:
        if item is None:
            continue
        tag = str(item).strip().lstrip("#")
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def is_recurring_task(frontmatter: dict[str, Any], *, task_tag: str = DEFAULT_TASK_TAG) -> bool:
    """True when the frontmatter carries the task tag or ``type: <task_tag>``."""
    if str(frontmatter.get("type") or "") == task_tag:
        return True
    return task_tag in normalize_tags(frontmatter.get("tags"))


def task_from_frontmatter(
    path: str,
    frontmatter: dict[str, Any],
    *,
    task_tag: str = DEFAULT_TASK_TAG,
) -> Task | None:
    """Build a :class:`Task` from parsed frontmatter.

    Returns ``None`` for notes that are not recurring tasks or that lack
    ``interval`` / ``interval_unit``.
    """
    if not is_recurring_task(frontmatter, task_tag=task_tag):
        return None

    interval = frontmatter.get("interval")
    interval_unit = frontmatter.get("interval_unit")
    if not interval or not interval_unit:
        return None

    last_done = frontmatter.get("last_done")
    if isinstance(last_done, date):
        last_done = parse_local_date(last_done)

    return Task(
        path=path,
        name=PurePosixPath(path).stem,
        last_done=last_done,
        interval=interval,
        interval_unit=str(interval_unit),
        complete_early_days=frontmatter.get("complete_early_days"),
        tags=normalize_tags(frontmatter.get("tags")),
        type=str(frontmatter["type"]) if frontmatter.get("type") else None,
    )


def process_task(task: Task, now: Any = None) -> ProcessedTask:
    """Attach the status of *task* as of *now*."""
    return ProcessedTask(task=task, status=classify(task, now))


def process_tasks(tasks: list[Task], now: Any = None) -> list[ProcessedTask]:
    """Classify every task against the same *now*."""
    return [process_task(task, now) for task in tasks]


def _due_date_key(item: ProcessedTask) -> tuple[int, date]:
    due = parse_local_date(item.calculated_next_due)
    if due is None:
        return (0, date.min)
    return (1, due)


def sort_tasks(tasks: list[ProcessedTask]) -> list[ProcessedTask]:
    """Order by computed due date; tasks without one come first.

    The sort is stable, so equal due dates keep their input order.
    """
    return sorted(tasks, key=_due_date_key)
