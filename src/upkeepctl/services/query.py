"""TaskQueryService: read-only views over the vault's recurring tasks.

- list_tasks: every task, classified, filtered with the query language
- status: one task's status widget data

Nothing is cached; each call re-reads the notes and reclassifies them
against a single ``today``.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

from upkeepctl.domain.dates import today_local
from upkeepctl.domain.filters import FilterQuery, apply_filter
from upkeepctl.domain.i18n import Locale
from upkeepctl.domain.presentation import (
    due_text,
    frequency_text,
    secondary_text,
    status_text,
    status_to_presentation,
    status_tooltip,
)
from upkeepctl.domain.status import StatusCategory, progress_percentage
from upkeepctl.domain.tasks import ProcessedTask, process_tasks
from upkeepctl.services.base import BaseService
from upkeepctl.services.result import ServiceResult
from upkeepctl.services.telemetry import trace_span, traced

# Categories that count toward "needs attention" in list summaries.
ATTENTION_CATEGORIES = frozenset(
    {
        StatusCategory.NEVER_COMPLETED,
        StatusCategory.OVERDUE,
        StatusCategory.DUE_TODAY,
    }
)


def present_task(item: ProcessedTask, today: date, *, locale: Locale) -> dict[str, Any]:
    """JSON view of *item* including its localized display strings."""
    look = status_to_presentation(item.status.category)
    return {
        **item.to_dict(),
        "display": {
            "status": status_text(item.status, locale=locale),
            "due": due_text(item, today, locale=locale),
            "frequency": frequency_text(item, locale=locale),
            "summary": secondary_text(item, today, locale=locale),
            "tooltip": status_tooltip(item, today, locale=locale),
            "style": look.style,
            "progress_style": look.progress_style,
            "progress": round(progress_percentage(item.task, today), 1),
        },
    }


class TaskQueryService(BaseService):
    """Lists and inspects recurring tasks."""

    @traced
    def list_tasks(self, filter_query: str | None = None, *, now: date | None = None) -> ServiceResult:
        """Classify every task and apply *filter_query*.

        Args:
            filter_query: Query text; empty means all tasks, due-date order.
            now: The day to classify against (default: today).
        """
        today = now or today_local()
        query = FilterQuery.parse(filter_query)

        with trace_span("scan") as span:
            tasks = list(self._vault.iter_tasks())
            if span:
                span.annotate("tasks", len(tasks))

        processed = process_tasks(tasks, today)
        shown = apply_filter(processed, query)

        return ServiceResult(
            ok=True,
            op="list_tasks",
            data={
                "today": today.isoformat(),
                "query": query.model_dump(mode="json", exclude_defaults=True),
                "total": len(processed),
                "count": len(shown),
                "attention": sum(
                    1 for t in processed if t.status.category in ATTENTION_CATEGORIES
                ),
                "items": [present_task(t, today, locale=self.locale) for t in shown],
            },
        )

    @traced
    def status(self, note: str | Path, *, now: date | None = None) -> ServiceResult:
        """Status of the single task stored in *note*."""
        found = self._locate_task("status", note)
        if isinstance(found, ServiceResult):
            return found
        _, task = found

        today = now or today_local()
        item = process_tasks([task], today)[0]
        return ServiceResult(
            ok=True,
            op="status",
            data={"today": today.isoformat(), **present_task(item, today, locale=self.locale)},
        )
