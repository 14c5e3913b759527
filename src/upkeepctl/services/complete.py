"""CompleteService: mark a recurring task done.

Completion is two writes to the same note:

1. Frontmatter: ``last_done`` becomes today and any stored ``next_due``
   is dropped (it is always recomputed).
2. History: one row appended to the note's completion-history table.

The second write is best-effort. If it fails the completion still
stands and the failure is reported as a warning.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import structlog

from upkeepctl.domain.content import parse_frontmatter, render_frontmatter
from upkeepctl.domain.history import UNKNOWN_INTERVAL, append_row, build_history_row
from upkeepctl.domain.i18n import Message, translate
from upkeepctl.domain.status import calculate_interval_in_days, is_never_completed
from upkeepctl.domain.tasks import process_task
from upkeepctl.services._helpers import local_now
from upkeepctl.services.base import BaseService
from upkeepctl.services.result import NOT_ELIGIBLE, WRITE_FAILED, ServiceResult
from upkeepctl.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)


class CompleteService(BaseService):
    """Records task completions."""

    @traced
    def complete(
        self,
        note: str | Path,
        *,
        now: datetime | None = None,
        force: bool = False,
    ) -> ServiceResult:
        """Mark the task in *note* complete at *now*.

        Args:
            note: Vault-relative or absolute path of the task note.
            now: Completion time (default: the current local time). It is
                converted to the local zone first; its local date becomes
                ``last_done`` and its local date and time go into history.
            force: Complete even outside the early-completion window.
        """
        op = "complete"
        found = self._locate_task(op, note)
        if isinstance(found, ServiceResult):
            return found
        path, task = found

        moment = (now or local_now()).astimezone()
        today = moment.date()
        before = process_task(task, today)

        if not before.status.is_eligible_for_completion and not force:
            return ServiceResult.failure(
                op,
                NOT_ELIGIBLE,
                f"{task.name} is not due yet (next due {before.calculated_next_due}, "
                f"{before.days_remaining} days remaining); use --force to complete anyway",
                path=task.path,
                next_due=before.calculated_next_due,
                days_remaining=before.days_remaining,
                complete_early_days=before.status.complete_early_days,
            )

        previous_last_done = None if is_never_completed(task.last_done) else task.last_done

        with trace_span("frontmatter"):
            try:
                frontmatter, body = parse_frontmatter(self._vault.read_text(path))
                frontmatter["last_done"] = today
                frontmatter.pop("next_due", None)
                self._vault.write_text(path, render_frontmatter(frontmatter, body))
            except OSError as exc:
                return ServiceResult.failure(
                    op, WRITE_FAILED, f"Cannot update {task.path}: {exc}", path=task.path
                )

        warnings: list[str] = []
        history_row: str | None = None
        if self._vault.settings.history.enabled:
            interval_days = calculate_interval_in_days(task.interval, task.interval_unit)
            row = build_history_row(
                previous_last_done,
                moment,
                interval_days or UNKNOWN_INTERVAL,
                identity_provider=self.identity_provider,
            )
            with trace_span("history"):
                try:
                    updated = append_row(self._vault.read_text(path), row, locale=self.locale)
                    self._vault.write_text(path, updated)
                    history_row = row.to_markdown()
                except OSError as exc:
                    log.warning("history.append_failed", path=task.path, error=str(exc))
                    message = translate(Message.FAILED_TO_UPDATE_HISTORY, locale=self.locale)
                    warnings.append(f"{message}: {exc}")

        after = process_task(task.model_copy(update={"last_done": today}), today)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": task.path,
                "name": task.name,
                "previous_last_done": task.last_done_iso,
                "last_done": today.isoformat(),
                "next_due": after.calculated_next_due,
                "status": str(after.status.category),
                "forced": force and not before.status.is_eligible_for_completion,
                "history_row": history_row,
            },
            warnings=warnings,
        )
