"""StatsService: summaries of a task's completion history."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

from upkeepctl.domain.history import history_statistics, parse_history_rows
from upkeepctl.services.base import BaseService
from upkeepctl.services.result import ServiceResult
from upkeepctl.services.telemetry import traced


class StatsService(BaseService):
    """Reads completion-history tables back out of task notes."""

    @traced
    def stats(self, note: str | Path) -> ServiceResult:
        """Total completions, mean spacing, and on-time rate for *note*."""
        found = self._locate_task("stats", note)
        if isinstance(found, ServiceResult):
            return found
        path, task = found

        rows = parse_history_rows(self._vault.read_text(path))
        summary = history_statistics(rows)
        return ServiceResult(
            ok=True,
            op="stats",
            data={
                "path": task.path,
                "name": task.name,
                **asdict(summary),
                "rows": [asdict(row) for row in rows],
            },
        )
