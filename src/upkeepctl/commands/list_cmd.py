"""Command: list recurring tasks with the filter query language."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from upkeepctl.commands._base import UpkeepCommand

if TYPE_CHECKING:
    from upkeepctl.commands._context import AppContext


@click.command(
    "list",
    cls=UpkeepCommand,
    examples="""\
  upkeepctl list
  upkeepctl list --filter overdue
  upkeepctl list --filter "status:overdue OR status:due-soon"
  upkeepctl list --filter $'tag:bicycle\\nsort:name\\nlimit:5'
  upkeepctl list --filter "days:<=3" --now 2024-01-15
  upkeepctl --json list""",
)
@click.option(
    "-f",
    "--filter",
    "filter_query",
    default=None,
    help="Filter query (status:, tag:, interval:, days:, sort:, limit:). "
    "Newlines separate clauses; OR joins values.",
)
@click.option("--now", default=None, help="Classify as of this date (YYYY-MM-DD).")
@click.pass_obj
def list_cmd(app: AppContext, filter_query: str | None, now: str | None) -> None:
    """List recurring tasks with their status."""
    from upkeepctl.services.query import TaskQueryService

    moment = app.parse_now("list_tasks", now)
    today = moment.date() if moment else None
    app.emit(TaskQueryService(app.vault).list_tasks(filter_query, now=today))
