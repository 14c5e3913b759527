"""Command: show the status of one task note."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from upkeepctl.commands._base import UpkeepCommand

if TYPE_CHECKING:
    from upkeepctl.commands._context import AppContext


@click.command(
    cls=UpkeepCommand,
    examples="""\
  upkeepctl status chores/bike-chain.md
  upkeepctl status chores/bike-chain --now 2024-03-01
  upkeepctl --locale de status chores/bike-chain.md""",
)
@click.argument("note")
@click.option("--now", default=None, help="Classify as of this date (YYYY-MM-DD).")
@click.pass_obj
def status(app: AppContext, note: str, now: str | None) -> None:
    """Show the status of the task in NOTE."""
    from upkeepctl.services.query import TaskQueryService

    moment = app.parse_now("status", now)
    today = moment.date() if moment else None
    app.emit(TaskQueryService(app.vault).status(note, now=today))
