"""Command: mark a task complete and record it in the note's history."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from upkeepctl.commands._base import UpkeepCommand

if TYPE_CHECKING:
    from upkeepctl.commands._context import AppContext


@click.command(
    cls=UpkeepCommand,
    examples="""\
  upkeepctl complete chores/bike-chain.md
  upkeepctl complete chores/bike-chain.md --now 2024-01-15T09:30
  upkeepctl complete chores/filters.md --force""",
)
@click.argument("note")
@click.option("--now", default=None, help="Completion time (YYYY-MM-DD or ISO datetime).")
@click.option("--force", is_flag=True, help="Complete even when the task is not due yet.")
@click.pass_obj
def complete(app: AppContext, note: str, now: str | None, force: bool) -> None:
    """Mark the task in NOTE complete.

    Sets last_done to today and appends a row to the completion history.
    Tasks further out than their complete_early_days window are refused
    unless --force is given.
    """
    from upkeepctl.services.complete import CompleteService

    moment = app.parse_now("complete", now)
    app.emit(CompleteService(app.vault).complete(note, now=moment, force=force))
