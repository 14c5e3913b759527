"""Command: completion-history statistics for a task."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from upkeepctl.commands._base import UpkeepCommand

if TYPE_CHECKING:
    from upkeepctl.commands._context import AppContext


@click.command(
    cls=UpkeepCommand,
    examples="""\
  upkeepctl stats chores/bike-chain.md
  upkeepctl --json stats chores/bike-chain.md""",
)
@click.argument("note")
@click.pass_obj
def stats(app: AppContext, note: str) -> None:
    """Summarize the completion history of the task in NOTE."""
    from upkeepctl.services.stats import StatsService

    app.emit(StatsService(app.vault).stats(note))
