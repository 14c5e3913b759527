"""Subcommand modules for upkeepctl.

register_commands() imports each command lazily so ``upkeepctl --help``
stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root group."""
    from upkeepctl.commands.complete import complete
    from upkeepctl.commands.list_cmd import list_cmd
    from upkeepctl.commands.stats import stats
    from upkeepctl.commands.status import status

    cli.add_command(list_cmd)
    cli.add_command(status)
    cli.add_command(complete)
    cli.add_command(stats)
