"""Click classes that give every upkeepctl command an ``--examples`` flag.

``--help`` lists options only. The worked invocations for each command live
in its ``examples=`` text and print through ``--examples``, which runs
before argument validation so ``upkeepctl complete --examples`` works
without a NOTE.
"""

from __future__ import annotations

from typing import Any

import click


class ExamplesOption(click.Option):
    """Eager flag that prints the owning command's examples and exits."""

    def __init__(self, examples: str) -> None:
        super().__init__(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._print_examples,
            help="Show usage examples.",
        )
        self.examples = examples

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, wanted: bool) -> None:
        if not wanted or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class _ExamplesMixin:
    """Collects ``examples=`` and registers :class:`ExamplesOption`."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(ExamplesOption(examples))


class UpkeepCommand(_ExamplesMixin, click.Command):
    """A leaf command (``list``, ``status``, ``complete``, ``stats``)."""


class UpkeepGroup(_ExamplesMixin, click.Group):
    """The root ``upkeepctl`` group. Subcommands default to :class:`UpkeepCommand`."""

    command_class = UpkeepCommand
