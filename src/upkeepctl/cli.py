"""Root CLI group for upkeepctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from upkeepctl import __version__
from upkeepctl.commands import register_commands
from upkeepctl.commands._base import UpkeepGroup
from upkeepctl.commands._context import AppContext
from upkeepctl.config.settings import UpkeepSettings
from upkeepctl.domain.i18n import Locale


@click.group(
    cls=UpkeepGroup,
    invoke_without_command=True,
    examples="""\
  upkeepctl list
  upkeepctl --vault ~/notes list --filter overdue
  upkeepctl complete chores/bike-chain.md
  upkeepctl --json stats chores/bike-chain.md""",
)
@click.version_option(version=__version__, prog_name="upkeepctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (paths only).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--locale",
    type=click.Choice([str(loc) for loc in Locale]),
    default=None,
    help="Display language.",
)
@click.option(
    "--vault",
    "vault_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Vault directory (default: where upkeepctl.toml is found, else cwd).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    locale: str | None,
    vault_root: Path | None,
) -> None:
    """upkeepctl: recurring maintenance tasks in a markdown vault."""
    settings = UpkeepSettings.from_cli(
        config_path=config_path,
        vault_root=vault_root,
        locale=locale,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
