"""Parametrized help tests for every CLI command."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from upkeepctl.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--help"], ["list", "status", "complete", "stats", "--vault", "--locale"]),
    (["list", "--help"], ["--filter", "--now"]),
    (["status", "--help"], ["NOTE", "--now"]),
    (["complete", "--help"], ["NOTE", "--now", "--force"]),
    (["stats", "--help"], ["NOTE"]),
]


def _help_id(args_keywords: tuple[list[str], list[str]]) -> str:
    args, _ = args_keywords
    return "_".join(a for a in args if a != "--help") or "root"


@pytest.mark.parametrize(
    "args,expected_keywords",
    HELP_COMMANDS,
    ids=[_help_id(item) for item in HELP_COMMANDS],
)
def test_command_help(cli_runner: CliRunner, args: list[str], expected_keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in help output for {args}"
