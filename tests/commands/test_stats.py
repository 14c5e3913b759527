"""Tests for the stats command."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from upkeepctl.cli import cli

WriteTask = Callable[..., Path]


@pytest.mark.usefixtures("_isolated_vault")
class TestStatsCommand:
    def test_after_completions(self, cli_runner: CliRunner, write_task: WriteTask) -> None:
        write_task("bike")
        for moment in ("2024-02-01T09:00:00+00:00", "2024-03-01T09:00:00+00:00"):
            done = cli_runner.invoke(cli, ["complete", "chores/bike", "--now", moment])
            assert done.exit_code == 0, done.output

        result = cli_runner.invoke(cli, ["--json", "stats", "chores/bike"])
        data = json.loads(result.stdout)["data"]
        assert data["total_completions"] == 2
        assert data["avg_days_between"] == 30.4
        assert data["on_time_count"] == 1
        assert data["on_time_rate"] == 50

    def test_rich_output(self, cli_runner: CliRunner, write_task: WriteTask) -> None:
        write_task("bike")
        cli_runner.invoke(cli, ["complete", "chores/bike", "--now", "2024-02-01"])
        result = cli_runner.invoke(cli, ["stats", "chores/bike"])
        assert result.exit_code == 0
        assert "Total Completions" in result.stdout
        assert "Completion history" in result.stdout

    def test_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["stats", "chores/nope"])
        assert result.exit_code == 1
