"""Tests for the root upkeepctl CLI."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from upkeepctl import __version__
from upkeepctl.cli import cli

WriteTask = Callable[..., Path]


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "upkeepctl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_vault")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flags_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_unknown_locale_rejected(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--locale", "fr", "list"])
    assert result.exit_code == 2


def test_missing_vault_dir_rejected(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["--vault", str(tmp_path / "nope"), "list"])
    assert result.exit_code == 2


@pytest.mark.usefixtures("_isolated_vault")
class TestConfigOption:
    def test_missing_config_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["-c", str(tmp_path / "missing.toml"), "list"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_config_changes_task_tag(
        self, cli_runner: CliRunner, vault_root: Path, write_task: WriteTask
    ) -> None:
        write_task("bike")
        (vault_root / "chores" / "oil.md").write_text(
            "---\ntags: [chore]\nlast_done: 2024-01-01\ninterval: 1\ninterval_unit: year\n---\n"
        )
        config = vault_root / "alt.toml"
        config.write_text('[vault]\ntask_tag = "chore"\n')
        result = cli_runner.invoke(cli, ["-c", str(config), "-q", "list"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "chores/oil.md"

    def test_env_locale(
        self, cli_runner: CliRunner, write_task: WriteTask, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_task("bike")
        monkeypatch.setenv("UPKEEPCTL_DISPLAY__LOCALE", "de")
        result = cli_runner.invoke(cli, ["list", "--now", "2024-02-10"])
        assert "Wiederkehrende Aufgaben" in result.stdout


@pytest.mark.usefixtures("_isolated_vault")
class TestWarnings:
    def test_history_failure_warns_on_stderr(
        self, cli_runner: CliRunner, write_task: WriteTask, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from upkeepctl.infrastructure.vault import Vault

        write_task("bike")
        calls: list[int] = []
        original = Vault.write_text

        def _second_fails(self: Vault, path: Path, content: str) -> None:
            calls.append(1)
            if len(calls) > 1:
                msg = "disk full"
                raise OSError(msg)
            original(self, path, content)

        monkeypatch.setattr(Vault, "write_text", _second_fails)
        result = cli_runner.invoke(cli, ["complete", "chores/bike", "--now", "2024-02-01"])
        assert result.exit_code == 0
        assert "WARNING: Failed to update completion history: disk full" in result.stderr

    def test_json_keeps_warnings_in_payload(
        self, cli_runner: CliRunner, write_task: WriteTask, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from upkeepctl.infrastructure.vault import Vault

        write_task("bike")
        calls: list[int] = []
        original = Vault.write_text

        def _second_fails(self: Vault, path: Path, content: str) -> None:
            calls.append(1)
            if len(calls) > 1:
                msg = "disk full"
                raise OSError(msg)
            original(self, path, content)

        monkeypatch.setattr(Vault, "write_text", _second_fails)
        result = cli_runner.invoke(
            cli, ["--json", "complete", "chores/bike", "--now", "2024-02-01"]
        )
        payload = json.loads(result.stdout)
        assert payload["warnings"] == ["Failed to update completion history: disk full"]
        assert "WARNING:" not in result.stderr
