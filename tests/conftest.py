"""Shared pytest fixtures and test helpers for upkeepctl tests."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from upkeepctl.config.settings import UpkeepSettings
from upkeepctl.infrastructure.vault import Vault
from upkeepctl.services.telemetry import disable_telemetry

TASK_NOTE = """\
---
tags:
  - recurring-task
last_done: {last_done}
interval: {interval}
interval_unit: {interval_unit}
{extra}---
# {title}

Some notes about the task.
"""

WriteTask = Callable[..., Path]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own upkeepctl environment out of the tests."""
    for name in (
        "UPKEEPCTL_CONFIG",
        "UPKEEPCTL_VAULT_ROOT",
        "UPKEEPCTL_JSON_OUTPUT",
        "UPKEEPCTL_QUIET",
        "UPKEEPCTL_VERBOSE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _utc_local_zone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test with UTC as the local zone."""
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()


@pytest.fixture(autouse=True)
def _restore_process_state() -> Generator[None]:
    """Undo the logging setup and telemetry switch a CLI invocation leaves behind."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    upkeep_level = logging.getLogger("upkeepctl").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("upkeepctl").setLevel(upkeep_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Temporary vault directory with a ``chores/`` folder.

    All vault-related fixtures (vault, _isolated_vault) build on this.
    """
    (tmp_path / "chores").mkdir()
    (tmp_path / ".obsidian").mkdir()
    return tmp_path


@pytest.fixture
def vault(vault_root: Path) -> Vault:
    """Vault with default settings on the temp directory."""
    return Vault(UpkeepSettings.from_cli(vault_root=vault_root))


@pytest.fixture
def _isolated_vault(vault_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp vault root so the CLI picks it up.

    Use via ``@pytest.mark.usefixtures("_isolated_vault")`` on command test
    classes. ``tmp_path`` is the same directory.
    """
    monkeypatch.chdir(vault_root)


@pytest.fixture
def write_task(vault_root: Path) -> WriteTask:
    """Write a recurring-task note under the vault and return its path.

    Extra keyword arguments become additional frontmatter lines.
    """

    def _write(
        name: str,
        *,
        last_done: str = "2024-01-01",
        interval: object = 1,
        interval_unit: str = "months",
        body: str = "",
        **extra: object,
    ) -> Path:
        path = vault_root / "chores" / f"{name}.md"
        extra_lines = "".join(f"{key}: {value}\n" for key, value in extra.items())
        text = TASK_NOTE.format(
            last_done=last_done,
            interval=interval,
            interval_unit=interval_unit,
            extra=extra_lines,
            title=name,
        )
        path.write_text(text + body, encoding="utf-8")
        return path

    return _write
