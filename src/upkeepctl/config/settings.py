"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. CLI flags passed by click as init kwargs
  2. ``UPKEEPCTL_*`` env vars, ``__`` for nesting
  3. ``upkeepctl.toml``, discovered by walking up
  4. defaults baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from upkeepctl.config.discovery import find_config
from upkeepctl.config.models import DisplayConfig, HistoryConfig, TasksConfig, VaultConfig
from upkeepctl.domain.i18n import Locale


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``upkeepctl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path has to reach settings_customise_sources, which is a classmethod.
_tls = threading.local()


class UpkeepSettings(BaseSettings):
    """Settings for one upkeepctl invocation, frozen after construction.

    Attributes:
        vault_root: Vault directory. ``--vault`` wins, then the directory
            holding ``upkeepctl.toml``, then the working directory.
        config_path: The TOML file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "UPKEEPCTL_",
        "env_nested_delimiter": "__",
    }

    vault_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    vault: VaultConfig = Field(default_factory=VaultConfig)
    tasks: TasksConfig = Field(default_factory=TasksConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)

    @property
    def locale(self) -> Locale:
        return self.display.locale

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        vault_root: Path | None = None,
        locale: str | None = None,
        **cli_flags: Any,
    ) -> UpkeepSettings:
        """Construct settings for a CLI invocation.

        An explicit *config_path* that does not exist is an error; a
        discovered one is optional.
        """
        toml_path: Path | None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(vault_root)

        resolved_root = vault_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        overrides: dict[str, Any] = dict(cli_flags)
        if locale:
            overrides["display"] = {"locale": locale}

        _tls.toml_path = toml_path
        try:
            return cls(vault_root=resolved_root, config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
