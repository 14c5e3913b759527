"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``upkeepctl.toml`` only holds
overrides. A vault works with no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from upkeepctl.domain.i18n import Locale, resolve_locale
from upkeepctl.domain.status import DEFAULT_COMPLETE_EARLY_DAYS
from upkeepctl.domain.tasks import DEFAULT_TASK_TAG

# Directories never scanned for task notes.
DEFAULT_SKIP_DIRS: tuple[str, ...] = (".obsidian", ".git", ".trash")


class VaultConfig(BaseModel):
    """[vault] section."""

    model_config = {"frozen": True}

    name: str = "my-vault"
    task_tag: str = DEFAULT_TASK_TAG
    skip_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))

    @field_validator("task_tag")
    @classmethod
    def _strip_hash(cls, value: str) -> str:
        tag = value.strip().lstrip("#")
        if not tag:
            msg = "task_tag must not be empty"
            raise ValueError(msg)
        return tag


class TasksConfig(BaseModel):
    """[tasks] section."""

    model_config = {"frozen": True}

    default_complete_early_days: int = Field(default=DEFAULT_COMPLETE_EARLY_DAYS, ge=0)


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    locale: Locale = Locale.EN

    @field_validator("locale", mode="before")
    @classmethod
    def _resolve(cls, value: object) -> Locale:
        return resolve_locale(value if isinstance(value, (str, Locale)) else None)


class HistoryConfig(BaseModel):
    """[history] section.

    ``user`` replaces the OS login name in history rows when non-empty.
    """

    model_config = {"frozen": True}

    enabled: bool = True
    user: str = ""


class UpkeepConfig(BaseModel):
    """Full ``upkeepctl.toml`` document."""

    model_config = {"frozen": True}

    vault: VaultConfig = Field(default_factory=VaultConfig)
    tasks: TasksConfig = Field(default_factory=TasksConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
