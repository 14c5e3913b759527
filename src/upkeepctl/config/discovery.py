"""Config file discovery and loading.

The walk-up finder locates ``upkeepctl.toml`` the way git finds ``.git/``.
``UPKEEPCTL_CONFIG`` and the ``--config`` flag override discovery.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from upkeepctl.config.models import UpkeepConfig

CONFIG_FILENAME = "upkeepctl.toml"
CONFIG_ENV_VAR = "UPKEEPCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``upkeepctl.toml``.

    ``UPKEEPCTL_CONFIG`` wins when set; it must name an existing file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def load_config(path: Path | None = None, cwd: Path | None = None) -> UpkeepConfig:
    """Load and validate ``upkeepctl.toml``; defaults when none is found."""
    if path is None:
        path = find_config(cwd)
    if path is None:
        return UpkeepConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return UpkeepConfig.model_validate(data)
