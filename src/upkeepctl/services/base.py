"""BaseService: shared foundation for upkeepctl services.

Every service receives a :class:`Vault` at construction time and reaches
notes only through it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from upkeepctl.domain.content import FrontmatterError
from upkeepctl.domain.history import IdentityProvider, system_username
from upkeepctl.domain.tasks import Task
from upkeepctl.services.result import (
    INVALID_FRONTMATTER,
    NOT_A_TASK,
    NOT_FOUND,
    ServiceResult,
)

if TYPE_CHECKING:
    from upkeepctl.domain.i18n import Locale
    from upkeepctl.infrastructure.vault import Vault

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service classes.

    Usage::

        class StatsService(BaseService):
            def stats(self, note: str) -> ServiceResult:
                found = self._locate_task("stats", note)
                if isinstance(found, ServiceResult):
                    return found
                path, task = found
                ...
    """

    def __init__(self, vault: Vault, *, identity_provider: IdentityProvider | None = None) -> None:
        self._vault = vault
        self._identity_provider = identity_provider

    @property
    def locale(self) -> Locale:
        return self._vault.settings.locale

    @property
    def identity_provider(self) -> IdentityProvider:
        """Who is recorded in history rows: explicit, configured, or OS user."""
        if self._identity_provider is not None:
            return self._identity_provider
        configured = self._vault.settings.history.user.strip()
        if configured:
            return lambda: configured
        return system_username

    def _locate_task(self, op: str, note: str | Path) -> tuple[Path, Task] | ServiceResult:
        """Resolve *note* to a recurring task, or a failed result saying why."""
        try:
            path = self._vault.resolve(note)
        except ValueError as exc:
            return ServiceResult.failure(op, NOT_FOUND, str(exc), path=str(note))
        if not path.is_file():
            return ServiceResult.failure(op, NOT_FOUND, f"Note not found: {note}", path=str(note))

        try:
            task = self._vault.load_task(path)
        except FrontmatterError as exc:
            return ServiceResult.failure(op, INVALID_FRONTMATTER, str(exc), path=str(note))
        except (OSError, UnicodeDecodeError) as exc:
            return ServiceResult.failure(
                op, NOT_FOUND, f"Cannot read {note}: {exc}", path=str(note)
            )

        if task is None:
            tag = self._vault.settings.vault.task_tag
            return ServiceResult.failure(
                op,
                NOT_A_TASK,
                f"{note} is not a recurring task (needs tag {tag!r}, interval and interval_unit)",
                path=str(note),
            )
        logger.debug("Located task %s", task.path)
        return path, task

