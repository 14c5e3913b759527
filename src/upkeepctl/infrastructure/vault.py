"""Vault: the task source and note storage handed to every service.

The vault is a directory of markdown notes. Recurring tasks are the
notes whose frontmatter carries the configured task tag (or a matching
``type``) together with ``interval`` and ``interval_unit``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from upkeepctl.domain.content import FrontmatterError, parse_frontmatter
from upkeepctl.domain.tasks import Task, task_from_frontmatter
from upkeepctl.infrastructure.filesystem import find_markdown_files, resolve_note_path

if TYPE_CHECKING:
    from collections.abc import Iterator

    from upkeepctl.config.settings import UpkeepSettings

logger = logging.getLogger(__name__)


class Vault:
    """File-backed access to the task notes under one root directory."""

    def __init__(self, settings: UpkeepSettings) -> None:
        self._settings = settings

    @property
    def root(self) -> Path:
        """The vault root directory."""
        return self._settings.vault_root

    @property
    def settings(self) -> UpkeepSettings:
        return self._settings

    # -- paths --

    def resolve(self, note: str | Path) -> Path:
        """Absolute path of *note*; raises ``ValueError`` outside the vault."""
        return resolve_note_path(self.root, note)

    def relative(self, path: Path) -> str:
        """Vault-relative POSIX path used as a task's identity."""
        try:
            return path.resolve().relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return path.as_posix()

    def find_notes(self) -> list[Path]:
        return find_markdown_files(self.root, skip_dirs=self._settings.vault.skip_dirs)

    # -- text storage --

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    # -- task source --

    def task_from(self, path: Path, frontmatter: dict[str, Any]) -> Task | None:
        """Build the task for *path*, filling config defaults."""
        task = task_from_frontmatter(
            self.relative(path),
            frontmatter,
            task_tag=self._settings.vault.task_tag,
        )
        if task is not None and task.complete_early_days is None:
            default = self._settings.tasks.default_complete_early_days
            task = task.model_copy(update={"complete_early_days": default})
        return task

    def load_task(self, path: Path) -> Task | None:
        """Read *path* and return its task, or ``None`` for other notes.

        Raises:
            FrontmatterError: The note's frontmatter cannot be parsed.
            OSError: The note cannot be read.
        """
        frontmatter, _ = parse_frontmatter(self.read_text(path))
        return self.task_from(path, frontmatter)

    def iter_tasks(self) -> Iterator[Task]:
        """Every recurring task in the vault, in path order.

        Notes that cannot be read or parsed are skipped with a warning.
        """
        for path in self.find_notes():
            try:
                task = self.load_task(path)
            except (FrontmatterError, OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping unreadable note %s: %s", self.relative(path), exc)
                continue
            if task is not None:
                yield task
