"""Filesystem operations for task notes.

Files are truth: every status is recomputed from note contents on each
read. Pure parsing and rendering live in :mod:`upkeepctl.domain.content`;
this module only does I/O, path resolution, and discovery.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from upkeepctl.domain.content import parse_frontmatter, render_frontmatter

NOTE_SUFFIX = ".md"


def read_note(path: Path) -> tuple[dict[str, Any], str]:
    """Read a markdown note, returning ``(frontmatter, body)``."""
    return parse_frontmatter(path.read_text(encoding="utf-8"))


def write_note(path: Path, frontmatter: dict[str, Any], body: str) -> None:
    """Render frontmatter and body back into *path*."""
    path.write_text(render_frontmatter(frontmatter, body), encoding="utf-8")


def resolve_note_path(vault_root: Path, note: str | Path) -> Path:
    """Resolve *note* (absolute, or relative to the vault) to a file path.

    A missing ``.md`` suffix is added, so ``chores/bike`` finds
    ``chores/bike.md``.

    Raises:
        ValueError: The path escapes the vault root.
    """
    candidate = Path(note)
    if not candidate.is_absolute():
        candidate = vault_root / candidate
    if candidate.suffix != NOTE_SUFFIX and not candidate.exists():
        candidate = candidate.with_name(candidate.name + NOTE_SUFFIX)

    vault_resolved = vault_root.resolve()
    resolved = candidate.resolve()
    if not resolved.is_relative_to(vault_resolved):
        msg = f"Path escapes vault root: {note}"
        raise ValueError(msg)
    return resolved


def find_markdown_files(vault_root: Path, *, skip_dirs: Iterable[str] = ()) -> list[Path]:
    """Every ``.md`` file under *vault_root*, sorted, skipping *skip_dirs*."""
    skipped = frozenset(skip_dirs)
    results: list[Path] = []
    for path in vault_root.rglob(f"*{NOTE_SUFFIX}"):
        if not path.is_file():
            continue
        relative = path.relative_to(vault_root)
        if any(part in skipped for part in relative.parts[:-1]):
            continue
        results.append(path)
    return sorted(results)
