"""Frontmatter parsing and rendering for task notes.

Notes are edited in place, so rendering keeps the user's key order,
comments, and quoting wherever ruamel.yaml's round-trip mode can.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

_FRONTMATTER_DELIMITER = "---"


class FrontmatterError(ValueError):
    """Raised when a frontmatter block exists but is not valid YAML mapping."""


def _new_yaml() -> YAML:
    """Round-trip YAML instance; one per call since a failed dump leaves it unusable."""
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.width = 4096
    # Obsidian indents list items under their key.
    y.indent(mapping=2, sequence=4, offset=2)
    return y


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Split *content* into ``(yaml_block, body)``.

    Expects ``---`` on the first line; the next ``---`` line closes the
    block. Returns ``(None, content)`` when there is no frontmatter.
    Handles both ``\\n`` and ``\\r\\n`` line endings.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return None, content

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1 :])
    return None, content


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter and body from markdown *content*.

    Returns ``({}, content)`` when the note has no frontmatter.

    Raises:
        FrontmatterError: The block is not valid YAML or not a mapping.
    """
    yaml_block, body = split_frontmatter(content)
    if yaml_block is None:
        return {}, content

    try:
        fm = _new_yaml().load(yaml_block)
    except YAMLError as exc:
        msg = f"Invalid frontmatter: {exc}"
        raise FrontmatterError(msg) from exc

    if fm is None:
        return {}, body
    if not isinstance(fm, dict):
        msg = "Frontmatter must be a mapping"
        raise FrontmatterError(msg)
    return fm, body


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render a frontmatter mapping and body back into markdown.

    Keys keep their existing order. An empty mapping renders an empty block.
    """
    buf = StringIO()
    if frontmatter:
        _new_yaml().dump(frontmatter, buf)
    yaml_text = buf.getvalue()

    return f"{_FRONTMATTER_DELIMITER}\n{yaml_text}{_FRONTMATTER_DELIMITER}\n{body}"
