"""Adapt a ServiceResult to the requested output mode.

- ``--json``: the full result as JSON
- ``--quiet``: task paths only
- default: Rich rendering via :mod:`upkeepctl.output.renderers`
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from upkeepctl.domain.i18n import Locale
from upkeepctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from upkeepctl.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output flags, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    locale: Locale = Locale.EN


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format *result* for display.

    When *settings* is given it wins over the bare *json_output* flag.
    """
    if settings is None:
        settings = OutputSettings(json_output=json_output)

    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose, locale=settings.locale)
