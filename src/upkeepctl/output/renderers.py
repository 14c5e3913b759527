"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a StringIO-backed Console; :func:`render_result`
dispatches on ``result.op`` and returns the rendered text. Unknown ops
fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.console import Group
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from upkeepctl.domain.i18n import Locale, Message, translate
from upkeepctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from upkeepctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    locale: Locale = Locale.EN,
) -> str:
    """Render *result* to a styled string.

    Plain text (no ANSI) when Rich detects no terminal, as inside
    click's CliRunner or a pipe.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op)
        if renderer is None:
            _render_generic(result, console)
        else:
            renderer(result, console, locale=locale)
    else:
        _render_error(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: task paths, one per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["path"]) for item in items if "path" in item)
    if "path" in result.data:
        return str(result.data["path"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="upkeep.ok"), Text(f"  {result.op}", style="upkeep.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="upkeep.key")
    if key == "path":
        v = Text(str(value), style="upkeep.path")
    elif key == "name":
        v = Text(str(value), style="upkeep.title")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _progress(display: dict[str, Any], width: int = 12) -> Table:
    """Progress bar with its percentage, colored by status."""
    percent = float(display.get("progress", 0.0))
    style = str(display.get("progress_style", "upkeep.progress.up_to_date"))
    grid = Table.grid(padding=(0, 1))
    grid.add_row(
        ProgressBar(
            total=100,
            completed=percent,
            width=width,
            complete_style=style,
            finished_style=style,
        ),
        Text(f"{percent:.0f}%", style="dim"),
    )
    return grid


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block with the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="upkeep.error"),
        Text(f"  {result.op}", style="upkeep.op"),
        Text(f": {msg}"),
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Task renderers ────────────────────────────────────────────────────


def _render_task_table(result: ServiceResult, console: Console, *, locale: Locale) -> None:
    """Render ``list_tasks`` as the recurring-task table."""
    data = result.data
    items: list[dict[str, Any]] = data.get("items", [])

    if not items:
        message = Message.NO_TASKS_FILTER if data.get("query") else Message.NO_TASKS
        console.print(Text(translate(message, locale=locale), style="dim"))
        return

    table = Table(
        title=translate(Message.RECURRING_TASKS, locale=locale),
        show_header=True,
        show_lines=False,
        pad_edge=False,
        expand=False,
    )
    table.add_column(translate(Message.TASK, locale=locale), style="upkeep.title")
    table.add_column(translate(Message.STATUS, locale=locale))
    table.add_column(translate(Message.LAST_DONE, locale=locale))
    table.add_column(translate(Message.NEXT_DUE, locale=locale))
    table.add_column(translate(Message.FREQUENCY, locale=locale))
    table.add_column(translate(Message.PROGRESS, locale=locale), no_wrap=True)

    never = translate(Message.NEVER, locale=locale)
    for item in items:
        display = item.get("display", {})
        table.add_row(
            str(item.get("name", "")),
            Text(str(display.get("status", item.get("status", ""))), style=display.get("style", "")),
            str(item.get("last_done") or never),
            str(display.get("due", item.get("next_due") or "")),
            str(display.get("frequency", "")),
            _progress(display, width=10),
        )
    console.print(table)

    total_label = translate(Message.TOTAL_TASKS, locale=locale)
    attention_label = translate(Message.NEEDS_ATTENTION, locale=locale)
    console.print(
        f"\n{data.get('count', len(items))}/{data.get('total', len(items))} {total_label}"
        f"  ·  {attention_label}: {data.get('attention', 0)}"
    )


def _render_status(result: ServiceResult, console: Console, *, locale: Locale) -> None:
    """Render ``status`` as a single task widget."""
    data = result.data
    display = data.get("display", {})
    style = str(display.get("style", ""))

    body = Group(
        Text(str(display.get("status", data.get("status", ""))), style=style),
        Text(str(display.get("summary", "")), style="dim"),
        Text(f"{display.get('frequency', '')} · {display.get('due', '')}"),
        _progress(display, width=30),
    )
    console.print(
        Panel(
            body,
            title=str(data.get("name", "")),
            subtitle=str(display.get("tooltip", "")),
            border_style=style or "dim",
            expand=False,
        )
    )


def _render_complete(result: ServiceResult, console: Console, *, locale: Locale) -> None:
    _status_line(console, result)
    for key in ("path", "name", "previous_last_done", "last_done", "next_due", "status"):
        if key in result.data:
            _field(console, key, result.data[key] or "-")
    if result.data.get("forced"):
        console.print("  [upkeep.warning]forced[/upkeep.warning]")
    if result.data.get("history_row"):
        _field(console, "history", result.data["history_row"])


def _render_stats(result: ServiceResult, console: Console, *, locale: Locale) -> None:
    """Render ``stats`` as a summary panel plus the recorded rows."""
    data = result.data
    summary = Table.grid(padding=(0, 2))
    summary.add_row(
        Text(translate(Message.TOTAL_COMPLETIONS, locale=locale), style="upkeep.key"),
        str(data.get("total_completions", 0)),
    )
    summary.add_row(
        Text(translate(Message.AVG_DAYS_BETWEEN, locale=locale), style="upkeep.key"),
        str(data.get("avg_days_between", 0)),
    )
    summary.add_row(
        Text(translate(Message.ON_TIME_RATE, locale=locale), style="upkeep.key"),
        f"{data.get('on_time_rate', 0)}%",
    )
    console.print(Panel(summary, title=str(data.get("name", "")), expand=False))

    rows: list[dict[str, Any]] = data.get("rows", [])
    if not rows:
        return
    table = Table(
        title=translate(Message.COMPLETION_HISTORY, locale=locale),
        show_header=True,
        pad_edge=False,
        expand=False,
    )
    for label, justify in (
        (Message.DATE, "left"),
        (Message.TIME, "left"),
        (Message.DAYS_SINCE_LAST, "right"),
        (Message.DAYS_SCHEDULED, "right"),
        (Message.USER, "left"),
    ):
        table.add_column(translate(label, locale=locale), justify=justify)
    for row in rows:
        table.add_row(
            str(row["date"]),
            str(row["time"]),
            str(row["days_since_last"]),
            str(row["days_scheduled"]),
            str(row["user"]),
        )
    console.print(table)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":"), default=str))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list_tasks": _render_task_table,
    "status": _render_status,
    "complete": _render_complete,
    "stats": _render_stats,
}
