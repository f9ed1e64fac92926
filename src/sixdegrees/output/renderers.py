"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from sixdegrees.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from sixdegrees.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    path = result.data.get("path")
    if isinstance(path, list):
        return " ".join(str(pid) for pid in path)

    connections = result.data.get("connections")
    if isinstance(connections, list):
        return "\n".join(
            f"{c['from_person_id']} {c['work_id'] if c['work_id'] is not None else '-'} "
            f"{c['to_person_id']}"
            for c in connections
        )

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="six.ok")
    op = Text(f"  {result.op}", style="six.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="six.key")
    if key.endswith("_id"):
        v = Text(str(value), style="six.id")
    elif key == "degree":
        v = Text(str(value), style="six.degree")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: ", Text(str(v)), sep="")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _person_label(person_id: int, name: str | None) -> str:
    if name:
        return f"[six.person]{escape(name)}[/six.person] ([six.id]{person_id}[/six.id])"
    return f"[six.id]{person_id}[/six.id]"


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="six.error")
    op = Text(f"  {result.op}", style="six.op")
    code = Text(f" [{err.code}]" if err else "", style="dim")
    console.print(label, op, code, Text(" — "), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: ", Text(str(v)), sep="")


# ── Path renderers ────────────────────────────────────────────────────


def _render_path(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a shortest path as an ID chain."""
    d = result.data
    _status_line(console, result)
    _field(console, "degree", d["degree"])
    _field(console, "cached", d["cached"])
    chain = " → ".join(f"[six.id]{pid}[/six.id]" for pid in d["path"])
    console.print(f"  {chain}")
    if verbose:
        _render_meta(console, result)


def _render_connections(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render an enriched path as a hop table."""
    d = result.data
    _status_line(console, result)
    _field(console, "degree", d["degree"])
    _field(console, "cached", d["cached"])

    connections: list[dict[str, Any]] = d.get("connections", [])
    if not connections:
        console.print("  Same person — no connections to show.")
    else:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("From")
        table.add_column("Work", style="six.work")
        table.add_column("To")
        for step, conn in enumerate(connections, start=1):
            title = escape(conn.get("work_title") or "") or (
                str(conn["work_id"]) if conn["work_id"] is not None else "?"
            )
            if conn.get("work_year"):
                title = f"{title} ({conn['work_year']})"
            table.add_row(
                str(step),
                _person_label(conn["from_person_id"], conn.get("from_name")),
                title,
                _person_label(conn["to_person_id"], conn.get("to_name")),
            )
        console.print(table)

    if verbose:
        _render_meta(console, result)


# ── Batch / maintenance renderers ─────────────────────────────────────


def _render_warmup(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render warm-up counters."""
    d = result.data
    _status_line(console, result)
    for key in (
        "cohort_size",
        "pairs_total",
        "pairs_done",
        "computed",
        "cache_hits",
        "not_found",
        "failed",
    ):
        _field(console, key, d[key])
    if d.get("cancelled"):
        console.print(Text("  cancelled before completion", style="six.warning"))
    if verbose:
        _field(console, "cohort", ", ".join(str(pid) for pid in d.get("cohort", [])))
        _render_meta(console, result)


def _render_cache_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render cache row counts with a per-degree breakdown."""
    d = result.data
    _status_line(console, result)
    for key in ("total", "fresh", "expired", "ttl_days", "normalize_pairs"):
        _field(console, key, d[key])

    by_degree: dict[Any, int] = d.get("by_degree", {})
    if by_degree:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Degree", justify="right", style="six.degree")
        table.add_column("Fresh paths", justify="right")
        for degree, count in sorted(by_degree.items(), key=lambda kv: int(kv[0])):
            table.add_row(str(degree), str(count))
        console.print(table)
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "find_shortest_path": _render_path,
    "find_path_with_movies": _render_connections,
    "warm_cache": _render_warmup,
    "cache_stats": _render_cache_stats,
    "cache_purge": _render_generic,
    "ingest": _render_generic,
    "init_workspace": _render_generic,
}
