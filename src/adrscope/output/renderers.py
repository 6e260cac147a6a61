"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from adrscope.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from adrscope.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal, which is
    the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        if result.op in _FAILURE_BODY_RENDERERS and result.data:
            _FAILURE_BODY_RENDERERS[result.op](result, console, verbose=verbose)
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "adr.ok"), (f"  {result.op}", "adr.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="adr.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="adr.id")
    elif key.endswith("path") or key.endswith("_dir"):
        v = Text(str(value), style="adr.path")
    elif key == "title":
        v = Text(str(value), style="adr.title")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _status_text(status: str) -> Text:
    return Text(status, style=style_for_status(status))


def _raw(console: Console, content: str) -> None:
    """Print pre-rendered content untouched (no markup, no wrapping)."""
    console.print(content.rstrip("\n"), markup=False, highlight=False, soft_wrap=True)


def _render_parse_errors(console: Console, result: ServiceResult) -> None:
    for err in result.data.get("parse_errors", []):
        console.print(
            Text.assemble(("  unparseable: ", "adr.warning"), f"{err['path']}: {err['reason']}")
        )


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}", markup=False)


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

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "adr.error"), (f"  {result.op}", "adr.op"), f" — {msg}")
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}", markup=False)


# ── Operation renderers ───────────────────────────────────────────────


def _render_generate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "output_path", data.get("output_path", ""))
    _field(console, "records", data.get("record_count", 0))
    _field(console, "source_dir", data.get("source_dir", ""))
    if verbose:
        _field(console, "edges", data.get("edge_count", 0))
        _field(console, "dangling", data.get("dangling_count", 0))
    _render_parse_errors(console, result)
    if verbose:
        _render_meta(console, result)


def _render_wiki(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "output_dir", data.get("output_dir", ""))
    _field(console, "records", data.get("record_count", 0))
    _field(console, "pages", ", ".join(data.get("pages", [])))
    if verbose:
        for name in data.get("files_created", []):
            console.print(f"    {name}", markup=False)
    _render_parse_errors(console, result)
    if verbose:
        _render_meta(console, result)


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Issues grouped by document, then a one-line summary."""
    data = result.data
    issues: list[dict[str, Any]] = data.get("issues", [])
    severity_styles = {"error": "adr.error", "warning": "adr.warning"}

    if result.ok:
        _status_line(console, result)
    _field(console, "documents", data.get("document_count", 0))
    if verbose:
        _field(console, "rules", ", ".join(data.get("rules", [])))

    by_path: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_path.setdefault(str(issue.get("path", "?")), []).append(issue)

    for path, doc_issues in by_path.items():
        console.print()
        console.print(Text(path, style="bold"))
        for issue in doc_issues:
            sev = str(issue.get("severity", "warning"))
            line = Text("  ")
            line.append(sev, style=severity_styles.get(sev, ""))
            line.append(f": {issue.get('message', '')} ")
            line.append(f"[{issue.get('rule', '')}]", style="dim")
            console.print(line)

    _render_parse_errors(console, result)
    errors = data.get("error_count", 0)
    warnings = data.get("warning_count", 0)
    console.print()
    summary = Text(f"{errors} errors, {warnings} warnings")
    if data.get("strict"):
        summary.append(" (strict)", style="dim")
    console.print(summary)
    if verbose and result.ok:
        _render_meta(console, result)


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    if data.get("format") == "json":
        _raw(console, json.dumps(data.get("statistics", {}), indent=2))
    else:
        _raw(console, str(data.get("content", "")))
    if verbose:
        _render_meta(console, result)


def _render_query(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    items: list[dict[str, Any]] = data.get("items", [])
    console.print(Text(str(data.get("label", "")), style="dim"))

    if not items:
        console.print(str(data.get("message", "")), markup=False)
    else:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("ID", style="adr.id", no_wrap=True)
        table.add_column("Title", style="adr.title")
        table.add_column("Status")
        table.add_column("Category")
        table.add_column("Created", style="dim")
        if verbose:
            table.add_column("Author")
            table.add_column("Updated", style="dim")
        for item in items:
            row: list[str | Text] = [
                str(item.get("id", "")),
                str(item.get("title", "")),
                _status_text(str(item.get("status", ""))),
                str(item.get("category", "")),
                str(item.get("created", "")),
            ]
            if verbose:
                row += [str(item.get("author", "")), str(item.get("updated", ""))]
            table.add_row(*row)
        console.print(table)

    selected = data.get("selected")
    if selected:
        _render_selected(console, selected, total=int(data.get("count", 0)))
    if verbose:
        _render_meta(console, result)


def _render_selected(console: Console, selected: dict[str, Any], *, total: int) -> None:
    console.print()
    header = Text()
    header.append(str(selected.get("title", "")), style="adr.title")
    header.append("  ")
    header.append_text(_status_text(str(selected.get("status", ""))))
    header.append(f"  ({selected.get('position', 0)} of {total})", style="dim")
    console.print(header)
    for key in ("id", "category", "author", "created", "updated", "description"):
        if selected.get(key):
            _field(console, key, selected[key])
    if selected.get("tags"):
        _field(console, "tags", ", ".join(selected["tags"]))
    if selected.get("related"):
        _field(console, "related", ", ".join(selected["related"]))
    nav = []
    if selected.get("prev"):
        nav.append(f"prev: {selected['prev']}")
    if selected.get("next"):
        nav.append(f"next: {selected['next']}")
    if nav:
        console.print(Text("  " + "  ".join(nav), style="dim"))
    body = str(selected.get("body", "")).strip()
    if body:
        console.print()
        _raw(console, body)


def _render_graph(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Graph export summary (content itself goes straight to stdout or a file)."""
    data = result.data
    _status_line(console, result)
    for key in ("format", "output_file", "node_count", "edge_count"):
        if key in data:
            _field(console, key, data[key])
    dangling: list[dict[str, Any]] = data.get("dangling", [])
    if dangling:
        console.print(Text(f"  dangling references: {len(dangling)}", style="adr.warning"))
        for ref in dangling:
            console.print(f"    {ref['source']} -> {ref['reference']}", markup=False)
    asymmetric: list[dict[str, Any]] = data.get("asymmetric", [])
    if asymmetric:
        console.print(Text(f"  one-way relationships: {len(asymmetric)}", style="dim"))
        for edge in asymmetric:
            console.print(f"    {edge['source']} -> {edge['target']}", markup=False)
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


# ── Dispatch tables ───────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "generate": _render_generate,
    "wiki": _render_wiki,
    "validate": _render_validate,
    "stats": _render_stats,
    "query": _render_query,
    "graph": _render_graph,
}

# Failed results whose data is still worth showing above the error line.
_FAILURE_BODY_RENDERERS: dict[str, Any] = {
    "validate": _render_validate,
}
