"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.text import Text

from handlerdoc.output.console import create_console, get_output, style_for_type

if TYPE_CHECKING:
    from rich.console import Console

    from handlerdoc.services.result import ServiceResult

Renderer = Callable[..., None]


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
    """Render minimal output for ``--quiet`` mode: the slug, or the error."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    slug = result.data.get("command_slug")
    if slug:
        return str(slug)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text.assemble(("OK", "hd.ok"), (f"  {result.op}", "hd.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="hd.key")
    if key.endswith("_class"):
        v = Text(str(value), style="hd.class")
    elif key == "type":
        v = Text(str(value), style=style_for_type(str(value)))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


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
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "hd.error"), (f"  {result.op}", "hd.op"), " — ", msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Definition renderers ──────────────────────────────────────────────


def _render_definition(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a definition record as a panel: signature, returns, description."""
    d = result.data
    definition_type = str(d.get("type", ""))

    lines: list[Text] = [
        Text.assemble(("type: ", "hd.key"), (definition_type, style_for_type(definition_type))),
        Text.assemble(("domain: ", "hd.key"), str(d.get("domain") or "-")),
        Text.assemble(("slug: ", "hd.key"), str(d.get("command_slug", ""))),
        Text.assemble(("handler: ", "hd.key"), (str(d.get("handler_class", "")), "hd.class")),
    ]
    for interface in d.get("handler_interfaces", []):
        lines.append(Text.assemble(("  implements ", "hd.key"), interface))

    params = d.get("command_constructor_params", [])
    lines.append(Text("parameters:", style="hd.key"))
    if params:
        lines.extend(Text(f"  {p}", style="hd.param") for p in params)
    else:
        lines.append(Text("  (none)", style="dim"))
    lines.append(Text.assemble(("returns: ", "hd.key"), (str(d.get("return_type")), "hd.return")))

    description = d.get("description")
    if description:
        lines.append(Text(""))
        lines.append(Text(str(description)))

    body = Text("\n").join(lines)
    title = str(d.get("command_class", d.get("simple_command_class", "?")))
    console.print(
        Panel(body, title=title, border_style=style_for_type(definition_type) or "dim", expand=False)
    )
    if verbose:
        _render_meta(console, result)


def _render_classification(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    for key in ("command_class", "type", "domain", "simple_command_class", "command_slug"):
        if key in result.data:
            _field(console, key, result.data[key])
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

_OP_RENDERERS: dict[str, Renderer] = {
    "describe": _render_definition,
    "classify": _render_classification,
}
