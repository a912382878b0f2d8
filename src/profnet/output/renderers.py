"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops
fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from profnet.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from profnet.services.result import ServiceResult

    _Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
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

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if "id" in item)
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="net.ok"), Text(f"  {result.op}", style="net.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="net.key")
    if key == "id":
        v = Text(str(value), style="net.id")
    elif key == "status":
        v = Text(str(value), style=style_for_status(value))
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the telemetry span tree (verbose only)."""
    if not result.meta:
        return
    telemetry = result.meta.get("telemetry")
    if telemetry:
        console.print()
        console.print(Text("  meta:", style="dim"))
        _render_span(console, telemetry, indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    line = f"{' ' * indent}{span.get('duration_ms', 0.0):>8.2f}ms  {span.get('name', '?')}"
    annotations = span.get("annotations")
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line, style="dim")
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text("ERROR", style="net.error"),
        Text(f"  {result.op}", style="net.op"),
        Text(f"{code} — "),
        Text(msg),
        sep="",
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Listing renderers ─────────────────────────────────────────────────


def _render_messages(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render inbox or sent listings as a table."""
    items = result.data.get("items", [])
    peer_key, peer_label = ("sender", "From") if result.op == "list_inbox" else ("receiver", "To")

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="net.id", justify="right", no_wrap=True)
    table.add_column(peer_label, style="net.account")
    table.add_column("Message")
    table.add_column("Sent", style="dim")
    if verbose:
        table.add_column("Visibility", style="dim")

    for item in items:
        row: list[Any] = [
            str(item.get("id", "")),
            str(item.get(peer_key, "")),
            Text(str(item.get("body", ""))),
            str(item.get("sent_at", "")),
        ]
        if verbose:
            row.append(str(item.get("visibility", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} messages")
    if verbose:
        _render_meta(console, result)


def _render_accounts(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render friend and incoming-request listings."""
    items = result.data.get("items", [])
    noun = "friends" if result.op == "list_friends" else "pending requests"
    for item in items:
        console.print(Text(f"  {item.get('id', '')}", style="net.account"))
    console.print(f"\n{result.data.get('count', len(items))} {noun}")
    if verbose:
        _render_meta(console, result)


def _render_message(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single message with its body last."""
    _status_line(console, result)
    d = result.data
    for key in ("id", "sender", "receiver", "sent_at"):
        _field(console, key, d.get(key, ""))
    if verbose:
        _field(console, "visibility", d.get("visibility", ""))
    console.print()
    console.print(Text(f"  {d.get('body', '')}"))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, _Renderer] = {
    "list_inbox": _render_messages,
    "list_sent": _render_messages,
    "list_friends": _render_accounts,
    "list_incoming": _render_accounts,
    "get_message": _render_message,
}
