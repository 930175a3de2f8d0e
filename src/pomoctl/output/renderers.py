"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pomoctl.output.console import create_console, get_output, style_for_kind, style_for_state

if TYPE_CHECKING:
    from rich.console import Console

    from pomoctl.services.result import ServiceResult

_KIND_ICONS: dict[str, str] = {"work": "W", "break": "B"}

_CHOICE_HINT = "What next?  pomoctl choose keep-going | take-break | stop"


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

    label = result.data.get("label")
    if label:
        return str(label)
    if "flow" in result.data:
        return str(result.data["flow"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="pomo.ok")
    op = Text(f"  {result.op}", style="pomo.op")
    console.print(Text.assemble(label, op))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pomo.key")
    if key == "state":
        v = Text(str(value), style=style_for_state(str(value)))
    elif key == "kind":
        v = Text(str(value), style=style_for_kind(str(value)))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _flow_strip(items: list[dict[str, Any]]) -> Text:
    """One-line flow visualization: ``[25W] 5B 25W ...`` with the cursor boxed."""
    strip = Text("  ")
    for i, item in enumerate(items):
        if i:
            strip.append(" → ", style="dim")
        token = f"{item['minutes']}{_KIND_ICONS.get(item['kind'], '?')}"
        if item.get("current"):
            strip.append(f"[{token}]", style="pomo.current")
        else:
            strip.append(token, style=style_for_kind(item["kind"]))
    return strip


def _flow_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind")
    table.add_column("Minutes", justify="right")
    table.add_column("")
    for item in items:
        kind = str(item["kind"])
        table.add_row(
            str(item["index"] + 1),
            Text(kind, style=style_for_kind(kind)),
            str(item["minutes"]),
            Text("◀ current", style="pomo.current") if item["current"] else "",
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pomo.error")
    op = Text(f"  {result.op}", style="pomo.op")
    console.print(Text.assemble(label, op, " — ", msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Timer renderers ───────────────────────────────────────────────────


def _render_timer(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render control ops (toggle/start/pause/reset/skip/choose)."""
    d = result.data
    _status_line(console, result)
    _field(console, "timer", d["title"])
    _field(console, "state", d["state"])
    if verbose:
        for key in ("kind", "policy", "flow", "cursor", "completed_cycles", "muted", "volume"):
            _field(console, key, d[key])
    if d["state"] == "awaiting_choice":
        console.print(Text(f"  {_CHOICE_HINT}", style="pomo.warning"))


def _render_status(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the status panel: label, flow strip, counters, sound."""
    d = result.data
    lines = Text()
    lines.append(f"{d['label']}\n", style="pomo.label")
    lines.append("state: ", style="pomo.key")
    lines.append(f"{d['state']}\n", style=style_for_state(d["state"]))
    lines.append("policy: ", style="pomo.key")
    lines.append(f"{d['policy']}\n")
    lines.append("completed: ", style="pomo.key")
    lines.append(f"{d['completed_cycles']}\n")
    lines.append("sound: ", style="pomo.key")
    lines.append("muted" if d["muted"] else f"volume {d['volume']}")

    title = "Time's up!" if d["state"] == "awaiting_choice" else "Pomodoro"
    console.print(Panel(lines, title=title, border_style=style_for_kind(d["kind"]), expand=False))
    console.print(_flow_strip(d.get("items", [])))
    if d["state"] == "awaiting_choice":
        console.print(Text(f"  {_CHOICE_HINT}", style="pomo.warning"))


def _render_sound(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "muted", "yes" if d["muted"] else "no")
    _field(console, "volume", d["volume"])


def _render_ticks(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render tick/run summaries."""
    d = result.data
    _status_line(console, result)
    _field(console, "timer", d["title"])
    _field(console, "state", d["state"])
    _field(console, "ticks", d["ticks"])
    if d["expired"]:
        _field(console, "expired", d["expired"])
    if d["ignored"]:
        _field(console, "ignored", d["ignored"])
    if d.get("interrupted"):
        _field(console, "interrupted", "yes")
    if verbose:
        _field(console, "completed_cycles", d["completed_cycles"])
    if d["state"] == "awaiting_choice":
        console.print(Text(f"  {_CHOICE_HINT}", style="pomo.warning"))


def _render_flow(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render flow_show / flow_set as a table."""
    d = result.data
    _status_line(console, result)
    _field(console, "flow", d["flow"])
    if "label" in d:
        _field(console, "timer", d["label"])
    console.print(_flow_table(d["items"]))
    console.print(f"\n{d['count']} sessions")


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "status": _render_status,
    "toggle": _render_timer,
    "start": _render_timer,
    "pause": _render_timer,
    "reset": _render_timer,
    "skip": _render_timer,
    "choose": _render_timer,
    "sound_mute": _render_sound,
    "sound_unmute": _render_sound,
    "sound_volume": _render_sound,
    "tick": _render_ticks,
    "run": _render_ticks,
    "flow_show": _render_flow,
    "flow_set": _render_flow,
}
