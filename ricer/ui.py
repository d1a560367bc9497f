"""Colorized console output for ricer runs.

Thin wrapper around :mod:`rich` that degrades gracefully when stdout
is not a TTY (e.g. piped, cron, a login hook).  All user-facing status
messages should flow through this module; ``logger.*`` calls are kept
for diagnostics.

Render workers call these helpers concurrently.  ``Console.print`` holds
the console lock for the whole call, so lines from different templates
may interleave but never mix within a line.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# Shared console — auto-detects TTY; force_terminal=None lets Rich decide.
console = Console(stderr=False, force_terminal=None)

# ── Symbols ────────────────────────────────────────────────────────────────

_PASS = "[bold green]✓[/]"
_FAIL = "[bold red]✗[/]"
_WARN = "[bold yellow]⚠[/]"
_DOT = "[dim]·[/]"

# ── Status lines ───────────────────────────────────────────────────────────
# Messages carry user paths: escape markup, never wrap.


def ok(msg: str) -> None:
    """Green checkmark + message."""
    console.print(f"  {_PASS} {escape(msg)}", highlight=False, soft_wrap=True)


def fail(msg: str) -> None:
    """Red cross + message."""
    console.print(f"  {_FAIL} [red]{escape(msg)}[/]", highlight=False, soft_wrap=True)


def warn(msg: str) -> None:
    """Yellow warning + message."""
    console.print(f"  {_WARN} [yellow]{escape(msg)}[/]", highlight=False, soft_wrap=True)


def info(msg: str) -> None:
    """Dim dot + informational message."""
    console.print(f"  {_DOT} [dim]{escape(msg)}[/]", highlight=False, soft_wrap=True)


def error_msg(msg: str) -> None:
    """Bold red error message (not indented)."""
    console.print(f"[bold red]ERROR:[/] {escape(msg)}", highlight=False, soft_wrap=True)
