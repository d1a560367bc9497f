"""CLI entry point for ricer.

Usage::

    ricer                      # uses ~/.config/ricer/config.{yaml,yml,json,toml}
    ricer -c ~/dotfiles/ricer.yaml
    ricer --strict --verbose
    python -m ricer --help
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import typer

from ricer import __version__

app = typer.Typer(
    name="ricer",
    help="Generate configuration files from templates.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ricer version {__version__}")
        raise typer.Exit()


@app.command()
def render(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="(optional) the configuration file to use.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 3 when any template fails to render.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Render every template in ~/.config/ricer/templates.

    Environment variables:
      XDG_CONFIG_HOME   Base config directory (default: ~/.config).
    """
    from ricer.workflow.materialize import run_materialize

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    rc = run_materialize(config, strict=strict)
    raise typer.Exit(rc)


# ── Entry point ──────────────────────────────────────────────────────────────


def main() -> int:
    """Run the CLI and return an exit code."""
    try:
        app()
        return 0
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
