"""Orchestrator for a ricer run.

Linear, no retries::

    LoadConfig → LocateTemplatesDir → LocateTemplateFiles → DispatchAll → JoinAll

* A config that cannot be loaded is fatal: nothing is rendered.
* A missing templates directory stops the run with guidance, exit 0.
* Per-template failures are reported and never abort sibling renders.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ricer import ui
from ricer.config.store import ConfigLoadError, ConfigStore, discover_config
from ricer.paths import config_home as default_config_home
from ricer.paths import templates_dir as templates_dir_for
from ricer.render.locator import locate_templates, template_name
from ricer.render.renderer import RenderError, RenderOutcome, render_template_file
from ricer.render.throttle import DEFAULT_CONCURRENCY, Throttle

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_FAILURE = 1
EXIT_RENDER_FAILURE = 3


@dataclass
class RunSummary:
    """Aggregate of every render outcome in one run."""

    outcomes: List[RenderOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> List[RenderOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[RenderOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def has_failures(self) -> bool:
        return any(not o.ok for o in self.outcomes)


def _outcome(path: Path, future: Future) -> RenderOutcome:
    """Unwrap *future*; an escaped exception becomes a failed outcome."""
    exc = future.exception()
    if exc is None:
        return future.result()

    name = template_name(path)
    logger.debug("Template %s failed outside the render steps", path, exc_info=exc)
    error = RenderError(f"Could not render template {name}: {exc}", template=name)
    ui.fail(str(error))
    return RenderOutcome(template_path=path, name=name, error=error)


def materialize(
    store: ConfigStore,
    templates_dir: Path,
    *,
    limit: int = DEFAULT_CONCURRENCY,
) -> RunSummary:
    """Render every template in *templates_dir* using *store*.

    Dispatch blocks while *limit* renders are in flight.  Returns once
    every render has finished.
    """
    files = locate_templates(templates_dir)
    logger.debug("Found %d template(s) in %s", len(files), templates_dir)

    with Throttle(limit) as throttle:
        for path in files:
            throttle.submit(render_template_file, path, store)

    summary = RunSummary(
        outcomes=[_outcome(path, future) for path, future in zip(files, throttle.futures)]
    )
    logger.debug(
        "Run finished: %d succeeded, %d failed",
        len(summary.succeeded),
        len(summary.failed),
    )
    return summary


def run_materialize(
    config_path: Optional[str | Path] = None,
    *,
    config_home: Optional[Path] = None,
    strict: bool = False,
) -> int:
    """Load config, render all templates, and return an exit code.

    Args:
        config_path: Explicit config file.  When ``None``, ``config.<ext>``
            is searched for in *config_home*.
        config_home: Override for the ricer config directory (default
            ``$XDG_CONFIG_HOME/ricer``).
        strict: Return :data:`EXIT_RENDER_FAILURE` if any template failed.

    Returns:
        ``EXIT_SUCCESS``, ``EXIT_CONFIG_FAILURE`` or ``EXIT_RENDER_FAILURE``.
    """
    home = config_home if config_home is not None else default_config_home()

    try:
        store = discover_config(config_path, home)
    except ConfigLoadError as exc:
        logger.debug("Config load failed", exc_info=True)
        ui.error_msg(str(exc))
        return EXIT_CONFIG_FAILURE

    tmpl_dir = templates_dir_for(home)
    if not tmpl_dir.is_dir():
        ui.warn(f"Templates directory does not exist, please create {tmpl_dir}")
        return EXIT_SUCCESS

    summary = materialize(store, tmpl_dir)
    if summary.total:
        ui.info(f"Rendered {len(summary.succeeded)} of {summary.total} template(s)")

    if strict and summary.has_failures:
        return EXIT_RENDER_FAILURE
    return EXIT_SUCCESS
