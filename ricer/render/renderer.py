"""Jinja2 renderer — one ``*.tmpl`` file in, one config file out.

For a template ``<name>.tmpl`` the config supplies::

    <name>:
      output: ~/.config/foo/foo.conf   # required
      vars: {...}                      # optional, default {}
      autoescape: false                # optional

Rendering streams into a temporary file next to the destination and
then moves it into place, so a failed render never leaves a truncated
destination behind.  A destination that is a symlink is written through
to its target.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError
from pydantic import ValidationError

from ricer import ui
from ricer.config.store import ConfigStore
from ricer.render.locator import template_name

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class RenderError(Exception):
    """Base class for per-template failures.  Never aborts sibling jobs."""

    stage = "render"

    def __init__(self, message: str, *, template: str, destination: Optional[Path] = None) -> None:
        super().__init__(message)
        self.template = template
        self.destination = destination


class ParseError(RenderError):
    stage = "parse"


class InvalidSectionError(RenderError):
    stage = "config"


class MissingOutputError(RenderError):
    stage = "config"


class DirectoryCreateError(RenderError):
    stage = "mkdir"


class FileCreateError(RenderError):
    stage = "create"


class ExecuteError(RenderError):
    stage = "execute"


# ---------------------------------------------------------------------------
# Job / outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RenderJob:
    """Everything needed to render one template, resolved up front."""

    name: str
    template_path: Path
    output_path: Path
    variables: Dict[str, Any] = field(default_factory=dict)
    autoescape: bool = False


@dataclass
class RenderOutcome:
    """Result of one render attempt: ``error`` is ``None`` on success."""

    template_path: Path
    name: str
    destination: Optional[Path] = None
    error: Optional[RenderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def load_template(template_path: Path, *, autoescape: bool = False) -> Template:
    """Parse *template_path* with a loader rooted at its directory.

    Sibling templates are reachable from ``{% include %}`` / ``{% extends %}``.

    Raises:
        ParseError: If the file cannot be read or has a syntax error.
    """
    loader = FileSystemLoader(str(template_path.parent))
    env = Environment(
        loader=loader,
        undefined=StrictUndefined,
        autoescape=autoescape,
        keep_trailing_newline=True,
    )
    try:
        return env.get_template(template_path.name)
    except (TemplateError, OSError, UnicodeDecodeError) as exc:
        raise ParseError(
            f"Could not parse template {template_path}: {exc}",
            template=template_name(template_path),
        ) from exc


def build_job(template_path: Path, store: ConfigStore) -> RenderJob:
    """Resolve the config section for *template_path* into a :class:`RenderJob`.

    Raises:
        InvalidSectionError: If the section has a malformed optional key.
        MissingOutputError: If ``<name>.output`` is absent or empty.
    """
    template_path = Path(template_path)
    name = template_name(template_path)

    try:
        section = store.section(name)
    except ValidationError as exc:
        raise InvalidSectionError(
            f"Invalid configuration for template {name}: {exc}", template=name
        ) from exc

    if not section.has_output:
        raise MissingOutputError(
            f"You have to define an output for template {name}", template=name
        )
    if "\x00" in section.output:
        raise InvalidSectionError(
            f"Invalid output {section.output!r} for template {name}: contains a NUL byte",
            template=name,
        )

    try:
        output_path = Path(section.output).expanduser()
    except RuntimeError as exc:
        # ~unknownuser/... cannot be expanded
        raise InvalidSectionError(
            f"Invalid output {section.output!r} for template {name}: {exc}",
            template=name,
        ) from exc

    return RenderJob(
        name=name,
        template_path=template_path,
        output_path=output_path,
        variables=section.vars,
        autoescape=section.autoescape,
    )


def _write_target(path: Path) -> Path:
    """Follow a symlinked destination so the link itself survives."""
    if path.is_symlink():
        return path.resolve()
    return path


def render_job(job: RenderJob, template: Optional[Template] = None) -> Path:
    """Render *job* to its destination and return the path written.

    Raises:
        ParseError: If the template cannot be parsed.
        DirectoryCreateError: If the destination directory cannot be created.
        FileCreateError: If the destination cannot be created or written.
        ExecuteError: If template execution fails; the destination is untouched.
    """
    if template is None:
        template = load_template(job.template_path, autoescape=job.autoescape)

    dest = job.output_path

    try:
        target = _write_target(dest)
        target.parent.mkdir(parents=True, exist_ok=True)
    except (OSError, ValueError) as exc:
        raise DirectoryCreateError(
            f"Could not create directory for {dest} for template {job.name}: {exc}",
            template=job.name,
            destination=dest,
        ) from exc

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=str(target.parent))
    except (OSError, ValueError) as exc:
        raise FileCreateError(
            f"Could not create {dest} for template {job.name}: {exc}",
            template=job.name,
            destination=dest,
        ) from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            try:
                for chunk in template.generate(job.variables):
                    fh.write(chunk)
            except OSError as exc:
                raise FileCreateError(
                    f"Could not write {dest} for template {job.name}: {exc}",
                    template=job.name,
                    destination=dest,
                ) from exc
            except Exception as exc:
                raise ExecuteError(
                    f"Could not execute template {job.name} for {dest}: {exc}",
                    template=job.name,
                    destination=dest,
                ) from exc
            fh.flush()
            os.fsync(fh.fileno())

        mode = target.stat().st_mode & 0o7777 if target.exists() else DEFAULT_FILE_MODE
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
    except OSError as exc:
        raise FileCreateError(
            f"Could not create {dest} for template {job.name}: {exc}",
            template=job.name,
            destination=dest,
        ) from exc
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)

    return dest


def render_template_file(template_path: Path, store: ConfigStore) -> RenderOutcome:
    """Run one template end to end; failures come back on the outcome.

    This is the job boundary: :class:`RenderError` is reported here and
    never propagates to the dispatcher.
    """
    template_path = Path(template_path)
    name = template_name(template_path)
    outcome = RenderOutcome(template_path=template_path, name=name)

    try:
        job = build_job(template_path, store)
        template = load_template(template_path, autoescape=job.autoescape)
        outcome.destination = job.output_path
        logger.debug("Rendering %s → %s (%d var(s))", template_path, job.output_path, len(job.variables))
        render_job(job, template)
    except RenderError as exc:
        logger.debug("Template %s failed at %s stage", template_path, exc.stage, exc_info=True)
        ui.fail(str(exc))
        outcome.error = exc
        return outcome

    ui.ok(f"Creating {job.output_path} from template {name}.")
    return outcome
