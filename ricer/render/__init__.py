"""Template discovery, rendering, and bounded fan-out."""

from ricer.render.locator import TEMPLATE_SUFFIX, locate_templates, template_name
from ricer.render.renderer import (
    DirectoryCreateError,
    ExecuteError,
    FileCreateError,
    InvalidSectionError,
    MissingOutputError,
    ParseError,
    RenderError,
    RenderJob,
    RenderOutcome,
    build_job,
    load_template,
    render_job,
    render_template_file,
)
from ricer.render.throttle import DEFAULT_CONCURRENCY, Throttle

__all__ = [
    "DEFAULT_CONCURRENCY",
    "DirectoryCreateError",
    "ExecuteError",
    "FileCreateError",
    "InvalidSectionError",
    "MissingOutputError",
    "ParseError",
    "RenderError",
    "RenderJob",
    "RenderOutcome",
    "TEMPLATE_SUFFIX",
    "Throttle",
    "build_job",
    "load_template",
    "locate_templates",
    "render_job",
    "render_template_file",
    "template_name",
]
