"""Template discovery inside the templates directory."""

from __future__ import annotations

from pathlib import Path
from typing import List

TEMPLATE_SUFFIX = ".tmpl"


def locate_templates(templates_dir: Path, suffix: str = TEMPLATE_SUFFIX) -> List[Path]:
    """Return files matching ``*<suffix>`` directly inside *templates_dir*.

    Not recursive.  Sorted by name so dispatch order is stable.  A missing
    directory or no matches yields ``[]``; the caller checks existence.
    """
    return sorted(p for p in Path(templates_dir).glob(f"*{suffix}") if p.is_file())


def template_name(path: Path) -> str:
    """``/x/templates/shell.tmpl`` → ``shell``."""
    return Path(path).stem
