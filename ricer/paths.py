"""XDG-style directory resolution for ricer.

Layout::

    $XDG_CONFIG_HOME/ricer/          (default ~/.config/ricer)
        config.yaml                  (or .yml / .json / .toml)
        templates/
            <name>.tmpl

Nothing here creates directories; callers decide what a missing
directory means.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

APP_DIR = "ricer"
TEMPLATES_DIR = "templates"


def config_home(environ: Optional[dict] = None) -> Path:
    """Return the ricer config directory.

    Uses ``XDG_CONFIG_HOME`` if set, otherwise ``$HOME/.config``.  When
    ``HOME`` is unset too, falls back to the current user's home directory.
    """
    env = os.environ if environ is None else environ
    base = env.get("XDG_CONFIG_HOME", "")
    if not base:
        home = env.get("HOME", "")
        if not home:
            home = str(Path.home())
        base = str(Path(home) / ".config")
    return Path(base) / APP_DIR


def templates_dir(home: Optional[Path] = None) -> Path:
    """Return ``<config home>/templates``."""
    root = home if home is not None else config_home()
    return root / TEMPLATES_DIR
