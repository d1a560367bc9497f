"""Config file discovery, loading, and dotted-path lookup.

The config file is read once at startup into a :class:`ConfigStore`.
After that the store is only ever read, so render workers share it
without locking.

Supported formats, tried in this order when searching a directory::

    config.yaml, config.yml, config.json, config.toml
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from ricer.config.models import TemplateSection

logger = logging.getLogger(__name__)

CONFIG_NAME = "config"
SUPPORTED_EXTENSIONS: Tuple[str, ...] = ("yaml", "yml", "json", "toml")

_MISSING = object()


class ConfigLoadError(RuntimeError):
    """Raised when the config file is missing, unreadable, or malformed."""


# ---------------------------------------------------------------------------
# ConfigStore
# ---------------------------------------------------------------------------


class ConfigStore:
    """Read-only hierarchical mapping queried by dotted path.

    Each path segment matches a key exactly when possible, otherwise
    case-insensitively (``Shell.Output`` finds ``shell: {output: ...}``).
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None, *, source: Optional[Path] = None) -> None:
        self._data: Mapping[str, Any] = MappingProxyType(dict(data or {}))
        self.source = source

    def __repr__(self) -> str:
        return f"ConfigStore(source={self.source!r}, keys={sorted(self._data)!r})"

    # ── lookup ──────────────────────────────────────────────────────

    def get(self, key: str, default: Any = None) -> Any:
        """Return the raw value at dotted *key*, or *default*."""
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, Mapping):
                return default
            node = _lookup(node, part)
            if node is _MISSING:
                return default
        return node

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def get_mapping(self, key: str) -> Dict[str, Any]:
        """Return a copy of the mapping at *key*.

        Absent keys and non-mapping values give an empty dict.
        """
        value = self.get(key)
        if isinstance(value, Mapping):
            return dict(value)
        return {}

    def get_string(self, key: str) -> str:
        """Return the scalar at *key* as a string.

        Absent keys, null, mappings and lists give ``""``.  Booleans are
        rendered lowercase (``true`` / ``false``).
        """
        value = self.get(key)
        if value is None or isinstance(value, (Mapping, list, tuple)):
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def section(self, name: str) -> TemplateSection:
        """Build the validated :class:`TemplateSection` for template *name*.

        Raises:
            pydantic.ValidationError: If ``<name>.autoescape`` is not a boolean.
        """
        return TemplateSection.model_validate(
            {
                "vars": self.get_mapping(f"{name}.vars"),
                "output": self.get_string(f"{name}.output"),
                "autoescape": self.get(f"{name}.autoescape", False) or False,
            }
        )


def _lookup(node: Mapping[str, Any], part: str) -> Any:
    if part in node:
        return node[part]
    folded = part.casefold()
    for k, v in node.items():
        if str(k).casefold() == folded:
            return v
    return _MISSING


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def find_config_file(search_dir: Path) -> Optional[Path]:
    """Return the first ``config.<ext>`` in *search_dir*, or ``None``."""
    for ext in SUPPORTED_EXTENSIONS:
        candidate = search_dir / f"{CONFIG_NAME}.{ext}"
        if candidate.is_file():
            return candidate
    return None


def _parse(path: Path, text: str) -> Any:
    suffix = path.suffix.lower().lstrip(".")
    if suffix in ("yaml", "yml"):
        return yaml.safe_load(text)
    if suffix == "json":
        return json.loads(text)
    if suffix == "toml":
        return tomllib.loads(text)
    raise ConfigLoadError(
        f"Unsupported config file type {path.suffix or '(none)'!r} for {path} "
        f"(expected one of: {', '.join(SUPPORTED_EXTENSIONS)})"
    )


def load_config(path: str | Path) -> ConfigStore:
    """Parse the config file at *path* into a :class:`ConfigStore`.

    An empty file loads as an empty store.

    Raises:
        ConfigLoadError: If the file is missing, unreadable, malformed, or
            its top level is not a mapping.
    """
    path = Path(path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read config file {path}: {exc}") from exc

    try:
        raw = _parse(path, text)
    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigLoadError(f"Could not parse config file {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigLoadError(
            f"Config file {path} must contain a mapping at the top level, "
            f"got {type(raw).__name__}"
        )

    logger.debug("Loaded config %s (%d top-level key(s))", path, len(raw))
    return ConfigStore(raw, source=path)


def discover_config(config_path: Optional[str | Path], search_dir: Path) -> ConfigStore:
    """Load *config_path* when given, else search *search_dir*.

    Raises:
        ConfigLoadError: If no config file is found or loading fails.
    """
    if config_path:
        return load_config(config_path)

    found = find_config_file(search_dir)
    if found is None:
        names = ", ".join(f"{CONFIG_NAME}.{ext}" for ext in SUPPORTED_EXTENSIONS)
        raise ConfigLoadError(f"No config file found in {search_dir} (looked for {names})")
    return load_config(found)
