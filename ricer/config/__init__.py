"""Configuration loading and dotted-path lookup."""

from ricer.config.models import TemplateSection
from ricer.config.store import (
    CONFIG_NAME,
    SUPPORTED_EXTENSIONS,
    ConfigLoadError,
    ConfigStore,
    discover_config,
    find_config_file,
    load_config,
)

__all__ = [
    "CONFIG_NAME",
    "SUPPORTED_EXTENSIONS",
    "ConfigLoadError",
    "ConfigStore",
    "TemplateSection",
    "discover_config",
    "find_config_file",
    "load_config",
]
