"""Pydantic models for a template's config section.

A section lives under the template name in the config file::

    shell:
      output: ~/.shellrc
      autoescape: false
      vars:
        editor: vim
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator


class TemplateSection(BaseModel):
    """Validated ``<name>.*`` keys for one template.

    ``output`` is the only mandatory field.  It is kept as a string so an
    empty value can be reported as a missing output by the renderer.
    """

    vars: Dict[str, Any] = Field(default_factory=dict)
    output: str = Field(default="")
    autoescape: bool = Field(default=False)

    @field_validator("vars", mode="before")
    @classmethod
    def _coerce_vars(cls, value: Any) -> Any:
        """Non-mapping ``vars`` (null, scalar, list) → empty mapping."""
        if isinstance(value, dict):
            return value
        return {}

    @field_validator("output", mode="before")
    @classmethod
    def _coerce_output(cls, value: Any) -> Any:
        """Stringify scalars; mappings, lists and null → ``""``."""
        if value is None or isinstance(value, (dict, list, tuple)):
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    @property
    def has_output(self) -> bool:
        return bool(self.output.strip())
