from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .pattern import Pattern


class OutputFormatConfig(BaseModel):
    """Configure how parsed lines are rendered.

    Without a format every parsed line is written as one JSON object.
    """
    format: str | None = Field(default=None, description="Jinja2 template for emitted lines")


class Config(BaseModel):
    """Top-level configuration for a kvsplit run loaded from YAML."""
    description: str | None = Field(default=None, description="Optional description of this config file")
    pattern: str | None = Field(default=None, description="Template with %{key} and %{val} markers")
    field_split: list[str] | None = Field(default=None, description="Literal field separators")
    value_split: list[str] | None = Field(default=None, description="Literal key/value separators")
    target: str | None = Field(default=None, description="Nest the parsed pairs under this key")
    output: OutputFormatConfig = Field(default_factory=OutputFormatConfig)
    unmatched: Literal["pass", "skip"] = Field(default="pass")

    @model_validator(mode="after")
    def _validate_pattern_source(self) -> Config:
        if self.pattern is not None and (self.field_split is not None or self.value_split is not None):
            raise ValueError("'pattern' cannot be combined with 'field_split' or 'value_split'")
        return self

    def compile_pattern(self) -> Pattern:
        """Build the Pattern described by this config.

        Raises a KvError subclass when the separators are invalid.
        """
        if self.pattern is not None:
            return Pattern.compile(self.pattern)
        if self.field_split is not None or self.value_split is not None:
            return Pattern.from_separators(self.field_split or (), self.value_split or ())
        return Pattern.default()


def load_config(path: str | Path) -> Config:
    """Load YAML config from 'path' and validate into a Config model."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        # Re-raise with a cleaner message for CLI users
        raise ValueError(str(e))
