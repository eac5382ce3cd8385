"""
Validator Settings
==================
One immutable settings object, built once and handed to the container
walker, the rendition checker and the archive extractor.

Settings files are YAML::

    locale: de
    strict: true
    max_compression_ratio: 100
    max_entry_size: 104857600
    pdfa_error_as_warning: "yes"

Example::

    from vdi2770.config import load_settings

    settings = load_settings("vdi2770.yaml", strict=False)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError


class ValidatorSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    locale: str = Field("en", description="Message language (en, de)")
    strict: bool = Field(True, description="Case-sensitive vocabulary checks, no type fallback")

    # archive screening, -1 disables a limit
    max_compression_ratio: int = Field(-1, ge=-1)
    max_entry_size: int = Field(-1, ge=-1, description="Bytes")
    extract_nested: bool = True
    max_depth: int | None = Field(None, ge=0, description="None means unbounded")

    # PDF/A
    pdfa_error_as_warning: bool = False

    # report presentation
    report_author: str | None = None
    report_logo: str | None = None
    report_color: str = "blue"

    @field_validator("pdfa_error_as_warning", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes")
        return value

    @field_validator("locale")
    @classmethod
    def _locale(cls, value: str) -> str:
        if not value:
            raise ValueError("locale must not be empty")
        return value.replace("_", "-").split("-")[0].lower()

    @classmethod
    def for_locale(cls, locale: str) -> "ValidatorSettings":
        """Shared default settings for *locale*."""
        return _default_settings(locale)


@lru_cache(maxsize=None)
def _default_settings(locale: str) -> ValidatorSettings:
    return ValidatorSettings(locale=locale)


def load_settings(path: str | Path | None = None, **overrides: Any) -> ValidatorSettings:
    """Read settings from a YAML file (optional) and apply keyword overrides."""
    data: dict[str, Any] = {}
    if path is not None:
        try:
            with open(path, encoding="utf-8") as fh:
                loaded = yaml.safe_load(fh) or {}
        except OSError as e:
            raise ConfigurationError(f"Cannot read settings file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Settings file {path} must contain a mapping")
        data.update(loaded)
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return ValidatorSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
