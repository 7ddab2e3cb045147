"""Configuration models for reference generation."""
from __future__ import annotations

import hashlib
import os
from typing import Any, Dict, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

_ENV_PREFIX = "PBXREF_"


class GeneratorSettings(BaseModel):
    """Settings that control how permanent references are composed."""

    separator: str = Field(default="-", description="String joining the elements of a seed chain")
    algorithm: str = Field(default="md5", description="hashlib algorithm applied to the joined seed chain")
    uppercase: bool = Field(default=True, description="Render digests as uppercase hex")
    strict: bool = Field(
        default=False,
        description="If True a pass fails when any object is left with a temporary reference.",
    )

    model_config = {"frozen": True}

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, value: str) -> str:
        name = value.strip().lower()
        if name not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported hash algorithm: {value}")
        if name.startswith("shake_"):
            raise ValueError("Variable length digests are not supported")
        return name


DEFAULT_SETTINGS = GeneratorSettings()


def build_settings_from_dict(raw: Mapping[str, Any]) -> GeneratorSettings:
    """Build :class:`GeneratorSettings` from a plain mapping."""

    try:
        return GeneratorSettings.model_validate(dict(raw))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid generator settings: {exc}") from exc


def settings_from_env(environ: Mapping[str, str] | None = None) -> GeneratorSettings:
    """Read ``PBXREF_*`` variables (e.g. ``PBXREF_ALGORITHM``) from ``environ``.

    Defaults to the process environment.
    """

    environ = os.environ if environ is None else environ
    raw: Dict[str, Any] = {}
    for field_name in GeneratorSettings.model_fields:
        key = f"{_ENV_PREFIX}{field_name.upper()}"
        if key in environ:
            raw[field_name] = environ[key]
    return build_settings_from_dict(raw)


__all__ = [
    "DEFAULT_SETTINGS",
    "GeneratorSettings",
    "build_settings_from_dict",
    "settings_from_env",
]
