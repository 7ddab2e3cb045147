"""Deterministic reference generation for Xcode-style project graphs."""

from .config import GeneratorSettings, settings_from_env
from .exceptions import (
    ConfigurationError,
    ObjectLookupError,
    PBXRefError,
    TemporaryReferenceError,
)
from .generator import GenerationResult, ReferenceGenerator, generate_references
from .graph import ObjectGraph
from .identifiers import compose
from .reference import Reference

__all__ = [
    "ConfigurationError",
    "GenerationResult",
    "GeneratorSettings",
    "ObjectGraph",
    "ObjectLookupError",
    "PBXRefError",
    "Reference",
    "ReferenceGenerator",
    "TemporaryReferenceError",
    "compose",
    "generate_references",
    "settings_from_env",
]
