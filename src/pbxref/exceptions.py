"""Custom exceptions raised by pbxref."""

from __future__ import annotations

from typing import Iterable


class PBXRefError(RuntimeError):
    """Base error for all reference generation exceptions."""


class ConfigurationError(PBXRefError):
    """Raised when generator settings are invalid or missing."""


class ObjectLookupError(PBXRefError):
    """Raised when a declared reference does not resolve to an object."""

    def __init__(self, reference_value: str, message: str | None = None) -> None:
        super().__init__(message or f"Object with reference {reference_value} not found")
        self.reference_value = reference_value


class TemporaryReferenceError(PBXRefError):
    """Raised when objects still hold temporary references after generation."""

    def __init__(self, values: Iterable[str]) -> None:
        self.values = tuple(values)
        preview = ", ".join(self.values[:5])
        if len(self.values) > 5:
            preview += ", ..."
        super().__init__(f"{len(self.values)} temporary reference(s) left: {preview}")
