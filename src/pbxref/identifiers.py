"""Deterministic composition of permanent reference values.

A seed chain is the ordered list ``[isa, ancestor discriminators..., own
discriminator]``. Its elements are joined with the configured separator,
hashed, and rendered as hex. Order is significant and never sorted.
"""

from __future__ import annotations

import hashlib
from typing import Sequence

from .config import DEFAULT_SETTINGS, GeneratorSettings


def compose(seed_chain: Sequence[str], settings: GeneratorSettings | None = None) -> str:
    """Return the permanent reference value for ``seed_chain``."""

    if not seed_chain:
        raise ValueError("Seed chain must contain at least the object type name")
    settings = settings or DEFAULT_SETTINGS
    joined = settings.separator.join(str(part) for part in seed_chain)
    digest = hashlib.new(settings.algorithm, joined.encode("utf-8")).hexdigest()
    return digest.upper() if settings.uppercase else digest


__all__ = ["compose"]
