"""Identity cells attached to every object of the graph."""

from __future__ import annotations

from uuid import uuid4

TEMPORARY_PREFIX = "TEMP_"


def temporary_value(prefix: str | None = None) -> str:
    """Return a fresh process-local placeholder value."""

    prefix = TEMPORARY_PREFIX if prefix is None else prefix
    return f"{prefix}{uuid4().hex.upper()}"


class Reference:
    """Reference of a graph object, either temporary or permanent.

    Objects relate to each other by holding the same ``Reference`` instance,
    so equality and hashing are by identity and a fixed value is visible
    through every relation at once.
    """

    __slots__ = ("_value", "_temporary")

    def __init__(self, value: str | None = None, *, temporary: bool | None = None) -> None:
        if value is None:
            self._value = temporary_value()
            self._temporary = True if temporary is None else temporary
        else:
            self._value = value
            self._temporary = False if temporary is None else temporary

    @classmethod
    def new(cls, prefix: str | None = None) -> "Reference":
        """Create a temporary reference."""

        return cls(temporary_value(prefix), temporary=True)

    @property
    def value(self) -> str:
        return self._value

    @property
    def temporary(self) -> bool:
        return self._temporary

    def is_temporary(self) -> bool:
        return self._temporary

    def fix(self, value: str) -> bool:
        """Make the reference permanent with ``value``.

        No-op once permanent. Returns whether the reference changed.
        """

        if not value:
            raise ValueError("A permanent reference value cannot be empty")
        if not self._temporary:
            return False
        self._value = value
        self._temporary = False
        return True

    def __repr__(self) -> str:
        state = "temporary" if self._temporary else "permanent"
        return f"Reference({self._value!r}, {state})"

    def __str__(self) -> str:
        return self._value
