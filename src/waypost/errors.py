"""Waypost exception hierarchy.

Shared across the registry, pattern compiler, and navigator so every
module raises and catches the same types.
"""

from typing import Any


class WaypostError(Exception):
    """Base for all waypost-specific errors."""


def _describe(value: Any) -> str:
    return type(value).__name__


class InvalidArgument(WaypostError, TypeError):
    """Raised when a public entry point receives malformed input.

    Non-sequence route lists, non-mapping route definitions, uncompilable
    patterns, non-callable subscribers, and empty navigation paths all
    end up here.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        super().__init__(f"{message} but got type {_describe(value)!r}")


class NotFound(WaypostError, LookupError):  # noqa: N818
    """No registered route carries the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"no route is registered with the name {name!r}")


class PatternError(WaypostError, ValueError):
    """A path pattern could not be compiled or stringified."""
