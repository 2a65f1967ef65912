"""Centralised exception hierarchy for gigafind."""

from __future__ import annotations


class GigafindError(Exception):
    """Base class for all custom gigafind exceptions."""


class ConfigError(GigafindError):
    """Configuration could not be loaded or is inconsistent."""


class SizeError(GigafindError):
    """Base class for errors raised while handling size tokens."""


class SizeParseError(SizeError):
    """The numeric portion of a size token is not a valid decimal number."""

    def __init__(self, token: str) -> None:
        super().__init__(f"could not parse size token: {token!r}")
        self.token = token


class UnitConversionError(SizeError):
    """A size unit is outside the supported B/K/M/G set."""

    def __init__(self, unit: str) -> None:
        super().__init__(f"unsupported size unit: {unit!r} (expected one of B, K, M, G)")
        self.unit = unit


class TraversalError(GigafindError):
    """The external traversal provider failed."""

    def __init__(self, message: str, *, command: str | None = None) -> None:
        super().__init__(message)
        self.command = command


class DuplicateEntryError(GigafindError):
    """A path was reported twice while the duplicate policy is ``reject``."""

    def __init__(self, path: str) -> None:
        super().__init__(f"duplicate entry for path: {path}")
        self.path = path


class NotificationError(GigafindError):
    """The notification sink rejected or could not receive the payload."""


__all__ = [
    "ConfigError",
    "DuplicateEntryError",
    "GigafindError",
    "NotificationError",
    "SizeError",
    "SizeParseError",
    "TraversalError",
    "UnitConversionError",
]
