"""Shared enumerations used across gigafind."""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class SizeUnit(StrEnum):
    """Size units ordered by magnitude; adjacent units differ by exactly 1024."""

    BYTE = "B"
    KILOBYTE = "K"
    MEGABYTE = "M"
    GIGABYTE = "G"

    @property
    def index(self) -> int:
        return _UNIT_ORDER.index(self)


_UNIT_ORDER: tuple[SizeUnit, ...] = (
    SizeUnit.BYTE,
    SizeUnit.KILOBYTE,
    SizeUnit.MEGABYTE,
    SizeUnit.GIGABYTE,
)


class EntryKind(StrEnum):
    """Filesystem object kinds reported by the traversal provider."""

    FILE = "file"
    DIRECTORY = "directory"


class ScanMode(StrEnum):
    """Ranking dimension of a run; exactly one is active per invocation."""

    BY_SIZE = "size"
    BY_COUNT = "count"


class ModeChoice(StrEnum):
    """Mode requested on the command line (``auto`` resolves to a ScanMode)."""

    AUTO = "auto"
    SIZE = "size"
    COUNT = "count"


class KindFilter(StrEnum):
    """Which entry kinds the traversal provider should enumerate."""

    ALL = "all"
    FILES = "files"
    DIRECTORIES = "dirs"

    def wants(self, kind: EntryKind) -> bool:
        if self is KindFilter.ALL:
            return True
        if self is KindFilter.FILES:
            return kind is EntryKind.FILE
        return kind is EntryKind.DIRECTORY


class DuplicatePolicy(StrEnum):
    """What to do when the same path is reported more than once."""

    KEEP_FIRST = "keep-first"
    KEEP_MAX = "keep-max"
    REJECT = "reject"


COUNT_UNIT: str = "files"
RESULT_LIMIT: int = 25


__all__ = [
    "COUNT_UNIT",
    "RESULT_LIMIT",
    "DuplicatePolicy",
    "EntryKind",
    "KindFilter",
    "ModeChoice",
    "ScanMode",
    "SizeUnit",
]
