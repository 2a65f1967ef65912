from __future__ import annotations

from dataclasses import dataclass

from gigafind.core.model.types import COUNT_UNIT, EntryKind, SizeUnit


@dataclass(frozen=True, slots=True)
class RawMetric:
    """A value as reported by the provider, before normalization.

    ``unit`` is a :class:`SizeUnit` for size records and ``None`` for
    file-count records (implicit unit ``files``).
    """

    value: float
    unit: SizeUnit | None = None

    @property
    def is_count(self) -> bool:
        return self.unit is None

    @property
    def unit_label(self) -> str:
        return COUNT_UNIT if self.unit is None else self.unit.value


@dataclass(frozen=True, slots=True)
class RawRecord:
    """One line of provider output.

    ``kind`` is set when the provider knows which command produced the line
    and left as ``None`` for replayed listings that mix both shapes.
    """

    line: str
    kind: EntryKind | None = None


@dataclass(frozen=True, slots=True)
class Entry:
    """A classified filesystem object for the current run."""

    path: str
    kind: EntryKind
    metric: RawMetric

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE


__all__ = ["Entry", "RawMetric", "RawRecord"]
