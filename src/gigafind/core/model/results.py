from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gigafind.core.model.types import DuplicatePolicy, EntryKind
from gigafind.errors import DuplicateEntryError

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True, slots=True)
class ResultItem:
    """A retained entry with its metric in the run's reporting unit."""

    path: str
    kind: EntryKind
    value: float

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE


@dataclass(slots=True)
class ResultSet:
    """Path-keyed results of one run, in provider order.

    The duplicate policy decides what happens when a path arrives twice
    (symlink cycles, repeated enumeration). Replacing an item keeps its
    original position.
    """

    policy: DuplicatePolicy = DuplicatePolicy.KEEP_MAX
    _items: dict[str, ResultItem] = field(default_factory=dict)

    def add(self, item: ResultItem) -> bool:
        """Insert *item*; return True when the set changed."""
        existing = self._items.get(item.path)
        if existing is None:
            self._items[item.path] = item
            return True
        if self.policy is DuplicatePolicy.REJECT:
            raise DuplicateEntryError(item.path)
        if self.policy is DuplicatePolicy.KEEP_MAX and item.value > existing.value:
            self._items[item.path] = item
            return True
        return False

    def __contains__(self, path: object) -> bool:
        return path in self._items

    def __iter__(self) -> Iterator[ResultItem]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def get(self, path: str) -> ResultItem | None:
        return self._items.get(path)

    def items(self) -> list[ResultItem]:
        return list(self._items.values())


__all__ = ["ResultItem", "ResultSet"]
