from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

from gigafind._meta import logger
from gigafind.core.model.results import ResultItem, ResultSet
from gigafind.core.model.types import EntryKind, ScanMode
from gigafind.core.model.units import normalize_metric

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gigafind.core.model.records import Entry
    from gigafind.core.model.thresholds import ScanConfig


def is_scan_root(path: str, root: str) -> bool:
    if path == ".":
        return True
    return posixpath.normpath(path) == posixpath.normpath(root or ".")


def admit(entry: Entry, config: ScanConfig) -> float | None:
    """Return the normalized metric when *entry* belongs in the results, else None.

    Rules are checked in order and the first applicable one decides.
    """
    if is_scan_root(entry.path, config.root):
        return None
    if config.exclusions.should_exclude(entry.path, entry.kind):
        logger.debug("IGNORED %s", entry.path)
        return None

    if config.mode is ScanMode.BY_COUNT:
        count = entry.metric.value
        if count >= config.minimum_file_count:
            return count
        logger.debug("IGNORED %s: %d files", entry.path, count)
        return None

    value = normalize_metric(entry.metric, config.target_unit)
    bar = config.file_bar() if entry.kind is EntryKind.FILE else config.dir_bar()
    if value >= bar:
        return value
    logger.debug("IGNORED %s: %.4f%s", entry.path, value, config.target_unit.value)
    return None


def aggregate(entries: Iterable[Entry], config: ScanConfig) -> ResultSet:
    """Filter and normalize *entries* into a fresh result set (no re-ranking)."""
    results = ResultSet(policy=config.duplicates)
    for entry in entries:
        value = admit(entry, config)
        if value is None:
            continue
        if not results.add(ResultItem(path=entry.path, kind=entry.kind, value=value)):
            logger.debug("duplicate %s kept earlier value", entry.path)
    return results


__all__ = ["admit", "aggregate", "is_scan_root"]
