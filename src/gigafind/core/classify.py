"""Turn provider output lines into typed entries.

Size mode sees two line shapes:

* ``ls -lh`` lines for files::

      -rw-r--r-- 1 www www 4.5G Jan  3 10:12 /srv/backup/db.tar

* ``du -sh`` lines for directories::

      1.2G    /srv/www/cache

Count mode sees ``<count> <path>`` lines.
"""

from __future__ import annotations

from gigafind.core.model.records import Entry, RawMetric, RawRecord
from gigafind.core.model.types import EntryKind, ScanMode
from gigafind.core.model.units import parse_size

MIN_FIELDS = 2
LONG_LISTING_FIELDS = 9
_LONG_LISTING_SIZE_FIELD = 4


def sniff_kind(line: str) -> EntryKind:
    """Guess the kind of an untagged size record from its shape."""
    fields = line.split()
    if len(fields) >= LONG_LISTING_FIELDS and "-" in line:
        return EntryKind.FILE
    return EntryKind.DIRECTORY


def classify_size_record(record: RawRecord) -> Entry | None:
    """Return the entry for *record*, or None for blank/short lines.

    A size token that cannot be parsed raises; that means the listing format
    changed and the run must not continue on guesses.
    """
    line = record.line.strip()
    if len(line.split()) < MIN_FIELDS:
        return None

    kind = record.kind or sniff_kind(line)
    if kind is EntryKind.FILE:
        fields = line.split(maxsplit=LONG_LISTING_FIELDS - 1)
        if len(fields) < LONG_LISTING_FIELDS:
            return None
        token, path = fields[_LONG_LISTING_SIZE_FIELD], fields[-1]
    else:
        token, path = line.split(maxsplit=1)

    return Entry(path=path, kind=kind, metric=parse_size(token))


def classify_count_record(record: RawRecord) -> Entry | None:
    """Return a directory entry for a ``<count> <path>`` line, or None when unusable."""
    fields = record.line.strip().split(maxsplit=1)
    if len(fields) < MIN_FIELDS:
        return None
    try:
        count = int(fields[0])
    except ValueError:
        return None
    if count < 0:
        return None
    return Entry(path=fields[1], kind=EntryKind.DIRECTORY, metric=RawMetric(value=count))


def classify(record: RawRecord, mode: ScanMode) -> Entry | None:
    if mode is ScanMode.BY_COUNT:
        return classify_count_record(record)
    return classify_size_record(record)


__all__ = ["classify", "classify_count_record", "classify_size_record", "sniff_kind"]
