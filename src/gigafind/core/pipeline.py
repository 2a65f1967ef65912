from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gigafind._meta import logger
from gigafind.core.aggregate import aggregate
from gigafind.core.classify import classify
from gigafind.errors import GigafindError, SizeError, TraversalError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from gigafind.adapters.traversal import TraversalProvider
    from gigafind.core.model.records import Entry, RawRecord
    from gigafind.core.model.results import ResultSet
    from gigafind.core.model.thresholds import ScanConfig


class PipelineError(GigafindError):
    """Base class for errors emitted by the pipeline."""


class DataError(PipelineError):
    """Provider output could not be interpreted (e.g. an unknown size token)."""


@dataclass(frozen=True, slots=True)
class ScanOutcome:
    """Result of one run, owned by the caller."""

    config: ScanConfig
    results: ResultSet
    records: int
    skipped: int
    command: str

    @property
    def unit(self) -> str:
        return self.config.unit_label


def _entries(records: Sequence[RawRecord], config: ScanConfig, skipped: list[str]) -> Iterator[Entry]:
    for record in records:
        entry = classify(record, config.mode)
        if entry is None:
            skipped.append(record.line)
            logger.debug("skipped unusable record: %r", record.line)
            continue
        yield entry


def run_scan(config: ScanConfig, provider: TraversalProvider) -> ScanOutcome:
    """Enumerate, classify, filter and normalize; return the run's results.

    Raises
    ------
    TraversalError
        The provider could not enumerate the tree.
    DataError
        A size token in the provider's output could not be parsed.
    DuplicateEntryError
        A path repeated while the duplicate policy is ``reject``.
    """
    command = provider.describe(config)
    try:
        records = provider.records(config)
        skipped: list[str] = []
        results = aggregate(_entries(records, config, skipped), config)
    except SizeError as exc:
        msg = f"unexpected provider output: {exc}"
        raise DataError(msg) from exc
    except OSError as exc:
        raise TraversalError(str(exc), command=command) from exc

    logger.debug(
        "%d records, %d skipped, %d retained (%s mode)",
        len(records),
        len(skipped),
        len(results),
        config.mode.value,
    )
    return ScanOutcome(
        config=config,
        results=results,
        records=len(records),
        skipped=len(skipped),
        command=command,
    )


__all__ = ["DataError", "PipelineError", "ScanOutcome", "run_scan"]
