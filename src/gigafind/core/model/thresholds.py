from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gigafind.core.model.path_filter import ExclusionPolicy
from gigafind.core.model.types import (
    COUNT_UNIT,
    RESULT_LIMIT,
    DuplicatePolicy,
    KindFilter,
    ModeChoice,
    ScanMode,
    SizeUnit,
)
from gigafind.core.model.units import normalize, parse_size
from gigafind.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_MINIMUM_FILE_SIZE = "200MB"
DEFAULT_MINIMUM_FILE_COUNT = 500


@dataclass(frozen=True, slots=True)
class Threshold:
    """A size bar expressed as ``(value, unit)``.

    Fields
    ------
    value:
        Magnitude in ``unit``.
    unit:
        Unit the operator wrote the threshold in.
    token:
        The original text, kept for messages.
    """

    value: float
    unit: SizeUnit
    token: str = ""

    def in_unit(self, target: SizeUnit) -> float:
        return normalize(self.value, self.unit, target)


def parse_threshold(token: str) -> Threshold:
    """Parse a threshold like ``'200MB'`` or ``'1.5G'``.

    Raises :class:`~gigafind.errors.SizeParseError` or
    :class:`~gigafind.errors.UnitConversionError` on malformed input.
    """
    metric = parse_size(token)
    # parse_size always yields a unit for size tokens
    unit = metric.unit if metric.unit is not None else SizeUnit.BYTE
    return Threshold(value=metric.value, unit=unit, token=token.strip())


def resolve_mode(
    choice: ModeChoice,
    *,
    minimum_file_count: int | None,
    size_threshold_given: bool,
    dir_threshold_given: bool,
) -> ScanMode:
    """Pick the ranking dimension once, before scanning.

    ``auto`` selects count mode only when a positive minimum file count is in
    effect and the operator supplied neither size threshold. Presence of the
    option decides, not its value: passing ``--minimum-file-size 200MB``
    explicitly selects size mode.
    """
    if choice is ModeChoice.SIZE:
        return ScanMode.BY_SIZE
    if choice is ModeChoice.COUNT:
        if not minimum_file_count or minimum_file_count <= 0:
            msg = "count mode requires a positive --minimum-file-count"
            raise ConfigError(msg)
        return ScanMode.BY_COUNT
    if minimum_file_count and minimum_file_count > 0 and not size_threshold_given and not dir_threshold_given:
        return ScanMode.BY_COUNT
    return ScanMode.BY_SIZE


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Everything a single run needs, fixed before the provider is called."""

    root: str
    mode: ScanMode
    file_threshold: Threshold
    dir_threshold: Threshold | None = None
    minimum_file_count: int = DEFAULT_MINIMUM_FILE_COUNT
    exclusions: ExclusionPolicy = field(default_factory=ExclusionPolicy)
    kinds: KindFilter = KindFilter.ALL
    duplicates: DuplicatePolicy = DuplicatePolicy.KEEP_MAX
    limit: int = RESULT_LIMIT

    @property
    def target_unit(self) -> SizeUnit:
        """Unit all sizes are reported in: the file threshold's unit."""
        return self.file_threshold.unit

    @property
    def unit_label(self) -> str:
        return COUNT_UNIT if self.mode is ScanMode.BY_COUNT else self.target_unit.value

    def file_bar(self) -> float:
        return self.file_threshold.value

    def dir_bar(self) -> float:
        """Directory bar in the target unit; falls back to the file bar."""
        if self.dir_threshold is None:
            return self.file_bar()
        return self.dir_threshold.in_unit(self.target_unit)


def build_config(
    *,
    root: str = ".",
    mode: ModeChoice = ModeChoice.AUTO,
    minimum_file_size: str | None = None,
    minimum_dir_size: str | None = None,
    minimum_file_count: int | None = DEFAULT_MINIMUM_FILE_COUNT,
    exclude: Sequence[str] = (),
    kinds: KindFilter = KindFilter.ALL,
    duplicates: DuplicatePolicy = DuplicatePolicy.KEEP_MAX,
    limit: int = RESULT_LIMIT,
) -> ScanConfig:
    """Validate raw option values and build a :class:`ScanConfig`.

    ``None`` for a size threshold means "not supplied"; the file threshold
    then defaults to ``200MB``. Size-token errors propagate unchanged so the
    caller can abort before scanning.
    """
    file_threshold = parse_threshold(minimum_file_size or DEFAULT_MINIMUM_FILE_SIZE)
    dir_threshold = parse_threshold(minimum_dir_size) if minimum_dir_size else None

    if minimum_file_count is not None and minimum_file_count < 0:
        msg = f"minimum file count must be non-negative: {minimum_file_count}"
        raise ConfigError(msg)
    if limit <= 0:
        msg = f"result limit must be positive: {limit}"
        raise ConfigError(msg)

    scan_mode = resolve_mode(
        mode,
        minimum_file_count=minimum_file_count,
        size_threshold_given=bool(minimum_file_size),
        dir_threshold_given=bool(minimum_dir_size),
    )
    if scan_mode is ScanMode.BY_COUNT:
        if kinds is KindFilter.FILES:
            msg = "count mode ranks directories; --only files cannot be combined with it"
            raise ConfigError(msg)
        kinds = KindFilter.DIRECTORIES

    return ScanConfig(
        root=root or ".",
        mode=scan_mode,
        file_threshold=file_threshold,
        dir_threshold=dir_threshold,
        minimum_file_count=minimum_file_count or 0,
        exclusions=ExclusionPolicy(tuple(exclude)),
        kinds=kinds,
        duplicates=duplicates,
        limit=limit,
    )


__all__ = [
    "DEFAULT_MINIMUM_FILE_COUNT",
    "DEFAULT_MINIMUM_FILE_SIZE",
    "ScanConfig",
    "Threshold",
    "build_config",
    "parse_threshold",
    "resolve_mode",
]
