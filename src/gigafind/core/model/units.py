"""Size token parsing and unit normalization.

Tokens look like what ``ls -lh`` and ``du -sh`` print (``4.5G``, ``650M``,
``12K``, ``512``) or what an operator types as a threshold (``200MB``,
``1gb``). A token without a suffix is a byte count.
"""

from __future__ import annotations

import re

from gigafind.core.model.records import RawMetric
from gigafind.core.model.types import SizeUnit
from gigafind.errors import SizeParseError, UnitConversionError

FACTOR = 1024

_TOKEN_PATTERN = re.compile(r"^(?P<number>.*?)(?P<suffix>[A-Za-z]*)$")
_DECIMAL_PATTERN = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")

_SUFFIXES: dict[str, SizeUnit] = {
    "": SizeUnit.BYTE,
    "B": SizeUnit.BYTE,
    "K": SizeUnit.KILOBYTE,
    "KB": SizeUnit.KILOBYTE,
    "KIB": SizeUnit.KILOBYTE,
    "M": SizeUnit.MEGABYTE,
    "MB": SizeUnit.MEGABYTE,
    "MIB": SizeUnit.MEGABYTE,
    "G": SizeUnit.GIGABYTE,
    "GB": SizeUnit.GIGABYTE,
    "GIB": SizeUnit.GIGABYTE,
}


def coerce_unit(unit: SizeUnit | str) -> SizeUnit:
    """Return *unit* as a :class:`SizeUnit` or raise :class:`UnitConversionError`."""
    if isinstance(unit, SizeUnit):
        return unit
    try:
        return _SUFFIXES[str(unit).strip().upper()]
    except KeyError as exc:
        raise UnitConversionError(str(unit)) from exc


def parse_size(token: str) -> RawMetric:
    """Split a size token into ``(value, unit)``.

    Raises
    ------
    SizeParseError
        The numeric portion is not a plain decimal number.
    UnitConversionError
        The suffix names a unit outside B/K/M/G (``T``, ``P``, ...).
    """
    text = (token or "").strip()
    m = _TOKEN_PATTERN.match(text)
    if m is None:  # pragma: no cover - the pattern matches any string
        raise SizeParseError(token)
    number, suffix = m.group("number"), m.group("suffix")
    if not _DECIMAL_PATTERN.match(number):
        raise SizeParseError(token)
    return RawMetric(value=float(number), unit=coerce_unit(suffix))


def normalize(raw_value: float, raw_unit: SizeUnit | str, target_unit: SizeUnit | str) -> float:
    """Express *raw_value* (in *raw_unit*) in *target_unit*.

    Same-unit conversions return the input untouched; otherwise one
    multiply or divide by 1024 is applied per step between the units.
    """
    src = coerce_unit(raw_unit)
    dst = coerce_unit(target_unit)
    if src is dst:
        return raw_value

    value = float(raw_value)
    steps = src.index - dst.index
    for _ in range(abs(steps)):
        value = value * FACTOR if steps > 0 else value / FACTOR
    return value


def normalize_metric(metric: RawMetric, target_unit: SizeUnit | str) -> float:
    """Normalize a parsed size metric; count metrics pass through unchanged."""
    if metric.unit is None:
        return metric.value
    return normalize(metric.value, metric.unit, target_unit)


def to_bytes(token: str) -> float:
    """Parse *token* and return its size in bytes."""
    metric = parse_size(token)
    return normalize_metric(metric, SizeUnit.BYTE)


__all__ = ["FACTOR", "coerce_unit", "normalize", "normalize_metric", "parse_size", "to_bytes"]
