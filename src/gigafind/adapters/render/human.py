from __future__ import annotations

from typing import TYPE_CHECKING

from gigafind.core.model.types import COUNT_UNIT

if TYPE_CHECKING:
    from gigafind.core.pipeline import ScanOutcome

_NO_RESULTS = "No results."


def format_metric(value: float, unit: str) -> str:
    """``650.00M`` for sizes, ``732 files`` for counts."""
    if unit == COUNT_UNIT:
        return f"{int(value)} {COUNT_UNIT}"
    return f"{value:.2f}{unit}"


def render_human(outcome: ScanOutcome) -> str:
    lines: list[str] = []
    for item in outcome.results:
        if outcome.unit == COUNT_UNIT:
            lines.append(f"Found {item.path} with {int(item.value)} {COUNT_UNIT}")
        else:
            lines.append(f"Found {item.kind.value} {item.path} {format_metric(item.value, outcome.unit)}")
    if not lines:
        return _NO_RESULTS
    return "\n".join(lines)


__all__ = ["format_metric", "render_human"]
