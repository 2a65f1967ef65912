from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from gigafind.adapters.render.human import render_human
from gigafind.adapters.render.json import render_json
from gigafind.adapters.render.table import render_table

if TYPE_CHECKING:
    from gigafind.core.pipeline import ScanOutcome


class OutputFormat(StrEnum):
    HUMAN = "human"
    TABLE = "table"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Options that affect *presentation* only (not which entries are reported)."""

    color: bool = False
    is_tty: bool = False


def render(outcome: ScanOutcome, *, fmt: OutputFormat | str, options: RenderOptions) -> str:
    """Render a scan outcome to text.

    Parameters
    ----------
    outcome:
        Result of :func:`gigafind.core.pipeline.run_scan`.
    fmt:
        One of: "human", "table", "json".
    options:
        Presentation options (color/tty).
    """
    f = str(fmt or "").strip().lower()

    if f == OutputFormat.HUMAN:
        return render_human(outcome)
    if f == OutputFormat.TABLE:
        return render_table(outcome, color=options.color and options.is_tty)
    if f == OutputFormat.JSON:
        return render_json(outcome)
    msg = f"Unsupported format: {fmt!r}. Expected one of: human, table, json."
    raise ValueError(msg)


__all__ = ["OutputFormat", "RenderOptions", "render"]
