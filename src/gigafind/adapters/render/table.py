from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from gigafind.adapters.render.human import format_metric
from gigafind.core.model.types import COUNT_UNIT

if TYPE_CHECKING:
    from gigafind.core.pipeline import ScanOutcome

_NO_RESULTS = "No results."


def _render_rich_table(table: Table, *, color: bool) -> str:
    buf = StringIO()
    console = Console(
        file=buf,
        force_terminal=color,
        color_system="standard" if color else None,
        no_color=not color,
        width=10_000,
    )
    console.print(table)
    return buf.getvalue().rstrip()


def render_table(outcome: ScanOutcome, *, color: bool) -> str:
    if not outcome.results:
        return _NO_RESULTS

    t = Table(show_header=True, header_style="bold")
    t.add_column("Kind")
    t.add_column("Path", overflow="fold")
    t.add_column("Files" if outcome.unit == COUNT_UNIT else "Size", justify="right")
    for item in outcome.results:
        t.add_row(item.kind.value, item.path, format_metric(item.value, outcome.unit))
    return _render_rich_table(t, color=color)


__all__ = ["render_table"]
