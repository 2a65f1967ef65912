from __future__ import annotations

import sys
from pathlib import Path


def write_output(text: str, destination: Path | None) -> None:
    """Write output to stdout or a file (PATH or '-' for stdout)."""
    if destination is None or destination == Path("-"):
        print(text)
        return
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(text + "\n", encoding="utf-8")


def read_listing(source: Path) -> str:
    """Read a captured listing from *source* ('-' reads stdin)."""
    if source == Path("-"):
        return sys.stdin.read()
    return source.read_text(encoding="utf-8")


__all__ = ["read_listing", "write_output"]
