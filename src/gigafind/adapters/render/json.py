from __future__ import annotations

import json
from typing import TYPE_CHECKING

from gigafind._meta import __version__

if TYPE_CHECKING:
    from gigafind.core.pipeline import ScanOutcome


def to_payload(outcome: ScanOutcome) -> dict[str, object]:
    """Plain-container view of *outcome* for structured output."""
    config = outcome.config
    return {
        "tool": "gigafind",
        "version": __version__,
        "root": config.root,
        "mode": config.mode.value,
        "unit": outcome.unit,
        "entries": [
            {"path": item.path, "kind": item.kind.value, "value": item.value} for item in outcome.results
        ],
    }


def render_json(outcome: ScanOutcome) -> str:
    return json.dumps(to_payload(outcome), indent=2, ensure_ascii=False)


__all__ = ["render_json", "to_payload"]
