"""Google Chat webhook notifications.

One card per run, listing every retained entry. Nothing is sent when no
webhook is configured or when the run found nothing.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any

import requests

from gigafind._meta import __version__, logger
from gigafind.adapters.render.human import format_metric
from gigafind.errors import NotificationError

if TYPE_CHECKING:
    from gigafind.core.pipeline import ScanOutcome

DEFAULT_TIMEOUT = 30.0
FILE_ICON = "📄"
DIRECTORY_ICON = "📁"
ALERT_ICON = "🔴"


def _entry_lines(outcome: ScanOutcome) -> str:
    lines: list[str] = []
    for item in outcome.results:
        icon = FILE_ICON if item.is_file else DIRECTORY_ICON
        lines.append(f"⋅ {icon} <b>{item.path}</b> {format_metric(item.value, outcome.unit)}\n")
    return "".join(lines)


def build_payload(
    outcome: ScanOutcome,
    *,
    host: str = "",
    now: datetime.datetime | None = None,
) -> dict[str, Any]:
    """Return the Google Chat card message for *outcome*."""
    stamp = (now or datetime.datetime.now(datetime.UTC)).isoformat(timespec="seconds")
    return {
        "cards": [
            {
                "header": {
                    "title": f"Gigafind - {__version__}",
                    "subtitle": f"{ALERT_ICON} {host} - {stamp}",
                },
                "sections": [{"widgets": [{"textParagraph": {"text": _entry_lines(outcome)}}]}],
            }
        ]
    }


def post_payload(url: str, payload: dict[str, Any], *, timeout: float = DEFAULT_TIMEOUT) -> requests.Response:
    """POST *payload* as JSON; raise :class:`NotificationError` on any failure."""
    try:
        resp = requests.post(
            url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        msg = f"webhook request failed: {exc}"
        raise NotificationError(msg) from exc

    logger.debug("response status: %s", resp.status_code)
    logger.debug("response headers: %s", dict(resp.headers))
    logger.debug("response body: %s", resp.text)
    if not resp.ok:
        msg = f"webhook answered {resp.status_code}: {resp.text[:200]}"
        raise NotificationError(msg)
    return resp


def send_notification(
    url: str | None,
    outcome: ScanOutcome,
    *,
    host: str = "",
    timeout: float = DEFAULT_TIMEOUT,
) -> bool:
    """Send the run summary to *url*; return True when a message was delivered.

    Delivery failures are logged, never raised.
    """
    if not url:
        logger.info("No Google Chat webhook was provided.")
        return False
    if not outcome.results:
        logger.debug("No results so no Google Chat webhook was sent.")
        return False

    payload = build_payload(outcome, host=host)
    try:
        post_payload(url, payload, timeout=timeout)
    except NotificationError as exc:
        logger.error("Failure: %s", exc)  # noqa: TRY400
        return False
    logger.info("sent %d result(s) to Google Chat", len(outcome.results))
    return True


__all__ = ["build_payload", "post_payload", "send_notification"]
