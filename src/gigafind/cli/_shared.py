from __future__ import annotations

import logging
import sys

from gigafind._meta import logger
from gigafind.core.config import LOG_FORMAT


def configure_logging(*, quiet: bool, verbose: bool, debug: bool) -> None:
    if quiet:
        root_level = level = logging.ERROR
    elif verbose or debug:
        root_level = level = logging.DEBUG
    else:
        # third-party libraries stay at WARNING; our own run summary is INFO
        root_level, level = logging.WARNING, logging.INFO
    logging.basicConfig(level=root_level, format=LOG_FORMAT, force=True)
    logger.setLevel(level)
    if debug:
        logger.debug("debug logging enabled")


def is_tty_stdout() -> bool:
    try:
        return bool(getattr(sys.stdout, "isatty", lambda: False)())
    except OSError:
        return False


def resolve_use_color(*, color: bool, no_color: bool, color_allowed: bool) -> bool:
    # CLI flags take precedence over the IO policy default.
    if no_color:
        return False
    if color:
        return True
    return color_allowed
