from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("gigafind")

logger = logging.getLogger("gigafind")

__all__ = ["__version__", "logger"]
