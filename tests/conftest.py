from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from gigafind._meta import logger


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def listing_file(tmp_path: Path) -> Callable[..., Path]:
    def write(lines: Iterable[str], *, filename: str = "listing.txt") -> Path:
        path = tmp_path / filename
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return write


@pytest.fixture(autouse=True)
def _isolate_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # never pick up a real ./gigafind.toml or ~/.config/gigafind/config.toml
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("GIGAFIND_GOOGLE_CHAT", raising=False)
    monkeypatch.delenv("GIGAFIND_HOST", raising=False)


@pytest.fixture(autouse=True)
def _restore_log_levels() -> Iterator[None]:
    root = logging.getLogger()
    saved = (root.level, logger.level)
    handlers = root.handlers[:]
    yield
    root.handlers[:] = handlers
    root.setLevel(saved[0])
    logger.setLevel(saved[1])
