from __future__ import annotations

import json
import logging
import subprocess
from typing import TYPE_CHECKING, Any

import pytest

from gigafind import __version__
from gigafind.adapters import notify, traversal
from gigafind.cli import cli
from gigafind.cli._shared import configure_logging

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from click.testing import CliRunner

SIZE_LISTING = [
    "650M /srv/data",
    "-rw-r--r-- 1 root root 450M Jan  3 10:12 /srv/small.iso",
    "1.2G /home",
]
COUNT_LISTING = ["732 /var/log/app", "12 /tmp/x"]


class PostRecorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, url: str, **kwargs: Any) -> Any:
        self.calls.append((url, kwargs))
        return type("Resp", (), {"ok": True, "status_code": 200, "headers": {}, "text": "{}"})()


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"gigafind {__version__}"


def test_size_scan_from_listing(cli_runner: CliRunner, listing_file: Callable[..., Path]) -> None:
    listing = listing_file(SIZE_LISTING)
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing), "-m", "500MB"])
    assert result.exit_code == 0, result.output
    assert "Found directory /srv/data 650.00M" in result.output
    assert "/srv/small.iso" not in result.output
    assert "Found directory /home" not in result.output


def test_verbose_logs_ignored_entries(cli_runner: CliRunner, listing_file: Callable[..., Path]) -> None:
    listing = listing_file(SIZE_LISTING)
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing), "-m", "500MB", "-v"])
    assert result.exit_code == 0
    assert "IGNORED /srv/small.iso: 450.0000M" in result.output
    assert "IGNORED /home" in result.output


def test_count_mode_is_the_default(cli_runner: CliRunner, listing_file: Callable[..., Path]) -> None:
    listing = listing_file(COUNT_LISTING)
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing)])
    assert result.exit_code == 0, result.output
    assert "Found /var/log/app with 732 files" in result.output
    assert "/tmp/x" not in result.output


def test_nothing_found_is_success(cli_runner: CliRunner, listing_file: Callable[..., Path]) -> None:
    listing = listing_file(COUNT_LISTING)
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing), "-c", "5000"])
    assert result.exit_code == 0
    assert "No results." in result.output


def test_bad_threshold_is_a_config_error(cli_runner: CliRunner, listing_file: Callable[..., Path]) -> None:
    listing = listing_file(SIZE_LISTING)
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing), "-m", "12X"])
    assert result.exit_code == 78
    assert "ERROR:" in result.output


def test_forced_count_mode_needs_positive_count(cli_runner: CliRunner, listing_file: Callable[..., Path]) -> None:
    listing = listing_file(COUNT_LISTING)
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing), "--mode", "count", "-c", "0"])
    assert result.exit_code == 78
    assert "count mode requires" in result.output


def test_missing_listing(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["scan", "--listing", str(tmp_path / "nope.txt"), "-m", "1G"])
    assert result.exit_code == 66
    assert "cannot read listing" in result.output


def test_malformed_listing_is_a_data_error(cli_runner: CliRunner, listing_file: Callable[..., Path]) -> None:
    listing = listing_file(["3T /srv/huge"])
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing), "-m", "1G"])
    assert result.exit_code == 65
    assert "unexpected provider output" in result.output


def test_traversal_failure(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(cmd: list[str], **_: Any) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="find: '/nope': No such file or directory")

    monkeypatch.setattr(traversal.subprocess, "run", fail)
    result = cli_runner.invoke(cli, ["scan", "-p", "/nope", "-m", "1G", "--only", "files"])
    assert result.exit_code == 69
    assert "Failed to execute command" in result.output
    assert "find /nope" in result.output


def test_json_output_to_file(
    cli_runner: CliRunner, listing_file: Callable[..., Path], tmp_path: Path
) -> None:
    listing = listing_file(SIZE_LISTING)
    out = tmp_path / "reports" / "scan.json"
    result = cli_runner.invoke(
        cli,
        ["scan", "--listing", str(listing), "-m", "500MB", "--format", "json", "--output", str(out)],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["mode"] == "size"
    assert [e["path"] for e in payload["entries"]] == ["/srv/data"]


def test_settings_file_supplies_defaults(
    cli_runner: CliRunner, listing_file: Callable[..., Path], tmp_path: Path
) -> None:
    (tmp_path / "gigafind.toml").write_text('[gigafind]\nminimum_file_size = "1G"\n', encoding="utf-8")
    listing = listing_file(["650M /srv/data", "2.5G /srv/media"])
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing)])
    assert result.exit_code == 0, result.output
    assert "Found directory /srv/media 2.50G" in result.output
    assert "/srv/data" not in result.output

    override = cli_runner.invoke(cli, ["scan", "--listing", str(listing), "-m", "500M"])
    assert override.exit_code == 0
    assert "Found directory /srv/data 650.00M" in override.output
    assert "Found directory /srv/media 2560.00M" in override.output


def test_invalid_settings_file(cli_runner: CliRunner, listing_file: Callable[..., Path], tmp_path: Path) -> None:
    (tmp_path / "gigafind.toml").write_text("[gigafind]\nsurprise = 1\n", encoding="utf-8")
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing_file(COUNT_LISTING))])
    assert result.exit_code == 78
    assert "unknown setting" in result.output


def test_webhook_sent_with_results(
    cli_runner: CliRunner, listing_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    recorder = PostRecorder()
    monkeypatch.setattr(notify.requests, "post", recorder)
    listing = listing_file(SIZE_LISTING)
    result = cli_runner.invoke(
        cli,
        ["scan", "--listing", str(listing), "-m", "500MB", "-g", "https://chat.example/hook", "-H", "web-01"],
    )
    assert result.exit_code == 0, result.output
    assert len(recorder.calls) == 1
    url, kwargs = recorder.calls[0]
    assert url == "https://chat.example/hook"
    assert kwargs["json"]["cards"][0]["header"]["subtitle"].startswith("🔴 web-01 - ")


def test_webhook_from_environment(
    cli_runner: CliRunner, listing_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    recorder = PostRecorder()
    monkeypatch.setattr(notify.requests, "post", recorder)
    monkeypatch.setenv("GIGAFIND_GOOGLE_CHAT", "https://chat.example/env")
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing_file(COUNT_LISTING))])
    assert result.exit_code == 0
    assert [url for url, _ in recorder.calls] == ["https://chat.example/env"]


def test_no_webhook_for_empty_results(
    cli_runner: CliRunner, listing_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    recorder = PostRecorder()
    monkeypatch.setattr(notify.requests, "post", recorder)
    listing = listing_file(COUNT_LISTING)
    result = cli_runner.invoke(
        cli, ["scan", "--listing", str(listing), "-c", "5000", "-g", "https://chat.example/hook"]
    )
    assert result.exit_code == 0
    assert recorder.calls == []


def test_webhook_failure_keeps_exit_status(
    cli_runner: CliRunner, listing_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    def refuse(url: str, **_: Any) -> Any:
        raise notify.requests.ConnectionError("refused")

    monkeypatch.setattr(notify.requests, "post", refuse)
    listing = listing_file(COUNT_LISTING)
    result = cli_runner.invoke(cli, ["scan", "--listing", str(listing), "-g", "https://chat.example/hook"])
    assert result.exit_code == 0
    assert "Failure: webhook request failed: refused" in result.output


@pytest.mark.parametrize(
    ("flags", "root_level", "package_level"),
    [
        ({}, logging.WARNING, logging.INFO),
        ({"quiet": True}, logging.ERROR, logging.ERROR),
        ({"verbose": True}, logging.DEBUG, logging.DEBUG),
        ({"debug": True}, logging.DEBUG, logging.DEBUG),
    ],
)
def test_configure_logging_levels(flags: dict[str, bool], root_level: int, package_level: int) -> None:
    options = {"quiet": False, "verbose": False, "debug": False, **flags}
    configure_logging(**options)
    assert logging.getLogger().level == root_level
    assert logging.getLogger("gigafind").level == package_level


def test_default_run_logs_summary_but_not_debug(
    cli_runner: CliRunner, listing_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(notify.requests, "post", PostRecorder())
    listing = listing_file(SIZE_LISTING)
    result = cli_runner.invoke(
        cli, ["scan", "--listing", str(listing), "-m", "500MB", "-g", "https://chat.example/hook"]
    )
    assert result.exit_code == 0
    assert "INFO: sent 1 result(s) to Google Chat" in result.output
    assert "IGNORED" not in result.output
