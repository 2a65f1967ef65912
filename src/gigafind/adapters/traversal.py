"""Traversal providers: enumerate the tree and hand back ranked raw records.

:class:`FindProvider` shells out to ``find`` (with ``ls -lh``/``du -sh`` for
sizes) and tags every line with the kind of command that produced it.
:class:`ListingProvider` replays previously captured output, where both line
shapes may be mixed and the kind has to be sniffed.

Both providers return at most ``config.limit`` records, largest first.
"""

from __future__ import annotations

import math
import os
import shlex
import subprocess
from typing import TYPE_CHECKING, Protocol

from gigafind._meta import logger
from gigafind.core.classify import classify
from gigafind.core.model.records import RawRecord
from gigafind.core.model.types import EntryKind, KindFilter, ScanMode, SizeUnit
from gigafind.core.model.units import normalize_metric
from gigafind.errors import TraversalError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from gigafind.core.model.thresholds import ScanConfig

# Always pruned at the provider boundary, in addition to user exclusions.
BUILTIN_IGNORED_PATHS: tuple[str, ...] = (
    "*/.git/*",
    "*/node_modules/*",
    "*/vendor/*",
    "*/.build/*",
    "*/tmp/*",
    "*/.*/*",
)

# Prints "<number of immediate files> <dir>" for every directory passed in.
_COUNT_SCRIPT = 'for d; do printf "%s %s\\n" "$(find "$d" -maxdepth 1 -type f | wc -l)" "$d"; done'

_STDERR_TAIL = 400
_PARTIAL_FAILURE = 1


class TraversalProvider(Protocol):
    def records(self, config: ScanConfig) -> list[RawRecord]: ...

    def describe(self, config: ScanConfig) -> str: ...


def prune_expression(patterns: Sequence[str]) -> list[str]:
    """Build ``-not ( -path P1 -o -path P2 ... )`` for *patterns*."""
    expr: list[str] = ["-not", "("]
    for idx, pattern in enumerate(patterns):
        if idx:
            expr.append("-o")
        expr.extend(["-path", pattern])
    expr.append(")")
    return expr


def _ignored(config: ScanConfig) -> list[str]:
    return [*BUILTIN_IGNORED_PATHS, *config.exclusions.patterns]


def file_command(config: ScanConfig) -> list[str]:
    return ["find", config.root, "-type", "f", *prune_expression(_ignored(config)), "-exec", "ls", "-alh", "{}", "+"]


def directory_command(config: ScanConfig) -> list[str]:
    # one du per directory: a batched du counts nested directories only once
    return [
        "find",
        config.root,
        "-type",
        "d",
        *prune_expression(_ignored(config)),
        "-exec",
        "du",
        "-sh",
        "{}",
        ";",
    ]


def count_command(config: ScanConfig) -> list[str]:
    return [
        "find",
        config.root,
        "-type",
        "d",
        *prune_expression(_ignored(config)),
        "-exec",
        "sh",
        "-c",
        _COUNT_SCRIPT,
        "sh",
        "{}",
        "+",
    ]


def _magnitude(record: RawRecord, mode: ScanMode) -> tuple[EntryKind | None, float]:
    entry = classify(record, mode)
    if entry is None:
        return None, -math.inf
    return entry.kind, normalize_metric(entry.metric, SizeUnit.BYTE)


def rank_records(
    records: Iterable[RawRecord],
    *,
    mode: ScanMode,
    kinds: KindFilter = KindFilter.ALL,
    limit: int,
) -> list[RawRecord]:
    """Sort *records* by size or count (descending) and keep the top *limit*.

    Ties are broken by the line text so the order is stable across runs.
    Lines too short to classify sort last; lines of an unwanted kind are
    dropped.
    """
    keyed: list[tuple[float, str, RawRecord]] = []
    for record in records:
        if not record.line.strip():
            continue
        kind, size = _magnitude(record, mode)
        if kind is not None and not kinds.wants(kind):
            continue
        keyed.append((size, record.line, record))
    keyed.sort(key=lambda item: (-item[0], item[1]))
    return [record for _, _, record in keyed[:limit]]


class FindProvider:
    """Enumerate with ``find`` and friends; each call blocks until they exit."""

    def __init__(self, *, env: dict[str, str] | None = None) -> None:
        base = dict(os.environ if env is None else env)
        # du/ls must print "4.0K", not a localized "4,0K"
        base["LC_ALL"] = "C"
        self._env = base

    def commands(self, config: ScanConfig) -> list[tuple[EntryKind, list[str]]]:
        if config.mode is ScanMode.BY_COUNT:
            return [(EntryKind.DIRECTORY, count_command(config))]
        cmds: list[tuple[EntryKind, list[str]]] = []
        if config.kinds.wants(EntryKind.FILE):
            cmds.append((EntryKind.FILE, file_command(config)))
        if config.kinds.wants(EntryKind.DIRECTORY):
            cmds.append((EntryKind.DIRECTORY, directory_command(config)))
        return cmds

    def describe(self, config: ScanConfig) -> str:
        return "; ".join(shlex.join(cmd) for _, cmd in self.commands(config))

    def _run(self, cmd: list[str]) -> str:
        command = shlex.join(cmd)
        logger.debug("running `%s`", command)
        try:
            proc = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                env=self._env,
            )
        except OSError as exc:
            msg = f"failed to execute command: {exc}"
            raise TraversalError(msg, command=command) from exc
        stderr = (proc.stderr or "").strip()[-_STDERR_TAIL:]
        if proc.returncode == _PARTIAL_FAILURE and (proc.stdout or "").strip():
            # find/du exit 1 when a subtree is unreadable; the rest is still valid
            logger.warning("`%s` exited with status 1, keeping partial output: %s", command, stderr)
            return proc.stdout
        if proc.returncode != 0:
            msg = f"command exited with status {proc.returncode}"
            if stderr:
                msg = f"{msg}: {stderr}"
            raise TraversalError(msg, command=command)
        return proc.stdout or ""

    def records(self, config: ScanConfig) -> list[RawRecord]:
        collected: list[RawRecord] = []
        for kind, cmd in self.commands(config):
            stdout = self._run(cmd)
            collected.extend(RawRecord(line=line, kind=kind) for line in stdout.splitlines())
        return rank_records(collected, mode=config.mode, kinds=config.kinds, limit=config.limit)


class ListingProvider:
    """Replay captured ``ls -lh``/``du -sh`` (or ``<count> <path>``) output."""

    def __init__(self, text: str, *, source: str = "<listing>") -> None:
        self._text = text
        self._source = source

    def describe(self, config: ScanConfig) -> str:
        return f"replay {self._source}"

    def records(self, config: ScanConfig) -> list[RawRecord]:
        lines = (RawRecord(line=line) for line in self._text.splitlines())
        return rank_records(lines, mode=config.mode, kinds=config.kinds, limit=config.limit)


__all__ = [
    "BUILTIN_IGNORED_PATHS",
    "FindProvider",
    "ListingProvider",
    "TraversalProvider",
    "count_command",
    "directory_command",
    "file_command",
    "prune_expression",
    "rank_records",
]
