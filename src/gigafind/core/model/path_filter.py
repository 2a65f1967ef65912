from __future__ import annotations

import posixpath
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING

from gigafind.core.model.types import EntryKind

if TYPE_CHECKING:
    from collections.abc import Sequence

# Directory names that are expected to be large on hosting servers.
BULK_DIRECTORY_NAMES: frozenset[str] = frozenset(
    {"wp-content", "web", "public_html", "storage", "webapps", "app", "releases"}
)

SYSTEM_TOP_LEVEL = "home"
APP_HOSTING_DIR = "webapps"
_APP_HOSTING_DEPTH = 4


def _dedupe_patterns(items: Sequence[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for p in items:
        if p not in seen:
            seen.add(p)
            out.append(p)
    return tuple(out)


def path_components(path: str) -> list[str]:
    """Split *path* into components after collapsing repeated separators.

    ``./`` prefixes and a leading ``/`` are dropped, so ``//home//alice/``
    and ``./home/alice`` both yield ``["home", "alice"]``.
    """
    clean = posixpath.normpath(path) if path else "."
    stripped = clean.lstrip("/")
    if not stripped:
        return []
    return stripped.split("/")


def is_bulk_directory(path: str) -> bool:
    """Return True when *path* is an expected-bulk directory not worth reporting."""
    parts = path_components(path)

    if parts == ["."]:
        return True
    if len(parts) == 1 and parts[0] == SYSTEM_TOP_LEVEL:
        return True
    # a user's home directory, e.g. /home/alice
    if len(parts) == 2 and parts[0] == SYSTEM_TOP_LEVEL:  # noqa: PLR2004
        return True
    if len(parts) == _APP_HOSTING_DEPTH and parts[2] == APP_HOSTING_DIR:
        return True
    return bool(parts) and parts[-1] in BULK_DIRECTORY_NAMES


@dataclass(frozen=True, slots=True)
class ExclusionPolicy:
    """User glob exclusions combined with the built-in bulk-directory heuristic.

    User patterns use ``find -path`` semantics: they are matched against the
    whole path as reported by the provider and ``*`` also matches ``/``.
    """

    patterns: tuple[str, ...]
    heuristics: bool

    def __init__(self, patterns: Sequence[str] = (), *, heuristics: bool = True) -> None:
        object.__setattr__(self, "patterns", _dedupe_patterns(patterns))
        object.__setattr__(self, "heuristics", heuristics)

    def matches_user_pattern(self, path: str) -> bool:
        return any(fnmatchcase(path, pat) for pat in self.patterns)

    def should_exclude(self, path: str, kind: EntryKind = EntryKind.DIRECTORY) -> bool:
        if self.matches_user_pattern(path):
            return True
        # the heuristic never suppresses files
        return self.heuristics and kind is EntryKind.DIRECTORY and is_bulk_directory(path)


def should_exclude(path: str, user_patterns: Sequence[str] = ()) -> bool:
    """Functional form of :meth:`ExclusionPolicy.should_exclude` for directory paths."""
    return ExclusionPolicy(user_patterns).should_exclude(path)


__all__ = [
    "BULK_DIRECTORY_NAMES",
    "ExclusionPolicy",
    "is_bulk_directory",
    "path_components",
    "should_exclude",
]
