"""Deterministic project tree traversal shared by the locator and the steps."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, List, Sequence

# Dependency folders, VCS metadata and build output never hold migratable sources.
EXCLUDED_DIRS = frozenset(
    {
        "node_modules",
        ".git",
        ".hg",
        ".svn",
        "dist",
        "build",
        "out",
        ".next",
        ".vite",
        "coverage",
    }
)

SCRIPT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")


@dataclass(frozen=True)
class ExcludeRule:
    """A user supplied exclusion pattern from .vite2next.yml."""

    pattern: str
    directory_only: bool
    anchored: bool

    @classmethod
    def parse(cls, raw: str) -> "ExcludeRule | None":
        pattern = raw.strip()
        if not pattern:
            return None
        directory_only = pattern.endswith("/")
        pattern = pattern.rstrip("/")
        anchored = pattern.startswith("/") or "/" in pattern
        return cls(pattern=pattern.lstrip("/"), directory_only=directory_only, anchored=anchored)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.anchored:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_exclude_rules(patterns: Iterable[str]) -> List[ExcludeRule]:
    rules: List[ExcludeRule] = []
    for pattern in patterns:
        rule = ExcludeRule.parse(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def iter_project_files(
    root: Path, exclude_paths: Sequence[str] = ()
) -> Iterator[PurePosixPath]:
    """Yield project-relative file paths top-down in sorted order."""
    rules = build_exclude_rules(exclude_paths)
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept_dirs = []
        for name in sorted(dirnames):
            if name in EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if any(rule.matches(rel_path, True) for rule in rules):
                continue
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if any(rule.matches(rel_path, False) for rule in rules):
                continue
            yield PurePosixPath(rel_path)


def find_by_basename(
    root: Path,
    basename: str,
    exclude_paths: Sequence[str] = (),
) -> Iterator[PurePosixPath]:
    """Yield files whose basename matches `basename` case-insensitively."""
    wanted = basename.lower()
    for path in iter_project_files(root, exclude_paths):
        if path.name.lower() == wanted:
            yield path


def safe_read(path: Path, *, max_chars: int | None = None) -> str:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""
    return text if max_chars is None else text[:max_chars]


__all__ = [
    "EXCLUDED_DIRS",
    "SCRIPT_EXTENSIONS",
    "ExcludeRule",
    "build_exclude_rules",
    "find_by_basename",
    "iter_project_files",
    "safe_read",
]
