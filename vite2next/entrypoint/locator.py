"""Locate the root component and global stylesheet of a Vite project."""

from __future__ import annotations

import posixpath
import re
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Optional, Sequence

from ..logging import get_logger
from ..models import ArtifactKind, LocatedArtifact
from ..scanner import find_by_basename, iter_project_files

_LOGGER = get_logger("entrypoint.locator")

COMPONENT_CANDIDATES = ("App.tsx", "App.jsx", "App.ts", "App.js")
ENTRY_SCRIPT_CANDIDATES = (
    "main.tsx",
    "main.jsx",
    "main.ts",
    "main.js",
    "index.tsx",
    "index.jsx",
    "index.ts",
    "index.js",
)
STYLESHEET_CANDIDATES = (
    "index.css",
    "global.css",
    "globals.css",
    "app.css",
    "style.css",
    "styles.css",
)

_PROBE_ORDER = (".tsx", ".jsx", ".ts", ".js")

# `import App from './App'`, optionally with an explicit script extension.
_ROOT_IMPORT_RE = re.compile(
    r"""import\s+\w+\s+from\s+['"](?P<specifier>(?:[^'"\n]*/)?app)(?P<extension>\.(?:tsx|jsx|ts|js))?['"]""",
    re.IGNORECASE,
)


class LocatorStrategy(ABC):
    """One way of finding an artifact; returns None when it has no answer."""

    @abstractmethod
    def locate(self, root: Path) -> Optional[LocatedArtifact]:
        """Return the artifact found under `root`, if any."""


class FilenameStrategy(LocatorStrategy):
    """Match well-known basenames anywhere in the tree.

    With `candidate_priority` the candidate list decides precedence and the
    traversal order only breaks ties; otherwise the first file in traversal
    order matching any candidate wins.
    """

    def __init__(
        self,
        candidates: Sequence[str],
        kind: ArtifactKind,
        *,
        candidate_priority: bool = True,
        exclude_paths: Sequence[str] = (),
    ) -> None:
        self.candidates = tuple(candidates)
        self.kind = kind
        self.candidate_priority = candidate_priority
        self.exclude_paths = tuple(exclude_paths)

    def locate(self, root: Path) -> Optional[LocatedArtifact]:
        if self.candidate_priority:
            for candidate in self.candidates:
                for path in find_by_basename(root, candidate, self.exclude_paths):
                    return LocatedArtifact(relative_path=path, kind=self.kind)
            return None

        wanted = {candidate.lower() for candidate in self.candidates}
        for path in iter_project_files(root, self.exclude_paths):
            if path.name.lower() in wanted:
                return LocatedArtifact(relative_path=path, kind=self.kind)
        return None


class EntryImportStrategy(LocatorStrategy):
    """Follow the root component import out of the Vite entry script."""

    def __init__(
        self,
        entry_candidates: Sequence[str] = ENTRY_SCRIPT_CANDIDATES,
        *,
        exclude_paths: Sequence[str] = (),
    ) -> None:
        self.entry_candidates = tuple(entry_candidates)
        self.exclude_paths = tuple(exclude_paths)

    def locate(self, root: Path) -> Optional[LocatedArtifact]:
        for candidate in self.entry_candidates:
            entry = next(find_by_basename(root, candidate, self.exclude_paths), None)
            if entry is None:
                continue
            try:
                content = root.joinpath(*entry.parts).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                _LOGGER.warning("Error reading entry script %s: %s", entry, exc)
                continue

            match = _ROOT_IMPORT_RE.search(content)
            if not match:
                continue
            resolved = self._resolve(root, entry, match.group("specifier"), match.group("extension"))
            if resolved is None:
                _LOGGER.debug(
                    "Ignoring non-relative root component import %r in %s",
                    match.group("specifier"),
                    entry,
                )
                continue
            _LOGGER.debug("Resolved root component %s via %s", resolved, entry)
            return LocatedArtifact(relative_path=resolved, kind=ArtifactKind.COMPONENT)
        return None

    @staticmethod
    def _resolve(
        root: Path,
        entry: PurePosixPath,
        specifier: str,
        extension: Optional[str],
    ) -> Optional[PurePosixPath]:
        if specifier.startswith(("./", "../")):
            joined = posixpath.join(entry.parent.as_posix(), specifier)
        elif specifier.startswith("/"):
            joined = specifier.lstrip("/")
        else:
            return None

        normalised = posixpath.normpath(joined)
        if normalised == ".." or normalised.startswith("../"):
            return None

        if extension:
            return PurePosixPath(normalised + extension)
        for probe in _PROBE_ORDER:
            candidate = PurePosixPath(normalised + probe)
            if root.joinpath(*candidate.parts).is_file():
                return candidate
        return PurePosixPath(normalised)


class ArtifactLocator:
    """Runs locator strategies in fixed priority order; first hit wins."""

    def __init__(self, exclude_paths: Sequence[str] = ()) -> None:
        self.component_strategies: tuple[LocatorStrategy, ...] = (
            FilenameStrategy(
                COMPONENT_CANDIDATES,
                ArtifactKind.COMPONENT,
                exclude_paths=exclude_paths,
            ),
            EntryImportStrategy(exclude_paths=exclude_paths),
        )
        self.stylesheet_strategies: tuple[LocatorStrategy, ...] = (
            FilenameStrategy(
                STYLESHEET_CANDIDATES,
                ArtifactKind.STYLESHEET,
                candidate_priority=False,
                exclude_paths=exclude_paths,
            ),
        )

    def locate_component(self, root: Path) -> Optional[LocatedArtifact]:
        return _first_hit(self.component_strategies, root)

    def locate_stylesheet(self, root: Path) -> Optional[LocatedArtifact]:
        return _first_hit(self.stylesheet_strategies, root)


def _first_hit(strategies: Sequence[LocatorStrategy], root: Path) -> Optional[LocatedArtifact]:
    for strategy in strategies:
        found = strategy.locate(root)
        if found is not None:
            return found
    return None


def locate_component(root: Path, exclude_paths: Sequence[str] = ()) -> Optional[LocatedArtifact]:
    """Return the root component, or None when no strategy finds one."""
    return ArtifactLocator(exclude_paths).locate_component(root)


def locate_stylesheet(root: Path, exclude_paths: Sequence[str] = ()) -> Optional[LocatedArtifact]:
    """Return the first conventional global stylesheet, or None."""
    return ArtifactLocator(exclude_paths).locate_stylesheet(root)


def find_shadowed_stylesheet(root: Path, stylesheet: LocatedArtifact) -> Optional[PurePosixPath]:
    """Return an `index.css` that sorts after the `App.css` chosen beside it.

    The Vite React template keeps component styles in `App.css` and global
    styles in `index.css`; only the first one found is imported by the layout.
    """
    if stylesheet.relative_path.name.lower() != "app.css":
        return None
    directory = root.joinpath(*stylesheet.relative_path.parent.parts)
    for entry in sorted(directory.iterdir(), key=lambda path: path.name):
        if entry.is_file() and entry.name.lower() == "index.css":
            return stylesheet.relative_path.parent / entry.name
    return None


__all__ = [
    "ArtifactLocator",
    "COMPONENT_CANDIDATES",
    "ENTRY_SCRIPT_CANDIDATES",
    "EntryImportStrategy",
    "FilenameStrategy",
    "LocatorStrategy",
    "STYLESHEET_CANDIDATES",
    "find_shadowed_stylesheet",
    "locate_component",
    "locate_stylesheet",
]
