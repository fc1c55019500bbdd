"""Base classes for migration step plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from jinja2 import Environment

from ..config import DEFAULT_NEXT_VERSION, DEFAULT_REACT_VERSION
from ..logging import get_logger
from ..models import ProjectSetup
from ..templating import create_environment

_LOGGER = get_logger("steps")


@dataclass(frozen=True)
class MigrationOptions:
    """Run-wide knobs merged from CLI flags and .vite2next.yml."""

    skip_install: bool = False
    next_version: str = DEFAULT_NEXT_VERSION
    react_version: str = DEFAULT_REACT_VERSION
    exclude_paths: Tuple[str, ...] = ()
    templates_dir: Optional[Path] = None


@dataclass
class MigrationContext:
    """Everything a step may read; the setup descriptor is never mutated."""

    root: Path
    setup: ProjectSetup
    options: MigrationOptions = field(default_factory=MigrationOptions)
    _env: Optional[Environment] = field(default=None, repr=False)

    @property
    def env(self) -> Environment:
        if self._env is None:
            extra = (self.options.templates_dir,) if self.options.templates_dir else ()
            self._env = create_environment(extra)
        return self._env

    def relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)


@dataclass
class StepResult:
    """Files touched by one step plus any operator-facing warnings."""

    name: str
    written: List[Path] = field(default_factory=list)
    updated: List[Path] = field(default_factory=list)
    removed: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.written or self.updated or self.removed)


class MigrationStep(ABC):
    """Contract for steps that transform the project in place."""

    name: str = ""
    title: str = ""
    # Names of steps that have to run after this one, e.g. "cleanup" for
    # steps reading index.html or vite.config.*.
    run_before: Tuple[str, ...] = ()

    @abstractmethod
    def supports(self, context: MigrationContext) -> bool:
        """Return True when this step should run for the project."""

    @abstractmethod
    def apply(self, context: MigrationContext) -> StepResult:
        """Perform the step and describe what changed."""


def write_new_file(context: MigrationContext, result: StepResult, path: Path, content: str) -> bool:
    """Write `content` unless `path` exists; record the outcome on `result`."""
    if path.exists():
        result.skipped.append(path)
        _LOGGER.info("%s already exists, skipping", context.relative(path))
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    result.written.append(path)
    _LOGGER.info("Created %s", context.relative(path))
    return True
