"""Runs the migration steps against a project and collects the outcome."""

from __future__ import annotations

import dataclasses
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .config import MigrationConfig
from .detection import detect_project_setup
from .logging import StepProgress, get_logger
from .manifest import run_script_command
from .models import CssFramework, PackageManager, ProjectSetup
from .steps import (
    MigrationContext,
    MigrationOptions,
    MigrationStep,
    StepResult,
    check_run_order,
    discover_steps,
)


@dataclass
class MigrationReport:
    """Aggregated step results for one migration run."""

    root: Path
    setup: ProjectSetup
    results: List[StepResult] = field(default_factory=list)
    elapsed: float = 0.0

    def _collect(self, attribute: str) -> List[Path]:
        collected: List[Path] = []
        for result in self.results:
            collected.extend(getattr(result, attribute))
        return collected

    @property
    def written(self) -> List[Path]:
        return self._collect("written")

    @property
    def updated(self) -> List[Path]:
        return self._collect("updated")

    @property
    def removed(self) -> List[Path]:
        return self._collect("removed")

    @property
    def skipped(self) -> List[Path]:
        return self._collect("skipped")

    @property
    def warnings(self) -> List[str]:
        return [warning for result in self.results for warning in result.warnings]


def build_options(
    config: MigrationConfig,
    *,
    skip_install: bool = False,
    next_version: Optional[str] = None,
) -> MigrationOptions:
    """Merge CLI overrides on top of the configuration file."""
    return MigrationOptions(
        skip_install=skip_install or config.skip_install,
        next_version=next_version or config.next_version,
        react_version=config.react_version,
        exclude_paths=tuple(config.exclude_paths),
        templates_dir=config.templates_dir,
    )


def resolve_setup(
    root: Path,
    config: MigrationConfig,
    *,
    app_dir: Optional[str] = None,
    force_npm: bool = False,
) -> ProjectSetup:
    """Detect the project setup, then apply configured and CLI overrides."""
    output_dir = app_dir or config.app_dir
    setup = detect_project_setup(root, custom_output_dir=Path(output_dir) if output_dir else None)
    if force_npm:
        return dataclasses.replace(setup, package_manager=PackageManager.NPM)
    if config.package_manager:
        return dataclasses.replace(setup, package_manager=PackageManager(config.package_manager))
    return setup


def next_steps(setup: ProjectSetup) -> List[str]:
    """Follow-up suggestions printed once the migration completes."""
    suggestions = [
        f'Run "{run_script_command("dev", setup.package_manager)}" to start your Next.js application',
        "Check the docs/ directory for migration guides",
    ]
    if setup.uses_router:
        suggestions.append("Consider migrating from React Router to the Next.js App Router")
    suggestions.append("Optimize images with the Next.js <Image> component")
    framework_hints = {
        CssFramework.TAILWIND: "Make sure tailwind.config content globs cover the app directory",
        CssFramework.STYLED: "Keep styled-components in client components; the registry handles SSR",
        CssFramework.EMOTION: "Keep Emotion styles in client components; the registry handles SSR",
        CssFramework.MUI: "Configure your Material UI theme in the generated providers file",
        CssFramework.CHAKRA: "Configure your Chakra UI theme in the generated providers file",
    }
    hint = framework_hints.get(setup.css_framework)
    if hint:
        suggestions.append(hint)
    suggestions.append("Move client-only code behind 'use client' boundaries as you adopt server components")
    return suggestions


class Migrator:
    """Coordinates the migration steps in order, threading step progress."""

    def __init__(self, steps: Optional[Iterable[MigrationStep]] = None) -> None:
        self._step_overrides = list(steps) if steps is not None else None
        self.logger = get_logger("orchestrator")

    def select_steps(self, config: Optional[MigrationConfig] = None) -> List[MigrationStep]:
        if self._step_overrides is not None:
            check_run_order(self._step_overrides)
            return list(self._step_overrides)
        enabled = config.steps if config is not None and config.steps else None
        return discover_steps(enabled)

    def plan(
        self, context: MigrationContext, config: Optional[MigrationConfig] = None
    ) -> List[MigrationStep]:
        """Return the steps that apply to this project, in run order."""
        return [step for step in self.select_steps(config) if step.supports(context)]

    def run(
        self, context: MigrationContext, config: Optional[MigrationConfig] = None
    ) -> MigrationReport:
        started = time.monotonic()
        steps = self.plan(context, config)
        self.logger.debug("Running %d migration steps for %s", len(steps), context.root)

        report = MigrationReport(root=context.root, setup=context.setup)
        progress = StepProgress(total=len(steps))
        for step in steps:
            progress = progress.advance(step.title, self.logger)
            result = step.apply(context)
            report.results.append(result)
            for warning in result.warnings:
                self.logger.warning("%s", warning)
            self.logger.debug(
                "Step %s finished: %d written, %d updated, %d removed",
                step.name,
                len(result.written),
                len(result.updated),
                len(result.removed),
            )

        report.elapsed = time.monotonic() - started
        return report


__all__ = ["MigrationReport", "Migrator", "build_options", "next_steps", "resolve_setup"]
