"""Add the Next.js runtime to package.json and install it."""

from __future__ import annotations

import subprocess
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from ..logging import get_logger
from ..manifest import PACKAGE_JSON, ManifestError, install_command, read_json, write_json
from ..models import CssFramework
from .base import MigrationContext, MigrationStep, StepResult

_LOGGER = get_logger("steps.dependencies")

# Packages the generated provider files import for each CSS-in-JS framework.
FRAMEWORK_PACKAGES: Dict[CssFramework, Dict[str, str]] = {
    CssFramework.EMOTION: {"@emotion/cache": "^11.11.0"},
    CssFramework.MUI: {"@mui/material-nextjs": "^5.15.0", "@emotion/cache": "^11.11.0"},
}

Runner = Callable[[List[str], Path], None]


def _default_runner(args: Iterable[str], cwd: Path) -> None:
    subprocess.run(
        list(args),
        cwd=str(cwd),
        check=True,
        text=True,
        capture_output=True,
    )


class DependenciesStep(MigrationStep):
    """Declares next, react and react-dom, then runs the package manager."""

    name = "dependencies"
    title = "Installing Next.js dependencies"

    def __init__(self, runner: Optional[Runner] = None) -> None:
        self._runner = runner or _default_runner

    def supports(self, context: MigrationContext) -> bool:
        return (context.root / PACKAGE_JSON).exists()

    def apply(self, context: MigrationContext) -> StepResult:
        result = StepResult(name=self.name)
        package_json = context.root / PACKAGE_JSON
        try:
            manifest = read_json(package_json)
        except ManifestError as exc:
            result.warnings.append(f"{exc}; Next.js dependencies were not added")
            return result

        deps = manifest.get("dependencies")
        if not isinstance(deps, dict):
            deps = {}
            manifest["dependencies"] = deps

        wanted = {
            "next": context.options.next_version,
            "react": context.options.react_version,
            "react-dom": context.options.react_version,
        }
        wanted.update(FRAMEWORK_PACKAGES.get(context.setup.css_framework, {}))

        added = []
        for name, version in wanted.items():
            if name in deps:
                _LOGGER.debug("%s is already a dependency", name)
                continue
            deps[name] = version
            added.append(name)
            _LOGGER.info("Added %s@%s to dependencies", name, version)

        if context.setup.uses_router:
            _LOGGER.info("Detected React Router dependency; a compatibility layer will be added")

        if added:
            write_json(package_json, manifest)
            result.updated.append(package_json)
        else:
            _LOGGER.info("Next.js dependencies are already declared")

        if context.options.skip_install:
            _LOGGER.info("Skipping dependency installation")
            return result

        warning = self._install(context)
        if warning:
            result.warnings.append(warning)
        return result

    def _install(self, context: MigrationContext) -> Optional[str]:
        manager = context.setup.package_manager
        args = install_command(manager)
        _LOGGER.info("Installing dependencies using %s...", manager.value)
        started = time.monotonic()
        try:
            self._runner(args, context.root)
        except FileNotFoundError:
            return (
                f"Unable to locate '{args[0]}'; install dependencies manually "
                f"with '{' '.join(args)}'"
            )
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit code {exc.returncode}"
            return f"Failed to install dependencies ({detail}); you may need to install them manually"
        _LOGGER.info("Dependencies installed successfully in %.1fs", time.monotonic() - started)
        return None
