"""React Router compatibility helpers for catch-all migrations."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from ..entrypoint import resolve_app_dir, route_directory
from ..logging import get_logger
from ..scanner import SCRIPT_EXTENSIONS, iter_project_files
from ..templating import render
from .base import MigrationContext, MigrationStep, StepResult, write_new_file

_LOGGER = get_logger("steps.router")

ROUTER_FILE_STEMS = frozenset({"routes", "router", "app"})
MIGRATION_GUIDE = "docs/react-router-migration.md"


def find_router_files(context: MigrationContext) -> List[str]:
    """Return files that usually hold React Router route definitions."""
    app_dir = context.relative(resolve_app_dir(context.setup, context.root))
    found = []
    for path in iter_project_files(context.root, context.options.exclude_paths):
        if path.suffix not in SCRIPT_EXTENSIONS or path.stem.lower() not in ROUTER_FILE_STEMS:
            continue
        if str(path).startswith(f"{app_dir}/"):
            continue
        found.append(str(path))
    return found


class RouterStep(MigrationStep):
    """Adds middleware, a hook compatibility module and a migration guide."""

    name = "router"
    title = "Setting up React Router compatibility"

    def supports(self, context: MigrationContext) -> bool:
        return context.setup.uses_router

    def apply(self, context: MigrationContext) -> StepResult:
        result = StepResult(name=self.name)
        router_files = find_router_files(context)
        if not router_files:
            result.warnings.append(
                "Could not find React Router configuration files; "
                "you will need to set up route mapping manually"
            )
            return result
        _LOGGER.debug("Route definitions found in: %s", ", ".join(router_files))

        setup = context.setup
        app_dir = resolve_app_dir(setup, context.root)
        compat = app_dir / "utils" / f"router-compat.{setup.component_extension}"
        compat_path = context.relative(compat)
        planned: List[Tuple[Path, str]] = [
            (
                app_dir.parent / f"middleware.{setup.module_extension}",
                render(context.env, "support/middleware.j2"),
            ),
            (compat, render(context.env, "support/router_compat.j2")),
            (
                context.root / MIGRATION_GUIDE,
                render(
                    context.env,
                    "docs/react_router_migration.md.j2",
                    app_dir=context.relative(app_dir),
                    route_dir=context.relative(route_directory(setup, app_dir)),
                    compat_path=compat_path,
                    compat_import=compat_path.rsplit(".", 1)[0],
                ),
            ),
        ]

        for path, content in planned:
            write_new_file(context, result, path, content)
        return result
