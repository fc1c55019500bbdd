"""Move root-level static files into public/ and document the rest."""

from __future__ import annotations

import shutil
from typing import List

from ..entrypoint import resolve_app_dir
from ..logging import get_logger
from ..templating import render
from .base import MigrationContext, MigrationStep, StepResult, write_new_file

_LOGGER = get_logger("steps.static_assets")

PUBLIC_DIR = "public"
ROOT_ASSETS = ("favicon.ico", "robots.txt", "site.webmanifest", "favicon.png", "logo.svg")
ASSET_DIRECTORIES = ("assets", "static", "images", "img", "fonts", "icons")
ASSETS_GUIDE = "docs/static-assets-migration.md"


def find_asset_directories(context: MigrationContext) -> List[str]:
    return [name for name in ASSET_DIRECTORIES if (context.root / name).is_dir()]


class StaticAssetsStep(MigrationStep):
    name = "static-assets"
    title = "Migrating static assets"

    def supports(self, context: MigrationContext) -> bool:
        return True

    def apply(self, context: MigrationContext) -> StepResult:
        result = StepResult(name=self.name)
        public = context.root / PUBLIC_DIR
        public.mkdir(exist_ok=True)

        copied = 0
        for name in ROOT_ASSETS:
            source = context.root / name
            if not source.is_file():
                continue
            destination = public / name
            if destination.exists():
                result.skipped.append(destination)
                continue
            shutil.copy2(source, destination)
            result.written.append(destination)
            copied += 1
            _LOGGER.info("Copied %s to %s/", name, PUBLIC_DIR)

        asset_dirs = find_asset_directories(context)
        for directory in asset_dirs:
            result.warnings.append(
                f"Static assets in '{directory}/' should be moved to '{PUBLIC_DIR}/{directory}/'"
            )
        if not copied and not asset_dirs:
            _LOGGER.info("No common static assets were detected")

        setup = context.setup
        helper = resolve_app_dir(setup, context.root) / "utils" / f"static-assets.{setup.module_extension}"
        helper_path = context.relative(helper)
        write_new_file(
            context,
            result,
            helper,
            render(context.env, "support/static_assets.j2", typescript=setup.uses_typescript),
        )
        write_new_file(
            context,
            result,
            context.root / ASSETS_GUIDE,
            render(
                context.env,
                "docs/static_assets_migration.md.j2",
                asset_dirs=asset_dirs,
                helper_path=helper_path,
                helper_import=helper_path.rsplit(".", 1)[0],
            ),
        )
        return result
