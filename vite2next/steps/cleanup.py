"""Remove Vite-only files and packages once the Next.js entrypoint exists."""

from __future__ import annotations

from ..logging import get_logger
from ..manifest import PACKAGE_JSON, ManifestError, read_json, write_json
from .base import MigrationContext, MigrationStep, StepResult

_LOGGER = get_logger("steps.cleanup")

VITE_FILES = (
    "index.html",
    "vite-env.d.ts",
    "src/vite-env.d.ts",
    "tsconfig.node.json",
    "tsconfig.app.json",
    "vite.config.js",
    "vite.config.ts",
    "vite.config.mjs",
    "vite.config.mts",
    "vite.app.config.js",
    "vite.app.config.ts",
    "vite.app.config.jsx",
    "vite.app.config.tsx",
    "main.js",
    "main.jsx",
    "main.tsx",
    "src/main.js",
    "src/main.jsx",
    "src/main.ts",
    "src/main.tsx",
)


def is_vite_package(name: str) -> bool:
    """True for vite itself and its plugins; vitest is kept."""
    lowered = name.lower()
    return (
        lowered == "vite"
        or lowered.startswith(("@vitejs/", "vite-"))
        or "vite-plugin" in lowered
    )


class CleanupStep(MigrationStep):
    """Deletes the Vite bootstrap files and drops Vite from package.json."""

    name = "cleanup"
    title = "Cleaning up Vite files"

    def supports(self, context: MigrationContext) -> bool:
        return True

    def apply(self, context: MigrationContext) -> StepResult:
        result = StepResult(name=self.name)
        for relative in VITE_FILES:
            path = context.root / relative
            if path.is_file():
                path.unlink()
                _LOGGER.info("Removed %s", relative)
                result.removed.append(path)

        if not result.removed:
            _LOGGER.info("No Vite files found to remove")

        package_json = context.root / PACKAGE_JSON
        if not package_json.exists():
            return result
        try:
            manifest = read_json(package_json)
        except ManifestError as exc:
            result.warnings.append(f"{exc}; Vite dependencies were not removed")
            return result

        removed_packages = []
        for section in ("dependencies", "devDependencies"):
            deps = manifest.get(section)
            if not isinstance(deps, dict):
                continue
            for dep in [name for name in deps if is_vite_package(name)]:
                del deps[dep]
                removed_packages.append(dep)

        if removed_packages:
            write_json(package_json, manifest)
            result.updated.append(package_json)
            _LOGGER.info(
                "Removed %d Vite-related dependencies: %s",
                len(removed_packages),
                ", ".join(removed_packages),
            )
        else:
            _LOGGER.info("No Vite dependencies found in package.json")
        return result
