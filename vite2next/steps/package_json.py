"""Point package.json scripts and engine constraints at Next.js."""

from __future__ import annotations

import copy
from typing import Any, Dict

from ..logging import get_logger
from ..manifest import PACKAGE_JSON, ManifestError, read_json, write_json
from .base import MigrationContext, MigrationStep, StepResult

_LOGGER = get_logger("steps.package_json")

NEXT_SCRIPTS = {"dev": "next dev", "build": "next build", "start": "next start"}
DEFAULT_LINT_SCRIPT = "next lint"
DEFAULT_BROWSERSLIST = ["last 2 versions", "> 1%", "not dead"]
NODE_ENGINE = ">=18.17.0"
VITE_SCRIPTS = ("dev:host", "vite")


def _is_vite_script(name: str, command: Any) -> bool:
    """Scripts named after Vite, or still invoking the vite binary."""
    if name in VITE_SCRIPTS:
        return True
    return isinstance(command, str) and command.split(" ", 1)[0] == "vite"


def update_manifest(manifest: Dict[str, Any]) -> None:
    scripts = manifest.get("scripts")
    if not isinstance(scripts, dict):
        scripts = {}
        manifest["scripts"] = scripts
    scripts.update(NEXT_SCRIPTS)
    scripts.setdefault("lint", DEFAULT_LINT_SCRIPT)
    for name in [key for key, command in scripts.items() if _is_vite_script(key, command)]:
        del scripts[name]

    if not manifest.get("browserslist"):
        manifest["browserslist"] = list(DEFAULT_BROWSERSLIST)

    engines = manifest.get("engines")
    if not isinstance(engines, dict):
        engines = {}
        manifest["engines"] = engines
    engines["node"] = NODE_ENGINE


class PackageJsonStep(MigrationStep):
    name = "package-json"
    title = "Updating package.json"

    def supports(self, context: MigrationContext) -> bool:
        return (context.root / PACKAGE_JSON).exists()

    def apply(self, context: MigrationContext) -> StepResult:
        result = StepResult(name=self.name)
        path = context.root / PACKAGE_JSON
        try:
            manifest = read_json(path)
        except ManifestError as exc:
            result.warnings.append(f"{exc}; scripts were not updated")
            return result

        before = copy.deepcopy(manifest)
        update_manifest(manifest)
        if manifest == before:
            _LOGGER.info("No changes needed for %s", PACKAGE_JSON)
            return result
        write_json(path, manifest)
        result.updated.append(path)
        _LOGGER.info("Updated %s", PACKAGE_JSON)
        return result
