"""Adjust tsconfig.json so the Next.js compiler accepts the project."""

from __future__ import annotations

from typing import Any, Dict, List

from ..logging import get_logger
from ..manifest import ManifestError, read_json, write_json
from .base import MigrationContext, MigrationStep, StepResult

_LOGGER = get_logger("steps.tsconfig")

TSCONFIG = "tsconfig.json"

REQUIRED_COMPILER_OPTIONS: Dict[str, Any] = {
    "jsx": "preserve",
    "esModuleInterop": True,
    "allowJs": True,
    "forceConsistentCasingInFileNames": True,
    "incremental": True,
}
INCLUDE_ENTRIES = ("./dist/types/**/*.ts", "./next-env.d.ts")
EXCLUDE_ENTRIES = ("./node_modules",)
DROPPED_REFERENCES = ("./tsconfig.node.json", "./tsconfig.app.json")


def ensure_list_entries(config: Dict[str, Any], key: str, entries) -> bool:
    """Append missing `entries` to the list stored under `key`."""
    current = config.get(key)
    if not isinstance(current, list):
        current = []
        config[key] = current
    changed = False
    for entry in entries:
        if entry not in current:
            current.append(entry)
            changed = True
    return changed


def update_tsconfig(config: Dict[str, Any]) -> List[str]:
    """Apply the Next.js settings in place and describe each change."""
    changes: List[str] = []

    files = config.get("files")
    if isinstance(files, list) and not files:
        del config["files"]
        changes.append("Removed empty files array")

    options = config.get("compilerOptions")
    if not isinstance(options, dict):
        options = {}
        config["compilerOptions"] = options
    for key, value in REQUIRED_COMPILER_OPTIONS.items():
        if options.get(key) != value:
            options[key] = value
            changes.append(f"Set {key} to {value!r}")

    plugins = options.get("plugins")
    if not isinstance(plugins, list):
        plugins = []
        options["plugins"] = plugins
    if not any(isinstance(plugin, dict) and plugin.get("name") == "next" for plugin in plugins):
        plugins.append({"name": "next"})
        changes.append("Added the next plugin")

    if ensure_list_entries(config, "include", INCLUDE_ENTRIES):
        changes.append("Updated include array with Next.js entries")
    if ensure_list_entries(config, "exclude", EXCLUDE_ENTRIES):
        changes.append("Added node_modules to exclude array")

    references = config.get("references")
    if isinstance(references, list):
        kept = [
            ref
            for ref in references
            if not (isinstance(ref, dict) and ref.get("path") in DROPPED_REFERENCES)
        ]
        if len(kept) != len(references):
            changes.append("Removed Vite tsconfig references")
        if kept:
            config["references"] = kept
        else:
            del config["references"]
            changes.append("Removed empty references array")

    return changes


class TsConfigStep(MigrationStep):
    name = "tsconfig"
    title = "Updating TypeScript configuration"

    def supports(self, context: MigrationContext) -> bool:
        return context.setup.uses_typescript and (context.root / TSCONFIG).exists()

    def apply(self, context: MigrationContext) -> StepResult:
        result = StepResult(name=self.name)
        path = context.root / TSCONFIG
        try:
            config = read_json(path)
        except ManifestError as exc:
            # tsconfig.json commonly carries comments, which plain JSON rejects.
            result.warnings.append(f"{exc}; update {TSCONFIG} manually for Next.js")
            return result

        changes = update_tsconfig(config)
        if not changes:
            _LOGGER.info("No changes needed for %s", TSCONFIG)
            return result
        for change in changes:
            _LOGGER.debug("%s", change)
        write_json(path, config)
        result.updated.append(path)
        _LOGGER.info("Updated %s", TSCONFIG)
        return result
