"""Helpers for reading and editing package.json and sibling JSON configs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .logging import get_logger
from .models import PackageManager

PACKAGE_JSON = "package.json"

_LOGGER = get_logger("manifest")


class ManifestError(ValueError):
    """Raised when a JSON manifest exists but cannot be decoded."""


def read_json(path: Path) -> Dict[str, Any]:
    """Return the parsed JSON object stored at `path`."""
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"{path.name} must contain a JSON object at the root")
    return data


def write_json(path: Path, data: Dict[str, Any]) -> None:
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def load_package_json(root: Path) -> Dict[str, Any]:
    """Return the parsed package.json contents, or an empty dict when unusable."""
    package_json = root / PACKAGE_JSON
    if not package_json.exists():
        return {}
    try:
        return read_json(package_json)
    except ManifestError as exc:
        _LOGGER.warning("%s; continuing with an empty manifest", exc)
        return {}


def dependency_names(package_json: Dict[str, Any], *sections: str) -> List[str]:
    """Return dependency names declared in the given sections."""
    names: List[str] = []
    for section in sections or ("dependencies", "devDependencies"):
        deps = package_json.get(section)
        if isinstance(deps, dict):
            names.extend(deps.keys())
    return names


def has_dependency(package_json: Dict[str, Any], names: Iterable[str], *sections: str) -> bool:
    declared = set(dependency_names(package_json, *sections))
    return any(name in declared for name in names)


def detect_package_manager(root: Path, package_json: Dict[str, Any]) -> PackageManager:
    """Infer the package manager from lockfiles, then the packageManager field."""
    manager = PackageManager.NPM
    if (root / "yarn.lock").exists():
        manager = PackageManager.YARN
    elif (root / "pnpm-lock.yaml").exists():
        manager = PackageManager.PNPM
    elif (root / "bun.lockb").exists() or (root / "bun.lock").exists():
        manager = PackageManager.BUN

    field = package_json.get("packageManager")
    if isinstance(field, str):
        name = field.split("@", 1)[0].strip().lower()
        for candidate in PackageManager:
            if candidate.value == name:
                manager = candidate
                break
    return manager


def install_command(manager: PackageManager) -> List[str]:
    if manager is PackageManager.YARN:
        return ["yarn"]
    return [manager.value, "install"]


def run_script_command(script: str, manager: PackageManager) -> str:
    if manager is PackageManager.YARN:
        return f"yarn {script}"
    if manager is PackageManager.PNPM:
        return f"pnpm {script}"
    if manager is PackageManager.BUN:
        return f"bun run {script}"
    return f"npm run {script}"


__all__ = [
    "ManifestError",
    "PACKAGE_JSON",
    "dependency_names",
    "detect_package_manager",
    "has_dependency",
    "install_command",
    "load_package_json",
    "read_json",
    "run_script_command",
    "write_json",
]
