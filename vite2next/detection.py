"""Project setup detection run before any migration step."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from .logging import get_logger
from .manifest import PACKAGE_JSON, detect_package_manager, has_dependency, load_package_json
from .models import CssFramework, ProjectSetup
from .scanner import safe_read

_LOGGER = get_logger("detection")

ROUTER_PACKAGES = ("react-router-dom", "react-router")

# Checked in order; the first framework with a matching dependency wins.
_CSS_FRAMEWORK_PACKAGES = (
    (CssFramework.STYLED, ("styled-components",)),
    (CssFramework.EMOTION, ("@emotion/react", "@emotion/styled")),
    (CssFramework.MUI, ("@mui/material",)),
    (CssFramework.CHAKRA, ("@chakra-ui/react",)),
)

_TAILWIND_CONFIGS = (
    "tailwind.config.js",
    "tailwind.config.ts",
    "tailwind.config.cjs",
    "tailwind.config.mjs",
)
_POSTCSS_CONFIGS = ("postcss.config.js", "postcss.config.cjs", "postcss.config.mjs")
_VITE_CONFIGS = ("vite.config.js", "vite.config.ts", "vite.config.mjs", "vite.config.mts")


class ProjectValidationError(RuntimeError):
    """Raised when the target directory cannot be migrated at all."""


def validate_project_directory(target: Path) -> Path:
    """Return the package.json path, raising when the directory is unusable."""
    if not target.exists():
        raise ProjectValidationError(f"Directory {target} does not exist")
    if not target.is_dir():
        raise ProjectValidationError(f"{target} is not a directory")
    package_json = target / PACKAGE_JSON
    if not package_json.exists():
        raise ProjectValidationError(f"No package.json found in {target}")
    return package_json


def is_vite_project(root: Path) -> bool:
    package_json = load_package_json(root)
    if has_dependency(package_json, ("vite",)):
        return True
    return any((root / name).exists() for name in _VITE_CONFIGS)


def detect_project_setup(root: Path, *, custom_output_dir: Optional[Path] = None) -> ProjectSetup:
    """Inspect the project once and return an immutable setup descriptor."""
    package_json = load_package_json(root)
    setup = ProjectSetup(
        uses_typescript=(root / "tsconfig.json").exists(),
        uses_router=has_dependency(package_json, ROUTER_PACKAGES, "dependencies"),
        css_framework=detect_css_framework(root, package_json),
        package_manager=detect_package_manager(root, package_json),
        custom_output_dir=custom_output_dir,
    )
    _LOGGER.debug("Detected project setup: %s", setup)
    return setup


def detect_css_framework(root: Path, package_json: Dict[str, Any]) -> CssFramework:
    if has_dependency(package_json, ("tailwindcss",)):
        return CssFramework.TAILWIND
    for framework, packages in _CSS_FRAMEWORK_PACKAGES:
        if has_dependency(package_json, packages, "dependencies"):
            return framework
    if any((root / name).exists() for name in _TAILWIND_CONFIGS):
        return CssFramework.TAILWIND
    for name in _POSTCSS_CONFIGS:
        if "tailwindcss" in safe_read(root / name):
            return CssFramework.TAILWIND
    return CssFramework.NONE


__all__ = [
    "ProjectValidationError",
    "ROUTER_PACKAGES",
    "detect_css_framework",
    "detect_project_setup",
    "is_vite_project",
    "validate_project_directory",
]
