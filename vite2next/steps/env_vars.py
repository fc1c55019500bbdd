"""Rename Vite environment variables to their Next.js public equivalents."""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import List

from ..logging import get_logger
from ..scanner import SCRIPT_EXTENSIONS, iter_project_files, safe_read
from .base import MigrationContext, MigrationStep, StepResult

_LOGGER = get_logger("steps.env_vars")

_VITE_PREFIX_RE = re.compile(r"\bVITE_")
_BASE_URL_RE = re.compile(r"^\s*BASE_URL\s*=\s*(.+?)\s*$", re.MULTILINE)
_BASE_PATH_KEY = "NEXT_PUBLIC_BASE_PATH"
IMPORT_META_ENV = "import.meta.env"

IMPORT_META_ENV_REPLACEMENTS = (
    ("import.meta.env.MODE", "process.env.NODE_ENV"),
    ("import.meta.env.PROD", "process.env.NODE_ENV === 'production'"),
    ("import.meta.env.DEV", "process.env.NODE_ENV !== 'production'"),
    ("import.meta.env.SSR", "typeof window === 'undefined'"),
    ("import.meta.env.VITE_*", "process.env.NEXT_PUBLIC_*"),
)


def env_files(root: Path) -> List[Path]:
    return sorted(path for path in root.glob(".env*") if path.is_file())


def rewrite_env_text(text: str) -> str:
    """Return `text` with VITE_ prefixes renamed and a base path entry appended."""
    updated = _VITE_PREFIX_RE.sub("NEXT_PUBLIC_", text)
    match = _BASE_URL_RE.search(updated)
    if match and f"{_BASE_PATH_KEY}=" not in updated:
        if updated and not updated.endswith("\n"):
            updated += "\n"
        updated += f"\n# Added by vite2next\n{_BASE_PATH_KEY}={match.group(1)}\n"
    return updated


def find_import_meta_env(root: Path, exclude_paths=()) -> List[PurePosixPath]:
    return [
        path
        for path in iter_project_files(root, exclude_paths)
        if path.suffix in SCRIPT_EXTENSIONS and IMPORT_META_ENV in safe_read(root / path)
    ]


class EnvVarsStep(MigrationStep):
    name = "env-vars"
    title = "Migrating environment variables"

    def supports(self, context: MigrationContext) -> bool:
        return True

    def apply(self, context: MigrationContext) -> StepResult:
        result = StepResult(name=self.name)
        files = env_files(context.root)
        if not files:
            _LOGGER.info("No .env files found")

        for path in files:
            original = path.read_text(encoding="utf-8")
            updated = rewrite_env_text(original)
            if updated != original:
                path.write_text(updated, encoding="utf-8")
                result.updated.append(path)
                _LOGGER.info("Updated %s (VITE_ -> NEXT_PUBLIC_)", path.name)

        usages = find_import_meta_env(context.root, context.options.exclude_paths)
        for usage in usages:
            _LOGGER.debug("Found %s usage in %s", IMPORT_META_ENV, usage)
        if usages:
            listed = ", ".join(str(usage) for usage in usages)
            hints = "; ".join(f"{old} -> {new}" for old, new in IMPORT_META_ENV_REPLACEMENTS)
            result.warnings.append(
                f"Update {IMPORT_META_ENV} usages manually in {listed} ({hints})"
            )
        else:
            _LOGGER.info("No %s usages found", IMPORT_META_ENV)
        return result
