"""Create next.config.mjs from what can be read out of the Vite setup."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..logging import get_logger
from ..scanner import safe_read
from ..templating import render
from .base import MigrationContext, MigrationStep, StepResult

_LOGGER = get_logger("steps.next_config")

NEXT_CONFIG = "next.config.mjs"
VITE_CONFIGS = ("vite.config.js", "vite.config.ts", "vite.config.mjs", "vite.config.mts")

_BASE_RE = re.compile(r"""\bbase:\s*['"]([^'"]+)['"]""")
_PUBLIC_DIR_RE = re.compile(r"""\bpublicDir:\s*['"]([^'"]+)['"]""")
_OUT_DIR_RE = re.compile(r"""\boutDir:\s*['"]([^'"]+)['"]""")
_ENV_LINE_RE = r"^\s*{key}\s*=\s*(.+?)\s*$"


@dataclass(frozen=True)
class ViteSettings:
    """Settings recovered from a vite.config file by pattern matching."""

    base: Optional[str] = None
    public_dir: Optional[str] = None
    out_dir: Optional[str] = None


def parse_vite_config(text: str) -> ViteSettings:
    """Pull string-literal settings out of a Vite config without evaluating it."""

    def _first(pattern: re.Pattern[str]) -> Optional[str]:
        match = pattern.search(text)
        return match.group(1) if match else None

    return ViteSettings(
        base=_first(_BASE_RE),
        public_dir=_first(_PUBLIC_DIR_RE),
        out_dir=_first(_OUT_DIR_RE),
    )


def read_vite_settings(root: Path) -> Optional[ViteSettings]:
    for name in VITE_CONFIGS:
        path = root / name
        if path.is_file():
            _LOGGER.debug("Found Vite config at %s", name)
            return parse_vite_config(safe_read(path))
    return None


def read_env_value(root: Path, *keys: str) -> Optional[str]:
    """Return the first of `keys` assigned in the project's .env file."""
    text = safe_read(root / ".env")
    if not text:
        return None
    for key in keys:
        match = re.search(_ENV_LINE_RE.format(key=re.escape(key)), text, re.MULTILINE)
        if match:
            return match.group(1)
    return None


def normalize_base_path(raw: Optional[str]) -> Optional[str]:
    """Return a '/prefix' style base path, or None for the site root."""
    if not raw:
        return None
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1].strip()
    if not value:
        return None
    if not value.startswith("/"):
        value = "/" + value
    value = value.rstrip("/")
    return value or None


class NextConfigStep(MigrationStep):
    """Writes next.config.mjs configured for a static single-page export."""

    name = "next-config"
    title = "Creating Next.js configuration file"
    run_before = ("cleanup",)

    def supports(self, context: MigrationContext) -> bool:
        return True

    def apply(self, context: MigrationContext) -> StepResult:
        result = StepResult(name=self.name)
        target = context.root / NEXT_CONFIG
        if target.exists():
            _LOGGER.info("%s already exists, skipping creation", NEXT_CONFIG)
            result.skipped.append(target)
            return result

        vite = read_vite_settings(context.root) or ViteSettings()
        base_path = normalize_base_path(
            read_env_value(context.root, "BASE_URL", "BASE_PATH") or vite.base
        )
        if base_path:
            _LOGGER.info("Using basePath %s", base_path)

        content = render(
            context.env,
            "support/next.config.mjs.j2",
            base_path=base_path,
            public_dir=vite.public_dir,
        )
        target.write_text(content, encoding="utf-8")
        result.written.append(target)
        _LOGGER.info("Created %s", NEXT_CONFIG)
        return result
