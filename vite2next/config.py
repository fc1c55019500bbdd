"""Configuration loading for vite2next (.vite2next.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".vite2next.yml"

DEFAULT_NEXT_VERSION = "^14.0.0"
DEFAULT_REACT_VERSION = "^18.2.0"

_PACKAGE_MANAGERS = {"npm", "yarn", "pnpm", "bun"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class MigrationConfig:
    """Represents the settings defined in .vite2next.yml."""

    root: Path
    next_version: str = DEFAULT_NEXT_VERSION
    react_version: str = DEFAULT_REACT_VERSION
    app_dir: Optional[str] = None
    skip_install: bool = False
    package_manager: Optional[str] = None
    exclude_paths: List[str] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)
    templates_dir: Optional[Path] = None


def load_config(config_path: Path) -> MigrationConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MigrationConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    package_manager = _as_str(data.get("package_manager"))
    if package_manager is not None:
        package_manager = package_manager.lower()
        if package_manager not in _PACKAGE_MANAGERS:
            raise ConfigError(
                f"Unsupported package_manager '{package_manager}' in {CONFIG_FILENAME}"
            )

    templates_dir_str = _as_str(data.get("templates_dir"))
    templates_dir = root / templates_dir_str if templates_dir_str else None

    return MigrationConfig(
        root=root,
        templates_dir=templates_dir,
        next_version=_as_str(data.get("next_version")) or DEFAULT_NEXT_VERSION,
        react_version=_as_str(data.get("react_version")) or DEFAULT_REACT_VERSION,
        app_dir=_as_str(data.get("app_dir")),
        skip_install=_as_bool(data.get("skip_install")) or False,
        package_manager=package_manager,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        steps=_as_str_list(data.get("steps")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
