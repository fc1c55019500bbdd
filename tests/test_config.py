"""Tests for vite2next.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from vite2next.config import (
    DEFAULT_NEXT_VERSION,
    DEFAULT_REACT_VERSION,
    ConfigError,
    MigrationConfig,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, MigrationConfig)
    assert config.root == tmp_path.resolve()
    assert config.next_version == DEFAULT_NEXT_VERSION
    assert config.react_version == DEFAULT_REACT_VERSION
    assert config.app_dir is None
    assert config.skip_install is False
    assert config.package_manager is None
    assert config.exclude_paths == []
    assert config.steps == []
    assert config.templates_dir is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".vite2next.yml"
    config_file.write_text(
        """
next_version: "^14.2.3"
react_version: "^18.3.1"
app_dir: "web/app"
skip_install: yes
package_manager: PNPM
exclude_paths:
  - "legacy/"
  - "*.stories.tsx"
steps: [entrypoint, cleanup]
templates_dir: "templates"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.next_version == "^14.2.3"
    assert config.react_version == "^18.3.1"
    assert config.app_dir == "web/app"
    assert config.skip_install is True
    assert config.package_manager == "pnpm"
    assert config.exclude_paths == ["legacy/", "*.stories.tsx"]
    assert config.steps == ["entrypoint", "cleanup"]
    assert config.templates_dir == tmp_path.resolve() / "templates"


def test_load_config_accepts_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".vite2next.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).next_version == DEFAULT_NEXT_VERSION


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".vite2next.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".vite2next.yml").write_text("next_version: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_load_config_rejects_unknown_package_manager(tmp_path: Path) -> None:
    (tmp_path / ".vite2next.yml").write_text("package_manager: pip\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Unsupported package_manager 'pip'"):
        load_config(tmp_path)
