"""Tests for vite2next.detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from vite2next.detection import (
    ProjectValidationError,
    detect_project_setup,
    is_vite_project,
    validate_project_directory,
)
from vite2next.models import CssFramework, PackageManager


def test_validate_project_directory_requires_package_json(tmp_path: Path) -> None:
    with pytest.raises(ProjectValidationError, match="does not exist"):
        validate_project_directory(tmp_path / "missing")
    with pytest.raises(ProjectValidationError, match="No package.json"):
        validate_project_directory(tmp_path)

    (tmp_path / "package.json").write_text("{}", encoding="utf-8")
    assert validate_project_directory(tmp_path) == tmp_path / "package.json"


def test_is_vite_project_checks_dependencies_and_config(project_builder) -> None:
    root = project_builder.path()
    project_builder.write_json("package.json", {"dependencies": {"react": "18"}})
    assert not is_vite_project(root)

    project_builder.write({"vite.config.mts": "export default {}\n"})
    assert is_vite_project(root)


def test_detect_project_setup_for_vite_template(project_builder) -> None:
    project_builder.vite_app(typescript=True)
    project_builder.write({"yarn.lock": ""})

    setup = project_builder.setup()

    assert setup.uses_typescript
    assert not setup.uses_router
    assert setup.css_framework is CssFramework.NONE
    assert setup.package_manager is PackageManager.YARN
    assert setup.custom_output_dir is None


def test_detect_project_setup_router_needs_runtime_dependency(project_builder) -> None:
    project_builder.package_json(dev_dependencies={"react-router-dom": "^6.0.0"})
    assert not project_builder.setup().uses_router

    project_builder.package_json(dependencies={"react-router": "^6.0.0"})
    assert project_builder.setup().uses_router


@pytest.mark.parametrize(
    ("dependencies", "expected"),
    [
        ({"styled-components": "6"}, CssFramework.STYLED),
        ({"@emotion/styled": "11"}, CssFramework.EMOTION),
        ({"@mui/material": "5", "@emotion/react": "11"}, CssFramework.EMOTION),
        ({"@mui/material": "5"}, CssFramework.MUI),
        ({"@chakra-ui/react": "2"}, CssFramework.CHAKRA),
        ({"styled-components": "6", "tailwindcss": "3"}, CssFramework.TAILWIND),
    ],
)
def test_detect_css_framework_from_dependencies(project_builder, dependencies, expected) -> None:
    project_builder.package_json(dependencies=dependencies)

    assert project_builder.setup().css_framework is expected


def test_detect_css_framework_from_config_files(project_builder) -> None:
    project_builder.package_json()
    project_builder.write({"postcss.config.cjs": "module.exports = { plugins: { tailwindcss: {} } }\n"})

    assert project_builder.setup().css_framework is CssFramework.TAILWIND


def test_detect_project_setup_keeps_custom_output_dir(project_builder) -> None:
    project_builder.package_json()

    setup = detect_project_setup(project_builder.path(), custom_output_dir=Path("web"))

    assert setup.custom_output_dir == Path("web")
