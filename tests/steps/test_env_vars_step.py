"""Tests for the environment variable step."""

from __future__ import annotations

from vite2next.models import ProjectSetup
from vite2next.steps import MigrationContext
from vite2next.steps.env_vars import EnvVarsStep, rewrite_env_text


def test_rewrite_env_text_renames_prefix() -> None:
    assert rewrite_env_text("VITE_API=1\nMY_VITE_FLAG=2\n") == "NEXT_PUBLIC_API=1\nMY_VITE_FLAG=2\n"


def test_rewrite_env_text_appends_base_path_once() -> None:
    once = rewrite_env_text("BASE_URL=/app")

    assert once == "BASE_URL=/app\n\n# Added by vite2next\nNEXT_PUBLIC_BASE_PATH=/app\n"
    assert rewrite_env_text(once) == once


def test_env_vars_step_updates_files_and_reports_usages(project_builder) -> None:
    project_builder.write(
        {
            ".env": "VITE_API_URL=https://api.example.com\n",
            ".env.local": "SECRET=1\n",
            "src/api.ts": "export const url = import.meta.env.VITE_API_URL\n",
            "src/App.tsx": "export default function App() { return null }\n",
        }
    )
    root = project_builder.path()

    result = EnvVarsStep().apply(MigrationContext(root=root, setup=ProjectSetup()))

    assert result.updated == [root / ".env"]
    assert project_builder.read(".env") == "NEXT_PUBLIC_API_URL=https://api.example.com\n"
    assert project_builder.read(".env.local") == "SECRET=1\n"
    assert len(result.warnings) == 1
    assert "src/api.ts" in result.warnings[0]
    assert "src/App.tsx" not in result.warnings[0]


def test_env_vars_step_without_env_files(project_builder) -> None:
    result = EnvVarsStep().apply(
        MigrationContext(root=project_builder.path(), setup=ProjectSetup())
    )

    assert result.updated == []
    assert result.warnings == []
