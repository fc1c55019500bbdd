"""Jinja2 environment used to render every generated source file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from jinja2 import Environment, FileSystemLoader

from .javascript import js_string, jsx_attr, jsx_expr

DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


def create_environment(templates_dirs: Sequence[Path] = ()) -> Environment:
    """Return an environment searching `templates_dirs` before the bundled templates."""
    directories: list[str] = []
    seen: set[str] = set()
    for directory in [*templates_dirs, DEFAULT_TEMPLATES_DIR]:
        key = str(directory)
        if key not in seen:
            directories.append(key)
            seen.add(key)
    env = Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["js_string"] = js_string
    env.filters["jsx_attr"] = jsx_attr
    env.filters["jsx_expr"] = jsx_expr
    return env


def render(env: Environment, template_name: str, **context: Any) -> str:
    """Render `template_name` and normalise surrounding blank lines."""
    text = env.get_template(template_name).render(**context)
    return text.lstrip("\n").rstrip() + "\n"


__all__ = ["DEFAULT_TEMPLATES_DIR", "create_environment", "render"]
