"""Tests for the JavaScript literal helpers and the template environment."""

from __future__ import annotations

from pathlib import Path

from vite2next.javascript import js_key, js_string, jsx_attr, jsx_expr
from vite2next.templating import create_environment, render


def test_js_string_escapes_quotes_backslashes_and_newlines() -> None:
    assert js_string("it's") == "'it\\'s'"
    assert js_string("a\\b") == "'a\\\\b'"
    assert js_string("line\nbreak\r") == "'line\\nbreak\\r'"
    assert js_string("sep\u2028") == "'sep\\u2028'"


def test_js_key_quotes_only_when_needed() -> None:
    assert js_key("title") == "title"
    assert js_key("$ref") == "$ref"
    assert js_key("theme-color") == "'theme-color'"
    assert js_key("og:title") == "'og:title'"


def test_jsx_helpers() -> None:
    assert jsx_attr('a "b" & c') == "a &quot;b&quot; &amp; c"
    assert jsx_expr("x < y") == '{"x < y"}'


def test_render_prefers_user_templates(tmp_path: Path) -> None:
    (tmp_path / "support").mkdir()
    (tmp_path / "support" / "middleware.j2").write_text("// mine\n\n\n", encoding="utf-8")

    env = create_environment([tmp_path])

    assert render(env, "support/middleware.j2") == "// mine\n"
    assert "NextResponse" in render(create_environment(), "support/middleware.j2")
