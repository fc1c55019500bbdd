"""Helpers for writing JavaScript literals into generated sources."""

from __future__ import annotations

import json
import re

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


def js_string(value: str) -> str:
    """Return `value` as a single-quoted JavaScript string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )
    return f"'{escaped}'"


def js_key(key: str) -> str:
    """Return `key` bare when it is a valid identifier, quoted otherwise."""
    return key if _IDENTIFIER_RE.match(key) else js_string(key)


def jsx_attr(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


def jsx_expr(value: str) -> str:
    return "{" + json.dumps(value, ensure_ascii=False) + "}"


__all__ = ["js_key", "js_string", "jsx_attr", "jsx_expr"]
