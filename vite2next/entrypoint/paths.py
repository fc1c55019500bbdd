"""Import path computation between generated files and project sources."""

from __future__ import annotations

import os
from pathlib import Path, PurePath

from ..scanner import SCRIPT_EXTENSIONS

# Conventional root component location used when detection fails.
FALLBACK_COMPONENT = "src/App"


def to_import_path(
    from_dir: PurePath | str,
    target: PurePath | str,
    *,
    strip_extension: bool = True,
) -> str:
    """Return an ES module specifier pointing from `from_dir` to `target`.

    The result always uses forward slashes and starts with ``./`` or ``../``.
    A single trailing script extension is dropped unless `strip_extension` is
    False (stylesheets keep their suffix). Missing targets still produce a
    well-formed, dangling specifier.
    """
    relative = os.path.relpath(os.fspath(target), os.fspath(from_dir))
    specifier = relative.replace(os.sep, "/").replace("\\", "/")

    if strip_extension:
        for extension in SCRIPT_EXTENSIONS:
            if specifier.endswith(extension) and len(specifier) > len(extension):
                specifier = specifier[: -len(extension)]
                break

    if specifier in {".", ".."}:
        specifier = f"{specifier}/"
    elif not specifier.startswith(("./", "../")):
        specifier = f"./{specifier}"
    return specifier


def fallback_component_path(root: Path) -> Path:
    return root.joinpath(*FALLBACK_COMPONENT.split("/"))


__all__ = ["FALLBACK_COMPONENT", "fallback_component_path", "to_import_path"]
