"""Choose between a single static page and a catch-all client route."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from ..models import CatchAll, ProjectSetup, RouteTopology, SinglePage

CATCH_ALL_SEGMENT = "[[...slug]]"
PAGES_DIRECTORIES = ("src/pages", "pages")
INDEX_BASENAMES = {"index"}
ROOT_SLUG = ""


def route_directory(setup: ProjectSetup, app_dir: Path) -> Path:
    """Directory that will hold the file importing the root component."""
    if setup.uses_router:
        return app_dir / CATCH_ALL_SEGMENT
    return app_dir


def discover_static_slugs(root: Path) -> Tuple[str, ...]:
    """Slugs for sibling pages under the first conventional pages directory."""
    slugs: List[str] = []
    for candidate in PAGES_DIRECTORIES:
        pages_dir = root.joinpath(*candidate.split("/"))
        if not pages_dir.is_dir():
            continue
        for entry in sorted(pages_dir.iterdir(), key=lambda path: path.name):
            if not entry.is_file() or entry.name.startswith(("_", ".")):
                continue
            slug = entry.stem.lower()
            if not slug or slug in INDEX_BASENAMES or slug in slugs:
                continue
            slugs.append(slug)
        break
    return tuple(slugs)


def select(
    setup: ProjectSetup,
    component_import_path: str,
    root: Optional[Path] = None,
) -> RouteTopology:
    """Return the route topology for `setup`.

    Router projects get a catch-all route whose static slugs list discovered
    sibling pages first and the root path last; everything else gets a single
    page.
    """
    if not setup.uses_router:
        return SinglePage(import_path=component_import_path)
    discovered = discover_static_slugs(root) if root is not None else ()
    return CatchAll(
        import_path=component_import_path,
        static_slugs=discovered + (ROOT_SLUG,),
    )


__all__ = [
    "CATCH_ALL_SEGMENT",
    "PAGES_DIRECTORIES",
    "ROOT_SLUG",
    "discover_static_slugs",
    "route_directory",
    "select",
]
