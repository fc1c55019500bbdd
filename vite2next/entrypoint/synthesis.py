"""Entry-point synthesis: locate, resolve, extract, select, then emit."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ..logging import get_logger
from ..models import EmitResult, ProjectSetup
from .emitter import Emitter, resolve_app_dir
from .locator import ArtifactLocator, find_shadowed_stylesheet
from .metadata import load_page_metadata
from .paths import fallback_component_path, to_import_path
from .topology import route_directory, select

_LOGGER = get_logger("entrypoint")

ENTRY_DOCUMENT = "index.html"
ROOT_PAGES_DIRECTORY = "pages"


def synthesize_entrypoint(
    root: Path,
    setup: ProjectSetup,
    *,
    exclude_paths: Sequence[str] = (),
    emitter: Optional[Emitter] = None,
) -> EmitResult:
    """Create the layout and page files that host the Vite application.

    Detection failures never abort the run: they fall back to defaults and are
    reported in ``EmitResult.warnings``.
    """
    warnings: List[str] = []
    locator = ArtifactLocator(exclude_paths)

    component = locator.locate_component(root)
    stylesheet = locator.locate_stylesheet(root)

    page_dir = route_directory(setup, resolve_app_dir(setup, root))
    if component is None:
        import_path = to_import_path(page_dir, fallback_component_path(root))
        warnings.append(
            f"Could not find App component, importing '{import_path}'; "
            "you may need to adjust the import path manually"
        )
    else:
        _LOGGER.debug("Found App component: %s", component.relative_path)
        import_path = to_import_path(page_dir, component.absolute(root))

    if stylesheet is None:
        warnings.append("No global stylesheet found; the layout will not import one")
    else:
        _LOGGER.debug("Found global CSS file: %s", stylesheet.relative_path)
        shadowed = find_shadowed_stylesheet(root, stylesheet)
        if shadowed is not None:
            warnings.append(
                f"The layout imports '{stylesheet.relative_path}'; global styles in "
                f"'{shadowed}' are not imported, add them to the root layout manually"
            )

    metadata, metadata_warning = load_page_metadata(root / ENTRY_DOCUMENT)
    if metadata_warning:
        warnings.append(metadata_warning)

    if (root / ROOT_PAGES_DIRECTORY).is_dir():
        warnings.append(
            f"Next.js builds every file in '{ROOT_PAGES_DIRECTORY}/' as a Pages Router route; "
            "move those components out of it before running next build"
        )

    topology = select(setup, import_path, root)
    if setup.uses_router:
        _LOGGER.info("React Router detected - using catch-all route approach for compatibility")

    result = (emitter or Emitter()).emit(topology, metadata, setup, root, stylesheet=stylesheet)
    result.warnings[:0] = warnings
    for warning in result.warnings:
        _LOGGER.debug("Entrypoint warning: %s", warning)
    return result


__all__ = ["ENTRY_DOCUMENT", "synthesize_entrypoint"]
