"""Render and write the Next.js layout, page and client-boundary files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from jinja2 import Environment

from ..logging import get_logger
from ..models import (
    CatchAll,
    CssFramework,
    EmitResult,
    LocatedArtifact,
    PageMetadata,
    ProjectSetup,
    RouteTopology,
)
from ..templating import create_environment, render
from .metadata import render_metadata_object
from .paths import to_import_path
from .topology import CATCH_ALL_SEGMENT

_LOGGER = get_logger("entrypoint.emitter")

# A file counts as present when its stem exists with any of these suffixes.
COMPONENT_VARIANTS = (".tsx", ".jsx", ".ts", ".js")

LAYOUT_TEMPLATES: Dict[CssFramework, str] = {
    CssFramework.NONE: "layouts/none.j2",
    CssFramework.TAILWIND: "layouts/tailwind.j2",
    CssFramework.STYLED: "layouts/styled.j2",
    CssFramework.EMOTION: "layouts/emotion.j2",
    CssFramework.MUI: "layouts/mui.j2",
    CssFramework.CHAKRA: "layouts/chakra.j2",
}

# Client-boundary files the framework layouts import: (basename, template).
PROVIDER_TEMPLATES: Dict[CssFramework, Tuple[str, str]] = {
    CssFramework.STYLED: ("registry", "providers/styled.j2"),
    CssFramework.EMOTION: ("registry", "providers/emotion.j2"),
    CssFramework.MUI: ("providers", "providers/mui.j2"),
    CssFramework.CHAKRA: ("providers", "providers/chakra.j2"),
}

PAGE_TEMPLATES: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "single": (("page", "pages/single.j2"),),
    "catch_all": (
        (f"{CATCH_ALL_SEGMENT}/page", "pages/catch_all_page.j2"),
        (f"{CATCH_ALL_SEGMENT}/client", "pages/catch_all_client.j2"),
    ),
}

NEXT_ENV_DTS = "next-env.d.ts"


@dataclass(frozen=True)
class PlannedFile:
    """A fully rendered file waiting to be written."""

    path: Path
    content: str
    variants: Tuple[str, ...] = COMPONENT_VARIANTS

    def existing(self) -> Optional[Path]:
        if not self.variants:
            return self.path if self.path.exists() else None
        stem = self.path.with_suffix("")
        for suffix in self.variants:
            candidate = stem.with_name(stem.name + suffix)
            if candidate.exists():
                return candidate
        return None


def resolve_app_dir(setup: ProjectSetup, root: Path) -> Path:
    """Directory that receives the App Router files.

    Next.js only looks under `src/` when the root has no `app/` or `pages/`,
    and it builds every file of a `src/pages` directory as a Pages Router
    route. Projects that keep their views in `src/pages` therefore get a root
    `app/`, which makes Next.js ignore `src/` routing entirely.
    """
    if setup.custom_output_dir is not None:
        custom = Path(setup.custom_output_dir)
        return custom if custom.is_absolute() else root / custom
    if (root / "src").is_dir() and not (root / "src" / "pages").is_dir():
        return root / "src" / "app"
    return root / "app"


class Emitter:
    """Renders every target file in memory, then writes the missing ones."""

    def __init__(self, env: Environment | None = None) -> None:
        self.env = env or create_environment()

    def emit(
        self,
        topology: RouteTopology,
        metadata: PageMetadata,
        setup: ProjectSetup,
        target_root: Path,
        *,
        stylesheet: Optional[LocatedArtifact] = None,
    ) -> EmitResult:
        result = EmitResult()
        planned = self.plan(topology, metadata, setup, target_root, stylesheet=stylesheet, result=result)

        pending: List[PlannedFile] = []
        for item in planned:
            existing = item.existing()
            if existing is not None:
                _LOGGER.info("%s already exists, skipping creation", _display(existing, target_root))
                result.skipped.add(existing)
            else:
                pending.append(item)

        for item in pending:
            item.path.parent.mkdir(parents=True, exist_ok=True)
            item.path.write_text(item.content, encoding="utf-8")
            _LOGGER.info("Created %s", _display(item.path, target_root))
            result.written.add(item.path)
        return result

    def plan(
        self,
        topology: RouteTopology,
        metadata: PageMetadata,
        setup: ProjectSetup,
        target_root: Path,
        *,
        stylesheet: Optional[LocatedArtifact] = None,
        result: Optional[EmitResult] = None,
    ) -> List[PlannedFile]:
        """Render every file for this run without touching the disk."""
        app_dir = resolve_app_dir(setup, target_root)
        extension = setup.component_extension
        typescript = setup.uses_typescript

        stylesheet_import = None
        if stylesheet is not None:
            stylesheet_import = to_import_path(
                app_dir, stylesheet.absolute(target_root), strip_extension=False
            )
        elif setup.css_framework is CssFramework.TAILWIND and result is not None:
            result.warnings.append(
                "Tailwind CSS detected but no global stylesheet was found; "
                "import your Tailwind directives from the root layout manually"
            )

        planned: List[PlannedFile] = []
        provider = PROVIDER_TEMPLATES.get(setup.css_framework)
        planned.append(
            PlannedFile(
                path=app_dir / f"layout.{extension}",
                content=render(
                    self.env,
                    LAYOUT_TEMPLATES[setup.css_framework],
                    typescript=typescript,
                    metadata=metadata,
                    metadata_object=render_metadata_object(metadata),
                    stylesheet_import=stylesheet_import,
                    provider_import=f"./{provider[0]}" if provider else None,
                ),
            )
        )
        if provider is not None:
            basename, template = provider
            planned.append(
                PlannedFile(
                    path=app_dir / f"{basename}.{extension}",
                    content=render(self.env, template, typescript=typescript),
                )
            )

        for relative, template in PAGE_TEMPLATES[topology.tag]:
            planned.append(
                PlannedFile(
                    path=app_dir / f"{relative}.{extension}",
                    content=render(
                        self.env,
                        template,
                        typescript=typescript,
                        import_path=topology.import_path,
                        static_slugs=topology.static_slugs if isinstance(topology, CatchAll) else (),
                    ),
                )
            )

        if typescript:
            planned.append(
                PlannedFile(
                    path=target_root / NEXT_ENV_DTS,
                    content=render(self.env, "support/next_env.d.ts.j2"),
                    variants=(),
                )
            )
        return planned


def _display(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


__all__ = [
    "COMPONENT_VARIANTS",
    "Emitter",
    "LAYOUT_TEMPLATES",
    "PAGE_TEMPLATES",
    "PROVIDER_TEMPLATES",
    "PlannedFile",
    "resolve_app_dir",
]
