"""Core data models shared across vite2next components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import List, Optional, Set, Tuple, Union


class CssFramework(str, Enum):
    """Styling approach detected in the source project."""

    NONE = "none"
    TAILWIND = "tailwind"
    STYLED = "styled"
    EMOTION = "emotion"
    MUI = "mui"
    CHAKRA = "chakra"


class PackageManager(str, Enum):
    """Node package manager used by the source project."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"


@dataclass(frozen=True)
class ProjectSetup:
    """Read-only snapshot of the project taken before migration begins."""

    uses_typescript: bool = False
    uses_router: bool = False
    css_framework: CssFramework = CssFramework.NONE
    package_manager: PackageManager = PackageManager.NPM
    custom_output_dir: Optional[Path] = None

    @property
    def component_extension(self) -> str:
        return "tsx" if self.uses_typescript else "jsx"

    @property
    def module_extension(self) -> str:
        return "ts" if self.uses_typescript else "js"


class ArtifactKind(str, Enum):
    COMPONENT = "component"
    STYLESHEET = "stylesheet"


@dataclass(frozen=True)
class LocatedArtifact:
    """A file discovered in the project tree, relative to the project root."""

    relative_path: PurePosixPath
    kind: ArtifactKind

    def absolute(self, root: Path) -> Path:
        return root.joinpath(*self.relative_path.parts)


@dataclass(frozen=True)
class ScriptDeclaration:
    """A `<script>` element carried over from the entry document."""

    src: Optional[str] = None
    inline_body: Optional[str] = None
    identifier: Optional[str] = None

    @property
    def is_inline(self) -> bool:
        return self.src is None


@dataclass(frozen=True)
class PageMetadata:
    """Structured page metadata extracted from the entry document."""

    title: str
    description: str
    fields: Tuple[Tuple[str, str], ...] = ()
    authors: Tuple[str, ...] = ()
    open_graph: Tuple[Tuple[str, str], ...] = ()
    open_graph_images: Tuple[str, ...] = ()
    scripts: Tuple[ScriptDeclaration, ...] = ()

    @property
    def has_scripts(self) -> bool:
        return bool(self.scripts)

    @property
    def has_open_graph(self) -> bool:
        return bool(self.open_graph or self.open_graph_images)


@dataclass(frozen=True)
class SinglePage:
    """Emit one static page that renders the root component."""

    import_path: str

    tag = "single"


@dataclass(frozen=True)
class CatchAll:
    """Emit an optional catch-all route that defers routing to the client."""

    import_path: str
    static_slugs: Tuple[str, ...] = ("",)

    tag = "catch_all"


RouteTopology = Union[SinglePage, CatchAll]


@dataclass
class EmitResult:
    """Files written or left untouched by the emitter."""

    written: Set[Path] = field(default_factory=set)
    skipped: Set[Path] = field(default_factory=set)
    warnings: List[str] = field(default_factory=list)
