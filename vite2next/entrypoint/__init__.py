"""Entry-point synthesis engine: layout and page generation for Next.js."""

from .emitter import Emitter, resolve_app_dir
from .locator import ArtifactLocator, locate_component, locate_stylesheet
from .metadata import MetadataExtractionError, extract, load_page_metadata
from .paths import to_import_path
from .synthesis import synthesize_entrypoint
from .topology import route_directory, select

__all__ = [
    "ArtifactLocator",
    "Emitter",
    "MetadataExtractionError",
    "extract",
    "load_page_metadata",
    "locate_component",
    "locate_stylesheet",
    "resolve_app_dir",
    "route_directory",
    "select",
    "synthesize_entrypoint",
    "to_import_path",
]
