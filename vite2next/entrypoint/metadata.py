"""Extract page metadata from the legacy Vite `index.html`.

Only the document head is inspected. Elements Next.js renders on its own
(charset, viewport, http-equiv) are dropped, `author` becomes an `authors`
list, `og:*` properties are grouped under `openGraph` and `<script>` tags are
kept in document order so the layout can re-emit them through `next/script`.
"""

from __future__ import annotations

import hashlib
import re
from html.parser import HTMLParser
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..logging import get_logger
from ..javascript import js_key, js_string
from ..models import PageMetadata, ScriptDeclaration

_LOGGER = get_logger("entrypoint.metadata")

DEFAULT_TITLE = "My App"
DEFAULT_DESCRIPTION = "My application description"

_SKIPPED_META_NAMES = {"viewport", "description"}
# Keys render_metadata_object always writes; a same-named field would repeat them.
_RESERVED_KEYS = {"title", "description", "authors", "opengraph"}
_LOCAL_MODULE_RE = re.compile(r"\.(?:tsx|jsx|ts|js|mjs)(?:\?.*)?$")


class MetadataExtractionError(ValueError):
    """Raised when the entry document cannot be parsed."""


def default_metadata() -> PageMetadata:
    return PageMetadata(title=DEFAULT_TITLE, description=DEFAULT_DESCRIPTION)


class PageMetadataBuilder:
    """Accumulates head elements; build() freezes them into PageMetadata."""

    def __init__(self) -> None:
        self.title: Optional[str] = None
        self.description: Optional[str] = None
        self.fields: Dict[str, str] = {}
        self.authors: List[str] = []
        self.open_graph: Dict[str, str] = {}
        self.open_graph_images: List[str] = []
        self.scripts: List[ScriptDeclaration] = []
        self._script_ids: set[str] = set()

    def set_title(self, title: str) -> None:
        if self.title is None and title.strip():
            self.title = title.strip()

    def add_named(self, name: str, content: str) -> None:
        key = name.strip()
        lowered = key.lower()
        if lowered == "description":
            if self.description is None:
                self.description = content
            return
        if lowered in _SKIPPED_META_NAMES:
            return
        if lowered == "author":
            self.authors.append(content)
            return
        self._add_field(key, content)

    def add_property(self, prop: str, content: str) -> None:
        key = prop.strip()
        if not key.startswith("og:"):
            self._add_field(key, content)
            return
        og_key = key[3:]
        if og_key == "image":
            self.open_graph_images.append(content)
            return
        # First occurrence wins for everything except images.
        self.open_graph.setdefault(og_key, content)

    def _add_field(self, key: str, content: str) -> None:
        if key.lower() in _RESERVED_KEYS:
            _LOGGER.debug("Dropping <meta> %r, the layout already sets it", key)
            return
        self.fields.setdefault(key, content)

    def add_external_script(self, src: str) -> None:
        self.scripts.append(ScriptDeclaration(src=src))

    def add_inline_script(self, body: str) -> None:
        digest = hashlib.sha256(body.encode("utf-8")).hexdigest()[:8]
        identifier = f"inline-script-{digest}"
        suffix = 2
        while identifier in self._script_ids:
            identifier = f"inline-script-{digest}-{suffix}"
            suffix += 1
        self._script_ids.add(identifier)
        self.scripts.append(ScriptDeclaration(inline_body=body, identifier=identifier))

    def build(self) -> PageMetadata:
        return PageMetadata(
            title=self.title or DEFAULT_TITLE,
            description=self.description or DEFAULT_DESCRIPTION,
            fields=tuple(self.fields.items()),
            authors=tuple(self.authors),
            open_graph=tuple(self.open_graph.items()),
            open_graph_images=tuple(self.open_graph_images),
            scripts=tuple(self.scripts),
        )


class _HeadParser(HTMLParser):
    def __init__(self, builder: PageMetadataBuilder) -> None:
        super().__init__(convert_charrefs=True)
        self.builder = builder
        self._head_done = False
        self._in_title = False
        self._title_parts: List[str] = []
        self._script_attrs: Optional[Dict[str, str]] = None
        self._script_parts: List[str] = []

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if tag == "body":
            self._head_done = True
        if self._head_done:
            return
        values = {name.lower(): (value or "") for name, value in attrs}
        if tag == "title":
            self._in_title = True
            self._title_parts = []
        elif tag == "meta":
            self._handle_meta(values)
        elif tag == "script":
            self._script_attrs = values
            self._script_parts = []

    def handle_endtag(self, tag: str) -> None:
        if tag == "head":
            self._head_done = True
        if tag == "title" and self._in_title:
            self._in_title = False
            self.builder.set_title("".join(self._title_parts))
        elif tag == "script" and self._script_attrs is not None:
            attrs = self._script_attrs
            self._script_attrs = None
            self._handle_script(attrs, "".join(self._script_parts))

    def handle_data(self, data: str) -> None:
        if self._in_title:
            self._title_parts.append(data)
        elif self._script_attrs is not None:
            self._script_parts.append(data)

    def _handle_meta(self, attrs: Dict[str, str]) -> None:
        if "charset" in attrs or "http-equiv" in attrs:
            return
        content = attrs.get("content")
        if not content:
            return
        name = attrs.get("name")
        prop = attrs.get("property")
        if name:
            self.builder.add_named(name, content)
        elif prop:
            self.builder.add_property(prop, content)

    def _handle_script(self, attrs: Dict[str, str], body: str) -> None:
        src = attrs.get("src")
        if src:
            if _is_bootstrap_module(attrs.get("type", ""), src):
                _LOGGER.debug("Skipping Vite bootstrap script %s", src)
                return
            self.builder.add_external_script(src)
        elif body.strip():
            self.builder.add_inline_script(body)


def _is_bootstrap_module(script_type: str, src: str) -> bool:
    if script_type.strip().lower() != "module":
        return False
    if src.startswith(("http://", "https://", "//")):
        return False
    return bool(_LOCAL_MODULE_RE.search(src))


def extract(html_text: str) -> PageMetadata:
    """Parse the head of `html_text` into a PageMetadata record."""
    builder = PageMetadataBuilder()
    parser = _HeadParser(builder)
    try:
        parser.feed(html_text)
        parser.close()
    except Exception as exc:
        raise MetadataExtractionError(f"Failed to parse entry document: {exc}") from exc
    return builder.build()


def load_page_metadata(index_html: Path) -> Tuple[PageMetadata, Optional[str]]:
    """Return metadata for `index_html` and a warning when defaults were used."""
    if not index_html.exists():
        return default_metadata(), "No index.html found, using default metadata"
    try:
        text = index_html.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        _LOGGER.warning("Failed to decode %s: %s", index_html.name, exc)
        return default_metadata(), f"Could not decode {index_html.name}, using default metadata"
    try:
        metadata = extract(text)
    except MetadataExtractionError as exc:
        _LOGGER.warning("%s", exc)
        return default_metadata(), f"Could not parse {index_html.name}, using default metadata"
    _LOGGER.debug("Extracted metadata from %s: %s", index_html.name, metadata)
    return metadata, None


def render_metadata_object(metadata: PageMetadata, indent: str = "  ") -> str:
    """Serialize metadata as the object literal assigned to `export const metadata`."""
    lines = ["{"]
    lines.append(f"{indent}title: {js_string(metadata.title)},")
    lines.append(f"{indent}description: {js_string(metadata.description)},")
    if metadata.authors:
        authors = ", ".join(f"{{ name: {js_string(author)} }}" for author in metadata.authors)
        lines.append(f"{indent}authors: [{authors}],")
    for key, value in metadata.fields:
        lines.append(f"{indent}{js_key(key)}: {js_string(value)},")
    if metadata.has_open_graph:
        lines.append(f"{indent}openGraph: {{")
        if metadata.open_graph_images:
            images = ", ".join(js_string(image) for image in metadata.open_graph_images)
            lines.append(f"{indent * 2}images: [{images}],")
        for key, value in metadata.open_graph:
            lines.append(f"{indent * 2}{js_key(key)}: {js_string(value)},")
        lines.append(f"{indent}}},")
    lines.append("}")
    return "\n".join(lines)


__all__ = [
    "DEFAULT_DESCRIPTION",
    "DEFAULT_TITLE",
    "MetadataExtractionError",
    "PageMetadataBuilder",
    "default_metadata",
    "extract",
    "load_page_metadata",
    "render_metadata_object",
]
