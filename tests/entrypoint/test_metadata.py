"""Tests for vite2next.entrypoint.metadata."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from vite2next.entrypoint import metadata as metadata_module
from vite2next.entrypoint.metadata import (
    DEFAULT_DESCRIPTION,
    DEFAULT_TITLE,
    MetadataExtractionError,
    default_metadata,
    extract,
    load_page_metadata,
    render_metadata_object,
)
from vite2next.models import PageMetadata, ScriptDeclaration


def test_extract_reads_title_and_description() -> None:
    metadata = extract(
        """
        <html><head>
          <title> Acme Dashboard </title>
          <meta name="description" content="Numbers that matter">
        </head><body></body></html>
        """
    )

    assert metadata.title == "Acme Dashboard"
    assert metadata.description == "Numbers that matter"


def test_extract_falls_back_to_defaults() -> None:
    metadata = extract("<html><head></head><body><title>Late</title></body></html>")

    assert metadata.title == DEFAULT_TITLE
    assert metadata.description == DEFAULT_DESCRIPTION


def test_extract_skips_elements_next_renders_itself() -> None:
    metadata = extract(
        """
        <head>
          <meta charset="UTF-8" />
          <meta http-equiv="X-UA-Compatible" content="IE=edge" />
          <meta name="viewport" content="width=device-width" />
          <meta name="theme-color" content="#ffffff" />
        </head>
        """
    )

    assert metadata.fields == (("theme-color", "#ffffff"),)


def test_extract_collects_authors_in_order() -> None:
    metadata = extract(
        """
        <head>
          <meta name="author" content="Ada" />
          <meta name="author" content="Grace" />
        </head>
        """
    )

    assert metadata.authors == ("Ada", "Grace")


def test_extract_groups_open_graph_images() -> None:
    metadata = extract(
        """
        <head>
          <meta property="og:title" content="First" />
          <meta property="og:image" content="/one.png" />
          <meta property="og:title" content="Second" />
          <meta property="og:image" content="/two.png" />
          <meta property="twitter:card" content="summary" />
        </head>
        """
    )

    assert metadata.open_graph == (("title", "First"),)
    assert metadata.open_graph_images == ("/one.png", "/two.png")
    assert metadata.fields == (("twitter:card", "summary"),)
    assert metadata.has_open_graph


def test_extract_keeps_scripts_but_drops_vite_bootstrap() -> None:
    inline = "window.dataLayer = [];"
    metadata = extract(
        f"""
        <head>
          <script src="https://cdn.example.com/analytics.js"></script>
          <script>{inline}</script>
          <script type="module" src="/src/main.tsx"></script>
        </head>
        """
    )

    digest = hashlib.sha256(inline.encode("utf-8")).hexdigest()[:8]
    assert metadata.scripts == (
        ScriptDeclaration(src="https://cdn.example.com/analytics.js"),
        ScriptDeclaration(inline_body=inline, identifier=f"inline-script-{digest}"),
    )


def test_extract_gives_duplicate_inline_scripts_distinct_ids() -> None:
    metadata = extract("<head><script>go()</script><script>go()</script></head>")

    first, second = (script.identifier for script in metadata.scripts)
    assert first != second
    assert second == f"{first}-2"


def test_extract_ignores_body_content() -> None:
    metadata = extract(
        """
        <head><title>Head</title></head>
        <body><meta name="description" content="from body"><script>late()</script></body>
        """
    )

    assert metadata.description == DEFAULT_DESCRIPTION
    assert metadata.scripts == ()


def test_load_page_metadata_without_document_warns(tmp_path: Path) -> None:
    metadata, warning = load_page_metadata(tmp_path / "index.html")

    assert metadata.title == DEFAULT_TITLE
    assert warning is not None and "No index.html" in warning


def test_load_page_metadata_reads_document(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("<head><title>Shop</title></head>", encoding="utf-8")

    metadata, warning = load_page_metadata(tmp_path / "index.html")

    assert metadata.title == "Shop"
    assert warning is None


def test_render_metadata_object_orders_and_quotes_entries() -> None:
    metadata = PageMetadata(
        title="It's live",
        description="Demo",
        fields=(("theme-color", "#000"), ("keywords", "a, b")),
        authors=("Ada",),
        open_graph=(("title", "OG"),),
        open_graph_images=("/a.png", "/b.png"),
    )

    assert render_metadata_object(metadata) == "\n".join(
        [
            "{",
            "  title: 'It\\'s live',",
            "  description: 'Demo',",
            "  authors: [{ name: 'Ada' }],",
            "  'theme-color': '#000',",
            "  keywords: 'a, b',",
            "  openGraph: {",
            "    images: ['/a.png', '/b.png'],",
            "    title: 'OG',",
            "  },",
            "}",
        ]
    )


def test_render_metadata_object_omits_empty_sections() -> None:
    metadata = PageMetadata(title="T", description="D")

    rendered = render_metadata_object(metadata)

    assert "authors" not in rendered
    assert "openGraph" not in rendered


def test_extract_never_duplicates_keys_the_layout_always_sets() -> None:
    metadata = extract(
        """
        <head>
          <title>Shop</title>
          <meta name="title" content="SEO Shop" />
          <meta name="Authors" content="Team" />
          <meta name="openGraph" content="nope" />
          <meta property="description" content="Property description" />
          <meta property="og:title" content="Shop on social" />
          <meta name="keywords" content="shop, store" />
        </head>
        """
    )

    assert metadata.fields == (("keywords", "shop, store"),)
    rendered = render_metadata_object(metadata)
    assert rendered.count("title:") == 2  # top level plus openGraph.title
    assert "  title: 'Shop'," in rendered
    assert rendered.count("description:") == 1
    assert "SEO Shop" not in rendered


def test_load_page_metadata_falls_back_on_undecodable_document(tmp_path: Path) -> None:
    index_html = tmp_path / "index.html"
    index_html.write_bytes(b"<head><title>\xff\xfe</title></head>")

    metadata, warning = load_page_metadata(index_html)

    assert metadata == default_metadata()
    assert warning == "Could not decode index.html, using default metadata"


def test_load_page_metadata_falls_back_on_parse_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    index_html = tmp_path / "index.html"
    index_html.write_text("<head><title>Broken</title></head>", encoding="utf-8")

    def _explode(html_text: str) -> PageMetadata:
        raise MetadataExtractionError("Failed to parse entry document: boom")

    monkeypatch.setattr(metadata_module, "extract", _explode)

    metadata, warning = load_page_metadata(index_html)

    assert metadata == default_metadata()
    assert warning == "Could not parse index.html, using default metadata"
