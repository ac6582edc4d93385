"""Unit tests for the default slug and URL collaborators."""

from __future__ import annotations

import pytest

from forest_pages.compiler.slug import (
    full_html_url,
    is_metadata_slug,
    metadata_slug,
    to_slug,
)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("notes/graph.md", "notes/graph"),
        ("./notes/graph.md", "notes/graph"),
        ("/notes/graph.markdown", "notes/graph"),
        ("../../outside.typ", "outside"),
        ("notes/graph.md?raw=1#intro", "notes/graph"),
        ("notes/./deep/../graph", "notes/graph"),
        ("index", "index"),
        ("Index.HTML", "Index"),
        ("", ""),
        ("#fragment-only", ""),
    ],
)
def test_to_slug(url: str, expected: str) -> None:
    actual = to_slug(url)
    assert actual == expected, f"expected {url!r} to map to {expected!r}, got {actual!r}"


def test_full_html_url_joins_base_and_suffix() -> None:
    assert full_html_url("a/b") == "/a/b.html"
    assert full_html_url("a", base_url="https://site.invalid/docs") == (
        "https://site.invalid/docs/a.html"
    )
    assert full_html_url("a", base_url="/", page_suffix="/") == "/a/"


def test_metadata_slug_round_trip() -> None:
    assert metadata_slug("notes/a") == "notes/a:metadata"
    assert is_metadata_slug(metadata_slug("notes/a"))
    assert not is_metadata_slug("notes/a")
