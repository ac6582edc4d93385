"""Default slug and URL collaborators for the compiler.

``to_slug`` maps an embed URL such as ``./notes/graph.md`` onto the slug of
the document it names, and ``full_html_url`` produces the canonical page URL
used as the ``href`` of internal links. Pipelines with their own URL scheme
pass replacements to :class:`~forest_pages.compiler.state.CompileState`.

Example
-------
>>> to_slug("./notes/graph.md#intro")
'notes/graph'
>>> full_html_url("notes/graph", base_url="/site")
'/site/notes/graph.html'
"""

from __future__ import annotations

import posixpath
from urllib.parse import urlsplit

from forest_pages._constants import METADATA_SUFFIX

SOURCE_SUFFIXES = (".markdown", ".md", ".typ", ".html", ".htm")


def to_slug(url: str) -> str:
    """Return the slug addressed by ``url``.

    Query strings, fragments, leading ``/`` or ``./`` segments, parent
    traversals that escape the root, and known source suffixes are dropped.
    """
    path = urlsplit(url.strip()).path
    if not path:
        return ""
    normalized = posixpath.normpath(path)
    while normalized.startswith("../"):
        normalized = normalized[3:]
    normalized = normalized.lstrip("/")
    if normalized in (".", ".."):
        return ""
    lower = normalized.lower()
    for suffix in SOURCE_SUFFIXES:
        if lower.endswith(suffix):
            return normalized[: -len(suffix)]
    return normalized


def full_html_url(slug: str, *, base_url: str = "/", page_suffix: str = ".html") -> str:
    """Return the canonical page URL for ``slug``."""
    prefix = base_url if base_url.endswith("/") else f"{base_url}/"
    return f"{prefix}{slug}{page_suffix}"


def metadata_slug(slug: str) -> str:
    """Return the synthetic slug used while resolving ``slug``'s metadata."""
    return f"{slug}{METADATA_SUFFIX}"


def is_metadata_slug(slug: str) -> bool:
    return slug.endswith(METADATA_SUFFIX)


__all__ = [
    "SOURCE_SUFFIXES",
    "full_html_url",
    "is_metadata_slug",
    "metadata_slug",
    "to_slug",
]
