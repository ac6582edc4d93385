"""Typed dataclasses describing forest site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata

from forest_pages._constants import DEFAULT_ROOT_SLUG
from forest_pages.compiler.slug import full_html_url
from forest_pages.compiler.taxon import DEFAULT_REFERENCE_TAXA, TaxonomyRules


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """Settings shared by every compilation run of a site.

    Attributes
    ----------
    root_slug : str
        Document compiled first; everything it reaches compiles in its wake.
    base_url : str
        Prefix of canonical page URLs.
    page_suffix : str
        Suffix of canonical page URLs.
    reference_taxa : frozenset[str]
        Normalized taxon labels treated as reference-like.
    pygments_style : str
        Pygments style used when rendering manifest markdown.
    manifest : Path | None
        Section manifest to compile when none is given on the command line.
    """

    root_slug: str = DEFAULT_ROOT_SLUG
    base_url: str = "/"
    page_suffix: str = ".html"
    reference_taxa: frozenset[str] = DEFAULT_REFERENCE_TAXA
    pygments_style: str = "monokai"
    manifest: Path | None = None

    def page_url(self, slug: str) -> str:
        """Return the canonical page URL of ``slug`` for this site."""
        return full_html_url(slug, base_url=self.base_url, page_suffix=self.page_suffix)

    def taxonomy(self) -> TaxonomyRules:
        return TaxonomyRules(reference_taxa=self.reference_taxa)


__all__ = ["SiteConfig", "SiteConfigError"]
