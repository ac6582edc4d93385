"""Load site configuration YAML into a typed dataclass."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from forest_pages._constants import DEFAULT_ROOT_SLUG
from forest_pages.compiler.taxon import DEFAULT_REFERENCE_TAXA

from .helpers import (
    _normalize_base_url,
    _normalize_taxa,
    _optional_str,
    _require_mapping,
    _resolve_manifest,
)
from .models import SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing how a site compiles.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``forest.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied for every absent key.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a section or value has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from forest_pages.config import load_site_config
    >>> config = load_site_config(Path("forest.yaml"))  # doctest: +SKIP
    >>> config.root_slug  # doctest: +SKIP
    'index'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    site = _require_mapping(raw.get("site"), "site")
    taxonomy = _require_mapping(raw.get("taxonomy"), "taxonomy")
    render = _require_mapping(raw.get("render"), "render")

    reference_taxa = DEFAULT_REFERENCE_TAXA
    if "reference" in taxonomy:
        reference_taxa = _normalize_taxa(taxonomy.get("reference"))

    return SiteConfig(
        root_slug=_optional_str(site.get("root")) or DEFAULT_ROOT_SLUG,
        base_url=_normalize_base_url(site.get("base_url")),
        page_suffix=str(site.get("page_suffix", ".html") or ""),
        reference_taxa=reference_taxa,
        pygments_style=_optional_str(render.get("pygments_style")) or "monokai",
        manifest=_resolve_manifest(site.get("manifest"), path.parent),
    )
