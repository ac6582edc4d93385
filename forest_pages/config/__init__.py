"""Load and validate site configuration YAML for forest compilation runs.

This subpackage parses a ``forest.yaml`` file into a :class:`SiteConfig`
dataclass that names the root document, the canonical URL scheme of compiled
pages, the taxa treated as reference-like, and the default section manifest.
The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from forest_pages.config import load_site_config
>>> site = load_site_config(Path("config/forest.yaml"))  # doctest: +SKIP
>>> site.page_url("notes/graph")  # doctest: +SKIP
'/notes/graph.html'
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError

__all__ = ["SiteConfig", "SiteConfigError", "load_site_config"]
