"""Utility helpers shared by the forest configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from forest_pages.compiler.taxon import normalize_taxon

from .models import SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_mapping(value: object, section: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating an empty section as ``{}``."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Configuration section '{section}' must be a mapping."
        raise SiteConfigError(msg)
    return value


def _normalize_taxa(value: str | list[object] | None) -> frozenset[str]:
    """Normalize taxon labels given as a list or whitespace-separated string."""
    if isinstance(value, str):
        labels: list[object] = list(value.split())
    elif isinstance(value, list):
        labels = value
    elif value is None:
        return frozenset()
    else:
        msg = "taxonomy.reference must be a list of taxon labels."
        raise SiteConfigError(msg)
    normalized = (normalize_taxon(str(label)) for label in labels)
    return frozenset(label for label in normalized if label)


def _normalize_base_url(value: object | None) -> str:
    """Return a base URL ending in ``/``; empty values mean the site root."""
    text = _optional_str(value) or "/"
    return text if text.endswith("/") else f"{text}/"


def _resolve_manifest(value: object | None, config_dir: Path) -> Path | None:
    """Resolve a manifest path relative to the configuration file's directory."""
    text = _optional_str(value)
    if text is None:
        return None
    path = Path(text)
    return path if path.is_absolute() else config_dir / path


__all__ = [
    "_normalize_base_url",
    "_normalize_taxa",
    "_optional_str",
    "_require_mapping",
    "_resolve_manifest",
]
