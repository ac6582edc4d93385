r"""Load a YAML manifest of shallow sections.

A manifest lists already-structured documents keyed by slug. Body and
metadata strings are markdown, rendered to HTML through
:class:`~forest_pages.renderer.MarkupRenderer`; list bodies interleave
markdown with ``embed`` and ``local`` items that the compiler resolves.

Example
-------
>>> from forest_pages.manifest import parse_manifest
>>> sections = parse_manifest(
...     {"sections": {"index": {"metadata": {"title": "Home"}, "content": "Hi"}}}
... )
>>> sections[0].slug, sections[0].content.html
('index', '<p>Hi</p>')
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from ._constants import FALSY_VALUES, TRUTHY_VALUES
from .compiler.section import (
    Embed,
    EmbedOption,
    HtmlContent,
    LazyContent,
    LocalLink,
    Plain,
    ShallowSection,
)
from .renderer import MarkupRenderer

ITEM_KINDS = ("plain", "embed", "local")


class ManifestError(ValueError):
    """Raised when a section manifest is malformed."""


def load_manifest(
    path: Path, *, renderer: MarkupRenderer | None = None
) -> list[ShallowSection]:
    """Read the manifest at ``path`` into shallow sections.

    Parameters
    ----------
    path : Path
        YAML manifest with a top-level ``sections`` mapping.
    renderer : MarkupRenderer, optional
        Renderer for markdown strings; defaults to the monokai style.

    Returns
    -------
    list[ShallowSection]
        Sections in manifest order.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ManifestError
        If the manifest structure is invalid.
    """
    if not path.exists():
        msg = f"Manifest file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    return parse_manifest(loaded, renderer=renderer)


def parse_manifest(
    raw: object, *, renderer: MarkupRenderer | None = None
) -> list[ShallowSection]:
    """Build shallow sections from an already-loaded manifest mapping."""
    if not isinstance(raw, dict):
        msg = "Top-level manifest structure must be a mapping."
        raise ManifestError(msg)
    sections_raw = raw.get("sections") or {}
    if not isinstance(sections_raw, dict):
        msg = "Manifest 'sections' must map slugs to section definitions."
        raise ManifestError(msg)

    renderer = renderer or MarkupRenderer()
    sections: list[ShallowSection] = []
    for slug, payload in sections_raw.items():
        match payload:
            case dict():
                sections.append(_build_section(str(slug), payload, renderer))
            case str() | list():
                sections.append(
                    _build_section(str(slug), {"content": payload}, renderer)
                )
            case _:
                msg = f"Section '{slug}' must be a mapping, string, or list."
                raise ManifestError(msg)
    return sections


def _build_section(
    slug: str, payload: typ.Mapping[str, typ.Any], renderer: MarkupRenderer
) -> ShallowSection:
    metadata_raw = payload.get("metadata") or {}
    if not isinstance(metadata_raw, dict):
        msg = f"Section '{slug}' metadata must be a mapping."
        raise ManifestError(msg)
    metadata = {
        str(key): _build_content(slug, value, renderer, inline=True)
        for key, value in metadata_raw.items()
    }
    content = _build_content(slug, payload.get("content", ""), renderer, inline=False)
    return ShallowSection(slug=slug, metadata=metadata, content=content)


def _build_content(
    slug: str, value: object, renderer: MarkupRenderer, *, inline: bool
) -> HtmlContent:
    """Return Plain HTML for scalar values or lazy items for lists."""
    if isinstance(value, list):
        return [_build_item(slug, item, renderer, inline=inline) for item in value]
    return Plain(_render(_scalar_text(value), renderer, inline=inline))


def _build_item(
    slug: str, item: object, renderer: MarkupRenderer, *, inline: bool
) -> LazyContent:
    if isinstance(item, str):
        return Plain(_render(item, renderer, inline=inline))
    if not isinstance(item, dict):
        msg = f"Section '{slug}' has a content item that is not a string or mapping."
        raise ManifestError(msg)

    kinds = [kind for kind in ITEM_KINDS if kind in item]
    if len(kinds) != 1:
        msg = (
            f"Section '{slug}' content items need exactly one of "
            f"{', '.join(ITEM_KINDS)}; got {sorted(item)}."
        )
        raise ManifestError(msg)

    match kinds[0]:
        case "plain":
            return Plain(_render(_scalar_text(item["plain"]), renderer, inline=inline))
        case "embed":
            return Embed(
                url=_require_text(slug, item, "embed"),
                option=EmbedOption(
                    details_open=_flag(slug, item, "details_open", default=True),
                    numbering=_flag(slug, item, "numbering", default=False),
                    catalog=_flag(slug, item, "catalog", default=True),
                ),
                title=_optional_text(item.get("title"), renderer),
            )
        case _:
            return LocalLink(
                slug=_require_text(slug, item, "local"),
                text=_optional_text(item.get("text"), renderer),
            )


def _render(text: str, renderer: MarkupRenderer, *, inline: bool) -> str:
    return renderer.inline(text) if inline else renderer.markdown(text)


def _scalar_text(value: object) -> str:
    """Stringify YAML scalars, spelling booleans the way metadata flags expect."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _optional_text(value: object, renderer: MarkupRenderer) -> str | None:
    if value is None:
        return None
    return renderer.inline(_scalar_text(value))


def _flag(
    slug: str, item: typ.Mapping[str, typ.Any], key: str, *, default: bool
) -> bool:
    """Read an embed display flag from a YAML boolean or a flag spelling."""
    value = item.get(key)
    match value:
        case None:
            return default
        case bool():
            return value
        case int() if value in (0, 1):
            return bool(value)
        case str() if value.strip().lower() in TRUTHY_VALUES:
            return True
        case str() if value.strip().lower() in FALSY_VALUES:
            return False
    msg = f"Section '{slug}' has an invalid '{key}' flag: {value!r}."
    raise ManifestError(msg)


def _require_text(slug: str, item: typ.Mapping[str, typ.Any], key: str) -> str:
    value = item.get(key)
    if not isinstance(value, str) or not value.strip():
        msg = f"Section '{slug}' has an empty '{key}' target."
        raise ManifestError(msg)
    return value.strip()


__all__ = ["ITEM_KINDS", "ManifestError", "load_manifest", "parse_manifest"]
