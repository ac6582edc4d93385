"""Read-only snapshot of document metadata used for cross-document lookups.

The compiler needs titles, taxa, and flags of documents it has not compiled
yet (a link to a document further down the graph must still render that
document's title). :class:`MetadataIndex` is built once, before compilation
starts, from plain-text attributes derived for every pending document. It is
decoupled from the pending/compiled table, so consulting it never triggers
resolution.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ
from html import unescape
from types import MappingProxyType

from forest_pages._constants import (
    FALSY_VALUES,
    KEY_ASREF,
    KEY_BACKLINKS,
    KEY_TAXON,
    KEY_TITLE,
    TRUTHY_VALUES,
)

from .section import Embed, HtmlContent, LocalLink, Plain, ShallowSection

TAG_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")

TextualAttrs: typ.TypeAlias = cabc.Callable[[ShallowSection], cabc.Mapping[str, str]]


def _strip_tags(html: str) -> str:
    text = unescape(TAG_PATTERN.sub("", html))
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def _content_text(content: HtmlContent) -> str:
    """Flatten raw metadata content into plain text."""
    if isinstance(content, Plain):
        return _strip_tags(content.html)
    pieces: list[str] = []
    for item in content:
        match item:
            case Plain(html=html):
                pieces.append(html)
            case LocalLink(slug=slug, text=text):
                pieces.append(text if text is not None else slug)
            case Embed(title=title):
                pieces.append(title or "")
    return _strip_tags("".join(pieces))


def derive_textual_attrs(shallow: ShallowSection) -> dict[str, str]:
    """Return the plain-text rendition of every metadata field of ``shallow``.

    This is the default textual-attribute hook of
    :class:`~forest_pages.compiler.state.CompileState`; pipelines that
    compute excerpts or word counts supply their own.
    """
    return {key: _content_text(value) for key, value in shallow.metadata.items()}


@dc.dataclass(slots=True, frozen=True)
class MetadataRecord:
    """Frozen textual attributes of one document."""

    slug: str
    attrs: cabc.Mapping[str, str]

    def get(self, key: str, default: str = "") -> str:
        return self.attrs.get(key, default)

    @property
    def page_title(self) -> str:
        return self.get(KEY_TITLE)

    @property
    def taxon(self) -> str:
        return self.get(KEY_TAXON)

    @property
    def is_asref(self) -> bool:
        """Return True when the document is explicitly marked as a reference."""
        return self.get(KEY_ASREF).strip().lower() in TRUTHY_VALUES

    @property
    def is_enable_backlinks(self) -> bool:
        """Return False only when backlinks are explicitly switched off."""
        return self.get(KEY_BACKLINKS).strip().lower() not in FALSY_VALUES


class MetadataIndex(cabc.Mapping[str, MetadataRecord]):
    """Immutable mapping of slug to :class:`MetadataRecord`."""

    def __init__(
        self, records: cabc.Mapping[str, MetadataRecord] | None = None
    ) -> None:
        self._records = MappingProxyType(dict(records or {}))

    @classmethod
    def build(
        cls,
        sections: cabc.Iterable[ShallowSection],
        textual_attrs: TextualAttrs = derive_textual_attrs,
    ) -> MetadataIndex:
        """Freeze the textual attributes of ``sections`` into a new index.

        Parameters
        ----------
        sections : Iterable[ShallowSection]
            Documents to snapshot, typically every pending document.
        textual_attrs : Callable[[ShallowSection], Mapping[str, str]]
            Hook deriving the plain-text attributes of one document.

        Returns
        -------
        MetadataIndex
            Snapshot keyed by slug.
        """
        records = {
            shallow.slug: MetadataRecord(
                slug=shallow.slug,
                attrs=MappingProxyType(dict(textual_attrs(shallow))),
            )
            for shallow in sections
        }
        return cls(records)

    def __getitem__(self, slug: str) -> MetadataRecord:
        return self._records[slug]

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def page_title(self, slug: str) -> str:
        """Return the title of ``slug`` or an empty string when unknown."""
        record = self._records.get(slug)
        return record.page_title if record else ""


__all__ = [
    "MetadataIndex",
    "MetadataRecord",
    "TextualAttrs",
    "derive_textual_attrs",
]
