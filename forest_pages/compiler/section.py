"""Dataclasses describing shallow and compiled sections.

A :class:`ShallowSection` is a parsed-but-unresolved document: its content is
either a single :class:`Plain` HTML fragment or an ordered list of lazy items
that embed or link other documents by slug. Compiling it yields a
:class:`Section`, whose children are either plain HTML or
:class:`EmbeddedSection` wrappers around a private copy of another compiled
section.

Example
-------
>>> from forest_pages.compiler.section import LocalLink, Plain, ShallowSection
>>> shallow = ShallowSection("notes", {}, [Plain("<p>x</p>"), LocalLink("b")])
>>> shallow.is_lazy
True
"""

from __future__ import annotations

import copy
import dataclasses as dc
import typing as typ

from forest_pages._constants import KEY_SLUG, KEY_TITLE


@dc.dataclass(slots=True, frozen=True)
class Plain:
    """Verbatim HTML fragment."""

    html: str


@dc.dataclass(slots=True, frozen=True)
class EmbedOption:
    """Display flags attached to a single embed site.

    Attributes
    ----------
    details_open : bool
        Render the embedded body expanded. Open embeds also propagate the
        embedded section's references to the embedding section.
    numbering : bool
        Number the embedded section's heading.
    catalog : bool
        List the embedded section in the table of contents.
    """

    details_open: bool = True
    numbering: bool = False
    catalog: bool = True


@dc.dataclass(slots=True, frozen=True)
class Embed:
    """Inclusion of another document's compiled body."""

    url: str
    option: EmbedOption = dc.field(default_factory=EmbedOption)
    title: str | None = None


@dc.dataclass(slots=True, frozen=True)
class LocalLink:
    """Citation-style link to another document by slug."""

    slug: str
    text: str | None = None


LazyContent: typ.TypeAlias = Plain | Embed | LocalLink
HtmlContent: typ.TypeAlias = Plain | list[LazyContent]


@dc.dataclass(slots=True)
class ShallowSection:
    """Parsed document whose embeds and links are still unresolved.

    Attributes
    ----------
    slug : str
        Unique identifier of the document.
    metadata : dict[str, HtmlContent]
        Raw metadata fields; each value may itself contain lazy items.
    content : HtmlContent
        Body of the document.
    """

    slug: str
    metadata: dict[str, HtmlContent] = dc.field(default_factory=dict)
    content: HtmlContent = dc.field(default_factory=list)

    @property
    def is_lazy(self) -> bool:
        """Return True when the body still holds lazy items."""
        return isinstance(self.content, list)


@dc.dataclass(slots=True)
class EmbeddedSection:
    """Compiled child section together with the options of its embed site."""

    option: EmbedOption
    section: Section


SectionContent: typ.TypeAlias = Plain | EmbeddedSection


@dc.dataclass(slots=True)
class Section:
    """Fully resolved document.

    Instances held in :attr:`CompileState.compiled` are canonical and shared;
    callers must treat them as read-only and customise a :meth:`clone`
    instead. Embed sites already receive their own clone.

    Attributes
    ----------
    metadata : dict[str, str]
        Resolved HTML per metadata field, always including ``slug``.
    children : list[SectionContent]
        Body pieces in source order.
    references : set[str]
        Slugs of reference documents cited by this section.
    """

    metadata: dict[str, str]
    children: list[SectionContent] = dc.field(default_factory=list)
    references: set[str] = dc.field(default_factory=set)

    @property
    def slug(self) -> str:
        return self.metadata.get(KEY_SLUG, "")

    @property
    def title(self) -> str:
        return self.metadata.get(KEY_TITLE, "")

    def clone(self) -> Section:
        """Return an independent copy safe to customise per embed site."""
        return copy.deepcopy(self)

    def inline_html(self) -> str:
        """Concatenate the body into a single HTML fragment."""
        parts: list[str] = []
        for child in self.children:
            match child:
                case Plain(html=html):
                    parts.append(html)
                case EmbeddedSection(section=section):
                    parts.append(section.inline_html())
        return "".join(parts)


__all__ = [
    "Embed",
    "EmbedOption",
    "EmbeddedSection",
    "HtmlContent",
    "LazyContent",
    "LocalLink",
    "Plain",
    "Section",
    "SectionContent",
    "ShallowSection",
]
