"""Resolve a graph of shallow sections into compiled, cross-linked sections.

:class:`CompileState` owns one compilation run: a per-slug table holding
either a :class:`Pending` shallow section or its :class:`Compiled` result,
the frozen :class:`~forest_pages.compiler.metadata.MetadataIndex`, and the
run-wide :class:`~forest_pages.compiler.relations.RelationshipAccumulator`.

Resolution is depth-first. A pending slug is dropped from the table before
its content is compiled and re-enters it only as ``Compiled``, so a slug
that closes a cycle is simply absent when looked up again. The lookup then
degrades to a :class:`MissingTarget` diagnostic and the embed is omitted;
nothing is raised out of :meth:`CompileState.compile_all`.

Example
-------
>>> from forest_pages.compiler import CompileState, Embed, Plain, ShallowSection
>>> state = CompileState(
...     [
...         ShallowSection("index", {}, [Plain("<p>home</p>"), Embed("a")]),
...         ShallowSection("a", {}, Plain("<p>a</p>")),
...     ]
... )
>>> state.compile_all()
>>> sorted(state.compiled)
['a', 'index']
>>> state.relations.parent_of("a")
'index'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ
from html import escape

from forest_pages._constants import DEFAULT_ROOT_SLUG, KEY_SLUG, KEY_TITLE

from .anchors import html_link
from .classifier import ReferenceClassifier
from .metadata import MetadataIndex, TextualAttrs, derive_textual_attrs
from .relations import RelationshipAccumulator
from .section import (
    Embed,
    EmbeddedSection,
    LocalLink,
    Plain,
    Section,
    SectionContent,
    ShallowSection,
)
from .slug import full_html_url, metadata_slug, to_slug
from .taxon import TaxonomyRules

if typ.TYPE_CHECKING:
    from forest_pages.config import SiteConfig

logger = logging.getLogger(__name__)


class CompileError(ValueError):
    """Raised when a compile state is fed inconsistent input."""


@dc.dataclass(slots=True, frozen=True)
class Pending:
    shallow: ShallowSection


@dc.dataclass(slots=True, frozen=True)
class Compiled:
    section: Section


Entry: typ.TypeAlias = Pending | Compiled


@dc.dataclass(slots=True, frozen=True)
class MissingTarget:
    """Diagnostic for an embed or link naming a slug that cannot be resolved.

    Attributes
    ----------
    referrer : str | None
        Slug of the document holding the reference; ``None`` for a slug
        requested directly through :meth:`CompileState.compile`.
    target : str
        Slug that was neither compiled nor pending.
    kind : str
        ``"embed"``, ``"link"``, or ``"root"``.
    """

    referrer: str | None
    target: str
    kind: str


class CompileState:
    """Memoizing, cycle-safe compiler for one run over a document graph."""

    def __init__(
        self,
        sections: cabc.Iterable[ShallowSection] = (),
        *,
        root_slug: str = DEFAULT_ROOT_SLUG,
        to_slug: cabc.Callable[[str], str] = to_slug,
        page_url: cabc.Callable[[str], str] = full_html_url,
        is_reference_taxon: cabc.Callable[[str], bool] | None = None,
        textual_attrs: TextualAttrs = derive_textual_attrs,
    ) -> None:
        """Initialize the state with the discovered documents and collaborators.

        Parameters
        ----------
        sections : Iterable[ShallowSection]
            Every discovered document; all start out pending.
        root_slug : str, optional
            Document compiled first by :meth:`compile_all`.
        to_slug : Callable[[str], str], optional
            Maps an embed URL to the slug it names.
        page_url : Callable[[str], str], optional
            Produces the canonical page URL of a slug for link ``href`` values.
        is_reference_taxon : Callable[[str], bool], optional
            Decides whether a taxon label is reference-like; defaults to
            :class:`TaxonomyRules` with its built-in taxa.
        textual_attrs : Callable[[ShallowSection], Mapping[str, str]], optional
            Hook deriving the plain-text attributes frozen into the metadata
            snapshot.
        """
        self.root_slug = root_slug
        self._entries: dict[str, Entry] = {}
        self._to_slug = to_slug
        self._page_url = page_url
        self._is_reference_taxon = is_reference_taxon or TaxonomyRules().is_reference
        self._textual_attrs = textual_attrs
        self._metadata: MetadataIndex | None = None
        self.classifier = ReferenceClassifier(MetadataIndex(), self._is_reference_taxon)
        self.relations = RelationshipAccumulator()
        self.missing: list[MissingTarget] = []
        for shallow in sections:
            self.add(shallow)

    @classmethod
    def from_config(
        cls, config: SiteConfig, sections: cabc.Iterable[ShallowSection]
    ) -> CompileState:
        """Build a state whose collaborators follow the site configuration."""
        return cls(
            sections,
            root_slug=config.root_slug,
            page_url=config.page_url,
            is_reference_taxon=config.taxonomy().is_reference,
        )

    def add(self, shallow: ShallowSection) -> None:
        """Register a discovered document as pending.

        Raises
        ------
        CompileError
            If the slug is already known to this state.
        """
        if shallow.slug in self._entries:
            msg = f"Duplicate section slug '{shallow.slug}'."
            raise CompileError(msg)
        self._entries[shallow.slug] = Pending(shallow)

    @property
    def pending(self) -> dict[str, ShallowSection]:
        return {
            slug: entry.shallow
            for slug, entry in self._entries.items()
            if isinstance(entry, Pending)
        }

    @property
    def compiled(self) -> dict[str, Section]:
        return {
            slug: entry.section
            for slug, entry in self._entries.items()
            if isinstance(entry, Compiled)
        }

    @property
    def metadata(self) -> MetadataIndex:
        """Return the frozen snapshot, building it from pending documents on first use."""
        if self._metadata is None:
            self.freeze_metadata()
        return typ.cast("MetadataIndex", self._metadata)

    def freeze_metadata(self) -> MetadataIndex:
        """Snapshot the textual attributes of every pending document."""
        index = MetadataIndex.build(self.pending.values(), self._textual_attrs)
        self._metadata = index
        self.classifier = ReferenceClassifier(index, self._is_reference_taxon)
        logger.debug("froze metadata for %d sections", len(index))
        return index

    def compile_all(self) -> None:
        """Compile the root document, then every document it did not reach."""
        if self._metadata is None:
            self.freeze_metadata()
        if self.root_slug in self._entries:
            self.compile(self.root_slug)
        else:
            logger.info("root section [%s] was not discovered", self.root_slug)
        # Unlinked or unembedded documents.
        for slug in list(self.pending):
            self.compile(slug)

    def compile(self, slug: str) -> Section | None:
        """Compile ``slug`` (memoized) and return its canonical section."""
        if self._metadata is None:
            self.freeze_metadata()
        return self.fetch_section(slug)

    def fetch_section(self, slug: str, referrer: str | None = None) -> Section | None:
        """Return the compiled section for ``slug``, compiling it when pending.

        Parameters
        ----------
        slug : str
            Document to resolve.
        referrer : str, optional
            Document asking for ``slug``; named in the diagnostic when the
            lookup fails.

        Returns
        -------
        Section | None
            The canonical section, or ``None`` when ``slug`` is unknown or is
            being compiled further up the stack.
        """
        match self._entries.get(slug):
            case Compiled(section=section):
                return section
            case Pending(shallow=shallow):
                del self._entries[slug]
                return self._compile_shallow(shallow)
            case _:
                self._report_missing(
                    referrer, slug, "embed" if referrer is not None else "root"
                )
                return None

    def _compile_shallow(self, shallow: ShallowSection) -> Section:
        """Resolve ``shallow`` and register the result as its canonical section."""
        section = self._resolve(shallow)
        self._entries[shallow.slug] = Compiled(section)
        logger.debug("compiled [%s]", shallow.slug)
        return section

    def _resolve(self, shallow: ShallowSection, *, synthetic: bool = False) -> Section:
        """Compile ``shallow`` without registering it.

        ``synthetic`` marks a metadata field resolved on behalf of its owner;
        such sections record no parent or backlink edges.
        """
        slug = shallow.slug
        children: list[SectionContent] = []
        references: set[str] = set()

        match shallow.content:
            case Plain():
                children.append(shallow.content)
            case list() as items:
                relations = RelationshipAccumulator()
                for item in items:
                    match item:
                        case Plain():
                            children.append(item)
                        case Embed():
                            embedded = self._embed(slug, item, references, relations)
                            if embedded is not None:
                                children.append(embedded)
                        case LocalLink():
                            children.append(
                                self._local_link(
                                    slug,
                                    item,
                                    references,
                                    relations,
                                    synthetic=synthetic,
                                )
                            )
                if not synthetic:
                    self.relations.merge(relations)

        metadata = {KEY_SLUG: slug}
        for key, value in shallow.metadata.items():
            if key == KEY_SLUG:
                continue
            field = ShallowSection(metadata_slug(slug), {}, value)
            metadata[key] = self._resolve(field, synthetic=True).inline_html()

        return Section(metadata=metadata, children=children, references=references)

    def _embed(
        self,
        slug: str,
        embed: Embed,
        references: set[str],
        relations: RelationshipAccumulator,
    ) -> EmbeddedSection | None:
        """Return a per-site copy of the embedded section, or None when missing."""
        child_slug = self._to_slug(embed.url)
        target = self.fetch_section(child_slug, referrer=slug)
        if target is None:
            return None

        child = target.clone()
        if embed.title is not None:
            child.metadata[KEY_TITLE] = embed.title
        if embed.option.details_open:
            references.update(target.references)
        relations.insert_parent(child_slug, slug)
        return EmbeddedSection(option=embed.option, section=child)

    def _local_link(
        self,
        slug: str,
        link: LocalLink,
        references: set[str],
        relations: RelationshipAccumulator,
        *,
        synthetic: bool = False,
    ) -> Plain:
        """Render a local link and record the reference and backlink it implies."""
        target = link.slug
        if target not in self.metadata:
            self._report_missing(slug, target, "link")
        title = self.metadata.page_title(target)

        if self.classifier.is_reference(target):
            references.add(target)

        if not synthetic and self._accepts_backlink(slug, target):
            relations.insert_backlinks(target, [slug])

        text = link.text if link.text is not None else escape(title)
        html = html_link(self._page_url(target), f"{title} [{target}]", text)
        return Plain(html)

    def _accepts_backlink(self, slug: str, target: str) -> bool:
        # A document, or its own metadata, never becomes its own backlink.
        if target in (slug, metadata_slug(slug)):
            return False
        return self.classifier.is_enable_backlinks(target)

    def _report_missing(self, referrer: str | None, target: str, kind: str) -> None:
        self.missing.append(MissingTarget(referrer=referrer, target=target, kind=kind))
        logger.warning(
            "[%s] attempting to fetch a non-existent [%s].",
            referrer if referrer is not None else self.root_slug,
            target,
        )


__all__ = [
    "CompileError",
    "CompileState",
    "Compiled",
    "Entry",
    "MissingTarget",
    "Pending",
]
