"""Pure predicates over the metadata snapshot."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

if typ.TYPE_CHECKING:
    from .metadata import MetadataIndex


class ReferenceClassifier:
    """Decide whether a document is citation-worthy and whether it takes backlinks.

    Both predicates consult only the frozen :class:`MetadataIndex`; unknown
    slugs are not an error.
    """

    def __init__(
        self, index: MetadataIndex, is_reference_taxon: cabc.Callable[[str], bool]
    ) -> None:
        self.index = index
        self.is_reference_taxon = is_reference_taxon

    def is_reference(self, slug: str) -> bool:
        """Return True when ``slug`` is marked ``asref`` or has a reference taxon."""
        record = self.index.get(slug)
        if record is None:
            return False
        return record.is_asref or self.is_reference_taxon(record.taxon)

    def is_enable_backlinks(self, slug: str) -> bool:
        """Return False only when ``slug`` explicitly disables backlinks."""
        record = self.index.get(slug)
        if record is None:
            return True
        return record.is_enable_backlinks


__all__ = ["ReferenceClassifier"]
