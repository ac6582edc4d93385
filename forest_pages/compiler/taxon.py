"""Taxonomy rules deciding which document categories are reference-like."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

DEFAULT_REFERENCE_TAXA = frozenset({"reference"})


def normalize_taxon(label: str) -> str:
    """Lowercase ``label`` and drop surrounding whitespace and trailing punctuation.

    >>> normalize_taxon(" Reference: ")
    'reference'
    """
    return label.strip().rstrip(".:").strip().lower()


@dc.dataclass(slots=True, frozen=True)
class TaxonomyRules:
    """Classify taxon labels against a configured set of reference taxa."""

    reference_taxa: frozenset[str] = DEFAULT_REFERENCE_TAXA

    @classmethod
    def from_labels(cls, labels: cabc.Iterable[str]) -> TaxonomyRules:
        normalized = frozenset(normalize_taxon(label) for label in labels)
        return cls(reference_taxa=frozenset(label for label in normalized if label))

    def is_reference(self, label: str) -> bool:
        """Return True when ``label`` names a reference-like taxon."""
        normalized = normalize_taxon(label)
        return bool(normalized) and normalized in self.reference_taxa


__all__ = ["DEFAULT_REFERENCE_TAXA", "TaxonomyRules", "normalize_taxon"]
