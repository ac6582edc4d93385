"""Accumulate embed containment and backlink edges between documents.

Each compiled node records its edges into a fresh, node-local
:class:`RelationshipAccumulator`; the compiler merges that scratch table into
the run-wide accumulator once the node's content has been processed. Entries
are append-only and deduplicated, so merging the same edge twice is a no-op.

Example
-------
>>> acc = RelationshipAccumulator()
>>> acc.insert_parent("child", "parent")
>>> acc.insert_backlinks("target", ["source", "source"])
>>> acc.parent_of("child"), acc.backlinks_of("target")
('parent', ['source'])
"""

from __future__ import annotations

import collections.abc as cabc


def _append_unique(table: dict[str, list[str]], key: str, value: str) -> None:
    """Append ``value`` under ``key`` unless it is already recorded."""
    values = table.setdefault(key, [])
    if value not in values:
        values.append(value)


class RelationshipAccumulator:
    """Edge tables keyed by the document the edges point at.

    Attributes
    ----------
    parents : dict[str, list[str]]
        Embedded slug mapped to the slugs embedding it, in discovery order.
    backlinks : dict[str, list[str]]
        Linked slug mapped to the slugs linking to it, in discovery order.
    """

    def __init__(self) -> None:
        self.parents: dict[str, list[str]] = {}
        self.backlinks: dict[str, list[str]] = {}

    def insert_parent(self, child: str, parent: str) -> None:
        _append_unique(self.parents, child, parent)

    def insert_backlinks(self, target: str, sources: cabc.Iterable[str]) -> None:
        for source in sources:
            _append_unique(self.backlinks, target, source)

    def merge(self, other: RelationshipAccumulator) -> None:
        """Fold every edge of ``other`` into this accumulator."""
        for child, parents in other.parents.items():
            for parent in parents:
                self.insert_parent(child, parent)
        for target, sources in other.backlinks.items():
            self.insert_backlinks(target, sources)

    def parent_of(self, child: str) -> str | None:
        """Return the first recorded embedder of ``child``, for breadcrumbs."""
        parents = self.parents.get(child)
        return parents[0] if parents else None

    def backlinks_of(self, target: str) -> list[str]:
        return list(self.backlinks.get(target, []))

    @property
    def edge_count(self) -> int:
        return sum(len(v) for v in self.parents.values()) + sum(
            len(v) for v in self.backlinks.values()
        )


__all__ = ["RelationshipAccumulator"]
