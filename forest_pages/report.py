"""Summarize a finished compilation run as a JSON relationship report.

The report lists every compiled slug with its reference set, the embed
containment edges, the backlink edges, and the missing-target diagnostics.
Compiled section bodies are left to downstream serializers.
"""

from __future__ import annotations

import typing as typ

import msgspec
import msgspec.json as msgspec_json

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .compiler import CompileState


class MissingTargetEntry(msgspec.Struct, frozen=True):
    """Serialized form of a missing-target diagnostic."""

    referrer: str | None
    target: str
    kind: str


class RelationsReport(msgspec.Struct):
    """Relationships derived by one compilation run.

    Attributes
    ----------
    sections : list[str]
        Sorted slugs of every compiled section.
    references : dict[str, list[str]]
        Sorted reference slugs per section; sections citing nothing are omitted.
    parents : dict[str, list[str]]
        Embedded slug mapped to the slugs embedding it.
    backlinks : dict[str, list[str]]
        Linked slug mapped to the slugs linking to it.
    missing : list[MissingTargetEntry]
        Diagnostics in the order they were raised.
    """

    sections: list[str]
    references: dict[str, list[str]]
    parents: dict[str, list[str]]
    backlinks: dict[str, list[str]]
    missing: list[MissingTargetEntry]


def build_report(state: CompileState) -> RelationsReport:
    """Collect the relationship indexes of ``state`` into a report."""
    compiled = state.compiled
    return RelationsReport(
        sections=sorted(compiled),
        references={
            slug: sorted(section.references)
            for slug, section in sorted(compiled.items())
            if section.references
        },
        parents={key: list(value) for key, value in sorted(state.relations.parents.items())},
        backlinks={
            key: list(value) for key, value in sorted(state.relations.backlinks.items())
        },
        missing=[
            MissingTargetEntry(
                referrer=entry.referrer, target=entry.target, kind=entry.kind
            )
            for entry in state.missing
        ],
    )


def write_report(report: RelationsReport, path: Path) -> Path:
    """Write ``report`` to ``path`` as indented JSON and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = msgspec_json.format(msgspec_json.encode(report), indent=2)
    path.write_bytes(payload + b"\n")
    return path


__all__ = ["MissingTargetEntry", "RelationsReport", "build_report", "write_report"]
