"""Unit tests for the relationship accumulator."""

from __future__ import annotations

from forest_pages.compiler import RelationshipAccumulator


def test_edges_are_deduplicated_in_discovery_order() -> None:
    acc = RelationshipAccumulator()
    acc.insert_parent("child", "first")
    acc.insert_parent("child", "second")
    acc.insert_parent("child", "first")
    acc.insert_backlinks("target", ["a", "b", "a"])

    assert acc.parents == {"child": ["first", "second"]}
    assert acc.backlinks == {"target": ["a", "b"]}
    assert acc.edge_count == 4


def test_merge_folds_node_local_tables() -> None:
    run = RelationshipAccumulator()
    run.insert_backlinks("target", ["a"])

    local = RelationshipAccumulator()
    local.insert_parent("child", "b")
    local.insert_backlinks("target", ["a", "b"])
    run.merge(local)
    run.merge(local)

    assert run.parents == {"child": ["b"]}
    assert run.backlinks == {"target": ["a", "b"]}, (
        "merging the same table twice must not duplicate edges"
    )


def test_lookups_for_unknown_slugs() -> None:
    acc = RelationshipAccumulator()
    assert acc.parent_of("missing") is None
    assert acc.backlinks_of("missing") == []


def test_backlinks_of_returns_a_copy() -> None:
    acc = RelationshipAccumulator()
    acc.insert_backlinks("target", ["a"])
    acc.backlinks_of("target").append("b")
    assert acc.backlinks_of("target") == ["a"]
