"""Unit tests for loading shallow sections from a YAML manifest.

The manifest loader renders markdown strings with ``MarkupRenderer`` (block
HTML for bodies, inline HTML for metadata) and turns ``embed``/``local``
items into the lazy content the compiler resolves.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from forest_pages.compiler import Embed, EmbedOption, LocalLink, Plain
from forest_pages.manifest import ManifestError, load_manifest, parse_manifest
from forest_pages.renderer import MarkupRenderer

MANIFEST = """
sections:
  index:
    metadata:
      title: "The *Forest*"
      asref: true
    content:
      - "Intro paragraph."
      - embed: ./notes/a.md
        details_open: false
        numbering: true
        title: "Alpha, embedded"
      - local: notes/b
        text: "see **B**"
      - plain: "Outro."
  notes/a: "Body of *a*."
  notes/b:
    content:
      - local: index
"""


def test_load_manifest(tmp_path: Path) -> None:
    path = tmp_path / "sections.yaml"
    path.write_text(MANIFEST, encoding="utf-8")
    sections = {section.slug: section for section in load_manifest(path)}

    assert list(sections) == ["index", "notes/a", "notes/b"]
    index = sections["index"]
    assert index.metadata["title"] == Plain("The <em>Forest</em>")
    assert index.metadata["asref"] == Plain("true")
    assert isinstance(index.content, list)
    intro, embed, link, outro = index.content
    assert intro == Plain("<p>Intro paragraph.</p>")
    assert embed == Embed(
        url="./notes/a.md",
        option=EmbedOption(details_open=False, numbering=True, catalog=True),
        title="Alpha, embedded",
    )
    assert link == LocalLink(slug="notes/b", text="see <strong>B</strong>")
    assert outro == Plain("<p>Outro.</p>")
    assert sections["notes/a"].content == Plain("<p>Body of <em>a</em>.</p>")
    assert sections["notes/b"].content == [LocalLink(slug="index")]


def test_code_blocks_are_highlighted() -> None:
    sections = parse_manifest(
        {"sections": {"code": "```python\nprint('hi')\n```\n"}},
        renderer=MarkupRenderer("monokai"),
    )
    soup = BeautifulSoup(sections[0].content.html, "html.parser")
    block = soup.select_one("div.codehilite")
    assert block is not None, "expected a highlighted code block"
    assert block.get("data-language") == "python"
    assert "print" in block.get_text()


def test_missing_manifest_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_manifest(tmp_path / "absent.yaml")


def _embed_option(**flags: object) -> EmbedOption:
    sections = parse_manifest(
        {"sections": {"index": {"content": [{"embed": "child", **flags}]}}}
    )
    content = sections[0].content
    assert isinstance(content, list)
    return content[0].option


@pytest.mark.parametrize(
    ("flags", "expected"),
    [
        ({}, EmbedOption(details_open=True, numbering=False, catalog=True)),
        ({"details_open": "no"}, EmbedOption(details_open=False)),
        ({"details_open": "false"}, EmbedOption(details_open=False)),
        ({"details_open": " OFF "}, EmbedOption(details_open=False)),
        ({"numbering": "yes", "catalog": 0}, EmbedOption(numbering=True, catalog=False)),
        ({"numbering": True, "catalog": "on"}, EmbedOption(numbering=True)),
    ],
)
def test_embed_flags_accept_booleans_and_spellings(
    flags: dict[str, object], expected: EmbedOption
) -> None:
    assert _embed_option(**flags) == expected


def test_embed_flag_spelled_no_in_yaml_stays_closed(tmp_path: Path) -> None:
    path = tmp_path / "sections.yaml"
    path.write_text(
        "sections:\n  index:\n    - embed: child\n      details_open: no\n",
        encoding="utf-8",
    )
    content = load_manifest(path)[0].content
    assert isinstance(content, list)
    assert content[0].option.details_open is False


@pytest.mark.parametrize("value", ["maybe", "", 2, ["true"]])
def test_invalid_embed_flag_is_rejected(value: object) -> None:
    with pytest.raises(ManifestError, match="Section 'index' has an invalid 'details_open'"):
        _embed_option(details_open=value)


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        (["not", "a", "mapping"], "Top-level"),
        ({"sections": ["index"]}, "map slugs"),
        ({"sections": {"a": 3}}, "Section 'a' must be"),
        ({"sections": {"a": {"metadata": ["x"]}}}, "metadata must be a mapping"),
        ({"sections": {"a": [{"embed": "b", "local": "c"}]}}, "exactly one"),
        ({"sections": {"a": [{"local": ""}]}}, "empty 'local'"),
        ({"sections": {"a": [3]}}, "not a string or mapping"),
    ],
)
def test_malformed_manifest(raw: object, message: str) -> None:
    with pytest.raises(ManifestError, match=message):
        parse_manifest(raw)
