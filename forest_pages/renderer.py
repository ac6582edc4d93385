"""Render manifest markdown into the HTML fragments sections are built from."""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
SINGLE_PARAGRAPH = re.compile(r"^<p>(.*)</p>$", re.DOTALL)


class MarkupRenderer:
    """Render block and inline markdown with consistent code highlighting."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        self.pygments_style = pygments_style
        self._md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": pygments_style,
                }
            },
        )

    def markdown(self, text: str) -> str:
        """Render markdown into block HTML; blank input renders as ``""``."""
        normalized = FENCED_INDENT_PATTERN.sub(r"\1", text)
        if not normalized.strip():
            return ""
        html = self._md.reset().convert(normalized)
        return self._annotate_codehilite(html, normalized)

    def inline(self, text: str) -> str:
        """Render a one-paragraph markdown value without its ``<p>`` wrapper.

        Metadata fields such as titles are spliced into headings and link
        labels, where a block element would be invalid.
        """
        html = self.markdown(text)
        match = SINGLE_PARAGRAPH.match(html)
        if match and "<p>" not in match.group(1):
            return match.group(1)
        return html

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


__all__ = ["CODE_BLOCK_PATTERN", "MarkupRenderer"]
