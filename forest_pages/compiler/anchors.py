"""Render internal link anchors."""

from __future__ import annotations

from html import escape

from forest_pages._constants import LOCAL_LINK_CLASS


def html_link(href: str, title: str, text: str, css_class: str = LOCAL_LINK_CLASS) -> str:
    """Return an ``<a>`` element linking to ``href``.

    Parameters
    ----------
    href : str
        Target URL; escaped into the attribute.
    title : str
        Accessible label; escaped into the ``title`` attribute.
    text : str
        Visible HTML content, inserted verbatim.
    css_class : str, optional
        Class marking the anchor; defaults to the internal-link marker.

    Returns
    -------
    str
        Rendered anchor markup.
    """
    return (
        f'<a class="{escape(css_class, quote=True)}" '
        f'href="{escape(href, quote=True)}" '
        f'title="{escape(title, quote=True)}">{text}</a>'
    )


__all__ = ["html_link"]
