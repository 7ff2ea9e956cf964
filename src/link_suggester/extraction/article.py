"""
Article Extraction

Reduces raw HTML to the main article body using readability-lxml, then
renders the cleaned HTML to plain text with lxml. Block-level elements are
separated by blank lines so the paragraph segmenter can split on them.

Malformed or empty HTML never raises: it yields an empty article.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from lxml import etree
from lxml import html as lxml_html
from readability import Document

from .models import ExtractedArticle

logger = logging.getLogger("linksuggest.extraction")

_BLOCK_TAGS = (
    "p", "div", "section", "article", "main", "header", "footer", "aside",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li", "dl", "dt", "dd",
    "blockquote", "pre", "figure", "figcaption",
    "table", "tr", "hr",
)

_INLINE_WS = re.compile(r"\s+")
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")


def extract_article(html: str, base_url: Optional[str] = None) -> ExtractedArticle:
    """
    Isolate the readable article in ``html``.

    Parameters
    ----------
    html : str
        Raw page HTML.
    base_url : Optional[str]
        URL the page was fetched from; used to absolutize links.

    Returns
    -------
    ExtractedArticle
        Title (or None) and plain-text body. Empty when nothing was found.
    """
    if not html or not html.strip():
        return ExtractedArticle.empty()

    try:
        doc = Document(html, url=base_url)
        summary_html = doc.summary()
        title = doc.short_title() or None
        text = _render_text(summary_html)
    except (ValueError, etree.LxmlError) as exc:
        # readability's Unparseable is a ValueError
        logger.warning(
            "Readability extraction failed for %s: %s",
            base_url or "<html>",
            exc,
        )
        return ExtractedArticle.empty()

    if not text:
        logger.info("No readable content extracted from %s", base_url or "<html>")

    return ExtractedArticle(title=title, text_content=text)


def _render_text(fragment: str) -> str:
    """Render an HTML fragment to text, one blank line between blocks."""
    if not fragment or not fragment.strip():
        return ""

    root = lxml_html.fromstring(fragment)

    for el in root.iter():
        if el.text:
            el.text = _INLINE_WS.sub(" ", el.text)
        if el.tail:
            el.tail = _INLINE_WS.sub(" ", el.tail)

    for el in root.iter(*_BLOCK_TAGS):
        el.text = "\n\n" + (el.text or "")
        el.tail = "\n\n" + (el.tail or "")

    for br in root.iter("br"):
        br.tail = "\n" + (br.tail or "")

    text = root.text_content()
    text = "\n".join(line.strip() for line in text.split("\n"))
    return _EXTRA_BLANK_LINES.sub("\n\n", text).strip()
