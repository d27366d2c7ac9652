"""
Article title heuristics.
"""

from __future__ import annotations

import structlog
from bs4 import BeautifulSoup, Tag

from . import dom, patterns

logger = structlog.get_logger(__name__)


def _word_count(text: str) -> int:
    return len(text.split())


def guess_title(document: BeautifulSoup) -> str:
    """
    Derive the best-guess article title from the document's ``<title>``.

    Site names are trimmed off ``"Article | Site"`` and ``"Site: Article"``
    style titles; a title that is very long or very short is swapped for the
    page's only ``<h1>``. Anything left with four words or fewer falls back to
    the untouched ``<title>`` text.
    """
    title_tag = document.find("title")
    original = dom.inner_text(title_tag) if title_tag is not None else ""
    current = original

    if patterns.TITLE_SEPARATOR.search(current):
        current = patterns.TITLE_BEFORE_LAST_SEPARATOR.sub(r"\1", original, count=1)
        if _word_count(current) < 3:
            current = patterns.TITLE_AFTER_FIRST_SEPARATOR.sub(r"\1", original, count=1)
    elif ": " in current:
        current = patterns.TITLE_AFTER_LAST_COLON.sub(r"\1", original, count=1)
        if _word_count(current) < 3:
            current = patterns.TITLE_AFTER_FIRST_COLON.sub(r"\1", original, count=1)
    elif len(current) > 150 or len(current) < 15:
        headings = document.find_all("h1")
        if len(headings) == 1:
            current = dom.inner_text(headings[0])

    current = current.strip()
    if _word_count(current) <= 4:
        current = original

    return current


def get_article_title(document: BeautifulSoup) -> Tag:
    """Wrap the guessed title in a new ``<h1>``; never fails."""
    title = guess_title(document)
    heading = document.new_tag("h1")
    heading.string = title
    logger.debug("Derived article title", title=title)
    return heading
