"""
Raw-markup normalization and document preparation.
"""

from __future__ import annotations

import re

import structlog
from bs4 import BeautifulSoup

from . import dom, patterns

logger = structlog.get_logger(__name__)

EMPTY_DOCUMENT = "<html></html>"


def _substitute(pattern: re.Pattern[str], replacement: str, markup: str) -> str:
    try:
        return pattern.sub(replacement, markup)
    except (re.error, IndexError) as e:
        logger.debug("Markup substitution failed, keeping input", pattern=pattern.pattern, error=str(e))
        return markup


def preprocess(markup: str) -> str:
    """
    Normalize raw markup before it is parsed.

    Whitespace wrapped in spans (syntax highlighters leave these behind) is
    unwrapped, runs of two or more ``<br>`` become a paragraph break, font tags
    become spans, and blank input becomes an empty document shell.
    """
    markup = _substitute(patterns.WHITESPACE_SPAN, r"\1", markup or "")
    markup = _substitute(patterns.REPLACE_BRS, "</p><p>", markup)
    markup = _substitute(patterns.REPLACE_FONTS, r"<\1span>", markup)

    if not markup.strip():
        return EMPTY_DOCUMENT
    return markup


def remove_scripts(document: BeautifulSoup) -> None:
    """Remove script and style elements everywhere in the document."""
    for tag in document.find_all(["script", "style"]):
        dom.remove(tag)


def _has_class(name: str):
    return lambda value: bool(value) and name in value.split()


def unwrap_rouge_tables(document: BeautifulSoup) -> None:
    """Replace rouge-highlighted code tables with a plain ``pre`` holding the code."""
    for table in document.find_all("table", class_=_has_class("rouge-table")):
        code_cell = table.find(class_=_has_class("rouge-code"))
        code = code_cell.find("pre") if code_cell is not None else None
        if code is None:
            continue
        replacement = document.new_tag("pre")
        replacement.string = code.get_text()
        table.replace_with(replacement)


def prepare_document(document: BeautifulSoup) -> None:
    remove_scripts(document)
    unwrap_rouge_tables(document)
    dom.ensure_body(document)
