"""
Tree helpers over BeautifulSoup.

The extraction pipeline only talks to the document through these functions,
so the rest of the package never has to care about parser specifics.
"""

from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup, Doctype, NavigableString, Tag

from . import patterns

FRAGMENT_PARSER = "html.parser"

# Top-level tags that stay outside a synthesized body
HEAD_TAGS = ("head", "title", "meta", "link", "base")


def parse_document(markup: str, parser: str = "lxml") -> BeautifulSoup:
    """Parse a whole document. ``class`` stays a plain string instead of a token list."""
    return BeautifulSoup(markup, parser, multi_valued_attributes=None)


def parse_fragment(markup: str) -> BeautifulSoup:
    """Parse markup without adding implicit html/body/p wrappers."""
    return BeautifulSoup(markup, FRAGMENT_PARSER, multi_valued_attributes=None)


def ensure_body(document: BeautifulSoup) -> Tag:
    """
    Return the document body, creating it (and ``html``) when the markup had none.

    Parsers like html.parser add no implicit body, so the page content sits
    directly under ``html`` or the document. A created body takes over those
    nodes, leaving head-only tags and the doctype where they were.
    """
    body = document.find("body")
    if body is not None:
        return body

    html = document.find("html")
    if html is None:
        html = document.new_tag("html")
        for node in list(document.contents):
            if not isinstance(node, Doctype):
                html.append(node.extract())
        document.append(html)

    body = document.new_tag("body")
    for node in list(html.contents):
        if is_tag(node, *HEAD_TAGS):
            continue
        body.append(node.extract())
    html.append(body)
    return body


def is_text(node: object) -> bool:
    """True for plain text nodes (not comments, doctypes or CDATA)."""
    return type(node) is NavigableString


def is_tag(node: object, *names: str) -> bool:
    if not isinstance(node, Tag) or isinstance(node, BeautifulSoup):
        return False
    return not names or node.name in names


def inner_html(element: Tag) -> str:
    return element.decode_contents()


def set_inner_html(element: Tag, markup: str) -> None:
    """Replace the children of ``element`` with the nodes parsed from ``markup``."""
    fragment = parse_fragment(markup)
    element.clear()
    for child in list(fragment.contents):
        element.append(child.extract())


def inner_text(element: Tag, normalize_spaces: bool = True) -> str:
    """Get the text of an element, stripped, and with runs of whitespace collapsed."""
    text = element.get_text().strip()
    if not text:
        return ""
    if normalize_spaces:
        return patterns.NORMALIZE.sub(" ", text)
    return text


def char_count(element: Tag, s: str = ",") -> int:
    """Number of times ``s`` appears in the text of ``element``."""
    return inner_text(element).count(s)


def link_density(element: Tag) -> float:
    """Share of an element's text that sits inside anchors, in [0, 1]."""
    text_length = len(inner_text(element))
    if text_length == 0:
        return 0.0
    link_length = sum(len(inner_text(link)) for link in element.find_all("a"))
    return min(1.0, link_length / text_length)


def class_weight(element: Tag, enabled: bool = True) -> int:
    """
    Weigh an element by its class and id.

    Each of class and id contributes -25 when it looks negative and +25 when
    it looks positive; both may apply. Returns 0 when class weighting is off.
    """
    if not enabled:
        return 0

    weight = 0
    for name in ("class", "id"):
        value = attribute(element, name)
        if not value:
            continue
        if patterns.NEGATIVE.search(value):
            weight -= 25
        if patterns.POSITIVE.search(value):
            weight += 25
    return weight


def attribute(element: Tag, name: str) -> str:
    """String value of an attribute, '' when missing."""
    value = element.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def is_attached(node: Tag, root: Tag) -> bool:
    """Whether ``node`` still hangs somewhere below ``root``."""
    return any(parent is root for parent in node.parents)


def remove(node: Tag) -> None:
    """Detach ``node`` (and its subtree) from the tree; a no-op for detached nodes."""
    if node.parent is not None:
        node.extract()


def next_non_blank_sibling(node: Tag) -> Optional[object]:
    """The next sibling, skipping whitespace-only text. Comments count as content."""
    sibling = node.next_sibling
    while is_text(sibling) and not sibling.strip():
        sibling = sibling.next_sibling
    return sibling
