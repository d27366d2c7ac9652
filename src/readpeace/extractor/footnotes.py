"""
Footnote post-processing: turn inline links into numbered references.
"""

from __future__ import annotations

import copy
from typing import Optional
from urllib.parse import urlparse

import structlog
from bs4 import BeautifulSoup, Tag

from . import dom

logger = structlog.get_logger(__name__)

DO_NOT_FOOTNOTE_CLASS = "readability-DoNotFootnote"


def _host(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def add_footnotes(document: BeautifulSoup, content: Tag, url: Optional[str] = None) -> int:
    """
    Move the links of ``content`` into a references list at its end.

    Each eligible link gets a superscript ``[n]`` back-reference and a list
    item naming the link's host. Links carrying the do-not-footnote class are
    skipped. Returns the number of links converted; nothing is appended when
    it is zero.
    """
    wrapper = document.new_tag("div", attrs={"id": "readability-footnotes"})
    heading = document.new_tag("h3")
    heading.string = "References"
    wrapper.append(heading)
    footnotes = document.new_tag("ol", attrs={"id": "readability-footnotes-list"})
    wrapper.append(footnotes)

    link_count = 0
    for link in content.find_all("a"):
        if DO_NOT_FOOTNOTE_CLASS in dom.attribute(link, "class"):
            continue

        link_count += 1
        link_text = dom.inner_text(link)
        link_host = _host(dom.attribute(link, "href")) or _host(url)

        reference = document.new_tag(
            "a",
            attrs={
                "href": f"#readabilityFootnoteLink-{link_count}",
                "class": DO_NOT_FOOTNOTE_CLASS,
                "style": "color: inherit;",
            },
        )
        small = document.new_tag("small")
        sup = document.new_tag("sup")
        sup.string = f"[{link_count}]"
        small.append(sup)
        reference.append(small)

        # Copied before the inline link is restyled
        footnote_link = copy.copy(link)

        if link.parent is not None:
            if link.next_sibling is None:
                link.parent.append(reference)
            else:
                link.insert_after(reference)

        link["style"] = "color: inherit; text-decoration: none;"
        link["name"] = f"readabilityLink-{link_count}"

        footnote = document.new_tag("li")
        back_small = document.new_tag("small")
        back_sup = document.new_tag("sup")
        back_link = document.new_tag(
            "a", attrs={"href": f"#readabilityLink-{link_count}", "title": "Jump to Link in Article"}
        )
        back_link.string = "^"
        back_sup.append(back_link)
        back_small.append(back_sup)
        footnote.append(back_small)

        footnote_link.string = dom.attribute(link, "title") or link_text
        footnote_link["name"] = f"readabilityFootnoteLink-{link_count}"
        footnote.append(footnote_link)

        if link_host:
            host_note = document.new_tag("small")
            host_note.string = f"({link_host})"
            footnote.append(host_note)

        footnotes.append(footnote)

    if link_count > 0:
        content.append(wrapper)

    logger.debug("Converted links to footnotes", count=link_count)
    return link_count
