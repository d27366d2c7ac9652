"""
Readability: extract the main readable content and title of an HTML document.

Workflow:
    1. Normalize the raw markup and parse it.
    2. Prep the document by removing scripts, styles and highlighter tables.
    3. Derive the title and grab the article content from the body.
    4. Replace the body with the title and content.
    5. Optionally move links into footnotes.
"""

from __future__ import annotations

import re
from typing import Optional

import structlog
from bs4 import Tag

from ..config.config import ReadabilityConfig
from . import dom
from .footnotes import add_footnotes
from .grabber import CONTENT_ID, ArticleGrabber
from .models import ExtractionResult
from .preprocessor import prepare_document, preprocess
from .title import get_article_title

logger = structlog.get_logger(__name__)

UNABLE_TO_PARSE = "Sorry, Readability was unable to parse this page for content."


class Readability:
    """
    One extraction over one document.

    The parsed document is mutated destructively by :meth:`extract`, so an
    instance is good for a single call and must not be shared across threads.
    """

    def __init__(self, html: str, url: Optional[str] = None, config: Optional[ReadabilityConfig] = None) -> None:
        self.config = config or ReadabilityConfig()
        self.url = url
        self.html = preprocess(html)
        self.document = dom.parse_document(self.html, self.config.parser)
        self.logger = logger.bind(component="Readability", url=url)
        self._result: Optional[ExtractionResult] = None

    def extract(self) -> ExtractionResult:
        if self._result is not None:
            return self._result

        prepare_document(self.document)
        body = dom.ensure_body(self.document)

        title = get_article_title(self.document)
        grabbed = ArticleGrabber(self.document, self.config).grab(body)

        success = grabbed.found_candidate
        content = grabbed.content
        if not success:
            content = self.document.new_tag("div", attrs={"id": CONTENT_ID})
            dom.set_inner_html(content, f"<p>{UNABLE_TO_PARSE}</p>")

        overlay = self.document.new_tag("div", attrs={"id": "readOverlay"})
        inner = self.document.new_tag("div", attrs={"id": "readInner"})
        inner.append(title)
        inner.append(content)
        overlay.append(inner)

        body.clear()
        body.append(overlay)
        body.attrs.pop("style", None)

        self.post_process(content)

        self.logger.debug(
            "Extraction finished",
            success=success,
            passes=len(grabbed.history),
            title=title.get_text(),
            length=len(dom.inner_text(content)),
        )
        self._result = ExtractionResult(success=success, title=title, content=content, document=self.document)
        return self._result

    def post_process(self, content: Tag) -> None:
        if not self.config.convert_links_to_footnotes:
            return
        pattern = self.config.footnote_url_pattern
        if pattern is not None and not (self.url and re.search(pattern, self.url)):
            return
        add_footnotes(self.document, content, self.url)


def extract(html: str, url: Optional[str] = None, config: Optional[ReadabilityConfig] = None) -> ExtractionResult:
    """Extract the title and main content of ``html``; never raises for malformed markup."""
    return Readability(html, url=url, config=config).extract()
