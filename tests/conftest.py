"""
Shared fixtures for readpeace tests.
"""

import logging

import pytest
import structlog
from readpeace.config import ReadabilityConfig
from readpeace.extractor import dom

from tests.helpers import article_page


@pytest.fixture
def article_html() -> str:
    """A typical article page with navigation, sidebar, comments and footer."""
    return article_page()


@pytest.fixture
def config() -> ReadabilityConfig:
    return ReadabilityConfig()


@pytest.fixture
def make_body():
    """Parse ``inner`` as the body of a document and return ``(document, body)``."""

    def _make(inner: str):
        document = dom.parse_document(f"<html><head></head><body>{inner}</body></html>")
        return document, document.body

    return _make


@pytest.fixture
def make_container():
    """Parse ``inner`` into an article container and return ``(document, container)``."""

    def _make(inner: str):
        document = dom.parse_document(
            f'<html><head></head><body><div id="readability-content">{inner}</div></body></html>'
        )
        return document, document.find(id="readability-content")

    return _make


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging() so handlers don't leak between tests."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    structlog.contextvars.clear_contextvars()
