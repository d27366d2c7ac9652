"""
Async adapter exposing the readability pipeline through the Extractor protocol.
"""

from __future__ import annotations

import asyncio
from typing import Optional
from urllib.parse import urljoin

import structlog

from ..config.config import ReadabilityConfig
from .models import ExtractResult
from .protocols import Extractor
from .readability import Readability

logger = structlog.get_logger(__name__)


class ReadabilityExtractor(Extractor):
    """Extractor running the readability pipeline in a worker thread."""

    name = "readability"

    def __init__(self, config: Optional[ReadabilityConfig] = None) -> None:
        self.config = config or ReadabilityConfig()

    def _empty(self, url: str | None) -> ExtractResult:
        return ExtractResult(
            url=url,
            text="",
            title=None,
            images=[],
            language=None,
            score=0.0,
        )

    async def extract(self, html: str, *, url: str | None = None) -> ExtractResult:
        """Extract content using the readability pipeline.

        Args:
            html: HTML content to extract from
            url: Optional URL for context

        Returns:
            ExtractResult with extracted content
        """
        if not html or not html.strip():
            logger.warning("Empty HTML passed to readability extractor", url=url)
            return self._empty(url)

        try:
            # Scoring and cleaning are CPU-bound, keep them off the event loop
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, self._extract_sync, html, url)
        except Exception as e:
            logger.warning("Readability extraction failed", url=url, error=str(e))
            return self._empty(url)

    def _extract_sync(self, html: str, url: str | None) -> ExtractResult:
        """Synchronous extraction and flattening to text."""
        result = Readability(html, url=url, config=self.config).extract()

        title = result.title_text or None
        if not result.success:
            return ExtractResult(url=url, text="", title=title, images=[], language=None, score=0.0)

        text = result.text
        images = []
        for img in result.content.find_all("img"):
            src = img.get("src")
            if not src:
                continue
            if url and not src.startswith(("http://", "https://")):
                src = urljoin(url, src)
            images.append(src)

        return ExtractResult(
            url=url,
            text=text,
            title=title,
            images=images,
            language=None,  # readability doesn't detect language
            score=0.7 if len(text.strip()) > 20 else 0.0,
        )
