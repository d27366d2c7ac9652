"""
Protocol for async adapters over the readability pipeline.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import ExtractResult


@runtime_checkable
class Extractor(Protocol):
    """Something that turns a page into a flattened, scored ExtractResult without blocking the event loop."""

    name: str

    async def extract(self, html: str, *, url: str | None = None) -> ExtractResult:
        """Extract the readable text, title and images of ``html``.

        ``url`` is the page's address; relative image sources are resolved
        against it. Implementations return an empty, zero-score result
        instead of raising.
        """
        ...
