"""
readpeace - readable article extraction for HTML documents.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config, ReadabilityConfig
from .extractor import ExtractionResult, Readability, ReadabilityExtractor, extract

__all__ = ["__version__", "Config", "ExtractionResult", "Readability", "ReadabilityConfig", "ReadabilityExtractor", "extract"]
