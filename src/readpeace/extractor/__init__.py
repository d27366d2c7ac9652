"""
readpeace content extraction.

Finds the main readable content of an HTML page by scoring paragraph-like
nodes into their containers, picking the best container, gathering related
siblings, and cleaning the result. Extraction retries with looser heuristics
when the result comes out too short.
"""

from .cleaner import ContentCleaner
from .footnotes import add_footnotes
from .grabber import ArticleGrabber
from .models import ExtractionResult, ExtractResult, Flags, GrabResult, ScoreMap
from .preprocessor import preprocess
from .protocols import Extractor
from .readability import Readability, extract
from .readability_extractor import ReadabilityExtractor
from .title import get_article_title, guess_title

__all__ = [
    "ArticleGrabber",
    "ContentCleaner",
    "ExtractionResult",
    "ExtractResult",
    "Extractor",
    "Flags",
    "GrabResult",
    "Readability",
    "ReadabilityExtractor",
    "ScoreMap",
    "add_footnotes",
    "extract",
    "get_article_title",
    "guess_title",
    "preprocess",
]
