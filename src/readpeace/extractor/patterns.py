"""
Lexical patterns used by the extraction heuristics.

Class/id heuristics are case-insensitive substring matches against fixed word
lists; the compiled alternations below are built from those lists.
"""

from __future__ import annotations

import re
from typing import Iterable

UNLIKELY_CANDIDATE_WORDS = (
    "combx",
    "comment",
    "community",
    "disqus",
    "extra",
    "header",
    "menu",
    "remark",
    "rss",
    "shoutbox",
    "sidebar",
    "sponsor",
    "ad-break",
    "agegate",
    "pagination",
    "pager",
    "popup",
)

MAYBE_CANDIDATE_WORDS = ("and", "article", "body", "column", "main", "shadow")

POSITIVE_WORDS = (
    "article",
    "body",
    "content",
    "entry",
    "hentry",
    "main",
    "page",
    "attachment",
    "pagination",
    "post",
    "text",
    "footnote",
    "blog",
    "story",
)

NEGATIVE_WORDS = (
    "combx",
    "comment",
    "com-",
    "contact",
    "foot",
    "footer",
    "_nav",
    "masthead",
    "media",
    "meta",
    "outbrain",
    "promo",
    "related",
    "scroll",
    "shoutbox",
    "sidebar",
    "sponsor",
    "shopping",
    "tags",
    "tool",
    "widget",
)

# Tags whose presence in a div's markup keeps it from being turned into a paragraph
DIV_TO_P_TAGS = ("a", "blockquote", "dl", "div", "img", "ol", "p", "pre", "table", "ul")

VIDEO_HOSTS = ("youtube.com", "vimeo.com", "viddler.com", "twitch.tv")


def word_pattern(words: Iterable[str]) -> re.Pattern[str]:
    """Compile a case-insensitive alternation that matches any of ``words`` as a substring."""
    return re.compile("|".join(re.escape(word) for word in words), re.IGNORECASE)


UNLIKELY_CANDIDATES = word_pattern(UNLIKELY_CANDIDATE_WORDS)
OK_MAYBE_ITS_A_CANDIDATE = word_pattern(MAYBE_CANDIDATE_WORDS)
POSITIVE = word_pattern(POSITIVE_WORDS)
NEGATIVE = word_pattern(NEGATIVE_WORDS)
DIV_TO_P_ELEMENTS = re.compile(r"<(?:%s)" % "|".join(DIV_TO_P_TAGS), re.IGNORECASE)
VIDEO = re.compile(
    r"//(?:player\.|www\.)?(?:%s)" % "|".join(re.escape(host) for host in VIDEO_HOSTS),
    re.IGNORECASE,
)

# Raw-markup rewrites applied before parsing
WHITESPACE_SPAN = re.compile(r"<span[^>]*?>([\n\t ]+)</span>", re.IGNORECASE)
REPLACE_BRS = re.compile(r"(?:<br[^>]*>[ \n\r\t]*){2,}", re.IGNORECASE)
REPLACE_FONTS = re.compile(r"<(/?)font[^>]*>", re.IGNORECASE)

NORMALIZE = re.compile(r"\s{2,}")
SENTENCE_END = re.compile(r"\.( |$)")

# Title separators
TITLE_SEPARATOR = re.compile(r" [|\-] ")
TITLE_BEFORE_LAST_SEPARATOR = re.compile(r"(.*)[|\-] .*")
TITLE_AFTER_FIRST_SEPARATOR = re.compile(r"[^|\-]*[|\-](.*)")
TITLE_AFTER_LAST_COLON = re.compile(r".*:(.*)")
TITLE_AFTER_FIRST_COLON = re.compile(r"[^:]*:(.*)")
