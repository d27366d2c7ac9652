"""
Content cleaner: the fixed cascade of cleanup passes run on the assembled article.
"""

from __future__ import annotations

from typing import Iterable

import structlog
from bs4 import NavigableString, Tag

from ..config.config import ReadabilityConfig
from . import dom, patterns
from .models import Flags, ScoreMap

logger = structlog.get_logger(__name__)

FORCED_PARAGRAPH_CLASS = "readability-styled"
EMBED_TAGS = ("iframe", "object", "embed")


class ContentCleaner:
    """
    Prepare an article node for display.

    Strips inline styles and break runs, undoes forced paragraphs, and removes
    forms, objects, headers, iframes, and any tables, lists or divs that look
    like boilerplate. Cleaning mutates the given container in place.
    """

    def __init__(self, config: ReadabilityConfig, flags: Flags | None = None, scores: ScoreMap | None = None) -> None:
        self.config = config
        self.flags = flags or Flags()
        self.scores = scores if scores is not None else ScoreMap()
        self.logger = logger.bind(component="ContentCleaner")

    def _trace(self, event: str, **kw: object) -> None:
        if self.config.debug:
            self.logger.debug(event, **kw)

    def clean(self, article: Tag) -> Tag:
        self.clean_styles(article)
        self.kill_breaks(article)

        if self.config.revert_forced_paragraphs:
            self.revert_forced_paragraphs(article)

        self.clean_conditionally(article, "form")
        self.remove_tags(article, "object")
        self.remove_tags(article, "h1")

        # A lone h2 is most likely the page header again
        if not self.config.light_clean and len(article.find_all("h2")) == 1:
            self.remove_tags(article, "h2")

        self.remove_tags(article, "iframe")
        self.clean_headers(article)

        # Last, as the passes above may have removed junk that affects these
        self.clean_conditionally(article, "table")
        self.clean_conditionally(article, "ul")
        self.clean_conditionally(article, "div")

        self.remove_empty_paragraphs(article)
        self.remove_breaks_before_paragraphs(article)
        return article

    def clean_styles(self, article: Tag) -> None:
        article.attrs.pop("style", None)
        for element in article.find_all(True):
            element.attrs.pop("style", None)

    def kill_breaks(self, article: Tag) -> None:
        """Collapse each run of ``<br>`` tags, with the whitespace around them, into a single break."""
        for br in article.find_all("br"):
            if not dom.is_attached(br, article):
                continue
            node = br.next_sibling
            while node is not None:
                following = node.next_sibling
                if dom.is_tag(node, "br"):
                    node.extract()
                elif dom.is_text(node):
                    stripped = node.lstrip()
                    if stripped:
                        if stripped != node:
                            node.replace_with(NavigableString(stripped))
                        break
                    node.extract()
                else:
                    break
                node = following

    def revert_forced_paragraphs(self, article: Tag) -> None:
        """Turn paragraphs wrapped around loose div text back into plain text."""
        for paragraph in article.find_all("p"):
            if FORCED_PARAGRAPH_CLASS not in dom.attribute(paragraph, "class").split():
                continue
            if paragraph.parent is None:
                continue
            paragraph.replace_with(NavigableString(paragraph.get_text()))

    def remove_tags(self, article: Tag, tag: str) -> None:
        """Remove every ``tag`` element, sparing embeds that point at a known video host."""
        is_embed = tag in EMBED_TAGS
        for element in article.find_all(tag):
            if is_embed and self.is_video_embed(element):
                continue
            dom.remove(element)

    @staticmethod
    def is_video_embed(element: Tag) -> bool:
        attribute_values = "|".join(dom.attribute(element, name) for name in element.attrs)
        if patterns.VIDEO.search(attribute_values):
            return True
        return bool(patterns.VIDEO.search(dom.inner_html(element)))

    def clean_headers(self, article: Tag) -> None:
        """Remove h1/h2 headers that weigh negative or are mostly links."""
        for header in article.find_all(["h1", "h2"]):
            if (
                dom.class_weight(header, self.flags.weight_classes) < 0
                or dom.link_density(header) > 0.33
            ):
                dom.remove(header)

    def clean_conditionally(self, article: Tag, tag: str) -> None:
        """
        Remove ``tag`` elements that look fishy.

        "Fishy" weighs the class/id weight and content score together with
        comma count, the number of images, list items, inputs, anchors and
        video embeds, link density, and text length.
        """
        if not self.flags.clean_conditionally:
            return

        for element in article.find_all(tag):
            if not dom.is_attached(element, article):
                continue
            weight = dom.class_weight(element, self.flags.weight_classes)
            content_score = int(self.scores.get(element, 0) or 0)

            self._trace(
                "Cleaning conditionally",
                tag=element.name,
                class_=dom.attribute(element, "class"),
                id=dom.attribute(element, "id"),
                score=self.scores.get(element),
            )

            if weight + content_score < 0:
                dom.remove(element)
                continue
            if dom.char_count(element, ",") >= 10:
                continue

            reason = self._removal_reason(element, weight)
            if reason:
                self._trace("Removing conditionally", tag=element.name, reason=reason)
                dom.remove(element)

    def _removal_reason(self, element: Tag, weight: int) -> str | None:
        p = len(element.find_all("p"))
        img = len(element.find_all("img"))
        li = len(element.find_all("li")) - 100
        inputs = len(element.find_all("input"))
        anchors = len(element.find_all("a"))
        embeds = self._count_video_embeds(element.find_all(["embed", "iframe"]))
        density = dom.link_density(element)
        content_length = len(dom.inner_text(element))
        is_list = element.name in ("ul", "ol")

        if self.config.light_clean:
            if img > p and img > 4:
                return "more than 4 images and more images than paragraphs"
            if li > p and not is_list:
                return "too many list items outside a list"
            if inputs > p // 3:
                return "too many inputs"
            if content_length < 25 and embeds == 0 and (img == 0 or img > 2):
                return "too little text, no video and either no images or more than 2"
            if weight < 25 and density > 0.2:
                return "weight below 25 and link density above 0.2"
            if anchors > 2 and weight >= 25 and density > 0.5:
                return "more than 2 links, weight of 25 or more and link density above 0.5"
            if embeds > 3:
                return "more than 3 video embeds"
            return None

        if img > p:
            return "more images than paragraphs"
        if li > p and not is_list:
            return "too many list items outside a list"
        if inputs > p // 3:
            return "too many inputs"
        if content_length < 25 and (img == 0 or img > 2):
            return "too little text and either no images or more than 2"
        if weight < 25 and density > 0.2:
            return "weight below 25 and link density above 0.2"
        if weight >= 25 and density > 0.5:
            return "weight of 25 or more and link density above 0.5"
        if (embeds == 1 and content_length < 75) or embeds > 1:
            return "a video embed with little text, or several video embeds"
        return None

    @staticmethod
    def _count_video_embeds(embeds: Iterable[Tag]) -> int:
        return sum(1 for embed in embeds if patterns.VIDEO.search(dom.attribute(embed, "src")))

    def remove_empty_paragraphs(self, article: Tag) -> None:
        for paragraph in article.find_all("p"):
            if paragraph.find(["img", "embed", "object", "iframe"]) is not None:
                continue
            if dom.inner_text(paragraph, normalize_spaces=False) == "":
                dom.remove(paragraph)

    def remove_breaks_before_paragraphs(self, article: Tag) -> None:
        for br in article.find_all("br"):
            if dom.is_tag(dom.next_non_blank_sibling(br), "p"):
                dom.remove(br)
