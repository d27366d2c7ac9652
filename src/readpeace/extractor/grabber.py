"""
Candidate scoring and article grabbing.

The grabber walks the working root, drops nodes that look like boilerplate,
scores paragraph-like nodes into their parents and grandparents, picks the
best-scoring container, gathers related siblings, and cleans the result. When
the result is too short it restores the original body and tries again with
one heuristic relaxed, until all three are off.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import structlog
from bs4 import BeautifulSoup, Tag

from ..config.config import ReadabilityConfig
from . import dom, patterns
from .cleaner import FORCED_PARAGRAPH_CLASS, ContentCleaner
from .models import Flags, GrabResult, ScoreMap

logger = structlog.get_logger(__name__)

CONTENT_ID = "readability-content"

TAG_SCORES = {
    "div": 5,
    "pre": 3,
    "td": 3,
    "blockquote": 3,
    "address": -3,
    "ol": -3,
    "ul": -3,
    "dl": -3,
    "dd": -3,
    "dt": -3,
    "li": -3,
    "form": -3,
    "h1": -5,
    "h2": -5,
    "h3": -5,
    "h4": -5,
    "h5": -5,
    "h6": -5,
    "th": -5,
}


class ArticleGrabber:
    """Find the element most likely to hold the article and assemble it with related siblings."""

    def __init__(self, document: BeautifulSoup, config: Optional[ReadabilityConfig] = None) -> None:
        self.document = document
        self.config = config or ReadabilityConfig()
        self.logger = logger.bind(component="ArticleGrabber")

    def _trace(self, event: str, **kw: object) -> None:
        if self.config.debug:
            self.logger.debug(event, **kw)

    def grab(
        self,
        root: Tag,
        flags: Optional[Flags] = None,
        body_cache: Optional[str] = None,
        history: Tuple[Flags, ...] = (),
    ) -> GrabResult:
        """
        Run one grab pass on ``root`` and retry with looser flags while the result is short.

        Args:
            root: Working root, normally the document body. Mutated destructively.
            flags: Heuristics active for this pass; all of them by default.
            body_cache: Markup of ``root`` before the first pass, used to restore it between passes.
            history: Flags of the passes already run.

        Returns:
            GrabResult for the last pass run.
        """
        flags = flags or Flags()
        if body_cache is None:
            body_cache = dom.inner_html(root)
        history = history + (flags,)

        scores = ScoreMap()
        nodes_to_score = self.prep_nodes(root, flags)
        candidates = self.score_paragraphs(root, nodes_to_score, scores, flags)
        top_candidate = self.select_top_candidate(root, candidates, scores, flags)
        content = self.assemble(top_candidate, scores)

        ContentCleaner(self.config, flags, scores).clean(content)

        text_length = len(dom.inner_text(content, normalize_spaces=False))
        if text_length < self.config.retry_length:
            relaxed = flags.relaxed()
            if relaxed is not None:
                self._trace(
                    "Content too short, retrying with looser flags",
                    length=text_length,
                    flags=sorted(relaxed.active),
                )
                self.restore(root, body_cache)
                return self.grab(root, relaxed, body_cache, history)
            self._trace("Content still short with every flag off", length=text_length)

        return GrabResult(content=content, found_candidate=bool(candidates), history=history)

    def restore(self, root: Tag, body_cache: str) -> None:
        try:
            dom.set_inner_html(root, body_cache)
        except Exception as e:
            self.logger.warning("Failed to restore the cached body", error=str(e))

    # --- pass 1 ---

    def prep_nodes(self, root: Tag, flags: Flags) -> List[Tag]:
        """
        Trash nodes that look cruddy and turn divs without block children into paragraphs.

        Returns the paragraph-like nodes to score, in document order.
        """
        nodes_to_score: List[Tag] = []

        for node in list(root.find_all(True)):
            if not dom.is_attached(node, root):
                continue

            if flags.strip_unlikelys:
                match_string = dom.attribute(node, "class") + dom.attribute(node, "id")
                if (
                    match_string
                    and patterns.UNLIKELY_CANDIDATES.search(match_string)
                    and not patterns.OK_MAYBE_ITS_A_CANDIDATE.search(match_string)
                    and node.name != "body"
                ):
                    self._trace("Removing unlikely candidate", match=match_string)
                    dom.remove(node)
                    continue

            if node.name in ("p", "td", "pre"):
                nodes_to_score.append(node)

            if node.name == "div":
                if not patterns.DIV_TO_P_ELEMENTS.search(dom.inner_html(node)):
                    paragraph = self._div_to_paragraph(node)
                    nodes_to_score.append(paragraph)
                else:
                    self._wrap_loose_text(node)

        return nodes_to_score

    def _div_to_paragraph(self, div: Tag) -> Tag:
        paragraph = self.document.new_tag("p")
        try:
            div.replace_with(paragraph)
        except ValueError as e:
            self._trace("Could not alter div to p, keeping div", error=str(e))
            return div
        paragraph.extend(list(div.contents))
        return paragraph

    def _wrap_loose_text(self, div: Tag) -> None:
        for child in list(div.contents):
            if not dom.is_text(child):
                continue
            paragraph = self.document.new_tag(
                "p", attrs={"style": "display: inline;", "class": FORCED_PARAGRAPH_CLASS}
            )
            paragraph.string = str(child)
            child.replace_with(paragraph)

    # --- pass 2 ---

    def initialize_node(self, node: Tag, scores: ScoreMap, flags: Flags) -> None:
        scores[node] = TAG_SCORES.get(node.name, 0) + dom.class_weight(node, flags.weight_classes)

    def score_paragraphs(self, root: Tag, nodes: List[Tag], scores: ScoreMap, flags: Flags) -> List[Tag]:
        """
        Give each paragraph a score from its commas and length and add it to its
        parent, and half of it to its grandparent.

        Returns the candidate list: every element that received a score.
        """
        candidates: List[Tag] = []

        for node in nodes:
            parent = node.parent
            if parent is None or not dom.is_tag(parent):
                continue
            if parent is not root and not dom.is_attached(parent, root):
                continue

            text = dom.inner_text(node)
            if len(text) < self.config.min_paragraph_length:
                continue

            grandparent = parent.parent if parent is not root else None
            if grandparent is not None and not dom.is_tag(grandparent):
                grandparent = None

            if parent not in scores:
                self.initialize_node(parent, scores, flags)
                candidates.append(parent)
            if grandparent is not None and grandparent not in scores:
                self.initialize_node(grandparent, scores, flags)
                candidates.append(grandparent)

            content_score = 1
            content_score += text.count(",")
            content_score += min(len(text) // 100, 3)

            scores.add(parent, content_score)
            if grandparent is not None:
                scores.add(grandparent, content_score // 2)

        return candidates

    # --- pass 3 ---

    def select_top_candidate(self, root: Tag, candidates: List[Tag], scores: ScoreMap, flags: Flags) -> Tag:
        """Scale candidate scores by link density and return the best one, wrapping the root when none fits."""
        top_candidate: Optional[Tag] = None
        top_score = 0.0

        for candidate in candidates:
            score = scores[candidate] * (1 - dom.link_density(candidate))
            scores[candidate] = score
            self._trace(
                "Candidate",
                tag=candidate.name,
                class_=dom.attribute(candidate, "class"),
                id=dom.attribute(candidate, "id"),
                score=score,
            )
            if top_candidate is None or score > top_score:
                top_candidate = candidate
                top_score = score

        if top_candidate is None or top_candidate is root:
            top_candidate = self.document.new_tag("div")
            top_candidate.extend(list(root.contents))
            root.append(top_candidate)
            self.initialize_node(top_candidate, scores, flags)

        return top_candidate

    # --- pass 4 ---

    def assemble(self, top_candidate: Tag, scores: ScoreMap) -> Tag:
        """Collect the top candidate and the siblings that look related to it."""
        article = self.document.new_tag("div", attrs={"id": CONTENT_ID})

        top_score = scores.get(top_candidate, 0.0) or 0.0
        top_class = dom.attribute(top_candidate, "class")
        threshold = max(10, top_score * 0.2)
        parent = top_candidate.parent
        siblings = [child for child in parent.contents if dom.is_tag(child)] if parent is not None else [top_candidate]

        for sibling in siblings:
            sibling_score = scores.get(sibling)
            self._trace("Looking at sibling node", tag=sibling.name, score=sibling_score)

            append = sibling is top_candidate

            bonus = 0.0
            if top_class and dom.attribute(sibling, "class") == top_class:
                bonus = top_score * 0.2
            if sibling_score is not None and sibling_score + bonus >= threshold:
                append = True

            if sibling.name == "p":
                density = dom.link_density(sibling)
                text = dom.inner_text(sibling)
                if len(text) > 80 and density < 0.25:
                    append = True
                elif len(text) < 80 and density == 0 and patterns.SENTENCE_END.search(text):
                    append = True

            if append:
                self._trace("Appending node", tag=sibling.name)
                node = self._as_block(sibling)
                node.attrs.pop("class", None)
                article.append(node)

        return article

    def _as_block(self, sibling: Tag) -> Tag:
        """Turn siblings that aren't divs or paragraphs into divs so later cleaning treats them as blocks."""
        if sibling.name in ("div", "p"):
            return sibling
        self._trace("Altering sibling to div", tag=sibling.name)
        replacement = self.document.new_tag("div")
        try:
            if sibling.get("id") is not None:
                replacement["id"] = sibling["id"]
            dom.set_inner_html(replacement, dom.inner_html(sibling))
        except Exception as e:
            self._trace("Could not alter sibling to div, keeping original", error=str(e))
            return sibling
        return replacement
