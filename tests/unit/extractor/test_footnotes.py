"""
Unit tests for link footnotes.
"""

from readpeace.config import ReadabilityConfig
from readpeace.extractor.footnotes import DO_NOT_FOOTNOTE_CLASS, add_footnotes
from readpeace.extractor.readability import Readability

from tests.helpers import article_page

LINKED_PARAGRAPH = (
    '<p>Read the full archive at <a href="https://example.org/archive">the county records office</a>, '
    "open on weekdays.</p>"
)


class TestAddFootnotes:
    """Test cases for add_footnotes()."""

    def test_converts_eligible_links(self, make_container):
        document, container = make_container(
            '<p>See <a href="https://example.org/page" title="Example Page">this page</a> and '
            f'<a class="{DO_NOT_FOOTNOTE_CLASS}" href="#top">top</a>.</p>'
        )
        count = add_footnotes(document, container)

        assert count == 1
        inline = container.find("a", attrs={"name": "readabilityLink-1"})
        assert inline is not None
        assert inline.get_text() == "this page"
        assert "text-decoration: none" in inline["style"]

        reference = container.find("a", attrs={"href": "#readabilityFootnoteLink-1"})
        assert reference.get_text() == "[1]"
        assert reference.find_previous_sibling("a") is inline

        items = container.find(id="readability-footnotes-list").find_all("li")
        assert len(items) == 1
        footnote_link = items[0].find("a", attrs={"name": "readabilityFootnoteLink-1"})
        assert footnote_link.get_text() == "Example Page"
        assert footnote_link["href"] == "https://example.org/page"
        assert items[0].find("a", attrs={"href": "#readabilityLink-1"}).get_text() == "^"
        assert "(example.org)" in items[0].get_text()

    def test_numbers_links_in_order(self, make_container):
        document, container = make_container(
            '<p><a href="https://a.example/">first</a> and <a href="https://b.example/">second</a></p>'
        )
        assert add_footnotes(document, container) == 2

        items = container.find(id="readability-footnotes-list").find_all("li")
        assert [item.find("a", attrs={"name": True}).get_text() for item in items] == ["first", "second"]
        assert container.find("a", attrs={"name": "readabilityLink-2"}).get_text() == "second"

    def test_reference_sits_right_after_link_followed_by_text(self, make_container):
        document, container = make_container(
            '<p>See <a href="https://example.org/">this</a> and then some trailing words.</p>'
        )
        add_footnotes(document, container)

        link = container.find("a", attrs={"name": "readabilityLink-1"})
        reference = link.next_sibling
        assert reference.name == "a"
        assert reference["href"] == "#readabilityFootnoteLink-1"
        assert reference.next_sibling == " and then some trailing words."

    def test_reference_appended_when_link_is_last(self, make_container):
        document, container = make_container('<p>Trailing <a href="https://example.org/">link</a></p>')
        add_footnotes(document, container)

        paragraph = container.p
        assert paragraph.contents[-1]["href"] == "#readabilityFootnoteLink-1"
        assert paragraph.contents[-2].get_text() == "link"

    def test_relative_link_uses_page_host(self, make_container):
        document, container = make_container('<p><a href="/about">About us</a></p>')
        add_footnotes(document, container, "https://news.example.com/story")
        assert "(news.example.com)" in container.find(id="readability-footnotes").get_text()

    def test_no_links_appends_nothing(self, make_container):
        document, container = make_container("<p>No links in here at all.</p>")
        assert add_footnotes(document, container) == 0
        assert container.find(id="readability-footnotes") is None


class TestFootnoteGating:
    """Test cases for when extraction adds footnotes."""

    def _extract(self, url=None, **config):
        html = article_page(article_extra=LINKED_PARAGRAPH)
        return Readability(html, url=url, config=ReadabilityConfig(**config)).extract()

    def test_off_by_default(self):
        result = self._extract()
        assert result.content.find(id="readability-footnotes") is None

    def test_all_urls_without_pattern(self):
        result = self._extract(convert_links_to_footnotes=True)
        assert result.content.find(id="readability-footnotes") is not None

    def test_pattern_must_match_url(self):
        config = {"convert_links_to_footnotes": True, "footnote_url_pattern": r"wikipedia\.org"}

        matching = self._extract(url="https://en.wikipedia.org/wiki/Watermill", **config)
        assert matching.content.find(id="readability-footnotes") is not None

        other = self._extract(url="https://example.com/story", **config)
        assert other.content.find(id="readability-footnotes") is None

        missing = self._extract(**config)
        assert missing.content.find(id="readability-footnotes") is None
