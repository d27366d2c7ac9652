"""
Unit tests for ContentCleaner.
"""

from readpeace.config import ReadabilityConfig
from readpeace.extractor import dom
from readpeace.extractor.cleaner import FORCED_PARAGRAPH_CLASS, ContentCleaner
from readpeace.extractor.models import Flags, ScoreMap

PROSE = "A sentence that is long enough to keep, with some words, and then some more words after it."


def _cleaner(scores=None, flags=None, **config):
    return ContentCleaner(ReadabilityConfig(**config), flags or Flags(), scores)


class TestSimplePasses:
    """Test cases for the unconditional passes."""

    def test_strips_styles(self, make_container):
        _, container = make_container(f'<div style="color: red"><p style="margin: 0">{PROSE}</p></div>')
        _cleaner().clean_styles(container)
        assert container.find(style=True) is None

    def test_kill_breaks_collapses_runs(self, make_container):
        _, container = make_container("<p>one<br/> <br/>\n<br>  two<br>three</p>")
        _cleaner().kill_breaks(container)

        paragraph = container.p
        assert len(paragraph.find_all("br")) == 2
        assert paragraph.decode_contents() == "one<br/>two<br/>three"

    def test_kill_breaks_handles_nbsp(self, make_container):
        _, container = make_container("<p>one<br/>&nbsp; <br/>two</p>")
        _cleaner().kill_breaks(container)
        assert container.p.decode_contents() == "one<br/>two"

    def test_reverts_forced_paragraphs(self, make_container):
        _, container = make_container(
            f'<div>Loose <p class="{FORCED_PARAGRAPH_CLASS}" style="display: inline;">wrapped text</p><p>Para</p></div>'
        )
        _cleaner().revert_forced_paragraphs(container)

        assert container.find("p", attrs={"class": FORCED_PARAGRAPH_CLASS}) is None
        assert container.div.get_text() == "Loose wrapped textPara"
        assert len(container.find_all("p")) == 1

    def test_keeps_forced_paragraphs_when_disabled(self, make_container):
        _, container = make_container(f'<div><p class="{FORCED_PARAGRAPH_CLASS}">wrapped text {PROSE}</p></div>')
        _cleaner(revert_forced_paragraphs=False).clean(container)
        assert container.find("p", attrs={"class": FORCED_PARAGRAPH_CLASS}) is not None

    def test_removes_objects_and_h1(self, make_container):
        _, container = make_container(f'<h1>Title</h1><object data="movie.swf"></object><p>{PROSE}</p>')
        _cleaner().clean(container)

        assert container.find("h1") is None
        assert container.find("object") is None

    def test_video_iframes_survive(self, make_container):
        _, container = make_container(
            f"<p>{PROSE}"
            '<iframe src="https://www.youtube.com/embed/xyz"></iframe>'
            '<iframe src="https://player.vimeo.com/video/1"></iframe>'
            '<iframe src="https://ads.example.com/frame"></iframe></p>'
        )
        _cleaner().remove_tags(container, "iframe")

        sources = [iframe["src"] for iframe in container.find_all("iframe")]
        assert sources == ["https://www.youtube.com/embed/xyz", "https://player.vimeo.com/video/1"]

    def test_lone_h2_removed_only_in_standard_mode(self, make_container):
        _, container = make_container(f"<h2>Subtitle here</h2><p>{PROSE}</p>")
        _cleaner().clean(container)
        assert container.find("h2") is not None

        _, container = make_container(f"<h2>Subtitle here</h2><p>{PROSE}</p>")
        _cleaner(light_clean=False).clean(container)
        assert container.find("h2") is None

    def test_bad_headers_removed(self, make_container):
        _, container = make_container(
            '<h2 class="related">Related</h2><h2><a href="#">All links</a></h2>'
            f"<h2>A real subheading</h2><p>{PROSE}</p>"
        )
        _cleaner().clean_headers(container)
        assert [h.get_text() for h in container.find_all("h2")] == ["A real subheading"]

    def test_empty_paragraphs_removed(self, make_container):
        _, container = make_container(f'<p>  </p><p><img src="a.png"/></p><p>{PROSE}</p>')
        _cleaner().remove_empty_paragraphs(container)

        paragraphs = container.find_all("p")
        assert len(paragraphs) == 2
        assert paragraphs[0].find("img") is not None

    def test_break_before_paragraph_removed(self, make_container):
        _, container = make_container(f"<div>text<br/> <p>{PROSE}</p>more<br/>end</div>")
        _cleaner().remove_breaks_before_paragraphs(container)
        assert len(container.find_all("br")) == 1

    def test_break_before_comment_kept(self, make_container):
        _, container = make_container(f"<div>text<br/> <!-- note --><p>{PROSE}</p></div>")
        _cleaner().remove_breaks_before_paragraphs(container)
        assert len(container.find_all("br")) == 1


class TestCleanConditionally:
    """Test cases for conditional cleaning."""

    def test_link_heavy_div_removed(self, make_container):
        _, container = make_container(
            f'<p>{PROSE}</p><div><a href="#">Link one here</a> <a href="#">Link two there</a> and some</div>'
        )
        _cleaner().clean_conditionally(container, "div")
        assert container.find("div") is None

    def test_skipped_when_flag_off(self, make_container):
        _, container = make_container('<div><a href="#">Link one here</a> <a href="#">Link two there</a></div>')
        _cleaner(flags=Flags(clean_conditionally=False)).clean_conditionally(container, "div")
        assert container.find("div") is not None

    def test_negative_weight_and_score_removed(self, make_container):
        _, container = make_container(f'<div class="sidebar">{PROSE}, {PROSE}, {PROSE}, {PROSE}</div>')
        _cleaner().clean_conditionally(container, "div")
        assert container.find("div") is None

    def test_score_offsets_negative_weight(self, make_container):
        _, container = make_container(f'<div class="sidebar">{PROSE}, {PROSE}, {PROSE}, {PROSE}</div>')
        scores = ScoreMap()
        scores[container.div] = 30
        _cleaner(scores).clean_conditionally(container, "div")
        assert container.find("div") is not None

    def test_form_with_inputs_removed(self, make_container):
        _, container = make_container(
            f'<p>{PROSE}</p><form><p>Enter your email address below to join us.</p><input name="a"/><input name="b"/></form>'
        )
        _cleaner().clean_conditionally(container, "form")
        assert container.find("form") is None

    def test_short_div_without_media_removed(self, make_container):
        _, container = make_container(f"<p>{PROSE}</p><div>Tiny</div>")
        _cleaner().clean_conditionally(container, "div")
        assert container.find("div") is None

    def test_short_div_with_video_kept_in_light_mode(self, make_container):
        inner = '<div>Watch<iframe src="https://www.youtube.com/embed/xyz"></iframe></div>'
        _, container = make_container(f"<p>{PROSE}</p>{inner}")
        _cleaner().clean_conditionally(container, "div")
        assert container.find("div") is not None

        _, container = make_container(f"<p>{PROSE}</p>{inner}")
        _cleaner(light_clean=False).clean_conditionally(container, "div")
        assert container.find("div") is None

    def test_image_gallery_rules_differ_by_mode(self, make_container):
        gallery = f'<div><p>{PROSE}</p><img src="1.png"/><img src="2.png"/></div>'
        _, container = make_container(gallery)
        _cleaner().clean_conditionally(container, "div")
        assert container.find("div") is not None

        _, container = make_container(gallery)
        _cleaner(light_clean=False).clean_conditionally(container, "div")
        assert container.find("div") is None

    def test_comma_rich_content_kept(self, make_container):
        links = " ".join(f'<a href="#">link {i},</a>' for i in range(12))
        _, container = make_container(f"<div>{links}</div>")
        _cleaner().clean_conditionally(container, "div")
        assert container.find("div") is not None

    def test_list_inside_list_tag_kept(self, make_container):
        items = "".join(f"<li>{PROSE}</li>" for _ in range(3))
        _, container = make_container(f"<ul>{items}</ul>")
        _cleaner().clean_conditionally(container, "ul")
        assert container.find("ul") is not None


class TestCleanCascade:
    """Test cases for the full cascade."""

    def test_clean_is_idempotent(self, make_container):
        _, container = make_container(
            f'<div style="x"><h1>Title</h1><p>{PROSE}</p><br/><br/><p>{PROSE}</p>'
            f'<p class="{FORCED_PARAGRAPH_CLASS}">loose text</p>'
            '<iframe src="https://ads.example.com/frame"></iframe>'
            '<iframe src="https://www.youtube.com/embed/xyz"></iframe>'
            '<div class="share"><a href="#">Share this</a> <a href="#">Tweet this</a></div><p> </p></div>'
        )
        cleaner = _cleaner()
        cleaner.clean(container)
        once = str(container)
        cleaner.clean(container)

        assert str(container) == once
        assert "ads.example.com" not in once
        assert "youtube.com/embed/xyz" in once
        assert "Share this" not in once

    def test_returns_container(self, make_container):
        _, container = make_container(f"<p>{PROSE}</p>")
        assert _cleaner().clean(container) is container
        assert dom.inner_text(container) == PROSE
