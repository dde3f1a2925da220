"""Tests for glyph.render placement, escaping and idempotence."""

from app.models.context import RenderContext
from app.services.glyph import has_glyph, render

_HREF = "https://mysite.test/p/1"
_FRAGMENT = '<span class="linkpress-glyph"><a href="https://mysite.test/p/1" rel="bookmark">∞</a></span>'


class TestRenderFragment:
    def test_bare_fragment(self):
        assert render("∞", _HREF, RenderContext.LISTING) == _FRAGMENT

    def test_plain_text_glyph_is_escaped(self):
        html = render("<b>&#9733;</b>", _HREF, RenderContext.LISTING)
        assert "&lt;b&gt;&amp;#9733;&lt;/b&gt;" in html
        assert "<b>" not in html

    def test_markup_glyph_passes_through(self):
        html = render("&#9733;", _HREF, RenderContext.LISTING, markup=True)
        assert ">&#9733;</a>" in html

    def test_href_is_attribute_escaped(self):
        html = render("∞", 'https://x.com/?a=1&b="2"', RenderContext.LISTING)
        assert 'href="https://x.com/?a=1&amp;b=&quot;2&quot;"' in html

    def test_title_attribute(self):
        html = render("∞", _HREF, RenderContext.LISTING, title="Permanent link to 'Hi'")
        assert 'title="Permanent link to &#x27;Hi&#x27;"' in html

    def test_empty_glyph_or_href_leaves_content(self):
        assert render("", _HREF, RenderContext.LISTING, "Title") == "Title"
        assert render("∞", "", RenderContext.LISTING, "Title") == "Title"


class TestRenderPlacement:
    def test_plain_title_gets_glyph_appended(self):
        assert render("∞", _HREF, RenderContext.LISTING, "My title ") == f"My title {_FRAGMENT}"

    def test_glyph_goes_inside_trailing_heading(self):
        content = '<h2 class="entry-title"><a href="/p/1">Title</a></h2>\n'
        assert render("∞", _HREF, RenderContext.LISTING, content) == (
            f'<h2 class="entry-title"><a href="/p/1">Title</a> {_FRAGMENT}</h2>'
        )

    def test_feed_appends_paragraph(self):
        assert render("∞", _HREF, RenderContext.FEED, "<p>Body</p>") == (
            f"<p>Body</p>\n<p>{_FRAGMENT}</p>\n"
        )


class TestRenderIdempotence:
    def test_listing_twice_equals_once(self):
        once = render("∞", _HREF, RenderContext.LISTING, "<h2>Title</h2>")
        assert render("∞", _HREF, RenderContext.LISTING, once) == once

    def test_feed_twice_equals_once(self):
        once = render("&#9733;", _HREF, RenderContext.FEED, "<p>Body</p>", markup=True)
        assert render("&#9733;", _HREF, RenderContext.FEED, once, markup=True) == once

    def test_marker_in_plain_text_is_not_a_glyph(self):
        assert has_glyph("we mention linkpress-glyph in prose") is False
        assert has_glyph(_FRAGMENT) is True
