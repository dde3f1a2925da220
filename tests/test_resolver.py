"""Tests for resolver.resolve across render contexts."""

from app.models.context import RenderContext
from app.models.link_item import LinkItem
from app.models.policy import GlyphConfig, SiteLinkPolicy, UtmPolicy
from app.services.resolver import resolve

_PERMALINK = "https://mysite.test/p/1"
_DECORATED = "https://ex.com/story?utm_source=rss"

_POLICY = SiteLinkPolicy(
    rewrite_permalinks_enabled=True,
    utm=UtmPolicy(enabled=True, source="rss"),
    site_glyph=GlyphConfig(enabled=True, text="∞"),
    feed_glyph=GlyphConfig(enabled=True, text="&#9733;", markup=True),
)


def _item(**overrides) -> LinkItem:
    fields = {"id": 1, "external_url": "https://ex.com/story", "internal_permalink": _PERMALINK}
    fields.update(overrides)
    return LinkItem(**fields)


class TestListing:
    def test_title_points_at_decorated_external_url(self):
        resolution = resolve(_item(), RenderContext.LISTING, _POLICY)
        assert resolution.title_href == _DECORATED
        assert resolution.glyph_href == _PERMALINK
        assert resolution.glyph_target == "internal"
        assert resolution.show_glyph is True

    def test_skip_rewrite_keeps_permalink(self):
        resolution = resolve(_item(skip_rewrite=True), RenderContext.LISTING, _POLICY)
        assert resolution.title_href == _PERMALINK

    def test_rewrite_disabled_keeps_permalink(self):
        policy = _POLICY.model_copy(update={"rewrite_permalinks_enabled": False})
        assert resolve(_item(), RenderContext.LISTING, policy).title_href == _PERMALINK

    def test_invalid_external_url_is_treated_as_absent(self):
        for url in ("/relative", "mailto:me@ex.com", "javascript:alert(1)"):
            resolution = resolve(_item(external_url=url), RenderContext.LISTING, _POLICY)
            assert resolution.title_href == _PERMALINK
            assert resolution.show_glyph is False

    def test_plain_post_has_no_glyph(self):
        resolution = resolve(_item(external_url=""), RenderContext.LISTING, _POLICY)
        assert resolution.title_href == _PERMALINK
        assert resolution.show_glyph is False

    def test_default_policy_changes_nothing(self):
        resolution = resolve(_item(), RenderContext.LISTING, SiteLinkPolicy())
        assert resolution.title_href == _PERMALINK
        assert resolution.show_glyph is False


class TestSingle:
    def test_title_stays_on_permalink(self):
        resolution = resolve(_item(), RenderContext.SINGLE, _POLICY)
        assert resolution.title_href == _PERMALINK

    def test_glyph_hidden_by_default(self):
        assert resolve(_item(), RenderContext.SINGLE, _POLICY).show_glyph is False

    def test_glyph_shown_when_configured(self):
        policy = _POLICY.model_copy(
            update={"site_glyph": GlyphConfig(enabled=True, text="∞", show_on_single=True)}
        )
        resolution = resolve(_item(), RenderContext.SINGLE, policy)
        assert resolution.show_glyph is True
        assert resolution.glyph_href == _PERMALINK


class TestFeed:
    def test_title_points_at_decorated_external_url(self):
        resolution = resolve(_item(), RenderContext.FEED, _POLICY)
        assert resolution.title_href == _DECORATED
        assert resolution.glyph_href == _PERMALINK
        assert resolution.glyph_target == "internal"

    def test_skip_rewrite_does_not_affect_feeds(self):
        resolution = resolve(_item(skip_rewrite=True), RenderContext.FEED, _POLICY)
        assert resolution.title_href == _DECORATED

    def test_rewrite_setting_does_not_affect_feeds(self):
        policy = _POLICY.model_copy(update={"rewrite_permalinks_enabled": False})
        assert resolve(_item(), RenderContext.FEED, policy).title_href == _DECORATED

    def test_feed_links_can_stay_internal(self):
        policy = _POLICY.model_copy(update={"feed_links_external": False})
        assert resolve(_item(), RenderContext.FEED, policy).title_href == _PERMALINK

    def test_feed_glyph_config_applies(self):
        policy = _POLICY.model_copy(update={"feed_glyph": GlyphConfig(enabled=False)})
        assert resolve(_item(), RenderContext.FEED, policy).show_glyph is False
        assert resolve(_item(), RenderContext.LISTING, policy).show_glyph is True


class TestGlyphTarget:
    def test_external_glyph_target(self):
        policy = _POLICY.model_copy(update={"glyph_target": "external"})
        resolution = resolve(_item(), RenderContext.LISTING, policy)
        assert resolution.glyph_href == _DECORATED
        assert resolution.glyph_target == "external"

    def test_external_glyph_target_falls_back_for_plain_posts(self):
        policy = _POLICY.model_copy(update={"glyph_target": "external"})
        resolution = resolve(_item(external_url=""), RenderContext.LISTING, policy)
        assert resolution.glyph_href == _PERMALINK
        assert resolution.glyph_target == "internal"


def test_resolution_leaves_inputs_untouched():
    item = _item()
    before_item = item.model_dump()
    before_policy = _POLICY.model_dump()
    for context in RenderContext:
        resolve(item, context, _POLICY)
    assert item.model_dump() == before_item
    assert _POLICY.model_dump() == before_policy
