"""Tests for decorator.decorate."""

from app.models.policy import UtmPolicy
from app.services.decorator import decorate

_RSS = UtmPolicy(enabled=True, source="rss", medium="linked-post")


class TestDecorateGates:
    def test_disabled_policy_returns_url_unchanged(self):
        policy = UtmPolicy(enabled=False, source="rss")
        assert decorate("https://x.com/a", policy) == "https://x.com/a"

    def test_missing_policy_returns_url_unchanged(self):
        assert decorate("https://x.com/a", None) == "https://x.com/a"

    def test_non_web_urls_are_never_decorated(self):
        for url in ("ftp://x.com/f", "mailto:me@x.com", "javascript:alert(1)", "/x", ""):
            assert decorate(url, _RSS) == url

    def test_no_configured_values_returns_url_unchanged(self):
        policy = UtmPolicy(enabled=True, source="", medium=None)
        assert decorate("https://x.com/a?b=c+d", policy) == "https://x.com/a?b=c+d"


class TestDecorateMerging:
    def test_appends_parameters_in_fixed_order(self):
        policy = UtmPolicy(
            enabled=True,
            content="c5",
            term="t4",
            campaign="c3",
            medium="m2",
            source="s1",
        )
        assert decorate("https://x.com/a", policy) == (
            "https://x.com/a?utm_source=s1&utm_medium=m2&utm_campaign=c3&utm_term=t4&utm_content=c5"
        )

    def test_existing_query_comes_first(self):
        assert (
            decorate("http://example.com/article?ref=1", _RSS)
            == "http://example.com/article?ref=1&utm_source=rss&utm_medium=linked-post"
        )

    def test_preserve_existing_keeps_old_value(self):
        policy = UtmPolicy(enabled=True, preserve_existing=True, source="new")
        assert decorate("https://x.com/a?utm_source=old", policy) == "https://x.com/a?utm_source=old"

    def test_overwrite_replaces_old_value(self):
        policy = UtmPolicy(enabled=True, preserve_existing=False, source="new")
        assert decorate("https://x.com/a?utm_source=old", policy) == "https://x.com/a?utm_source=new"

    def test_overwrite_keeps_key_position(self):
        policy = UtmPolicy(enabled=True, preserve_existing=False, source="new")
        assert (
            decorate("https://x.com/a?utm_source=old&page=2", policy)
            == "https://x.com/a?utm_source=new&page=2"
        )

    def test_repeated_key_collapses_to_last_value(self):
        policy = UtmPolicy(enabled=True, source="rss")
        assert decorate("https://x.com/?a=1&a=2", policy) == "https://x.com/?a=2&utm_source=rss"

    def test_values_are_rfc3986_encoded(self):
        policy = UtmPolicy(enabled=True, campaign="spring sale", term="a&b")
        assert (
            decorate("https://x.com/a", policy)
            == "https://x.com/a?utm_campaign=spring%20sale&utm_term=a%26b"
        )

    def test_fragment_and_port_are_preserved(self):
        policy = UtmPolicy(enabled=True, source="rss")
        assert (
            decorate("https://x.com:8443/a#frag", policy)
            == "https://x.com:8443/a?utm_source=rss#frag"
        )

    def test_non_utf8_query_bytes_are_kept(self):
        policy = UtmPolicy(enabled=True, source="rss")
        assert decorate("https://x.com/s?q=caf%E9", policy) == "https://x.com/s?q=caf%E9&utm_source=rss"

    def test_scheme_is_lowercased_on_rebuild(self):
        policy = UtmPolicy(enabled=True, source="rss")
        assert decorate("HTTPS://x.com/a", policy) == "https://x.com/a?utm_source=rss"


class TestDecorateIdempotence:
    def test_redecorating_with_preserve_is_a_no_op(self):
        policy = UtmPolicy(enabled=True, preserve_existing=True, source="rss", campaign="a b")
        once = decorate("https://x.com/a?q=hello+world", policy)
        assert decorate(once, policy) == once

    def test_redecorating_with_overwrite_is_a_no_op(self):
        policy = UtmPolicy(enabled=True, preserve_existing=False, source="rss")
        once = decorate("https://x.com/a", policy)
        assert decorate(once, policy) == once
