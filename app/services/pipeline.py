"""Explicit composition of the link components with an ordered filter list."""

from typing import Callable, List, Optional, Sequence

from app.models.context import RenderContext
from app.models.link_item import LinkItem
from app.models.policy import SiteLinkPolicy
from app.models.resolution import FeedEntry, PostRecord, RedirectDecision, Resolution
from app.services.decorator import decorate
from app.services.feed import feed_content, feed_title
from app.services.glyph import render
from app.services.redirect import decide
from app.services.resolver import resolve
from app.services.urls import is_web_url

HrefFilter = Callable[[str], str]


class LinkEngine:
    """Bundles a policy snapshot with optional href filters.

    Each filter receives an external href produced by the engine and returns
    the href to use instead. Filters run in registration order and are never
    applied to internal permalinks.
    """

    def __init__(self, policy: SiteLinkPolicy, href_filters: Optional[Sequence[HrefFilter]] = None):
        self.policy = policy
        self.href_filters: List[HrefFilter] = list(href_filters or [])

    def register(self, href_filter: HrefFilter) -> HrefFilter:
        """Append *href_filter* to the chain. Usable as a decorator."""
        self.href_filters.append(href_filter)
        return href_filter

    def _filter(self, href: str) -> str:
        for href_filter in self.href_filters:
            href = href_filter(href)
        return href

    def decorate(self, url: str) -> str:
        if not is_web_url(url):
            return url
        return self._filter(decorate(url, self.policy.utm))

    def resolve(self, item: LinkItem, context: RenderContext) -> Resolution:
        resolution = resolve(item, context, self.policy)
        if not self.href_filters:
            return resolution

        update = {}
        if resolution.title_href != item.internal_permalink:
            update["title_href"] = self._filter(resolution.title_href)
        if resolution.glyph_target == "external":
            update["glyph_href"] = self._filter(resolution.glyph_href)
        return resolution.model_copy(update=update)

    def decide(self, item: LinkItem, bypass: bool = False) -> RedirectDecision:
        decision = decide(item, self.policy, bypass)
        if decision.redirect and self.href_filters:
            return decision.model_copy(update={"target": self._filter(decision.target)})
        return decision

    def title_html(self, title_html: str, item: LinkItem, context: RenderContext) -> str:
        """Attach the site glyph to a rendered title when it applies."""
        resolution = self.resolve(item, context)
        if not resolution.show_glyph:
            return title_html
        glyph = self.policy.site_glyph
        return render(glyph.text, resolution.glyph_href, context, title_html, markup=glyph.markup)

    def feed_entry(self, record: PostRecord) -> FeedEntry:
        resolution = self.resolve(record.item, RenderContext.FEED)
        return FeedEntry(
            title=feed_title(record.title, record.item, self.policy),
            link=resolution.title_href,
            content=feed_content(
                record.content,
                record.item,
                self.policy,
                title=record.title,
                resolution=resolution,
            ),
        )
