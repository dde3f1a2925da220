"""Link target resolution for titles and glyphs."""

import logging

from app.models.context import RenderContext
from app.models.link_item import LinkItem
from app.models.policy import GlyphConfig, SiteLinkPolicy
from app.models.resolution import Resolution
from app.services.decorator import decorate
from app.services.urls import is_web_url

logger = logging.getLogger(__name__)


def has_external(item: LinkItem) -> bool:
    """True when *item* carries a usable http(s) external URL."""
    if not item.external_url:
        return False
    if not is_web_url(item.external_url):
        logger.debug("Item %s has a non-web external URL, treating as absent", item.id)
        return False
    return True


def glyph_config(context: RenderContext, policy: SiteLinkPolicy) -> GlyphConfig:
    """Return the glyph configuration that applies in *context*."""
    return policy.feed_glyph if context is RenderContext.FEED else policy.site_glyph


def resolve(item: LinkItem, context: RenderContext, policy: SiteLinkPolicy) -> Resolution:
    """Decide the title href and glyph href for *item* rendered in *context*.

    Listing
        The title points at the decorated external URL when rewriting is
        enabled site-wide and the item does not opt out.
    Single
        The title stays on the permalink; the glyph is hidden unless the
        site glyph is configured to show on single views.
    Feed
        The title points at the decorated external URL whenever the item has
        one. The per-item ``skip_rewrite`` flag does not apply here.
    """
    external = has_external(item)
    permalink = item.internal_permalink

    title_href = permalink
    if external:
        if context is RenderContext.LISTING:
            if policy.rewrite_permalinks_enabled and not item.skip_rewrite:
                title_href = decorate(item.external_url, policy.utm)
        elif context is RenderContext.FEED:
            if policy.feed_links_external:
                title_href = decorate(item.external_url, policy.utm)

    glyph = glyph_config(context, policy)
    show_glyph = external and glyph.enabled
    if context is RenderContext.SINGLE:
        show_glyph = show_glyph and glyph.show_on_single

    if external and policy.glyph_target == "external":
        return Resolution(
            title_href=title_href,
            glyph_href=decorate(item.external_url, policy.utm),
            glyph_target="external",
            show_glyph=show_glyph,
        )

    return Resolution(
        title_href=title_href,
        glyph_href=permalink,
        glyph_target="internal",
        show_glyph=show_glyph,
    )
