"""Feed decoration for link posts: item link, title glyphs and permalink glyph."""

import re
from html.entities import name2codepoint
from typing import Optional

from app.models.context import RenderContext
from app.models.link_item import LinkItem
from app.models.policy import GlyphConfig, SiteLinkPolicy
from app.models.resolution import FeedEntry, PostRecord, Resolution
from app.services.glyph import render
from app.services.resolver import has_external, resolve

_NAMED_ENTITY_RE = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")


def entity_to_numeric(text: str) -> str:
    """Convert named HTML entities to numeric references.

    Feed readers only know the XML entities, so ``&hearts;`` becomes
    ``&#9829;``. Unknown names are left as they are.
    """

    def _replace(match: "re.Match[str]") -> str:
        codepoint = name2codepoint.get(match.group(1))
        if codepoint is None:
            return match.group(0)
        return f"&#{codepoint};"

    return _NAMED_ENTITY_RE.sub(_replace, text)


def _glyph_text(config: GlyphConfig) -> str:
    if not config.enabled or not config.text:
        return ""
    return entity_to_numeric(config.text)


def feed_link(item: LinkItem, policy: SiteLinkPolicy) -> str:
    """Return the ``<link>`` of *item* in a feed."""
    return resolve(item, RenderContext.FEED, policy).title_href


def feed_title(title: str, item: LinkItem, policy: SiteLinkPolicy) -> str:
    """Add the configured prefix/suffix glyphs to a feed item title."""
    glyphs = policy.feed_title

    if not has_external(item):
        prefix = _glyph_text(glyphs.blog_prefix)
        return f"{prefix} {title}" if prefix else title

    prefix = _glyph_text(glyphs.link_prefix)
    if prefix:
        title = f"{prefix} {title}"
    suffix = _glyph_text(glyphs.link_suffix)
    if suffix:
        title = f"{title} {suffix}"
    return title


def feed_content(
    content: str,
    item: LinkItem,
    policy: SiteLinkPolicy,
    title: str = "",
    resolution: Optional[Resolution] = None,
) -> str:
    """Append the permalink glyph to the feed content of a link post.

    A precomputed feed *resolution* may be passed in to reuse its glyph href.
    """
    if resolution is None:
        resolution = resolve(item, RenderContext.FEED, policy)
    if not resolution.show_glyph:
        return content

    return render(
        policy.feed_glyph.text,
        resolution.glyph_href,
        RenderContext.FEED,
        content,
        markup=policy.feed_glyph.markup,
        title=f"Permanent link to '{title}'" if title else None,
    )


def build_feed_entry(record: PostRecord, policy: SiteLinkPolicy) -> FeedEntry:
    """Assemble the decorated feed entry for one post."""
    return FeedEntry(
        title=feed_title(record.title, record.item, policy),
        link=feed_link(record.item, policy),
        content=feed_content(record.content, record.item, policy, title=record.title),
    )
