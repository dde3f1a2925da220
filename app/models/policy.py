"""Site-wide link policy: an immutable snapshot loaded once per request."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

GlyphTarget = Literal["internal", "external"]


class UtmPolicy(BaseModel):
    """Analytics parameters appended to external URLs."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    preserve_existing: bool = True
    source: Optional[str] = None
    medium: Optional[str] = None
    campaign: Optional[str] = None
    term: Optional[str] = None
    content: Optional[str] = None


class GlyphConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    text: str = ""
    markup: bool = Field(
        default=False,
        description="Treat *text* as pre-sanitised markup instead of plain text.",
    )
    show_on_single: bool = Field(
        default=False,
        description="Also show the glyph on single-item views.",
    )


class FeedTitleGlyphs(BaseModel):
    """Glyphs added around feed item titles."""

    model_config = ConfigDict(frozen=True)

    blog_prefix: GlyphConfig = GlyphConfig()
    link_prefix: GlyphConfig = GlyphConfig()
    link_suffix: GlyphConfig = GlyphConfig()


class SiteLinkPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    redirect_singles_enabled: bool = False
    rewrite_permalinks_enabled: bool = False
    feed_links_external: bool = True
    glyph_target: GlyphTarget = "internal"
    use_first_link: bool = False
    utm: UtmPolicy = UtmPolicy()
    site_glyph: GlyphConfig = GlyphConfig()
    feed_glyph: GlyphConfig = GlyphConfig()
    feed_title: FeedTitleGlyphs = FeedTitleGlyphs()
