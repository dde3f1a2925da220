"""Service configuration loaded from environment variables (``LINKPRESS_*``).

Site link policy fields are flat settings so they can be set one by one from
the environment; :func:`get_site_link_policy` folds them into an immutable
:class:`SiteLinkPolicy` snapshot.
"""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models.link_item import (
    DEFAULT_SKIP_REDIRECT_KEY,
    DEFAULT_SKIP_REWRITE_KEY,
    DEFAULT_URL_KEYS,
)
from app.models.policy import FeedTitleGlyphs, GlyphConfig, SiteLinkPolicy, UtmPolicy

# Defaults carried over from the original plugins
SITE_GLYPH_DEFAULT = "\u221e\ufe0e"  # infinity sign, text presentation
FEED_GLYPH_DEFAULT = "&#9733;"  # star


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LINKPRESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Linkpress")
    log_level: str = Field(default="INFO", description="Root log level")

    # Content store
    wordpress_url: Optional[str] = Field(
        default=None,
        description="Base URL of the WordPress site serving /wp-json/wp/v2/.",
    )
    wordpress_timeout: float = Field(default=15.0, description="REST timeout in seconds")
    url_meta_keys: List[str] = Field(default=list(DEFAULT_URL_KEYS))
    skip_redirect_meta_key: str = Field(default=DEFAULT_SKIP_REDIRECT_KEY)
    skip_rewrite_meta_key: str = Field(default=DEFAULT_SKIP_REWRITE_KEY)

    # Site link policy
    redirect_singles_enabled: bool = False
    rewrite_permalinks_enabled: bool = False
    feed_links_external: bool = True
    glyph_target: Literal["internal", "external"] = "internal"
    use_first_link: bool = False

    utm_enabled: bool = False
    utm_preserve_existing: bool = True
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None

    site_glyph_enabled: bool = False
    site_glyph_text: str = SITE_GLYPH_DEFAULT
    site_glyph_markup: bool = False
    site_glyph_on_single: bool = False

    feed_glyph_enabled: bool = False
    feed_glyph_text: str = FEED_GLYPH_DEFAULT
    feed_glyph_markup: bool = True

    feed_blog_prefix_enabled: bool = False
    feed_blog_prefix_text: str = FEED_GLYPH_DEFAULT
    feed_link_prefix_enabled: bool = False
    feed_link_prefix_text: str = ""
    feed_link_suffix_enabled: bool = False
    feed_link_suffix_text: str = ""

    def site_link_policy(self) -> SiteLinkPolicy:
        """Fold the flat policy settings into a :class:`SiteLinkPolicy`."""
        return SiteLinkPolicy(
            redirect_singles_enabled=self.redirect_singles_enabled,
            rewrite_permalinks_enabled=self.rewrite_permalinks_enabled,
            feed_links_external=self.feed_links_external,
            glyph_target=self.glyph_target,
            use_first_link=self.use_first_link,
            utm=UtmPolicy(
                enabled=self.utm_enabled,
                preserve_existing=self.utm_preserve_existing,
                source=self.utm_source,
                medium=self.utm_medium,
                campaign=self.utm_campaign,
                term=self.utm_term,
                content=self.utm_content,
            ),
            site_glyph=GlyphConfig(
                enabled=self.site_glyph_enabled,
                text=self.site_glyph_text,
                markup=self.site_glyph_markup,
                show_on_single=self.site_glyph_on_single,
            ),
            feed_glyph=GlyphConfig(
                enabled=self.feed_glyph_enabled,
                text=self.feed_glyph_text,
                markup=self.feed_glyph_markup,
            ),
            feed_title=FeedTitleGlyphs(
                blog_prefix=GlyphConfig(
                    enabled=self.feed_blog_prefix_enabled, text=self.feed_blog_prefix_text
                ),
                link_prefix=GlyphConfig(
                    enabled=self.feed_link_prefix_enabled, text=self.feed_link_prefix_text
                ),
                link_suffix=GlyphConfig(
                    enabled=self.feed_link_suffix_enabled, text=self.feed_link_suffix_text
                ),
            ),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_site_link_policy() -> SiteLinkPolicy:
    """Return a fresh policy snapshot for the current request."""
    return get_settings().site_link_policy()
