from typing import Optional

from pydantic import BaseModel, Field

from app.models.context import RenderContext
from app.models.link_item import LinkItem
from app.models.policy import SiteLinkPolicy, UtmPolicy


class DecorateRequest(BaseModel):
    url: str
    utm: Optional[UtmPolicy] = Field(
        default=None,
        description="UTM settings to apply. Defaults to the configured site policy.",
    )


class ResolveRequest(BaseModel):
    item: LinkItem
    context: RenderContext = RenderContext.LISTING
    policy: Optional[SiteLinkPolicy] = None


class RedirectRequest(BaseModel):
    item: LinkItem
    policy: Optional[SiteLinkPolicy] = None
    bypass: bool = False
    """Caller-derived escape hatch (``?stay=1`` or preview mode)."""


class GlyphRequest(BaseModel):
    glyph_text: str
    href: str
    context: RenderContext = RenderContext.LISTING
    content: str = ""
    markup: bool = False
    title: Optional[str] = None


class CaptureLinkRequest(BaseModel):
    content: str
    policy: Optional[SiteLinkPolicy] = None
