from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from app.models.link_item import LinkItem


class Resolution(BaseModel):
    """Hrefs a title and its glyph should carry in one render context."""

    model_config = ConfigDict(frozen=True)

    title_href: str
    glyph_href: str
    glyph_target: Literal["internal", "external"] = "internal"
    show_glyph: bool = False


class RedirectDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    redirect: bool
    target: Optional[str] = None
    status: Optional[int] = None


class PostRecord(BaseModel):
    """A post as fetched from the content store."""

    item: LinkItem
    title: str = ""
    content: str = ""


class FeedEntry(BaseModel):
    title: str
    link: str
    content: str
