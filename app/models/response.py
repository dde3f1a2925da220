from typing import Optional

from pydantic import BaseModel

from app.models.link_item import LinkItem
from app.models.resolution import Resolution


class DecorateResponse(BaseModel):
    url: str
    decorated: str


class GlyphResponse(BaseModel):
    html: str


class CaptureLinkResponse(BaseModel):
    content: str
    url: Optional[str] = None
    """Captured external URL, or ``None`` when the first line is not a link."""


class SingleViewResponse(BaseModel):
    item: LinkItem
    resolution: Resolution
