from enum import Enum


class RenderContext(str, Enum):
    """Where a link item is being rendered."""

    LISTING = "listing"
    SINGLE = "single"
    FEED = "feed"
