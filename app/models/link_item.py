"""Link item model built once at the content-store boundary."""

from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, field_validator

# Meta keys used by the linked-list and commentary flavours of the plugin
DEFAULT_URL_KEYS = ("linked_list_url", "commentary_url")
DEFAULT_SKIP_REDIRECT_KEY = "commentary_skip_redirect"
DEFAULT_SKIP_REWRITE_KEY = "commentary_skip_rewrite"

_TRUTHY = {"1", "on", "true", "yes"}


def as_flag(value: Any) -> bool:
    """Coerce a loosely-typed meta value to a boolean the way WordPress stores them."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


class LinkItem(BaseModel):
    """One content item that may point at an external URL."""

    model_config = ConfigDict(frozen=True)

    id: str
    external_url: str = ""
    skip_redirect: bool = False
    skip_rewrite: bool = False
    internal_permalink: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("external_url", "internal_permalink", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @property
    def is_link(self) -> bool:
        """True when an external URL is stored, valid or not."""
        return bool(self.external_url)

    @classmethod
    def from_meta(
        cls,
        item_id: Any,
        permalink: Optional[str],
        meta: Optional[Mapping[str, Any]],
        url_keys: Sequence[str] = DEFAULT_URL_KEYS,
        skip_redirect_key: str = DEFAULT_SKIP_REDIRECT_KEY,
        skip_rewrite_key: str = DEFAULT_SKIP_REWRITE_KEY,
    ) -> "LinkItem":
        """Build a :class:`LinkItem` from raw post meta.

        The external URL comes from the first non-empty key in *url_keys*.
        WordPress may hand back single meta values wrapped in a list; the
        first element is used in that case.
        """
        meta = meta or {}

        external_url = ""
        for key in url_keys:
            value = _single(meta.get(key))
            if isinstance(value, str) and value.strip():
                external_url = value
                break

        return cls(
            id=item_id,
            external_url=external_url,
            skip_redirect=as_flag(_single(meta.get(skip_redirect_key))),
            skip_rewrite=as_flag(_single(meta.get(skip_rewrite_key))),
            internal_permalink=permalink or "",
        )


def _single(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value
