"""WordPress REST API content store: reads link posts for the resolver."""

import logging
from typing import Optional, Sequence
from urllib.parse import urljoin

import httpx

from app.models.link_item import (
    DEFAULT_SKIP_REDIRECT_KEY,
    DEFAULT_SKIP_REWRITE_KEY,
    DEFAULT_URL_KEYS,
    LinkItem,
)
from app.models.resolution import PostRecord

logger = logging.getLogger(__name__)

_WP_API_TIMEOUT = 15
_WP_FIELDS = "id,link,title,content,meta"


class PostNotFoundError(LookupError):
    """Raised when the content store has no usable post for an id."""


class WordPressContentStore:
    """Read-only access to posts and their link meta over ``/wp-json/wp/v2/``.

    The meta keys must be registered with ``show_in_rest`` on the site for
    them to appear in the response.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = _WP_API_TIMEOUT,
        url_keys: Sequence[str] = DEFAULT_URL_KEYS,
        skip_redirect_key: str = DEFAULT_SKIP_REDIRECT_KEY,
        skip_rewrite_key: str = DEFAULT_SKIP_REWRITE_KEY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.url_keys = tuple(url_keys)
        self.skip_redirect_key = skip_redirect_key
        self.skip_rewrite_key = skip_rewrite_key
        self._transport = transport

    def _post_url(self, post_id: int) -> str:
        return urljoin(self.base_url.rstrip("/") + "/", f"wp-json/wp/v2/posts/{post_id}")

    async def get_post(self, post_id: int) -> PostRecord:
        """Fetch one post with its link meta.

        Raises:
            PostNotFoundError: if the post does not exist or has no permalink.
            httpx.HTTPError: on network or HTTP errors.
        """
        api_url = self._post_url(post_id)
        async with httpx.AsyncClient(
            timeout=self.timeout, follow_redirects=True, transport=self._transport
        ) as client:
            resp = await client.get(api_url, params={"_fields": _WP_FIELDS})
            if resp.status_code == 404:
                raise PostNotFoundError(f"Post {post_id} not found.")
            resp.raise_for_status()
            try:
                data = resp.json()
            except ValueError as exc:
                logger.warning("WP API returned invalid JSON for post %d: %s", post_id, exc)
                raise httpx.DecodingError("Invalid JSON from WordPress REST API.") from exc

        return self._to_record(post_id, data)

    async def get_link_item(self, post_id: int) -> LinkItem:
        record = await self.get_post(post_id)
        return record.item

    def _to_record(self, post_id: int, data: dict) -> PostRecord:
        if not isinstance(data, dict) or not data.get("link"):
            raise PostNotFoundError(f"Post {post_id} has no permalink.")

        meta = data.get("meta")
        if not isinstance(meta, dict):
            # WordPress serialises empty meta as a list
            meta = {}

        item = LinkItem.from_meta(
            data.get("id", post_id),
            data["link"],
            meta,
            url_keys=self.url_keys,
            skip_redirect_key=self.skip_redirect_key,
            skip_rewrite_key=self.skip_rewrite_key,
        )
        return PostRecord(
            item=item,
            title=_rendered(data.get("title")),
            content=_rendered(data.get("content")),
        )


def _rendered(field) -> str:
    if isinstance(field, dict):
        return str(field.get("rendered", "")).strip()
    return ""
