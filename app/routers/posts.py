"""Content-store backed endpoints: single views, per-context links and feed entries."""

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import RedirectResponse

from app.config import get_settings, get_site_link_policy
from app.models.context import RenderContext
from app.models.resolution import FeedEntry, PostRecord, Resolution
from app.models.response import SingleViewResponse
from app.routers.links import limiter
from app.services.pipeline import LinkEngine
from app.services.redirect import is_bypassed
from app.services.wordpress import PostNotFoundError, WordPressContentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


def get_content_store() -> WordPressContentStore:
    settings = get_settings()
    if not settings.wordpress_url:
        raise HTTPException(status_code=503, detail="No content store is configured.")
    return WordPressContentStore(
        settings.wordpress_url,
        timeout=settings.wordpress_timeout,
        url_keys=settings.url_meta_keys,
        skip_redirect_key=settings.skip_redirect_meta_key,
        skip_rewrite_key=settings.skip_rewrite_meta_key,
    )


@router.get(
    "/{post_id}",
    response_model=SingleViewResponse,
    summary="Single view of a post, redirecting link posts",
)
@limiter.limit("60/minute")
async def single_view(
    request: Request,
    post_id: int,
    stay: Optional[str] = Query(default=None, description="Set to 1 to stay on the post."),
    preview: bool = Query(default=False),
) -> SingleViewResponse | RedirectResponse:
    """Redirect to the external URL of a link post, or describe the single view."""
    record = await _fetch_post(post_id)
    engine = LinkEngine(get_site_link_policy())

    decision = engine.decide(record.item, bypass=is_bypassed(stay, preview))
    if decision.redirect:
        logger.info("Redirecting post %d to %s", post_id, decision.target)
        return RedirectResponse(decision.target, status_code=decision.status)

    return SingleViewResponse(
        item=record.item,
        resolution=engine.resolve(record.item, RenderContext.SINGLE),
    )


@router.get("/{post_id}/links", response_model=Resolution, summary="Resolve a post's hrefs")
@limiter.limit("60/minute")
async def post_links(
    request: Request,
    post_id: int,
    context: RenderContext = Query(default=RenderContext.LISTING),
) -> Resolution:
    record = await _fetch_post(post_id)
    return LinkEngine(get_site_link_policy()).resolve(record.item, context)


@router.get("/{post_id}/feed", response_model=FeedEntry, summary="Decorated feed entry for a post")
@limiter.limit("60/minute")
async def post_feed_entry(request: Request, post_id: int) -> FeedEntry:
    record = await _fetch_post(post_id)
    return LinkEngine(get_site_link_policy()).feed_entry(record)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

async def _fetch_post(post_id: int) -> PostRecord:
    """Fetch *post_id* from the content store and map errors to HTTP exceptions."""
    store = get_content_store()
    try:
        return await store.get_post(post_id)
    except PostNotFoundError as exc:
        logger.warning("Post not found: %d – %s", post_id, exc)
        raise HTTPException(status_code=404, detail=str(exc))
    except httpx.TimeoutException:
        logger.error("Timeout fetching post %d", post_id)
        raise HTTPException(status_code=504, detail="The content store timed out.")
    except httpx.HTTPStatusError as exc:
        logger.error("HTTP error fetching post %d: %s", post_id, exc)
        raise HTTPException(
            status_code=502, detail=f"Content store returned HTTP {exc.response.status_code}."
        )
    except httpx.HTTPError as exc:
        logger.error("Error fetching post %d: %s", post_id, exc)
        raise HTTPException(status_code=502, detail=str(exc))
