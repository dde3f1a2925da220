"""Stateless endpoints exposing the link components directly."""

import logging

from fastapi import APIRouter, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_site_link_policy
from app.models.request import (
    CaptureLinkRequest,
    DecorateRequest,
    GlyphRequest,
    RedirectRequest,
    ResolveRequest,
)
from app.models.resolution import RedirectDecision, Resolution
from app.models.response import CaptureLinkResponse, DecorateResponse, GlyphResponse
from app.services.decorator import decorate
from app.services.first_link import capture_first_line_link
from app.services.glyph import render
from app.services.redirect import decide
from app.services.resolver import resolve

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(tags=["links"])


@router.post("/decorate", response_model=DecorateResponse, summary="Append UTM parameters to a URL")
@limiter.limit("120/minute")
async def decorate_url(request: Request, body: DecorateRequest) -> DecorateResponse:
    """Merge the configured (or supplied) UTM parameters into *url*.

    Non-web URLs are returned unchanged.
    """
    utm = body.utm if body.utm is not None else get_site_link_policy().utm
    logger.info("Decorate request received", extra={"url": body.url})
    return DecorateResponse(url=body.url, decorated=decorate(body.url, utm))


@router.post("/resolve", response_model=Resolution, summary="Resolve title and glyph hrefs")
@limiter.limit("120/minute")
async def resolve_item(request: Request, body: ResolveRequest) -> Resolution:
    policy = body.policy or get_site_link_policy()
    logger.info("Resolve request received", extra={"item": body.item.id, "context": body.context.value})
    return resolve(body.item, body.context, policy)


@router.post("/redirect", response_model=RedirectDecision, summary="Decide a single-view redirect")
@limiter.limit("120/minute")
async def redirect_decision(request: Request, body: RedirectRequest) -> RedirectDecision:
    policy = body.policy or get_site_link_policy()
    logger.info("Redirect request received", extra={"item": body.item.id, "bypass": body.bypass})
    return decide(body.item, policy, body.bypass)


@router.post("/glyph", response_model=GlyphResponse, summary="Render a glyph anchor")
@limiter.limit("120/minute")
async def render_glyph(request: Request, body: GlyphRequest) -> GlyphResponse:
    logger.info("Glyph request received", extra={"href": body.href, "context": body.context.value})
    html = render(
        body.glyph_text,
        body.href,
        body.context,
        body.content,
        markup=body.markup,
        title=body.title,
    )
    return GlyphResponse(html=html)


@router.post(
    "/capture-link",
    response_model=CaptureLinkResponse,
    summary="Capture a leading link line from post content",
)
@limiter.limit("60/minute")
async def capture_link(request: Request, body: CaptureLinkRequest) -> CaptureLinkResponse:
    """Split the first line off *content* when it is a lone ``<a>`` followed by a period.

    Only active when the policy enables ``use_first_link``; otherwise the
    content comes back unchanged.
    """
    policy = body.policy or get_site_link_policy()
    logger.info("Capture-link request received", extra={"enabled": policy.use_first_link})
    if not policy.use_first_link:
        return CaptureLinkResponse(content=body.content)

    content, url = capture_first_line_link(body.content)
    return CaptureLinkResponse(content=content, url=url)
