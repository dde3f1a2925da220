"""Single-view redirect decision."""

import logging
from typing import Optional

from app.models.link_item import LinkItem
from app.models.policy import SiteLinkPolicy
from app.models.resolution import RedirectDecision
from app.services.decorator import decorate
from app.services.resolver import has_external
from app.services.urls import same_location

logger = logging.getLogger(__name__)

# The external target is editable content, so the redirect must stay temporary
REDIRECT_STATUS = 302

NO_REDIRECT = RedirectDecision(redirect=False)

_STAY_VALUES = {"1", "true", "yes", "on"}


def is_bypassed(stay: Optional[str] = None, preview: bool = False) -> bool:
    """Return True when the request asked to stay on the post page."""
    if preview:
        return True
    return stay is not None and stay.strip().lower() in _STAY_VALUES


def decide(item: LinkItem, policy: SiteLinkPolicy, bypass: bool = False) -> RedirectDecision:
    """Decide whether a single view of *item* should redirect to its external URL.

    Issuing the response is left to the caller.
    """
    if bypass:
        return NO_REDIRECT
    if not policy.redirect_singles_enabled or item.skip_redirect:
        return NO_REDIRECT
    if not has_external(item):
        return NO_REDIRECT

    if same_location(item.external_url, item.internal_permalink):
        logger.debug("Suppressing self-redirect for item %s", item.id)
        return NO_REDIRECT

    return RedirectDecision(
        redirect=True,
        target=decorate(item.external_url, policy.utm),
        status=REDIRECT_STATUS,
    )
