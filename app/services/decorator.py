"""UTM decoration of external URLs.

Decoration is request-scoped: the stored URL is never modified, callers get a
new string back.
"""

import logging
from typing import Dict, Optional, Tuple

from app.models.policy import UtmPolicy
from app.services.urls import build_query, parse_query, rebuild, split_web_url

logger = logging.getLogger(__name__)

# Fixed order in which new parameters are appended
UTM_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("utm_source", "source"),
    ("utm_medium", "medium"),
    ("utm_campaign", "campaign"),
    ("utm_term", "term"),
    ("utm_content", "content"),
)


def utm_params(utm: UtmPolicy) -> Dict[str, str]:
    """Return the configured, non-empty UTM parameters in their fixed order."""
    params: Dict[str, str] = {}
    for name, field in UTM_FIELDS:
        value = getattr(utm, field)
        if value:
            params[name] = value
    return params


def decorate(url: str, utm: Optional[UtmPolicy]) -> str:
    """Return *url* with the UTM parameters of *utm* merged into its query.

    Non-web URLs (relative paths, ``mailto:``, ``javascript:``, …) and a
    disabled policy return *url* unchanged. Existing keys keep their
    position; new keys follow in :data:`UTM_FIELDS` order.
    """
    if utm is None or not utm.enabled:
        return url

    parts = split_web_url(url)
    if parts is None:
        logger.debug("Not decorating non-web URL %r", url)
        return url

    query = parse_query(parts.query)
    changed = False
    for name, value in utm_params(utm).items():
        if utm.preserve_existing and name in query:
            continue
        if query.get(name) != value:
            query[name] = value
            changed = True

    if not changed:
        return url

    return rebuild(parts, build_query(query))
