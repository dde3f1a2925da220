"""URL parsing primitives shared by the decorator, resolver and redirect policy.

Every helper here is total: malformed input yields ``None``/``False`` rather
than an exception, so callers can treat a bad URL as "no link".
"""

from typing import Dict, List, Optional, Tuple
from urllib.parse import SplitResult, parse_qsl, quote, urlencode, urlsplit

ALLOWED_SCHEMES = {"http", "https"}


def split_web_url(url: Optional[str]) -> Optional[SplitResult]:
    """Split *url* if it is an absolute http(s) URL with a host, else return *None*."""
    if not url or not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        # Accessing .port validates it (raises ValueError when out of range)
        parts.port
    except ValueError:
        return None

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return None
    if not parts.hostname:
        return None
    return parts


def is_web_url(url: Optional[str]) -> bool:
    """Return True when *url* is an absolute ``http``/``https`` URL."""
    return split_web_url(url) is not None


def parse_query(query: str) -> Dict[str, str]:
    """Parse a query string into an ordered mapping.

    Repeated keys keep the position of their first occurrence and the value
    of their last one, values are percent-decoded and ``+`` reads as a space.
    Bytes that are not valid UTF-8 survive a round trip through
    :func:`build_query` unchanged.
    """
    parsed: Dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True, errors="surrogateescape"):
        parsed[key] = value
    return parsed


def build_query(params: Dict[str, str]) -> str:
    """Encode *params* using RFC 3986 escaping (space becomes ``%20``)."""
    return urlencode(list(params.items()), quote_via=quote, safe="", errors="surrogateescape")


def _host_port(parts: SplitResult) -> str:
    # Credentials are not carried over into rebuilt URLs
    return parts.netloc.rpartition("@")[2]


_DEFAULT_PORTS = {"http": 80, "https": 443}


def _location(parts: SplitResult) -> str:
    host = parts.hostname or ""
    port = parts.port
    if port is None or port == _DEFAULT_PORTS.get(parts.scheme.lower()):
        return host
    return f"{host}:{port}"


def rebuild(parts: SplitResult, query: str) -> str:
    """Assemble ``scheme://host[:port]path[?query][#fragment]``."""
    url = f"{parts.scheme.lower()}://{_host_port(parts)}{parts.path}"
    if query:
        url += f"?{query}"
    if parts.fragment:
        url += f"#{parts.fragment}"
    return url


def normalize_for_compare(url: Optional[str]) -> Optional[Tuple[str, str, str, List[Tuple[str, str]]]]:
    """Return a comparison key for *url*, or *None* when it is not a web URL.

    Scheme and host are compared case-insensitively, a default port equals
    no port, trailing slashes on the path are ignored and the fragment does
    not take part.
    """
    parts = split_web_url(url)
    if parts is None:
        return None
    return (
        parts.scheme.lower(),
        _location(parts),
        parts.path.rstrip("/"),
        sorted(parse_query(parts.query).items()),
    )


def same_location(first: Optional[str], second: Optional[str]) -> bool:
    """True when both URLs point at the same location under :func:`normalize_for_compare`."""
    first_key = normalize_for_compare(first)
    if first_key is None:
        return False
    second_key = normalize_for_compare(second)
    if second_key is not None:
        return first_key == second_key
    # Fall back to a plain comparison for non-web permalinks
    return (first or "").strip().rstrip("/") == (second or "").strip().rstrip("/")
