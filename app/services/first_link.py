"""First-line link capture ("Press This" style link posts)."""

import html
import re
from typing import Optional, Tuple

# A line holding only an anchor followed by a period, optionally inside <p>
_FIRST_LINE_LINK_RE = re.compile(
    r"""^\s*(?:<p>)?\s*<a\s+[^>]*href=(["'])(?P<href>[^"']+)\1[^>]*>.*?</a>\.\s*(?:</p>)?\s*$""",
    re.IGNORECASE,
)


def capture_first_line_link(content: str) -> Tuple[str, Optional[str]]:
    """Split a leading link line off *content*.

    Returns the remaining content and the captured href, or *content*
    untouched and ``None`` when the first line is not a lone link.
    """
    if not content:
        return content, None

    lines = content.splitlines()
    match = _FIRST_LINE_LINK_RE.match(lines[0])
    if not match:
        return content, None

    href = html.unescape(match.group("href")).strip()
    if not href:
        return content, None
    return "\n".join(lines[1:]), href
