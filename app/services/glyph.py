"""Glyph rendering: a small anchor appended to titles and feed content."""

import html
import re
from typing import Optional

from bs4 import BeautifulSoup

from app.models.context import RenderContext

# Class on the wrapper span; its presence marks content as already decorated
GLYPH_CLASS = "linkpress-glyph"

_CLOSING_HEADING_RE = re.compile(r"(</h[1-6]>)\s*$", re.IGNORECASE)


def has_glyph(content: str) -> bool:
    """Return True when *content* already carries a rendered glyph."""
    if GLYPH_CLASS not in content:
        return False
    soup = BeautifulSoup(content, "lxml")
    return soup.find(class_=GLYPH_CLASS) is not None


def glyph_fragment(
    glyph_text: str,
    href: str,
    markup: bool = False,
    title: Optional[str] = None,
) -> str:
    """Return the bare glyph anchor wrapped in its marker span.

    *glyph_text* is escaped unless *markup* says it is already safe markup
    (for instance an entity such as ``&#9733;``).
    """
    glyph = glyph_text if markup else html.escape(glyph_text, quote=False)
    attrs = f'href="{html.escape(href, quote=True)}" rel="bookmark"'
    if title:
        attrs += f' title="{html.escape(title, quote=True)}"'
    return f'<span class="{GLYPH_CLASS}"><a {attrs}>{glyph}</a></span>'


def render(
    glyph_text: str,
    href: str,
    context: RenderContext,
    content: str = "",
    *,
    markup: bool = False,
    title: Optional[str] = None,
) -> str:
    """Attach a glyph pointing at *href* to *content*.

    In feeds the glyph is appended as its own paragraph. Elsewhere it is
    placed inside a trailing closing heading tag when there is one, or after
    the content separated by a space. Content that already holds a glyph is
    returned unchanged, so repeated calls are safe.
    """
    if not glyph_text or not href:
        return content
    if content and has_glyph(content):
        return content

    fragment = glyph_fragment(glyph_text, href, markup=markup, title=title)

    if context is RenderContext.FEED:
        return f"{content}\n<p>{fragment}</p>\n"

    if not content:
        return fragment

    match = _CLOSING_HEADING_RE.search(content)
    if match:
        return f"{content[:match.start()].rstrip()} {fragment}{match.group(1)}"
    return f"{content.rstrip()} {fragment}"
