"""
HTML rendering of resolved URLs.

Pure functions turning a URL (and optional label) into an ``<a>`` or
``<img>`` tag.  No URL validation or escaping is performed: text is
inserted verbatim.
"""

import re
from typing import Any, Optional

DEFAULT_IMAGE_STYLE = "max-width:100%"
DEFAULT_URL_PREFIX = "http"

_HREF_RE = re.compile(r'href="(.*?)"')


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def to_link(url: Any, label: Optional[Any] = None) -> str:
    """Return an anchor tag for *url*, showing *label* or the url itself.

    Example:
        >>> to_link("http://a.b", "Home")
        '<a href="http://a.b">Home</a>'
    """
    url = _text(url)
    return f'<a href="{url}">{_text(label) or url}</a>'


def to_image(url: Any, style: str = DEFAULT_IMAGE_STYLE) -> str:
    """Return an image tag for *url*.

    If *url* was already turned into an anchor (a plain URL cell that an
    IMAGE formula then references), the embedded href is used instead so
    the anchor is not wrapped inside the ``src`` attribute.
    """
    url = _text(url)
    match = _HREF_RE.search(url)
    if match:
        url = match.group(1)
    return f'<img style="{style}" src="{url}"/>'


def is_url(value: Any, prefix: str = DEFAULT_URL_PREFIX) -> bool:
    return isinstance(value, str) and value.startswith(prefix)


def linkify(value: Any, prefix: str = DEFAULT_URL_PREFIX) -> Any:
    """Wrap *value* in an anchor tag if it is a URL string, else return it unchanged."""
    return to_link(value) if is_url(value, prefix) else value
