from urllib.parse import urldefrag, urljoin, urlsplit
from typing import Optional


def resolve_url(base: str, href: str | None) -> Optional[str]:
    """
    Resolve an href found on ``base`` to an absolute URL.

    Returns None for empty hrefs and for anything that does not resolve to a
    URL with both a scheme and a host (javascript:, mailto:, malformed).
    """
    if href is None:
        return None
    href = href.strip()
    if not href:
        return None
    try:
        resolved, _ = urldefrag(urljoin(base, href))
        parts = urlsplit(resolved)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return resolved
