# crawler.py  — same-origin link discovery for the hosting page

from __future__ import annotations

import re
from typing import List, Tuple
from urllib.parse import urljoin, urlparse, urlunparse

from bs4 import BeautifulSoup

from models import Page

# ─────────────────────────── tunables ────────────────────────────
DEFAULT_LINK_LIMIT = 25
# ──────────────────────────────────────────────────────────────────

_DEFAULT_PORTS = {"http": 80, "https": 443}
_SKIP_SCHEME_RE = re.compile(r"^(mailto:|tel:)", re.I)


def origin(url: str) -> Tuple[str, str, int | None]:
    """(scheme, host, port) with the default port filled in.

    Raises ValueError on an unparsable port or host.
    """
    p = urlparse(url)
    scheme = p.scheme.lower()
    port = p.port or _DEFAULT_PORTS.get(scheme)
    return scheme, (p.hostname or "").lower(), port


def canonicalize(url: str) -> str:
    """Lower-case scheme/host, drop default port and fragment, '/' for empty path."""
    p = urlparse(url)
    scheme, host, port = origin(url)
    if ":" in host:                    # IPv6 literal
        host = f"[{host}]"
    netloc = host if port == _DEFAULT_PORTS.get(scheme) else f"{host}:{port}"
    return urlunparse((scheme, netloc, p.path or "/", p.params, p.query, ""))


def _extract_hrefs(html: str) -> List[str]:
    soup = BeautifulSoup(html or "", "html.parser")
    return [a["href"] for a in soup.find_all("a", href=True)]


def discover_links(page: Page, limit: int = DEFAULT_LINK_LIMIT) -> List[str]:
    """
    Same-origin URLs linked from `page`, deduplicated, at most `limit`.
    Hrefs resolve the way a browser would; a bad href is skipped, never fatal.
    """
    here_origin = origin(page.url)
    here_path = urlparse(page.url).path or "/"

    seen: dict[str, None] = {}
    for raw in _extract_hrefs(page.html):
        href = raw.strip()
        if _SKIP_SCHEME_RE.match(href):
            continue
        try:
            absolute = urljoin(page.url, href)
            if origin(absolute) != here_origin:
                continue
            parsed = urlparse(absolute)
            # in-page anchors back to this very page
            if parsed.fragment and (parsed.path or "/") == here_path:
                continue
            seen[canonicalize(absolute)] = None
        except ValueError:
            continue
    return list(seen)[:limit]
