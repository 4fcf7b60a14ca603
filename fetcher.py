#fetcher.py
from __future__ import annotations

import concurrent.futures
import time
from typing import Callable, List, Optional, Sequence

import requests

import parser
from models import Document

# ─────────────────────────── tunables ────────────────────────────
FETCH_TIMEOUT       = 10
THREAD_POOL_WORKERS = 6
# ──────────────────────────────────────────────────────────────────

_DEFAULT_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Safari/605.1.15"
)

Log = Callable[[str], None]


def _noop(_msg: str) -> None:
    pass


def new_session() -> requests.Session:
    """One cookie jar per assistant, so crawl fetches carry the page's credentials."""
    http = requests.Session()
    http.headers.update({"User-Agent": _DEFAULT_UA})
    return http


def _is_html(resp) -> bool:
    ct = resp.headers.get("content-type", "")
    return not ct or "text/html" in ct or "application/xhtml+xml" in ct


def fetch_page(url: str, http: Optional[requests.Session] = None,
               timeout: int = FETCH_TIMEOUT, retries: int = 2,
               log: Log = print) -> str | None:
    """GET `url` with a few retries; markup or None."""
    http = http or new_session()
    for attempt in range(1, retries + 2):
        try:
            log(f"FETCH {url}  (try {attempt})")
            r = http.get(url, timeout=timeout)
            r.raise_for_status()
            return r.text
        except requests.RequestException as exc:
            log(f"  ↳ error: {exc}")
            if attempt <= retries:
                time.sleep(1.5 * attempt)
    return None


def fetch_document(url: str, http: requests.Session,
                   timeout: int = FETCH_TIMEOUT, log: Log = _noop) -> Document | None:
    """Single GET → Document. Any failure means None, never an exception."""
    try:
        log(f"FETCH {url}")
        r = http.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as exc:
        log(f"  ↳ error: {exc}")
        return None
    if not _is_html(r):
        log(f"  ↳ skipped non-HTML {url}")
        return None

    html = r.text
    return Document(id=url, url=url,
                    title=parser.extract_title(html, url),
                    content=parser.normalize(html))


def fetch_all(urls: Sequence[str], http: requests.Session,
              workers: int = THREAD_POOL_WORKERS, timeout: int = FETCH_TIMEOUT,
              log: Log = _noop) -> List[Document | None]:
    """
    Fetch every URL concurrently and wait for all of them to settle.
    Returns one outcome per input URL, in input order.
    """
    if not urls:
        return []
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(fetch_document, u, http, timeout, log) for u in urls]
        concurrent.futures.wait(futures)

    out: List[Document | None] = []
    for url, f in zip(urls, futures):
        exc = f.exception()
        if exc is not None:
            log(f"  ↳ error: {url}: {exc}")
            out.append(None)
        else:
            out.append(f.result())
    return out
