# memory.py
"""
Session state for one assistant: the crawled Documents, the search index
built from them, and the one-way crawl latch (not-started → in-progress → ready).
"""

from __future__ import annotations

import threading
from typing import List, Optional

import requests

import crawler, fetcher, parser
from models import CrawlState, Document, Page
from rag import SearchIndex, build_index

# ─────────────────────────── tunables ────────────────────────────
MIN_CONTENT_CHARS = 30          # shorter pages are noise
CURRENT_PAGE_TITLE = "Current page"
# ──────────────────────────────────────────────────────────────────


class Memory:
    """Holds the corpus and index; mutated only inside `build()`."""

    def __init__(self, verbose: bool = False) -> None:
        self.documents: List[Document] = []
        self.index: Optional[SearchIndex] = None
        self.state = CrawlState.NOT_STARTED
        self.ready = threading.Event()
        self.trace: List[str] = []
        self.verbose = verbose
        self._latch = threading.Lock()

    # ---------- trace helpers ----------
    def log_step(self, msg: str) -> None:
        self.trace.append(msg)
        if self.verbose:
            print(msg)

    # ---------- latch ----------
    def start(self) -> bool:
        """Flip not-started → in-progress. True only for the caller that flipped it."""
        with self._latch:
            if self.state is not CrawlState.NOT_STARTED:
                return False
            self.state = CrawlState.IN_PROGRESS
            return True

    @property
    def is_ready(self) -> bool:
        return self.ready.is_set()

    def wait_until_ready(self, timeout: float) -> bool:
        return self.ready.wait(timeout)

    def build(self, page: Page, http: requests.Session,
              link_limit: int = crawler.DEFAULT_LINK_LIMIT,
              workers: int = fetcher.THREAD_POOL_WORKERS,
              timeout: int = fetcher.FETCH_TIMEOUT) -> None:
        """
        Crawl from `page` and index the result, once per session.
        Documents and index are published together, only on success.
        """
        docs = [current_page_document(page)]
        # the hosting page is already in hand, never re-fetch it
        links = [u for u in crawler.discover_links(page, limit=link_limit + 1)
                 if u != docs[0].id][:link_limit]
        self.log_step(f"Found {len(links)} same-origin links on {page.url}")

        seen = {docs[0].id}
        for doc in fetcher.fetch_all(links, http, workers=workers,
                                     timeout=timeout, log=self.log_step):
            if doc is None or len(doc.content) <= MIN_CONTENT_CHARS:
                continue
            if doc.id in seen:
                continue
            seen.add(doc.id)
            docs.append(doc)

        index = build_index(docs)
        self.documents = docs
        self.index = index
        self.log_step(f"Indexed {len(docs)} pages")

    def finish(self) -> None:
        """in-progress → ready. Waiters wake up; `index` stays None if the build failed."""
        self.state = CrawlState.READY
        self.ready.set()


def current_page_document(page: Page) -> Document:
    """The hosting page, from its in-memory markup rather than a re-fetch."""
    doc_id = crawler.canonicalize(page.url)
    return Document(id=doc_id, url=page.url,
                    title=parser.extract_title(page.html, CURRENT_PAGE_TITLE),
                    content=parser.normalize(page.html))
