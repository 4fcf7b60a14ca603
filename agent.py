# agent.py
"""
Site assistant: crawls the hosting page's site once, then answers questions
from the indexed text or hands the visitor over to a human mentor.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional, Sequence

import requests

import contact, crawler, fetcher, intent, parser, utils
from memory import Memory
from models import Answer, Document, NoMatch, NoSnippet, Page
from rag import Index
from signals import OPEN_MENTOR, SignalBus

# ─────────────────────────── tunables ────────────────────────────
TOP_RESULTS          = 3
SNIPPETS_PER_DOC     = 2
READY_WAIT_SECONDS   = 8.0
MENTOR_MESSAGE       = "Hello, I am visiting the website and want to connect with the mentor."
SIGNAL_MENTOR_MESSAGE = "Hello, I would like to connect with the mentor."
# ──────────────────────────────────────────────────────────────────


def answer(query: str, index: Index, documents: Sequence[Document],
           top_k: int = TOP_RESULTS,
           max_snippets: int = SNIPPETS_PER_DOC) -> Answer | NoMatch | NoSnippet | None:
    """
    Index picks the pages, sentence ranking picks the excerpts.
    Blank queries return None.
    """
    if not query or not query.strip():
        return None

    results = index.search(query)
    if not results:
        return NoMatch(utils.NO_MATCH_MSG)

    top = results[:top_k]
    by_id = {d.id: d for d in documents}
    items = []
    for r in top:
        doc = by_id.get(r.document_id) or Document(
            id=r.document_id, url=r.document_id,
            title=r.title or r.document_id, content="")
        snippets = parser.top_snippets(query, doc, max_snippets)
        if snippets:
            items.append((doc, tuple(snippets)))

    if items:
        return Answer(tuple(items))
    return NoSnippet(tuple(r.document_id for r in top))


class Assistant:
    """One hosting page, one corpus, one conversation."""

    def __init__(self, page: Page,
                 http: Optional[requests.Session] = None,
                 emit: Callable[[str], None] = print,
                 bus: Optional[SignalBus] = None,
                 open_link: Optional[Callable[[str], None]] = None,
                 verbose: bool = False,
                 link_limit: int = crawler.DEFAULT_LINK_LIMIT,
                 workers: int = fetcher.THREAD_POOL_WORKERS,
                 timeout: int = fetcher.FETCH_TIMEOUT,
                 wait_seconds: float = READY_WAIT_SECONDS) -> None:
        self.page = page
        self.http = http or fetcher.new_session()
        self.emit = emit
        self.open_link = open_link
        self.memory = Memory(verbose=verbose)
        self.link_limit = link_limit
        self.workers = workers
        self.timeout = timeout
        self.wait_seconds = wait_seconds
        self.last_link: Optional[str] = None
        self._thread: Optional[threading.Thread] = None

        self.bus = bus or SignalBus()
        self.bus.subscribe(OPEN_MENTOR, lambda: self.connect_to_mentor(SIGNAL_MENTOR_MESSAGE))

    # ---------- crawl / index ----------
    def activate(self) -> bool:
        """Start the background crawl on first call; later calls do nothing."""
        if not self.memory.start():
            return False
        self._thread = threading.Thread(target=self._build, name="site-index", daemon=True)
        self._thread.start()
        return True

    def _build(self) -> None:
        try:
            self.memory.build(self.page, self.http, link_limit=self.link_limit,
                              workers=self.workers, timeout=self.timeout)
        except Exception as exc:
            self.memory.log_step(f"Index build failed: {exc}")
        finally:
            self.memory.finish()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Block until the crawl settles (or `timeout`); True when ready."""
        return self.memory.wait_until_ready(timeout)

    # ---------- conversation ----------
    def _say(self, text: str) -> str:
        self.emit(text)
        return text

    def handle_question(self, text: str) -> str | None:
        """Answer one visitor message; returns the final reply, None for blank input."""
        if not text or not text.strip():
            return None

        # mentor requests never touch the index
        if intent.wants_human(text):
            return self.connect_to_mentor(MENTOR_MESSAGE)

        self.activate()
        if not self.memory.is_ready:
            self._say(utils.WAITING_MSG)
            self.memory.wait_until_ready(self.wait_seconds)
        if not self.memory.is_ready:
            return self._say(utils.NOT_READY_MSG)
        if self.memory.index is None:
            return self._say(utils.NO_INDEX_MSG)

        outcome = answer(text, self.memory.index, self.memory.documents)
        return self._say(utils.format_outcome(outcome))

    def connect_to_mentor(self, message: Optional[str] = None) -> str:
        found = contact.resolve(self.page.html)
        link = contact.build_deep_link(found.digits_only, message or MENTOR_MESSAGE) if found else None
        if not link:
            return self._say(utils.NO_CONTACT_MSG)

        self.last_link = link
        if self.open_link is not None:
            self.open_link(link)
        return self._say(utils.OPENING_MSG + link)
