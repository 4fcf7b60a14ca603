# models.py — value types shared by the crawl / index / answer pipeline
"""Plain records passed between pipeline stages. All are immutable."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class Page:
    """The hosting page: its URL and live markup."""

    url: str
    html: str


@dataclass(frozen=True)
class Document:
    id: str            # canonical URL
    url: str
    title: str
    content: str       # normalized plain text


@dataclass(frozen=True)
class SearchResult:
    document_id: str
    score: float
    title: str = ""


@dataclass(frozen=True)
class Snippet:
    source_document_id: str
    text: str
    score: float


@dataclass(frozen=True)
class Answer:
    """Up to three (document, snippets) pairs, best document first."""

    items: Tuple[Tuple[Document, Tuple[Snippet, ...]], ...]


@dataclass(frozen=True)
class NoMatch:
    message: str


@dataclass(frozen=True)
class NoSnippet:
    """The index found pages but none of them yielded an excerpt."""

    urls: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MentorContact:
    digits_only: str


class Intent(Enum):
    ESCALATE = "escalate"
    SEARCH = "search"


class CrawlState(Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    READY = "ready"
