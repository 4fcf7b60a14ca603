#parser.py
from __future__ import annotations

import html as _html
import re
from typing import List, Optional

from bs4 import BeautifulSoup

from models import Document, Snippet

# ─────────────────────────── tunables ────────────────────────────
STRIP_TAGS          = ["script", "style", "noscript", "iframe"]
IDEAL_SENTENCE_LEN  = 140
# ──────────────────────────────────────────────────────────────────

_WS_RE       = re.compile(r"\s+")
_SENT_END_RE = re.compile(r"(?<=[.!?])\s+")
_TITLE_RE    = re.compile(r"<title[^>]*>([^<]+)</title>", re.I)


def _soup(markup: str) -> BeautifulSoup:
    soup = BeautifulSoup(markup or "", "html.parser")
    for tag in soup(STRIP_TAGS):
        tag.decompose()
    return soup


def normalize(markup: str) -> str:
    """Markup → plain body text, whitespace collapsed, no script/style text."""
    if not markup:
        return ""
    soup = _soup(markup)
    text = (soup.body or soup).get_text(" ")
    return _WS_RE.sub(" ", text).strip()


def sentences(text: str) -> List[str]:
    """Very simple sentence splitter: '.', '!' or '?' followed by whitespace.

    Abbreviations ("e.g. this") and the like get split too; that is accepted.
    """
    return [s.strip() for s in _SENT_END_RE.split(text or "") if s.strip()]


def extract_title(markup: str, fallback: str) -> str:
    m = _TITLE_RE.search(markup or "")
    if not m:
        return fallback
    title = _html.unescape(m.group(1)).strip()
    return title or fallback


def body_attribute(markup: str, name: str) -> Optional[str]:
    """Value of an attribute on <body>, or None."""
    body = BeautifulSoup(markup or "", "html.parser").body
    if body is None:
        return None
    value = body.get(name)
    if isinstance(value, list):          # multi-valued attrs come back as lists
        value = " ".join(value)
    return value


# ─────────────────────── sentence ranking ─────────────────────────
def query_terms(query: str) -> List[str]:
    return [w for w in query.lower().split() if w]


def score_sentence(sentence: str, terms: List[str]) -> float:
    low, score = sentence.lower(), 0.0
    for term in terms:
        hits = re.findall(r"\b" + re.escape(term) + r"\b", low)
        score += 2 * len(hits)
        # substring presence counts once more on top of whole-word hits
        if term in low:
            score += 1
    # prefer mid-length sentences
    score -= abs(IDEAL_SENTENCE_LEN - len(sentence)) / IDEAL_SENTENCE_LEN
    return score


def top_snippets(query: str, doc: Document, max_snippets: int = 2) -> List[Snippet]:
    """Best `max_snippets` sentences of `doc` for `query`.

    Ranking is local to the document; equal scores keep sentence order.
    """
    terms = query_terms(query)
    scored = [
        Snippet(source_document_id=doc.id, text=s, score=score_sentence(s, terms))
        for s in sentences(doc.content)
    ]
    scored.sort(key=lambda sn: sn.score, reverse=True)   # stable
    return scored[:max_snippets]
