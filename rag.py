# rag.py — in-memory full-text index over crawled Documents

from __future__ import annotations

import math, re
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Protocol, Sequence

from models import Document, SearchResult

# ─────────────────────────── tunables ────────────────────────────
FIELDS        = ("title", "content")
FIELD_BOOST   = {"title": 2.0, "content": 1.0}
FUZZY         = 0.2           # max edit distance = round(len(term) * FUZZY)
MAX_FUZZY     = 6
PREFIX_WEIGHT = 0.375
FUZZY_WEIGHT  = 0.45
BM25_K1, BM25_B, BM25_D = 1.2, 0.7, 0.5
# ──────────────────────────────────────────────────────────────────

_TOKEN_RE = re.compile(r"\w+")


def _tokens(text):           # very cheap word tokenizer
    return [w.lower() for w in _TOKEN_RE.findall(text or "")]


def _edit_distance(a: str, b: str, limit: int) -> int:
    """Levenshtein distance, giving up (returns limit + 1) once it exceeds `limit`."""
    if abs(len(a) - len(b)) > limit:
        return limit + 1
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        cur = [i]
        for j, cb in enumerate(b, 1):
            cur.append(min(prev[j] + 1, cur[j - 1] + 1, prev[j - 1] + (ca != cb)))
        if min(cur) > limit:
            return limit + 1
        prev = cur
    return prev[-1]


class Index(Protocol):
    """What the answering code needs from a search index."""

    def add_all(self, documents: Iterable[Document]) -> None: ...

    def search(self, query: str) -> List[SearchResult]: ...


class SearchIndex:
    """
    Inverted index with per-field BM25+ scoring, field boosts,
    prefix expansion and bounded fuzzy matching.
    """

    def __init__(self, fields: Sequence[str] = FIELDS,
                 boost: Dict[str, float] | None = None,
                 fuzzy: float = FUZZY, prefix: bool = True) -> None:
        self.fields = tuple(fields)
        self.boost = {f: 1.0 for f in self.fields}
        self.boost.update(boost if boost is not None else FIELD_BOOST)
        self.fuzzy = fuzzy
        self.prefix = prefix

        self._ids: List[str] = []
        self._titles: List[str] = []
        # term → field → doc index → term frequency
        self._postings: Dict[str, Dict[str, Dict[int, int]]] = defaultdict(
            lambda: defaultdict(dict))
        self._field_len: Dict[str, List[int]] = {f: [] for f in self.fields}
        self._avg_len: Dict[str, float] = {}
        self._built = False

    def __len__(self) -> int:
        return len(self._ids)

    # ---------- build ----------
    def add_all(self, documents: Iterable[Document]) -> None:
        if self._built:
            raise RuntimeError("SearchIndex.add_all() called twice; build a new index instead")
        for doc in documents:
            idx = len(self._ids)
            self._ids.append(doc.id)
            self._titles.append(doc.title)
            for field in self.fields:
                toks = _tokens(getattr(doc, field, ""))
                self._field_len[field].append(len(toks))
                for term, tf in Counter(toks).items():
                    self._postings[term][field][idx] = tf
        for field, lens in self._field_len.items():
            self._avg_len[field] = (sum(lens) / len(lens)) if lens else 0.0
        self._built = True

    # ---------- query ----------
    def _expand(self, term: str) -> Dict[str, float]:
        """Indexed terms matching `term`, each with a match-quality weight."""
        out: Dict[str, float] = {}
        if term in self._postings:
            out[term] = 1.0
        max_d = min(MAX_FUZZY, int(len(term) * self.fuzzy + 0.5)) if self.fuzzy else 0
        for cand in self._postings:
            if cand == term:
                continue
            weight = 0.0
            if self.prefix and cand.startswith(term):
                extra = len(cand) - len(term)
                weight = PREFIX_WEIGHT * len(term) / (len(term) + 0.3 * extra)
            if max_d:
                d = _edit_distance(term, cand, max_d)
                if d <= max_d:
                    weight = max(weight, FUZZY_WEIGHT * len(term) / (len(term) + d))
            if weight:
                out[cand] = weight
        return out

    def _bm25(self, tf: int, df: int, field_len: int, avg_len: float) -> float:
        n = len(self._ids)
        idf = math.log(1 + (n - df + 0.5) / (df + 0.5))
        norm = 1 - BM25_B + BM25_B * (field_len / avg_len if avg_len else 0.0)
        return idf * (BM25_D + tf * (BM25_K1 + 1) / (tf + BM25_K1 * norm))

    def search(self, query: str) -> List[SearchResult]:
        """Ranked matches, best first; ties keep insertion order."""
        scores: Dict[int, float] = defaultdict(float)
        matched: Dict[int, set] = defaultdict(set)

        for qterm in dict.fromkeys(_tokens(query)):
            for term, weight in self._expand(qterm).items():
                for field, posting in self._postings[term].items():
                    boost = self.boost.get(field, 1.0)
                    for idx, tf in posting.items():
                        s = self._bm25(tf, len(posting), self._field_len[field][idx],
                                       self._avg_len[field])
                        scores[idx] += weight * boost * s
                        matched[idx].add(qterm)

        ranked = sorted(scores, key=lambda i: (-scores[i] * len(matched[i]), i))
        return [SearchResult(document_id=self._ids[i],
                             score=scores[i] * len(matched[i]),
                             title=self._titles[i])
                for i in ranked]


def build_index(documents: Iterable[Document]) -> SearchIndex:
    index = SearchIndex()
    index.add_all(documents)
    return index
