# intent.py — decide whether a question goes to a human or to the index
from __future__ import annotations

import re
from typing import List, Tuple

from models import Intent

# ─────────────────────────── rule table ───────────────────────────
# First matching rule wins; anything unmatched is a search.
RULES: List[Tuple[re.Pattern, Intent]] = [
    (re.compile(r"\b(mentor|trainer|coach|contact|connect|speak|call)\b", re.I),
     Intent.ESCALATE),
    (re.compile(r"\bwhats?app\b|\bwhats\s+app\b", re.I), Intent.ESCALATE),
]
# ──────────────────────────────────────────────────────────────────


def classify(query: str, rules: List[Tuple[re.Pattern, Intent]] = RULES) -> Intent:
    for pattern, intent in rules:
        if pattern.search(query or ""):
            return intent
    return Intent.SEARCH


def wants_human(query: str) -> bool:
    return classify(query) is Intent.ESCALATE
