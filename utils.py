# utils.py — user-facing messages and answer formatting
from __future__ import annotations

import html
from typing import Union

from models import Answer, NoMatch, NoSnippet

# ─────────────────────────── messages ─────────────────────────────
NO_MATCH_MSG = (
    "I couldn’t find that in the website content. Try rephrasing or ask about "
    "classes, schedules, pricing, benefits, or contact details."
)
NO_SNIPPET_MSG  = "I found some relevant pages but couldn’t extract a good snippet. Please open the links: "
WAITING_MSG     = "Give me a moment while I scan this site..."
NOT_READY_MSG   = "I’m still scanning this site. Please try again in a moment."
NO_INDEX_MSG    = "I couldn’t initialize the knowledge index. Please refresh the page."
OPENING_MSG     = "Opening WhatsApp chat with the mentor. If it didn’t open, use this link: "
NO_CONTACT_MSG  = (
    "I couldn’t find a mentor phone number on this page. Please add "
    "data-mentor-phone on <body> or include the number in page content."
)
UNTITLED        = "From page"
# ──────────────────────────────────────────────────────────────────

Outcome = Union[Answer, NoMatch, NoSnippet]


# ─────────────────────── plain-text rendering ─────────────────────
def format_answer(answer: Answer) -> str:
    """One line per page: `Title: snippet snippet (url)`."""
    return "\n".join(
        f"{doc.title or UNTITLED}: {' '.join(s.text for s in snippets)} ({doc.url})"
        for doc, snippets in answer.items
    )


def format_outcome(outcome: Outcome) -> str:
    if isinstance(outcome, Answer):
        return format_answer(outcome)
    if isinstance(outcome, NoSnippet):
        return NO_SNIPPET_MSG + ", ".join(outcome.urls)
    return outcome.message


# ─────────────────────── HTML rendering ───────────────────────────
def format_answer_html(answer: Answer) -> str:
    """Markup for hosts that display HTML; snippet text is escaped."""
    parts = []
    for doc, snippets in answer.items:
        body = " ".join(s.text.replace("<", "&lt;") for s in snippets)
        parts.append(
            f'<div><strong>{html.escape(doc.title or UNTITLED)}:</strong> {body} '
            f'<a href="{html.escape(doc.url, quote=True)}" target="_blank" '
            f'rel="noopener">(open)</a></div>'
        )
    return "".join(parts)
