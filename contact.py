# contact.py — mentor phone lookup and WhatsApp deep links
"""
Site authors publish the mentor's number as ``<body data-mentor-phone="...">``.
Without that attribute the visible page text is scanned for the first
phone-like run of digits.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote

import parser
from models import MentorContact

# ─────────────────────────── tunables ────────────────────────────
PHONE_ATTR       = "data-mentor-phone"
MIN_LINK_DIGITS  = 8
WA_BASE          = "https://wa.me/"
# ──────────────────────────────────────────────────────────────────

_ATTR_DIGITS_RE = re.compile(r"\d{7,}")
_SEPARATORS_RE  = re.compile(r"[\s\-().]")
_PHONE_RE       = re.compile(r"(\+?\d[\d\s\-()]{7,})")
_NON_DIGIT_RE   = re.compile(r"[^0-9]")
_URI_SAFE       = "!'()*-._~"


def phone_from_page(html: str) -> Optional[str]:
    """Raw phone string from the body attribute, else from visible text."""
    attr = parser.body_attribute(html, PHONE_ATTR)
    # "+1 (555) 123-4567" is fine: separators don't break the digit run
    if attr and _ATTR_DIGITS_RE.search(_SEPARATORS_RE.sub("", attr)):
        return attr
    match = _PHONE_RE.search(parser.normalize(html))
    return match.group(1) if match else None


def to_digits(raw: Optional[str]) -> str:
    return _NON_DIGIT_RE.sub("", raw or "")


def build_deep_link(digits: str, message: str) -> Optional[str]:
    """wa.me link, or None when there are too few digits to route."""
    if not digits or len(digits) < MIN_LINK_DIGITS or not digits.isdigit():
        return None
    # same escaping as JavaScript's encodeURIComponent
    return f"{WA_BASE}{digits}?text={quote(message, safe=_URI_SAFE)}"


def resolve(html: str) -> Optional[MentorContact]:
    raw = phone_from_page(html)
    digits = to_digits(raw)
    if len(digits) < MIN_LINK_DIGITS:
        return None
    return MentorContact(digits_only=digits)
