import re

import pytest

import intent
from models import Intent


@pytest.mark.parametrize("query", [
    "I want to speak to the coach",
    "Can I CALL someone?",
    "mentor please",
    "Who is the trainer",
    "how do I contact you",
    "connect me",
    "is there a WhatsApp number",
    "whats app?",
    "whatapp",
])
def test_escalation_words(query):
    assert intent.classify(query) is Intent.ESCALATE
    assert intent.wants_human(query)


@pytest.mark.parametrize("query", [
    "recall the poses",
    "what app do I need for the online classes",
    "whatever app works",
    "what time are classes",
    "connection fees",
    "contacts page",
    "speaker system",
    "",
])
def test_search_queries(query):
    assert intent.classify(query) is Intent.SEARCH


def test_rules_are_pluggable():
    rules = [(re.compile(r"\brefund\b", re.I), Intent.ESCALATE)]
    assert intent.classify("Refund please", rules) is Intent.ESCALATE
    assert intent.classify("call me", rules) is Intent.SEARCH
