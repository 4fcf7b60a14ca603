import re

import parser
from models import Document


def _doc(content):
    return Document(id="https://site.test/a", url="https://site.test/a", title="A", content=content)


def test_normalize_drops_script_style_and_collapses_whitespace():
    html = """<html><head><style>p { color: red }</style></head><body>
        <p>Hello   there,</p>\n\n<script>alert('x')</script>
        <noscript>enable js</noscript><iframe>frame text</iframe>
        <p>\tyoga friends.</p></body></html>"""
    text = parser.normalize(html)
    assert text == "Hello there, yoga friends."
    assert "alert" not in text and "color" not in text
    assert not re.search(r"\s{2,}", text)


def test_normalize_handles_fragments_and_empty_input():
    assert parser.normalize("") == ""
    assert parser.normalize("just <b>bold</b> text") == "just bold text"


def test_sentences_split_on_terminal_punctuation():
    text = "Classes start at six. Are you late? Come anyway! No trailing"
    assert parser.sentences(text) == [
        "Classes start at six.", "Are you late?", "Come anyway!", "No trailing"]


def test_sentences_mis_split_abbreviations():
    assert parser.sentences("Bring a mat, e.g. a thick one.") == ["Bring a mat, e.g.", "a thick one."]


def test_extract_title_and_fallback():
    assert parser.extract_title("<TITLE lang='en'> Pricing &amp; Plans </TITLE>", "x") == "Pricing & Plans"
    assert parser.extract_title("<p>no title</p>", "https://site.test/p") == "https://site.test/p"


def test_body_attribute():
    html = '<html><body data-mentor-phone="+91 98765 43210"><p>hi</p></body></html>'
    assert parser.body_attribute(html, "data-mentor-phone") == "+91 98765 43210"
    assert parser.body_attribute(html, "data-other") is None
    assert parser.body_attribute("<p>no body tag here</p>", "data-mentor-phone") is None


def test_score_counts_whole_words_twice_plus_substring():
    sentence = "yoga " * 27 + "abcd."           # exactly 140 characters
    assert len(sentence) == 140
    assert parser.score_sentence(sentence, ["yoga"]) == 27 * 2 + 1


def test_score_substring_only_and_length_penalty():
    sentence = "yogas"
    expected = 1 - abs(140 - len(sentence)) / 140
    assert parser.score_sentence(sentence, ["yoga"]) == expected


def test_top_snippets_prefers_matching_sentences():
    doc = _doc("The studio is bright. Evening class time is 6 PM. Parking is free.")
    snippets = parser.top_snippets("class time", doc, max_snippets=2)
    assert len(snippets) == 2
    assert snippets[0].text == "Evening class time is 6 PM."
    assert snippets[0].source_document_id == doc.id


def test_top_snippets_keeps_order_for_equal_scores():
    doc = _doc("Aaaa one. Bbbb two. Cccc six.")
    first = parser.top_snippets("zzz", doc, max_snippets=2)
    again = parser.top_snippets("zzz", doc, max_snippets=2)
    assert [s.text for s in first] == ["Aaaa one.", "Bbbb two."]
    assert first == again


def test_top_snippets_empty_document():
    assert parser.top_snippets("yoga", _doc(""), max_snippets=2) == []
