from __future__ import annotations

import pytest

from resumeai.keywords import extract_keywords, tokenise


def test_symbol_tokens_survive_whole():
    keywords = extract_keywords("Experience with C++, Node.js and .NET services.")
    assert "c++" in keywords
    assert "node.js" in keywords
    assert "net" in keywords
    assert "services" in keywords
    assert "experience" in keywords


def test_short_tokens_and_stop_words_are_dropped():
    keywords = extract_keywords("You will work with the team on AI and ML for our users")
    assert keywords == {"work", "team", "users"}


def test_trailing_sentence_period_is_trimmed():
    assert extract_keywords("We use Python.") == {"use", "python"}


def test_duplicates_collapse():
    assert tokenise("python Python PYTHON") == ["python", "python", "python"]
    assert extract_keywords("python Python PYTHON") == {"python"}


@pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
def test_empty_input_yields_empty_set(text):
    assert extract_keywords(text) == frozenset()


@pytest.mark.parametrize(
    "text",
    [
        "Senior Backend Engineer: Django, PostgreSQL, Kubernetes, c++ and node.js",
        "Product management skills; stakeholder communication. Agile/Scrum!",
    ],
)
def test_extraction_is_case_insensitive_and_idempotent(text):
    assert extract_keywords(text) == extract_keywords(text.upper())
    assert extract_keywords(text) == extract_keywords(text)


def test_token_must_not_start_mid_word():
    # "3d" is not a letter-led token, and "d" alone is too short.
    assert extract_keywords("3dmodeling") == frozenset()
