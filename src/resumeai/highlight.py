"""Render untrusted resume text as markup that may only contain ``<mark>`` tags.

Every string that came back from the generation service is passed through
:func:`render_text` before display. Keyword emphasis is optional and may fail
soft; sanitising and placeholder marking always run.
"""
from __future__ import annotations

import html
import re
from typing import Iterable, Optional

from .logger import _log_debug
from .scoring import PLACEHOLDER_MARKER

KEYWORD_MARK_STYLE = "background:#d4f0d4;color:#1a5c1a;padding:0 1px;border-radius:2px"
PLACEHOLDER_MARK_STYLE = "background:#fff3cd;padding:0 2px;border-radius:2px"

# Backslash must come first so later substitutions are not escaped twice.
_METACHARACTERS = ("\\", ".", "+", "*", "?", "^", "$", "{", "}", "(", ")", "|", "[", "]")

_DISALLOWED_TAG_RE = re.compile(r'<(?!/?mark(?:\s+style="[^"<>]*")?\s*>)[^>]*>', re.IGNORECASE)
_PLACEHOLDER_RE = re.compile(re.escape(PLACEHOLDER_MARKER), re.IGNORECASE)
_MARK_RE = re.compile(r"<mark\b[^>]*>(.*?)</mark>", re.IGNORECASE | re.DOTALL)


def escape_for_literal_match(value: str) -> str:
    """Escape regular-expression metacharacters one at a time."""
    for character in _METACHARACTERS:
        value = value.replace(character, "\\" + character)
    return value


def _mark(content: str, style: str) -> str:
    return f'<mark style="{style}">{content}</mark>'


def render_with_highlights(
    text: Optional[str], terms: Iterable[str], enabled: bool = True
) -> Optional[str]:
    """Return ``text`` as escaped markup with ``terms`` wrapped in marks.

    Returns None, not an empty string, when there is nothing to highlight or
    the pattern cannot be built, so callers fall back to the plain text.
    """
    if not enabled or not text:
        return None
    ordered = sorted({term for term in terms if term}, key=lambda term: (-len(term), term))
    if not ordered:
        return None
    alternation = "|".join(escape_for_literal_match(term) for term in ordered)
    try:
        # Placeholders go first so no keyword mark lands inside one.
        pattern = re.compile(
            f"({escape_for_literal_match(PLACEHOLDER_MARKER)})|({alternation})", re.IGNORECASE
        )
    except re.error as exc:
        _log_debug(f"Highlight pattern rejected ({exc}); showing plain text")
        return None

    pieces = []
    position = 0
    for match in pattern.finditer(text):
        pieces.append(html.escape(text[position : match.start()]))
        if match.group(1) is not None:
            pieces.append(html.escape(match.group(1)))
        else:
            pieces.append(_mark(html.escape(match.group(2)), KEYWORD_MARK_STYLE))
        position = match.end()
    pieces.append(html.escape(text[position:]))
    return "".join(pieces)


def sanitize_markup(raw: Optional[str]) -> str:
    """Strip every tag except ``<mark>``, ``<mark style="...">`` and ``</mark>``."""
    return _DISALLOWED_TAG_RE.sub("", raw or "")


def mark_placeholders(markup: str) -> str:
    """Wrap unresolved metric placeholders so they stay visible."""
    return _PLACEHOLDER_RE.sub(lambda match: _mark(match.group(0), PLACEHOLDER_MARK_STYLE), markup)


def render_text(text: Optional[str], terms: Iterable[str] = (), enabled: bool = False) -> str:
    """Run the full display pipeline over one piece of untrusted text."""
    highlighted = render_with_highlights(text, terms, enabled)
    markup = highlighted if highlighted is not None else html.escape(text or "")
    return mark_placeholders(sanitize_markup(markup))


def strip_keyword_marks(markup: str) -> str:
    """Unwrap keyword marks, keeping the ones around placeholders."""

    def _unwrap(match: re.Match) -> str:
        if PLACEHOLDER_MARKER.lower() in match.group(1).lower():
            return match.group(0)
        return match.group(1)

    return _MARK_RE.sub(_unwrap, markup)
