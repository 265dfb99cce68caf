"""Extract the keyword set of a job posting."""
from __future__ import annotations

import re
from typing import FrozenSet, Optional

STOP_WORDS = frozenset(
    {
        "the", "and", "for", "are", "with", "that", "this", "have", "from", "will",
        "you", "your", "our", "their", "they", "been", "has", "was", "not", "but",
        "can", "all", "any", "also", "its", "who", "may", "must", "able", "both",
        "each", "into", "more", "most", "over", "such", "than", "then", "them",
        "when", "where", "which", "while", "would", "about", "after", "before",
        "being", "between", "during", "other", "these", "those", "through",
        "under", "well",
    }
)

# A letter followed by two or more letters, digits, "+", "#" or ".", so that
# c++ and node.js stay whole.
_TOKEN_RE = re.compile(r"(?<![a-z0-9_])[a-z][a-z0-9+#.]{2,}")
MIN_TOKEN_LENGTH = 3


def tokenise(text: Optional[str]) -> list[str]:
    """Return the candidate tokens of ``text`` in order, duplicates included."""
    if not text or not text.strip():
        return []
    tokens = []
    for match in _TOKEN_RE.finditer(text.lower()):
        token = match.group(0).rstrip(".")
        if len(token) >= MIN_TOKEN_LENGTH:
            tokens.append(token)
    return tokens


def extract_keywords(job_text: Optional[str]) -> FrozenSet[str]:
    """Return the de-duplicated, stop-word-free keywords of a job posting."""
    return frozenset(token for token in tokenise(job_text) if token not in STOP_WORDS)
