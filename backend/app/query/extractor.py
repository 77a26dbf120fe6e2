"""Taxonomy extractor - pull subject / regulation / year out of free text.

Rules, applied to the lower-cased text:

- Regulation: first ``r`` optionally followed by ``-`` or a space, then 2-3
  digits, on word boundaries. Normalized to ``R`` + digits.
- Year: cue patterns are checked in fixed priority order 1, 2, 3, 4 and the
  first pattern that matches anywhere wins. Position in the text is ignored,
  so "4th year physics 1st" resolves to "1".
- Subject: regulation and year cues are removed, the rest is split on
  whitespace, stop-words are dropped and the first surviving token is
  capitalized.
"""

import re

from backend.app.models.common import capitalize_first
from backend.app.models.query import ExtractedFields

REGULATION_RE = re.compile(r"\br[-\s]?(\d{2,3})\b", re.IGNORECASE)

# Evaluated in this order; the first hit decides the year.
YEAR_CUES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("1", re.compile(r"\b(1st|first|year\s?1|first year)\b")),
    ("2", re.compile(r"\b(2nd|second|year\s?2|second year)\b")),
    ("3", re.compile(r"\b(3rd|third|year\s?3|third year)\b")),
    ("4", re.compile(r"\b(4th|fourth|year\s?4|final year)\b")),
)

_ORDINAL_YEAR_RE = re.compile(
    r"\b(1st|2nd|3rd|4th|first|second|third|fourth|final)\s*(year)?\b", re.IGNORECASE
)
_NUMBERED_YEAR_RE = re.compile(r"\byear\s*\d\b", re.IGNORECASE)

# Sentence punctuation clinging to a word ("physics," "maths?")
_EDGE_PUNCTUATION = ".,;:!?\"'()[]{}"

STOP_WORDS = frozenset(
    {
        "pdf",
        "of",
        "for",
        "need",
        "i",
        "want",
        "the",
        "a",
        "an",
        "please",
        "give",
        "me",
        "get",
        "regulation",
        "in",
    }
)


def extract_regulation(text: str) -> str | None:
    """Return the first regulation code in ``text`` as "R" + digits."""
    match = REGULATION_RE.search(text)
    return f"R{match.group(1)}" if match else None


def extract_year(text: str) -> str | None:
    """Return "1".."4" from the first year cue pattern that matches."""
    lower = text.lower()
    for year, pattern in YEAR_CUES:
        if pattern.search(lower):
            return year
    return None


def extract_subject(text: str) -> str | None:
    """Return the first meaningful word left after removing taxonomy cues."""
    cleaned = REGULATION_RE.sub(" ", text.lower())
    cleaned = _ORDINAL_YEAR_RE.sub(" ", cleaned)
    cleaned = _NUMBERED_YEAR_RE.sub(" ", cleaned)

    for raw in cleaned.split():
        token = raw.strip(_EDGE_PUNCTUATION)
        if token and token not in STOP_WORDS:
            return capitalize_first(token)
    return None


def extract(text: str | None) -> ExtractedFields:
    """Extract taxonomy fields from a free-text request.

    Pure function of its input; the same text always yields the same fields.

    Args:
        text: Raw user utterance (None and "" yield empty fields)

    Returns:
        ExtractedFields with whichever of subject/regulation/year were found
    """
    if not text:
        return ExtractedFields()

    return ExtractedFields(
        subject=extract_subject(text),
        regulation=extract_regulation(text),
        year=extract_year(text),
    )
