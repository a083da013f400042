"""Whitespace and line-break canonicalisation for parser input."""
from __future__ import annotations

import re
from typing import Optional, Pattern, Union

_LINE_BREAKS = re.compile(r"[\r\n]+")
_WHITESPACE_RUN = re.compile(r"\s{2,}")
_COMMA = re.compile(r"\s*,\s*")
_PARAGRAPH_BREAK = re.compile(r"\s*\n\s*\n\s*")
# OCR wraps lines mid-sentence; a letter on each side of the break means the
# break is not a real paragraph boundary.
_BROKEN_LINE = re.compile(r"([a-z])\s*\n\s*([a-z])", re.IGNORECASE)

Marker = Union[str, Pattern[str]]


def normalize_whitespace(text: str) -> str:
    """Collapse line breaks and whitespace runs into single spaces."""

    text = _LINE_BREAKS.sub(" ", text)
    return _WHITESPACE_RUN.sub(" ", text).strip()


def clean_for_address_extraction(text: str) -> str:
    text = _WHITESPACE_RUN.sub(" ", text)
    return _COMMA.sub(", ", text).strip()


def normalize_for_legal_parsing(text: str) -> str:
    """Canonicalise line endings and repair OCR line wraps.

    Paragraph breaks (blank lines) survive as a single ``\\n\\n``; a line
    broken between two letters is rejoined with one space.
    """

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _PARAGRAPH_BREAK.sub("\n\n", text)
    text = _BROKEN_LINE.sub(r"\1 \2", text)
    return text.strip()


def _find(text: str, marker: Marker) -> int:
    if isinstance(marker, str):
        return text.find(marker)
    match = marker.search(text)
    return match.start() if match else -1


def extract_between_markers(text: str, start_marker: Marker, end_marker: Marker) -> Optional[str]:
    """Return the text from ``start_marker`` up to ``end_marker``.

    ``None`` when the start marker is absent; everything from the start marker
    onwards when the end marker is absent.
    """

    start = _find(text, start_marker)
    if start == -1:
        return None

    remainder = text[start:]
    end = _find(remainder, end_marker)
    if end == -1:
        return remainder
    return remainder[:end].strip()
