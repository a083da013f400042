"""Text preparation helpers for extracted document text."""

from .text import (  # noqa: F401
    clean_for_address_extraction,
    extract_between_markers,
    normalize_for_legal_parsing,
    normalize_whitespace,
)

__all__ = [
    "clean_for_address_extraction",
    "extract_between_markers",
    "normalize_for_legal_parsing",
    "normalize_whitespace",
]
