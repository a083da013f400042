"""Address extraction and plausibility scoring."""
from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Pattern, Sequence, Tuple

from ..config import DEFAULT_SETTINGS, Settings
from ..document.text import clean_for_address_extraction, normalize_whitespace
from ..models import AddressCandidate, quality_for_score

LOGGER = logging.getLogger(__name__)

_STREET_TYPES = (
    r"(?:St\.?|Street|Ave\.?|Avenue|Rd\.?|Road|Blvd\.?|Boulevard|Ln\.?|Lane|Dr\.?|Drive|Ct\.?|Court|Way"
    r"|Terrace|Pl\.?|Place|Circle|Cir\.?|Parkway|Pkwy\.?|Highway|Hwy\.?)"
)
_UNIT = r"(?:[\s,]+(?:Suite|Ste\.?|Unit|Apt\.?|#)\s*[A-Za-z0-9\-]+)?"

# Extraction only; plausibility is decided by score_address_candidate.
ADDRESS_PATTERNS: Tuple[Pattern[str], ...] = (
    # "5136 Old Versailles Road, Lexington, KY 40510"
    re.compile(
        r"\d{1,6}\s+[A-Za-z0-9.\-\s]+?\s+" + _STREET_TYPES + _UNIT
        + r"[\s,]+[A-Za-z\s]+,\s*[A-Z]{2}\s+\d{5}(?:-\d{4})?",
        re.IGNORECASE,
    ),
    # "05-C South 4th St." or "325 West Main Street, Suite 2300"
    re.compile(
        r"\d{1,6}(?:-[A-Z])?\s+(?:North|South|East|West|N\.?|S\.?|E\.?|W\.?)?\s*[A-Za-z0-9.\-\s]+?\s+"
        + _STREET_TYPES + _UNIT,
        re.IGNORECASE,
    ),
)

STREET_TYPE_PATTERN = re.compile(
    r"\b(st|street|rd|road|ave|avenue|blvd|boulevard|ln|lane|dr|drive|ct|court|way|terrace|pl|place"
    r"|circle|cir|parkway|pkwy|highway|hwy)\b",
    re.IGNORECASE,
)
LEADING_NUMBER_PATTERN = re.compile(r"^\s*\d{1,6}(\s|[A-Za-z])")
ZIP_PATTERN = re.compile(r"\b\d{5}(?:-\d{4})?\b")

# Phrases from legal narrative that look address-like but never are.
NON_ADDRESS_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
    (phrase, re.compile(rf"\b{phrase}\b", re.IGNORECASE))
    for phrase in (
        "south of",
        "north of",
        "east of",
        "west of",
        "commonwealth",
        "circuit court",
        "case",
        "filed",
        "plaintiff",
        "defendant",
    )
)

NON_ADDRESS_REASON = "matched_non_address_phrase"

def _location_patterns(settings: Settings) -> Tuple[Pattern[str], Pattern[str]]:
    city = re.compile(rf"\b{re.escape(settings.target_city)}\b", re.IGNORECASE)
    state = re.compile(
        rf"\b{re.escape(settings.target_state)}\b|\b{re.escape(settings.target_state_name)}\b",
        re.IGNORECASE,
    )
    return city, state


def matches_non_address_phrase(text: str) -> bool:
    return any(pattern.search(text) for _, pattern in NON_ADDRESS_PATTERNS)


def score_address_candidate(address: str, settings: Settings = DEFAULT_SETTINGS) -> AddressCandidate:
    """Score an extracted string and decide whether it is likely an address.

    A non-address phrase vetoes the candidate outright. Otherwise points are
    added for a leading street number (40), a street type (30), and the
    target city, target state, and a ZIP code (10 each).
    """

    cleaned = clean_for_address_extraction(address)

    if matches_non_address_phrase(cleaned):
        return AddressCandidate(
            raw=address,
            cleaned=cleaned,
            score=0,
            quality="low",
            is_likely_address=False,
            reasons=(NON_ADDRESS_REASON,),
        )

    reasons: List[str] = []
    score = 0

    if LEADING_NUMBER_PATTERN.search(cleaned):
        score += 40
    else:
        reasons.append("no_leading_street_number")

    if STREET_TYPE_PATTERN.search(cleaned):
        score += 30
    else:
        reasons.append("no_street_type")

    city_pattern, state_pattern = _location_patterns(settings)
    if city_pattern.search(cleaned):
        score += 10
    if state_pattern.search(cleaned):
        score += 10
    if ZIP_PATTERN.search(cleaned):
        score += 10

    return AddressCandidate(
        raw=address,
        cleaned=cleaned,
        score=score,
        quality=quality_for_score(score),
        is_likely_address=score >= 50,
        reasons=tuple(reasons),
    )


def extract_addresses_from_text(text: str, settings: Settings = DEFAULT_SETTINGS) -> List[AddressCandidate]:
    """Find every address-shaped substring in ``text`` and score it."""

    normalized = normalize_whitespace(text)
    found: Dict[str, None] = {}

    for pattern in ADDRESS_PATTERNS:
        for match in pattern.finditer(normalized):
            found.setdefault(clean_for_address_extraction(match.group(0)), None)

    candidates = [score_address_candidate(address, settings) for address in found]
    LOGGER.debug("Extracted %s address candidates", len(candidates))
    return candidates


def _comparison_key(address: str) -> str:
    return normalize_whitespace(clean_for_address_extraction(address)).lower()


def filter_ignored_addresses(
    candidates: Sequence[AddressCandidate],
    ignore_list: Optional[Iterable[str]] = None,
) -> List[AddressCandidate]:
    """Drop candidates whose cleaned text matches an entry of ``ignore_list``."""

    ignored = {_comparison_key(address) for address in ignore_list or ()}
    if not ignored:
        return list(candidates)
    return [candidate for candidate in candidates if _comparison_key(candidate.cleaned) not in ignored]


def get_best_address(candidates: Sequence[AddressCandidate]) -> Optional[AddressCandidate]:
    """Return the highest scoring candidate; the first one wins ties."""

    best: Optional[AddressCandidate] = None
    for candidate in candidates:
        if best is None or candidate.score > best.score:
            best = candidate
    return best


__all__ = [
    "ADDRESS_PATTERNS",
    "NON_ADDRESS_PATTERNS",
    "NON_ADDRESS_REASON",
    "extract_addresses_from_text",
    "filter_ignored_addresses",
    "get_best_address",
    "matches_non_address_phrase",
    "score_address_candidate",
]
