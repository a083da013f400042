"""Plaintiff/defendant extraction and Lis Pendens document parsing."""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple

from ..config import DEFAULT_SETTINGS, Settings
from ..document.text import normalize_for_legal_parsing, normalize_whitespace
from ..models import AddressCandidate, DocumentParseResult, PartyRecord
from .addresses import extract_addresses_from_text, filter_ignored_addresses, get_best_address

LOGGER = logging.getLogger(__name__)

UNKNOWN_PLAINTIFF = "Unknown Plaintiff"
UNKNOWN_DEFENDANT = "Unknown Defendant"
MULTIPLE_PLAINTIFFS_CONCERN = "Multiple plaintiffs - potential second mortgage"

TypeTable = Tuple[Tuple[str, Tuple[Pattern[str], ...]], ...]


def _patterns(*expressions: str, flags: int = re.IGNORECASE) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(expression, flags) for expression in expressions)


# --- Plaintiff tables ---

GOOD_PLAINTIFF_PATTERNS = _patterns(
    r"\bbank\b",
    r"\bn\.?a\.?\b",  # National Association
    r"\bfederal\s+credit\s+union\b",
    r"\bcredit\s+union\b",
    r"\bmortgage\b",
    r"\blending\b",
    r"\bloan\b",
    r"\bfinancial\b",
    r"\bservicing\b",
    r"\btrustee\b",
    r"\bwells\s+fargo\b",
    r"\bchase\b",
    r"\bcitibank\b",
    r"\bbank\s+of\s+america\b",
    r"\bpnc\b",
    r"\bus\s+bank\b",
    r"\bfifth\s+third\b",
    r"\bfannie\s+mae\b",
    r"\bfreddie\s+mac\b",
)

BAD_PLAINTIFF_PATTERNS = _patterns(
    r"\bhoa\b",
    r"\bhomeowners?\s+association\b",
    r"\bproperty\s+owners?\s+association\b",
    r"\bcounty\b",
    r"\bcity\s+of\b",
    r"\bcommonwealth\b",
    r"\bstate\s+of\b",
    r"\bdemo(?:lition)?\b",
    r"\bservice\s+llc\b",
    r"\bconstruction\b",
    r"\bcontract(?:or|ing)?\b",
    r"\bplumbing\b",
    r"\belectric(?:al)?\b",
    r"\broofing\b",
    r"\blandscap(?:e|ing)\b",
)

PLAINTIFF_TYPE_PATTERNS: TypeTable = (
    ("bank", _patterns(r"\bbank\b", r"\bn\.?a\.?\b", r"\bwells\s+fargo\b", r"\bchase\b", r"\bcitibank\b", r"\bpnc\b")),
    ("credit_union", _patterns(r"\bcredit\s+union\b", r"\bfederal\s+credit\s+union\b", r"\bfcu\b")),
    ("mortgage_servicer", _patterns(r"\bmortgage\b", r"\bservicing\b", r"\bloan\b")),
    ("hoa", _patterns(r"\bhoa\b", r"\bhomeowners?\s+association\b", r"\bproperty\s+owners?\s+association\b")),
    ("government", _patterns(r"\bcounty\b", r"\bcity\s+of\b", r"\bcommonwealth\b", r"\bstate\s+of\b")),
    ("llc", _patterns(r"\bllc\b", r"\bl\.l\.c\b")),
)

# "First Last" or "Last, First", title case only.
PERSON_NAME_PATTERNS = _patterns(r"^[A-Z][a-z]+\s+[A-Z][a-z]+", r"^[A-Z][a-z]+,\s*[A-Z][a-z]+", flags=0)

# --- Defendant tables ---

BUSINESS_ENTITY_PATTERNS = _patterns(
    r"\bllc\b",
    r"\bl\.l\.c\b",
    r"\binc\b\.?",
    r"\bincorporated\b",
    r"\bcorp\b\.?",
    r"\bcorporation\b",
    r"\bcompany\b",
    r"\bco\.",
    r"\blimited\s+partnership\b",
    r"\blp\b",
    r"\bltd\b\.?",
)

DEFENDANT_TYPE_PATTERNS: TypeTable = (
    ("trust", _patterns(r"\btrust\b", r"\btrustee\b", r"\bas\s+trustee\b")),
    ("couple", _patterns(r"\band\b", r"\s+&\s+")),
    ("llc", _patterns(r"\bllc\b", r"\bl\.l\.c\b", r"\binc\b\.?", r"\bcorp\b\.?")),
)

MAILING_ADDRESS_PATTERNS = _patterns(
    r"(?:residing|resides|lives?)\s+at\s+([^\n]+)",
    r"(?:whose|their)\s+(?:mailing\s+)?address\s+is\s+([^\n]+)",
    r"mailing\s+address[:\s]+([^\n]+)",
)

# --- Name extraction tables ---

_PLAINTIFF_NAME_PATTERNS = (
    re.compile(r"(?:^|\n)\s*([^\n]+?)\s*(?:,\s*)?(?:plaintiff|petitioner)", re.IGNORECASE | re.MULTILINE),
    re.compile(r"plaintiff[:\s]+([^\n,]+)", re.IGNORECASE | re.MULTILINE),
    re.compile(r"([A-Z][A-Za-z\s,.]+?)\s+v\.?\s+", re.MULTILINE),
    re.compile(r"([^\n]+?)\s+(?:vs?\.?|versus)\s+", re.IGNORECASE | re.MULTILINE),
)
_PLAINTIFF_NAME_CLEANUP = (
    re.compile(r",?\s*plaintiff$", re.IGNORECASE),
    re.compile(r"^\s*re:\s*", re.IGNORECASE),
)

_DEFENDANT_NAME_PATTERNS = (
    re.compile(r"(?:^|\n)\s*([^\n]+?)\s*(?:,\s*)?(?:defendant|respondent)", re.IGNORECASE | re.MULTILINE),
    re.compile(r"defendant[:\s]+([^\n,]+)", re.IGNORECASE | re.MULTILINE),
    re.compile(r"\s+v\.?\s+([A-Z][A-Za-z\s,.]+?)(?:\n|,\s*(?:et|defendant))", re.IGNORECASE | re.MULTILINE),
    re.compile(r"(?:vs?\.?|versus)\s+([^\n]+?)(?:\n|,\s*(?:et|defendant))", re.IGNORECASE | re.MULTILINE),
)
_DEFENDANT_NAME_CLEANUP = (
    re.compile(r",?\s*defendant$", re.IGNORECASE),
    re.compile(r",?\s*et\s+al\.?$", re.IGNORECASE),
)

_CAPTION = re.compile(r"(.+?)\b(?:versus|vs?\.?)\s", re.IGNORECASE | re.DOTALL)
_PARTY_SEPARATOR = re.compile(r"\band\b|\s+&\s+", re.IGNORECASE)


def _any_match(patterns: Iterable[Pattern[str]], text: str) -> bool:
    return any(pattern.search(text) for pattern in patterns)


def _first_type(table: TypeTable, name: str) -> Optional[str]:
    for party_type, patterns in table:
        if _any_match(patterns, name):
            return party_type
    return None


def _extract_name(
    text: str,
    patterns: Sequence[Pattern[str]],
    cleanup: Sequence[Pattern[str]],
    fallback: str,
) -> str:
    normalized = normalize_for_legal_parsing(text)
    for pattern in patterns:
        match = pattern.search(normalized)
        if not match or not match.group(1):
            continue
        name = match.group(1).strip()
        for expression in cleanup:
            name = expression.sub("", name)
        name = name.strip()
        if 2 < len(name) < 200:
            return name
    return fallback


def extract_plaintiff_name(text: str) -> str:
    return _extract_name(text, _PLAINTIFF_NAME_PATTERNS, _PLAINTIFF_NAME_CLEANUP, UNKNOWN_PLAINTIFF)


def extract_defendant_name(text: str) -> str:
    return _extract_name(text, _DEFENDANT_NAME_PATTERNS, _DEFENDANT_NAME_CLEANUP, UNKNOWN_DEFENDANT)


def is_good_plaintiff(name: str) -> bool:
    """Lender vocabulary present and no HOA/government/contractor vocabulary."""

    return _any_match(GOOD_PLAINTIFF_PATTERNS, name) and not _any_match(BAD_PLAINTIFF_PATTERNS, name)


def is_good_defendant(name: str) -> bool:
    return not _any_match(BUSINESS_ENTITY_PATTERNS, name)


def _looks_like_person(name: str) -> bool:
    return _any_match(PERSON_NAME_PATTERNS, name)


def _plaintiff_concerns(full_text: str) -> List[str]:
    caption = _CAPTION.search(full_text)
    if not caption:
        return []
    segments = _PARTY_SEPARATOR.split(caption.group(1))
    lenders = sum(1 for segment in segments if _any_match(GOOD_PLAINTIFF_PATTERNS, segment))
    if lenders > 1:
        return [MULTIPLE_PLAINTIFFS_CONCERN]
    return []


def classify_plaintiff(name: str, full_text: str = "") -> PartyRecord:
    """Classify a plaintiff name; ``full_text`` is scanned for multiple lenders."""

    party_type = _first_type(PLAINTIFF_TYPE_PATTERNS, name)
    if party_type is None:
        if name == UNKNOWN_PLAINTIFF:
            party_type = "unknown"
        elif not _any_match(BAD_PLAINTIFF_PATTERNS, name) and _looks_like_person(name):
            party_type = "individual"
        else:
            party_type = "unknown"

    return PartyRecord(
        role="plaintiff",
        name=normalize_whitespace(name),
        type=party_type,
        is_good_lead=is_good_plaintiff(name),
        concerns=tuple(_plaintiff_concerns(full_text)),
    )


def extract_mailing_address(full_text: str) -> Optional[str]:
    for pattern in MAILING_ADDRESS_PATTERNS:
        match = pattern.search(full_text)
        if match and match.group(1):
            return normalize_whitespace(match.group(1))
    return None


def classify_defendant(name: str, full_text: str = "") -> PartyRecord:
    """Classify a defendant name and capture any stated mailing address."""

    party_type = _first_type(DEFENDANT_TYPE_PATTERNS, name)
    if party_type is None:
        party_type = "individual" if is_good_defendant(name) else "unknown"

    return PartyRecord(
        role="defendant",
        name=normalize_whitespace(name),
        type=party_type,
        is_good_lead=is_good_defendant(name),
        mailing_address=extract_mailing_address(full_text),
    )


def _secondary_address(
    candidates: Sequence[AddressCandidate], property_address: Optional[AddressCandidate]
) -> Optional[AddressCandidate]:
    if property_address is None:
        return None
    primary = property_address.cleaned.lower()
    remaining = [
        candidate
        for candidate in candidates
        if candidate is not property_address and candidate.cleaned.lower() not in primary
    ]
    return get_best_address(remaining)


def parse_lis_pendens(
    text: str,
    settings: Settings = DEFAULT_SETTINGS,
    ignore_addresses: Optional[Iterable[str]] = None,
) -> DocumentParseResult:
    """Parse one Lis Pendens document into parties and addresses."""

    normalized = normalize_for_legal_parsing(text)

    plaintiff = classify_plaintiff(extract_plaintiff_name(normalized), normalized)
    defendant = classify_defendant(extract_defendant_name(normalized), normalized)

    ignored = list(settings.ignore_addresses) + list(ignore_addresses or ())
    all_addresses = filter_ignored_addresses(extract_addresses_from_text(normalized, settings), ignored)
    property_address = get_best_address(all_addresses)

    mailing_address: Optional[AddressCandidate] = None
    if defendant.mailing_address:
        mailing_address = get_best_address(extract_addresses_from_text(defendant.mailing_address, settings))
    if mailing_address is None:
        mailing_address = _secondary_address(all_addresses, property_address)

    LOGGER.debug(
        "Parsed plaintiff=%r (%s) defendant=%r (%s) with %s addresses",
        plaintiff.name,
        plaintiff.type,
        defendant.name,
        defendant.type,
        len(all_addresses),
    )

    return DocumentParseResult(
        plaintiff=plaintiff,
        defendant=defendant,
        property_address=property_address,
        mailing_address=mailing_address,
        all_addresses=tuple(all_addresses),
        raw_text=text,
    )


__all__ = [
    "BAD_PLAINTIFF_PATTERNS",
    "BUSINESS_ENTITY_PATTERNS",
    "DEFENDANT_TYPE_PATTERNS",
    "GOOD_PLAINTIFF_PATTERNS",
    "MULTIPLE_PLAINTIFFS_CONCERN",
    "PLAINTIFF_TYPE_PATTERNS",
    "UNKNOWN_DEFENDANT",
    "UNKNOWN_PLAINTIFF",
    "classify_defendant",
    "classify_plaintiff",
    "extract_defendant_name",
    "extract_mailing_address",
    "extract_plaintiff_name",
    "is_good_defendant",
    "is_good_plaintiff",
    "parse_lis_pendens",
]
