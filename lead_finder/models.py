"""Unified data models for document parsing, lead classification, and notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

AddressQuality = Literal["high", "medium", "low"]
PartyRole = Literal["plaintiff", "defendant"]
PlaintiffType = Literal[
    "bank",
    "credit_union",
    "mortgage_servicer",
    "hoa",
    "llc",
    "government",
    "individual",
    "unknown",
]
DefendantType = Literal["individual", "couple", "trust", "llc", "unknown"]
LevelScore = Literal["good", "bad", "unknown", "needs_lookup"]
OverallScore = Literal["good", "review", "bad"]


# --- Parser Models ---

@dataclass(frozen=True, slots=True)
class AddressCandidate:
    """An address-shaped substring together with its plausibility score."""

    raw: str
    cleaned: str
    score: int
    quality: AddressQuality
    is_likely_address: bool
    reasons: Tuple[str, ...] = ()


def quality_for_score(score: int) -> AddressQuality:
    if score >= 80:
        return "high"
    if score >= 50:
        return "medium"
    return "low"


@dataclass(frozen=True, slots=True)
class PartyRecord:
    """A plaintiff or defendant extracted from the filing."""

    role: PartyRole
    name: str
    type: Union[PlaintiffType, DefendantType]
    is_good_lead: bool
    concerns: Tuple[str, ...] = ()
    mailing_address: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DocumentParseResult:
    """Everything the parsers could read from one document."""

    plaintiff: PartyRecord
    defendant: PartyRecord
    property_address: Optional[AddressCandidate]
    mailing_address: Optional[AddressCandidate]
    all_addresses: Tuple[AddressCandidate, ...]
    raw_text: str


# --- Classification Models ---

@dataclass(frozen=True, slots=True)
class ExternalFacts:
    """Property facts supplied by an external lookup (e.g. the county PVA)."""

    purchase_date: Optional[date] = None
    neighborhood_grade: Optional[str] = None
    bed_count: Optional[int] = None
    bath_count: Optional[float] = None


@dataclass(frozen=True)
class LevelResult:
    """Outcome of a single classification level."""

    level: int
    score: LevelScore
    note: str
    skipped: bool = False


@dataclass(frozen=True)
class PlaintiffLevelResult(LevelResult):
    party: Optional[PartyRecord] = None


@dataclass(frozen=True)
class DefendantLevelResult(LevelResult):
    party: Optional[PartyRecord] = None


@dataclass(frozen=True)
class EquityLevelResult(LevelResult):
    purchase_date: Optional[date] = None
    years_owned: Optional[float] = None


@dataclass(frozen=True)
class PropertyLevelResult(LevelResult):
    neighborhood_grade: Optional[str] = None
    bed_count: Optional[int] = None
    bath_count: Optional[float] = None


@dataclass(frozen=True, slots=True)
class LeadClassification:
    """Combined result of the four level pipeline."""

    level1: PlaintiffLevelResult
    level2: DefendantLevelResult
    level3: EquityLevelResult
    level4: PropertyLevelResult
    overall_score: OverallScore
    stop_reason: Optional[str] = None
    concerns: Tuple[str, ...] = ()
    notes: Tuple[str, ...] = ()

    @property
    def levels(self) -> Tuple[LevelResult, ...]:
        return (self.level1, self.level2, self.level3, self.level4)


@dataclass(frozen=True, slots=True)
class LookupLinks:
    """External search URLs generated for a lead."""

    pva: str
    zillow: str
    google_maps: str
    true_people_search: str
    fast_people_search: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "pva": self.pva,
            "zillow": self.zillow,
            "google_maps": self.google_maps,
            "true_people_search": self.true_people_search,
            "fast_people_search": self.fast_people_search,
        }


# --- Pipeline Models ---

@dataclass(frozen=True, slots=True)
class DocumentInput:
    """Extracted text of one filing handed to the pipeline."""

    id: str
    text: str
    pdf_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ClassifiedLead:
    """The externally visible unit produced for each document."""

    id: str
    pdf_url: Optional[str]
    property_address: Optional[AddressCandidate]
    mailing_address: Optional[AddressCandidate]
    plaintiff: PartyRecord
    defendant: PartyRecord
    classification: LeadClassification
    lookup_links: LookupLinks
    raw_text: Optional[str] = None

    @property
    def overall_score(self) -> OverallScore:
        return self.classification.overall_score


# --- Notification Models ---

@dataclass(slots=True)
class SlackMessage:
    """Fallback text and blocks ready for a chat webhook."""

    text: str
    blocks: List[Dict[str, Any]] = field(default_factory=list)
    truncated: bool = False
    omitted_blocks: int = 0

    def as_payload(self) -> Dict[str, Any]:
        return {"text": self.text, "blocks": list(self.blocks)}


__all__ = [
    "AddressCandidate",
    "AddressQuality",
    "ClassifiedLead",
    "DefendantLevelResult",
    "DefendantType",
    "DocumentInput",
    "DocumentParseResult",
    "EquityLevelResult",
    "ExternalFacts",
    "LeadClassification",
    "LevelResult",
    "LevelScore",
    "LookupLinks",
    "OverallScore",
    "PartyRecord",
    "PartyRole",
    "PlaintiffLevelResult",
    "PlaintiffType",
    "PropertyLevelResult",
    "SlackMessage",
    "quality_for_score",
]
