"""Four level lead classification for parsed Lis Pendens documents.

Level 1: plaintiff (bank/lender good; HOA, government, LLC bad)
Level 2: defendant (individual, couple, trust good; business entity bad)
Level 3: equity, from the purchase date (5+ years good)
Level 4: property quality, from neighborhood grade and bedrooms

Levels run in order. A bad result on level 1 or 2 stops the pipeline and
every later level is recorded as skipped.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple

from .config import DEFAULT_SETTINGS, Settings
from .links import address_supports_lookup, generate_lookup_links
from .models import (
    ClassifiedLead,
    DefendantLevelResult,
    DocumentParseResult,
    EquityLevelResult,
    ExternalFacts,
    LeadClassification,
    LevelResult,
    OverallScore,
    PlaintiffLevelResult,
    PropertyLevelResult,
)

LOGGER = logging.getLogger(__name__)

GOOD_GRADES = ("A+", "A", "A-", "B+", "B", "B-")
BAD_GRADES = ("C+", "C", "C-", "D+", "D", "D-", "F")

LIMITED_EQUITY_CONCERN = "Limited equity position"
PROPERTY_QUALITY_CONCERN = "Property quality concerns"

_BAD_PLAINTIFF_NOTES = {
    "hoa": "HOA plaintiff - not a foreclosure",
    "government": "Government plaintiff - likely tax or code enforcement",
    "llc": "LLC plaintiff - likely service/contractor lien",
}

_GOOD_DEFENDANT_NOTES = {
    "individual": "Individual owner",
    "couple": "Couple/family owners",
    "trust": "Trust ownership (may need extra review)",
}


@dataclass(frozen=True)
class ClassificationContext:
    """Inputs shared by every level of a single classification run."""

    parse_result: DocumentParseResult
    facts: ExternalFacts
    settings: Settings
    as_of: date


@dataclass(frozen=True)
class LevelDefinition:
    number: int
    name: str
    evaluate: Callable[[ClassificationContext], LevelResult]
    skip: Callable[[ClassificationContext, str], LevelResult]
    halts_on_bad: bool = False


def skipped_note(failed_level: int) -> str:
    return f"Skipped - Level {failed_level} failed"


# --- Level 1 ---

def evaluate_plaintiff(context: ClassificationContext) -> PlaintiffLevelResult:
    plaintiff = context.parse_result.plaintiff
    if plaintiff.is_good_lead:
        return PlaintiffLevelResult(
            level=1, score="good", note=f"{plaintiff.type} plaintiff (likely lender)", party=plaintiff
        )
    if plaintiff.type in _BAD_PLAINTIFF_NOTES:
        return PlaintiffLevelResult(level=1, score="bad", note=_BAD_PLAINTIFF_NOTES[plaintiff.type], party=plaintiff)
    if plaintiff.type == "unknown":
        return PlaintiffLevelResult(
            level=1, score="unknown", note="Unable to determine plaintiff type", party=plaintiff
        )
    return PlaintiffLevelResult(level=1, score="unknown", note=f"Plaintiff type: {plaintiff.type}", party=plaintiff)


def _skip_plaintiff(context: ClassificationContext, note: str) -> PlaintiffLevelResult:
    return PlaintiffLevelResult(level=1, score="unknown", note=note, skipped=True, party=context.parse_result.plaintiff)


# --- Level 2 ---

def evaluate_defendant(context: ClassificationContext) -> DefendantLevelResult:
    defendant = context.parse_result.defendant
    if defendant.is_good_lead:
        note = _GOOD_DEFENDANT_NOTES.get(defendant.type, "Owner appears to be an individual")
        return DefendantLevelResult(level=2, score="good", note=note, party=defendant)
    if defendant.type == "llc":
        note = "LLC/Business owner - not a personal residence"
    else:
        note = "Business entity owner"
    return DefendantLevelResult(level=2, score="bad", note=note, party=defendant)


def _skip_defendant(context: ClassificationContext, note: str) -> DefendantLevelResult:
    return DefendantLevelResult(level=2, score="unknown", note=note, skipped=True, party=context.parse_result.defendant)


# --- Level 3 ---

def years_between(start: date, end: date) -> float:
    if isinstance(start, datetime):
        start = start.date()
    if isinstance(end, datetime):
        end = end.date()
    return (end - start).days / 365


def evaluate_equity(context: ClassificationContext) -> EquityLevelResult:
    purchase_date = context.facts.purchase_date
    if purchase_date is None:
        return EquityLevelResult(level=3, score="needs_lookup", note="Purchase date requires PVA lookup")

    years_owned = years_between(purchase_date, context.as_of)
    whole_years = math.floor(years_owned)
    if years_owned >= context.settings.equity_years_threshold:
        return EquityLevelResult(
            level=3,
            score="good",
            note=f"{whole_years} years of ownership - good equity potential",
            purchase_date=purchase_date,
            years_owned=years_owned,
        )
    return EquityLevelResult(
        level=3,
        score="bad",
        note=f"Only {whole_years} years of ownership - limited equity",
        purchase_date=purchase_date,
        years_owned=years_owned,
    )


def _skip_equity(context: ClassificationContext, note: str) -> EquityLevelResult:
    return EquityLevelResult(level=3, score="unknown", note=note, skipped=True)


# --- Level 4 ---

def evaluate_property(context: ClassificationContext) -> PropertyLevelResult:
    facts = context.facts
    grade = (facts.neighborhood_grade or "").strip().upper() or None
    bed_count = facts.bed_count

    if grade is None and bed_count is None:
        return PropertyLevelResult(
            level=4,
            score="needs_lookup",
            note="Property details require Zillow/PVA lookup",
            bath_count=facts.bath_count,
        )

    score = "unknown"
    notes: List[str] = []

    if grade in GOOD_GRADES:
        score = "good"
        notes.append(f"{grade} neighborhood")
    elif grade in BAD_GRADES:
        score = "bad"
        notes.append(f"{grade} neighborhood - below threshold")

    if bed_count is not None:
        low, high = context.settings.good_bed_range
        if low <= bed_count <= high:
            if score != "bad":
                score = "good"
            notes.append(f"{bed_count} bedrooms")
        elif bed_count < low:
            notes.append(f"Only {bed_count} bedrooms")
        else:
            notes.append(f"{bed_count} bedrooms (larger property)")

    return PropertyLevelResult(
        level=4,
        score="needs_lookup" if score == "unknown" else score,
        note=", ".join(notes) or "Partial property data available",
        neighborhood_grade=grade,
        bed_count=bed_count,
        bath_count=facts.bath_count,
    )


def _skip_property(context: ClassificationContext, note: str) -> PropertyLevelResult:
    return PropertyLevelResult(level=4, score="unknown", note=note, skipped=True)


LEVELS: Tuple[LevelDefinition, ...] = (
    LevelDefinition(1, "plaintiff", evaluate_plaintiff, _skip_plaintiff, halts_on_bad=True),
    LevelDefinition(2, "defendant", evaluate_defendant, _skip_defendant, halts_on_bad=True),
    LevelDefinition(3, "equity", evaluate_equity, _skip_equity),
    LevelDefinition(4, "property", evaluate_property, _skip_property),
)


def _overall_score(results: List[LevelResult], halted: bool) -> OverallScore:
    if halted:
        return "bad"
    if any(result.score in ("unknown", "needs_lookup") for result in results):
        return "review"
    if all(result.score == "good" for result in results):
        return "good"
    return "review"


def classify_lead(
    parse_result: DocumentParseResult,
    external_facts: Optional[ExternalFacts] = None,
    *,
    settings: Settings = DEFAULT_SETTINGS,
    as_of: Optional[date] = None,
) -> LeadClassification:
    """Run the four levels over ``parse_result`` and combine their scores."""

    context = ClassificationContext(
        parse_result=parse_result,
        facts=external_facts or ExternalFacts(),
        settings=settings,
        as_of=as_of or date.today(),
    )

    results: List[LevelResult] = []
    failed_level: Optional[int] = None
    stop_reason: Optional[str] = None

    for definition in LEVELS:
        if failed_level is not None:
            results.append(definition.skip(context, skipped_note(failed_level)))
            continue
        result = definition.evaluate(context)
        results.append(result)
        if definition.halts_on_bad and result.score == "bad":
            failed_level = definition.number
            stop_reason = f"Level {definition.number}: {result.note}"
            LOGGER.debug("Classification stopped at level %s: %s", definition.number, result.note)

    concerns = list(parse_result.plaintiff.concerns)
    incomplete = any(result.score in ("unknown", "needs_lookup") for result in results)
    if failed_level is None and not incomplete:
        if results[2].score == "bad":
            concerns.append(LIMITED_EQUITY_CONCERN)
        if results[3].score == "bad":
            concerns.append(PROPERTY_QUALITY_CONCERN)

    level1, level2, level3, level4 = results
    return LeadClassification(
        level1=level1,
        level2=level2,
        level3=level3,
        level4=level4,
        overall_score=_overall_score(results, failed_level is not None),
        stop_reason=stop_reason,
        concerns=tuple(concerns),
    )


def create_classified_lead(
    lead_id: str,
    pdf_url: Optional[str],
    parse_result: DocumentParseResult,
    external_facts: Optional[ExternalFacts] = None,
    include_raw_text: bool = False,
    *,
    settings: Settings = DEFAULT_SETTINGS,
    as_of: Optional[date] = None,
) -> ClassifiedLead:
    """Classify ``parse_result`` and bundle it with lookup links."""

    classification = classify_lead(parse_result, external_facts, settings=settings, as_of=as_of)
    address = parse_result.property_address
    lookup_links = generate_lookup_links(address, parse_result.defendant.name, settings)

    if not address_supports_lookup(address):
        if address is None:
            note = "No property address found - lookup links use defendant name only"
        else:
            note = f"{address.quality.capitalize()} quality address - lookup links use defendant name only"
        classification = replace(classification, notes=classification.notes + (note,))

    return ClassifiedLead(
        id=lead_id,
        pdf_url=pdf_url,
        property_address=address,
        mailing_address=parse_result.mailing_address,
        plaintiff=parse_result.plaintiff,
        defendant=parse_result.defendant,
        classification=classification,
        lookup_links=lookup_links,
        raw_text=parse_result.raw_text if include_raw_text else None,
    )


__all__ = [
    "BAD_GRADES",
    "GOOD_GRADES",
    "LEVELS",
    "LevelDefinition",
    "classify_lead",
    "create_classified_lead",
    "skipped_note",
]
