from __future__ import annotations

from typing import get_args

import pytest

from lead_finder.models import DefendantType, PlaintiffType
from lead_finder.parsers.parties import (
    MULTIPLE_PLAINTIFFS_CONCERN,
    UNKNOWN_DEFENDANT,
    UNKNOWN_PLAINTIFF,
    classify_defendant,
    classify_plaintiff,
    extract_defendant_name,
    extract_mailing_address,
    extract_plaintiff_name,
    is_good_defendant,
    is_good_plaintiff,
    parse_lis_pendens,
)


@pytest.mark.parametrize(
    "name",
    [
        "Wells Fargo Bank",
        "Chase Bank",
        "Bank of America",
        "US Bank",
        "PNC Bank",
        "ABC Federal Credit Union",
        "Members Credit Union",
        "Quicken Mortgage",
        "National Mortgage Servicing",
        "Wells Fargo Bank, N.A.",
    ],
)
def test_lenders_are_good_plaintiffs(name: str) -> None:
    assert is_good_plaintiff(name)


@pytest.mark.parametrize(
    "name",
    [
        "Oakwood HOA",
        "Sunset Homeowners Association",
        "Property Owners Association",
        "Fayette County",
        "City of Lexington",
        "Commonwealth of Kentucky",
        "ABC Construction LLC",
        "Smith Plumbing",
        "Elite Roofing",
        "County Bank",
    ],
)
def test_hoa_government_and_contractors_are_bad_plaintiffs(name: str) -> None:
    assert not is_good_plaintiff(name)


@pytest.mark.parametrize(
    "name",
    ["John Smith", "Jane Doe", "Robert Johnson Jr.", "John and Jane Smith", "Robert & Mary Johnson"],
)
def test_individuals_and_couples_are_good_defendants(name: str) -> None:
    assert is_good_defendant(name)


@pytest.mark.parametrize(
    "name",
    [
        "ABC Properties LLC",
        "Smith Holdings, L.L.C.",
        "XYZ Corp",
        "ABC Inc.",
        "Jones Corporation",
        "Smith Investment Company",
        "Real Estate Corporation",
    ],
)
def test_business_entities_are_bad_defendants(name: str) -> None:
    assert not is_good_defendant(name)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Wells Fargo Bank, N.A.", "bank"),
        ("Central Federal Credit Union", "credit_union"),
        ("Mortgage Servicer Inc", "mortgage_servicer"),
        ("Oakwood Homeowners Association", "hoa"),
        ("Fayette County", "government"),
        ("Ace Repairs LLC", "llc"),
        ("Mary Jones", "individual"),
        ("MARY JONES", "unknown"),
        (UNKNOWN_PLAINTIFF, "unknown"),
    ],
)
def test_classify_plaintiff_types(name: str, expected: str) -> None:
    record = classify_plaintiff(name)

    assert record.role == "plaintiff"
    assert record.type == expected


def test_classify_plaintiff_is_good_lead_matches_predicate() -> None:
    for name in ["Chase Bank", "Oakwood HOA", "County Bank", "Unknown Plaintiff"]:
        assert classify_plaintiff(name).is_good_lead == is_good_plaintiff(name)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("John Doe, as Trustee of the Doe Family Trust", "trust"),
        ("John and Jane Smith", "couple"),
        ("Robert & Mary Johnson", "couple"),
        ("ABC Properties LLC", "llc"),
        ("XYZ Corp", "llc"),
        ("John Smith", "individual"),
        ("Smith Investment Company", "unknown"),
    ],
)
def test_classify_defendant_types(name: str, expected: str) -> None:
    record = classify_defendant(name)

    assert record.role == "defendant"
    assert record.type == expected
    assert record.is_good_lead == is_good_defendant(name)


def test_extract_names_from_caption(bank_filing: str) -> None:
    assert extract_plaintiff_name(bank_filing) == "WELLS FARGO BANK, N.A."
    assert extract_defendant_name(bank_filing) == "JOHN DOE"


def test_extract_names_strip_party_labels() -> None:
    text = "BANK OF AMERICA, N.A., Plaintiff\nvs.\nJOHN DOE, Defendant\n"

    assert extract_plaintiff_name(text) == "BANK OF AMERICA, N.A."
    assert extract_defendant_name(text) == "JOHN DOE"


def test_unstructured_text_falls_back_to_unknown_names() -> None:
    text = "This is just random text with no legal structure"

    assert extract_plaintiff_name(text) == UNKNOWN_PLAINTIFF
    assert extract_defendant_name(text) == UNKNOWN_DEFENDANT


def test_extract_mailing_address() -> None:
    assert extract_mailing_address("Mailing address: 9 Elm Road, Lexington, KY 40502\nNext") == (
        "9 Elm Road, Lexington, KY 40502"
    )
    assert extract_mailing_address("who resides at 77 Pine Lane") == "77 Pine Lane"
    assert extract_mailing_address("no address here") is None


def test_parse_standard_filing(bank_filing: str) -> None:
    result = parse_lis_pendens(bank_filing)

    assert result.plaintiff.name == "WELLS FARGO BANK, N.A."
    assert result.plaintiff.type == "bank"
    assert result.plaintiff.is_good_lead
    assert result.plaintiff.concerns == ()
    assert result.defendant.name == "JOHN DOE"
    assert result.defendant.type == "individual"
    assert result.defendant.is_good_lead
    assert result.property_address is not None
    assert result.property_address.cleaned == "123 Main Street, Lexington, KY 40508"
    assert result.property_address.quality == "high"
    assert result.mailing_address is None
    assert result.raw_text == bank_filing


def test_parse_hoa_filing(hoa_filing: str) -> None:
    result = parse_lis_pendens(hoa_filing)

    assert result.plaintiff.name == "OAKWOOD HOMEOWNERS ASSOCIATION"
    assert result.plaintiff.type == "hoa"
    assert not result.plaintiff.is_good_lead
    assert result.defendant.name == "JANE SMITH"
    assert result.property_address is None
    assert result.all_addresses == ()


def test_parse_llc_defendant(llc_defendant_filing: str) -> None:
    result = parse_lis_pendens(llc_defendant_filing)

    assert result.plaintiff.is_good_lead
    assert result.defendant.name == "ABC PROPERTIES LLC"
    assert result.defendant.type == "llc"
    assert not result.defendant.is_good_lead


def test_parse_credit_union_and_trust() -> None:
    text = """CENTRAL FEDERAL CREDIT UNION
Plaintiff

vs.

JOHN DOE, AS TRUSTEE OF THE DOE FAMILY TRUST
Defendant
"""
    result = parse_lis_pendens(text)

    assert result.plaintiff.type == "credit_union"
    assert result.plaintiff.is_good_lead
    assert result.defendant.type == "trust"
    assert result.defendant.is_good_lead


def test_parse_county_plaintiff() -> None:
    text = "FAYETTE COUNTY\nPlaintiff\n\nvs.\n\nABANDONED PROPERTY OWNER\nDefendant\n"
    result = parse_lis_pendens(text)

    assert result.plaintiff.type == "government"
    assert not result.plaintiff.is_good_lead


def test_multiple_lenders_in_caption_raise_concern() -> None:
    text = "WELLS FARGO BANK and US BANK\nPlaintiffs\n\nvs.\n\nJOHN DOE\nDefendant\n"
    result = parse_lis_pendens(text)

    assert MULTIPLE_PLAINTIFFS_CONCERN in result.plaintiff.concerns


def test_mailing_address_phrase_sets_mailing_address(mailing_filing: str) -> None:
    result = parse_lis_pendens(mailing_filing)

    assert result.defendant.mailing_address == "456 Oak Avenue, Lexington, KY 40502"
    assert result.property_address.cleaned == "123 Main Street, Lexington, KY 40508"
    assert result.mailing_address.cleaned == "456 Oak Avenue, Lexington, KY 40502"


def test_ignored_addresses_are_never_selected(mailing_filing: str) -> None:
    ignored = "123 Main Street, Lexington, KY 40508"
    result = parse_lis_pendens(mailing_filing, ignore_addresses=[ignored])

    assert all(candidate.cleaned != ignored for candidate in result.all_addresses)
    assert result.property_address.cleaned == "456 Oak Avenue, Lexington, KY 40502"


def test_unstructured_text_never_raises() -> None:
    text = "This is just random text with no legal structure"
    result = parse_lis_pendens(text)

    assert result.plaintiff.name == UNKNOWN_PLAINTIFF
    assert result.defendant.name == UNKNOWN_DEFENDANT
    assert result.property_address is None
    assert result.raw_text == text


def test_empty_text_never_raises() -> None:
    result = parse_lis_pendens("")

    assert result.plaintiff.name == UNKNOWN_PLAINTIFF
    assert result.all_addresses == ()


def test_party_types_stay_within_declared_literals(bank_filing: str) -> None:
    parse_result = parse_lis_pendens(bank_filing)

    assert parse_result.plaintiff.type in get_args(PlaintiffType)
    assert parse_result.defendant.type in get_args(DefendantType)
    assert classify_plaintiff(UNKNOWN_PLAINTIFF).type in get_args(PlaintiffType)
