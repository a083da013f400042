from __future__ import annotations

from datetime import date

import pytest

from lead_finder.config import Settings
from lead_finder.models import DocumentInput, ExternalFacts
from lead_finder.orchestrator import LeadPipeline

AS_OF = date(2024, 6, 1)


@pytest.fixture()
def documents(bank_filing, hoa_filing, llc_defendant_filing, mailing_filing):
    return [
        DocumentInput(id="bank", text=bank_filing, pdf_url="https://example.com/bank.pdf"),
        DocumentInput(id="hoa", text=hoa_filing),
        DocumentInput(id="llc", text=llc_defendant_filing),
        DocumentInput(id="mailing", text=mailing_filing),
    ]


def test_sequential_pipeline_classifies_every_document(documents) -> None:
    leads = LeadPipeline(as_of=AS_OF).process(documents)

    assert [lead.id for lead in leads] == ["bank", "hoa", "llc", "mailing"]
    assert [lead.overall_score for lead in leads] == ["review", "bad", "bad", "review"]
    assert leads[0].pdf_url == "https://example.com/bank.pdf"
    assert leads[0].raw_text is None


def test_concurrent_pipeline_preserves_input_order(documents) -> None:
    many = documents * 5

    leads = LeadPipeline(concurrent=True, max_workers=4, as_of=AS_OF).process(many)

    assert [lead.id for lead in leads] == [document.id for document in many]


def test_external_facts_drive_levels_three_and_four(documents) -> None:
    facts = {"bank": ExternalFacts(purchase_date=date(2001, 5, 1), neighborhood_grade="B+", bed_count=3)}

    leads = LeadPipeline(as_of=AS_OF).process(documents, facts)

    assert leads[0].overall_score == "good"
    assert leads[3].overall_score == "review"


def test_ignore_addresses_from_settings_and_call(documents) -> None:
    settings = Settings(ignore_addresses=("123 Main Street, Lexington, KY 40508",))

    leads = LeadPipeline(settings, as_of=AS_OF).process(documents[3:])

    assert leads[0].property_address.cleaned == "456 Oak Avenue, Lexington, KY 40502"

    leads = LeadPipeline(as_of=AS_OF).process(
        documents[3:], ignore_addresses=["456 Oak Avenue, Lexington, KY 40502"]
    )
    assert leads[0].property_address.cleaned == "123 Main Street, Lexington, KY 40508"


def test_include_raw_text(documents) -> None:
    leads = LeadPipeline(include_raw_text=True, as_of=AS_OF).process(documents[:1])

    assert leads[0].raw_text == documents[0].text


def test_failures_are_skipped_or_raised(documents, monkeypatch) -> None:
    from lead_finder.orchestrator import service

    real_parse = service.parse_lis_pendens

    def flaky(text, settings, ignore_addresses=None):
        if "HOMEOWNERS" in text:
            raise RuntimeError("boom")
        return real_parse(text, settings, ignore_addresses)

    monkeypatch.setattr(service, "parse_lis_pendens", flaky)

    leads = LeadPipeline(as_of=AS_OF).process(documents)
    assert [lead.id for lead in leads] == ["bank", "llc", "mailing"]

    with pytest.raises(RuntimeError):
        LeadPipeline(raise_on_error=True, as_of=AS_OF).process(documents)


def test_empty_batch() -> None:
    assert LeadPipeline().process([]) == []
