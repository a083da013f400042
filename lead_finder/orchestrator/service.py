"""Pipeline that parses and classifies a batch of documents."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Iterable, List, Mapping, Optional, Sequence

from ..classifier import create_classified_lead
from ..config import DEFAULT_SETTINGS, Settings
from ..models import ClassifiedLead, DocumentInput, ExternalFacts
from ..parsers.parties import parse_lis_pendens

LOGGER = logging.getLogger(__name__)


class LeadPipeline:
    """Runs the parse/classify pipeline for each document in a batch."""

    def __init__(
        self,
        settings: Settings = DEFAULT_SETTINGS,
        *,
        concurrent: bool = False,
        max_workers: Optional[int] = None,
        raise_on_error: bool = False,
        include_raw_text: bool = False,
        as_of: Optional[date] = None,
    ) -> None:
        self._settings = settings
        self._concurrent = concurrent
        self._max_workers = max_workers
        self._raise_on_error = raise_on_error
        self._include_raw_text = include_raw_text
        self._as_of = as_of

    @property
    def settings(self) -> Settings:
        return self._settings

    def process(
        self,
        documents: Iterable[DocumentInput],
        facts: Optional[Mapping[str, ExternalFacts]] = None,
        ignore_addresses: Optional[Sequence[str]] = None,
    ) -> List[ClassifiedLead]:
        """Classify every document, returning leads in input order."""

        documents = list(documents)
        facts = facts or {}
        ignore = list(ignore_addresses or ())

        if not self._concurrent or len(documents) <= 1:
            results = [self._process_document(document, facts, ignore) for document in documents]
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                results = list(
                    executor.map(lambda document: self._process_document(document, facts, ignore), documents)
                )

        leads = [lead for lead in results if lead is not None]
        LOGGER.info("Classified %s of %s documents", len(leads), len(documents))
        return leads

    def process_document(
        self,
        document: DocumentInput,
        facts: Optional[ExternalFacts] = None,
        ignore_addresses: Optional[Sequence[str]] = None,
    ) -> ClassifiedLead:
        parse_result = parse_lis_pendens(document.text, self._settings, ignore_addresses)
        return create_classified_lead(
            document.id,
            document.pdf_url,
            parse_result,
            facts,
            self._include_raw_text,
            settings=self._settings,
            as_of=self._as_of,
        )

    def _process_document(
        self,
        document: DocumentInput,
        facts: Mapping[str, ExternalFacts],
        ignore_addresses: Sequence[str],
    ) -> Optional[ClassifiedLead]:
        try:
            LOGGER.debug("Classifying document %s", document.id)
            return self.process_document(document, facts.get(document.id), ignore_addresses)
        except Exception:
            LOGGER.exception("Failed to classify document %s", document.id)
            if self._raise_on_error:
                raise
            return None
