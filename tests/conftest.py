"""Shared filing texts for the parser, classifier and pipeline tests."""
from __future__ import annotations

import pytest

BANK_FILING = """CASE NO. 24-CI-00001

WELLS FARGO BANK, N.A.
Plaintiff

vs.

JOHN DOE
Defendant

Property: 123 Main Street, Lexington, KY 40508
"""

HOA_FILING = """OAKWOOD HOMEOWNERS ASSOCIATION
Plaintiff

vs.

JANE SMITH
Defendant
"""

LLC_DEFENDANT_FILING = """CHASE BANK
Plaintiff

vs.

ABC PROPERTIES LLC
Defendant
"""

MAILING_FILING = """CASE NO. 24-CI-00002

WELLS FARGO BANK, N.A.
Plaintiff

vs.

JOHN DOE
Defendant

Property: 123 Main Street, Lexington, KY 40508

Mailing address: 456 Oak Avenue, Lexington, KY 40502
"""


@pytest.fixture()
def bank_filing() -> str:
    return BANK_FILING


@pytest.fixture()
def hoa_filing() -> str:
    return HOA_FILING


@pytest.fixture()
def llc_defendant_filing() -> str:
    return LLC_DEFENDANT_FILING


@pytest.fixture()
def mailing_filing() -> str:
    return MAILING_FILING
