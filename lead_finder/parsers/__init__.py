"""Parsers turning normalised document text into addresses and parties."""

from .addresses import (  # noqa: F401
    extract_addresses_from_text,
    filter_ignored_addresses,
    get_best_address,
    score_address_candidate,
)
from .parties import (  # noqa: F401
    classify_defendant,
    classify_plaintiff,
    is_good_defendant,
    is_good_plaintiff,
    parse_lis_pendens,
)

__all__ = [
    "classify_defendant",
    "classify_plaintiff",
    "extract_addresses_from_text",
    "filter_ignored_addresses",
    "get_best_address",
    "is_good_defendant",
    "is_good_plaintiff",
    "parse_lis_pendens",
    "score_address_candidate",
]
