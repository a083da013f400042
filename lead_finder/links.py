"""Lookup link generation for property and people-search sites."""
from __future__ import annotations

import json
from typing import Optional
from urllib.parse import quote, quote_plus, urlencode

from .config import DEFAULT_SETTINGS, Settings
from .models import AddressCandidate, LookupLinks

PVA_BASE_URL = "https://fayettepva.com/property-search"
ZILLOW_BASE_URL = "https://www.zillow.com/homes"
GOOGLE_MAPS_BASE_URL = "https://www.google.com/maps/search"
TRUE_PEOPLE_SEARCH_URL = "https://www.truepeoplesearch.com/results"
FAST_PEOPLE_SEARCH_URL = "https://www.fastpeoplesearch.com"

_LOOKUP_QUALITIES = {"high", "medium"}


def _encode(value: str) -> str:
    return quote(value, safe="")


def address_supports_lookup(address: Optional[AddressCandidate]) -> bool:
    """Only high and medium quality addresses are used in search URLs."""

    return address is not None and address.quality in _LOOKUP_QUALITIES


def _true_people_search_url(name: str, settings: Settings) -> str:
    params = {
        "name": name,
        "citystatezip": f"{settings.target_city}, {settings.target_state}",
        "rid": "0x0",
    }
    return f"{TRUE_PEOPLE_SEARCH_URL}?{urlencode(params)}"


def _fast_people_search_url(name: str, settings: Settings) -> str:
    location = quote_plus(" ".join(filter(None, [settings.target_city, settings.target_state])))
    base = f"{FAST_PEOPLE_SEARCH_URL}/name/{quote_plus(name)}"
    if location:
        return f"{base}/{location}"
    return base


def generate_lookup_links(
    address: Optional[AddressCandidate],
    defendant_name: str,
    settings: Settings = DEFAULT_SETTINGS,
) -> LookupLinks:
    """Build external search URLs, preferring the address when it is usable."""

    encoded_name = _encode(defendant_name)
    if address_supports_lookup(address):
        encoded_address = _encode(address.cleaned)
        zillow = f"{ZILLOW_BASE_URL}/{encoded_address}_rb/"
        google_maps = f"{GOOGLE_MAPS_BASE_URL}/{encoded_address}"
    else:
        search_state = json.dumps({"usersSearchTerm": defendant_name}, separators=(",", ":"))
        zillow = f"{ZILLOW_BASE_URL}/?searchQueryState={_encode(search_state)}"
        google_maps = f"{GOOGLE_MAPS_BASE_URL}/{encoded_name}"

    return LookupLinks(
        pva=f"{PVA_BASE_URL}?owner={encoded_name}",
        zillow=zillow,
        google_maps=google_maps,
        true_people_search=_true_people_search_url(defendant_name, settings),
        fast_people_search=_fast_people_search_url(defendant_name, settings),
    )


__all__ = ["address_supports_lookup", "generate_lookup_links"]
