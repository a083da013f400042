"""Top-level package for the Lis Pendens lead finder."""

from . import models  # noqa: F401
from .classifier import classify_lead, create_classified_lead
from .config import DEFAULT_SETTINGS, ConfigurationError, Settings, load_settings
from .models import (
    AddressCandidate,
    ClassifiedLead,
    DocumentInput,
    DocumentParseResult,
    ExternalFacts,
    LeadClassification,
    LookupLinks,
    PartyRecord,
    SlackMessage,
)
from .notifications import format_leads_for_slack
from .orchestrator import LeadPipeline
from .parsers import parse_lis_pendens

__all__ = [
    "AddressCandidate",
    "ClassifiedLead",
    "ConfigurationError",
    "DEFAULT_SETTINGS",
    "DocumentInput",
    "DocumentParseResult",
    "ExternalFacts",
    "LeadClassification",
    "LeadPipeline",
    "LookupLinks",
    "PartyRecord",
    "Settings",
    "SlackMessage",
    "classify_lead",
    "create_classified_lead",
    "format_leads_for_slack",
    "load_settings",
    "parse_lis_pendens",
    "ingestion",
    "notifications",
    "orchestrator",
    "parsers",
]
