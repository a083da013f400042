"""Formatting and delivery of lead notifications."""

from .slack import (  # noqa: F401
    format_lead,
    format_leads_for_slack,
    group_leads_by_score,
    sanitize_slack_text,
    split_into_section_blocks,
    truncate_slack_text,
)
from .webhook import NotificationError, publish_to_slack  # noqa: F401

__all__ = [
    "NotificationError",
    "format_lead",
    "format_leads_for_slack",
    "group_leads_by_score",
    "publish_to_slack",
    "sanitize_slack_text",
    "split_into_section_blocks",
    "truncate_slack_text",
]
