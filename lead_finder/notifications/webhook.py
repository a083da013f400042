"""Delivery of formatted messages to a Slack incoming webhook."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

import httpx

from ..models import SlackMessage

LOGGER = logging.getLogger(__name__)


class NotificationError(RuntimeError):
    """Raised when a webhook rejects or cannot receive a message."""


def publish_to_slack(
    webhook_url: str,
    message: Union[SlackMessage, Dict[str, Any]],
    *,
    client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
) -> None:
    """POST ``message`` to ``webhook_url``.

    Args:
        webhook_url: Incoming webhook URL, always supplied by the caller
        message: A :class:`SlackMessage` or an already built payload
        client: Optional pre-configured ``httpx.Client`` (used as-is, not closed)
        timeout: Request timeout in seconds when no client is supplied
    """

    if not webhook_url:
        raise NotificationError("A Slack webhook URL is required")

    payload = message.as_payload() if isinstance(message, SlackMessage) else dict(message)
    if isinstance(message, SlackMessage) and message.truncated:
        LOGGER.warning("Publishing a truncated message (%s blocks omitted)", message.omitted_blocks)

    try:
        if client is not None:
            response = client.post(webhook_url, json=payload)
        else:
            with httpx.Client(timeout=timeout) as owned_client:
                response = owned_client.post(webhook_url, json=payload)
    except httpx.HTTPError as exc:
        raise NotificationError(f"Slack webhook request failed: {exc}") from exc

    if response.is_success:
        LOGGER.info("Sent Slack notification with %s blocks", len(payload.get("blocks") or []))
        return

    raise NotificationError(
        f"Slack webhook failed: {response.status_code} {response.reason_phrase} - {response.text}"
    )
