"""Slack Block Kit formatting for classified leads.

Slack rejects messages whose header text exceeds 150 characters, whose
section text exceeds 3000 characters, or that carry more than 50 blocks.
Every block produced here is checked against those limits.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..config import DEFAULT_SETTINGS, Settings
from ..models import AddressCandidate, ClassifiedLead, SlackMessage

LOGGER = logging.getLogger(__name__)

Block = Dict[str, Any]

HEADER_TEXT_LIMIT = DEFAULT_SETTINGS.header_text_limit
SECTION_TEXT_LIMIT = DEFAULT_SETTINGS.section_text_limit
ELLIPSIS = "..."

_CONTROL_CHARACTERS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")
_SPACE_RUN = re.compile(r" {2,}")
_OCR_ARTIFACTS = ("°",)

_SCORE_EMOJI = {
    "good": ":white_check_mark:",
    "bad": ":x:",
    "unknown": ":grey_question:",
    "needs_lookup": ":mag:",
}

GROUPS = (
    ("good", ":white_check_mark: Good Leads"),
    ("review", ":mag: Needs Review"),
    ("bad", ":x: Not Qualified"),
)


def sanitize_slack_text(text: str) -> str:
    """Strip control characters and OCR artifacts, keeping newlines and tabs."""

    for artifact in _OCR_ARTIFACTS:
        text = text.replace(artifact, "")
    text = _CONTROL_CHARACTERS.sub("", text)
    text = _SPACE_RUN.sub(" ", text)
    return "\n".join(line.strip() for line in text.split("\n")).strip()


def truncate_slack_text(text: str, limit: int) -> str:
    text = sanitize_slack_text(text)
    if len(text) <= limit:
        return text
    return text[: max(limit - len(ELLIPSIS), 0)] + ELLIPSIS[: limit]


def create_section_block(text: str, limit: int = SECTION_TEXT_LIMIT) -> Block:
    return {"type": "section", "text": {"type": "mrkdwn", "text": truncate_slack_text(text, limit)}}


def create_header_block(text: str, emoji: bool = True, limit: int = HEADER_TEXT_LIMIT) -> Block:
    return {
        "type": "header",
        "text": {"type": "plain_text", "text": truncate_slack_text(text, limit), "emoji": emoji},
    }


def create_divider_block() -> Block:
    return {"type": "divider"}


def split_into_section_blocks(text: str, limit: int = SECTION_TEXT_LIMIT) -> List[Block]:
    """Split ``text`` on line boundaries into sections of at most ``limit`` characters.

    A single line longer than ``limit`` is truncated; no other line is cut.
    """

    chunks: List[str] = []
    current: List[str] = []
    current_length = 0

    for line in sanitize_slack_text(text).split("\n"):
        if len(line) > limit:
            line = truncate_slack_text(line, limit)
        added = len(line) + (1 if current else 0)
        if current and current_length + added > limit:
            chunks.append("\n".join(current))
            current, current_length = [], 0
            added = len(line)
        current.append(line)
        current_length += added

    if current:
        chunks.append("\n".join(current))
    return [create_section_block(chunk, limit) for chunk in chunks if chunk.strip()]


def group_leads_by_score(leads: Iterable[ClassifiedLead]) -> Dict[str, List[ClassifiedLead]]:
    grouped: Dict[str, List[ClassifiedLead]] = {key: [] for key, _ in GROUPS}
    for lead in leads:
        grouped[lead.classification.overall_score].append(lead)
    return grouped


def _escape(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _link(url: str, label: str) -> str:
    return f"<{url}|{label}>"


def _format_address(address: Optional[AddressCandidate]) -> str:
    if address is None:
        return "_No property address found_"
    return f"{_escape(address.cleaned)} _({address.quality})_"


def format_lead(lead: ClassifiedLead) -> str:
    """Render one lead as Slack mrkdwn."""

    classification = lead.classification
    lines = [
        f"*{_escape(lead.defendant.name)}* ({lead.defendant.type})",
        f":round_pushpin: {_format_address(lead.property_address)}",
    ]
    if lead.mailing_address is not None:
        lines.append(f":mailbox: Mailing: {_format_address(lead.mailing_address)}")
    lines.append(f":bank: Plaintiff: {_escape(lead.plaintiff.name)} ({lead.plaintiff.type})")

    for result in classification.levels:
        lines.append(f"{_SCORE_EMOJI[result.score]} L{result.level}: {_escape(result.note)}")

    if classification.stop_reason:
        lines.append(f":octagonal_sign: {_escape(classification.stop_reason)}")
    if classification.concerns:
        lines.append(":warning: " + "; ".join(_escape(concern) for concern in classification.concerns))
    for note in classification.notes:
        lines.append(f"_{_escape(note)}_")

    links = lead.lookup_links
    lines.append(
        " | ".join(
            [
                _link(links.pva, "PVA"),
                _link(links.zillow, "Zillow"),
                _link(links.google_maps, "Map"),
                _link(links.true_people_search, "TruePeopleSearch"),
                _link(links.fast_people_search, "FastPeopleSearch"),
            ]
        )
    )
    if lead.pdf_url:
        lines.append(_link(lead.pdf_url, "View filing"))
    return "\n".join(lines)


def format_rejected_lead(lead: ClassifiedLead) -> str:
    reason = lead.classification.stop_reason or "Not qualified"
    return (
        f"*{_escape(lead.defendant.name)}* vs {_escape(lead.plaintiff.name)}\n"
        f"{_escape(reason)}"
    )


def pack_section_blocks(texts: Sequence[str], limit: int, margin: int = 0) -> List[Block]:
    """Concatenate texts into as few section blocks as the limit allows.

    Texts are joined by a blank line; a text that alone exceeds the budget is
    split on line boundaries instead of being cut.
    """

    budget = max(limit - margin, 1)
    blocks: List[Block] = []
    buffer = ""

    for text in texts:
        if len(text) > budget:
            if buffer:
                blocks.append(create_section_block(buffer, limit))
                buffer = ""
            blocks.extend(split_into_section_blocks(text, budget))
            continue
        candidate = f"{buffer}\n\n{text}" if buffer else text
        if len(candidate) > budget:
            blocks.append(create_section_block(buffer, limit))
            buffer = text
        else:
            buffer = candidate

    if buffer:
        blocks.append(create_section_block(buffer, limit))
    return blocks


def _apply_block_limit(blocks: List[Block], settings: Settings) -> SlackMessage:
    message = SlackMessage(text="", blocks=blocks)
    cap = settings.block_limit
    if len(blocks) <= cap:
        return message

    kept = blocks[: max(cap - 1, 0)]
    omitted = len(blocks) - len(kept)
    LOGGER.warning("Slack message exceeds %s blocks; dropping %s blocks", cap, omitted)
    if cap > 0:
        kept.append(
            create_section_block(
                f"_Message truncated: {omitted} more blocks not shown._",
                settings.section_text_limit,
            )
        )
    message.blocks = kept
    message.truncated = True
    message.omitted_blocks = omitted
    return message


def format_leads_for_slack(
    leads: Sequence[ClassifiedLead],
    settings: Settings = DEFAULT_SETTINGS,
    *,
    title: str = "Lis Pendens Leads",
) -> SlackMessage:
    """Render leads into fallback text plus blocks within Slack's limits.

    The only lossy step is the block cap: when the rendered message needs
    more blocks than allowed, trailing blocks are replaced by a truncation
    notice and ``SlackMessage.truncated`` is set.
    """

    header_limit = settings.header_text_limit
    section_limit = settings.section_text_limit
    grouped = group_leads_by_score(leads)
    counts = {key: len(items) for key, items in grouped.items()}
    total = len(leads)

    fallback = (
        f"Lis Pendens scan: {total} lead{'s' if total != 1 else ''} "
        f"({counts['good']} good, {counts['review']} review, {counts['bad']} bad)"
    )

    blocks: List[Block] = [
        create_header_block(f":house: {title} ({total})", limit=header_limit),
        create_section_block(
            f"*{counts['good']}* good | *{counts['review']}* review | *{counts['bad']}* bad",
            section_limit,
        ),
    ]
    if not total:
        blocks.append(create_section_block("_No new filings found._", section_limit))

    for key, heading in GROUPS:
        group = grouped[key]
        if not group:
            continue
        blocks.append(create_divider_block())
        blocks.append(create_header_block(f"{heading} ({len(group)})", limit=header_limit))
        render = format_rejected_lead if key == "bad" else format_lead
        texts = [sanitize_slack_text(render(lead)) for lead in group]
        blocks.extend(pack_section_blocks(texts, section_limit, settings.section_safety_margin))

    message = _apply_block_limit(blocks, settings)
    message.text = fallback
    return message


__all__ = [
    "create_divider_block",
    "create_header_block",
    "create_section_block",
    "format_lead",
    "format_leads_for_slack",
    "format_rejected_lead",
    "group_leads_by_score",
    "pack_section_blocks",
    "sanitize_slack_text",
    "split_into_section_blocks",
    "truncate_slack_text",
]
