"""Command line interface for classifying Lis Pendens filings."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ConfigurationError, load_settings
from .ingestion import UnsupportedFileTypeError, export_classified_leads, load_documents, load_external_facts
from .notifications import NotificationError, format_leads_for_slack, publish_to_slack
from .orchestrator import LeadPipeline


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Parse and classify Lis Pendens filings into property leads",
    )
    parser.add_argument("input", nargs="+", help="Extracted filing text (.txt files or directories of them)")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--facts",
        default=None,
        help="Spreadsheet of property facts keyed by document id (CSV or XLSX)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Path where the classified leads should be written (CSV, TSV or XLSX)",
    )
    parser.add_argument(
        "--slack-json",
        default=None,
        help="Write the Slack message payload to this JSON file",
    )
    parser.add_argument(
        "--slack-webhook",
        default=None,
        help="Post the Slack message to this incoming webhook URL",
    )
    parser.add_argument(
        "--mode",
        choices=["sequential", "concurrent"],
        default="sequential",
        help="Whether to classify documents sequentially or concurrently",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Maximum number of workers to use in concurrent mode",
    )
    parser.add_argument(
        "--raise-on-error",
        action="store_true",
        help="Propagate classification exceptions instead of skipping the document",
    )
    parser.add_argument(
        "--include-raw-text",
        action="store_true",
        help="Keep the normalised filing text on each lead",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        settings = load_settings(args.config)
        documents = load_documents(args.input)
        facts = load_external_facts(args.facts) if args.facts else {}
    except (ConfigurationError, UnsupportedFileTypeError, ValueError) as exc:
        logging.error("%s", exc)
        return 1

    if not documents:
        logging.warning("No documents found - nothing to do")
        return 0

    pipeline = LeadPipeline(
        settings,
        concurrent=args.mode == "concurrent",
        max_workers=args.max_workers,
        raise_on_error=args.raise_on_error,
        include_raw_text=args.include_raw_text,
    )
    leads = pipeline.process(documents, facts)

    if args.output:
        output_path = export_classified_leads(leads, args.output)
        logging.info("Classified leads written to %s", output_path.resolve())

    if args.slack_json or args.slack_webhook:
        message = format_leads_for_slack(leads, settings)
        if args.slack_json:
            slack_path = Path(args.slack_json)
            slack_path.parent.mkdir(parents=True, exist_ok=True)
            slack_path.write_text(json.dumps(message.as_payload(), indent=2), encoding="utf-8")
            logging.info("Slack payload written to %s", slack_path.resolve())
        if args.slack_webhook:
            try:
                publish_to_slack(args.slack_webhook, message)
            except NotificationError as exc:
                logging.error("%s", exc)
                return 1

    logging.info("Processed %s documents into %s leads", len(documents), len(leads))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
