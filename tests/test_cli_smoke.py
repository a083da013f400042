"""Smoke tests for the CLI entry point."""
from __future__ import annotations

import json

import httpx
import pytest

from lead_finder import __main__
from lead_finder.cli import main


@pytest.fixture()
def filings_dir(tmp_path, bank_filing, hoa_filing):
    folder = tmp_path / "filings"
    folder.mkdir()
    (folder / "24-CI-00001.txt").write_text(bank_filing, encoding="utf-8")
    (folder / "24-CI-00002.txt").write_text(hoa_filing, encoding="utf-8")
    return folder


def test_cli_smoke_writes_csv_and_slack_payload(tmp_path, filings_dir) -> None:
    facts_path = tmp_path / "facts.csv"
    facts_path.write_text(
        "document_id,purchase_date,neighborhood_grade,bed_count\n24-CI-00001,2001-01-01,A,4\n",
        encoding="utf-8",
    )
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"notifications": {"block_limit": 40}}), encoding="utf-8")
    output_path = tmp_path / "leads.csv"
    slack_path = tmp_path / "slack.json"

    exit_code = main(
        [
            str(filings_dir),
            "--config",
            str(config_path),
            "--facts",
            str(facts_path),
            "--output",
            str(output_path),
            "--slack-json",
            str(slack_path),
        ]
    )

    assert exit_code == 0
    contents = output_path.read_text(encoding="utf-8")
    assert "24-CI-00001" in contents
    assert "WELLS FARGO BANK" in contents
    payload = json.loads(slack_path.read_text(encoding="utf-8"))
    assert payload["text"] == "Lis Pendens scan: 2 leads (1 good, 0 review, 1 bad)"
    assert payload["blocks"][0]["type"] == "header"


def test_cli_concurrent_mode(tmp_path, filings_dir) -> None:
    output_path = tmp_path / "leads.csv"

    exit_code = main([str(filings_dir), "--output", str(output_path), "--mode", "concurrent", "--max-workers", "2"])

    assert exit_code == 0
    assert output_path.exists()


def test_cli_posts_to_webhook(tmp_path, filings_dir, monkeypatch) -> None:
    from lead_finder import cli

    posted = {}

    def fake_publish(url, message):
        posted["url"] = url
        posted["payload"] = message.as_payload()

    monkeypatch.setattr(cli, "publish_to_slack", fake_publish)

    exit_code = main([str(filings_dir), "--slack-webhook", "https://hooks.example.com/abc"])

    assert exit_code == 0
    assert posted["url"] == "https://hooks.example.com/abc"
    assert posted["payload"]["blocks"]


def test_cli_webhook_failure_returns_error(tmp_path, filings_dir, monkeypatch) -> None:
    from lead_finder.notifications import webhook

    real_client = httpx.Client

    def failing_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(500, text="down"))
        return real_client(*args, **kwargs)

    monkeypatch.setattr(webhook.httpx, "Client", failing_client)

    assert main([str(filings_dir), "--slack-webhook", "https://hooks.example.com/abc"]) == 1


def test_cli_rejects_missing_config(tmp_path, filings_dir) -> None:
    assert main([str(filings_dir), "--config", str(tmp_path / "missing.yaml")]) == 1


def test_cli_rejects_unsupported_input(tmp_path) -> None:
    bad_path = tmp_path / "filing.pdf"
    bad_path.write_bytes(b"%PDF-1.4")

    assert main([str(bad_path)]) == 1


def test_module_entry_point_delegates_to_cli(tmp_path, filings_dir) -> None:
    """The package entry point should behave like the CLI."""

    output_path = tmp_path / "leads.csv"

    exit_code = __main__.main([str(filings_dir), "--output", str(output_path)])

    assert exit_code == 0
    assert output_path.exists()


def test_module_entry_point_without_arguments_shows_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = __main__.main([])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert "usage: python -m lead_finder" in captured.out
