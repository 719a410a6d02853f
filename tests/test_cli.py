"""CLI and logging wiring tests."""

import json
import logging
import sys

import pytest
from rich.logging import RichHandler

import main
from utils.exceptions import ConfigurationError
from utils.logger import setup_logger


def test_setup_logger_adds_rich_handler_once():
    logger = setup_logger("pulse_search.test_cli", level=logging.DEBUG)
    again = setup_logger("pulse_search.test_cli", level=logging.DEBUG)

    assert logger is again
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)


def test_status_command_prints_json(monkeypatch, capsys):
    async def fake_run(args):
        assert args.command == "status"
        return {"groq": {"available": False, "model": "llama-3.3-70b-versatile", "role": "primary"}}

    monkeypatch.setattr(main, "_run", fake_run)
    monkeypatch.setattr(main, "configure_logging", lambda **kwargs: None)
    monkeypatch.setattr(sys, "argv", ["pulse-search", "status"])

    main.main()

    payload = json.loads(capsys.readouterr().out)
    assert payload["groq"]["role"] == "primary"


def test_search_command_reports_configuration_errors(monkeypatch, capsys):
    async def fake_run(args):
        assert args.platforms == "reddit,youtube"
        raise ConfigurationError("ScrapeCreators API key not configured")

    monkeypatch.setattr(main, "_run", fake_run)
    monkeypatch.setattr(main, "configure_logging", lambda **kwargs: None)
    monkeypatch.setattr(
        sys, "argv", ["pulse-search", "search", "--query", "e-bikes", "--platforms", "reddit,youtube", "--quiet"]
    )

    with pytest.raises(SystemExit) as exc_info:
        main.main()

    assert exc_info.value.code == 1
    assert json.loads(capsys.readouterr().out) == {"error": "ScrapeCreators API key not configured"}
