"""Tests for the Resend list CLI script."""

import json
import logging
import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Add scripts directory to path for importing the CLI module
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "scripts"))

import list_resource
from list_resource import main

from resend_sync.client import ResendClientError
from resend_sync.list_options import InvalidArgumentError, ListOptions
from resend_sync.logging_config import LOGGER_NAMESPACE, TextFormatter, configure_logging


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    client.list_items = AsyncMock(
        return_value={"object": "list", "data": [{"id": "em_1"}], "has_more": False}
    )
    return client


@pytest.fixture
def patched(mock_client):
    client_cls = MagicMock()
    client_cls.from_config.return_value = mock_client
    with (
        patch.object(list_resource, "get_config", return_value=MagicMock()),
        patch.object(list_resource, "configure_logging"),
        patch.object(list_resource, "ResendClient", client_cls),
    ):
        yield client_cls


def test_prints_list_result(patched, mock_client, capsys):
    main(["/emails"])

    output = json.loads(capsys.readouterr().out)
    assert output == {"object": "list", "data": [{"id": "em_1"}], "has_more": False}
    mock_client.list_items.assert_awaited_once_with(
        "/emails", ListOptions(), return_all=False, limit=None
    )
    mock_client.__aexit__.assert_awaited_once()


def test_all_and_cursor_forwarded(patched, mock_client):
    main(["contacts", "--all", "--after", "ct_9"])

    mock_client.list_items.assert_awaited_once_with(
        "/contacts", ListOptions(after="ct_9"), return_all=True, limit=None
    )


def test_limit_forwarded(patched, mock_client):
    main(["/domains", "--limit", "250", "--before", "d_1"])

    mock_client.list_items.assert_awaited_once_with(
        "/domains", ListOptions(before="d_1"), return_all=False, limit=250
    )


def test_after_and_before_rejected_by_parser(patched, mock_client):
    with pytest.raises(SystemExit) as exc_info:
        main(["/emails", "--after", "a", "--before", "b"])

    assert exc_info.value.code == 2
    mock_client.list_items.assert_not_called()


def test_invalid_argument_exit_code(patched, mock_client, capsys):
    mock_client.list_items.side_effect = InvalidArgumentError("Limit must be at least 1, got 0")

    with pytest.raises(SystemExit) as exc_info:
        main(["/emails", "--limit", "0"])

    assert exc_info.value.code == 2
    assert "Limit must be at least 1" in capsys.readouterr().err


def test_client_error_exit_code(patched, mock_client, capsys):
    mock_client.list_items.side_effect = ResendClientError("RESEND_REQUEST_TIMEOUT")

    with pytest.raises(SystemExit) as exc_info:
        main(["/emails"])

    assert exc_info.value.code == 1
    assert "RESEND_REQUEST_TIMEOUT" in capsys.readouterr().err


def test_missing_api_key_exit_code(capsys):
    client_cls = MagicMock()
    client_cls.from_config.side_effect = ValueError("RESEND_API_KEY is required")

    with (
        patch.object(list_resource, "get_config", return_value=MagicMock()),
        patch.object(list_resource, "configure_logging"),
        patch.object(list_resource, "ResendClient", client_cls),
        pytest.raises(SystemExit) as exc_info,
    ):
        main(["/emails"])

    assert exc_info.value.code == 1
    assert "RESEND_API_KEY" in capsys.readouterr().err


def test_invalid_json_body_exit_code(patched, mock_client, capsys):
    mock_client.list_items.side_effect = ResendClientError(
        "RESEND_REQUEST_ERROR: invalid JSON body"
    )

    with pytest.raises(SystemExit) as exc_info:
        main(["/emails"])

    assert exc_info.value.code == 1
    assert "invalid JSON body" in capsys.readouterr().err


def test_log_settings_applied_from_config(patched):
    config = MagicMock(log_level="WARNING", log_format="text")

    with (
        patch.object(list_resource, "get_config", return_value=config),
        patch.object(list_resource, "configure_logging") as mock_configure,
    ):
        main(["/emails"])

    mock_configure.assert_called_once_with("WARNING", "text")


def test_dotenv_log_level_reaches_logger(monkeypatch, tmp_path, mock_client):
    for key in list(os.environ):
        if key.upper().startswith("RESEND_"):
            monkeypatch.delenv(key, raising=False)
    (tmp_path / ".env").write_text(
        "RESEND_API_KEY=re_dotenv\nRESEND_LOG_LEVEL=DEBUG\nRESEND_LOG_FORMAT=text\n"
    )
    monkeypatch.chdir(tmp_path)

    client_cls = MagicMock()
    client_cls.from_config.return_value = mock_client
    logger = logging.getLogger(LOGGER_NAMESPACE)
    try:
        with patch.object(list_resource, "ResendClient", client_cls):
            main(["/emails"])

        assert logger.level == logging.DEBUG
        assert isinstance(logger.handlers[0].formatter, TextFormatter)
        config = client_cls.from_config.call_args.args[0]
        assert config.api_key.get_secret_value() == "re_dotenv"
    finally:
        configure_logging("INFO", "json")
