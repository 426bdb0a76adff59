"""Tests for the aicli command-line entry point."""

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from aicli.cli import main
from aicli.constants import (
    API_KEY_PLACEHOLDER,
    EXIT_API_ERROR,
    EXIT_CONFIG_CREATED,
    EXIT_CONFIG_ERROR,
    EXIT_INTERRUPTED,
    EXIT_OK,
    EXIT_REQUEST_FAILED,
    EXIT_STREAM_ERROR,
    EXIT_USAGE,
)
from aicli.config_store import load_config
from aicli.errors import APIError, RequestFailedError, StreamReadError
from config_helpers import write_config


class FakeTty(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def tty_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", FakeTty(""))


# ============================================================================
# Config bootstrap
# ============================================================================


def test_missing_config_creates_template(tmp_path, capsys):
    """First run writes the template and exits with the created status."""
    path = tmp_path / ".ai_cli_config"

    with patch("aicli.cli.send_prompt") as mock_send:
        exit_code = main(["-c", str(path), "hello"])

    assert exit_code == EXIT_CONFIG_CREATED
    assert path.exists()
    mock_send.assert_not_called()
    err = capsys.readouterr().err
    assert "Created default config at" in err
    assert "IMPORTANT" in err


def test_placeholder_key_is_config_error(tmp_path, capsys):
    path = write_config(tmp_path, f"api_key = {API_KEY_PLACEHOLDER}\n")

    exit_code = main(["-c", path, "hello"])

    assert exit_code == EXIT_CONFIG_ERROR
    assert "Error: API key is missing" in capsys.readouterr().err


def test_relative_config_path_rejected(capsys):
    exit_code = main(["-c", "relative/config", "hello"])

    assert exit_code == EXIT_USAGE
    err = capsys.readouterr().err
    assert "Invalid config path" in err
    assert "Relative paths without prefix are not supported" in err


# ============================================================================
# Prompt mode
# ============================================================================


def test_prompt_words_are_joined(config_path):
    with patch("aicli.cli.send_prompt") as mock_send:
        exit_code = main(["-c", config_path, "list", "big", "files"])

    assert exit_code == EXIT_OK
    config, prompt = mock_send.call_args.args
    assert prompt == "list big files"
    assert config.default_model == "gpt-4o-mini"


def test_model_override_applies_to_single_call(config_path):
    """-m changes the model for this call only; the file is untouched."""
    before = Path(config_path).read_bytes()

    with patch("aicli.cli.send_prompt") as mock_send:
        exit_code = main(["-c", config_path, "-m", "o3-mini", "hi"])

    assert exit_code == EXIT_OK
    assert mock_send.call_args.args[0].default_model == "o3-mini"
    assert Path(config_path).read_bytes() == before


def test_options_after_prompt_words(config_path):
    with patch("aicli.cli.send_prompt") as mock_send:
        main(["-c", config_path, "what", "is", "-m", "gpt-4.1-nano", "grep"])

    config, prompt = mock_send.call_args.args
    assert prompt == "what is grep"
    assert config.default_model == "gpt-4.1-nano"


def test_piped_stdin_is_prompt(config_path, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("  explain this log\n\n"))

    with patch("aicli.cli.send_prompt") as mock_send:
        exit_code = main(["-c", config_path])

    assert exit_code == EXIT_OK
    assert mock_send.call_args.args[1] == "explain this log"


def test_empty_prompt_prints_help(config_path, tty_stdin, capsys):
    """No words and an interactive stdin: show usage, do not call the API."""
    with patch("aicli.cli.send_prompt") as mock_send:
        exit_code = main(["-c", config_path])

    assert exit_code == EXIT_OK
    mock_send.assert_not_called()
    assert "usage: aicli" in capsys.readouterr().out


def test_empty_piped_stdin_prints_help(config_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("   \n"))

    with patch("aicli.cli.send_prompt") as mock_send:
        exit_code = main(["-c", config_path])

    assert exit_code == EXIT_OK
    mock_send.assert_not_called()
    assert "usage: aicli" in capsys.readouterr().out


@pytest.mark.parametrize(
    "error, expected",
    [
        (APIError(401, "unauthorized"), EXIT_API_ERROR),
        (StreamReadError("connection reset"), EXIT_STREAM_ERROR),
        (RequestFailedError("Error making request: refused"), EXIT_REQUEST_FAILED),
    ],
)
def test_chat_errors_map_to_exit_codes(config_path, capsys, error, expected):
    with patch("aicli.cli.send_prompt", side_effect=error):
        exit_code = main(["-c", config_path, "hi"])

    assert exit_code == expected
    assert capsys.readouterr().err.startswith("Error: ")


def test_error_output_is_sanitized(config_path, capsys):
    error = APIError(401, "bad key sk-abcdefghijklmnopqrstuvwxyz")

    with patch("aicli.cli.send_prompt", side_effect=error):
        main(["-c", config_path, "hi"])

    err = capsys.readouterr().err
    assert "sk-abcdefghijklmnopqrstuvwxyz" not in err
    assert "[REDACTED_API_KEY]" in err


def test_keyboard_interrupt(config_path, capsys):
    with patch("aicli.cli.send_prompt", side_effect=KeyboardInterrupt):
        exit_code = main(["-c", config_path, "hi"])

    assert exit_code == EXIT_INTERRUPTED
    assert "Interrupted" in capsys.readouterr().err


# ============================================================================
# Model commands
# ============================================================================


def test_add_model_persists(config_path, capsys):
    exit_code = main(["-c", config_path, "add", "o3-mini"])

    assert exit_code == EXIT_OK
    assert "Model 'o3-mini' added." in capsys.readouterr().out
    assert load_config(config_path).models[-1] == "o3-mini"


def test_add_model_saves_listed_default(tmp_path, capsys):
    """An unlisted default is replaced by the added model in the saved file."""
    path = write_config(
        tmp_path, "api_key = k\ndefault_model = ghost\nmodels = a, b\n"
    )

    exit_code = main(["-c", path, "add", "c"])

    assert exit_code == EXIT_OK
    assert Path(path).read_text(encoding="utf-8").splitlines() == [
        "api_key = k",
        "default_model = c",
        "models = a, b, c",
    ]


def test_add_duplicate_model(config_path, capsys):
    before = Path(config_path).read_bytes()

    exit_code = main(["-c", config_path, "add", "gpt-4.1-nano"])

    assert exit_code == EXIT_USAGE
    assert "already exists" in capsys.readouterr().err
    assert Path(config_path).read_bytes() == before


def test_add_without_name(config_path, capsys):
    exit_code = main(["-c", config_path, "add"])

    assert exit_code == EXIT_USAGE
    assert "Usage: aicli add NAME" in capsys.readouterr().err


def test_model_by_name(config_path, capsys):
    exit_code = main(["-c", config_path, "model", "gpt-4.1-mini"])

    assert exit_code == EXIT_OK
    assert "Default model set to 'gpt-4.1-mini'" in capsys.readouterr().out
    assert load_config(config_path).default_model == "gpt-4.1-mini"


def test_model_unknown_name(config_path, capsys):
    exit_code = main(["-c", config_path, "model", "nope"])

    assert exit_code == EXIT_USAGE
    assert "Available models:" in capsys.readouterr().err
    assert load_config(config_path).default_model == "gpt-4o-mini"


def test_model_menu_selection(config_path, capsys):
    with patch("aicli.cli.prompt_model_selection", return_value=1):
        exit_code = main(["-c", config_path, "model"])

    assert exit_code == EXIT_OK
    assert load_config(config_path).default_model == "gpt-4.1-nano"


def test_model_menu_cancel(config_path, capsys):
    before = Path(config_path).read_bytes()

    with patch("aicli.cli.prompt_model_selection", return_value=None):
        exit_code = main(["-c", config_path, "model"])

    assert exit_code == EXIT_OK
    assert "Cancelled." in capsys.readouterr().out
    assert Path(config_path).read_bytes() == before


def test_remove_default_model(config_path, capsys):
    """Removing the default promotes the new first entry."""
    with patch("aicli.cli.prompt_model_selection", return_value=0):
        exit_code = main(["-c", config_path, "remove"])

    assert exit_code == EXIT_OK
    assert "Model 'gpt-4o-mini' removed." in capsys.readouterr().out
    config = load_config(config_path)
    assert config.models == ["gpt-4.1-nano", "gpt-4.1-mini"]
    assert config.default_model == "gpt-4.1-nano"


# ============================================================================
# Logging
# ============================================================================


def test_log_file_records_events(config_path, tmp_path):
    log_path = tmp_path / "logs" / "aicli.log"

    exit_code = main(["-c", config_path, "-l", str(log_path), "add", "o3-mini"])

    assert exit_code == EXIT_OK
    text = log_path.read_text(encoding="utf-8")
    assert "=== app_start ===" in text
    assert "=== config_saved ===" in text
    assert "=== model_change ===" in text
    assert "=== app_stop ===" in text
