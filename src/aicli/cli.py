"""CLI bootstrap entry point for aicli."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional

from .chat_client import send_prompt
from .config_store import open_config, save_config
from .constants import (
    APP_NAME,
    EXIT_API_ERROR,
    EXIT_CONFIG_CREATED,
    EXIT_CONFIG_ERROR,
    EXIT_INTERRUPTED,
    EXIT_OK,
    EXIT_REQUEST_FAILED,
    EXIT_STREAM_ERROR,
    EXIT_USAGE,
)
from .domain.config import Configuration
from .errors import (
    AiCliError,
    APIError,
    ChatError,
    ConfigError,
    ModelListError,
    StreamReadError,
)
from .logging import log_event, sanitize_error_message, setup_logging
from .path_utils import default_config_path, map_path
from .time_utils import elapsed_ms
from .ui.model_menu import prompt_model_selection

COMMANDS = ("model", "add", "remove")


def _map_cli_arg(path: str | None, arg_name: str) -> str | None:
    """Map CLI path argument with descriptive error messages.

    Raises:
        ValueError: With descriptive message including arg_name
    """
    if path is None:
        return None
    try:
        return map_path(path)
    except ValueError as e:
        raise ValueError(f"Invalid {arg_name} path: {e}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "A fast and simple command-line AI assistant for OpenAI-compatible APIs.\n"
            "The prompt is read from the arguments, or from stdin when piped."
        ),
        epilog=(
            "commands:\n"
            "  model [NAME]  select the default model (menu when NAME is omitted)\n"
            "  add NAME      add a model to the configured list\n"
            "  remove        remove a model from the list (menu)"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-m",
        "--model",
        help="Model to use for this prompt (overrides the configured default)",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to config file (default: ~/.ai_cli_config)",
    )
    parser.add_argument("-l", "--log", help="Path to log file (optional)")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug events, including skipped stream lines (needs --log)",
    )
    parser.add_argument("words", nargs="*", help="Prompt text, or a command")
    return parser


def _exit_code_for(error: AiCliError) -> int:
    if isinstance(error, ConfigError):
        return EXIT_CONFIG_ERROR
    if isinstance(error, ModelListError):
        return EXIT_USAGE
    if isinstance(error, APIError):
        return EXIT_API_ERROR
    if isinstance(error, StreamReadError):
        return EXIT_STREAM_ERROR
    if isinstance(error, ChatError):
        return EXIT_REQUEST_FAILED
    return EXIT_USAGE


def _read_prompt(words: list[str]) -> str:
    """Join prompt words, or read piped stdin when there are none."""
    if words:
        return " ".join(words)
    stdin = sys.stdin
    if stdin is None or stdin.isatty():
        return ""
    return stdin.read().strip()


def _print_config_created(path: str) -> None:
    print(
        f"Configuration file not found. Created default config at: {path}",
        file=sys.stderr,
    )
    print(
        f"\nIMPORTANT: Please edit '{path}' to add your API key and customize "
        "settings. Then run the command again.",
        file=sys.stderr,
    )


def _log_model_change(action: str, model: str, config: Configuration) -> None:
    log_event(
        "model_change",
        level=logging.INFO,
        action=action,
        model=model,
        default_model=config.default_model,
        model_count=len(config.models),
    )


def _cmd_model(config: Configuration, config_path: str, args: list[str]) -> int:
    if len(args) > 1:
        print("Usage: aicli model [NAME]", file=sys.stderr)
        return EXIT_USAGE

    if args:
        name = args[0]
    else:
        index = prompt_model_selection(
            config,
            f"Select default model number (current: {config.default_model}) "
            "[Enter to cancel]: ",
        )
        if index is None:
            print("Cancelled.")
            return EXIT_OK
        name = config.models[index]

    config.set_default(name)
    save_config(config_path, config)
    _log_model_change("set_default", name, config)
    print(f"Default model set to '{name}'")
    return EXIT_OK


def _cmd_add(config: Configuration, config_path: str, args: list[str]) -> int:
    if len(args) != 1:
        print("Usage: aicli add NAME", file=sys.stderr)
        return EXIT_USAGE

    name = config.add_model(args[0])
    save_config(config_path, config)
    _log_model_change("add", name, config)
    print(f"Model '{name}' added.")
    return EXIT_OK


def _cmd_remove(config: Configuration, config_path: str, args: list[str]) -> int:
    if args:
        print("Usage: aicli remove", file=sys.stderr)
        return EXIT_USAGE

    index = prompt_model_selection(
        config, "Select model number to remove [Enter to cancel]: "
    )
    if index is None:
        print("Cancelled.")
        return EXIT_OK

    removed = config.remove_model(index)
    save_config(config_path, config)
    _log_model_change("remove", removed, config)
    print(f"Model '{removed}' removed.")
    return EXIT_OK


def _run(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    config_path: str,
    command: Optional[str],
    command_args: list[str],
) -> int:
    outcome = open_config(config_path)
    if outcome.status == "created":
        _print_config_created(outcome.path)
        return EXIT_CONFIG_CREATED

    config = outcome.config
    assert config is not None

    if command == "model":
        return _cmd_model(config, config_path, command_args)
    if command == "add":
        return _cmd_add(config, config_path, command_args)
    if command == "remove":
        return _cmd_remove(config, config_path, command_args)

    if args.model:
        config.default_model = args.model

    prompt = _read_prompt(command_args)
    if not prompt:
        parser.print_help()
        return EXIT_OK

    send_prompt(config, prompt)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the aicli command."""
    parser = _build_parser()
    args = parser.parse_intermixed_args(argv)
    app_started = time.perf_counter()

    try:
        config_path = _map_cli_arg(args.config, "config") or default_config_path()
        log_path = _map_cli_arg(args.log, "log")
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(log_path, logging.DEBUG if args.verbose else logging.INFO)

    words: list[str] = list(args.words)
    command: Optional[str] = None
    if words and words[0] in COMMANDS:
        command = words.pop(0)

    log_event(
        "app_start",
        level=logging.INFO,
        command=command or "prompt",
        config_file=config_path,
        log_file=log_path,
    )

    try:
        exit_code = _run(parser, args, config_path, command, words)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        log_event(
            "app_stop",
            level=logging.INFO,
            reason="keyboard_interrupt",
            exit_code=EXIT_INTERRUPTED,
            uptime_ms=elapsed_ms(app_started),
        )
        return EXIT_INTERRUPTED
    except AiCliError as e:
        exit_code = _exit_code_for(e)
        message = sanitize_error_message(str(e))
        print(f"Error: {message}", file=sys.stderr)
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason="error",
            exit_code=exit_code,
            error_type=type(e).__name__,
            error=message,
            uptime_ms=elapsed_ms(app_started),
        )
        return exit_code

    log_event(
        "app_stop",
        level=logging.INFO,
        reason="normal" if exit_code == EXIT_OK else "config_created",
        exit_code=exit_code,
        uptime_ms=elapsed_ms(app_started),
    )
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
