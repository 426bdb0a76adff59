"""Configuration file management for aicli.

This module owns the on-disk ``key = value`` configuration file. Loading
overlays recognized keys onto built-in defaults. Saving never re-serializes
the whole document: only the ``default_model`` and ``models`` lines are
replaced in place (or appended when absent), so comments, blank lines,
ordering and unknown keys written by the user survive untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from .constants import (
    API_KEY_PLACEHOLDER,
    CONFIG_COMMENT_PREFIX,
    CONFIG_KEY_VALUE_SEPARATOR,
    CONFIG_VALUE_QUOTES,
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    KEY_DEFAULT_MODEL,
    KEY_MODELS,
    MANAGED_KEYS,
    MODELS_SEPARATOR,
    TEMPLATE_MODELS,
)
from .domain.config import Configuration
from .errors import ConfigError, ConfigNotFoundError, MissingCredentialError
from .logging import log_event
from .system_prompt import detect_system_prompt
from .timeouts import DEFAULT_REQUEST_TIMEOUT_SEC, parse_timeout_value


_DEFAULT_CONFIG_TEMPLATE = """\
# Configuration for the AI CLI Tool

# Your API Key (REQUIRED)
api_key = {api_key}

# Base URL for the OpenAI-compatible API
base_url = {base_url}

# Default model to use if -m is not specified
default_model = {default_model}

# Comma-separated list of available models you want to use
models = {models}

# Request timeout in seconds
request_timeout = {request_timeout}

# System prompt to guide the AI's behavior
system_prompt = {system_prompt}

# Optional: Specify a proxy URL if needed (e.g., http://127.0.0.1:7890)
# Leave blank if you don't need a proxy
proxy_url =
"""


@dataclass(frozen=True, slots=True)
class ConfigOutcome:
    """Result of opening the configuration file.

    ``loaded`` carries a usable configuration. ``created`` means a template
    was just written and the user has to edit it before anything can run.
    """

    status: Literal["loaded", "created"]
    path: str
    config: Optional[Configuration] = None


def parse_models(value: str) -> list[str]:
    """Split a comma-separated model list, dropping empty entries."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _split_config_line(line: str) -> tuple[str, str] | None:
    """Return (key, value) for a ``key = value`` line, or None to skip it."""
    stripped = line.strip()
    if not stripped or stripped.startswith(CONFIG_COMMENT_PREFIX):
        return None
    key, sep, value = stripped.partition(CONFIG_KEY_VALUE_SEPARATOR)
    if not sep:
        return None
    return key.strip(), value.strip().strip(CONFIG_VALUE_QUOTES)


def parse_config_text(text: str, *, system_prompt: str | None = None) -> Configuration:
    """Overlay recognized keys from config text onto the built-in defaults.

    Credential validation is left to ``load_config`` so this stays a pure
    text-to-record transformation.
    """
    config = Configuration(
        base_url=DEFAULT_BASE_URL,
        default_model=DEFAULT_MODEL,
        models=[DEFAULT_MODEL],
        request_timeout=DEFAULT_REQUEST_TIMEOUT_SEC,
        system_prompt=detect_system_prompt() if system_prompt is None else system_prompt,
    )
    models_set = False

    for line in text.splitlines():
        pair = _split_config_line(line)
        if pair is None:
            continue
        key, value = pair

        if key == "api_key":
            config.api_key = value
        elif key == "base_url":
            config.base_url = value
        elif key == KEY_DEFAULT_MODEL:
            config.default_model = value
        elif key == KEY_MODELS:
            models = parse_models(value)
            if models:
                config.models = models
                models_set = True
        elif key == "request_timeout":
            timeout = parse_timeout_value(value)
            if timeout is not None:
                config.request_timeout = timeout
        elif key == "system_prompt":
            config.system_prompt = value
        elif key == "proxy_url":
            config.proxy_url = value

    config.base_url = config.base_url.rstrip("/")
    if not models_set:
        config.models = [config.default_model or DEFAULT_MODEL]
    return config


def _read_config_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        raise ConfigNotFoundError(path)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e


def load_config(path: str) -> Configuration:
    """Load configuration from the key/value file at ``path``.

    Raises:
        ConfigNotFoundError: If the file does not exist
        MissingCredentialError: If api_key is absent or still the placeholder
        ConfigError: If the file exists but cannot be read
    """
    config = parse_config_text(_read_config_text(path))

    if not config.api_key or config.api_key == API_KEY_PLACEHOLDER:
        raise MissingCredentialError(path)

    log_event(
        "config_loaded",
        level=logging.INFO,
        config_file=path,
        base_url=config.base_url,
        default_model=config.default_model,
        model_count=len(config.models),
        timeout=config.request_timeout,
        has_system_prompt=bool(config.system_prompt),
        uses_proxy=bool(config.proxy_url),
    )
    return config


def render_default_config(system_prompt: str) -> str:
    """Render the commented template written on first run."""
    return _DEFAULT_CONFIG_TEMPLATE.format(
        api_key=API_KEY_PLACEHOLDER,
        base_url=DEFAULT_BASE_URL,
        default_model=DEFAULT_MODEL,
        models=MODELS_SEPARATOR.join(TEMPLATE_MODELS),
        request_timeout=DEFAULT_REQUEST_TIMEOUT_SEC,
        system_prompt=system_prompt,
    )


def create_default_config(path: str, system_prompt: str | None = None) -> str:
    """Write the template config with a placeholder credential.

    The template is never usable as-is; callers must stop after this and
    tell the user to edit the file.

    Returns:
        The path that was written.
    """
    if system_prompt is None:
        system_prompt = detect_system_prompt()

    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        config_path.write_text(render_default_config(system_prompt), encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot create configuration file {path}: {e}") from e

    log_event("config_created", level=logging.INFO, config_file=path)
    return path


def open_config(path: str) -> ConfigOutcome:
    """Load the configuration, creating the template when it does not exist.

    Raises:
        MissingCredentialError: If the existing file has no usable api_key
        ConfigError: If the file cannot be read or created
    """
    try:
        config = load_config(path)
    except ConfigNotFoundError:
        create_default_config(path)
        return ConfigOutcome(status="created", path=path)
    return ConfigOutcome(status="loaded", path=path, config=config)


# ============================================================================
# Line-level persistence of managed keys
# ============================================================================


def serialize_managed_values(config: Configuration) -> dict[str, str]:
    """Return the ``key = value`` lines for each managed key, in save order."""
    return {
        KEY_DEFAULT_MODEL: f"{KEY_DEFAULT_MODEL} = {config.default_model}",
        KEY_MODELS: f"{KEY_MODELS} = {MODELS_SEPARATOR.join(config.models)}",
    }


def _line_defines_key(line: str, key: str) -> bool:
    """True when ``line`` assigns ``key`` (leading whitespace ignored)."""
    stripped = line.lstrip()
    if not stripped.startswith(key):
        return False
    return stripped[len(key):].lstrip().startswith(CONFIG_KEY_VALUE_SEPARATOR)


def _split_line_ending(line: str) -> tuple[str, str]:
    body = line.rstrip("\r\n")
    return body, line[len(body):]


def _detect_newline(lines: list[str]) -> str:
    for line in lines:
        _, ending = _split_line_ending(line)
        if ending:
            return ending
    return "\n"


def patch_config_text(
    text: str, replacements: dict[str, str]
) -> tuple[str, list[str], list[str]]:
    """Replace or append one line per key, leaving every other line as-is.

    Each line whose content assigns a key is replaced by that key's new line,
    keeping the original line ending. Keys with no such line are appended at
    the end of the document.

    Returns:
        Tuple of (patched text, replaced keys, appended keys)
    """
    lines = text.splitlines(keepends=True)
    newline = _detect_newline(lines)
    replaced: list[str] = []
    appended: list[str] = []

    for key, new_line in replacements.items():
        found = False
        for i, line in enumerate(lines):
            body, ending = _split_line_ending(line)
            if _line_defines_key(body, key):
                lines[i] = new_line + ending
                found = True
        if found:
            replaced.append(key)
            continue

        if lines and not _split_line_ending(lines[-1])[1]:
            lines[-1] += newline
        lines.append(new_line + newline)
        appended.append(key)

    return "".join(lines), replaced, appended


def save_config(path: str, config: Configuration) -> None:
    """Write ``default_model`` and ``models`` back into the config file.

    The write is not transactional; a failure mid-write can leave the file
    partially updated.

    Raises:
        ConfigNotFoundError: If the file no longer exists
        ConfigError: If the file cannot be read or written
    """
    text = _read_config_text(path)
    values = serialize_managed_values(config)
    patched, replaced, appended = patch_config_text(
        text, {key: values[key] for key in MANAGED_KEYS}
    )

    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(patched)
    except OSError as e:
        raise ConfigError(f"Cannot write configuration file {path}: {e}") from e

    log_event(
        "config_saved",
        level=logging.INFO,
        config_file=path,
        default_model=config.default_model,
        model_count=len(config.models),
        replaced_keys=replaced,
        appended_keys=appended,
    )
