"""Structured logging primitives for aicli."""

from .events import (
    estimate_message_chars,
    extract_http_error_context,
    log_event,
    setup_logging,
    summarize_text,
)
from .formatter import StructuredTextFormatter
from .sanitization import redact_proxy_url, sanitize_error_message
from .schema import DEFAULT_EVENT_KEY_ORDER, EVENT_KEY_ORDER, LOG_PATH_FIELDS

__all__ = [
    "DEFAULT_EVENT_KEY_ORDER",
    "EVENT_KEY_ORDER",
    "LOG_PATH_FIELDS",
    "StructuredTextFormatter",
    "estimate_message_chars",
    "extract_http_error_context",
    "log_event",
    "redact_proxy_url",
    "sanitize_error_message",
    "setup_logging",
    "summarize_text",
]
