"""Structured event emission and logging helpers."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .formatter import StructuredTextFormatter
from .sanitization import sanitize_error_message
from .schema import LOG_PATH_FIELDS


def _to_log_safe(value: Any) -> Any:
    """Convert values to JSON-serializable, log-safe representations."""
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return sanitize_error_message(value)
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _to_log_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_log_safe(v) for v in value]
    return sanitize_error_message(str(value))


def _resolve_log_path(path_value: str) -> str:
    """Resolve a path-ish string to absolute form for log readability."""
    value = path_value.strip()
    if not value:
        return path_value
    try:
        from ..path_utils import map_path

        return map_path(value)
    except ValueError:
        return path_value


def extract_http_error_context(error: Exception) -> dict[str, Any]:
    """Extract safe HTTP context from an httpx exception when available."""
    context: dict[str, Any] = {}

    # httpx raises RuntimeError from .request/.response when they are unset.
    try:
        request = getattr(error, "request", None)
    except RuntimeError:
        request = None
    try:
        response = getattr(error, "response", None)
    except RuntimeError:
        response = None
    if request is None and response is not None:
        request = getattr(response, "request", None)

    if request is not None:
        method = getattr(request, "method", None)
        if method:
            context["http_method"] = str(method)
        url = getattr(request, "url", None)
        if url:
            context["http_url"] = str(url)

    if response is not None:
        version = getattr(response, "http_version", None)
        if version:
            context["http_version"] = str(version)

        status = getattr(response, "status_code", None)
        if status is not None:
            context["http_status"] = status

        reason = getattr(response, "reason_phrase", None)
        if reason:
            context["http_reason"] = str(reason)
    else:
        status = getattr(error, "status_code", None)
        if status is not None:
            context["http_status"] = status

    return context


def summarize_text(text: Any, limit: int = 200) -> str:
    """Return whitespace-collapsed text for logs, truncated to ``limit``."""
    if text is None:
        return ""
    summary = " ".join(str(text).split())
    if len(summary) > limit:
        return summary[:limit] + "..."
    return summary


def estimate_message_chars(messages: list[dict[str, str]]) -> int:
    """Estimate total character length across chat messages."""
    return sum(len(str(msg.get("content", ""))) for msg in messages)


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured log event."""
    payload = {
        "ts": datetime.now().astimezone().isoformat(),
        "event": event,
    }
    for key, value in fields.items():
        if key in LOG_PATH_FIELDS and isinstance(value, str):
            value = _resolve_log_path(value)
        payload[key] = _to_log_safe(value)
    logging.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def setup_logging(log_file: Optional[str] = None, level: int = logging.INFO) -> None:
    """Set up logging configuration.

    Without a log file, logging is disabled entirely so nothing interleaves
    with streamed output on the terminal.
    """
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_path), encoding="utf-8")
        handler.setFormatter(StructuredTextFormatter())
        logging.disable(logging.NOTSET)
        logging.basicConfig(level=level, handlers=[handler], force=True)
    else:
        logging.disable(logging.CRITICAL)
