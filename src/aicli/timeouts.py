"""Centralized timeout policy and helpers."""

from __future__ import annotations

import math
from typing import Any

import httpx


DEFAULT_REQUEST_TIMEOUT_SEC = 30

# Connection-phase buckets are capped; read follows the configured timeout.
AI_HTTP_CONNECT_TIMEOUT_SEC = 10.0
AI_HTTP_WRITE_TIMEOUT_SEC = 15.0
AI_HTTP_POOL_TIMEOUT_SEC = 5.0


def parse_timeout_value(raw: str) -> int | None:
    """Parse a config timeout string into positive whole seconds.

    Returns None when the text is not a positive integer so the caller can
    keep its default.
    """
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    if value <= 0:
        return None
    return value


def _normalize_timeout_value(value: Any, fallback: int | float) -> int | float:
    """Normalize timeout-like values to positive finite int/float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        normalized = float(fallback)
    else:
        normalized = float(value)
    if not math.isfinite(normalized) or normalized <= 0:
        normalized = float(fallback)
    if normalized.is_integer():
        return int(normalized)
    return normalized


def build_httpx_timeout(request_timeout_sec: int | float) -> httpx.Timeout:
    """Build httpx timeout config for the chat completions call."""
    timeout_sec = _normalize_timeout_value(
        request_timeout_sec, DEFAULT_REQUEST_TIMEOUT_SEC
    )
    return httpx.Timeout(
        connect=min(AI_HTTP_CONNECT_TIMEOUT_SEC, timeout_sec),
        read=timeout_sec,
        write=min(AI_HTTP_WRITE_TIMEOUT_SEC, timeout_sec),
        pool=min(AI_HTTP_POOL_TIMEOUT_SEC, timeout_sec),
    )


def format_timeout(timeout: int | float) -> str:
    """Format timeout value for user-facing messages."""
    return f"{timeout} seconds"
