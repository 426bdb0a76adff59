"""Plain-text rendering of aicli log records.

Every record becomes one block::

    === config_saved ===
    ts: ...
    level: INFO
    replaced_keys: default_model, models

JSON messages from ``log_event`` are expanded into fields. httpx's own
request lines are recognized and turned into ``httpx_request`` blocks; any
other record is shown with its logger name and message.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from ..time_utils import utc_now_iso
from .schema import DEFAULT_EVENT_KEY_ORDER, EVENT_KEY_ORDER

HTTPX_REQUEST_FORMAT = 'HTTP Request: %s %s "%s %d %s"'


def _decode_event_payload(message: str) -> Optional[dict[str, Any]]:
    """Return the event dict carried by a ``log_event`` message, if any."""
    if not (message.startswith("{") and message.endswith("}")):
        return None
    try:
        payload = json.loads(message)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _httpx_request_fields(record: logging.LogRecord) -> Optional[dict[str, Any]]:
    if record.name != "httpx" or str(record.msg) != HTTPX_REQUEST_FORMAT:
        return None
    if not isinstance(record.args, tuple) or len(record.args) != 5:
        return None
    method, url, version, status, reason = record.args
    return {
        "event": "httpx_request",
        "http_method": str(method),
        "http_url": str(url),
        "http_version": str(version),
        "http_status": status if isinstance(status, int) else str(status),
        "http_reason": str(reason),
    }


def _render_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        text = ", ".join(str(item) for item in value)
    else:
        text = str(value)
    return text.replace("\n", "\\n")


class StructuredTextFormatter(logging.Formatter):
    """Render log records as ``=== event ===`` blocks separated by blank lines."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._separator = ""

    @staticmethod
    def _field_order(event_name: str, fields: dict[str, Any]) -> list[str]:
        preferred = EVENT_KEY_ORDER.get(event_name, DEFAULT_EVENT_KEY_ORDER)
        present = {k for k, v in fields.items() if v is not None}
        leading = [k for k in preferred if k in present]
        return leading + sorted(present.difference(preferred))

    def _fields_for(self, record: logging.LogRecord) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "ts_utc": utc_now_iso(),
            "level": record.levelname,
            "logger": record.name,
        }
        message = record.getMessage()
        extra = _decode_event_payload(message) or _httpx_request_fields(record)
        if extra is None:
            extra = {"event": record.name, "message": message}
        fields.update(extra)
        return fields

    def format(self, record: logging.LogRecord) -> str:
        fields = self._fields_for(record)
        event_name = str(fields.pop("event", record.name))

        lines = [f"=== {event_name} ==="]
        lines.extend(
            f"{key}: {_render_value(fields[key])}"
            for key in self._field_order(event_name, fields)
        )
        if record.exc_info:
            lines.append("traceback:")
            lines.append(self.formatException(record.exc_info))

        block = self._separator + "\n".join(lines)
        self._separator = "\n"
        return block
