"""Preferred key order for structured log events."""

from __future__ import annotations

DEFAULT_EVENT_KEY_ORDER = ["ts", "ts_utc", "level", "logger"]

LOG_PATH_FIELDS = {
    "config_file",
    "log_file",
}

EVENT_KEY_ORDER: dict[str, list[str]] = {
    # Application lifecycle
    "app_start": [
        "ts",
        "level",
        "command",
        "config_file",
        "log_file",
    ],
    "app_stop": [
        "ts",
        "level",
        "reason",
        "exit_code",
        "uptime_ms",
        "error_type",
        "error",
    ],
    # Configuration
    "config_loaded": [
        "ts",
        "level",
        "config_file",
        "base_url",
        "default_model",
        "model_count",
        "timeout",
        "has_system_prompt",
        "uses_proxy",
    ],
    "config_created": [
        "ts",
        "level",
        "config_file",
    ],
    "config_saved": [
        "ts",
        "level",
        "config_file",
        "default_model",
        "model_count",
        "replaced_keys",
        "appended_keys",
    ],
    "model_change": [
        "ts",
        "level",
        "action",
        "model",
        "default_model",
        "model_count",
    ],
    # AI interaction
    "ai_request": [
        "ts",
        "level",
        "model",
        "http_url",
        "message_count",
        "input_chars",
        "has_system_prompt",
        "timeout",
    ],
    "ai_response": [
        "ts",
        "level",
        "model",
        "latency_ms",
        "ttft_ms",
        "fragment_count",
        "output_chars",
    ],
    "ai_error": [
        "ts",
        "level",
        "model",
        "latency_ms",
        "http_method",
        "http_url",
        "http_version",
        "http_status",
        "http_reason",
        "error_type",
        "error",
    ],
    "stream_line_skipped": [
        "ts",
        "level",
        "reason",
        "line_chars",
        "line",
    ],
    "httpx_request": [
        "ts",
        "level",
        "logger",
        "http_method",
        "http_url",
        "http_version",
        "http_status",
        "http_reason",
    ],
}
