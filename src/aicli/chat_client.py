"""Chat completion client for OpenAI-compatible endpoints.

One streaming POST per call. Fragments are written to the output sink as
soon as they are decoded; nothing is buffered until the reply completes.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Any, Optional, TextIO

import httpx

from .constants import CHAT_COMPLETIONS_PATH
from .domain.config import Configuration
from .errors import APIError, ChatError, RequestFailedError
from .logging import (
    estimate_message_chars,
    extract_http_error_context,
    log_event,
    redact_proxy_url,
)
from .streaming import iter_fragments
from .time_utils import elapsed_ms
from .timeouts import build_httpx_timeout, format_timeout


def build_messages(system_prompt: str, prompt: str) -> list[dict[str, str]]:
    """Build the message list: optional system message, then the user prompt."""
    messages: list[dict[str, str]] = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": prompt})
    return messages


def build_chat_request(config: Configuration, prompt: str) -> dict[str, Any]:
    """Build the JSON body for a streaming chat completion."""
    return {
        "model": config.default_model,
        "messages": build_messages(config.system_prompt, prompt),
        "stream": True,
    }


def build_headers(api_key: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def chat_completions_url(base_url: str) -> str:
    return base_url.rstrip("/") + CHAT_COMPLETIONS_PATH


def create_http_client(config: Configuration) -> httpx.Client:
    """Create the httpx client, routed through ``proxy_url`` when set.

    Raises:
        RequestFailedError: If the proxy URL is not usable
    """
    kwargs: dict[str, Any] = {"timeout": build_httpx_timeout(config.request_timeout)}
    if config.proxy_url:
        kwargs["proxy"] = config.proxy_url
    try:
        return httpx.Client(**kwargs)
    except (ValueError, httpx.InvalidURL) as e:
        raise RequestFailedError(
            f"Invalid proxy_url {redact_proxy_url(config.proxy_url)}: {e}"
        ) from e


def _write_stream(response: httpx.Response, out: TextIO) -> tuple[list[str], float | None]:
    """Forward decoded fragments to ``out``; always finish with one newline."""
    fragments: list[str] = []
    first_fragment_at: float | None = None
    try:
        for fragment in iter_fragments(response.iter_bytes()):
            if first_fragment_at is None:
                first_fragment_at = time.perf_counter()
            out.write(fragment)
            out.flush()
            fragments.append(fragment)
    finally:
        out.write("\n")
        out.flush()
    return fragments, first_fragment_at


def _stream_completion(
    client: httpx.Client,
    config: Configuration,
    url: str,
    body: dict[str, Any],
    out: TextIO,
    started: float,
) -> str:
    try:
        with client.stream(
            "POST",
            url,
            json=body,
            headers=build_headers(config.api_key),
            timeout=build_httpx_timeout(config.request_timeout),
        ) as response:
            if response.status_code != httpx.codes.OK:
                error_body = response.read().decode("utf-8", errors="replace")
                raise APIError(response.status_code, error_body)

            fragments, first_fragment_at = _write_stream(response, out)
    except httpx.TimeoutException as e:
        raise RequestFailedError(
            f"Request timed out after {format_timeout(config.request_timeout)}: {e}"
        ) from e
    except httpx.HTTPError as e:
        raise RequestFailedError(f"Error making request: {e}") from e

    reply = "".join(fragments)
    log_event(
        "ai_response",
        level=logging.INFO,
        model=config.default_model,
        latency_ms=elapsed_ms(started),
        ttft_ms=(
            round((first_fragment_at - started) * 1000, 1)
            if first_fragment_at is not None
            else None
        ),
        fragment_count=len(fragments),
        output_chars=len(reply),
    )
    return reply


def send_prompt(
    config: Configuration,
    prompt: str,
    out: Optional[TextIO] = None,
    client: Optional[httpx.Client] = None,
) -> str:
    """Send ``prompt`` and stream the reply to ``out`` (stdout by default).

    Args:
        config: Resolved configuration (model, endpoint, credential, ...)
        prompt: User prompt, sent verbatim
        out: Text sink for fragments
        client: Optional preconfigured httpx client; closed only if created here

    Returns:
        The full reply text

    Raises:
        APIError: If the endpoint answers with a non-200 status
        RequestFailedError: If the request cannot be sent or times out
        StreamReadError: If the response body fails mid-stream
    """
    if out is None:
        out = sys.stdout

    body = build_chat_request(config, prompt)
    url = chat_completions_url(config.base_url)

    log_event(
        "ai_request",
        level=logging.INFO,
        model=config.default_model,
        http_url=url,
        message_count=len(body["messages"]),
        input_chars=estimate_message_chars(body["messages"]),
        has_system_prompt=bool(config.system_prompt),
        timeout=config.request_timeout,
    )

    started = time.perf_counter()
    owns_client = client is None
    try:
        if client is None:
            client = create_http_client(config)
        return _stream_completion(client, config, url, body, out, started)
    except ChatError as e:
        context = extract_http_error_context(e.__cause__) if e.__cause__ else {}
        if isinstance(e, APIError):
            context.setdefault("http_status", e.status_code)
        log_event(
            "ai_error",
            level=logging.ERROR,
            model=config.default_model,
            latency_ms=elapsed_ms(started),
            error_type=type(e).__name__,
            error=str(e),
            **context,
        )
        raise
    finally:
        if owns_client and client is not None:
            client.close()
