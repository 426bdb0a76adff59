"""Incremental decoder for chat-completion event streams.

The response body arrives as arbitrary byte chunks. Decoding is a lazy
pipeline of generators:

    byte chunks -> lines -> StreamEvent -> content fragments

Only ``data: `` lines matter. ``data: [DONE]`` ends the stream; any other
payload is parsed as JSON and the first choice's ``delta.content`` is
emitted. Payloads that do not parse are skipped, since providers are known
to interleave keep-alives and partial records. Running out of input without
the sentinel is a normal end of stream.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Literal

import httpx

from .constants import MAX_STREAM_LINE_BYTES, STREAM_DATA_PREFIX, STREAM_DONE_SENTINEL
from .errors import LineTooLongError, StreamReadError
from .logging import log_event, summarize_text


@dataclass(frozen=True, slots=True)
class StreamEvent:
    """One decoded stream event: a content delta or the end marker."""

    kind: Literal["content", "done"]
    content: str = ""

    @property
    def is_done(self) -> bool:
        return self.kind == "done"


DONE_EVENT = StreamEvent(kind="done")


def _next_chunk(chunks: Iterator[bytes]) -> bytes | None:
    """Pull one chunk, translating transport failures to StreamReadError.

    Timeouts propagate unchanged: the caller reports them as a failed
    request, the same as a timeout before the body started.
    """
    try:
        return next(chunks)
    except StopIteration:
        return None
    except httpx.TimeoutException:
        raise
    except (httpx.TransportError, OSError) as e:
        raise StreamReadError(f"Error reading stream: {e}") from e


def _decode_line(raw: bytes) -> str:
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw.decode("utf-8", errors="replace")


def iter_lines(
    chunks: Iterable[bytes],
    max_line_bytes: int = MAX_STREAM_LINE_BYTES,
) -> Iterator[str]:
    """Reassemble newline-terminated text lines from byte chunks.

    A trailing ``\\r`` is dropped from each line. A final line without a
    newline is still yielded at end of input.

    Raises:
        LineTooLongError: If a single line grows beyond ``max_line_bytes``
        StreamReadError: If the underlying source fails while reading
        httpx.TimeoutException: If the source times out (not wrapped)
    """
    source = iter(chunks)
    buffer = bytearray()
    scan_from = 0

    while True:
        chunk = _next_chunk(source)
        if chunk is None:
            break
        buffer.extend(chunk)

        while True:
            newline_at = buffer.find(b"\n", scan_from)
            if newline_at == -1:
                scan_from = len(buffer)
                if len(buffer) > max_line_bytes:
                    raise LineTooLongError(max_line_bytes)
                break
            if newline_at > max_line_bytes:
                raise LineTooLongError(max_line_bytes)
            raw = bytes(buffer[:newline_at])
            del buffer[: newline_at + 1]
            scan_from = 0
            yield _decode_line(raw)

    if buffer:
        yield _decode_line(bytes(buffer))


def _skip_line(reason: str, payload: str) -> None:
    log_event(
        "stream_line_skipped",
        level=logging.DEBUG,
        reason=reason,
        line_chars=len(payload),
        line=summarize_text(payload),
    )


def parse_data_payload(payload: str) -> StreamEvent | None:
    """Parse one ``data:`` JSON payload into a content event.

    Returns None when the payload carries no choices or cannot be parsed.
    """
    try:
        record: Any = json.loads(payload)
    except ValueError:
        _skip_line("invalid_json", payload)
        return None

    if not isinstance(record, dict):
        _skip_line("not_an_object", payload)
        return None

    choices = record.get("choices")
    if choices is None:
        return None
    if not isinstance(choices, list):
        _skip_line("invalid_choices", payload)
        return None
    if not choices:
        return None

    first = choices[0]
    if not isinstance(first, dict):
        _skip_line("invalid_choice", payload)
        return None

    delta = first.get("delta")
    if delta is None:
        return StreamEvent(kind="content")
    if not isinstance(delta, dict):
        _skip_line("invalid_delta", payload)
        return None

    content = delta.get("content")
    if content is None:
        return StreamEvent(kind="content")
    if not isinstance(content, str):
        _skip_line("invalid_content", payload)
        return None
    return StreamEvent(kind="content", content=content)


def decode_events(lines: Iterable[str]) -> Iterator[StreamEvent]:
    """Turn stream lines into events, stopping right after the sentinel."""
    for line in lines:
        if not line.startswith(STREAM_DATA_PREFIX):
            continue
        payload = line[len(STREAM_DATA_PREFIX):]
        if payload.strip() == STREAM_DONE_SENTINEL:
            yield DONE_EVENT
            return
        event = parse_data_payload(payload)
        if event is not None:
            yield event


def iter_fragments(
    chunks: Iterable[bytes],
    max_line_bytes: int = MAX_STREAM_LINE_BYTES,
) -> Iterator[str]:
    """Yield content fragments from a raw response body, in arrival order.

    Ends at ``[DONE]`` (no further input is read) or when the body is
    exhausted.
    """
    for event in decode_events(iter_lines(chunks, max_line_bytes)):
        if event.is_done:
            return
        yield event.content
