"""Typed exceptions for aicli."""

from __future__ import annotations


class AiCliError(Exception):
    """Base exception for aicli failures."""


# ============================================================================
# Configuration
# ============================================================================


class ConfigError(AiCliError):
    """Raised when the configuration file cannot be used."""


class ConfigNotFoundError(ConfigError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Configuration file not found: {path}")
        self.path = path


class MissingCredentialError(ConfigError):
    def __init__(self, path: str) -> None:
        super().__init__(
            f"API key is missing or not set in {path}. "
            "Please edit the file and set your API key"
        )
        self.path = path


# ============================================================================
# Model list mutations
# ============================================================================


class ModelListError(ValueError, AiCliError):
    """User-input validation errors on model list changes."""


class UnknownModelError(ModelListError):
    def __init__(self, name: str, models: list[str]) -> None:
        available = ", ".join(models) if models else "(none)"
        super().__init__(
            f"Model '{name}' not found in configuration. Available models: {available}"
        )
        self.name = name


class DuplicateModelError(ModelListError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Model '{name}' already exists.")
        self.name = name


class ModelIndexError(ModelListError):
    def __init__(self, index: int, size: int) -> None:
        if size == 0:
            message = "No models configured"
        else:
            message = f"Model index {index} is out of range (0-{size - 1})"
        super().__init__(message)
        self.index = index
        self.size = size


class InvalidModelNameError(ModelListError):
    """Raised when a model name is empty after trimming."""


class InvalidSelectionError(ModelListError):
    def __init__(self, selection: str, size: int) -> None:
        super().__init__(f"Invalid selection '{selection}'. Choose 1-{size}")
        self.selection = selection


# ============================================================================
# Chat request / stream
# ============================================================================


class ChatError(AiCliError):
    """Raised when a chat completion call fails."""


class RequestFailedError(ChatError):
    """Raised when the request could not be sent or timed out."""


class APIError(ChatError):
    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API request failed with status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class StreamReadError(ChatError):
    """Raised when the response body cannot be read to completion."""


class LineTooLongError(StreamReadError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Stream line exceeds {limit} bytes")
        self.limit = limit
