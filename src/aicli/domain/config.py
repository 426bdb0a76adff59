"""Typed configuration model used at config I/O boundaries."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..constants import DEFAULT_BASE_URL, DEFAULT_MODEL
from ..errors import (
    DuplicateModelError,
    InvalidModelNameError,
    ModelIndexError,
    UnknownModelError,
)
from ..timeouts import DEFAULT_REQUEST_TIMEOUT_SEC


@dataclass(slots=True)
class Configuration:
    """Resolved runtime configuration consumed by the CLI and chat client.

    A loaded file may name a ``default_model`` that is not in ``models``.
    Every successful model list change leaves ``default_model`` inside
    ``models`` again (or empty when the list is empty). None of them persist;
    callers save explicitly after a successful change.
    """

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    default_model: str = DEFAULT_MODEL
    models: list[str] = field(default_factory=lambda: [DEFAULT_MODEL])
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT_SEC
    system_prompt: str = ""
    proxy_url: str = ""

    def set_default(self, name: str) -> None:
        """Make an existing model the default."""
        if name not in self.models:
            raise UnknownModelError(name, list(self.models))
        self.default_model = name

    def add_model(self, name: str) -> str:
        """Append a model.

        The new model also becomes the default when the current default is
        empty or not in the list.

        Returns:
            The trimmed model name that was added.
        """
        name = name.strip()
        if not name:
            raise InvalidModelNameError("Model name cannot be empty")
        if name in self.models:
            raise DuplicateModelError(name)
        self.models.append(name)
        if self.default_model not in self.models:
            self.default_model = name
        return name

    def remove_model(self, index: int) -> str:
        """Remove the model at a zero-based index.

        If the default is no longer in the list afterwards (it was removed,
        or was never listed), the new first entry becomes the default, or
        the default is cleared when the list is empty.

        Returns:
            The removed model name.
        """
        if index < 0 or index >= len(self.models):
            raise ModelIndexError(index, len(self.models))
        removed = self.models.pop(index)
        if self.default_model not in self.models:
            self.default_model = self.models[0] if self.models else ""
        return removed
