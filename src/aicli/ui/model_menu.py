"""Numbered model menus for the model/remove commands."""

from typing import Optional

from prompt_toolkit import prompt as pt_prompt

from ..domain.config import Configuration
from ..errors import InvalidSelectionError

DEFAULT_MARK = "*"


def format_model_list(config: Configuration) -> list[str]:
    """Format models as numbered lines, marking the current default."""
    lines = []
    for i, model in enumerate(config.models, 1):
        mark = DEFAULT_MARK if model == config.default_model else " "
        lines.append(f"[{i}] {model} {mark}")
    return lines


def prompt_model_selection(config: Configuration, prompt: str) -> Optional[int]:
    """Show the model list and read a 1-based selection.

    Args:
        config: Configuration whose models are listed
        prompt: Prompt text shown after the list

    Returns:
        Zero-based index of the chosen model, or None if the user pressed
        Enter (or Ctrl-D / Ctrl-C) to cancel

    Raises:
        InvalidSelectionError: If input is not a number in range
    """
    print("Available models:")
    for line in format_model_list(config):
        print(line)

    try:
        selection = pt_prompt(prompt).strip()
    except (EOFError, KeyboardInterrupt):
        return None

    if not selection:
        return None

    try:
        number = int(selection)
    except ValueError:
        raise InvalidSelectionError(selection, len(config.models))
    if not 1 <= number <= len(config.models):
        raise InvalidSelectionError(selection, len(config.models))
    return number - 1
