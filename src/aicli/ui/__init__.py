"""Console interaction helpers."""

from .model_menu import format_model_list, prompt_model_selection

__all__ = ["format_model_list", "prompt_model_selection"]
