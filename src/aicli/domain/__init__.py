"""Typed domain models for aicli."""

from .config import Configuration

__all__ = ["Configuration"]
