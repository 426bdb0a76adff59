"""Pytest configuration and fixtures for aicli tests."""

import logging

import pytest

from aicli.domain.config import Configuration
from config_helpers import SAMPLE_CONFIG_TEXT, write_config


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo global logging state changed by setup_logging()."""
    logging.disable(logging.NOTSET)
    yield
    logging.disable(logging.NOTSET)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def config_path(tmp_path):
    """Write the sample config file and return its path as a string."""
    return write_config(tmp_path, SAMPLE_CONFIG_TEXT)


@pytest.fixture
def sample_config():
    """In-memory configuration pointing at a fake endpoint."""
    return Configuration(
        api_key="sk-test-key-0123456789",
        base_url="https://example.test/v1",
        default_model="gpt-4o-mini",
        models=["gpt-4o-mini", "gpt-4.1-nano"],
        request_timeout=30,
        system_prompt="You are terse.",
    )
