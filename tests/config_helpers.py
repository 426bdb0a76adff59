"""Shared config-file text and builders for tests."""

SAMPLE_CONFIG_TEXT = """\
# Configuration for the AI CLI Tool

# Your API Key (REQUIRED)
api_key = sk-test-key-0123456789

base_url = https://example.test/v1/

# Default model to use if -m is not specified
default_model = gpt-4o-mini

# Comma-separated list of available models you want to use
models = gpt-4o-mini, gpt-4.1-nano, gpt-4.1-mini

request_timeout = 45
system_prompt = You are terse.
theme = dark
proxy_url =
"""


def write_config(tmp_path, text, name=".ai_cli_config"):
    """Write config text to tmp_path and return the path as a string."""
    path = tmp_path / name
    path.write_bytes(text.encode("utf-8"))
    return str(path)
