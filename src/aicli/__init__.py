"""aicli - stream chat completions from OpenAI-compatible APIs to the terminal."""

__version__ = "0.1.0"
