"""Application-level constants for aicli.

This module keeps only cross-cutting app/file/wire constants.
"""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "aicli"

# ============================================================================
# Configuration file
# ============================================================================

CONFIG_FILE_NAME = ".ai_cli_config"
DEFAULT_CONFIG_PATH = f"~/{CONFIG_FILE_NAME}"

CONFIG_COMMENT_PREFIX = "#"
CONFIG_KEY_VALUE_SEPARATOR = "="
CONFIG_VALUE_QUOTES = "\"'"

# Written into new config files; a key equal to this is treated as missing.
API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"
TEMPLATE_MODELS = ("gpt-4o-mini", "gpt-4.1-nano", "gpt-4.1-mini")

# Managed keys are the only ones save_config ever rewrites.
KEY_DEFAULT_MODEL = "default_model"
KEY_MODELS = "models"
MANAGED_KEYS = (KEY_DEFAULT_MODEL, KEY_MODELS)
MODELS_SEPARATOR = ", "

# ============================================================================
# Chat completions wire format
# ============================================================================

CHAT_COMPLETIONS_PATH = "/chat/completions"
STREAM_DATA_PREFIX = "data: "
STREAM_DONE_SENTINEL = "[DONE]"

# Longest single stream line accepted before failing (10 MiB).
MAX_STREAM_LINE_BYTES = 10 * 1024 * 1024

# ============================================================================
# Process exit codes
# ============================================================================

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_CONFIG_CREATED = 2
EXIT_CONFIG_ERROR = 3
EXIT_REQUEST_FAILED = 4
EXIT_API_ERROR = 5
EXIT_STREAM_ERROR = 6
EXIT_INTERRUPTED = 130
