"""Platform-detected default system prompt text.

The prompt names the host platform (and Linux distribution when
``/etc/os-release`` is readable) so answers use the right shell commands.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

OS_RELEASE_PATH = "/etc/os-release"

_GUIDANCE = (
    "Provide concise answers and commands. Be direct, no filler. "
    "Plain text style. Put commands on their own lines for easy copying. "
    "Add short comments to commands if needed. Prefer single-line commands. "
    "Be alert to dangerous commands."
)

GENERIC_SYSTEM_PROMPT = (
    "You are a Linux CLI assistant for technical user. "
    "Provide concise answers and commands. Be direct, no filler. "
    "Plain text style (No markdown). Put commands on their own lines for easy "
    "copying. Add short comments to commands if needed. Prefer single-line "
    "commands. But be alert to dangerous commands."
)


def read_pretty_os_name(os_release_path: str = OS_RELEASE_PATH) -> str | None:
    """Return PRETTY_NAME from an os-release file, or None if unavailable."""
    try:
        text = Path(os_release_path).read_text(encoding="utf-8")
    except OSError:
        return None
    for line in text.splitlines():
        if line.startswith("PRETTY_NAME="):
            name = line[len("PRETTY_NAME="):].strip('"')
            return name or None
    return None


def _windows_shell() -> str:
    comspec = os.environ.get("COMSPEC", "").lower()
    return "cmd" if "cmd" in comspec else "PowerShell"


def detect_system_prompt(
    platform: str | None = None,
    os_release_path: str = OS_RELEASE_PATH,
) -> str:
    """Build the default system prompt for the given (or current) platform."""
    platform = platform or sys.platform

    if platform == "darwin":
        return f"You are a macOS CLI assistant for technical user. {_GUIDANCE}"

    if platform.startswith("linux"):
        distro = read_pretty_os_name(os_release_path) or "Linux"
        return f"You are a {distro} CLI assistant for technical user. {_GUIDANCE}"

    if platform in ("win32", "cygwin"):
        shell = _windows_shell()
        return (
            f"You are a Windows ({shell}) CLI assistant for technical user. "
            "Provide concise answers and commands. Be direct, no filler. "
            f"Use {shell}-style commands where appropriate. "
            "Put commands on their own lines for easy copying."
        )

    return GENERIC_SYSTEM_PROMPT
