"""Path mapping utilities for CLI path arguments.

Supported forms:
- ~ or ~/... → User home directory
- Native absolute paths → Used as-is
- Relative paths without prefix → Error (to avoid ambiguity)
"""

from pathlib import Path
import unicodedata

from .constants import DEFAULT_CONFIG_PATH


def has_home_path_prefix(path: str) -> bool:
    """Return True when path uses the supported home prefix forms."""
    return path == "~" or path.startswith("~/") or path.startswith("~\\")


def _normalize_path_input(path: str) -> str:
    """Normalize input text to NFC and reject NUL characters."""
    if "\x00" in path:
        raise ValueError("Path contains NUL character")
    return unicodedata.normalize("NFC", path)


def map_path(path: str) -> str:
    """Map a CLI path argument to an absolute path string.

    Args:
        path: Path to map (``~``-prefixed or absolute)

    Returns:
        Absolute path string

    Raises:
        ValueError: If path is relative without prefix or escapes home

    Examples:
        >>> map_path("~/.ai_cli_config")
        '/home/username/.ai_cli_config'

        >>> map_path("relative/config")
        ValueError: Relative paths without prefix are not supported
    """
    path = _normalize_path_input(path)

    if has_home_path_prefix(path):
        home_dir = Path.home().resolve()
        if path == "~":
            return str(home_dir)

        resolved = (home_dir / path[2:]).resolve()
        try:
            resolved.relative_to(home_dir)
        except ValueError:
            raise ValueError(f"Path escapes home directory: {path}")
        return str(resolved)

    if Path(path).is_absolute():
        return str(Path(path).resolve())

    raise ValueError(
        f"Relative paths without prefix are not supported: {path}\n"
        f"Use '~/' for home directory or provide an absolute path"
    )


def default_config_path() -> str:
    """Return the absolute path of the per-user configuration file."""
    return map_path(DEFAULT_CONFIG_PATH)
