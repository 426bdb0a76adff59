"""aicli executable module.

No app-root try/except here: cli.main() is the CLI boundary and already maps
every aicli error to an exit code.
"""

from __future__ import annotations

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
