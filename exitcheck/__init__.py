"""ExitCheck - leave-home checklist reminders that learn from your exits."""

from __future__ import annotations

import logging
import sys

__version__ = "0.1.0"


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for a host application.

    The library itself never installs handlers; hosts call this once at
    startup if they have no logging setup of their own.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


__all__ = ["__version__", "setup_logging"]
