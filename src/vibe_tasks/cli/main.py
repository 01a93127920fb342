# src/vibe_tasks/cli/main.py

"""
CLI entrypoint.

One invocation = one command: set up logging, then hand argv to the typer app.
The app loads the store, runs the command and saves (for mutating commands).

Exit codes: 0 success, 1 task error (nothing written), 2 usage error.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..logging_setup import setup_logging
from .commands import app


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=getattr(settings, "log_dir", None), console_level=console_level)

    app(args=argv, prog_name="vibe-tasks")


if __name__ == "__main__":
    main()
