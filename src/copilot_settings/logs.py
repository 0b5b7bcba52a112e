"""Logging setup for the CLI and the settings TUI."""

from __future__ import annotations

import logging
import time
from pathlib import Path

DEBUG_LOG_FILE = "copilot_settings_debug.log"


class UTCFormatter(logging.Formatter):
    converter = time.gmtime


def configure_logging(debug: bool = False, log_file: Path | str | None = None) -> None:
    """Set the ``copilot_settings`` log level; in debug mode also trace to a file.

    The debug trace goes to a file rather than the console so it does not
    draw over the TUI.
    """
    root = logging.getLogger("copilot_settings")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if not debug:
        root.setLevel(logging.WARNING)
        return

    root.setLevel(logging.DEBUG)
    handler = logging.FileHandler(log_file or DEBUG_LOG_FILE, encoding="utf-8")
    handler.setFormatter(
        UTCFormatter(
            fmt="%(asctime)s.%(msecs)03dZ [%(levelname)-8s] [%(name)s:%(lineno)d] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    root.addHandler(handler)
    root.debug("debug trace started")
