"""
Logging configuration for the Task Tracker.
"""

import logging
import sys


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Send log records to stderr with a timestamped format.

    Call this once at startup, before the first log message.

    Args:
        level: Level name (e.g. "DEBUG") or number for the root logger.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Drop pre-existing handlers to avoid duplicates on reload.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    logging.captureWarnings(True)
