"""
Logging setup for the MCP server.

stdout carries the stdio transport, so console logging goes to stderr.
An optional append-only log file mirrors all records; it is best effort and
never interrupts the server.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class BestEffortFileHandler(logging.FileHandler):
    """Append-only file handler whose write failures are ignored."""

    def __init__(self, filename: str) -> None:
        super().__init__(filename, mode="a", encoding="utf-8", delay=True)

    def emit(self, record: logging.LogRecord) -> None:
        # The file is opened lazily on first emit, outside StreamHandler's guard.
        try:
            super().emit(record)
        except OSError:
            self.handleError(record)

    def handleError(self, record: logging.LogRecord) -> None:
        # Log file problems must not reach the transport or the caller.
        pass


def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    Safe to call more than once; the file handler is replaced, not duplicated.

    Args:
        debug: Log at DEBUG instead of INFO.
        log_file: Path of the append-only log file, or None/empty to disable.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    if not any(
        isinstance(handler, logging.StreamHandler)
        and getattr(handler, "stream", None) is sys.stderr
        for handler in root.handlers
    ):
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(stderr_handler)

    for handler in list(root.handlers):
        if isinstance(handler, BestEffortFileHandler):
            root.removeHandler(handler)
            handler.close()

    if log_file:
        file_handler = BestEffortFileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
