"""Shared logging setup.

SafeStreamHandler tolerates a closed stdout (background runs, uvicorn
reloads); configure_logging installs it on the root logger, optionally
alongside a rotating log file.
"""
import logging
import logging.handlers
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that ignores broken pipe and closed file errors."""

    def emit(self, record):
        try:
            super().emit(record)
        except BrokenPipeError:
            pass  # stdout closed
        except ValueError:
            pass  # I/O operation on closed file


def configure_logging(level=logging.INFO, log_file: Optional[str] = None):
    """Configure the root logger.

    Safe to call multiple times: a handler type already present is not
    added again.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path for a 10MB x 3 rotating file handler
    """
    logger = logging.getLogger()
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, SafeStreamHandler) for h in logger.handlers):
        handler = SafeStreamHandler()
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    if log_file and not any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    ):
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=3,
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
