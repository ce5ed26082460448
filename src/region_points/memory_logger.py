import logging
import os
import sys

from typing import Optional, TextIO, Union

import psutil

LOG_FORMAT = "[%(asctime)s - %(levelname)s - %(memory_usage).2f MB] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_MANAGED_ATTR = "_region_points_memory_handler"


def _get_memory_usage() -> float:
    """Get current memory usage in MB"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class MemoryUsageFilter(logging.Filter):
    """Attach the resident set size of this process to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "memory_usage"):
            record.memory_usage = _get_memory_usage()
        return True


def _make_handler(handler: logging.Handler, fmt: logging.Formatter) -> logging.Handler:
    handler.setFormatter(fmt)
    handler.addFilter(MemoryUsageFilter())
    setattr(handler, _MANAGED_ATTR, True)
    return handler


def remove_managed_memory_handlers(logger: logging.Logger):
    """Detach and close handlers previously added by `configure_memory_logger`."""
    for handler in list(logger.handlers):
        if getattr(handler, _MANAGED_ATTR, False):
            logger.removeHandler(handler)
            handler.close()


def configure_memory_logger(
    logger: Union[str, logging.Logger],
    stream: Optional[TextIO] = None,
    log_file: Optional[str] = None,
    file_mode: str = "w",
    level: int = logging.INFO,
    replace_managed_handlers: bool = False,
) -> list[logging.Handler]:
    """Add handlers whose records carry the current memory usage.

    **Arguments:**

    - `logger`: Logger or logger name to configure.
    - `stream`: Text stream for console output; `None` disables it.
    - `log_file`: Path of a log file to write; `None` disables it.
    - `file_mode`: Mode `log_file` is opened with.
    - `level`: Level set on `logger`.
    - `replace_managed_handlers`: Remove handlers added by an earlier call first.

    **Returns:**

    - The handlers that were added.
    """
    if isinstance(logger, str):
        logger = logging.getLogger(logger)
    if replace_managed_handlers:
        remove_managed_memory_handlers(logger)

    logger.setLevel(level)
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = []
    if stream is not None:
        handlers.append(_make_handler(logging.StreamHandler(stream), fmt))
    if log_file is not None:
        handlers.append(_make_handler(logging.FileHandler(log_file, mode=file_mode), fmt))
    for handler in handlers:
        logger.addHandler(handler)
    return handlers


class MemoryLogger:
    """Thin wrapper logging messages together with memory usage.

    Uses `logger` as is when given. Otherwise looks up `name`, and configures
    console output (plus `log_file`, if set) only when that logger has no
    handlers of its own and none of its ancestors up to the root do either.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        log_file: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if logger is None:
            logger = logging.getLogger(name)
            if not logger.hasHandlers():
                configure_memory_logger(logger, stream=sys.stdout, log_file=log_file)
        self.logger = logger

    def _extra(self) -> dict:
        return {"memory_usage": _get_memory_usage()}

    def debug(self, message: str) -> None:
        self.logger.debug(message, extra=self._extra())

    def info(self, message: str) -> None:
        """Log info message with memory usage"""
        self.logger.info(message, extra=self._extra())

    def warning(self, message: str) -> None:
        self.logger.warning(message, extra=self._extra())

    def error(self, message: str) -> None:
        self.logger.error(message, extra=self._extra())
