from __future__ import annotations

import functools
import logging
from types import TracebackType
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LINE_LENGTH = 120
ERROR_TRACE_FRAMES = 8

_EMOJIS = {
    logging.DEBUG: "🐛",
    logging.INFO: "💡",
    logging.WARNING: "⚠️",
    logging.ERROR: "⛔",
}


@functools.lru_cache(maxsize=None)
def _sink(name: str) -> logging.Logger:
    """Configure the shared output logger once per name."""

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = RichHandler(
        console=Console(width=LINE_LENGTH),
        markup=False,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_max_frames=ERROR_TRACE_FRAMES,
    )
    logger.addHandler(handler)
    return logger


class ApiLogger:
    """Severity-tagged logging facade used by the API handler."""

    def __init__(self, name: str = "http_api_handler") -> None:
        self.name = name

    @property
    def sink(self) -> logging.Logger:
        return _sink(self.name)

    def _emit(self, level: int, message: str, exc_info=None) -> None:
        self.sink.log(level, f"{_EMOJIS[level]} {message}", exc_info=exc_info)

    def info(self, message: str) -> None:
        self._emit(logging.INFO, message)

    def debug(self, message: str) -> None:
        self._emit(logging.DEBUG, message)

    def warning(self, message: str) -> None:
        self._emit(logging.WARNING, message)

    def error(
        self,
        message: str,
        error: Optional[BaseException] = None,
        stack_trace: Optional[TracebackType] = None,
    ) -> None:
        """Log an error, rendering ``error`` with a bounded traceback when given."""

        exc_info = None
        if error is not None:
            exc_info = (type(error), error, stack_trace or error.__traceback__)
        self._emit(logging.ERROR, message, exc_info=exc_info)


@functools.lru_cache(maxsize=None)
def get_logger() -> ApiLogger:
    """Return the process-wide default logger."""

    return ApiLogger()


__all__ = ["ApiLogger", "get_logger", "LINE_LENGTH", "ERROR_TRACE_FRAMES"]
