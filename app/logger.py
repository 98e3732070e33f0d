"""
Logging for the tracker service.

Every line carries the id of the HTTP request that produced it, so the
output of one call can be followed through interleaved threadpool logs.
The id is set per request by the middleware in ``main.py``.
"""
import logging
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Optional

# "-" outside of a request (startup, seeding script)
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

RESET = "\033[0m"
DIM = "\033[2m"

LEVEL_COLORS = {
    logging.DEBUG: DIM,
    logging.INFO: "\033[96m",
    logging.WARNING: "\033[93m",
    logging.ERROR: "\033[91m",
    logging.CRITICAL: "\033[1m\033[91m",
}


class RequestIdFilter(logging.Filter):
    """Stamps ``record.request_id`` from the current request context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class TrackerFormatter(logging.Formatter):
    """
    Formatter producing ``time | level | request | module | message`` lines.
    Level colours are only emitted when writing to a terminal.
    """

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        level = record.levelname[:5].ljust(5)
        request_id = getattr(record, "request_id", "-")
        module = record.name.split(".")[-1] if record.name else "root"

        if self.use_colors:
            level = f"{LEVEL_COLORS.get(record.levelno, '')}{level}{RESET}"
            timestamp = f"{DIM}{timestamp}{RESET}"

        formatted = f"{timestamp} | {level} | {request_id:8} | {module:18} | {record.getMessage()}"
        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)
        return formatted


def _handler(handler: logging.Handler, level: int, use_colors: bool) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(TrackerFormatter(use_colors=use_colors))
    handler.addFilter(RequestIdFilter())
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    use_colors: bool = True
) -> None:
    """
    Configure the root logger for the tracker service.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a plain-text log file
        use_colors: Whether to colour console output
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    root_logger.addHandler(_handler(logging.StreamHandler(sys.stdout), numeric_level, use_colors))
    if log_file:
        root_logger.addHandler(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), numeric_level, False)
        )

    # Reduce noise from third-party libraries
    for noisy in ("httpx", "httpcore", "passlib", "sqlalchemy", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
