"""
Logging setup for Leet Analyzer.

Everything logs through the ``leet_analyzer`` logger. Console output goes
through Rich on stderr so it never mixes with the analysis panels printed on
stdout; an optional log file receives every record with its context
(problem, solution, language) prefixed.
"""

import logging
import time
from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

LOGGER_NAME = "leet_analyzer"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONTEXT_FIELDS = ("problem", "solution", "language")

_logger: Optional[logging.Logger] = None
_context_filter: Optional["ContextFilter"] = None


class ContextFilter(logging.Filter):
    """Copies the active context values onto every record."""

    def __init__(self):
        super().__init__()
        self.context: Dict[str, Any] = {}

    def filter(self, record):
        for key, value in self.context.items():
            setattr(record, key, value)
        return True


class AnalyzerLogFormatter(logging.Formatter):
    """File formatter: ``[problem=..., solution=...] message``."""

    def format(self, record):
        message = super().format(record)
        parts = [
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None)
        ]
        return f"[{', '.join(parts)}] {message}" if parts else message


def _console_level(debug: bool, verbose: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logger(
    debug: bool = False, log_file: Optional[Path] = None, verbose: bool = False
) -> logging.Logger:
    """
    (Re)configure the package logger.

    Safe to call more than once: handlers from a previous call are closed
    and replaced, so options parsed late still apply.

    Args:
        debug: Show debug records and source paths on the console
        log_file: Also write every record to this file
        verbose: Show info records on the console
    Returns:
        The configured logger
    """
    global _logger, _context_filter

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    for old_filter in list(logger.filters):
        logger.removeFilter(old_filter)

    _context_filter = ContextFilter()
    logger.addFilter(_context_filter)

    rich_handler = RichHandler(
        console=console,
        show_time=False,
        show_path=debug,
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
        markup=False,
    )
    rich_handler.setLevel(_console_level(debug, verbose))
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(AnalyzerLogFormatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Return the package logger, configuring defaults on first use."""
    if _logger is None:
        return setup_logger()
    return _logger


@contextmanager
def log_context(**kwargs) -> Iterator[None]:
    """
    Attach context values to records logged inside the block.

    Example:
        with log_context(problem="Two Sum", solution="Hash Map"):
            log_debug("Merging note")
    """
    get_logger()
    if _context_filter is None:
        yield
        return

    saved = dict(_context_filter.context)
    _context_filter.context.update(kwargs)
    try:
        yield
    finally:
        _context_filter.context = saved


def _log(level: int, message: str, exc_info=None, **context):
    logger = get_logger()
    with log_context(**context):
        logger.log(level, message, exc_info=exc_info)


def log_debug(message: str, **kwargs):
    _log(logging.DEBUG, message, **kwargs)


def log_info(message: str, **kwargs):
    _log(logging.INFO, message, **kwargs)


def log_warning(message: str, **kwargs):
    _log(logging.WARNING, message, **kwargs)


def log_error(message: str, exc_info=None, **kwargs):
    _log(logging.ERROR, message, exc_info=exc_info, **kwargs)


def log_file_operation(operation: str, path: Path, **kwargs):
    """Debug record for a note or config file being read or written."""
    _log(logging.DEBUG, f"File {operation}: {path}", **kwargs)


def logged_operation(operation_name: str):
    """
    Log start, completion time and failure of the wrapped call.

    Exceptions are logged and re-raised unchanged.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            log_debug(f"Starting {operation_name}")
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - started
                log_error(f"Failed {operation_name} after {elapsed:.3f}s: {e}")
                raise
            log_debug(f"Completed {operation_name} in {time.perf_counter() - started:.3f}s")
            return result

        return wrapper

    return decorator


def configure_logging(
    debug: bool = False, verbose: bool = False, log_file: Optional[str] = None
):
    """Apply the --debug, --verbose and --log-file command line options."""
    setup_logger(debug=debug, log_file=Path(log_file) if log_file else None, verbose=verbose)
