"""
Logging utilities for LLM Web Inspector.

Console output goes through Rich on stderr so that CLI results printed on
stdout stay machine-readable.
"""

import logging
from typing import Iterable, Optional, TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from llm_web_inspector.config.settings import LoggingSettings

# Transport libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        json_format: Use JSON lines in the log file
        quiet: Logger names capped at WARNING regardless of level
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(JSON_FORMAT if json_format else FILE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in quiet:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def setup_logging_from_settings(settings: "LoggingSettings", verbose: bool = False) -> None:
    """Configure logging from a LoggingSettings section; verbose forces DEBUG."""
    setup_logging(
        level="DEBUG" if verbose else settings.level,
        log_file=settings.file,
        json_format=settings.json_format,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
