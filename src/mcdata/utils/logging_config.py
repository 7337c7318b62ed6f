"""
Logging configuration for mcdata.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

from ..settings import AppSettings

CONSOLE_FORMAT = "%(asctime)s : %(levelname)-8s : %(name)s : %(message)s"
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 5


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]

        formatted = super().format(record)

        # Color only the first occurrence, which is the level column
        if record.levelname in formatted:
            formatted = formatted.replace(
                record.levelname, f"{color}{record.levelname}{reset}", 1
            )
        return formatted


class CSVFormatter(logging.Formatter):
    """Semicolon separated, quote-escaped formatter for log files."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        level = record.levelname.ljust(8)
        duration = f"{int(record.relativeCreated)} ms"
        message = record.getMessage().replace('"', '""')
        return (
            f'"{timestamp}";{level};"{duration}";"{record.name}";'
            f'"{record.lineno}";"{message}"'
        )


def setup_logging(
    settings: Optional[AppSettings] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """
    Setup logging with console and file handlers.

    Args:
        settings: AppSettings instance; a default profile is used when None
        log_file: Override for the log file location (mainly for tests)
    """
    if settings is None:
        settings = AppSettings()
    config = settings.logging

    console_enabled = config.console_logging
    console_level = config.console_log_level
    use_colors = config.console_use_colors
    file_enabled = config.file_logging
    log_path = Path(log_file) if log_file is not None else config.log_file_absolute_path

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    logging.getLogger("mcdata").setLevel(logging.DEBUG)

    # Clear any existing handlers
    root_logger.handlers.clear()

    if console_enabled:
        if use_colors:
            console_formatter: logging.Formatter = ColoredFormatter(
                fmt=CONSOLE_FORMAT, datefmt="%H:%M:%S"
            )
        else:
            console_formatter = logging.Formatter(fmt=CONSOLE_FORMAT, datefmt="%H:%M:%S")

        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper(), logging.WARNING))
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    file_ready = False
    if file_enabled:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)  # File always captures DEBUG
            file_handler.setFormatter(CSVFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
            root_logger.addHandler(file_handler)
            file_ready = True
        except OSError as e:
            # Keep console logging if the file cannot be opened
            root_logger.warning(f"Could not setup file logging: {e}")

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized")
    if console_enabled:
        logger.debug(f"Console logging: {console_level} (colors: {use_colors})")
    if file_ready:
        logger.debug(f"File logging: DEBUG at {log_path.absolute()}")
