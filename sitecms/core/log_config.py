"""
Logging Setup
=============

Configures the root logger: a console handler plus the buffered daily file
handler. Modules log through ``logging.getLogger(__name__)``.
"""
import logging
from typing import Optional

from sitecms.core.config import Settings
from sitecms.infrastructure.logging.buffered_file_handler import BufferedFileHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_file_handler: Optional[BufferedFileHandler] = None


def parse_log_level(value: str) -> int:
    """
    Convert a LOG_LEVEL string to a ``logging`` level.

    Args:
        value: Level name (debug, info, warn/warning, error), case-insensitive

    Returns:
        Matching logging level, INFO for unknown names
    """
    level = _LEVELS.get((value or "").strip().lower())
    if level is None:
        logging.getLogger(__name__).warning("Invalid log level '%s', using 'info'", value)
        return logging.INFO
    return level


def configure_logging(settings: Settings) -> Optional[BufferedFileHandler]:
    """
    Install console and buffered file handlers on the root logger.

    Calling it again replaces the handlers installed by a previous call.

    Returns:
        The buffered file handler, or None when file logging is disabled
    """
    global _file_handler

    root = logging.getLogger()
    level = parse_log_level(settings.log_level)
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    shutdown_logging()

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console.set_name("sitecms-console")
    for handler in list(root.handlers):
        if handler.get_name() == "sitecms-console":
            root.removeHandler(handler)
    root.addHandler(console)

    if settings.log_to_file:
        _file_handler = BufferedFileHandler(
            settings.log_folder,
            buffer_size=settings.log_buffer_size,
            flush_interval=settings.log_flush_interval_seconds,
        )
        _file_handler.setFormatter(formatter)
        root.addHandler(_file_handler)

    return _file_handler


def shutdown_logging() -> None:
    """Flush and detach the buffered file handler, if installed."""
    global _file_handler
    if _file_handler is not None:
        logging.getLogger().removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
