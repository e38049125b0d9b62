"""Logging configuration for catobase."""

import logging
import logging.handlers
import sys
from typing import Optional
from .config import LoggingConfig, get_config


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name on console output."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m'
    }

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class LoggingManager:
    """Manages logging configuration and setup."""

    def __init__(self, config: Optional[LoggingConfig] = None):
        """
        Initialize logging manager.

        Args:
            config: Logging configuration. If None, uses global config.
        """
        self.config = config or get_config().logging
        self.handlers = {}
        self._setup_root_logger()

    def _setup_root_logger(self):
        """Set up the root logger with configured handlers."""
        root_logger = logging.getLogger()

        for handler in self.handlers.values():
            root_logger.removeHandler(handler)
        self.handlers.clear()

        self.set_level(self.config.level)

        if self.config.console_enabled:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(ColoredFormatter(self.config.format))
            root_logger.addHandler(console_handler)
            self.handlers['console'] = console_handler

        if self.config.file_enabled and self.config.file_path:
            file_handler = self._create_file_handler()
            if file_handler:
                root_logger.addHandler(file_handler)
                self.handlers['file'] = file_handler

    def _create_file_handler(self) -> Optional[logging.Handler]:
        """Create and configure rotating file handler."""
        try:
            self.config.file_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.RotatingFileHandler(
                self.config.file_path,
                maxBytes=self.config.file_max_size_mb * 1024 * 1024,
                backupCount=self.config.file_backup_count
            )
        except OSError as e:
            logging.getLogger(__name__).error(f"Failed to create file handler: {e}")
            return None

        handler.setFormatter(logging.Formatter(self.config.format))
        return handler

    def set_level(self, level: str):
        """
        Set the logging level of the root logger.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        log_level = getattr(logging, str(level).upper(), None)
        root_logger = logging.getLogger()
        if not isinstance(log_level, int):
            root_logger.setLevel(logging.WARNING)
            logging.getLogger(__name__).warning(f"Invalid log level '{level}', using WARNING")
            return
        root_logger.setLevel(log_level)
        self.config.level = str(level).upper()

    def close(self):
        """Detach and close the handlers installed by this manager."""
        root_logger = logging.getLogger()
        for handler in self.handlers.values():
            root_logger.removeHandler(handler)
            handler.close()
        self.handlers.clear()


_logging_manager = None


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Set up global logging configuration.

    Args:
        config: Optional logging configuration

    Returns:
        LoggingManager instance
    """
    global _logging_manager
    if _logging_manager is not None:
        _logging_manager.close()
    _logging_manager = LoggingManager(config)
    return _logging_manager

