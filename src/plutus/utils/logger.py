"""Logging infrastructure with action context."""
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from plutus.config.settings import get_settings


class ActionContextFilter(logging.Filter):
    """Add the current user action to log records."""

    def __init__(self):
        super().__init__()
        self.action: Optional[str] = None

    def filter(self, record):
        """Add action to record."""
        record.action = self.action or "app"
        return True


class PlutusLogger:
    """Centralized logging manager."""

    def __init__(self, log_level: Optional[str] = None):
        settings = get_settings()
        self.log_dir = settings.logs_path
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.log_dir / settings.log_file
        self.action_filter = ActionContextFilter()

        self.logger = logging.getLogger("plutus")
        self.logger.setLevel(getattr(logging, (log_level or settings.log_level).upper()))

        # Remove existing handlers
        self.logger.handlers.clear()

        file_handler = RotatingFileHandler(
            self.log_file,
            maxBytes=settings.log_max_file_size_mb * 1024 * 1024,
            backupCount=settings.log_backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)

        # CLI output stays clean; only problems reach the console
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [action:%(action)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        file_handler.addFilter(self.action_filter)
        console_handler.addFilter(self.action_filter)

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

    def set_action_context(self, action: Optional[str]):
        """Set current action context for logging."""
        self.action_filter.action = action

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[PlutusLogger] = None


def get_logger(log_level: Optional[str] = None) -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = PlutusLogger(log_level)
    return _logger_instance.get_logger()


def set_action_context(action: Optional[str]):
    """Set action context for logging."""
    global _logger_instance
    if _logger_instance:
        _logger_instance.set_action_context(action)
