import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict

from .config import Config
from .exceptions import LoggerError

LOGGER_NAME = "sfrest"

class ContextFilter(logging.Filter):
    """Fill in the user/action fields for records logged without them"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "user"):
            record.user = "-"
        if not hasattr(record, "action"):
            record.action = "-"
        return True

class Logger:
    _loggers: Dict[str, logging.Logger] = {}

    def __init__(self, config: Config):
        """Initialize the sfrest logger with configuration"""
        self.config = config

        if LOGGER_NAME in self._loggers:
            self.logger = self._loggers[LOGGER_NAME]
            for handler in self.logger.handlers[:]:
                self.logger.removeHandler(handler)
                handler.close()
        else:
            self.logger = logging.getLogger(LOGGER_NAME)
            self._loggers[LOGGER_NAME] = self.logger

        self.logger.setLevel(self._get_log_level())

        self.formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s - user:%(user)s - action:%(action)s'
        )
        self.context_filter = ContextFilter()

        log_file = self.config.get("logging.file")
        if log_file:
            path = Path(log_file)
            if not path.parent.exists():
                try:
                    path.parent.mkdir(parents=True, exist_ok=True)
                except OSError:
                    raise LoggerError(f"Cannot create log directory: {path.parent}")

            try:
                handler = RotatingFileHandler(
                    str(path),
                    maxBytes=self.config.get("logging.max_size", 1024 * 1024),
                    backupCount=self.config.get("logging.backup_count", 3)
                )
            except OSError as e:
                raise LoggerError(f"Failed to setup log file: {str(e)}")
            self._add_handler(handler)

        if self.config.get("logging.console_output", False):
            self._add_handler(logging.StreamHandler())

    def _add_handler(self, handler: logging.Handler) -> None:
        handler.setFormatter(self.formatter)
        # Records logged without user/action context still format.
        handler.addFilter(self.context_filter)
        self.logger.addHandler(handler)

    def _get_log_level(self) -> int:
        """Convert string log level to logging constant"""
        level_name = str(self.config.get("logging.level", "INFO")).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise LoggerError(f"Invalid log level: {level_name}")
        return level

