"""Centralized logging configuration for the profile chat application."""

import logging
import logging.handlers
import os
import sys
from datetime import datetime
from typing import Optional, Dict, Any
from pathlib import Path

from .config.defaults import SYSTEM_CONSTANTS

LOGGER_PREFIX = "profile_chat"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends structured context to log records."""

    def __init__(self, include_context: bool = True):
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        base_format = "%(asctime)s | %(levelname)-8s | %(name)-32s | %(message)s"

        if self.include_context and hasattr(record, 'context'):
            context_str = " | ".join([f"{k}={v}" for k, v in record.context.items()])
            base_format += f" | Context: {context_str}"

        if record.levelno >= logging.ERROR and record.exc_info:
            base_format += " | %(pathname)s:%(lineno)d"

        formatter = logging.Formatter(base_format)
        return formatter.format(record)


class ContextFilter(logging.Filter):
    """Filter that tags records with the component and process id."""

    def __init__(self, component_name: Optional[str] = None):
        super().__init__()
        self.component_name = component_name
        self.process_id = os.getpid()

    def filter(self, record: logging.LogRecord) -> bool:
        record.process_id = self.process_id
        if self.component_name:
            record.component = self.component_name
        return True


class LoggingManager:
    """Owns the root handlers and the per-component loggers.

    Without a log directory only the console handler is installed. With one,
    rotating main and error log files are added beside it.
    """

    def __init__(self, log_dir: Optional[str] = None, log_level: int = logging.INFO):
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = log_level
        self.max_log_size = SYSTEM_CONSTANTS["LOG_ROTATION_SIZE_MB"] * 1024 * 1024
        self.backup_count = SYSTEM_CONSTANTS["LOG_BACKUP_COUNT"]

        self.main_log_file: Optional[Path] = None
        self.error_log_file: Optional[Path] = None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.main_log_file = self.log_dir / "profile_chat.log"
            self.error_log_file = self.log_dir / "errors.log"

        self.component_loggers: Dict[str, logging.Logger] = {}

        self._setup_root_logger()

    def _setup_root_logger(self) -> None:
        root_logger = logging.getLogger(LOGGER_PREFIX)
        root_logger.setLevel(self.log_level)

        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(StructuredFormatter(include_context=False))
        root_logger.addHandler(console_handler)

        if self.main_log_file is not None:
            main_file_handler = logging.handlers.RotatingFileHandler(
                self.main_log_file,
                maxBytes=self.max_log_size,
                backupCount=self.backup_count
            )
            main_file_handler.setLevel(logging.DEBUG)
            main_file_handler.setFormatter(StructuredFormatter(include_context=True))
            root_logger.addHandler(main_file_handler)

            error_file_handler = logging.handlers.RotatingFileHandler(
                self.error_log_file,
                maxBytes=self.max_log_size,
                backupCount=self.backup_count
            )
            error_file_handler.setLevel(logging.ERROR)
            error_file_handler.setFormatter(StructuredFormatter(include_context=True))
            root_logger.addHandler(error_file_handler)

    def get_component_logger(self, component_name: str) -> logging.Logger:
        """Get or create a logger for a specific component."""
        if component_name in self.component_loggers:
            return self.component_loggers[component_name]

        logger = logging.getLogger(f"{LOGGER_PREFIX}.{component_name}")
        logger.addFilter(ContextFilter(component_name))

        self.component_loggers[component_name] = logger
        return logger

    def log_with_context(self, logger: logging.Logger, level: int,
                         message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log message with additional context information."""
        if context:
            record = logger.makeRecord(
                logger.name, level, "", 0, message, (), None
            )
            record.context = context
            logger.handle(record)
        else:
            logger.log(level, message)

    def set_log_level(self, level: int) -> None:
        self.log_level = level
        root_logger = logging.getLogger(LOGGER_PREFIX)
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)

    def get_log_stats(self) -> Dict[str, Any]:
        stats = {
            "log_directory": str(self.log_dir) if self.log_dir else None,
            "log_files": {},
            "active_loggers": list(self.component_loggers.keys()),
            "log_level": logging.getLevelName(self.log_level)
        }

        for log_file in [self.main_log_file, self.error_log_file]:
            if log_file is not None and log_file.exists():
                stats["log_files"][log_file.name] = {
                    "size_mb": log_file.stat().st_size / (1024 * 1024),
                    "modified": datetime.fromtimestamp(log_file.stat().st_mtime).isoformat()
                }

        return stats


# Console-only until setup_logging() is called with a directory
logging_manager = LoggingManager()


def get_logger(component_name: str) -> logging.Logger:
    """Convenience function to get a component logger."""
    return logging_manager.get_component_logger(component_name)


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = "logs") -> LoggingManager:
    """Set up centralized logging, optionally writing rotating log files."""
    global logging_manager

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    component_loggers = logging_manager.component_loggers
    logging_manager = LoggingManager(log_dir, numeric_level)
    logging_manager.component_loggers.update(component_loggers)

    return logging_manager
