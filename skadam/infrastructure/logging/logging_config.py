"""
Logging configuration for the SKADAM café backend

Console output for development, rotating text and JSON files for production,
structlog for structured audit events, and a context manager for timing
operations.
"""

import logging
import logging.handlers
import os
import sys
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from skadam.infrastructure.utilities.constants import (
    FileSettings,
    LoggingSettings,
    PerformanceSettings,
)


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output"""

    colors = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        log_color = self.colors.get(record.levelname, self.colors["RESET"])
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{log_color}{record.levelname}{self.colors['RESET']}"
        return super().format(record)


class SkadamJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding process, thread and operation context"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["thread_name"] = threading.current_thread().name
        log_record["process_id"] = os.getpid()

        if hasattr(record, "operation_time"):
            log_record["operation_time_ms"] = record.operation_time
        if hasattr(record, "storage_key"):
            log_record["storage_key"] = record.storage_key


@dataclass
class LoggingConfigOptions:
    """Dataclass for logging configuration options"""

    log_level: str = "INFO"
    log_dir: str = "logs"
    enable_console: bool = True
    enable_file: bool = True
    enable_json: bool = True
    colored_console: bool = True
    max_file_size: int = LoggingSettings.MAX_LOG_FILE_SIZE


class LoggingConfig:
    """Root logger, file handlers and structlog wiring"""

    def __init__(self, options: LoggingConfigOptions):
        self.options = options
        if self.options.enable_file or self.options.enable_json:
            Path(self.options.log_dir).mkdir(parents=True, exist_ok=True)
        self._configure_structlog()

    def __repr__(self):
        return f"LoggingConfig(options={self.options})"

    def _configure_structlog(self):
        """Configure structlog for structured logging"""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer(),
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def setup_logging(self):
        """Install handlers on the root logger"""
        level = getattr(logging, self.options.log_level.upper())
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        text_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

        if self.options.enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            formatter_class = (
                ColoredFormatter if self.options.colored_console else logging.Formatter
            )
            console_handler.setFormatter(
                formatter_class(fmt=text_format, datefmt="%Y-%m-%d %H:%M:%S")
            )
            root_logger.addHandler(console_handler)

        if self.options.enable_file:
            root_logger.addHandler(
                self._rotating_handler(
                    FileSettings.MAIN_LOG_FILE,
                    logging.INFO,
                    logging.Formatter(text_format),
                    LoggingSettings.MAIN_LOG_BACKUP_COUNT,
                )
            )
            root_logger.addHandler(
                self._rotating_handler(
                    FileSettings.ERROR_LOG_FILE,
                    logging.ERROR,
                    logging.Formatter(text_format),
                    LoggingSettings.ERROR_LOG_BACKUP_COUNT,
                )
            )

        if self.options.enable_json:
            root_logger.addHandler(
                self._rotating_handler(
                    FileSettings.JSON_LOG_FILE,
                    logging.INFO,
                    SkadamJsonFormatter(),
                    LoggingSettings.JSON_LOG_BACKUP_COUNT,
                )
            )

        self._configure_external_loggers()

        logging.getLogger(__name__).info(
            "✅ Logging configured - Level: %s, Console: %s, File: %s, JSON: %s",
            self.options.log_level,
            self.options.enable_console,
            self.options.enable_file,
            self.options.enable_json,
        )

    def _rotating_handler(
        self, filename: str, level: int, formatter: logging.Formatter, backup_count: int
    ) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            Path(self.options.log_dir) / filename,
            maxBytes=self.options.max_file_size,
            backupCount=backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(formatter)
        return handler

    def _configure_external_loggers(self):
        """Quiet down chatty third-party loggers"""
        logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
        logging.getLogger("telegram").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)


class PerformanceLogger:
    """Context manager for performance logging"""

    def __init__(
        self,
        operation_name: str,
        logger: Optional[logging.Logger] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.operation_name = operation_name
        self.logger = logger or logging.getLogger(__name__)
        self.details = details or {}
        self.start_time = 0.0
        self.duration_ms = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(
            "Starting operation: %s",
            self.operation_name,
            extra={"operation": self.operation_name, **self.details},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000

        if exc_type is None:
            level = (
                logging.WARNING
                if self.duration_ms > PerformanceSettings.SLOW_OPERATION_THRESHOLD_MS
                else logging.DEBUG
            )
            self.logger.log(
                level,
                "Completed operation: %s (%.1f ms)",
                self.operation_name,
                self.duration_ms,
                extra={
                    "operation": self.operation_name,
                    "operation_time": self.duration_ms,
                    "success": True,
                    **self.details,
                },
            )
        else:
            self.logger.error(
                "Failed operation: %s",
                self.operation_name,
                extra={
                    "operation": self.operation_name,
                    "operation_time": self.duration_ms,
                    "success": False,
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val) if exc_val else None,
                    **self.details,
                },
            )
        return False


def setup_logging(options: LoggingConfigOptions):
    """Setup logging using the LoggingConfig class"""
    config = LoggingConfig(options)
    config.setup_logging()


def get_structured_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)
