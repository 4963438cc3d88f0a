"""
Centralized logging configuration for Storefront Service.

Structured logging with:
- Correlation IDs taken from the request context
- JSON output for production and log files, coloured console output for development
- Business event metadata attached to each entry
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from src.config import config
from src.utils.correlation_id import get_correlation_id

LOG_LEVEL = config.log_level
LOG_FORMAT = config.log_format

# LogRecord attributes that are not user supplied extras
_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname', 'process',
    'processName', 'relativeCreated', 'thread', 'threadName', 'exc_info',
    'exc_text', 'stack_info', 'taskName',
}


class StructuredLogger:
    """
    Logger with structured entries, correlation IDs and business metadata.
    """

    def __init__(self):
        self.service_name = config.service_name
        self.environment = config.environment
        self._logger = logging.getLogger(self.service_name)
        self._setup_logging()

    def _setup_logging(self):
        """Configure Python logging with handlers"""
        self._logger.handlers.clear()
        self._logger.setLevel(getattr(logging, LOG_LEVEL))
        self._logger.propagate = False

        if config.log_to_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, LOG_LEVEL))

            if LOG_FORMAT == "json":
                console_handler.setFormatter(JSONFormatter())
            else:
                console_handler.setFormatter(ConsoleFormatter())

            self._logger.addHandler(console_handler)

        if config.log_to_file:
            os.makedirs(os.path.dirname(config.log_file_path) or ".", exist_ok=True)

            file_handler = logging.FileHandler(config.log_file_path)
            file_handler.setLevel(getattr(logging, LOG_LEVEL))
            file_handler.setFormatter(JSONFormatter())  # Always JSON for files

            self._logger.addHandler(file_handler)

    def _build_log_entry(
        self,
        level: str,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> Dict[str, Any]:
        """Build structured log entry"""
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.upper(),
            "service": self.service_name,
            "environment": self.environment,
            "message": message,
            "correlationId": correlation_id or get_correlation_id(),
        }

        if user_id:
            entry["userId"] = user_id

        if metadata:
            entry["metadata"] = metadata

        entry.update(kwargs)

        return entry

    def _log(
        self,
        level: str,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        log_entry = self._build_log_entry(
            level, message, correlation_id, user_id, metadata, **kwargs
        )

        # 'message' would clash with the LogRecord attribute of the same name
        extra_data = {k: v for k, v in log_entry.items() if k != 'message'}
        self._logger.log(getattr(logging, level.upper()), message, extra=extra_data)

    @staticmethod
    def _with_error(metadata, error):
        if metadata is None:
            metadata = {}

        if error:
            if isinstance(error, Exception):
                metadata["error"] = {
                    "type": type(error).__name__,
                    "message": str(error),
                }
            else:
                metadata["error"] = {"message": str(error)}

        return metadata

    def debug(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        self._log("DEBUG", message, correlation_id, user_id, metadata, **kwargs)

    def info(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        self._log("INFO", message, correlation_id, user_id, metadata, **kwargs)

    def warning(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        self._log("WARNING", message, correlation_id, user_id, metadata, **kwargs)

    def error(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        error: Optional[Union[str, Exception]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        metadata = self._with_error(metadata, error)
        self._log("ERROR", message, correlation_id, user_id, metadata, **kwargs)

    def critical(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        error: Optional[Union[str, Exception]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        metadata = self._with_error(metadata, error)
        self._log("CRITICAL", message, correlation_id, user_id, metadata, **kwargs)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": config.service_name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter for development"""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        line = f"{color}[{timestamp}] {record.levelname}{reset} - {record.getMessage()}"

        metadata = getattr(record, "metadata", None)
        if metadata:
            line += f" {json.dumps(metadata, default=str)}"

        return line


logger = StructuredLogger()
