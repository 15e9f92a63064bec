"""Logging utilities with structured JSON logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Keys whose values must never reach the logs
SENSITIVE_KEYS = ("password", "secretstring", "secretvalue", "responseurl")

REDACTED = "***"


def redact(value: Any) -> Any:
    """Replace sensitive values in nested dicts and lists.

    Args:
        value: Value to redact

    Returns:
        Copy of value with sensitive entries replaced
    """
    if isinstance(value, dict):
        return {
            key: REDACTED if str(key).lower() in SENSITIVE_KEYS else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact(item) for item in value]
    return value


class StructuredLogger:
    """Structured JSON logger for Lambda functions."""

    def __init__(self, name: str, correlation_id: Optional[str] = None):
        """Initialize structured logger.

        Args:
            name: Logger name (typically function name)
            correlation_id: Optional correlation ID for request tracing
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)
        self.correlation_id = correlation_id
        self.function_name = name

        # Remove existing handlers
        self.logger.handlers = []

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        self.logger.addHandler(handler)

    def _build_log_entry(
        self,
        level: str,
        message: str,
        extra: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "function_name": self.function_name,
            "message": message
        }

        if self.correlation_id:
            entry["correlation_id"] = self.correlation_id

        if extra:
            entry.update(redact(extra))

        return entry

    def debug(self, message: str, **kwargs):
        self.logger.debug(json.dumps(self._build_log_entry("DEBUG", message, kwargs), default=str))

    def info(self, message: str, **kwargs):
        self.logger.info(json.dumps(self._build_log_entry("INFO", message, kwargs), default=str))

    def warning(self, message: str, **kwargs):
        self.logger.warning(json.dumps(self._build_log_entry("WARN", message, kwargs), default=str))

    def error(self, message: str, **kwargs):
        self.logger.error(json.dumps(self._build_log_entry("ERROR", message, kwargs), default=str))


class JsonFormatter(logging.Formatter):
    """JSON formatter for log records."""

    def format(self, record: logging.LogRecord) -> str:
        # StructuredLogger messages are already JSON
        try:
            json.loads(record.getMessage())
            return record.getMessage()
        except (json.JSONDecodeError, ValueError):
            log_entry = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage()
            }

            if record.exc_info:
                log_entry["exception"] = self.formatException(record.exc_info)

            return json.dumps(log_entry)


def get_logger(name: str, correlation_id: Optional[str] = None) -> StructuredLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name
        correlation_id: Optional correlation ID

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name, correlation_id)
