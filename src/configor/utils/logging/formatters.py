"""Structured JSON log formatters."""
import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict


# Attributes every LogRecord has; anything else came from `extra=`
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}

# Sensitive data patterns to redact
_SENSITIVE_PATTERNS = (
    "api_key",
    "password",
    "passwd",
    "token",
    "secret",
    "authorization",
    "bearer",
)


def _serialize_value(value: Any) -> Any:
    """Safely serialize value to JSON-compatible type."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    elif isinstance(value, (list, tuple)):
        return [_serialize_value(item) for item in value]
    elif isinstance(value, dict):
        return {str(k): _serialize_value(v) for k, v in value.items()}
    elif hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _redact_sensitive(data: Any) -> Any:
    """Redact sensitive values from data.

    Args:
        data: Data to redact (can be dict, list, or primitive)

    Returns:
        Redacted data with sensitive values replaced with [REDACTED]
    """
    if isinstance(data, dict):
        redacted = {}
        for key, value in data.items():
            key_lower = str(key).lower()
            if any(pattern in key_lower for pattern in _SENSITIVE_PATTERNS):
                redacted[key] = "[REDACTED]"
            else:
                redacted[key] = _redact_sensitive(value)
        return redacted
    elif isinstance(data, list):
        return [_redact_sensitive(item) for item in data]
    return data


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the fields passed to a logging call through `extra=`."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class StructuredJSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Formats log records as JSON with consistent fields:
    - timestamp (ISO 8601 UTC)
    - level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - service_name
    - logger_name (module name)
    - message (log message)
    - exception and stack_trace (if applicable)
    - every key passed through `extra=`, with secrets redacted
    """

    def __init__(self, service_name: str = "configor"):
        """Initialize formatter.

        Args:
            service_name: Service name stamped on every entry
        """
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: LogRecord to format

        Returns:
            JSON string
        """
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service_name": self.service_name,
            "logger_name": record.name,
            "message": record.getMessage(),
            "source_file": record.pathname,
            "source_line": record.lineno,
            "source_function": record.funcName,
        }

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            log_entry["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "module": exc_type.__module__ if exc_type else None,
            }
            if exc_tb:
                log_entry["stack_trace"] = traceback.format_exception(exc_type, exc_value, exc_tb)

        log_entry.update(_redact_sensitive(extra_fields(record)))

        return json.dumps({key: _serialize_value(value) for key, value in log_entry.items()})
