"""Logger factory for configuring library logging."""
import logging
import sys
from typing import Optional, TextIO, Union

from configor.utils.logging.formatters import StructuredJSONFormatter

_logger = logging.getLogger(__name__)

LIBRARY_LOGGER = "configor"


def configure_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[TextIO] = None,
    service_name: str = "configor",
) -> logging.Handler:
    """Send configor logs to a stream as structured JSON.

    Only the library's own logger tree is configured; the root logger is
    left to the embedding application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Output stream (default: stderr)
        service_name: Service name stamped on every entry

    Returns:
        The installed handler
    """
    if isinstance(level, str):
        level_name = level
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level_name}")

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.setLevel(level)

    for handler in list(library_logger.handlers):
        if isinstance(handler.formatter, StructuredJSONFormatter):
            library_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(StructuredJSONFormatter(service_name=service_name))
    library_logger.addHandler(handler)

    _logger.debug(
        "Logging configured",
        extra={"level": logging.getLevelName(level), "service_name": service_name},
    )
    return handler
