"""Structured JSON logging utility."""

from configor.utils.logging.factory import configure_logging  # noqa: F401
from configor.utils.logging.formatters import StructuredJSONFormatter  # noqa: F401

__all__ = [
    "configure_logging",
    "StructuredJSONFormatter",
]
