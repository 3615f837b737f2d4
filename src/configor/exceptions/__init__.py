"""Custom exceptions for configor."""

from configor.exceptions.base import ConfigorError

from configor.exceptions.config import (
    ConfigError,
    ConfigNotFoundError,
    UnsupportedFileTypeError,
    ConfigDecodeError,
    ConfigParseError,
    ConfigValidationError,
    FieldDecodeError,
    ConfigEncodeError,
    InvalidConfigShapeError,
    RequiredFieldBlankError,
)

__all__ = [
    # Base exceptions
    "ConfigorError",
    # Configuration exceptions
    "ConfigError",
    "ConfigNotFoundError",
    "UnsupportedFileTypeError",
    "ConfigDecodeError",
    "ConfigParseError",
    "ConfigValidationError",
    "FieldDecodeError",
    "ConfigEncodeError",
    "InvalidConfigShapeError",
    "RequiredFieldBlankError",
]
