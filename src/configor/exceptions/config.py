"""Configuration-related exceptions."""
from typing import Optional

from configor.exceptions.base import ConfigorError


class ConfigError(ConfigorError):
    """Base exception for configuration errors.

    Args:
        message: Human-readable error message
        config_file: Path to config file
        details: Additional error context
        error_code: Machine-readable error code
        original: Wrapped exception, if any
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        details: Optional[dict] = None,
        error_code: str = "CONFIG_ERROR",
        original: Optional[Exception] = None,
    ):
        self.config_file = config_file
        super().__init__(message, error_code=error_code, details=details, original=original)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.config_file:
            parts.append(f"Config: {self.config_file}")
        return " | ".join(parts)


class ConfigNotFoundError(ConfigError):
    """No base, environment or example file exists for a reference."""

    def __init__(
        self,
        message: str = "Configuration file not found",
        config_name: Optional[str] = None,
        searched_paths: Optional[list] = None,
    ):
        details = {}
        if config_name is not None:
            details["config_name"] = config_name
        if searched_paths is not None:
            details["searched_paths"] = searched_paths
        super().__init__(message, config_name, details, error_code="CONFIG_NOT_FOUND")
        self.config_name = config_name
        self.searched_paths = searched_paths or []


class UnsupportedFileTypeError(ConfigError):
    """Save target extension is not a supported format."""

    def __init__(
        self,
        message: str = "Unknown file type",
        config_file: Optional[str] = None,
        supported: Optional[list] = None,
    ):
        details = {}
        if supported is not None:
            details["supported"] = supported
        super().__init__(message, config_file, details, error_code="UNSUPPORTED_FILE_TYPE")


class ConfigDecodeError(ConfigError):
    """Input could not be decoded into the target type."""

    def __init__(
        self,
        message: str = "Failed to decode configuration",
        config_file: Optional[str] = None,
        details: Optional[dict] = None,
        error_code: str = "CONFIG_DECODE_FAILED",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, config_file, details, error_code=error_code, original=original_error)
        self.original_error = original_error


class ConfigParseError(ConfigDecodeError):
    """Failed to parse configuration file."""

    def __init__(
        self,
        message: str = "Failed to parse config file",
        config_file: Optional[str] = None,
        line_number: Optional[int] = None,
        column_number: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if line_number is not None:
            details["line"] = line_number
        if column_number is not None:
            details["column"] = column_number
        super().__init__(
            message,
            config_file,
            details,
            error_code="CONFIG_PARSE_FAILED",
            original_error=original_error,
        )


class ConfigValidationError(ConfigDecodeError):
    """Merged file data was rejected by the configuration model."""

    def __init__(
        self,
        message: str = "Configuration validation failed",
        config_file: Optional[str] = None,
        field_errors: Optional[dict] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if field_errors is not None:
            details["field_errors"] = field_errors
        super().__init__(
            message,
            config_file,
            details,
            error_code="CONFIG_VALIDATION_FAILED",
            original_error=original_error,
        )
        self.field_errors = field_errors or {}


class FieldDecodeError(ConfigDecodeError):
    """An environment override or default literal could not be decoded.

    Args:
        field_name: Name of the field being bound
        source: Either "env" or "default"
        env_var: Environment variable the value came from (env source only)
        original_error: Underlying YAML or validation error
    """

    def __init__(
        self,
        field_name: str,
        source: str,
        env_var: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        if source == "env":
            message = f"Failed to decode environment variable {env_var} into field {field_name}"
        else:
            message = f"Failed to decode default value of field {field_name}"
        details = {"field": field_name, "source": source}
        if env_var is not None:
            details["env_var"] = env_var
        super().__init__(
            message,
            None,
            details,
            error_code="FIELD_DECODE_FAILED",
            original_error=original_error,
        )
        self.field_name = field_name
        self.source = source
        self.env_var = env_var


class ConfigEncodeError(ConfigError):
    """Configuration could not be serialized for saving."""

    def __init__(
        self,
        message: str = "Failed to encode configuration",
        config_file: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, config_file, None, error_code="CONFIG_ENCODE_FAILED", original=original_error)
        self.original_error = original_error


class InvalidConfigShapeError(ConfigError):
    """A value is not a record where one is required."""

    def __init__(
        self,
        message: str = "invalid config, should be struct",
        config_file: Optional[str] = None,
        actual_type: Optional[str] = None,
    ):
        details = {}
        if actual_type is not None:
            details["actual_type"] = actual_type
        super().__init__(message, config_file, details, error_code="INVALID_CONFIG_SHAPE")


class RequiredFieldBlankError(ConfigError):
    """A required field is blank and declares no default."""

    def __init__(
        self,
        field_name: str,
        env_var: Optional[str] = None,
    ):
        details = {"field": field_name}
        if env_var is not None:
            details["env_var"] = env_var
        super().__init__(
            f"{field_name} is required, but blank",
            None,
            details,
            error_code="REQUIRED_FIELD_BLANK",
        )
        self.field_name = field_name
        self.env_var = env_var
