"""Environment-aware configuration loading for pydantic models.

Example:
    from typing import Annotated, List
    from pydantic import BaseModel
    from configor import Setting, load

    class Server(BaseModel):
        host: Annotated[str, Setting(default="localhost")] = ""
        port: Annotated[int, Setting(default="8080")] = 0

    class AppConfig(BaseModel):
        name: Annotated[str, Setting(required=True)] = ""
        servers: List[Server] = []

    config = load(AppConfig(), "config/app.yml")
"""

from configor.binder import Binder, PresencePolicy, bind_defaults_and_env  # noqa: F401
from configor.codec import FormatCodec  # noqa: F401
from configor.exceptions import (  # noqa: F401
    ConfigorError,
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
from configor.fields import FieldDescriptor, FieldKind, Setting, describe_model  # noqa: F401
from configor.loader import ConfigLoader, load, load_config, save  # noqa: F401
from configor.locator import ConfigLocator, find_config_paths  # noqa: F401
from configor.merger import ConfigMerger, ListMergeStrategy, deep_merge  # noqa: F401
from configor.settings import ConfigorSettings, current_environment  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    # Loading
    "ConfigLoader",
    "load",
    "load_config",
    "save",
    "current_environment",
    "ConfigorSettings",
    # Field metadata
    "Setting",
    "FieldDescriptor",
    "FieldKind",
    "describe_model",
    # Binding
    "Binder",
    "PresencePolicy",
    "bind_defaults_and_env",
    # Files
    "ConfigLocator",
    "find_config_paths",
    "FormatCodec",
    "ConfigMerger",
    "ListMergeStrategy",
    "deep_merge",
    # Exceptions
    "ConfigorError",
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
