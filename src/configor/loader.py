"""Config loader orchestrator - resolves, merges, validates and binds configs."""
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from configor.binder import Binder, PresencePolicy
from configor.codec import FormatCodec
from configor.exceptions.config import (
    ConfigEncodeError,
    ConfigValidationError,
    InvalidConfigShapeError,
)
from configor.locator import ConfigLocator
from configor.merger import ConfigMerger, ListMergeStrategy
from configor.settings import ConfigorSettings, resolve_prefix


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
PathLike = Union[str, Path]


def _settings_from(environ: Optional[Mapping[str, str]]) -> ConfigorSettings:
    """Read library settings from an explicit mapping, or the process environment."""
    if environ is None:
        return ConfigorSettings()
    return ConfigorSettings(
        env=environ.get("CONFIGOR_ENV", ""),
        env_prefix=environ.get("CONFIGOR_ENV_PREFIX", ""),
    )


class ConfigLoader:
    """Orchestrates config loading, merging, validation and binding.

    Pipeline:
    1. Resolve config files (base, environment-specific, example fallback)
    2. Decode each file (YAML, JSON, TOML)
    3. Deep merge them in order (later files override earlier ones)
    4. Validate against the Pydantic model
    5. Bind environment overrides, defaults and required checks

    Example:
        loader = ConfigLoader(environment="production")
        config = loader.load(AppConfig(), "config/app.yml", "config/database.yml")
    """

    def __init__(
        self,
        environment: Optional[str] = None,
        env_prefix: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        presence: PresencePolicy = PresencePolicy.ZERO_VALUE,
        list_strategy: ListMergeStrategy = ListMergeStrategy.REPLACE,
        settings: Optional[ConfigorSettings] = None,
    ):
        """Initialize config loader.

        Args:
            environment: Environment name (default: CONFIGOR_ENV or detected)
            env_prefix: First segment of derived env var names, "-" for none
                (default: CONFIGOR_ENV_PREFIX or "configor")
            environ: Mapping used for overrides and settings (default: os.environ)
            presence: Rule for deciding whether a field is unset
            list_strategy: How lists from later files combine with earlier ones
            settings: Explicit library settings (overrides `environ` lookups)
        """
        settings = settings or _settings_from(environ)

        self.environment = environment or settings.current_environment()
        self.prefix: List[str] = resolve_prefix(env_prefix) if env_prefix is not None else settings.prefix_segments()
        self.locator = ConfigLocator(self.environment)
        self.codec = FormatCodec()
        self.merger = ConfigMerger(list_strategy)
        self.binder = Binder(environ=environ, presence=presence)

        logger.debug(
            "ConfigLoader initialized",
            extra={
                "environment": self.environment,
                "prefix": self.prefix,
                "presence": presence.value,
                "list_strategy": list_strategy.value,
            },
        )

    def resolve_files(self, *files: PathLike) -> List[Path]:
        """Resolve file references into the ordered list of files to merge."""
        return self.locator.resolve(*files)

    def load_raw_config(self, *files: PathLike, base: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Load and merge config files without validation.

        Args:
            *files: Base file references, highest priority first
            base: Data the files are merged onto

        Returns:
            Merged dictionary

        Raises:
            ConfigNotFoundError: A reference has no matching file
            ConfigParseError: A file could not be decoded
        """
        paths = self.resolve_files(*files)

        documents = [base or {}]
        for path in paths:
            document = self.codec.load(path)
            documents.append(document)
            logger.debug(
                f"Loaded config file: {path}",
                extra={"path": str(path), "keys": len(document)},
            )

        return self.merger.merge_multiple(*documents)

    def load(self, config: Union[BaseModel, Type[ModelT]], *files: PathLike) -> Any:
        """Load files into `config` and bind overrides and defaults.

        Args:
            config: Model instance to populate in place, or a model class
            *files: Base file references, highest priority first

        Returns:
            The populated instance (a new one if a class was given)

        Raises:
            ConfigError: On the first failure; `config` may be partially
                populated and should be discarded
        """
        if isinstance(config, type) and issubclass(config, BaseModel):
            return self.load_config(config, *files)

        if not isinstance(config, BaseModel):
            raise InvalidConfigShapeError(actual_type=type(config).__name__)

        raw_config = self.load_raw_config(
            *files,
            base=config.model_dump(exclude_unset=True, by_alias=True),
        )
        validated = self._validate(type(config), raw_config)

        for name in type(config).model_fields:
            if name in validated.model_fields_set:
                setattr(config, name, getattr(validated, name))

        self.bind(config)
        self._log_loaded(config, files)
        return config

    def load_config(self, schema: Type[ModelT], *files: PathLike) -> ModelT:
        """Load files into a new instance of `schema`."""
        config = self._validate(schema, self.load_raw_config(*files))
        self.bind(config)
        self._log_loaded(config, files)
        return config

    def bind(self, config: BaseModel) -> None:
        """Apply environment overrides, defaults and required checks."""
        self.binder.bind(config, self.prefix)

    def save(self, config: BaseModel, filename: PathLike) -> None:
        """Save a config model to a YAML or JSON file.

        Raises:
            UnsupportedFileTypeError: If the extension is not YAML or JSON
            ConfigEncodeError: If the model cannot be serialized (nothing is written)
        """
        if not isinstance(config, BaseModel):
            raise InvalidConfigShapeError(actual_type=type(config).__name__)

        try:
            data = config.model_dump(mode="json", by_alias=True)
        except PydanticSerializationError as e:
            raise ConfigEncodeError(
                message=f"Failed to encode configuration: {e}",
                config_file=str(filename),
                original_error=e,
            )

        self.codec.dump(data, filename)

    def _validate(self, schema: Type[ModelT], raw_config: Dict[str, Any]) -> ModelT:
        try:
            return schema.model_validate(raw_config)
        except ValidationError as e:
            logger.error(
                f"Config validation failed: {schema.__name__}",
                extra={"schema": schema.__name__, "error_count": len(e.errors())},
            )
            raise ConfigValidationError(
                message=f"Configuration validation failed for {schema.__name__}",
                field_errors={
                    ".".join(str(part) for part in err["loc"]) or "root": err["msg"]
                    for err in e.errors()
                },
                original_error=e,
            )

    def _log_loaded(self, config: BaseModel, files: Sequence[PathLike]) -> None:
        logger.info(
            f"Config loaded: {type(config).__name__}",
            extra={
                "schema": type(config).__name__,
                "environment": self.environment,
                "files": [str(f) for f in files],
            },
        )


def load(config: Union[BaseModel, Type[ModelT]], *files: PathLike) -> Any:
    """Load configuration files into `config` using the ambient settings.

    Example:
        config = load(AppConfig(), "config/app.yml")
    """
    return ConfigLoader().load(config, *files)


def load_config(schema: Type[ModelT], *files: PathLike, **options: Any) -> ModelT:
    """Convenience function returning a new, loaded instance of `schema`.

    Args:
        schema: Pydantic model class
        *files: Base file references
        **options: ConfigLoader keyword arguments
    """
    loader = ConfigLoader(**options)
    return loader.load_config(schema, *files)


def save(config: BaseModel, filename: PathLike) -> None:
    """Save a config model to a YAML or JSON file."""
    ConfigLoader().save(config, filename)
