"""Binding of environment overrides, defaults and required checks onto a config model."""
import logging
import os
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple

import yaml
from pydantic import BaseModel, ValidationError

from configor.exceptions.config import (
    FieldDecodeError,
    InvalidConfigShapeError,
    RequiredFieldBlankError,
)
from configor.fields import FieldDescriptor, FieldKind, describe_model, decode_literal, is_blank


logger = logging.getLogger(__name__)

ENV_NAME_SEPARATOR = "_"


class PresencePolicy(Enum):
    """How the binder decides that a field was never set."""
    ZERO_VALUE = "zero_value"    # Field equals the zero value of its type
    FIELDS_SET = "fields_set"    # Field is absent from the model's fields_set


def env_var_name(descriptor: FieldDescriptor, prefix: Sequence[str]) -> str:
    """Environment variable consulted for a field.

    The explicit name is used verbatim; otherwise the prefix segments and
    the field name are joined with "_" and upper-cased.
    """
    if descriptor.env:
        return descriptor.env
    return ENV_NAME_SEPARATOR.join([*prefix, descriptor.name]).upper()


class Binder:
    """Walks a configuration model and applies per-field metadata.

    For every field, in declaration order:
    1. A non-empty environment variable overrides the current value
    2. A blank field gets its default literal, or fails if it is required
    3. Nested models, and models inside lists or tuples, are bound recursively
       with the field name (and element index) appended to the prefix

    The first error stops the traversal. Fields already processed keep their
    new values.

    Example:
        binder = Binder(environ={"APP_SERVERS_0_PORT": "8080"})
        binder.bind(config, ["app"])
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        presence: PresencePolicy = PresencePolicy.ZERO_VALUE,
    ):
        """Initialize binder.

        Args:
            environ: Mapping to read overrides from (default: os.environ)
            presence: Rule for deciding whether a field is unset
        """
        self.environ = os.environ if environ is None else environ
        self.presence = presence

    def bind(self, config: Any, prefix: Sequence[str] = ()) -> None:
        """Bind overrides and defaults onto `config` in place.

        Args:
            config: Pydantic model instance
            prefix: Name segments prepended to derived env var names

        Raises:
            InvalidConfigShapeError: If config is not a model instance
            FieldDecodeError: If an override or default cannot be decoded
            RequiredFieldBlankError: If a required field stays blank
        """
        if not isinstance(config, BaseModel):
            raise InvalidConfigShapeError(actual_type=type(config).__name__)

        prefix = tuple(prefix)
        for descriptor in describe_model(type(config)):
            self._bind_field(config, descriptor, prefix)

    def _bind_field(self, config: BaseModel, descriptor: FieldDescriptor, prefix: Tuple[str, ...]) -> None:
        env_var = env_var_name(descriptor, prefix)

        value = self.environ.get(env_var)
        if value:
            self._assign(config, descriptor, value, source="env", env_var=env_var)
            logger.debug(
                f"Applied environment override {env_var}",
                extra={"field": descriptor.name, "env_var": env_var},
            )

        if self._is_unset(config, descriptor):
            if descriptor.default is not None:
                self._assign(config, descriptor, descriptor.default, source="default")
                logger.debug(
                    f"Applied default to {descriptor.name}",
                    extra={"field": descriptor.name, "prefix": list(prefix)},
                )
            elif descriptor.required:
                raise RequiredFieldBlankError(descriptor.name, env_var=env_var)

        self._recurse(getattr(config, descriptor.name), descriptor, prefix)

    def _is_unset(self, config: BaseModel, descriptor: FieldDescriptor) -> bool:
        if self.presence == PresencePolicy.FIELDS_SET:
            return descriptor.name not in config.model_fields_set
        return is_blank(getattr(config, descriptor.name), descriptor.annotation)

    def _assign(
        self,
        config: BaseModel,
        descriptor: FieldDescriptor,
        literal: str,
        source: str,
        env_var: Optional[str] = None,
    ) -> None:
        try:
            decoded = decode_literal(literal, descriptor.annotation, getattr(config, descriptor.name))
            setattr(config, descriptor.name, decoded)
        except (yaml.YAMLError, ValidationError) as e:
            raise FieldDecodeError(
                descriptor.name,
                source,
                env_var=env_var,
                original_error=e,
            )

    def _recurse(self, value: Any, descriptor: FieldDescriptor, prefix: Tuple[str, ...]) -> None:
        path = prefix + (descriptor.name,)

        if descriptor.kind == FieldKind.RECORD:
            if isinstance(value, BaseModel):
                self.bind(value, path)
        elif descriptor.kind == FieldKind.SEQUENCE and isinstance(value, (list, tuple)):
            for index, element in enumerate(value):
                if isinstance(element, BaseModel):
                    self.bind(element, path + (str(index),))


def bind_defaults_and_env(
    config: Any,
    prefix: Sequence[str] = (),
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """Convenience function to bind a config model with default options."""
    Binder(environ=environ).bind(config, prefix)
