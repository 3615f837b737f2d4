"""Field metadata for configuration models.

Configuration models are pydantic models. Each field may carry binding
metadata, either as an ``Annotated`` marker::

    class Database(BaseModel):
        host: Annotated[str, Setting(default="localhost")] = ""
        password: Annotated[str, Setting(env="DB_PASSWORD", required=True)] = ""

or as a ``json_schema_extra`` mapping on ``pydantic.Field``::

    port: int = Field(0, json_schema_extra={"default": "5432"})

``describe_model`` turns a model class into a table of ``FieldDescriptor``
entries, built once per class, which drives the binding traversal.
"""
import collections.abc
import functools
import json
import numbers
import types
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Type, Union, get_args, get_origin

import yaml
from pydantic import BaseModel, TypeAdapter

from configor.merger import deep_merge


@dataclass(frozen=True)
class Setting:
    """Binding metadata for a configuration field.

    Args:
        env: Explicit environment variable name (used verbatim)
        default: Literal applied when the field is blank, parsed like an env value
        required: Fail the load if the field is blank and has no default
    """

    env: Optional[str] = None
    default: Optional[str] = None
    required: bool = False


class FieldKind(Enum):
    """Shape of a field's declared type."""
    SCALAR = "scalar"
    RECORD = "record"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class FieldDescriptor:
    """Everything the binder needs to know about one model field."""

    name: str
    annotation: Any
    kind: FieldKind
    env: Optional[str] = None
    default: Optional[str] = None
    required: bool = False


# Sets are left out: their elements have no index to bind under
_SEQUENCE_ORIGINS = (collections.abc.Sequence,)


def _strip_optional(annotation: Any) -> Tuple[Any, ...]:
    """Return the non-None members of a Union, or the annotation itself."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return tuple(arg for arg in get_args(annotation) if arg is not type(None))
    return (annotation,)


def is_optional(annotation: Any) -> bool:
    """True if the annotation admits None (Optional[X], X | None)."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(annotation)
    return annotation is None or annotation is type(None)


def _is_model_type(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def field_kind(annotation: Any) -> FieldKind:
    """Classify an annotation as a record, a sequence or a scalar."""
    for member in _strip_optional(annotation):
        if _is_model_type(member):
            return FieldKind.RECORD
        origin = get_origin(member) or member
        if isinstance(origin, type) and issubclass(origin, _SEQUENCE_ORIGINS) and not issubclass(origin, (str, bytes)):
            return FieldKind.SEQUENCE
    return FieldKind.SCALAR


def _accepts_plain_string(annotation: Any) -> bool:
    return any(member is str for member in _strip_optional(annotation))


def _as_literal(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def _as_required(value: Any) -> bool:
    return value is True or (isinstance(value, str) and value == "true")


def _binding_metadata(field_info: Any) -> Setting:
    """Collect Setting markers and json_schema_extra keys for a field."""
    env = default = None
    required = False

    extra = field_info.json_schema_extra
    if isinstance(extra, dict):
        env = extra.get("env") or None
        default = _as_literal(extra.get("default"))
        required = _as_required(extra.get("required"))

    for marker in field_info.metadata:
        if isinstance(marker, Setting):
            env = marker.env or env
            default = _as_literal(marker.default) or default
            required = marker.required or required

    return Setting(env=env, default=default, required=required)


@functools.lru_cache(maxsize=None)
def describe_model(model_cls: Type[BaseModel]) -> Tuple[FieldDescriptor, ...]:
    """Build the descriptor table for a model class, in declaration order."""
    descriptors = []
    for name, field_info in model_cls.model_fields.items():
        metadata = _binding_metadata(field_info)
        descriptors.append(
            FieldDescriptor(
                name=name,
                annotation=field_info.annotation,
                kind=field_kind(field_info.annotation),
                env=metadata.env,
                default=metadata.default,
                required=metadata.required,
            )
        )
    return tuple(descriptors)


def is_blank(value: Any, annotation: Any = Any) -> bool:
    """Deep-compare a value against the zero value of its type.

    None is blank. For Optional fields only None is blank. Strings,
    bytes and containers are blank when empty, numbers when zero,
    booleans when False, and models when every field is blank.
    """
    if value is None:
        return True
    if is_optional(annotation):
        return False
    if isinstance(value, BaseModel):
        return all(
            is_blank(getattr(value, descriptor.name), descriptor.annotation)
            for descriptor in describe_model(type(value))
        )
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, bool):
        return value is False
    if isinstance(value, numbers.Number) and not isinstance(value, Enum):
        return value == 0
    return False


@functools.lru_cache(maxsize=None)
def _type_adapter(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def decode_literal(literal: str, annotation: Any, current: Any = None) -> Any:
    """Parse a literal the way env overrides and defaults are parsed.

    The literal is read as a YAML document and validated against the
    field's annotation. String fields take the literal verbatim unless it
    is a quoted YAML string, and a mapping decoded into a model is merged
    onto the current model value.

    Raises:
        yaml.YAMLError: If the literal is not valid YAML
        pydantic.ValidationError: If the parsed value does not fit the type
    """
    if _accepts_plain_string(annotation):
        try:
            data = yaml.safe_load(literal)
        except yaml.YAMLError:
            data = literal
        if not isinstance(data, str):
            data = literal
    else:
        data = yaml.safe_load(literal)

    if isinstance(current, BaseModel) and isinstance(data, dict):
        data = deep_merge(current.model_dump(exclude_unset=True, by_alias=True), data)

    return _type_adapter(annotation).validate_python(data)
