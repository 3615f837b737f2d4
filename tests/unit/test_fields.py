"""Unit tests for the field descriptor table and literal decoding."""
from typing import Annotated, FrozenSet, List, Optional, Set, Tuple

import pytest
import yaml
from pydantic import BaseModel, Field, ValidationError

from configor.fields import (
    FieldKind,
    Setting,
    decode_literal,
    describe_model,
    field_kind,
    is_blank,
)
from tests.models import AppConfig, Database, Server


class Tagged(BaseModel):
    explicit: str = Field("", json_schema_extra={"env": "EXPLICIT", "default": "x", "required": "true"})
    numeric_default: int = Field(0, json_schema_extra={"default": 7})
    both: Annotated[str, Setting(default="d", required=True)] = ""
    plain: str = ""


def test_describe_model_keeps_declaration_order():
    """Should list fields in declaration order."""
    names = [descriptor.name for descriptor in describe_model(AppConfig)]

    assert names == ["app_name", "workers", "debug", "database", "cache", "servers", "tags"]


def test_describe_model_reads_setting_markers():
    """Should pick up Annotated Setting markers."""
    descriptors = {d.name: d for d in describe_model(Database)}

    assert descriptors["name"].default == "app"
    assert descriptors["password"].env == "DB_PASSWORD"
    assert descriptors["port"].default == "5432"


def test_describe_model_reads_json_schema_extra():
    """Should pick up metadata passed through json_schema_extra."""
    descriptors = {d.name: d for d in describe_model(Tagged)}

    assert descriptors["explicit"].env == "EXPLICIT"
    assert descriptors["explicit"].required is True
    assert descriptors["numeric_default"].default == "7"
    assert descriptors["both"].default == "d"
    assert descriptors["both"].required is True
    assert descriptors["plain"].env is None
    assert descriptors["plain"].default is None
    assert descriptors["plain"].required is False


def test_describe_model_is_cached():
    """Should build the table once per class."""
    assert describe_model(AppConfig) is describe_model(AppConfig)


def test_field_kinds():
    """Should classify records, sequences and scalars."""
    kinds = {d.name: d.kind for d in describe_model(AppConfig)}

    assert kinds["database"] == FieldKind.RECORD
    assert kinds["cache"] == FieldKind.RECORD
    assert kinds["servers"] == FieldKind.SEQUENCE
    assert kinds["tags"] == FieldKind.SEQUENCE
    assert kinds["workers"] == FieldKind.SCALAR
    assert field_kind(Tuple[Server, ...]) == FieldKind.SEQUENCE
    assert field_kind(str) == FieldKind.SCALAR


@pytest.mark.parametrize(
    "value, annotation",
    [
        (None, Optional[int]),
        (0, int),
        (0.0, float),
        ("", str),
        (False, bool),
        ([], List[int]),
        ({}, dict),
        (Database(), Database),
    ],
)
def test_zero_values_are_blank(value, annotation):
    """Should treat zero values as blank."""
    assert is_blank(value, annotation)


@pytest.mark.parametrize(
    "value, annotation",
    [
        (0, Optional[int]),
        ("", Optional[str]),
        (1, int),
        ("x", str),
        (True, bool),
        ([0], List[int]),
        (Database(port=1), Database),
    ],
)
def test_set_values_are_not_blank(value, annotation):
    """Should treat non-zero values, and any value behind Optional, as set."""
    assert not is_blank(value, annotation)


def test_decode_scalars():
    """Should parse literals as YAML and validate against the type."""
    assert decode_literal("5", int) == 5
    assert decode_literal("true", bool) is True
    assert decode_literal("2.5", float) == 2.5
    assert decode_literal("[1, 2]", List[int]) == [1, 2]
    assert decode_literal("[a, b]", List[str]) == ["a", "b"]


def test_decode_string_fields_keep_literal():
    """Should keep string literals verbatim unless quoted."""
    assert decode_literal("123", str) == "123"
    assert decode_literal("true", Optional[str]) == "true"
    assert decode_literal("host: 5", str) == "host: 5"
    assert decode_literal("'quoted'", str) == "quoted"


def test_decode_model_merges_onto_current_value():
    """Should merge a mapping literal onto the existing model."""
    current = Database.model_validate({"name": "shop", "port": 6000})

    decoded = decode_literal("{name: other}", Database, current)

    assert decoded.name == "other"
    assert decoded.port == 6000


def test_decode_list_of_models():
    """Should build models from a sequence literal."""
    decoded = decode_literal("[{host: a, port: 1}]", List[Server])

    assert decoded == [Server(host="a", port=1)]


def test_decode_invalid_literal():
    """Should raise when the literal does not fit the type."""
    with pytest.raises(ValidationError):
        decode_literal("many", int)

    with pytest.raises(yaml.YAMLError):
        decode_literal("[1, 2", List[int])


def test_sets_are_scalars():
    """Should not classify sets as traversable sequences."""
    assert field_kind(FrozenSet[int]) == FieldKind.SCALAR
    assert field_kind(Set[str]) == FieldKind.SCALAR
    assert field_kind(Optional[List[Server]]) == FieldKind.SEQUENCE
