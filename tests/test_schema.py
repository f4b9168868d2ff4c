import pytest
from pydantic import ValidationError

from sim_mcp.schema import (
    PropertyKind,
    SchemaTranslationError,
    build_arguments_model,
    validated_arguments,
)
from sim_mcp.tools.properties import prop

SCHEMA = {
    "type": "object",
    "properties": {
        "address": prop("address"),
        "chain_ids": prop("chain_ids"),
        "limit": prop("limit"),
        "exclude_spam": prop("exclude_spam"),
    },
    "required": ["address"],
    "additionalProperties": False,
}


def test_property_kinds():
    assert PropertyKind.of("a", {"type": "string"}) is PropertyKind.STRING
    assert PropertyKind.of("a", {"type": "number"}) is PropertyKind.NUMBER
    assert PropertyKind.of("a", {"type": "boolean"}) is PropertyKind.BOOLEAN
    assert PropertyKind.of("a", {"type": "array", "items": {"type": "string"}}) is PropertyKind.STRING_ARRAY


def test_unknown_type_rejected_at_build_time():
    with pytest.raises(SchemaTranslationError, match="Unsupported type"):
        build_arguments_model("bad", {"properties": {"x": {"type": "object"}}})


def test_non_string_arrays_rejected():
    with pytest.raises(SchemaTranslationError):
        build_arguments_model("bad", {"properties": {"x": {"type": "array", "items": {"type": "number"}}}})


def test_required_must_be_declared():
    with pytest.raises(SchemaTranslationError):
        build_arguments_model("bad", {"properties": {}, "required": ["address"]})


def test_optional_fields_omitted_and_boolean_default_applied():
    model = build_arguments_model("getThing", SCHEMA)
    args = validated_arguments(model, {"address": "0xABC"})
    assert args == {"address": "0xABC", "exclude_spam": True}


def test_number_default_is_not_injected():
    model = build_arguments_model("getThing", SCHEMA)
    assert "limit" not in validated_arguments(model, {"address": "0xABC"})


def test_number_bounds_enforced():
    model = build_arguments_model("getThing", SCHEMA)
    with pytest.raises(ValidationError):
        validated_arguments(model, {"address": "0xABC", "limit": 0})
    with pytest.raises(ValidationError):
        validated_arguments(model, {"address": "0xABC", "limit": 1001})
    assert validated_arguments(model, {"address": "0xABC", "limit": 1000})["limit"] == 1000


def test_missing_required_rejected():
    model = build_arguments_model("getThing", SCHEMA)
    with pytest.raises(ValidationError):
        validated_arguments(model, {})


def test_unknown_fields_rejected():
    model = build_arguments_model("getThing", SCHEMA)
    with pytest.raises(ValidationError):
        validated_arguments(model, {"address": "0xABC", "surprise": 1})


def test_string_array_values():
    model = build_arguments_model("getThing", SCHEMA)
    args = validated_arguments(model, {"address": "0xABC", "chain_ids": ["1", "10"]})
    assert args["chain_ids"] == ["1", "10"]
    with pytest.raises(ValidationError):
        validated_arguments(model, {"address": "0xABC", "chain_ids": "1,10"})


def test_empty_schema_accepts_empty_arguments():
    model = build_arguments_model("listThings", {"type": "object", "properties": {}})
    assert validated_arguments(model, {}) == {}


@pytest.mark.parametrize("value", ["true", "no", 1])
def test_boolean_fields_reject_non_booleans(value):
    model = build_arguments_model("getThing", SCHEMA)
    with pytest.raises(ValidationError):
        validated_arguments(model, {"address": "0xABC", "exclude_spam": value})


def test_number_fields_reject_numeric_strings():
    model = build_arguments_model("getThing", SCHEMA)
    with pytest.raises(ValidationError):
        validated_arguments(model, {"address": "0xABC", "limit": "10"})
    assert validated_arguments(model, {"address": "0xABC", "limit": 10})["limit"] == 10


def test_string_fields_reject_numbers():
    model = build_arguments_model("getThing", SCHEMA)
    with pytest.raises(ValidationError):
        validated_arguments(model, {"address": 123})


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_number_fields_must_be_finite(value):
    schema = {"properties": {"after_block_number": prop("after_block_number")}}
    model = build_arguments_model("getThing", schema)
    with pytest.raises(ValidationError):
        validated_arguments(model, {"after_block_number": value})
