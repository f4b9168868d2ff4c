"""
Translate tool input schemas into pydantic argument models.

Only four parameter kinds are supported. Anything else is rejected when the
tool is registered instead of being accepted unchecked at call time. Models
validate strictly: a string is never coerced into a boolean or a number, and
numbers must be finite.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, create_model


class SchemaTranslationError(ValueError):
    """Raised when a property cannot be mapped to a validator."""


class PropertyKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING_ARRAY = "array"

    @classmethod
    def of(cls, name: str, fragment: Mapping[str, Any]) -> "PropertyKind":
        type_tag = fragment.get("type")
        try:
            kind = cls(type_tag)
        except ValueError:
            raise SchemaTranslationError(
                f"Unsupported type {type_tag!r} for property {name!r}"
            ) from None
        if kind is cls.STRING_ARRAY:
            items = fragment.get("items") or {"type": "string"}
            if items.get("type") != "string":
                raise SchemaTranslationError(
                    f"Only arrays of strings are supported (property {name!r})"
                )
        return kind


def _field_for(
    name: str, fragment: Mapping[str, Any], required: bool
) -> Tuple[Any, Any]:
    kind = PropertyKind.of(name, fragment)
    description = fragment.get("description")

    if kind is PropertyKind.STRING:
        annotation: Any = str
        constraints: Dict[str, Any] = {}
    elif kind is PropertyKind.NUMBER:
        annotation = float
        constraints = {"allow_inf_nan": False}
        if fragment.get("minimum") is not None:
            constraints["ge"] = fragment["minimum"]
        if fragment.get("maximum") is not None:
            constraints["le"] = fragment["maximum"]
    elif kind is PropertyKind.BOOLEAN:
        annotation = bool
        constraints = {}
    else:
        annotation = List[str]
        constraints = {}

    if required:
        return annotation, Field(..., description=description, **constraints)

    # Booleans are the only kind whose declared default is applied.
    default = fragment.get("default") if kind is PropertyKind.BOOLEAN else None
    return Optional[annotation], Field(default, description=description, **constraints)


def build_arguments_model(tool_name: str, input_schema: Mapping[str, Any]) -> Type[BaseModel]:
    """
    Build a closed pydantic model for a tool's arguments.

    Args:
        tool_name: Used to name the generated model.
        input_schema: Object schema with ``properties`` and optional ``required``.
    """
    properties: Mapping[str, Mapping[str, Any]] = input_schema.get("properties", {})
    required = set(input_schema.get("required", []))
    missing = required.difference(properties)
    if missing:
        raise SchemaTranslationError(
            f"Required fields not declared as properties for {tool_name}: {sorted(missing)}"
        )

    fields = {
        name: _field_for(name, fragment, name in required)
        for name, fragment in properties.items()
    }
    return create_model(
        f"{tool_name}Arguments",
        __config__=ConfigDict(extra="forbid", strict=True),
        **fields,
    )


def validated_arguments(model: Type[BaseModel], arguments: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate ``arguments``; unset optional fields without a default are dropped."""
    instance = model.model_validate(dict(arguments))
    return instance.model_dump(exclude_none=True)
