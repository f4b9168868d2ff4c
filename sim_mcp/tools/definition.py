"""
Tool descriptor types and builders.

A descriptor bundles the metadata an MCP client sees (name, title,
description, input schema, behavioural hints) with the coroutine that serves
the call. Descriptors are frozen once built, down to the nested schema
fragments; ``to_wire`` hands out plain mutable copies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence

ToolCallback = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


@dataclass(frozen=True, slots=True)
class ToolAnnotations:
    read_only_hint: bool = False
    destructive_hint: bool = True
    idempotent_hint: bool = False
    open_world_hint: bool = True
    title: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        wire: Dict[str, Any] = {}
        if self.title:
            wire["title"] = self.title
        wire.update(
            {
                "readOnlyHint": self.read_only_hint,
                "destructiveHint": self.destructive_hint,
                "idempotentHint": self.idempotent_hint,
                "openWorldHint": self.open_world_hint,
            }
        )
        return wire


@dataclass(frozen=True, slots=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: Mapping[str, Any]
    annotations: ToolAnnotations
    callback: ToolCallback = field(repr=False, compare=False)
    title: Optional[str] = None

    @property
    def properties(self) -> Mapping[str, Any]:
        return self.input_schema["properties"]

    @property
    def required(self) -> List[str]:
        return list(self.input_schema.get("required", []))

    def to_wire(self) -> Dict[str, Any]:
        """Render the descriptor in the shape returned by ``tools/list``."""
        wire: Dict[str, Any] = {"name": self.name}
        if self.title:
            wire["title"] = self.title
        wire["description"] = self.description
        wire["inputSchema"] = _thaw(self.input_schema)
        wire["annotations"] = self.annotations.to_wire()
        return wire


def define_tool(
    name: str,
    callback: ToolCallback,
    properties: Optional[Mapping[str, Mapping[str, Any]]] = None,
    required: Optional[Sequence[str]] = None,
    *,
    description: Optional[str] = None,
    title: Optional[str] = None,
    read_only_hint: bool = False,
    destructive_hint: bool = True,
    idempotent_hint: bool = False,
    open_world_hint: bool = True,
) -> ToolDescriptor:
    """
    Build a tool descriptor with a closed object schema.

    Args:
        name: Unique tool name.
        callback: Coroutine taking the validated argument mapping.
        properties: Parameter name to JSON-Schema fragment.
        required: Names of mandatory parameters; omitted from the schema when empty.

    Returns:
        A frozen ToolDescriptor.
    """
    input_schema: Dict[str, Any] = {
        "type": "object",
        "properties": dict(properties or {}),
    }
    if required:
        input_schema["required"] = list(required)
    input_schema["additionalProperties"] = False

    return ToolDescriptor(
        name=name,
        description=description or "",
        title=title,
        input_schema=_freeze(input_schema),
        annotations=ToolAnnotations(
            read_only_hint=read_only_hint,
            destructive_hint=destructive_hint,
            idempotent_hint=idempotent_hint,
            open_world_hint=open_world_hint,
            title=title,
        ),
        callback=callback,
    )


def define_read_only_tool(
    name: str,
    callback: ToolCallback,
    properties: Optional[Mapping[str, Mapping[str, Any]]] = None,
    required: Optional[Sequence[str]] = None,
    **options: Any,
) -> ToolDescriptor:
    """Read-only preset: never modifies remote state."""
    options.update(read_only_hint=True, destructive_hint=False)
    return define_tool(name, callback, properties, required, **options)


def define_api_tool(
    name: str,
    callback: ToolCallback,
    properties: Optional[Mapping[str, Mapping[str, Any]]] = None,
    required: Optional[Sequence[str]] = None,
    **options: Any,
) -> ToolDescriptor:
    """Preset for read-only tools that query an external service."""
    options.update(read_only_hint=True, destructive_hint=False, open_world_hint=True)
    return define_tool(name, callback, properties, required, **options)
