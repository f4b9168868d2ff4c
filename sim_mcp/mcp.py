"""
Tool dispatch for the MCP gateway.

The dispatcher owns the tool registry and the argument models derived from
it. ``register_all`` runs once at startup; after that ``call_tool`` validates
arguments and always answers with a result envelope.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from sim_mcp.registry import ToolRegistry
from sim_mcp.schema import build_arguments_model, validated_arguments
from sim_mcp.tools.definition import ToolDescriptor
from sim_mcp.tools.envelope import error_result

logger = logging.getLogger(__name__)


class DispatchError(Exception):
    """Base class for errors the gateway turns into JSON-RPC errors."""

    code = -32603


class UnknownToolError(DispatchError):
    code = -32602

    def __init__(self, name: str) -> None:
        super().__init__(f"Tool {name} not found")
        self.name = name


class InvalidArgumentsError(DispatchError):
    code = -32602

    def __init__(self, name: str, errors: List[Dict[str, Any]]) -> None:
        super().__init__(f"Invalid arguments for tool {name}")
        self.name = name
        self.errors = errors


class DispatcherNotReadyError(DispatchError):
    def __init__(self) -> None:
        super().__init__("Tools have not been registered yet")


@dataclass(frozen=True, slots=True)
class RegisteredTool:
    descriptor: ToolDescriptor
    arguments_model: Type[BaseModel]


class ToolDispatcher:
    """Registers tool descriptors and runs their callbacks."""

    def __init__(self, registry: ToolRegistry) -> None:
        self.registry = registry
        self._tools: Dict[str, RegisteredTool] = {}
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def register_all(self) -> None:
        """Translate every schema and mark the dispatcher ready (idempotent)."""
        if self._ready:
            return
        for descriptor in self.registry:
            logger.debug("Registering tool: %s", descriptor.name, extra={"tool": descriptor.name})
            self._tools[descriptor.name] = RegisteredTool(
                descriptor=descriptor,
                arguments_model=build_arguments_model(descriptor.name, descriptor.input_schema),
            )
        self._ready = True
        logger.info("Registered %d tools", len(self._tools))

    def _require_ready(self) -> None:
        if not self._ready:
            raise DispatcherNotReadyError()

    def list_tools(self) -> List[Dict[str, Any]]:
        """Return the wire rendering of every tool, in registry order."""
        self._require_ready()
        return [tool.descriptor.to_wire() for tool in self._tools.values()]

    async def call_tool(
        self, tool_name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Dispatch to a tool by name.

        Raises:
            UnknownToolError: no tool with that name.
            InvalidArgumentsError: arguments do not match the tool schema.
        """
        self._require_ready()
        tool = self._tools.get(tool_name)
        if tool is None:
            raise UnknownToolError(tool_name)

        try:
            args = validated_arguments(tool.arguments_model, arguments or {})
        except ValidationError as exc:
            raise InvalidArgumentsError(
                tool_name,
                exc.errors(include_url=False, include_context=False, include_input=False),
            ) from exc

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Tool %s called with args: %s",
                tool_name,
                json.dumps(args, indent=2),
                extra={"tool": tool_name},
            )

        try:
            result = await tool.descriptor.callback(args)
        except Exception as exc:
            logger.exception("Error in tool %s", tool_name, extra={"tool": tool_name})
            return error_result(exc)

        if not isinstance(result, dict) or "content" not in result:
            logger.error("Tool %s returned a malformed envelope", tool_name, extra={"tool": tool_name})
            return error_result("Tool returned an invalid result.")
        return result
