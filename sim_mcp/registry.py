"""Read-only, ordered container of tool descriptors."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from sim_mcp.sim_api import SimApiClient, default_client
from sim_mcp.tools.definition import ToolDescriptor
from sim_mcp.tools.sim import build_sim_tools


class ToolRegistry:
    """Built once at startup; lookups only afterwards."""

    def __init__(self, tools: Iterable[ToolDescriptor]) -> None:
        ordered: List[ToolDescriptor] = []
        by_name: Dict[str, ToolDescriptor] = {}
        for tool in tools:
            if not tool.name:
                raise ValueError("Tool name must be a non-empty string.")
            if tool.name in by_name:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            by_name[tool.name] = tool
            ordered.append(tool)
        self._tools = tuple(ordered)
        self._by_name = by_name

    def get(self, name: str) -> Optional[ToolDescriptor]:
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [tool.name for tool in self._tools]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)


def build_default_registry(client: SimApiClient = default_client) -> ToolRegistry:
    """Registry of every Sim tool, bound to ``client``."""
    return ToolRegistry(build_sim_tools(client))
