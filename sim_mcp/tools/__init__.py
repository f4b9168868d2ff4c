"""LLM-facing tool definitions."""

from .definition import (
    ToolAnnotations,
    ToolDescriptor,
    define_api_tool,
    define_read_only_tool,
    define_tool,
)
from .envelope import error_result, invoke_and_envelope, is_error_result, text_result
from .properties import COMMON_PROPERTIES
from .sim import build_sim_tools

__all__ = [
    "ToolAnnotations",
    "ToolDescriptor",
    "define_tool",
    "define_read_only_tool",
    "define_api_tool",
    "text_result",
    "error_result",
    "is_error_result",
    "invoke_and_envelope",
    "COMMON_PROPERTIES",
    "build_sim_tools",
]
