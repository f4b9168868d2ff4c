"""Result envelope helpers shared by every tool callback."""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Dict

logger = logging.getLogger(__name__)


def text_result(result: Any) -> Dict[str, Any]:
    """Successful envelope: the JSON body pretty-printed as text."""
    return {"content": [{"type": "text", "text": json.dumps(result, indent=2)}]}


def error_result(message: Any) -> Dict[str, Any]:
    text = str(message) if message is not None else ""
    text = text or "Unknown error occurred"
    return {"content": [{"type": "text", "text": f"Error: {text}"}], "isError": True}


def is_error_result(envelope: Any) -> bool:
    return isinstance(envelope, dict) and envelope.get("isError") is True


async def invoke_and_envelope(tool_name: str, call: Awaitable[Any]) -> Dict[str, Any]:
    """
    Await a remote call and wrap its outcome in a result envelope.

    A body carrying a top-level ``error`` field is the Sim API's error shape and
    is reported as a failure. Exceptions never escape this helper.
    """
    try:
        result = await call
    except Exception as exc:
        logger.debug(
            "tool=%s outcome=error error=%s",
            tool_name,
            exc,
            extra={"tool": tool_name, "error": type(exc).__name__},
        )
        return error_result(exc)

    if isinstance(result, dict) and result.get("error"):
        return error_result(result["error"])
    return text_result(result)
