"""
Configuration helpers for the Sim API MCP server.

This module centralizes base URL selection, API key loading, default timeouts,
and logging settings. No secrets are stored in the repository; the API key is
read from environment or a local file if present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Default connection settings
DEFAULT_BASE_URL = os.getenv("SIM_BASE_URL", "https://api.sim.dune.com")


def _load_timeout() -> float:
    raw_timeout = os.getenv("SIM_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return 10.0
    return 10.0


def _load_port() -> int:
    raw_port = os.getenv("PORT")
    if raw_port:
        try:
            return int(raw_port)
        except ValueError:
            return 3000
    return 3000


def _load_session_idle_timeout() -> Optional[float]:
    """Seconds a session may stay idle; 0 or a negative value disables expiry."""
    raw_timeout = os.getenv("SIM_MCP_SESSION_IDLE_TIMEOUT")
    if raw_timeout:
        try:
            value = float(raw_timeout)
        except ValueError:
            return 3600.0
        return value if value > 0 else None
    return 3600.0


DEFAULT_TIMEOUT = _load_timeout()
DEFAULT_PORT = _load_port()
DEFAULT_SESSION_IDLE_TIMEOUT = _load_session_idle_timeout()
DEFAULT_HOST = os.getenv("HOST", "0.0.0.0")

# API key handling
API_KEY_ENV_VAR = "SIM_API_KEY"
API_KEY_FILE_ENV_VAR = "SIM_API_KEY_FILE"
API_KEY_HEADER = "X-Sim-Api-Key"

LOG_LEVEL = os.getenv("SIM_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("SIM_MCP_LOG_FORMAT", "json")  # json or plain


def load_api_key() -> Optional[str]:
    """
    Load the Sim API key from environment or a local file.

    Returns:
        The API key string if available, otherwise None. The key is never logged
        or returned to callers.
    """
    env_key = os.getenv(API_KEY_ENV_VAR)
    if env_key and env_key.strip():
        return env_key.strip()

    key_path = os.getenv(API_KEY_FILE_ENV_VAR)
    if key_path:
        path = Path(key_path)
        if path.is_file():
            return path.read_text(encoding="utf-8").strip() or None

    return None


@dataclass(slots=True)
class SimConfig:
    """Runtime configuration for Sim API access and the HTTP server."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    api_key: Optional[str] = load_api_key()
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT
    session_idle_timeout: Optional[float] = DEFAULT_SESSION_IDLE_TIMEOUT

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


default_config = SimConfig()
