"""Minimal in-process metrics recorder (not suitable for multi-process aggregation)."""

from __future__ import annotations

from collections import Counter, deque
from threading import Lock
from typing import Deque, Dict, Tuple

RECENT_DURATIONS = 100


class MetricsRecorder:
    def __init__(self) -> None:
        self._lock = Lock()
        self._requests = 0
        self._recent_durations: Deque[Tuple[str, float]] = deque(maxlen=RECENT_DURATIONS)
        self._tool_success: Counter[str] = Counter()
        self._tool_error: Counter[str] = Counter()
        self._sessions_opened = 0
        self._sessions_closed = 0

    def incr_request(self) -> None:
        with self._lock:
            self._requests += 1

    def record_duration(self, request_id: str, duration_ms: float) -> None:
        with self._lock:
            self._recent_durations.append((request_id, duration_ms))

    def record_tool(self, tool: str, *, success: bool) -> None:
        with self._lock:
            if success:
                self._tool_success[tool] += 1
            else:
                self._tool_error[tool] += 1

    def record_session(self, *, opened: bool) -> None:
        with self._lock:
            if opened:
                self._sessions_opened += 1
            else:
                self._sessions_closed += 1

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "requests": self._requests,
                "tool_success": dict(self._tool_success),
                "tool_error": dict(self._tool_error),
                "sessions_opened": self._sessions_opened,
                "sessions_closed": self._sessions_closed,
                "recent_request_durations_ms": dict(self._recent_durations),
            }

    def reset(self) -> None:
        with self._lock:
            self._requests = 0
            self._recent_durations.clear()
            self._tool_success.clear()
            self._tool_error.clear()
            self._sessions_opened = 0
            self._sessions_closed = 0


default_metrics = MetricsRecorder()
