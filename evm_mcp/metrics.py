"""In-process request and tool-call metrics served at ``/metrics`` (single process only)."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from threading import Lock
from typing import Deque, Dict, Tuple

RECENT_DURATIONS = 100


@dataclass
class ToolStats:
    success: int = 0
    error: int = 0
    total_ms: float = 0.0

    @property
    def calls(self) -> int:
        return self.success + self.error


class MetricsRecorder:
    def __init__(self, recent: int = RECENT_DURATIONS) -> None:
        self._lock = Lock()
        self._requests = 0
        self._rate_limited = 0
        self._recent: Deque[Tuple[str, float]] = deque(maxlen=recent)
        self._tools: Dict[str, ToolStats] = {}

    def incr_request(self) -> None:
        with self._lock:
            self._requests += 1

    def incr_rate_limited(self) -> None:
        with self._lock:
            self._rate_limited += 1

    def record_duration(self, request_id: str, duration_ms: float) -> None:
        # Only the most recent requests are kept.
        with self._lock:
            self._recent.append((request_id, duration_ms))

    def record_tool(self, tool: str, *, success: bool, duration_ms: float = 0.0) -> None:
        with self._lock:
            stats = self._tools.setdefault(tool, ToolStats())
            if success:
                stats.success += 1
            else:
                stats.error += 1
            stats.total_ms += duration_ms

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            tools = self._tools.items()
            return {
                "requests": self._requests,
                "rate_limited": self._rate_limited,
                "tool_success": {name: s.success for name, s in tools if s.success},
                "tool_error": {name: s.error for name, s in tools if s.error},
                "tool_avg_duration_ms": {name: s.total_ms / s.calls for name, s in tools},
                "recent_request_durations_ms": dict(self._recent),
            }

    def reset(self) -> None:
        with self._lock:
            self._requests = 0
            self._rate_limited = 0
            self._recent.clear()
            self._tools.clear()


default_metrics = MetricsRecorder()
