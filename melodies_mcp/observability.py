from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, List


@dataclass
class ToolMetrics:
    calls: int = 0
    errors: int = 0
    total_latency_ms: float = 0.0

    def observe(self, duration_ms: float, error: bool) -> None:
        self.calls += 1
        self.total_latency_ms += float(duration_ms)
        if error:
            self.errors += 1

    @property
    def avg_latency_ms(self) -> float:
        if self.calls == 0:
            return 0.0
        return self.total_latency_ms / self.calls


class InMemoryMetrics:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tools: Dict[str, ToolMetrics] = {}

    def record(self, tool: str, duration_ms: float, error: bool) -> None:
        with self._lock:
            metrics = self._tools.get(tool)
            if metrics is None:
                metrics = ToolMetrics()
                self._tools[tool] = metrics
            metrics.observe(duration_ms, error)

    def snapshot(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            data: Dict[str, Dict[str, float]] = {}
            for name, m in self._tools.items():
                data[name] = {
                    "calls": float(m.calls),
                    "errors": float(m.errors),
                    "avg_latency_ms": float(m.avg_latency_ms),
                }
            return data


def render_prometheus(metrics: InMemoryMetrics) -> str:
    """Render a snapshot in the Prometheus text exposition format."""
    snapshot = metrics.snapshot()
    lines: List[str] = [
        "# HELP melodies_mcp_healthy Melodies MCP server health status",
        "# TYPE melodies_mcp_healthy gauge",
        "melodies_mcp_healthy 1",
    ]
    if not snapshot:
        return "\n".join(lines) + "\n"

    lines.append("# HELP melodies_mcp_tool_calls_total Total number of tool calls")
    lines.append("# TYPE melodies_mcp_tool_calls_total counter")
    for tool_name in sorted(snapshot):
        lines.append(f'melodies_mcp_tool_calls_total{{tool="{tool_name}"}} {snapshot[tool_name]["calls"]}')

    lines.append("# HELP melodies_mcp_tool_errors_total Total number of failed tool calls")
    lines.append("# TYPE melodies_mcp_tool_errors_total counter")
    for tool_name in sorted(snapshot):
        lines.append(f'melodies_mcp_tool_errors_total{{tool="{tool_name}"}} {snapshot[tool_name]["errors"]}')

    lines.append("# HELP melodies_mcp_tool_avg_latency_ms Average tool latency in milliseconds")
    lines.append("# TYPE melodies_mcp_tool_avg_latency_ms gauge")
    for tool_name in sorted(snapshot):
        lines.append(
            f'melodies_mcp_tool_avg_latency_ms{{tool="{tool_name}"}} {snapshot[tool_name]["avg_latency_ms"]}'
        )

    return "\n".join(lines) + "\n"
