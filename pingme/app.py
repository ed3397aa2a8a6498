"""Application state shared by the event loop and the views."""

from __future__ import annotations

import math
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Protocol

from pingme.storage import EndpointStats, utcnow

MAX_LOGS = 1000
TRIM_LOGS = 100
MAX_BLOCKS = 60


class LogLevel(Enum):
    INFO = "INFO"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"
    WARNING = "WARN"


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    level: LogLevel
    message: str


class InputMode(Enum):
    NORMAL = "normal"
    ADDING = "adding"


@dataclass(frozen=True)
class TimeRange:
    """A window of time measured in minutes."""

    minutes: int

    def display_name(self) -> str:
        return f"{self.minutes}m"

    def duration_hours(self) -> int:
        return self.minutes // 60


@dataclass(frozen=True)
class UptimeBlock:
    timestamp: datetime
    status: bool


class _StatsSource(Protocol):
    def get_endpoint_stats(self) -> list[EndpointStats]: ...

    def get_uptime_history(
        self, endpoint_id: uuid.UUID, hours: int
    ) -> list[tuple[datetime, float]]: ...


def _whole_minutes(delta: timedelta) -> int:
    return math.trunc(delta / timedelta(minutes=1))


@dataclass
class App:
    """Everything the interface shows and the keys change."""

    endpoints_stats: list[EndpointStats] = field(default_factory=list)
    selected_endpoint: int = 0
    input_mode: InputMode = InputMode.NORMAL
    url_input: str = ""
    uptime_history: dict[uuid.UUID, list[tuple[float, float]]] = field(default_factory=dict)
    uptime_blocks: dict[uuid.UUID, list[UptimeBlock]] = field(default_factory=dict)
    developer_mode: bool = False
    logs: list[LogEntry] = field(default_factory=list)
    log_scroll: int = 0
    time_ranges: list[TimeRange] = field(default_factory=lambda: [TimeRange(60)])
    selected_time_range: int = 0
    clock: Callable[[], datetime] = field(default=utcnow, repr=False)

    def add_log(self, level: LogLevel, message: str) -> None:
        self.push_log(LogEntry(self.clock(), level, message))

    def push_log(self, entry: LogEntry) -> None:
        """Append a log entry, dropping the oldest ones once the log is full."""
        self.logs.append(entry)
        if len(self.logs) > MAX_LOGS:
            del self.logs[:TRIM_LOGS]

    def toggle_developer_mode(self) -> None:
        self.developer_mode = not self.developer_mode
        self.log_scroll = 0

    def scroll_logs_up(self) -> None:
        if self.log_scroll > 0:
            self.log_scroll -= 1

    def scroll_logs_down(self) -> None:
        if self.log_scroll + 1 < len(self.logs):
            self.log_scroll += 1

    def current_time_range(self) -> TimeRange:
        return self.time_ranges[self.selected_time_range]

    def update_stats(self, storage: _StatsSource) -> None:
        """Refresh statistics, chart data and, where missing, status blocks."""
        self.endpoints_stats = storage.get_endpoint_stats()
        time_range = self.current_time_range()
        hours = time_range.duration_hours()

        for endpoint_id in [s.endpoint.id for s in self.endpoints_stats]:
            history = storage.get_uptime_history(endpoint_id, hours)
            if history:
                now = self.clock()
                chart = []
                for timestamp, uptime in history:
                    hours_ago = _whole_minutes(now - timestamp) / 60.0
                    chart.append((hours - min(max(hours_ago, 0.0), hours), uptime))
            else:
                chart = [(0.0, 0.0), (float(hours), 0.0)]
            self.uptime_history[endpoint_id] = chart

            if endpoint_id not in self.uptime_blocks:
                self.uptime_blocks[endpoint_id] = self._minute_blocks(
                    storage, endpoint_id, time_range.minutes
                )

    def add_realtime_block(self, endpoint_id: uuid.UUID, status: bool) -> None:
        """Record a fresh check, keeping only the latest blocks in time order."""
        blocks = self.uptime_blocks.setdefault(endpoint_id, [])
        blocks.append(UptimeBlock(self.clock(), status))
        if len(blocks) > MAX_BLOCKS:
            del blocks[: len(blocks) - MAX_BLOCKS]
        blocks.sort(key=lambda block: block.timestamp)

    def _minute_blocks(
        self, storage: _StatsSource, endpoint_id: uuid.UUID, minutes: int
    ) -> list[UptimeBlock]:
        history = storage.get_uptime_history(endpoint_id, minutes // 60 + 1)
        now = self.clock()
        start_time = now - timedelta(minutes=minutes)
        blocks = [
            UptimeBlock(timestamp, uptime > 0.0)
            for timestamp, uptime in history
            if timestamp >= start_time and 0 <= _whole_minutes(now - timestamp) < minutes
        ]
        blocks.sort(key=lambda block: block.timestamp)
        return blocks

    def next_endpoint(self) -> None:
        if self.endpoints_stats:
            self.selected_endpoint = (self.selected_endpoint + 1) % len(self.endpoints_stats)

    def previous_endpoint(self) -> None:
        if self.endpoints_stats:
            if self.selected_endpoint == 0:
                self.selected_endpoint = len(self.endpoints_stats) - 1
            else:
                self.selected_endpoint -= 1