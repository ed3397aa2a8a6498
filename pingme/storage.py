"""In-memory storage of endpoints and their ping results."""

from __future__ import annotations

import math
import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

MAX_RESULTS = 50_000
TRIM_RESULTS = 10_000
SECONDS_PER_HOUR = 3600


def utcnow() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class Endpoint:
    """A monitored URL with a stable identifier."""

    url: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass(frozen=True)
class PingResult:
    """The outcome of a single check of an endpoint."""

    endpoint_id: uuid.UUID
    status: bool
    latency_ms: int
    timestamp: datetime


@dataclass(frozen=True)
class EndpointStats:
    """Aggregated figures for one endpoint."""

    endpoint: Endpoint
    last_status: bool | None
    uptime_percentage: float
    last_ping: datetime | None
    avg_latency: int | None


def _epoch_seconds(moment: datetime) -> int:
    return math.floor(moment.timestamp())


def _success_rate(results: list[PingResult]) -> float:
    successful = sum(1 for result in results if result.status)
    return successful / len(results) * 100.0


class MemoryStorage:
    """Thread-safe store of endpoints and a bounded list of ping results."""

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self.endpoints: dict[uuid.UUID, Endpoint] = {}
        self.ping_results: list[PingResult] = []

    def add_endpoint(self, endpoint: Endpoint) -> None:
        """Add or replace an endpoint, keyed by its id."""
        with self._lock:
            self.endpoints[endpoint.id] = endpoint

    def all_endpoints(self) -> list[Endpoint]:
        """Return a snapshot of every stored endpoint."""
        with self._lock:
            return list(self.endpoints.values())

    def save_result(self, result: PingResult) -> None:
        """Record a ping result, dropping the oldest ones when full."""
        with self._lock:
            self.ping_results.append(result)
            if len(self.ping_results) > MAX_RESULTS:
                del self.ping_results[:TRIM_RESULTS]

    def get_endpoint_stats(self) -> list[EndpointStats]:
        """Compute status, uptime and latency figures for every endpoint."""
        with self._lock:
            endpoints = list(self.endpoints.values())
            results = list(self.ping_results)

        stats = []
        for endpoint in endpoints:
            own = [r for r in results if r.endpoint_id == endpoint.id]
            last = own[-1] if own else None
            stats.append(
                EndpointStats(
                    endpoint=endpoint,
                    last_status=last.status if last else None,
                    uptime_percentage=_success_rate(own) if own else 0.0,
                    last_ping=last.timestamp if last else None,
                    avg_latency=sum(r.latency_ms for r in own) // len(own) if own else None,
                )
            )
        return stats

    def get_uptime_history(
        self, endpoint_id: uuid.UUID, hours: int
    ) -> list[tuple[datetime, float]]:
        """Return hourly uptime percentages covering the last ``hours`` hours.

        Hours without results count as 0%. An empty list means no results at all.
        """
        now = self._clock()
        since = now - timedelta(hours=hours)
        with self._lock:
            recent = [
                r
                for r in self.ping_results
                if r.endpoint_id == endpoint_id and r.timestamp >= since
            ]
        if not recent:
            return []

        by_hour: dict[int, list[PingResult]] = {}
        for result in recent:
            key = _epoch_seconds(result.timestamp) // SECONDS_PER_HOUR
            by_hour.setdefault(key, []).append(result)

        start_hour = _epoch_seconds(since) // SECONDS_PER_HOUR * SECONDS_PER_HOUR
        end_hour = _epoch_seconds(now) // SECONDS_PER_HOUR * SECONDS_PER_HOUR

        history = []
        for hour in range(start_hour, end_hour + 1, SECONDS_PER_HOUR):
            group = by_hour.get(hour // SECONDS_PER_HOUR)
            uptime = _success_rate(group) if group else 0.0
            history.append((datetime.fromtimestamp(hour, UTC), uptime))

        history.sort(key=lambda item: item[0])
        return history