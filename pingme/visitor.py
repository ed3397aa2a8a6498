"""Visitors that act on endpoints: polling them and storing what is learnt."""

from __future__ import annotations

import abc
import time
import uuid
from datetime import datetime
from typing import Any, Protocol

import httpx

from pingme.app import LogEntry, LogLevel
from pingme.storage import Endpoint, EndpointStats, MemoryStorage, PingResult, utcnow

USER_AGENT = "pingme/1.0"
CLIENT_TIMEOUT = 10.0
REQUEST_TIMEOUT = 5.0


class _Sink(Protocol):
    def put_nowait(self, item: Any) -> None: ...


class Visitor(abc.ABC):
    """Something that does work for each endpoint it is shown."""

    @abc.abstractmethod
    async def visit_endpoint(self, endpoint: Endpoint) -> None:
        """Act on one endpoint."""


class PollingVisitor(Visitor):
    """Checks endpoints over HTTP and sends results and log entries to queues."""

    def __init__(
        self,
        result_queue: _Sink,
        log_queue: _Sink,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=CLIENT_TIMEOUT, headers={"User-Agent": USER_AGENT}
        )
        self._result_queue = result_queue
        self._log_queue = log_queue

    async def __aenter__(self) -> PollingVisitor:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this visitor created it."""
        if self._owns_client:
            await self._client.aclose()

    def _send_log(self, level: LogLevel, message: str) -> None:
        self._log_queue.put_nowait(LogEntry(utcnow(), level, message))

    async def ping_endpoint(self, endpoint: Endpoint) -> PingResult:
        """Check an endpoint with HEAD, falling back to GET; failures mean down."""
        start = time.perf_counter()
        url = endpoint.url
        if not url.startswith(("http://", "https://")):
            url = f"http://{url}"

        self._send_log(LogLevel.INFO, f"Pinging: {url}")

        for method in ("HEAD", "GET"):
            try:
                response = await self._client.request(method, url, timeout=REQUEST_TIMEOUT)
            except (httpx.HTTPError, httpx.InvalidURL):
                continue
            latency = int((time.perf_counter() - start) * 1000)
            status = response.is_success
            if status:
                self._send_log(LogLevel.SUCCESS, f"{url} - UP ({latency}ms)")
            else:
                code = f"{response.status_code} {response.reason_phrase}".strip()
                self._send_log(LogLevel.WARNING, f"{url} - Status: {code} ({latency}ms)")
            return PingResult(endpoint.id, status, latency, utcnow())

        latency = int((time.perf_counter() - start) * 1000)
        return PingResult(endpoint.id, False, latency, utcnow())

    async def visit_endpoint(self, endpoint: Endpoint) -> None:
        self._result_queue.put_nowait(await self.ping_endpoint(endpoint))


class StorageVisitor:
    """Shared handle on the storage of endpoints and results."""

    def __init__(self, storage: MemoryStorage | None = None) -> None:
        self.storage = storage if storage is not None else MemoryStorage()

    def add_endpoint(self, endpoint: Endpoint) -> None:
        self.storage.add_endpoint(endpoint)

    def all_endpoints(self) -> list[Endpoint]:
        return self.storage.all_endpoints()

    def save_result(self, result: PingResult) -> None:
        self.storage.save_result(result)

    def get_endpoint_stats(self) -> list[EndpointStats]:
        return self.storage.get_endpoint_stats()

    def get_uptime_history(
        self, endpoint_id: uuid.UUID, hours: int
    ) -> list[tuple[datetime, float]]:
        return self.storage.get_uptime_history(endpoint_id, hours)