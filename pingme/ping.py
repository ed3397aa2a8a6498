"""Periodic polling of the configured endpoints."""

from __future__ import annotations

import asyncio
import sys
from typing import Any, Protocol

from pingme.storage import Endpoint
from pingme.visitor import PollingVisitor, StorageVisitor, Visitor

_STOP_CHECK_SECONDS = 0.1


class _Sink(Protocol):
    def put_nowait(self, item: Any) -> None: ...


class _Flag(Protocol):
    def is_set(self) -> bool: ...


class PingManager:
    """Owns the endpoint storage and polls every endpoint at a fixed interval."""

    def __init__(self, interval_seconds: float = 60, storage: StorageVisitor | None = None) -> None:
        self.storage = storage if storage is not None else StorageVisitor()
        self.interval = interval_seconds

    def add_endpoint(self, url: str) -> Endpoint:
        """Register a URL under a fresh id and return the new endpoint."""
        endpoint = Endpoint(url)
        self.storage.add_endpoint(endpoint)
        return endpoint

    def get_all_endpoints(self) -> list[Endpoint]:
        return self.storage.all_endpoints()

    async def poll_once(self, visitor: Visitor) -> None:
        """Visit every endpoint once; a failure is reported and does not stop the rest."""
        for endpoint in self.get_all_endpoints():
            try:
                await visitor.visit_endpoint(endpoint)
            except Exception as exc:  # noqa: BLE001 - one bad endpoint must not stop polling
                print(f"Error polling {endpoint.url}: {exc}", file=sys.stderr)

    async def start_polling(self, result_queue: _Sink, log_queue: _Sink, stop_event: _Flag) -> None:
        """Poll immediately, then once per interval, until ``stop_event`` is set."""
        loop = asyncio.get_running_loop()
        async with PollingVisitor(result_queue, log_queue) as visitor:
            while not stop_event.is_set():
                await self.poll_once(visitor)
                deadline = loop.time() + self.interval
                while not stop_event.is_set():
                    remaining = deadline - loop.time()
                    if remaining <= 0:
                        break
                    await asyncio.sleep(min(_STOP_CHECK_SECONDS, remaining))