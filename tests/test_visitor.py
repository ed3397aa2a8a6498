import asyncio
import queue
from datetime import UTC, datetime

import httpx
import pytest
import respx

from pingme.app import LogLevel
from pingme.storage import Endpoint, MemoryStorage, PingResult
from pingme.visitor import PollingVisitor, StorageVisitor, Visitor


@pytest.fixture
def router():
    with respx.mock(assert_all_called=False) as mock_router:
        yield mock_router


def ping(url):
    results, logs = queue.Queue(), queue.Queue()
    endpoint = Endpoint(url)

    async def run():
        async with PollingVisitor(results, logs) as visitor:
            return await visitor.ping_endpoint(endpoint)

    result = asyncio.run(run())
    return endpoint, result, list(logs.queue)


def test_visitor_is_abstract():
    with pytest.raises(TypeError):
        Visitor()


def test_head_success(router):
    router.route(method="HEAD", host="example.com").mock(return_value=httpx.Response(200))
    endpoint, result, logs = ping("example.com")
    assert result.status is True
    assert result.endpoint_id == endpoint.id
    assert logs[0].message == "Pinging: http://example.com"
    assert logs[-1].level is LogLevel.SUCCESS
    assert logs[-1].message.startswith("http://example.com - UP (")


def test_non_success_status_is_down(router):
    router.route(method="HEAD", host="example.com").mock(return_value=httpx.Response(404))
    _, result, logs = ping("https://example.com")
    assert result.status is False
    assert logs[-1].level is LogLevel.WARNING
    assert logs[-1].message.startswith("https://example.com - Status: 404 Not Found (")


def test_falls_back_to_get_after_timeout(router):
    router.route(method="HEAD", host="example.com").mock(side_effect=httpx.ConnectTimeout)
    get_route = router.route(method="GET", host="example.com").mock(
        return_value=httpx.Response(200)
    )
    _, result, _ = ping("example.com")
    assert result.status is True
    assert get_route.call_count == 1


def test_both_methods_failing_is_down(router):
    router.route(host="example.com").mock(side_effect=httpx.ConnectError)
    _, result, logs = ping("example.com")
    assert result.status is False
    assert result.latency_ms >= 0
    assert [entry.level for entry in logs] == [LogLevel.INFO]


def test_visit_endpoint_sends_result(router):
    router.route(method="HEAD", host="example.com").mock(return_value=httpx.Response(204))
    results, logs = queue.Queue(), queue.Queue()
    endpoint = Endpoint("http://example.com")

    async def run():
        async with PollingVisitor(results, logs) as visitor:
            await visitor.visit_endpoint(endpoint)

    asyncio.run(run())
    sent = results.get_nowait()
    assert sent.endpoint_id == endpoint.id and sent.status is True
    assert results.empty()


def test_storage_visitor_delegates():
    moment = datetime(2024, 1, 1, 12, 30, tzinfo=UTC)
    backing = MemoryStorage(clock=lambda: moment)
    visitor = StorageVisitor(backing)
    endpoint = Endpoint("example.com")
    visitor.add_endpoint(endpoint)
    visitor.save_result(PingResult(endpoint.id, True, 10, moment))
    assert visitor.all_endpoints() == [endpoint]
    assert backing.ping_results[0].latency_ms == 10
    assert visitor.get_endpoint_stats()[0].last_status is True
    assert visitor.get_uptime_history(endpoint.id, 1) == backing.get_uptime_history(
        endpoint.id, 1
    )