import uuid
from datetime import UTC, datetime, timedelta

import pytest

from pingme.app import App, InputMode, LogEntry, LogLevel, TimeRange, UptimeBlock
from pingme.storage import Endpoint, MemoryStorage, PingResult

NOW = datetime(2024, 1, 1, 12, 30, tzinfo=UTC)


@pytest.fixture
def app():
    return App(clock=lambda: NOW)


@pytest.fixture
def storage():
    return MemoryStorage(clock=lambda: NOW)


def test_time_range_names():
    assert TimeRange(60).display_name() == "60m"
    assert TimeRange(60).duration_hours() == 1


def test_defaults(app):
    assert app.input_mode is InputMode.NORMAL
    assert app.current_time_range() == TimeRange(60)
    assert not app.developer_mode


def test_add_log_records_entry(app):
    app.add_log(LogLevel.INFO, "Application started")
    assert app.logs == [LogEntry(NOW, LogLevel.INFO, "Application started")]


def test_logs_are_trimmed(app):
    for n in range(1001):
        app.add_log(LogLevel.INFO, str(n))
    assert len(app.logs) == 1001 - 100
    assert app.logs[0].message == "100"
    assert app.logs[-1].message == "1000"


def test_push_log_trims_too(app):
    for n in range(1001):
        app.push_log(LogEntry(NOW, LogLevel.ERROR, str(n)))
    assert app.logs[0].message == "100"


def test_toggle_developer_mode_resets_scroll(app):
    app.log_scroll = 5
    app.toggle_developer_mode()
    assert app.developer_mode and app.log_scroll == 0


def test_scrolling_is_bounded(app):
    app.scroll_logs_up()
    assert app.log_scroll == 0
    app.add_log(LogLevel.INFO, "a")
    app.add_log(LogLevel.INFO, "b")
    app.scroll_logs_down()
    app.scroll_logs_down()
    assert app.log_scroll == 1
    app.scroll_logs_up()
    assert app.log_scroll == 0


def test_realtime_blocks_keep_latest_sixty(app):
    endpoint_id = uuid.uuid4()
    for _ in range(70):
        app.add_realtime_block(endpoint_id, True)
    app.add_realtime_block(endpoint_id, False)
    blocks = app.uptime_blocks[endpoint_id]
    assert len(blocks) == 60
    assert blocks[-1] == UptimeBlock(NOW, False)


def test_endpoint_selection_wraps(app, storage):
    for url in ("a.example.com", "b.example.com", "c.example.com"):
        storage.add_endpoint(Endpoint(url))
    app.update_stats(storage)
    app.previous_endpoint()
    assert app.selected_endpoint == 2
    app.next_endpoint()
    assert app.selected_endpoint == 0
    app.next_endpoint()
    assert app.selected_endpoint == 1


def test_selection_ignored_without_endpoints(app):
    app.next_endpoint()
    app.previous_endpoint()
    assert app.selected_endpoint == 0


def test_update_stats_without_results(app, storage):
    endpoint = Endpoint("example.com")
    storage.add_endpoint(endpoint)
    app.update_stats(storage)
    assert [s.endpoint for s in app.endpoints_stats] == [endpoint]
    assert app.uptime_history[endpoint.id] == [(0.0, 0.0), (1.0, 0.0)]
    assert app.uptime_blocks[endpoint.id] == []


def test_update_stats_with_results(app, storage):
    endpoint = Endpoint("example.com")
    storage.add_endpoint(endpoint)
    storage.save_result(PingResult(endpoint.id, True, 50, NOW - timedelta(minutes=20)))
    app.update_stats(storage)
    chart = app.uptime_history[endpoint.id]
    assert all(0.0 <= x <= 1.0 for x, _ in chart)
    assert chart[-1][1] == 100.0
    assert app.uptime_blocks[endpoint.id] == [
        UptimeBlock(datetime(2024, 1, 1, 12, tzinfo=UTC), True)
    ]


def test_update_stats_keeps_existing_blocks(app, storage):
    endpoint = Endpoint("example.com")
    storage.add_endpoint(endpoint)
    app.add_realtime_block(endpoint.id, False)
    app.update_stats(storage)
    assert app.uptime_blocks[endpoint.id] == [UptimeBlock(NOW, False)]