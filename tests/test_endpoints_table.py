from datetime import UTC, datetime

from pingme.app import App
from pingme.canvas import Canvas, Color
from pingme.endpoints_table import format_endpoint_row, render_endpoints_table
from pingme.storage import Endpoint, EndpointStats


def _stats(url, status=None, uptime=0.0, last_ping=None, latency=None):
    return EndpointStats(
        endpoint=Endpoint(url),
        last_status=status,
        uptime_percentage=uptime,
        last_ping=last_ping,
        avg_latency=latency,
    )


def _find(canvas, text):
    for y, line in enumerate(canvas.lines()):
        x = line.find(text)
        if x >= 0:
            return x, y
    raise AssertionError(f"{text!r} not drawn")


def test_row_without_results():
    row = format_endpoint_row(_stats("http://a.example.com"))
    assert row == ("http://a.example.com", "N/A", "0.0%", "N/A", "Never")


def test_row_with_results():
    moment = datetime(2024, 1, 1, 12, 34, 56, tzinfo=UTC)
    row = format_endpoint_row(_stats("http://b.example.com", True, 100.0, moment, 120))
    assert row[1] == "UP"
    assert row[3] == "120ms"
    assert row[4] == moment.strftime("%H:%M:%S")


def test_row_down():
    assert format_endpoint_row(_stats("x", False))[1] == "DOWN"


def test_render_draws_header_and_rows():
    app = App(endpoints_stats=[_stats("http://a.example.com", True), _stats("http://b.example.com", False)])
    canvas = Canvas(100, 12)
    render_endpoints_table(canvas, app, canvas.area)
    assert "Endpoints" in canvas.row_text(0)
    hx, hy = _find(canvas, "URL")
    assert canvas.colors[hy][hx] is Color.YELLOW
    ux, uy = _find(canvas, "UP")
    assert canvas.colors[uy][ux] is Color.GREEN
    dx, dy = _find(canvas, "DOWN")
    assert canvas.colors[dy][dx] is Color.RED
    ax, ay = _find(canvas, "http://a.example.com")
    assert canvas.colors[ay][ax] is Color.YELLOW
    bx, by = _find(canvas, "http://b.example.com")
    assert canvas.colors[by][bx] is None
    assert by > ay


def test_render_scrolls_to_selected():
    stats = [_stats(f"http://host{i}.example.com") for i in range(10)]
    app = App(endpoints_stats=stats, selected_endpoint=9)
    canvas = Canvas(100, 8)
    render_endpoints_table(canvas, app, canvas.area)
    text = "\n".join(canvas.lines())
    assert "http://host9.example.com" in text
    assert "http://host0.example.com" not in text