"""The table listing every endpoint and its figures."""

from __future__ import annotations

from collections.abc import Sequence

from pingme.app import App
from pingme.canvas import Canvas, Color, Rect
from pingme.storage import EndpointStats

_HEADERS = ("URL", "Status", "Uptime %", "Avg Latency", "Last Ping")
_COLUMN_PERCENTAGES = (40, 10, 15, 15, 20)
_COLUMN_SPACING = 1


def format_endpoint_row(stats: EndpointStats) -> tuple[str, str, str, str, str]:
    """The cell texts of one endpoint's row."""
    status = {True: "UP", False: "DOWN", None: "N/A"}[stats.last_status]
    latency = "N/A" if stats.avg_latency is None else f"{stats.avg_latency}ms"
    last_ping = "Never" if stats.last_ping is None else stats.last_ping.strftime("%H:%M:%S")
    return (
        stats.endpoint.url,
        status,
        f"{stats.uptime_percentage:.1f}%",
        latency,
        last_ping,
    )


def _status_color(last_status: bool | None) -> Color:
    return {True: Color.GREEN, False: Color.RED, None: Color.GRAY}[last_status]


def _columns(area: Rect) -> list[tuple[int, int]]:
    columns = []
    x = area.x
    for percentage in _COLUMN_PERCENTAGES:
        width = max(0, min(area.width * percentage // 100, area.right - x))
        columns.append((x, width))
        x += width + _COLUMN_SPACING
    return columns


def _write_row(
    canvas: Canvas,
    columns: list[tuple[int, int]],
    y: int,
    texts: Sequence[str],
    colors: Sequence[Color | None],
) -> None:
    for (x, width), text, color in zip(columns, texts, colors):
        if width:
            canvas.write(x, y, text[:width], color)


def render_endpoints_table(canvas: Canvas, app: App, area: Rect) -> None:
    """Draw the endpoints table, scrolled so the selected row is visible."""
    canvas.draw_box(area, "Endpoints", Color.WHITE)
    inner = area.inner(1)
    if inner.height == 0:
        return
    columns = _columns(inner)
    _write_row(canvas, columns, inner.y, _HEADERS, [Color.YELLOW] * len(_HEADERS))

    body_top = inner.y + 2
    body_height = inner.bottom - body_top
    if body_height <= 0:
        return
    fit = max(1, (body_height + 1) // 2)
    offset = max(0, app.selected_endpoint - fit + 1)

    visible = list(enumerate(app.endpoints_stats))[offset : offset + fit]
    for row, (index, stats) in enumerate(visible):
        highlight = Color.YELLOW if index == app.selected_endpoint else None
        colors = [highlight, _status_color(stats.last_status), highlight, highlight, highlight]
        _write_row(canvas, columns, body_top + 2 * row, format_endpoint_row(stats), colors)