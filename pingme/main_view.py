"""The main view: endpoints table, uptime chart, status blocks and input line."""

from __future__ import annotations

from collections.abc import Sequence

from pingme.app import App, InputMode, TimeRange, UptimeBlock
from pingme.canvas import Canvas, Color, Rect, split_vertical
from pingme.endpoints_table import render_endpoints_table
from pingme.storage import EndpointStats

_Y_LABELS = ("0%", "25%", "50%", "75%", "100%")
_BLOCK_CHAR = "█"
_POINT_CHAR = "•"

_Span = tuple[str, Color | None]


def render_main_view(canvas: Canvas, app: App) -> None:
    """Draw every section of the main view."""
    table, chart, blocks, entry = split_vertical(
        canvas.area, [("min", 8), ("length", 10), ("length", 8), ("length", 3)], 1
    )
    render_endpoints_table(canvas, app, table)
    render_uptime_chart(canvas, app, chart)
    render_uptime_blocks(canvas, app, blocks)
    render_input_section(canvas, app, entry)


def _selected_stats(app: App) -> EndpointStats | None:
    if 0 <= app.selected_endpoint < len(app.endpoints_stats):
        return app.endpoints_stats[app.selected_endpoint]
    return None


def _notice(canvas: Canvas, area: Rect, title: str, message: str) -> None:
    canvas.draw_box(area, title, Color.YELLOW)
    inner = area.inner(1)
    if inner.height:
        canvas.write(inner.x, inner.y, message[: inner.width], Color.GRAY)


def render_uptime_chart(canvas: Canvas, app: App, area: Rect) -> None:
    """Draw the uptime history of the selected endpoint as a line chart."""
    selected = _selected_stats(app)
    if selected is None:
        return
    data = app.uptime_history.get(selected.endpoint.id)
    if data is None:
        return
    if not data:
        _notice(canvas, area, "Uptime History", "No uptime data available yet...")
        return
    time_range = app.current_time_range()
    title = f"{time_range.display_name()} Uptime History - {selected.endpoint.url}"
    canvas.draw_box(area, title, Color.WHITE)
    _draw_chart(canvas, area.inner(1), data, time_range)


def _draw_chart(
    canvas: Canvas, area: Rect, data: Sequence[tuple[float, float]], time_range: TimeRange
) -> None:
    axis_x = area.x + max(len(label) for label in _Y_LABELS)
    plot_x = axis_x + 1
    plot_width = area.right - plot_x
    plot_top = area.y + 1
    axis_y = area.bottom - 2
    label_y = area.bottom - 1
    plot_height = axis_y - plot_top
    if plot_width <= 0 or plot_height <= 0:
        return

    canvas.write(area.x, area.y, "Uptime %"[: area.width], Color.GRAY)
    for y in range(plot_top, axis_y):
        canvas.write(axis_x, y, "│", Color.GRAY)
    canvas.write(axis_x, axis_y, "└" + "─" * plot_width, Color.GRAY)
    canvas.write(area.right - len("Time"), axis_y, "Time", Color.GRAY)

    for i, label in enumerate(_Y_LABELS):
        row = axis_y - 1 - round(i * (plot_height - 1) / (len(_Y_LABELS) - 1))
        canvas.write(axis_x - len(label), row, label, Color.GRAY)

    labels = generate_time_labels(time_range)
    for i, label in enumerate(labels):
        column = plot_x + round(i * (plot_width - 1) / (len(labels) - 1))
        column = max(area.x, min(column, plot_x + plot_width - len(label)))
        canvas.write(column, label_y, label, Color.GRAY)

    x_max = time_range.duration_hours()

    def to_cell(x: float, y: float) -> tuple[float, float]:
        x_fraction = min(max(x / x_max, 0.0), 1.0) if x_max > 0 else 0.0
        y_fraction = min(max(y / 100.0, 0.0), 1.0)
        return plot_x + x_fraction * (plot_width - 1), axis_y - 1 - y_fraction * (plot_height - 1)

    points = [to_cell(x, y) for x, y in data]
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        steps = max(round(abs(x1 - x0)), round(abs(y1 - y0)), 1)
        for step in range(steps + 1):
            t = step / steps
            canvas.write(round(x0 + (x1 - x0) * t), round(y0 + (y1 - y0) * t), _POINT_CHAR, Color.CYAN)
    if len(points) == 1:
        x, y = points[0]
        canvas.write(round(x), round(y), _POINT_CHAR, Color.CYAN)


def render_uptime_blocks(canvas: Canvas, app: App, area: Rect) -> None:
    """Draw the recent up/down checks of the selected endpoint as coloured blocks."""
    selected = _selected_stats(app)
    if selected is None:
        return
    time_range = app.current_time_range()
    blocks = app.uptime_blocks.get(selected.endpoint.id)
    if blocks is None:
        _notice(canvas, area, "Uptime Status", "No uptime status data available...")
        return
    title = f"Uptime Status - {selected.endpoint.url} ({time_range.display_name()})"
    canvas.draw_box(area, title, Color.WHITE)
    render_status_blocks(canvas, blocks, area.inner(1), time_range)


def render_status_blocks(
    canvas: Canvas, blocks: Sequence[UptimeBlock], area: Rect, time_range: TimeRange
) -> None:
    """Draw one block per check, wrapped into rows, with a legend if room is left."""
    if not blocks or area.height < 3:
        return
    available_width = max(0, area.width - 2)
    available_height = max(0, area.height - 2)
    block_width, block_height, per_row = calculate_block_dimensions(available_width, time_range)

    lines: list[list[_Span]] = []
    for start in range(0, len(blocks), per_row):
        spans: list[_Span] = []
        for index in range(start, start + per_row):
            if index < len(blocks):
                spans.append((_BLOCK_CHAR * block_width, uptime_color(blocks[index].status)))
                spans.append((" ", None))
            else:
                spans.append((" " * (block_width + 1), None))
        lines.extend([spans] * block_height)

    if len(lines) < available_height:
        lines.append([])
        lines.append(
            [
                (_BLOCK_CHAR, Color.GREEN),
                (" Up  ", None),
                (_BLOCK_CHAR, Color.RED),
                (" Down  ", None),
            ]
        )

    for y, spans in zip(range(area.y, area.bottom), lines):
        x = area.x
        for text, color in spans:
            room = area.right - x
            if room <= 0:
                break
            canvas.write(x, y, text[:room], color)
            x += len(text)


def calculate_block_dimensions(available_width: int, time_range: TimeRange) -> tuple[int, int, int]:
    """Block width, block height and blocks per row for the given width."""
    block_width = 1
    block_height = 1
    per_row = available_width // (block_width + 1)
    return block_width, block_height, max(per_row, 1)


def uptime_color(status: bool) -> Color:
    """Green for up, red for down."""
    return Color.GREEN if status else Color.RED


def generate_time_labels(time_range: TimeRange) -> list[str]:
    """The x-axis labels of the chart, oldest first."""
    m = time_range.minutes
    return [
        f"{m}m ago",
        f"{int(m * 3 / 4)}m ago",
        f"{int(m / 2)}m ago",
        f"{int(m / 4)}m ago",
        "Now",
    ]


def render_input_section(canvas: Canvas, app: App, area: Rect) -> None:
    """Draw the key help, or the URL being typed while adding an endpoint."""
    if app.input_mode is InputMode.ADDING:
        title = "Enter URL (ESC to cancel, Enter to confirm)"
    else:
        title = "Press 'a' to add URL, 'q' to quit"
    canvas.draw_box(area, title, None)
    if app.input_mode is InputMode.ADDING:
        inner = area.inner(1)
        for y, line in zip(range(inner.y, inner.bottom), app.url_input.split("\n")):
            canvas.write(inner.x, y, line[: inner.width], None)