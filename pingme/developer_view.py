"""The developer view: a scrollable table of log entries."""

from __future__ import annotations

from pingme.app import MAX_LOGS, App, LogEntry, LogLevel
from pingme.canvas import Canvas, Color, Rect, split_vertical

_LEVEL_COLORS = {
    LogLevel.INFO: Color.WHITE,
    LogLevel.ERROR: Color.RED,
    LogLevel.SUCCESS: Color.GREEN,
    LogLevel.WARNING: Color.YELLOW,
}
_HEADER_TEXT = "Developer Logs (Press 'd' to go back to main view)"
_INSTRUCTIONS = "↑/↓: Scroll logs | d: Back to main | q: Quit"
_TIME_WIDTH = 8
_LEVEL_WIDTH = 8
_MESSAGE_PERCENTAGE = 80


def visible_logs(app: App, height: int) -> list[LogEntry]:
    """The log entries shown in a log panel ``height`` rows tall."""
    rows = max(0, height - 2)
    if len(app.logs) <= rows:
        return list(app.logs)
    start = app.log_scroll
    return app.logs[start : min(start + rows, len(app.logs))]


def _write_text(canvas: Canvas, area: Rect, text: str, color: Color) -> None:
    if area.height and area.width:
        canvas.write(area.x, area.y, text[: area.width], color)


def _columns(area: Rect) -> list[tuple[int, int]]:
    message_x = area.x + _TIME_WIDTH + _LEVEL_WIDTH + 2
    message_width = max(0, min(area.width * _MESSAGE_PERCENTAGE // 100, area.right - message_x))
    return [
        (area.x, min(_TIME_WIDTH, area.width)),
        (area.x + _TIME_WIDTH + 1, max(0, min(_LEVEL_WIDTH, area.right - _TIME_WIDTH - 1 - area.x))),
        (message_x, message_width),
    ]


def render_developer_view(canvas: Canvas, app: App) -> None:
    """Draw the header, the log table and the key help."""
    header, body, footer = split_vertical(
        canvas.area, [("length", 3), ("min", 10), ("length", 2)], 1
    )

    canvas.draw_box(header, "Developer Mode", Color.CYAN)
    _write_text(canvas, header.inner(1), _HEADER_TEXT, Color.WHITE)

    canvas.draw_box(body, f"Logs ({len(app.logs)}/{MAX_LOGS})", Color.WHITE)
    table = body.inner(1)
    if table.height:
        columns = _columns(table)
        for (x, width), title in zip(columns, ("Time", "Level", "Message")):
            canvas.write(x, table.y, title[:width], Color.YELLOW)
        for row, entry in enumerate(visible_logs(app, body.height)):
            y = table.y + 2 + row
            if y >= table.bottom:
                break
            cells = (
                (entry.timestamp.strftime("%H:%M:%S"), None),
                (entry.level.value, _LEVEL_COLORS[entry.level]),
                (entry.message, None),
            )
            for (x, width), (text, color) in zip(columns, cells):
                canvas.write(x, y, text[:width], color)

    canvas.draw_box(footer, None, None)
    _write_text(canvas, footer.inner(1), _INSTRUCTIONS, Color.GRAY)