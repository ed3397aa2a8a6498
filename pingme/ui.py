"""Choose which view to draw."""

from __future__ import annotations

from pingme.app import App
from pingme.canvas import Canvas
from pingme.developer_view import render_developer_view
from pingme.main_view import render_main_view


def ui(canvas: Canvas, app: App) -> None:
    """Draw the developer view in developer mode, otherwise the main view."""
    if app.developer_mode:
        render_developer_view(canvas, app)
    else:
        render_main_view(canvas, app)