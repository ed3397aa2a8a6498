"""Command line entry point and the interactive terminal loop."""

from __future__ import annotations

import argparse
import asyncio
import curses
import itertools
import queue
import sys
import threading
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any, Protocol

from pingme.app import App, InputMode, LogLevel
from pingme.canvas import Canvas, Color
from pingme.config import load_config
from pingme.ping import PingManager
from pingme.storage import Endpoint
from pingme.ui import ui
from pingme.visitor import StorageVisitor

DEFAULT_CONFIG = ".ping"
POLL_INTERVAL_SECONDS = 60
KEY_TIMEOUT_MS = 100

KEY_UP = "up"
KEY_DOWN = "down"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_ENTER = "enter"
KEY_ESC = "esc"
KEY_BACKSPACE = "backspace"


class _EndpointStore(Protocol):
    def add_endpoint(self, endpoint: Endpoint) -> None: ...


def build_parser() -> argparse.ArgumentParser:
    """The argument parser of the ``pingme`` command."""
    parser = argparse.ArgumentParser(
        prog="pingme",
        description="Monitor server uptime with enhanced visualization",
    )
    parser.add_argument("url", nargs="?", help="URL to monitor")
    parser.add_argument("-c", "--config", metavar="FILE", help="Configuration file")
    return parser


def load_endpoints(manager: PingManager, args: argparse.Namespace) -> list[Endpoint]:
    """Register the endpoints named on the command line or in a config file.

    A ``--config`` file that does not exist adds nothing. Without ``--config``
    or a URL, a ``.ping`` file in the working directory is used if present.
    """
    if args.config is not None:
        path = Path(args.config)
        urls = load_config(path).endpoints if path.exists() else []
    elif args.url is not None:
        urls = [args.url]
    elif Path(DEFAULT_CONFIG).exists():
        urls = load_config(DEFAULT_CONFIG).endpoints
    else:
        urls = []
    return [manager.add_endpoint(url) for url in urls]


def handle_normal_mode_input(app: App, storage: StorageVisitor, key: str) -> bool:
    """Handle a key in the main view; return True when the program should quit."""
    if key == "q":
        app.add_log(LogLevel.INFO, "Exiting application")
        return True
    if key == "a":
        app.input_mode = InputMode.ADDING
        app.url_input = ""
        app.add_log(LogLevel.INFO, "Entering URL input mode")
    elif key == "d":
        app.toggle_developer_mode()
        app.add_log(LogLevel.INFO, "Switched to developer mode")
    elif key in (KEY_DOWN, "j"):
        app.next_endpoint()
    elif key in (KEY_UP, "k"):
        app.previous_endpoint()
    elif key == "r":
        app.add_log(LogLevel.INFO, "Refreshing data...")
        try:
            app.update_stats(storage)
        except Exception as exc:  # noqa: BLE001 - a failed refresh is only reported
            app.add_log(LogLevel.ERROR, f"Failed to refresh: {exc}")
        else:
            app.add_log(LogLevel.SUCCESS, "Data refreshed successfully")
    return False


def handle_developer_mode_input(app: App, key: str) -> None:
    """Handle a key in the developer view."""
    if key in ("q", "d"):
        app.toggle_developer_mode()
        app.add_log(LogLevel.INFO, "Switched to normal mode")
    elif key == KEY_UP:
        app.scroll_logs_up()
    elif key == KEY_DOWN:
        app.scroll_logs_down()
    elif key == "c":
        app.logs.clear()
        app.add_log(LogLevel.INFO, "Logs cleared")


def handle_adding_mode_input(app: App, storage: _EndpointStore, key: str) -> bool:
    """Handle a key while a URL is typed; never asks the program to quit."""
    if key == KEY_ENTER:
        url = app.url_input
        if url:
            try:
                storage.add_endpoint(Endpoint(url))
            except Exception as exc:  # noqa: BLE001 - reported in the log
                app.add_log(LogLevel.ERROR, f"Failed to add endpoint {url}: {exc}")
            else:
                app.add_log(LogLevel.SUCCESS, f"Added endpoint: {url}")
        app.input_mode = InputMode.NORMAL
    elif key == KEY_ESC:
        app.input_mode = InputMode.NORMAL
        app.add_log(LogLevel.INFO, "Cancelled URL input")
    elif key == KEY_BACKSPACE:
        app.url_input = app.url_input[:-1]
    elif len(key) == 1 and key.isprintable():
        app.url_input += key
    return False


def _drain(source: queue.Queue[Any]) -> Iterator[Any]:
    while True:
        try:
            yield source.get_nowait()
        except queue.Empty:
            return


_SPECIAL_CHARS = {
    "\n": KEY_ENTER,
    "\r": KEY_ENTER,
    "\x1b": KEY_ESC,
    "\x7f": KEY_BACKSPACE,
    "\b": KEY_BACKSPACE,
}
_SPECIAL_CODES = {
    curses.KEY_UP: KEY_UP,
    curses.KEY_DOWN: KEY_DOWN,
    curses.KEY_LEFT: KEY_LEFT,
    curses.KEY_RIGHT: KEY_RIGHT,
    curses.KEY_ENTER: KEY_ENTER,
    curses.KEY_BACKSPACE: KEY_BACKSPACE,
}


def _read_key(screen: Any) -> str | None:
    try:
        raw = screen.get_wch()
    except curses.error:
        return None
    if isinstance(raw, str):
        return _SPECIAL_CHARS.get(raw, raw)
    return _SPECIAL_CODES.get(raw)


_CURSES_COLORS = {
    Color.WHITE: "COLOR_WHITE",
    Color.RED: "COLOR_RED",
    Color.GREEN: "COLOR_GREEN",
    Color.YELLOW: "COLOR_YELLOW",
    Color.CYAN: "COLOR_CYAN",
    Color.GRAY: "COLOR_WHITE",
}


def _init_colors() -> dict[Color, int]:
    if not curses.has_colors():
        return {}
    curses.start_color()
    background = curses.COLOR_BLACK
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        pass
    attributes = {}
    for pair, color in enumerate(Color, start=1):
        curses.init_pair(pair, getattr(curses, _CURSES_COLORS[color]), background)
        attr = curses.color_pair(pair)
        if color is Color.GRAY:
            attr |= curses.A_DIM
        attributes[color] = attr
    return attributes


def _draw(screen: Any, app: App, attributes: dict[Color, int]) -> None:
    height, width = screen.getmaxyx()
    canvas = Canvas(width, height)
    ui(canvas, app)
    screen.erase()
    for y in range(canvas.height):
        x = 0
        cells = zip(canvas.chars[y], canvas.colors[y])
        for color, run in itertools.groupby(cells, key=lambda cell: cell[1]):
            text = "".join(char for char, _ in run)
            attr = attributes.get(color, 0) if color is not None else 0
            try:
                screen.addstr(y, x, text, attr)
            except curses.error:
                pass  # writing the last cell of the screen moves the cursor off it
            x += len(text)
    screen.refresh()


def _event_loop(
    screen: Any,
    app: App,
    storage: StorageVisitor,
    results: queue.Queue[Any],
    logs: queue.Queue[Any],
) -> None:
    attributes = _init_colors()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    screen.timeout(KEY_TIMEOUT_MS)

    while True:
        for result in _drain(results):
            storage.save_result(result)
            app.add_realtime_block(result.endpoint_id, result.status)
            app.update_stats(storage)
        for entry in _drain(logs):
            app.push_log(entry)

        app.update_stats(storage)
        _draw(screen, app, attributes)

        key = _read_key(screen)
        if key is None:
            continue
        if app.input_mode is InputMode.ADDING:
            handle_adding_mode_input(app, storage, key)
        elif app.developer_mode:
            handle_developer_mode_input(app, key)
        elif handle_normal_mode_input(app, storage, key):
            return


def run_app(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, start polling in the background and run the interface."""
    args = build_parser().parse_args(argv)
    manager = PingManager(POLL_INTERVAL_SECONDS)
    load_endpoints(manager, args)

    results: queue.Queue[Any] = queue.Queue()
    logs: queue.Queue[Any] = queue.Queue()
    stop = threading.Event()
    poller = threading.Thread(
        target=lambda: asyncio.run(manager.start_polling(results, logs, stop)),
        name="pingme-poller",
        daemon=True,
    )
    poller.start()

    app = App()
    storage = manager.storage
    app.add_log(LogLevel.INFO, "Application started")
    try:
        curses.wrapper(_event_loop, app, storage, results, logs)
    except KeyboardInterrupt:
        pass
    finally:
        stop.set()
        poller.join(timeout=1.0)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the program and return its exit status."""
    try:
        run_app(argv)
    except Exception as exc:  # noqa: BLE001 - any failure ends the program with a message
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())