# pingme

pingme watches a set of HTTP endpoints and shows in your terminal whether they
are up. It checks every endpoint once at start-up and then once a minute. Each
check sends a `HEAD` request. If that request fails in any way (a timeout, a
connection error, an invalid URL), pingme sends a `GET` instead. A response
with a 2xx status counts as up. Any other response counts as down, and so does
a `GET` that also fails. Results are kept in memory, and the dashboard redraws
from them about ten times a second.

The interface uses the standard library's `curses` module, so it runs on
POSIX systems.

## Installation

```
pip install .
```

## Usage

To monitor a single URL:

```
pingme https://example.com
```

When a URL has no `http://` or `https://` scheme, pingme adds `http://` in
front of it before checking.

To monitor the endpoints listed in a configuration file:

```
pingme --config endpoints.toml
```

`-c` is the short form of `--config`. If the file given with `--config` does
not exist, pingme starts with no endpoints. If you give neither a URL nor
`--config`, pingme looks for a file named `.ping` in the current directory and
loads it when it is there. You can also add endpoints while the dashboard is
running.

When a configuration file cannot be read, pingme prints `Error: ...` and exits
with status 1. This covers invalid TOML, a missing `endpoints` key, and entries
that are not strings.

### Configuration file

The configuration file is TOML and holds a single list of endpoints:

```toml
endpoints = [
    "https://example.com",
    "example.org/health",
]
```

## The dashboard

The main view has four parts:

- **Endpoints table**: one row per endpoint with its URL, its last status
  (UP / DOWN / N/A), its uptime percentage, its average latency and the time
  of its last ping. The selected row is highlighted.
- **Uptime history chart**: hourly uptime of the selected endpoint over the
  current 60-minute window.
- **Uptime status blocks**: one coloured block per check, green for up and red
  for down. Only the latest 60 checks are shown.
- **Input line**: the key help, or the URL you are typing.

### Keys

Main view:

| Key        | Action                               |
|------------|--------------------------------------|
| `a`        | start typing a URL to add            |
| `j` / Down | select the next endpoint             |
| `k` / Up   | select the previous endpoint         |
| `r`        | refresh statistics                   |
| `d`        | open the developer log view          |
| `q`        | quit                                 |

While typing a URL, Enter adds it, Esc cancels, and Backspace deletes the last
character.

Developer log view:

| Key       | Action                   |
|-----------|--------------------------|
| Up / Down | scroll the log           |
| `c`       | clear the log            |
| `d` / `q` | go back to the main view |

The log holds at most 1000 entries. When it grows past that, the oldest 100
entries are dropped.

## Library use

You can use the pieces without the terminal interface:

```python
from pingme.ping import PingManager

manager = PingManager(60)
endpoint = manager.add_endpoint("https://example.com")
print(manager.get_all_endpoints())
```

- `pingme.storage.MemoryStorage` stores endpoints and ping results and computes
  per-endpoint statistics (`get_endpoint_stats`) and hourly uptime
  (`get_uptime_history`). It keeps at most 50,000 results; once it goes past
  that, the oldest 10,000 are dropped.
- `pingme.visitor.PollingVisitor` checks one endpoint over HTTP (`ping_endpoint`)
  and puts results and log entries on the queues you give it.
- `pingme.ping.PingManager` visits every endpoint once with `poll_once`, or
  keeps polling at its interval with `start_polling` until a stop event is set.
- `pingme.config.load_config` and `parse_config` read a configuration file.
- `pingme.app.App` holds the state that the views draw. `pingme.ui.ui` draws
  that state onto a `pingme.canvas.Canvas` character grid.

## What pingme does not do

- Nothing is saved to disk. All endpoints and results are lost when the
  program exits.
- Endpoints cannot be removed or edited while the dashboard runs.
- The chart and status blocks cover a fixed 60-minute window. The check
  interval is fixed at one minute when run from the `pingme` command.

## Running the tests

```
pip install .[test]
pytest
```