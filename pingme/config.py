"""Configuration file loading."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path


class ConfigError(ValueError):
    """Raised when a configuration file cannot be understood."""


@dataclass
class Config:
    """The endpoints listed in a configuration file."""

    endpoints: list[str] = field(default_factory=list)


def parse_config(text: str) -> Config:
    """Parse TOML text holding an ``endpoints`` list of URLs."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc
    if "endpoints" not in data:
        raise ConfigError("missing field `endpoints`")
    endpoints = data["endpoints"]
    if not isinstance(endpoints, list) or not all(isinstance(e, str) for e in endpoints):
        raise ConfigError("`endpoints` must be a list of strings")
    return Config(endpoints=list(endpoints))


def load_config(path: str | Path) -> Config:
    """Read and parse the configuration file at ``path``."""
    return parse_config(Path(path).read_text(encoding="utf-8"))