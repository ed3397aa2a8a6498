"""Terminal dashboard that monitors HTTP endpoint uptime."""

__version__ = "0.1.0"

__all__ = ["__version__"]