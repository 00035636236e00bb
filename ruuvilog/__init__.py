"""Decode RuuviTag format 5 advertisements, read logger settings and store readings in a database."""

__version__ = "0.1.0"
__all__ = ["config", "logger", "protocol", "settings", "store"]