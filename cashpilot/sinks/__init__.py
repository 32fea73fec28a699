"""Output sinks for exporting records and reports."""

from cashpilot.sinks.console import ConsoleSink
from cashpilot.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
