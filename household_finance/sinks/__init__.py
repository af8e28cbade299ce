"""Output sinks for exporting household data."""

from household_finance.sinks.console import ConsoleSink
from household_finance.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
