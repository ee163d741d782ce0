"""Output sinks and import readers for loan data."""

from lendtrack.sinks.console import ConsoleSink
from lendtrack.sinks.json_file import JsonFileSink, read_loans

__all__ = ["ConsoleSink", "JsonFileSink", "read_loans"]
