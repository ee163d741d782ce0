"""Console sink for printing report sections."""

import json
from typing import Any

from lendtrack.sinks.serialization import to_dict


class ConsoleSink:
    """Output report records to console (stdout)."""

    def __init__(self, pretty: bool = True, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per section (None for all).
        """
        self.pretty = pretty
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def write_batch(self, section: str, records: list[Any]) -> None:
        """Write a titled section of records to console."""
        print(f"\n{'='*60}")
        print(f"{section} ({len(records)} records)")
        print("=" * 60)

        display_records = records[: self.max_records] if self.max_records else records

        for record in display_records:
            self._print(to_dict(record))

        if self.max_records and len(records) > self.max_records:
            print(f"... and {len(records) - self.max_records} more records")

        self._counts[section] = self._counts.get(section, 0) + len(records)

    def write_record(self, section: str, record: Any) -> None:
        """Write a titled section holding a single record."""
        print(f"\n{'='*60}")
        print(section)
        print("=" * 60)
        self._print(to_dict(record))
        self._counts[section] = self._counts.get(section, 0) + 1

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Report Summary")
        print("=" * 60)
        for section, count in self._counts.items():
            print(f"  {section}: {count} records")

    def _print(self, data: dict) -> None:
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        else:
            print(json.dumps(data, ensure_ascii=False, default=str))
