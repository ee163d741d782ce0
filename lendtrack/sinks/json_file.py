"""JSON file export and import of the whole loan collection."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Iterable

from lendtrack.exceptions import ImportFormatError
from lendtrack.models.loan import Loan
from lendtrack.sinks.serialization import loan_from_dict, loan_to_dict

logger = logging.getLogger(__name__)

EXPORT_PREFIX = "lendtrack_export_"


def export_filename(export_date: date) -> str:
    """Default export file name for a given day."""
    return f"{EXPORT_PREFIX}{export_date.isoformat()}.json"


class JsonFileSink:
    """Write loan collections to JSON files."""

    def __init__(self, output_dir: str | Path, pretty: bool = True) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._written: list[tuple[Path, int]] = []

    def write_loans(
        self,
        loans: Iterable[Loan],
        export_date: date | None = None,
        filename: str | None = None,
    ) -> Path:
        """Write every loan to one JSON array file.

        Parameters
        ----------
        loans : Iterable[Loan]
            Loans to export, written in the given order.
        export_date : date | None
            Day used in the default file name (today when omitted).
        filename : str | None
            Explicit file name overriding the default.

        Returns
        -------
        Path
            Path of the written file.
        """
        if filename is None:
            filename = export_filename(export_date or date.today())
        file_path = self.output_dir / filename

        data = [loan_to_dict(loan) for loan in loans]

        with open(file_path, "w", encoding="utf-8") as f:
            if self.pretty:
                json.dump(data, f, indent=2, ensure_ascii=False)
            else:
                json.dump(data, f, ensure_ascii=False)

        self._written.append((file_path, len(data)))
        logger.info("Exported %d loans to %s", len(data), file_path)
        return file_path

    def close(self) -> None:
        """Log a summary of written files."""
        for file_path, count in self._written:
            logger.debug("  %s: %d loans", file_path, count)


def read_loans(path: str | Path) -> list[Loan]:
    """Load a loan collection exported by ``JsonFileSink``.

    Raises
    ------
    ImportFormatError
        If the file is not valid JSON, is not an array, or holds a record
        that cannot be read as a loan.
    """
    file_path = Path(path)
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ImportFormatError(f"{file_path} is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise ImportFormatError(f"{file_path} must contain a JSON array of loans")

    loans = []
    for index, record in enumerate(data):
        try:
            loans.append(loan_from_dict(record))
        except ImportFormatError as exc:
            raise ImportFormatError(f"{file_path}: record {index}: {exc}") from exc

    logger.info("Imported %d loans from %s", len(loans), file_path)
    return loans
