"""Command line entry point for lendtrack.

Usage::

    lendtrack report lendtrack_export_2024-06-01.json --as-of 2024-06-01
    lendtrack report export.json --person "Rahul Kumar" --json
    lendtrack sample --count 30 --seed 42 --output output/
    lendtrack sample --demo
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from lendtrack.config import LOG_FORMATS, LendTrackConfig
from lendtrack.engine.portfolio import (
    all_person_summaries,
    dashboard_totals,
    person_summary,
    portfolio_statistics,
    recent_loans,
)
from lendtrack.engine.valuation import value_loan
from lendtrack.exceptions import LendTrackError
from lendtrack.generators import SampleLoanGenerator, demo_loans
from lendtrack.logging import setup_logging
from lendtrack.sinks import ConsoleSink, JsonFileSink, read_loans
from lendtrack.sinks.serialization import to_dict
from lendtrack.store import LoanBook

logger = logging.getLogger(__name__)


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def build_parser(config: LendTrackConfig) -> argparse.ArgumentParser:
    """Build the argument parser with defaults taken from ``config``."""
    parser = argparse.ArgumentParser(
        prog="lendtrack",
        description="Track money lent to and borrowed from people",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help=f"Log level (default: {config.log_level})",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=config.log_format,
        help=f"Log format (default: {config.log_format})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    report = subparsers.add_parser("report", help="Summarise an exported loan book")
    report.add_argument("file", type=Path, help="JSON export to read")
    report.add_argument(
        "--as-of",
        type=_iso_date,
        default=None,
        help="Reference date YYYY-MM-DD (default: today)",
    )
    report.add_argument(
        "--person",
        type=str,
        default=None,
        help="Only report on this counterparty (exact name)",
    )
    report.add_argument(
        "--recent",
        type=int,
        default=config.recent_limit,
        help=f"Number of recent active loans to list (default: {config.recent_limit})",
    )
    report.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON document instead of titled sections",
    )

    sample = subparsers.add_parser("sample", help="Write a sample loan book export")
    sample.add_argument(
        "--count",
        type=int,
        default=config.sample.num_loans,
        help=f"Number of loans to generate (default: {config.sample.num_loans})",
    )
    sample.add_argument(
        "--seed",
        type=int,
        default=config.sample.seed,
        help="Random seed for reproducibility",
    )
    sample.add_argument(
        "--locale",
        type=str,
        default=config.sample.locale,
        help=f"Faker locale for names (default: {config.sample.locale})",
    )
    sample.add_argument(
        "--as-of",
        type=_iso_date,
        default=None,
        help="Reference date YYYY-MM-DD (default: today)",
    )
    sample.add_argument(
        "--output",
        type=Path,
        default=config.output.export_dir,
        help=f"Output directory (default: {config.output.export_dir})",
    )
    sample.add_argument(
        "--demo",
        action="store_true",
        help="Write the two built-in demo loans instead of random ones",
    )
    return parser


def run_report(args: argparse.Namespace) -> int:
    """Print dashboard, per-person and statistics views for an export."""
    as_of = args.as_of or date.today()
    book = LoanBook()
    book.replace_all(read_loans(args.file))
    loans = book.all_loans()

    if args.person is not None:
        people = [person_summary(loans, args.person, as_of)]
        valuations = [value_loan(loan, as_of) for loan in loans if loan.person_name == args.person]
    else:
        people = all_person_summaries(loans, as_of)
        valuations = [value_loan(loan, as_of) for loan in recent_loans(loans, args.recent)]

    dashboard = dashboard_totals(loans, as_of)
    statistics = portfolio_statistics(loans)

    if args.json:
        document = {
            "as_of": as_of.isoformat(),
            "dashboard": to_dict(dashboard),
            "people": [to_dict(p) for p in people],
            "loans": [to_dict(v) for v in valuations],
            "statistics": to_dict(statistics),
        }
        print(json.dumps(document, indent=2, ensure_ascii=False))
        return 0

    sink = ConsoleSink()
    sink.write_record(f"Dashboard as of {as_of.isoformat()}", dashboard)
    sink.write_batch("People", people)
    sink.write_batch("Loans", valuations)
    sink.write_record("Statistics", statistics)
    sink.close()
    return 0


def run_sample(args: argparse.Namespace, config: LendTrackConfig) -> int:
    """Write a sample export."""
    as_of = args.as_of or date.today()
    if args.demo:
        loans = demo_loans()
    else:
        generator = SampleLoanGenerator(seed=args.seed, locale=args.locale)
        loans = generator.generate_book(args.count, as_of).all_loans()

    sink = JsonFileSink(args.output, pretty=config.output.pretty_json)
    path = sink.write_loans(loans, export_date=as_of)
    sink.close()
    print(path)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    try:
        config = LendTrackConfig.from_env()
    except LendTrackError as exc:
        print(f"lendtrack: {exc}", file=sys.stderr)
        return 2

    args = build_parser(config).parse_args(argv)
    setup_logging(args.log_level, args.log_format, stream=sys.stderr)

    try:
        if args.command == "report":
            return run_report(args)
        return run_sample(args, config)
    except (LendTrackError, OSError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
