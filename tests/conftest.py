"""Pytest configuration and fixtures."""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Iterator

import pytest

from lendtrack.models import CompoundFrequency, InterestType, Loan, LoanType
from lendtrack.store import LoanBook


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def as_of() -> date:
    """Reference date used across valuation tests."""
    return date(2024, 6, 1)


@pytest.fixture
def make_loan() -> Callable[..., Loan]:
    """Factory for loans with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> Loan:
        fields: dict[str, Any] = {
            "loan_id": f"loan-test-{next(counter):03d}",
            "person_name": "Asha",
            "amount": Decimal("1000"),
            "loan_type": LoanType.LENT,
            "interest_type": InterestType.SIMPLE,
            "interest_rate": Decimal("0"),
            "start_date": date(2024, 1, 1),
            "duration_months": 12,
            "created_at": datetime(2024, 1, 1, 9, 0),
        }
        fields.update(overrides)
        return Loan(**fields)

    return _make


@pytest.fixture
def compound_loan(make_loan: Callable[..., Loan]) -> Loan:
    """25 000 at 8% compounded monthly over 12 months."""
    return make_loan(
        loan_id="loan-compound",
        amount=Decimal("25000"),
        interest_type=InterestType.COMPOUND,
        interest_rate=Decimal("8"),
        compound_frequency=CompoundFrequency.MONTHLY,
    )


@pytest.fixture
def book() -> LoanBook:
    """Create a fresh loan book for each test."""
    return LoanBook()


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """setup_logging() rewires the root and lendtrack loggers; undo it after each test."""
    root = logging.getLogger()
    package = logging.getLogger("lendtrack")
    handlers, root_level, package_level = root.handlers[:], root.level, package.level
    yield
    root.handlers[:] = handlers
    root.setLevel(root_level)
    package.setLevel(package_level)
