"""Loan and payment records."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from lendtrack.models.enums import CompoundFrequency, InterestType, LoanStatus, LoanType


@dataclass
class Payment:
    """A repayment recorded against a loan."""

    amount: Decimal
    date: date  # When the money changed hands
    notes: str = ""
    timestamp: datetime | None = None  # When the payment was entered


@dataclass
class Loan:
    """Money lent to or borrowed from a single counterparty."""

    loan_id: str
    person_name: str  # Counterparty identity key
    amount: Decimal  # Principal
    loan_type: LoanType
    interest_type: InterestType
    interest_rate: Decimal  # Annual percentage (e.g., 12 for 12%)
    start_date: date
    duration_months: int
    compound_frequency: CompoundFrequency | None = None  # None means monthly
    status: LoanStatus = LoanStatus.ACTIVE
    payments_made: list[Payment] = field(default_factory=list)
    contact_info: str = ""
    notes: str = ""
    created_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == LoanStatus.ACTIVE
