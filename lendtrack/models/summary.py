"""Derived value structures computed by the engine.

None of these are persisted: they are recomputed from the loan book and an
as-of date whenever a view needs them.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from lendtrack.models.enums import NetPosition


@dataclass(frozen=True)
class OutstandingBreakdown:
    """What is owed on a loan as of a given date."""

    principal: Decimal
    interest: Decimal  # Accrued up to the as-of date
    payments: Decimal
    outstanding: Decimal  # Floored at zero


@dataclass(frozen=True)
class PaymentAllocation:
    """Interest-first split of a proposed payment (preview only)."""

    amount: Decimal
    interest_portion: Decimal
    principal_portion: Decimal


@dataclass(frozen=True)
class InterestPreview:
    """Interest and total repayment for loan terms before they are saved."""

    interest: Decimal
    total: Decimal
    years: Decimal
    periods_per_year: int | None  # None for simple interest


@dataclass(frozen=True)
class LoanValuation:
    """Everything a loan card or detail view shows for one loan."""

    loan_id: str
    principal: Decimal
    contracted_interest: Decimal
    total_contracted: Decimal
    total_paid: Decimal
    remaining_contracted: Decimal
    breakdown: OutstandingBreakdown
    maturity_date: date
    days_remaining: int
    overdue: bool


@dataclass(frozen=True)
class DashboardTotals:
    """Headline figures over active loans."""

    total_lent: Decimal
    total_borrowed: Decimal
    expected_returns: Decimal  # Maturity projection of active lent loans
    active_loan_count: int


@dataclass(frozen=True)
class PersonSummary:
    """Net position between the user and one counterparty."""

    person_name: str
    loan_count: int
    total_lent: Decimal
    total_borrowed: Decimal
    outstanding_lent: Decimal
    outstanding_borrowed: Decimal
    net_outstanding: Decimal  # Magnitude, always >= 0
    net_position: NetPosition
    signed_net: Decimal  # outstanding_lent - outstanding_borrowed


@dataclass(frozen=True)
class PortfolioStatistics:
    """Lifetime statistics over every loan regardless of status."""

    interest_earned: Decimal
    interest_paid: Decimal
    completed_count: int
    average_loan_amount: Decimal
    total_lent: Decimal
    total_borrowed: Decimal
