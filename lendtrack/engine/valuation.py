"""Per-loan valuation: accrual, outstanding balance and maturity.

``total_contracted_amount`` is the maturity projection of a loan and ignores
payments. ``outstanding_breakdown`` is what is owed right now: principal plus
interest accrued up to the as-of date, less everything paid, floored at zero.
"""

import math
from datetime import date, datetime, timedelta
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from lendtrack.engine.interest import interest_by_days, interest_by_months, to_decimal
from lendtrack.models.loan import Loan
from lendtrack.models.summary import LoanValuation, OutstandingBreakdown, PaymentAllocation

ONE_DAY = timedelta(days=1)


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _span(start: date, end: date) -> timedelta:
    """Return ``end - start``, promoting plain dates when the types are mixed."""
    if isinstance(start, datetime) != isinstance(end, datetime):
        return _as_datetime(end) - _as_datetime(start)
    return end - start


def elapsed_days(start_date: date, as_of: date) -> int:
    """Whole days between two dates, rounded up and never negative.

    The difference is taken in absolute value, so an as-of date before the
    start date still counts forward from it.
    """
    return math.ceil(abs(_span(start_date, as_of)) / ONE_DAY)


def accrued_interest(loan: Loan, as_of: date) -> Decimal:
    """Interest accrued from the loan's start date to ``as_of``."""
    return interest_by_days(
        loan.interest_type,
        loan.amount,
        loan.interest_rate,
        elapsed_days(loan.start_date, as_of),
        loan.compound_frequency,
    )


def total_contracted_amount(loan: Loan) -> Decimal:
    """Principal plus interest over the full contracted duration."""
    interest = interest_by_months(
        loan.interest_type,
        loan.amount,
        loan.interest_rate,
        loan.duration_months,
        loan.compound_frequency,
    )
    return to_decimal(loan.amount) + interest


def contracted_interest(loan: Loan) -> Decimal:
    """Interest due at maturity if the loan is never partially repaid."""
    return total_contracted_amount(loan) - to_decimal(loan.amount)


def total_paid(loan: Loan) -> Decimal:
    """Sum of every payment recorded against the loan."""
    return sum((to_decimal(p.amount) for p in loan.payments_made), Decimal(0))


def outstanding_breakdown(loan: Loan, as_of: date) -> OutstandingBreakdown:
    """Principal, accrued interest, payments and outstanding as of a date."""
    principal = to_decimal(loan.amount)
    interest = accrued_interest(loan, as_of)
    payments = total_paid(loan)
    return OutstandingBreakdown(
        principal=principal,
        interest=interest,
        payments=payments,
        outstanding=max(Decimal(0), principal + interest - payments),
    )


def remaining_contracted_amount(loan: Loan) -> Decimal:
    """Maturity projection less payments so far, floored at zero."""
    return max(Decimal(0), total_contracted_amount(loan) - total_paid(loan))


def maturity_date(loan: Loan) -> date:
    """Start date plus the contracted number of calendar months.

    Month-end overflow follows ``relativedelta``: Jan 31 plus one month is
    the last day of February.
    """
    return loan.start_date + relativedelta(months=loan.duration_months)


def days_remaining(loan: Loan, as_of: date) -> int:
    """Days from ``as_of`` to maturity, rounded up; negative once overdue."""
    return math.ceil(_span(as_of, maturity_date(loan)) / ONE_DAY)


def is_overdue(loan: Loan, as_of: date) -> bool:
    """Whether an active loan has passed its maturity date."""
    return loan.is_active and days_remaining(loan, as_of) < 0


def allocate_payment(loan: Loan, amount: Decimal, as_of: date) -> PaymentAllocation:
    """Preview how a payment would split between interest and principal.

    Interest accrued to ``as_of`` is covered first and the remainder goes to
    principal. The split is never stored: the ledger keeps only the raw
    payment amount.
    """
    amount = to_decimal(amount)
    interest_portion = min(amount, accrued_interest(loan, as_of))
    return PaymentAllocation(
        amount=amount,
        interest_portion=interest_portion,
        principal_portion=amount - interest_portion,
    )


def value_loan(loan: Loan, as_of: date) -> LoanValuation:
    """Compute every per-loan figure for ``as_of`` in one pass."""
    return LoanValuation(
        loan_id=loan.loan_id,
        principal=to_decimal(loan.amount),
        contracted_interest=contracted_interest(loan),
        total_contracted=total_contracted_amount(loan),
        total_paid=total_paid(loan),
        remaining_contracted=remaining_contracted_amount(loan),
        breakdown=outstanding_breakdown(loan, as_of),
        maturity_date=maturity_date(loan),
        days_remaining=days_remaining(loan, as_of),
        overdue=is_overdue(loan, as_of),
    )
