"""Roll loan valuations up into dashboard, per-person and lifetime views."""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Sequence

from lendtrack.engine.interest import to_decimal
from lendtrack.engine.valuation import outstanding_breakdown, total_contracted_amount
from lendtrack.models.enums import LoanFilter, LoanStatus, LoanType, NetPosition
from lendtrack.models.loan import Loan
from lendtrack.models.summary import DashboardTotals, PersonSummary, PortfolioStatistics

RECENT_LOANS_LIMIT = 5


def _principal(loans: Iterable[Loan]) -> Decimal:
    return sum((to_decimal(loan.amount) for loan in loans), Decimal(0))


def _interest_at_maturity(loans: Iterable[Loan]) -> Decimal:
    return sum(
        (total_contracted_amount(loan) - to_decimal(loan.amount) for loan in loans),
        Decimal(0),
    )


def _outstanding(loans: Iterable[Loan], as_of: date) -> Decimal:
    return sum((outstanding_breakdown(loan, as_of).outstanding for loan in loans), Decimal(0))


def dashboard_totals(loans: Sequence[Loan], as_of: date) -> DashboardTotals:
    """Headline totals over active loans.

    ``expected_returns`` is the maturity projection of active lent loans,
    not their value today.
    """
    active = [loan for loan in loans if loan.status == LoanStatus.ACTIVE]
    lent = [loan for loan in active if loan.loan_type == LoanType.LENT]
    borrowed = [loan for loan in active if loan.loan_type == LoanType.BORROWED]

    return DashboardTotals(
        total_lent=_principal(lent),
        total_borrowed=_principal(borrowed),
        expected_returns=sum((total_contracted_amount(loan) for loan in lent), Decimal(0)),
        active_loan_count=len(active),
    )


def net_position(signed_net: Decimal) -> NetPosition:
    """Classify a signed net outstanding amount."""
    if signed_net > 0:
        return NetPosition.OWES_YOU
    if signed_net < 0:
        return NetPosition.YOU_OWE
    return NetPosition.SETTLED


def person_summary(loans: Sequence[Loan], person_name: str, as_of: date) -> PersonSummary:
    """Summarise every loan with one counterparty.

    Parameters
    ----------
    loans : Sequence[Loan]
        The whole loan collection.
    person_name : str
        Counterparty name, matched exactly.
    as_of : date
        Reference date for outstanding balances.

    Returns
    -------
    PersonSummary
        Totals and net position. ``net_outstanding`` holds the magnitude and
        ``net_position`` the direction.
    """
    theirs = [loan for loan in loans if loan.person_name == person_name]
    active = [loan for loan in theirs if loan.status == LoanStatus.ACTIVE]
    lent = [loan for loan in active if loan.loan_type == LoanType.LENT]
    borrowed = [loan for loan in active if loan.loan_type == LoanType.BORROWED]

    outstanding_lent = _outstanding(lent, as_of)
    outstanding_borrowed = _outstanding(borrowed, as_of)
    signed_net = outstanding_lent - outstanding_borrowed

    return PersonSummary(
        person_name=person_name,
        loan_count=len(theirs),
        total_lent=_principal(lent),
        total_borrowed=_principal(borrowed),
        outstanding_lent=outstanding_lent,
        outstanding_borrowed=outstanding_borrowed,
        net_outstanding=abs(signed_net),
        net_position=net_position(signed_net),
        signed_net=signed_net,
    )


def person_names(loans: Iterable[Loan]) -> list[str]:
    """Distinct counterparty names in first-seen order."""
    return list(dict.fromkeys(loan.person_name for loan in loans))


def all_person_summaries(loans: Sequence[Loan], as_of: date) -> list[PersonSummary]:
    """One summary per distinct counterparty, in first-seen order."""
    return [person_summary(loans, name, as_of) for name in person_names(loans)]


def portfolio_statistics(loans: Sequence[Loan]) -> PortfolioStatistics:
    """Lifetime statistics over every loan regardless of status.

    Interest figures use the maturity projection, not accrual to date.
    """
    lent = [loan for loan in loans if loan.loan_type == LoanType.LENT]
    borrowed = [loan for loan in loans if loan.loan_type == LoanType.BORROWED]

    average = _principal(loans) / len(loans) if loans else Decimal(0)

    return PortfolioStatistics(
        interest_earned=_interest_at_maturity(lent),
        interest_paid=_interest_at_maturity(borrowed),
        completed_count=sum(1 for loan in loans if loan.status == LoanStatus.COMPLETED),
        average_loan_amount=average,
        total_lent=_principal(lent),
        total_borrowed=_principal(borrowed),
    )


def recent_loans(loans: Iterable[Loan], limit: int = RECENT_LOANS_LIMIT) -> list[Loan]:
    """Most recently created active loans, newest first."""
    active = [loan for loan in loans if loan.status == LoanStatus.ACTIVE]
    active.sort(key=lambda loan: loan.created_at or datetime.min, reverse=True)
    return active[:limit]


def _matches_filter(loan: Loan, loan_filter: LoanFilter) -> bool:
    if loan_filter == LoanFilter.LENT:
        return loan.loan_type == LoanType.LENT
    if loan_filter == LoanFilter.BORROWED:
        return loan.loan_type == LoanType.BORROWED
    if loan_filter == LoanFilter.ACTIVE:
        return loan.status == LoanStatus.ACTIVE
    if loan_filter == LoanFilter.COMPLETED:
        return loan.status == LoanStatus.COMPLETED
    return True


def filter_loans(
    loans: Iterable[Loan],
    search: str = "",
    loan_filter: LoanFilter = LoanFilter.ALL,
) -> list[Loan]:
    """Loans whose person name contains ``search`` (case-insensitive) and
    that pass ``loan_filter``, in collection order."""
    needle = search.lower()
    return [
        loan
        for loan in loans
        if needle in loan.person_name.lower() and _matches_filter(loan, loan_filter)
    ]
