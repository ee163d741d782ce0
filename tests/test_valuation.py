"""Tests for per-loan valuation."""

from datetime import date, datetime
from decimal import Decimal
from typing import Callable

from lendtrack.engine.valuation import (
    accrued_interest,
    allocate_payment,
    contracted_interest,
    days_remaining,
    elapsed_days,
    is_overdue,
    maturity_date,
    outstanding_breakdown,
    remaining_contracted_amount,
    total_contracted_amount,
    total_paid,
    value_loan,
)
from lendtrack.models import InterestType, Loan, LoanStatus, Payment


class TestElapsedDays:
    """Tests for elapsed day counting."""

    def test_same_day_is_zero(self) -> None:
        assert elapsed_days(date(2024, 1, 1), date(2024, 1, 1)) == 0

    def test_counts_calendar_days(self) -> None:
        assert elapsed_days(date(2024, 1, 1), date(2024, 3, 1)) == 60

    def test_order_independent(self) -> None:
        """An as-of date before the start still counts forward."""
        assert elapsed_days(date(2024, 3, 1), date(2024, 1, 1)) == 60

    def test_partial_days_round_up(self) -> None:
        assert elapsed_days(datetime(2024, 1, 1), datetime(2024, 1, 2, 6, 0)) == 2

    def test_mixed_date_and_datetime(self) -> None:
        assert elapsed_days(date(2024, 1, 1), datetime(2024, 1, 3, 0, 0)) == 2


class TestContractedAmount:
    """Tests for the maturity projection."""

    def test_simple_worked_example(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(
            amount=Decimal("50000"), interest_rate=Decimal("12"), duration_months=24
        )

        assert total_contracted_amount(loan) == Decimal("62000")
        assert contracted_interest(loan) == Decimal("12000")

    def test_compound_worked_example(self, compound_loan: Loan) -> None:
        total = total_contracted_amount(compound_loan)
        assert abs(total - Decimal("27074.99")) < Decimal("0.01")

    def test_ignores_payments(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(
            interest_rate=Decimal("12"),
            payments_made=[Payment(amount=Decimal("500"), date=date(2024, 2, 1))],
        )
        assert total_contracted_amount(loan) == Decimal("1120")

    def test_remaining_contracted_floors_at_zero(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(
            interest_rate=Decimal("12"),
            payments_made=[Payment(amount=Decimal("2000"), date=date(2024, 2, 1))],
        )
        assert remaining_contracted_amount(loan) == 0

    def test_remaining_contracted(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(
            interest_rate=Decimal("12"),
            payments_made=[Payment(amount=Decimal("120"), date=date(2024, 2, 1))],
        )
        assert remaining_contracted_amount(loan) == Decimal("1000")


class TestAccrual:
    """Tests for accrued interest and outstanding balances."""

    def test_no_accrual_on_start_date(self, compound_loan: Loan) -> None:
        assert accrued_interest(compound_loan, compound_loan.start_date) == 0

    def test_simple_accrual_by_days(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(amount=Decimal("36500"), interest_rate=Decimal("10"))
        # 2024-01-01 to 2024-01-31 is 30 days
        assert accrued_interest(loan, date(2024, 1, 31)) == Decimal("300")

    def test_total_paid_without_payments(self, make_loan: Callable[..., Loan]) -> None:
        assert total_paid(make_loan()) == 0

    def test_total_paid_sums_payments(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(
            payments_made=[
                Payment(amount=Decimal("100.50"), date=date(2024, 2, 1)),
                Payment(amount=Decimal("49.50"), date=date(2024, 3, 1)),
            ]
        )
        assert total_paid(loan) == Decimal("150.00")

    def test_breakdown(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(
            amount=Decimal("36500"),
            interest_rate=Decimal("10"),
            payments_made=[Payment(amount=Decimal("1000"), date=date(2024, 1, 15))],
        )

        breakdown = outstanding_breakdown(loan, date(2024, 1, 31))

        assert breakdown.principal == Decimal("36500")
        assert breakdown.interest == Decimal("300")
        assert breakdown.payments == Decimal("1000")
        assert breakdown.outstanding == Decimal("35800")

    def test_outstanding_never_negative(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(payments_made=[Payment(amount=Decimal("5000"), date=date(2024, 2, 1))])
        assert outstanding_breakdown(loan, date(2024, 6, 1)).outstanding == 0

    def test_zero_rate_full_payment_is_exactly_zero(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(payments_made=[Payment(amount=Decimal("1000"), date=date(2024, 2, 1))])
        assert outstanding_breakdown(loan, date(2024, 6, 1)).outstanding == Decimal("0")

    def test_outstanding_at_start_is_principal_less_paid(
        self, make_loan: Callable[..., Loan]
    ) -> None:
        loan = make_loan(
            interest_rate=Decimal("18"),
            interest_type=InterestType.COMPOUND,
            payments_made=[Payment(amount=Decimal("250"), date=date(2024, 1, 1))],
        )
        assert outstanding_breakdown(loan, loan.start_date).outstanding == Decimal("750")

    def test_valuation_is_idempotent(self, compound_loan: Loan, as_of: date) -> None:
        assert value_loan(compound_loan, as_of) == value_loan(compound_loan, as_of)


class TestMaturity:
    """Tests for maturity dates and remaining days."""

    def test_maturity_adds_calendar_months(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(start_date=date(2024, 1, 15), duration_months=24)
        assert maturity_date(loan) == date(2026, 1, 15)

    def test_maturity_clamps_month_end(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(start_date=date(2024, 1, 31), duration_months=1)
        assert maturity_date(loan) == date(2024, 2, 29)

    def test_days_remaining(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(start_date=date(2024, 1, 1), duration_months=1)
        assert days_remaining(loan, date(2024, 1, 21)) == 11

    def test_days_remaining_negative_when_overdue(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(start_date=date(2024, 1, 1), duration_months=1)

        assert days_remaining(loan, date(2024, 2, 11)) == -10
        assert is_overdue(loan, date(2024, 2, 11))

    def test_completed_loans_are_never_overdue(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(duration_months=1, status=LoanStatus.COMPLETED)
        assert not is_overdue(loan, date(2025, 1, 1))


class TestAllocatePayment:
    """Tests for the interest-first payment preview."""

    def test_interest_covered_first(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(amount=Decimal("36500"), interest_rate=Decimal("10"))

        allocation = allocate_payment(loan, Decimal("1000"), date(2024, 1, 31))

        assert allocation.interest_portion == Decimal("300")
        assert allocation.principal_portion == Decimal("700")

    def test_small_payment_goes_to_interest(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(amount=Decimal("36500"), interest_rate=Decimal("10"))

        allocation = allocate_payment(loan, Decimal("120"), date(2024, 1, 31))

        assert allocation.interest_portion == Decimal("120")
        assert allocation.principal_portion == 0

    def test_preview_does_not_touch_ledger(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(interest_rate=Decimal("10"))
        allocate_payment(loan, Decimal("100"), date(2024, 6, 1))
        assert loan.payments_made == []


class TestValueLoan:
    """Tests for the bundled loan valuation."""

    def test_bundles_every_figure(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(
            amount=Decimal("50000"),
            interest_rate=Decimal("12"),
            duration_months=24,
            payments_made=[Payment(amount=Decimal("2000"), date=date(2024, 2, 1))],
        )

        valuation = value_loan(loan, date(2024, 1, 31))

        assert valuation.loan_id == loan.loan_id
        assert valuation.principal == Decimal("50000")
        assert valuation.contracted_interest == Decimal("12000")
        assert valuation.total_contracted == Decimal("62000")
        assert valuation.total_paid == Decimal("2000")
        assert valuation.remaining_contracted == Decimal("60000")
        assert valuation.breakdown == outstanding_breakdown(loan, date(2024, 1, 31))
        assert valuation.maturity_date == date(2026, 1, 1)
        assert valuation.days_remaining == 701
        assert valuation.overdue is False

    def test_agrees_with_single_figure_helpers(self, make_loan: Callable[..., Loan]) -> None:
        """An overdue, overpaid loan reports the same figures the helpers do."""
        loan = make_loan(
            amount=Decimal("1000"),
            interest_rate=Decimal("12"),
            duration_months=3,
            payments_made=[Payment(amount=Decimal("1500"), date=date(2024, 3, 1))],
        )
        as_of = date(2024, 6, 1)

        valuation = value_loan(loan, as_of)

        assert valuation.contracted_interest == contracted_interest(loan)
        assert valuation.remaining_contracted == remaining_contracted_amount(loan) == 0
        assert valuation.days_remaining == days_remaining(loan, as_of) == -61
        assert valuation.overdue is is_overdue(loan, as_of) is True

    def test_completed_loan_is_never_overdue(self, make_loan: Callable[..., Loan]) -> None:
        loan = make_loan(duration_months=3, status=LoanStatus.COMPLETED)
        assert value_loan(loan, date(2024, 6, 1)).overdue is False
