"""Loan accrual engine: interest model, valuation and aggregation."""

from lendtrack.engine.interest import (
    compound_interest_by_days,
    compound_interest_by_months,
    periods_per_year,
    preview_terms,
    simple_interest_by_days,
    simple_interest_by_months,
)
from lendtrack.engine.portfolio import (
    all_person_summaries,
    dashboard_totals,
    filter_loans,
    person_summary,
    portfolio_statistics,
    recent_loans,
)
from lendtrack.engine.valuation import (
    accrued_interest,
    allocate_payment,
    days_remaining,
    elapsed_days,
    maturity_date,
    outstanding_breakdown,
    total_contracted_amount,
    total_paid,
    value_loan,
)

__all__ = [
    "accrued_interest",
    "all_person_summaries",
    "allocate_payment",
    "compound_interest_by_days",
    "compound_interest_by_months",
    "dashboard_totals",
    "days_remaining",
    "elapsed_days",
    "filter_loans",
    "maturity_date",
    "outstanding_breakdown",
    "periods_per_year",
    "person_summary",
    "portfolio_statistics",
    "preview_terms",
    "recent_loans",
    "simple_interest_by_days",
    "simple_interest_by_months",
    "total_contracted_amount",
    "total_paid",
    "value_loan",
]
