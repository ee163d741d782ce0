"""Domain models for the loan book."""

from lendtrack.models.enums import (
    CompoundFrequency,
    InterestType,
    LoanFilter,
    LoanStatus,
    LoanType,
    NetPosition,
)
from lendtrack.models.loan import Loan, Payment
from lendtrack.models.summary import (
    DashboardTotals,
    InterestPreview,
    LoanValuation,
    OutstandingBreakdown,
    PaymentAllocation,
    PersonSummary,
    PortfolioStatistics,
)

__all__ = [
    "CompoundFrequency",
    "DashboardTotals",
    "InterestPreview",
    "InterestType",
    "Loan",
    "LoanFilter",
    "LoanStatus",
    "LoanType",
    "LoanValuation",
    "NetPosition",
    "OutstandingBreakdown",
    "Payment",
    "PaymentAllocation",
    "PersonSummary",
    "PortfolioStatistics",
]
