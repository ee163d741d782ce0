"""Simple and compound interest over whole months or elapsed days.

Two time bases are used on purpose. Contract terms (the amount due at
maturity) are expressed in whole months and use ``months / 12`` years, while
accrual on an open loan uses ``days / 365`` years regardless of leap years.

All functions are pure. Negative rates are not rejected.
"""

from decimal import Decimal
from typing import Any

from lendtrack.models.enums import CompoundFrequency, InterestType
from lendtrack.models.summary import InterestPreview

MONTHS_PER_YEAR = Decimal(12)
DAYS_PER_YEAR = Decimal(365)
PERCENT = Decimal(100)

PERIODS_PER_YEAR: dict[CompoundFrequency, int] = {
    CompoundFrequency.DAILY: 365,
    CompoundFrequency.WEEKLY: 52,
    CompoundFrequency.MONTHLY: 12,
    CompoundFrequency.QUARTERLY: 4,
    CompoundFrequency.ANNUALLY: 1,
}
DEFAULT_PERIODS_PER_YEAR = PERIODS_PER_YEAR[CompoundFrequency.MONTHLY]


def to_decimal(value: Any) -> Decimal:
    """Coerce a number to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def periods_per_year(frequency: CompoundFrequency | str | None) -> int:
    """Return compounding periods per year for a frequency.

    Absent and unrecognised frequencies fall back to monthly compounding.
    """
    if frequency is None:
        return DEFAULT_PERIODS_PER_YEAR
    try:
        return PERIODS_PER_YEAR[CompoundFrequency(frequency)]
    except ValueError:
        return DEFAULT_PERIODS_PER_YEAR


def simple_interest_by_months(principal: Decimal, rate_pct: Decimal, months: int) -> Decimal:
    """Simple interest ``P * R * (months / 12) / 100``."""
    return to_decimal(principal) * to_decimal(rate_pct) * Decimal(months) / MONTHS_PER_YEAR / PERCENT


def simple_interest_by_days(principal: Decimal, rate_pct: Decimal, days: int) -> Decimal:
    """Simple interest ``P * R * (days / 365) / 100``."""
    return to_decimal(principal) * to_decimal(rate_pct) * Decimal(days) / DAYS_PER_YEAR / PERCENT


def _compound_interest(
    principal: Decimal,
    rate_pct: Decimal,
    years: Decimal,
    frequency: CompoundFrequency | str | None,
) -> Decimal:
    principal = to_decimal(principal)
    n = periods_per_year(frequency)
    base = 1 + to_decimal(rate_pct) / (PERCENT * n)
    amount = principal * base ** (n * years)
    return amount - principal


def compound_interest_by_months(
    principal: Decimal,
    rate_pct: Decimal,
    months: int,
    frequency: CompoundFrequency | str | None = None,
) -> Decimal:
    """Compound interest ``P * (1 + R / (100n)) ** (n * months / 12) - P``.

    Parameters
    ----------
    principal : Decimal
        Amount lent or borrowed.
    rate_pct : Decimal
        Annual rate as a percentage (8 means 8%).
    months : int
        Elapsed whole months.
    frequency : CompoundFrequency | str | None
        Compounding frequency; ``None`` or unknown values mean monthly.

    Returns
    -------
    Decimal
        Interest only, excluding the principal.
    """
    return _compound_interest(principal, rate_pct, Decimal(months) / MONTHS_PER_YEAR, frequency)


def compound_interest_by_days(
    principal: Decimal,
    rate_pct: Decimal,
    days: int,
    frequency: CompoundFrequency | str | None = None,
) -> Decimal:
    """Compound interest over ``days / 365`` years."""
    return _compound_interest(principal, rate_pct, Decimal(days) / DAYS_PER_YEAR, frequency)


def interest_by_months(
    interest_type: InterestType,
    principal: Decimal,
    rate_pct: Decimal,
    months: int,
    frequency: CompoundFrequency | str | None = None,
) -> Decimal:
    """Dispatch to the simple or compound by-months formula."""
    if interest_type == InterestType.SIMPLE:
        return simple_interest_by_months(principal, rate_pct, months)
    return compound_interest_by_months(principal, rate_pct, months, frequency)


def interest_by_days(
    interest_type: InterestType,
    principal: Decimal,
    rate_pct: Decimal,
    days: int,
    frequency: CompoundFrequency | str | None = None,
) -> Decimal:
    """Dispatch to the simple or compound by-days formula."""
    if interest_type == InterestType.SIMPLE:
        return simple_interest_by_days(principal, rate_pct, days)
    return compound_interest_by_days(principal, rate_pct, days, frequency)


def preview_terms(
    amount: Decimal,
    rate_pct: Decimal,
    months: int,
    interest_type: InterestType,
    frequency: CompoundFrequency | str | None = None,
) -> InterestPreview:
    """Interest and total repayment for terms that have not been saved yet."""
    amount = to_decimal(amount)
    interest = interest_by_months(interest_type, amount, rate_pct, months, frequency)
    return InterestPreview(
        interest=interest,
        total=amount + interest,
        years=Decimal(months) / MONTHS_PER_YEAR,
        periods_per_year=(
            periods_per_year(frequency) if interest_type == InterestType.COMPOUND else None
        ),
    )
