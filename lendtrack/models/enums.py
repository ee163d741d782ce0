"""Enumeration types for loan book entities."""

from enum import Enum


class LoanType(str, Enum):
    LENT = "lent"
    BORROWED = "borrowed"


class InterestType(str, Enum):
    SIMPLE = "simple"
    COMPOUND = "compound"


class CompoundFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


class LoanStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class NetPosition(str, Enum):
    OWES_YOU = "owes-you"
    YOU_OWE = "you-owe"
    SETTLED = "settled"


class LoanFilter(str, Enum):
    """List filters offered next to the person-name search."""

    ALL = "all"
    LENT = "lent"
    BORROWED = "borrowed"
    ACTIVE = "active"
    COMPLETED = "completed"
