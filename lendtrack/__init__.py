"""Personal lending tracker: interest accrual, balances and net positions."""

__version__ = "0.1.0"
