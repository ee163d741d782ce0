"""Sample loan data generators."""

from lendtrack.generators.loan import SampleLoanGenerator, demo_loans

__all__ = ["SampleLoanGenerator", "demo_loans"]
