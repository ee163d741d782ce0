"""In-memory loan book."""

from lendtrack.store.loans import LoanBook, new_loan_id

__all__ = ["LoanBook", "new_loan_id"]
