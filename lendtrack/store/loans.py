"""In-memory loan book holding the session's loan collection."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable

from lendtrack.engine.valuation import outstanding_breakdown
from lendtrack.exceptions import InvalidLoanStateError, LoanNotFoundError
from lendtrack.models.enums import CompoundFrequency, InterestType, LoanStatus, LoanType
from lendtrack.models.loan import Loan, Payment

logger = logging.getLogger(__name__)

# Terms a caller may overwrite through update_loan
EDITABLE_FIELDS = frozenset(
    {
        "person_name",
        "contact_info",
        "amount",
        "loan_type",
        "interest_type",
        "interest_rate",
        "compound_frequency",
        "start_date",
        "duration_months",
        "notes",
    }
)


def new_loan_id() -> str:
    """Return a fresh opaque loan identifier."""
    return uuid.uuid4().hex


@dataclass
class LoanBook:
    """Session state container for loans.

    The book assumes a single writer. Callers sharing one across threads
    must serialise mutations themselves. Views are never cached here: after
    any mutation the caller recomputes what it shows from ``all_loans()``.
    """

    loans: dict[str, Loan] = field(default_factory=dict)

    # Ids of deleted loans, so an id is never handed out twice
    _retired_ids: set[str] = field(default_factory=set)

    def add_loan(self, loan: Loan) -> Loan:
        """Add a loan to the book."""
        if loan.loan_id in self.loans or loan.loan_id in self._retired_ids:
            raise InvalidLoanStateError(f"Loan id {loan.loan_id} is already in use")

        if loan.created_at is None:
            loan.created_at = datetime.now()
        self.loans[loan.loan_id] = loan
        logger.info(
            "Added %s loan %s for %s",
            loan.loan_type.value,
            loan.loan_id,
            loan.person_name,
            extra={"loan_id": loan.loan_id},
        )
        return loan

    def open_loan(
        self,
        person_name: str,
        amount: Decimal,
        loan_type: LoanType,
        interest_type: InterestType,
        interest_rate: Decimal,
        start_date: date,
        duration_months: int,
        compound_frequency: CompoundFrequency | None = None,
        contact_info: str = "",
        notes: str = "",
    ) -> Loan:
        """Create an active loan with no payments and add it to the book."""
        loan_id = new_loan_id()
        while loan_id in self.loans or loan_id in self._retired_ids:
            loan_id = new_loan_id()

        return self.add_loan(
            Loan(
                loan_id=loan_id,
                person_name=person_name,
                amount=amount,
                loan_type=loan_type,
                interest_type=interest_type,
                interest_rate=interest_rate,
                start_date=start_date,
                duration_months=duration_months,
                compound_frequency=compound_frequency,
                contact_info=contact_info,
                notes=notes,
            )
        )

    def get_loan(self, loan_id: str) -> Loan | None:
        """Look up a loan, returning None when it does not exist."""
        return self.loans.get(loan_id)

    def _require_loan(self, loan_id: str) -> Loan:
        loan = self.loans.get(loan_id)
        if loan is None:
            raise LoanNotFoundError(f"Loan {loan_id} not found")
        return loan

    def update_loan(self, loan_id: str, **changes: Any) -> Loan:
        """Overwrite loan terms.

        Status, payments, identity and creation time cannot be edited, so an
        edit never reopens a completed loan.
        """
        loan = self._require_loan(loan_id)

        locked = sorted(set(changes) - EDITABLE_FIELDS)
        if locked:
            raise InvalidLoanStateError(
                f"Loan {loan_id}: field(s) {', '.join(locked)} cannot be edited"
            )

        for name, value in changes.items():
            setattr(loan, name, value)
        logger.debug(
            "Updated loan %s: %s",
            loan_id,
            ", ".join(sorted(changes)),
            extra={"loan_id": loan_id},
        )
        return loan

    def record_payment(
        self,
        loan_id: str,
        payment: Payment,
        as_of: date | None = None,
    ) -> Loan:
        """Append a payment and complete the loan once nothing is owed.

        Parameters
        ----------
        loan_id : str
            Loan receiving the payment.
        payment : Payment
            Payment to append. Its timestamp is stamped if missing.
        as_of : date | None
            Date used to recompute the outstanding balance. Defaults to the
            payment date.

        Returns
        -------
        Loan
            The updated loan.
        """
        loan = self._require_loan(loan_id)

        if payment.timestamp is None:
            payment.timestamp = datetime.now()
        loan.payments_made.append(payment)

        if loan.status == LoanStatus.ACTIVE:
            breakdown = outstanding_breakdown(loan, as_of or payment.date)
            if breakdown.outstanding <= 0:
                loan.status = LoanStatus.COMPLETED
                logger.info("Loan %s fully repaid", loan_id, extra={"loan_id": loan_id})

        logger.info(
            "Recorded payment of %s on loan %s",
            payment.amount,
            loan_id,
            extra={"loan_id": loan_id},
        )
        return loan

    def mark_completed(self, loan_id: str) -> Loan:
        """Complete a loan regardless of its balance."""
        loan = self._require_loan(loan_id)
        if loan.status != LoanStatus.COMPLETED:
            loan.status = LoanStatus.COMPLETED
            logger.info("Loan %s marked as completed", loan_id, extra={"loan_id": loan_id})
        return loan

    def delete_loan(self, loan_id: str) -> Loan:
        """Remove a loan together with its payments."""
        loan = self._require_loan(loan_id)
        del self.loans[loan_id]
        self._retired_ids.add(loan_id)
        logger.info("Deleted loan %s", loan_id, extra={"loan_id": loan_id})
        return loan

    def clear(self) -> None:
        """Remove every loan."""
        self._retired_ids.update(self.loans)
        count = len(self.loans)
        self.loans.clear()
        logger.info("Cleared %d loans", count)

    def replace_all(self, loans: Iterable[Loan]) -> None:
        """Replace the whole collection, as an import does."""
        incoming: dict[str, Loan] = {}
        for loan in loans:
            if loan.loan_id in incoming:
                raise InvalidLoanStateError(f"Duplicate loan id {loan.loan_id}")
            incoming[loan.loan_id] = loan

        # Imported ids become live again; ids dropped by the import are retired
        self._retired_ids.update(lid for lid in self.loans if lid not in incoming)
        self._retired_ids.difference_update(incoming)
        self.loans = incoming
        logger.info("Loaded %d loans", len(incoming))

    def all_loans(self) -> list[Loan]:
        """Return loans in insertion order."""
        return list(self.loans.values())

    def summary(self) -> dict[str, int]:
        """Return summary counts for the book."""
        return {
            "loans": len(self.loans),
            "active": sum(1 for loan in self.loans.values() if loan.is_active),
            "completed": sum(1 for loan in self.loans.values() if not loan.is_active),
            "payments": sum(len(loan.payments_made) for loan in self.loans.values()),
        }
