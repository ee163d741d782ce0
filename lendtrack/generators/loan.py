"""Sample loan books for demos and manual testing."""

import logging
import random
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from faker import Faker

from lendtrack.models.enums import CompoundFrequency, InterestType, LoanStatus, LoanType
from lendtrack.models.loan import Loan, Payment
from lendtrack.store.loans import LoanBook, new_loan_id

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def demo_loans() -> list[Loan]:
    """The two loans a fresh LendTrack session starts with."""
    return [
        Loan(
            loan_id=new_loan_id(),
            person_name="Rahul Kumar",
            contact_info="+91 98765 43210",
            amount=Decimal("50000"),
            loan_type=LoanType.LENT,
            interest_type=InterestType.COMPOUND,
            interest_rate=Decimal("12"),
            start_date=date(2024, 1, 15),
            duration_months=24,
            compound_frequency=CompoundFrequency.MONTHLY,
            notes="Business loan",
            created_at=datetime(2024, 1, 15),
        ),
        Loan(
            loan_id=new_loan_id(),
            person_name="Priya Sharma",
            contact_info="priya.sharma@email.com",
            amount=Decimal("25000"),
            loan_type=LoanType.BORROWED,
            interest_type=InterestType.SIMPLE,
            interest_rate=Decimal("8"),
            start_date=date(2024, 3, 1),
            duration_months=12,
            compound_frequency=CompoundFrequency.MONTHLY,
            notes="Personal loan",
            created_at=datetime(2024, 3, 1),
        ),
    ]


class SampleLoanGenerator:
    """Generate synthetic person-to-person loans with payment histories.

    Parameters
    ----------
    seed : int | None
        Seeds both Faker and the module-level ``random`` generator, so a
        seeded run produces the same book every time.
    locale : str
        Faker locale used for counterparty names and contacts.
    """

    DURATIONS = [3, 6, 12, 18, 24, 36]
    RATES = [0, 6, 8, 10, 12, 15, 18]
    NOTES = ["Business loan", "Personal loan", "Medical bills", "Rent", "Wedding", ""]

    # Share of loans marked completed by hand regardless of balance
    MANUAL_COMPLETION_RATE = 0.1

    def __init__(self, seed: int | None = None, locale: str = "en_IN") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)
        self._people: list[tuple[str, str]] = []

    def _person(self, num_people: int) -> tuple[str, str]:
        """Pick a counterparty, creating up to ``num_people`` distinct ones."""
        if len(self._people) < num_people and (not self._people or random.random() < 0.6):
            contact = random.choice([self.fake.phone_number(), self.fake.email(), ""])
            self._people.append((self.fake.name(), contact))
            return self._people[-1]
        return random.choice(self._people)

    def generate(self, as_of: date, num_people: int = 10) -> Loan:
        """Generate one active loan with no payments, started before ``as_of``.

        Parameters
        ----------
        as_of : date
            Latest possible start date.
        num_people : int
            Size of the counterparty pool shared between generated loans.

        Returns
        -------
        Loan
            Generated loan.
        """
        name, contact = self._person(num_people)
        interest_type = random.choice(list(InterestType))
        start_date = as_of - timedelta(days=random.randint(0, 720))

        return Loan(
            loan_id=self.fake.uuid4(),
            person_name=name,
            contact_info=contact,
            amount=Decimal(random.randint(1, 100) * 1000),
            loan_type=random.choice(list(LoanType)),
            interest_type=interest_type,
            interest_rate=Decimal(random.choice(self.RATES)),
            start_date=start_date,
            duration_months=random.choice(self.DURATIONS),
            compound_frequency=(
                random.choice(list(CompoundFrequency))
                if interest_type == InterestType.COMPOUND
                else None
            ),
            notes=random.choice(self.NOTES),
            created_at=datetime.combine(start_date, time(hour=random.randint(8, 20))),
        )

    def _payments(self, loan: Loan, as_of: date) -> list[Payment]:
        """Generate a few partial repayments dated between start and as-of."""
        span = (as_of - loan.start_date).days
        if span <= 0:
            return []

        days = sorted(random.randint(1, span) for _ in range(random.randint(0, 4)))
        return [
            Payment(
                amount=(loan.amount * Decimal(random.randint(5, 45)) / 100).quantize(CENT),
                date=loan.start_date + timedelta(days=offset),
                notes=random.choice(["", "Cash", "UPI transfer", "Bank transfer"]),
                timestamp=datetime.combine(loan.start_date + timedelta(days=offset), time(12)),
            )
            for offset in days
        ]

    def generate_book(
        self,
        num_loans: int,
        as_of: date,
        num_people: int | None = None,
    ) -> LoanBook:
        """Generate a loan book, recording payments through the book itself.

        Parameters
        ----------
        num_loans : int
            Number of loans to generate.
        as_of : date
            Reference date; no loan starts and no payment lands after it.
        num_people : int | None
            Distinct counterparties (default: a third of ``num_loans``).

        Returns
        -------
        LoanBook
            Book holding the generated loans.
        """
        if num_people is None:
            num_people = max(1, num_loans // 3)

        book = LoanBook()
        for _ in range(num_loans):
            loan = book.add_loan(self.generate(as_of, num_people))
            for payment in self._payments(loan, as_of):
                book.record_payment(loan.loan_id, payment, as_of=payment.date)

            if loan.status == LoanStatus.ACTIVE and random.random() < self.MANUAL_COMPLETION_RATE:
                book.mark_completed(loan.loan_id)

        logger.info(
            "Generated %d sample loans across %d people",
            num_loans,
            len({loan.person_name for loan in book.all_loans()}),
        )
        return book
