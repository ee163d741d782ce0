"""Conversion between loan records and JSON-ready dictionaries.

Exported documents use the camelCase keys of the LendTrack export format so
files written by earlier versions of the app load unchanged.
"""

from dataclasses import fields, is_dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from lendtrack.exceptions import ImportFormatError
from lendtrack.models.enums import CompoundFrequency, InterestType, LoanStatus, LoanType
from lendtrack.models.loan import Loan, Payment

# Python attribute -> export key
LOAN_KEYS = {
    "loan_id": "id",
    "person_name": "personName",
    "contact_info": "contactInfo",
    "amount": "amount",
    "loan_type": "type",
    "interest_type": "interestType",
    "interest_rate": "interestRate",
    "compound_frequency": "compoundFrequency",
    "start_date": "startDate",
    "duration_months": "durationMonths",
    "status": "status",
    "payments_made": "paymentsMade",
    "notes": "notes",
    "created_at": "createdAt",
}

# Older exports stored the compounding frequency under this key
LEGACY_FREQUENCY_KEY = "paymentFrequency"

REQUIRED_KEYS = (
    "id",
    "personName",
    "amount",
    "type",
    "interestType",
    "interestRate",
    "startDate",
    "durationMonths",
)


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if isinstance(obj, Loan):
        return loan_to_dict(obj)
    elif is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a flat or nested dataclass to a dict with serialized values."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def payment_to_dict(payment: Payment) -> dict:
    """Convert a payment to its export form."""
    return {
        "amount": serialize_value(payment.amount),
        "date": serialize_value(payment.date),
        "notes": payment.notes,
        "timestamp": serialize_value(payment.timestamp),
    }


def loan_to_dict(loan: Loan) -> dict:
    """Convert a loan to its export form."""
    result = {}
    for attr, key in LOAN_KEYS.items():
        value = getattr(loan, attr)
        if attr == "payments_made":
            result[key] = [payment_to_dict(p) for p in value]
        else:
            result[key] = serialize_value(value)
    return result


def _parse_decimal(value: Any, key: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ImportFormatError(f"{key} must be a number, got {value!r}")
    try:
        parsed = Decimal(str(value))
    except InvalidOperation as exc:
        raise ImportFormatError(f"{key} must be a number, got {value!r}") from exc
    if not parsed.is_finite():
        raise ImportFormatError(f"{key} must be a finite number, got {value!r}")
    return parsed


def _parse_date(value: Any, key: str) -> date:
    if not isinstance(value, str):
        raise ImportFormatError(f"{key} must be an ISO date string, got {value!r}")
    try:
        # Full timestamps are accepted and truncated to their calendar date
        return date.fromisoformat(value[:10])
    except ValueError as exc:
        raise ImportFormatError(f"{key} must be an ISO date string, got {value!r}") from exc


def _parse_timestamp(value: Any, key: str) -> datetime | None:
    """Parse an ISO timestamp into a naive UTC datetime."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ImportFormatError(f"{key} must be an ISO timestamp, got {value!r}")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ImportFormatError(f"{key} must be an ISO timestamp, got {value!r}") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _parse_enum(enum_type: type[Enum], value: Any, key: str) -> Any:
    try:
        return enum_type(value)
    except ValueError as exc:
        allowed = ", ".join(m.value for m in enum_type)
        raise ImportFormatError(f"{key} must be one of {allowed}, got {value!r}") from exc


def _parse_frequency(data: dict) -> CompoundFrequency | None:
    """Read the compounding frequency; unknown values mean monthly (None)."""
    value = data.get(LOAN_KEYS["compound_frequency"], data.get(LEGACY_FREQUENCY_KEY))
    try:
        return CompoundFrequency(value) if value is not None else None
    except ValueError:
        return None


def payment_from_dict(data: Any) -> Payment:
    """Build a payment from its export form."""
    if not isinstance(data, dict):
        raise ImportFormatError(f"Payment must be an object, got {type(data).__name__}")
    for key in ("amount", "date"):
        if key not in data:
            raise ImportFormatError(f"Payment is missing {key!r}")

    return Payment(
        amount=_parse_decimal(data["amount"], "amount"),
        date=_parse_date(data["date"], "date"),
        notes=data.get("notes") or "",
        timestamp=_parse_timestamp(data.get("timestamp"), "timestamp"),
    )


def loan_from_dict(data: Any) -> Loan:
    """Build a loan from its export form.

    Raises
    ------
    ImportFormatError
        If a required key is missing or a value cannot be parsed.
    """
    if not isinstance(data, dict):
        raise ImportFormatError(f"Loan must be an object, got {type(data).__name__}")
    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ImportFormatError(f"Loan is missing {', '.join(missing)}")

    payments = data.get("paymentsMade") or []
    if not isinstance(payments, list):
        raise ImportFormatError("paymentsMade must be a list")

    duration = data["durationMonths"]
    if isinstance(duration, bool) or not isinstance(duration, (int, str)):
        raise ImportFormatError(f"durationMonths must be an integer, got {duration!r}")
    try:
        duration_months = int(duration)
    except ValueError as exc:
        raise ImportFormatError(f"durationMonths must be an integer, got {duration!r}") from exc

    return Loan(
        loan_id=str(data["id"]),
        person_name=str(data["personName"]),
        amount=_parse_decimal(data["amount"], "amount"),
        loan_type=_parse_enum(LoanType, data["type"], "type"),
        interest_type=_parse_enum(InterestType, data["interestType"], "interestType"),
        interest_rate=_parse_decimal(data["interestRate"], "interestRate"),
        start_date=_parse_date(data["startDate"], "startDate"),
        duration_months=duration_months,
        compound_frequency=_parse_frequency(data),
        status=_parse_enum(LoanStatus, data.get("status", "active"), "status"),
        payments_made=[payment_from_dict(p) for p in payments],
        contact_info=data.get("contactInfo") or "",
        notes=data.get("notes") or "",
        created_at=_parse_timestamp(data.get("createdAt"), "createdAt"),
    )
