"""Conversion between models and plain records.

Records use the field names of the surrounding bookkeeping application
(``loanType``, ``loanAmount``, ``payment_date`` ...). Amounts are written as
strings so they round-trip without precision loss; numbers are accepted on
input as well.
"""

from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from loan_ledger.engine.dates import naive_utc
from loan_ledger.engine.investor import investor_metrics
from loan_ledger.engine.loan import evaluate_loan
from loan_ledger.exceptions import SerializationError
from loan_ledger.models.enums import (
    DurationUnit,
    InvestmentType,
    InvestorStatus,
    LoanStatus,
    LoanType,
    PaymentType,
)
from loan_ledger.models.investor import Investor, InvestorPayment
from loan_ledger.models.loan import (
    LOAN_CLASSES,
    FinanceLoan,
    InterestRateLoan,
    Loan,
    TenderLoan,
    Transaction,
)


def dataclass_to_dict(obj: Any, camel_case: bool = False) -> dict[str, Any]:
    """Render a dataclass as a JSON-safe dict.

    With ``camel_case`` the keys follow the application's record naming
    (``amount_paid`` becomes ``amountPaid``).
    """
    result = {}
    for key, value in asdict(obj).items():
        result[_camel(key) if camel_case else key] = serialize_value(value)
    return result


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
    elif isinstance(value, dict):
        return {serialize_value(k): serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


# --- parsing helpers ---------------------------------------------------------


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _require(record: dict, key: str) -> Any:
    if record.get(key) is None:
        raise SerializationError(f"Record is missing required field {key!r}")
    return record[key]


def _decimal(value: Any, key: str) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise SerializationError(f"Field {key!r} is not a number: {value!r}") from exc


def _int(value: Any, key: str) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise SerializationError(f"Field {key!r} is not an integer: {value!r}")
    try:
        number = Decimal(str(value))
    except InvalidOperation as exc:
        raise SerializationError(f"Field {key!r} is not an integer: {value!r}") from exc
    if not number.is_finite() or number != number.to_integral_value():
        raise SerializationError(f"Field {key!r} is not a whole number: {value!r}")
    return int(number)


def _datetime(value: Any, key: str) -> datetime | None:
    """Parse an ISO-8601 timestamp; offset-aware values become naive UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    else:
        text = str(value)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise SerializationError(f"Field {key!r} is not an ISO-8601 date: {value!r}") from exc
    return naive_utc(parsed)


def _date(value: Any, key: str) -> date | None:
    parsed = _datetime(value, key)
    return parsed.date() if parsed is not None else None


def _enum(enum_cls: type[Enum], value: Any, key: str) -> Any:
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise SerializationError(f"Field {key!r} has unknown value {value!r}") from exc


# --- loans -------------------------------------------------------------------


def transaction_to_record(txn: Transaction) -> dict[str, Any]:
    record = {
        "id": txn.transaction_id,
        "amount": serialize_value(txn.amount),
        "payment_date": serialize_value(txn.payment_date),
    }
    if txn.created_at is not None:
        record["created_at"] = serialize_value(txn.created_at)
    return record


def transaction_from_record(record: dict[str, Any]) -> Transaction:
    return Transaction(
        transaction_id=str(_require(record, "id")),
        amount=_decimal(_require(record, "amount"), "amount"),
        payment_date=_datetime(_require(record, "payment_date"), "payment_date"),
        created_at=_datetime(record.get("created_at"), "created_at"),
    )


def loan_to_record(loan: Loan) -> dict[str, Any]:
    """Render a loan in the application's record shape."""
    record: dict[str, Any] = {
        "id": loan.loan_id,
        "customerName": loan.customer_name,
        "phone": loan.phone,
        "loanType": serialize_value(loan.loan_type),
        "loanAmount": serialize_value(loan.loan_amount),
        "givenAmount": serialize_value(loan.given_amount),
        "startDate": serialize_value(loan.start_date),
        "status": serialize_value(loan.status),
        "transactions": [transaction_to_record(txn) for txn in loan.transactions],
    }

    if isinstance(loan, FinanceLoan):
        record["interestRate"] = serialize_value(loan.interest_rate)
        record["durationInMonths"] = loan.duration_in_months
    elif isinstance(loan, TenderLoan):
        record["durationInDays"] = loan.duration_in_days
    elif isinstance(loan, InterestRateLoan):
        record["interestRate"] = serialize_value(loan.interest_rate)
        record["durationValue"] = loan.duration_value
        record["durationUnit"] = serialize_value(loan.duration_unit)

    if loan.created_at is not None:
        record["created_at"] = serialize_value(loan.created_at)
    if loan.updated_at is not None:
        record["updated_at"] = serialize_value(loan.updated_at)
    return record


def loan_from_record(record: dict[str, Any]) -> Loan:
    """Build the loan variant selected by ``loanType``.

    Duration fields that do not belong to the variant are ignored. A missing
    or unrecognised ``loanType`` produces a plain :class:`Loan`.

    Raises
    ------
    SerializationError
        If the id is missing or a field cannot be parsed.
    """
    try:
        loan_cls = LOAN_CLASSES.get(LoanType(record.get("loanType")), Loan)
    except ValueError:
        loan_cls = Loan

    common: dict[str, Any] = {
        "loan_id": str(_require(record, "id")),
        "customer_name": record.get("customerName") or "",
        "phone": record.get("phone") or "",
        "loan_amount": _decimal(record.get("loanAmount"), "loanAmount"),
        "given_amount": _decimal(record.get("givenAmount"), "givenAmount"),
        "start_date": _date(record.get("startDate"), "startDate"),
        "status": _enum(LoanStatus, record.get("status"), "status") or LoanStatus.ACTIVE,
        "transactions": [transaction_from_record(txn) for txn in record.get("transactions") or []],
        "created_at": _datetime(record.get("created_at"), "created_at"),
        "updated_at": _datetime(record.get("updated_at"), "updated_at"),
    }

    if loan_cls is FinanceLoan:
        return FinanceLoan(
            **common,
            interest_rate=_decimal(record.get("interestRate"), "interestRate"),
            duration_in_months=_int(record.get("durationInMonths"), "durationInMonths"),
        )
    if loan_cls is TenderLoan:
        return TenderLoan(
            **common,
            duration_in_days=_int(record.get("durationInDays"), "durationInDays"),
        )
    if loan_cls is InterestRateLoan:
        return InterestRateLoan(
            **common,
            interest_rate=_decimal(record.get("interestRate"), "interestRate"),
            duration_value=_int(record.get("durationValue"), "durationValue"),
            duration_unit=_enum(DurationUnit, record.get("durationUnit"), "durationUnit"),
        )
    return Loan(**common)


# --- investors ---------------------------------------------------------------


def payment_to_record(payment: InvestorPayment) -> dict[str, Any]:
    record = {
        "id": payment.payment_id,
        "amount": serialize_value(payment.amount),
        "payment_date": serialize_value(payment.payment_date),
        "payment_type": serialize_value(payment.payment_type),
    }
    if payment.remarks:
        record["remarks"] = payment.remarks
    if payment.created_at is not None:
        record["created_at"] = serialize_value(payment.created_at)
    return record


def payment_from_record(record: dict[str, Any]) -> InvestorPayment:
    return InvestorPayment(
        payment_id=str(_require(record, "id")),
        amount=_decimal(_require(record, "amount"), "amount"),
        payment_date=_datetime(_require(record, "payment_date"), "payment_date"),
        payment_type=_enum(PaymentType, _require(record, "payment_type"), "payment_type"),
        remarks=record.get("remarks") or None,
        created_at=_datetime(record.get("created_at"), "created_at"),
    )


def investor_to_record(investor: Investor) -> dict[str, Any]:
    """Render an investor in the application's record shape."""
    record: dict[str, Any] = {
        "id": investor.investor_id,
        "name": investor.name,
        "investmentAmount": serialize_value(investor.investment_amount),
        "investmentType": serialize_value(investor.investment_type),
        "profitRate": serialize_value(investor.profit_rate),
        "startDate": serialize_value(investor.start_date),
        "status": serialize_value(investor.status),
        "payments": [payment_to_record(payment) for payment in investor.payments],
    }
    if investor.created_at is not None:
        record["created_at"] = serialize_value(investor.created_at)
    if investor.updated_at is not None:
        record["updated_at"] = serialize_value(investor.updated_at)
    return record


def investor_from_record(record: dict[str, Any]) -> Investor:
    """Build an investor from a record.

    Raises
    ------
    SerializationError
        If a required field is missing or cannot be parsed.
    """
    return Investor(
        investor_id=str(_require(record, "id")),
        name=record.get("name") or "",
        investment_amount=_decimal(_require(record, "investmentAmount"), "investmentAmount"),
        investment_type=_enum(InvestmentType, _require(record, "investmentType"), "investmentType"),
        profit_rate=_decimal(_require(record, "profitRate"), "profitRate"),
        start_date=_date(_require(record, "startDate"), "startDate"),
        status=_enum(InvestorStatus, record.get("status"), "status") or InvestorStatus.ON_TRACK,
        payments=[payment_from_record(payment) for payment in record.get("payments") or []],
        created_at=_datetime(record.get("created_at"), "created_at"),
        updated_at=_datetime(record.get("updated_at"), "updated_at"),
    )


# --- derived figures ---------------------------------------------------------


def loan_figures_to_record(loan: Loan, now: datetime | None = None) -> dict[str, Any]:
    """Render a loan's derived figures for export.

    Parameters
    ----------
    loan : Loan
        Loan to evaluate.
    now : datetime | None
        Evaluation instant. Defaults to the system clock.

    Returns
    -------
    dict
        ``id`` and ``loanType`` followed by every :class:`LoanFigures` field
        in camelCase (``amountPaid``, ``totalAmount``, ``nextDueDate`` ...).
    """
    record: dict[str, Any] = {"id": loan.loan_id, "loanType": serialize_value(loan.loan_type)}
    record.update(dataclass_to_dict(evaluate_loan(loan, now), camel_case=True))
    return record


def investor_metrics_to_record(investor: Investor, now: datetime | None = None) -> dict[str, Any]:
    """Render an investor's derived metrics for export, keyed like the application."""
    record: dict[str, Any] = {"id": investor.investor_id}
    record.update(dataclass_to_dict(investor_metrics(investor, now), camel_case=True))
    return record
