"""Loan models.

A loan is one of three product variants. Each variant carries only the
duration fields its schedule uses, so a Tender loan cannot hold a month count
and a Finance loan cannot hold a duration unit. The variant is identified by
the class-level ``loan_type`` tag.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar

from loan_ledger.models.enums import DurationUnit, LoanStatus, LoanType


@dataclass
class Transaction:
    """Repayment recorded against a loan."""

    transaction_id: str
    amount: Decimal
    payment_date: datetime
    created_at: datetime | None = None


@dataclass
class Loan:
    """Common loan envelope.

    Used directly only for records whose type is unknown; the engine yields
    zero/None figures for it.
    """

    loan_type: ClassVar[LoanType | None] = None

    loan_id: str
    customer_name: str
    loan_amount: Decimal | None  # Face value
    given_amount: Decimal | None  # Cash actually disbursed
    start_date: date | None
    phone: str = ""
    status: LoanStatus = LoanStatus.ACTIVE  # Cached; the engine is authoritative
    transactions: list[Transaction] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class FinanceLoan(Loan):
    """Flat monthly interest on principal for a fixed number of months."""

    loan_type: ClassVar[LoanType | None] = LoanType.FINANCE

    interest_rate: Decimal | None = None  # Percent per month
    duration_in_months: int | None = None


@dataclass
class TenderLoan(Loan):
    """Discount-style loan repaid at face value after a number of days."""

    loan_type: ClassVar[LoanType | None] = LoanType.TENDER

    duration_in_days: int | None = None


@dataclass
class InterestRateLoan(Loan):
    """Loan whose unpaid monthly interest compounds into principal."""

    loan_type: ClassVar[LoanType | None] = LoanType.INTEREST_RATE

    interest_rate: Decimal | None = None  # Percent per month
    duration_value: int | None = None
    duration_unit: DurationUnit | None = None


LOAN_CLASSES: dict[LoanType, type[Loan]] = {
    LoanType.FINANCE: FinanceLoan,
    LoanType.TENDER: TenderLoan,
    LoanType.INTEREST_RATE: InterestRateLoan,
}
