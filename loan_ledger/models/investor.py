"""Investor models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from loan_ledger.models.enums import InvestmentType, InvestorStatus, PaymentType


@dataclass
class InvestorPayment:
    """Payment made by the business to an investor."""

    payment_id: str
    amount: Decimal
    payment_date: datetime
    payment_type: PaymentType
    remarks: str | None = None
    created_at: datetime | None = None


@dataclass
class Investor:
    """Principal invested with the business at a fixed monthly profit rate."""

    investor_id: str
    name: str
    investment_amount: Decimal
    investment_type: InvestmentType  # Informational only
    profit_rate: Decimal  # Percent per month
    start_date: date
    status: InvestorStatus = InvestorStatus.ON_TRACK  # Closed is set manually
    payments: list[InvestorPayment] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
