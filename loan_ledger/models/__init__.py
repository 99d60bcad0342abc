"""Loan and investor record models."""

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

__all__ = [
    "DurationUnit",
    "FinanceLoan",
    "InterestRateLoan",
    "InvestmentType",
    "Investor",
    "InvestorPayment",
    "InvestorStatus",
    "LOAN_CLASSES",
    "Loan",
    "LoanStatus",
    "LoanType",
    "PaymentType",
    "TenderLoan",
    "Transaction",
]
