"""Loan book aggregation and selection."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from loan_ledger.engine.amounts import ZERO, to_decimal
from loan_ledger.engine.dates import resolve_now
from loan_ledger.engine.loan import evaluate_loan, loan_status
from loan_ledger.models.enums import LoanStatus, LoanType
from loan_ledger.models.loan import Loan


@dataclass(frozen=True)
class PortfolioSummary:
    """Totals across a set of loans."""

    total_loans: int
    total_principal: Decimal
    total_given: Decimal
    total_collected: Decimal
    total_pending: Decimal
    total_profit: Decimal
    status_counts: dict[LoanStatus, int] = field(default_factory=dict)


def filter_loans(
    loans: Iterable[Loan],
    loan_type: LoanType | None = None,
    search: str | None = None,
) -> list[Loan]:
    """Select loans by type and by a customer name or phone search term.

    Parameters
    ----------
    loans : Iterable[Loan]
        Loans to filter.
    loan_type : LoanType | None
        Keep only this type; None keeps every type.
    search : str | None
        Case-insensitive substring of the customer name, or substring of the
        phone number. Blank terms match everything.

    Returns
    -------
    list[Loan]
        Matching loans in their original order.
    """
    selected = [loan for loan in loans if loan_type is None or loan.loan_type == loan_type]

    term = (search or "").strip()
    if not term:
        return selected

    lowered = term.lower()
    return [
        loan
        for loan in selected
        if lowered in loan.customer_name.strip().lower() or (loan.phone and term in loan.phone)
    ]


def open_loans(loans: Iterable[Loan], loan_type: LoanType, now: datetime | None = None) -> list[Loan]:
    """Loans of ``loan_type`` that can still take a repayment, by customer name."""
    now = resolve_now(now)
    candidates = [
        loan
        for loan in loans
        if loan.loan_type == loan_type and loan_status(loan, now) != LoanStatus.COMPLETED
    ]
    return sorted(candidates, key=lambda loan: loan.customer_name)


def portfolio_summary(loans: Iterable[Loan], now: datetime | None = None) -> PortfolioSummary:
    """Aggregate principal, disbursement, collections, balances and profit."""
    now = resolve_now(now)
    count = 0
    principal = ZERO
    given = ZERO
    collected = ZERO
    pending = ZERO
    profit = ZERO
    statuses: Counter[LoanStatus] = Counter()

    for loan in loans:
        figures = evaluate_loan(loan, now)
        count += 1
        principal += to_decimal(loan.loan_amount)
        given += to_decimal(loan.given_amount)
        collected += figures.amount_paid
        pending += figures.balance
        profit += figures.profit
        statuses[figures.status] += 1

    return PortfolioSummary(
        total_loans=count,
        total_principal=principal,
        total_given=given,
        total_collected=collected,
        total_pending=pending,
        total_profit=profit,
        status_counts=dict(statuses),
    )
