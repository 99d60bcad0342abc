"""Loan calculations.

All functions are pure: they read a loan snapshot and an evaluation instant
and never modify the loan. ``now`` defaults to the system clock; pass it
explicitly for reproducible results.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

from loan_ledger.engine.amounts import SETTLEMENT_EPSILON, ZERO, percent, to_decimal, total
from loan_ledger.engine.dates import add_months, as_date, resolve_now
from loan_ledger.engine.schedule import InterestSchedule, interest_rate_schedule
from loan_ledger.models.enums import DurationUnit, LoanStatus
from loan_ledger.models.loan import FinanceLoan, InterestRateLoan, Loan, TenderLoan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoanFigures:
    """Every derived value for one loan at one instant."""

    amount_paid: Decimal
    total_amount: Decimal
    balance: Decimal
    profit: Decimal
    final_due_date: date | None
    next_due_date: date | None
    status: LoanStatus


def amount_paid(loan: Loan) -> Decimal:
    """Sum of all transaction amounts."""
    return total(txn.amount for txn in loan.transactions)


def final_due_date(loan: Loan) -> date | None:
    """Date the whole obligation is contractually due.

    Returns None when the start date or the variant's duration is missing,
    and for loans of unknown type.
    """
    start = loan.start_date
    if start is None:
        return None

    if isinstance(loan, FinanceLoan):
        if not loan.duration_in_months:
            return None
        return add_months(start, loan.duration_in_months)

    if isinstance(loan, TenderLoan):
        if not loan.duration_in_days:
            return None
        return start + timedelta(days=loan.duration_in_days)

    if isinstance(loan, InterestRateLoan):
        if not loan.duration_value or not loan.duration_unit:
            return None
        if loan.duration_unit == DurationUnit.DAYS:
            return start + timedelta(days=loan.duration_value)
        if loan.duration_unit == DurationUnit.WEEKS:
            return start + timedelta(weeks=loan.duration_value)
        return add_months(start, loan.duration_value)

    logger.debug("Loan %s has unknown type; no due date", loan.loan_id)
    return None


def _schedule(loan: InterestRateLoan, now: datetime | None) -> InterestSchedule:
    return interest_rate_schedule(loan, resolve_now(now))


def total_amount(loan: Loan, now: datetime | None = None) -> Decimal:
    """Total liability of the loan.

    Finance loans add flat monthly interest on the principal for the whole
    term. Tender loans are repaid at face value. For InterestRate loans the
    liability is whatever the schedule has produced so far plus what has
    already been paid.
    """
    if isinstance(loan, FinanceLoan):
        principal = to_decimal(loan.loan_amount)
        monthly_interest = principal * percent(loan.interest_rate)
        return principal + monthly_interest * (loan.duration_in_months or 0)

    if isinstance(loan, TenderLoan):
        return to_decimal(loan.loan_amount)

    if isinstance(loan, InterestRateLoan):
        return _schedule(loan, now).balance + amount_paid(loan)

    return ZERO


def balance(loan: Loan, now: datetime | None = None) -> Decimal:
    """Outstanding amount owed at ``now``; never negative."""
    if isinstance(loan, InterestRateLoan):
        return _schedule(loan, now).balance
    return max(ZERO, total_amount(loan, now) - amount_paid(loan))


def profit(loan: Loan, now: datetime | None = None) -> Decimal:
    """Business profit net of the amount disbursed."""
    if isinstance(loan, FinanceLoan):
        return total_amount(loan, now) - to_decimal(loan.given_amount)

    if isinstance(loan, TenderLoan):
        return to_decimal(loan.loan_amount) - to_decimal(loan.given_amount)

    if isinstance(loan, InterestRateLoan):
        # A zero or missing given amount falls back to the face value
        disbursed = to_decimal(loan.given_amount) or to_decimal(loan.loan_amount)
        return max(ZERO, total_amount(loan, now) - disbursed)

    return ZERO


def next_due_date(loan: Loan, now: datetime | None = None) -> date | None:
    """Next date a payment is due, or None once nothing is owed."""
    now = resolve_now(now)
    if balance(loan, now) <= ZERO:
        return None
    if isinstance(loan, InterestRateLoan):
        return _schedule(loan, now).next_due_date
    return final_due_date(loan)


def loan_status(loan: Loan, now: datetime | None = None) -> LoanStatus:
    """Derive the authoritative lifecycle status.

    Checked in order: settled balance (Completed), final due date already
    passed (Overdue), unpaid monthly interest on InterestRate loans (Overdue),
    otherwise Active.
    """
    now = resolve_now(now)
    if balance(loan, now) <= SETTLEMENT_EPSILON:
        return LoanStatus.COMPLETED

    due = final_due_date(loan)
    if due is not None and due < as_date(now):
        return LoanStatus.OVERDUE

    if isinstance(loan, InterestRateLoan) and _schedule(loan, now).status == LoanStatus.OVERDUE:
        return LoanStatus.OVERDUE

    return LoanStatus.ACTIVE


def evaluate_loan(loan: Loan, now: datetime | None = None) -> LoanFigures:
    """Compute every derived figure for ``loan`` at a single instant.

    Parameters
    ----------
    loan : Loan
        Loan snapshot.
    now : datetime | None
        Evaluation instant. Defaults to the system clock, read once.

    Returns
    -------
    LoanFigures
        Amount paid, total amount, balance, profit, due dates and status.
    """
    now = resolve_now(now)
    return LoanFigures(
        amount_paid=amount_paid(loan),
        total_amount=total_amount(loan, now),
        balance=balance(loan, now),
        profit=profit(loan, now),
        final_due_date=final_due_date(loan),
        next_due_date=next_due_date(loan, now),
        status=loan_status(loan, now),
    )
