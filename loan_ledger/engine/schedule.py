"""Monthly compounding schedule for InterestRate loans.

Each fully elapsed calendar month since the loan started charges interest on
the running principal. Whatever part of that interest is not paid within the
month is added to the principal; a payment larger than the month's interest
reduces the principal by the excess. Payments made in the current, still open
month reduce the principal directly.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from loan_ledger.engine.amounts import SETTLEMENT_EPSILON, ZERO, percent, to_decimal, total
from loan_ledger.engine.dates import (
    add_months,
    as_date,
    as_datetime,
    month_start,
    month_starts_between,
)
from loan_ledger.models.enums import LoanStatus
from loan_ledger.models.loan import InterestRateLoan, Transaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlyAccrual:
    """One closed month of the compounding schedule."""

    month_start: date
    opening_principal: Decimal
    interest: Decimal
    paid: Decimal
    unpaid: Decimal  # Negative when the month was overpaid
    closing_principal: Decimal


@dataclass(frozen=True)
class InterestSchedule:
    """Outcome of running the schedule up to a given instant."""

    balance: Decimal
    next_due_date: date | None
    status: LoanStatus


def _paid_between(transactions: list[Transaction], start: datetime, end: datetime) -> Decimal:
    """Sum payments dated in ``[start, end]``."""
    return total(
        txn.amount
        for txn in transactions
        if start <= as_datetime(txn.payment_date) <= end
    )


def accrue_month(
    principal: Decimal,
    month: date,
    rate: Decimal,
    transactions: list[Transaction],
) -> MonthlyAccrual:
    """Apply one closed month to the running principal.

    Parameters
    ----------
    principal : Decimal
        Principal at the start of the month.
    month : date
        First day of the month.
    rate : Decimal
        Monthly rate as a fraction (0.05 for 5%).
    transactions : list[Transaction]
        All loan transactions; only those dated inside the month count.

    Returns
    -------
    MonthlyAccrual
        The month's interest, payments and closing principal.
    """
    interest = principal * rate
    window_start = as_datetime(month)
    window_end = as_datetime(add_months(month, 1)) - timedelta(microseconds=1)
    paid = _paid_between(transactions, window_start, window_end)
    unpaid = interest - paid
    return MonthlyAccrual(
        month_start=month,
        opening_principal=principal,
        interest=interest,
        paid=paid,
        unpaid=unpaid,
        closing_principal=principal + unpaid,
    )


def accrue_months(loan: InterestRateLoan, now: datetime) -> list[MonthlyAccrual]:
    """Run the schedule over every calendar month closed before ``now``.

    The running principal is not floored between months, so a large
    overpayment can carry a negative principal into later months.
    """
    if loan.start_date is None:
        logger.debug("Loan %s has no start date; no months accrue", loan.loan_id)
        return []

    transactions = sorted(loan.transactions, key=lambda txn: as_datetime(txn.payment_date))
    rate = percent(loan.interest_rate)

    steps: list[MonthlyAccrual] = []
    principal = to_decimal(loan.loan_amount)
    for month in month_starts_between(loan.start_date, now):
        step = accrue_month(principal, month, rate, transactions)
        steps.append(step)
        principal = step.closing_principal
    return steps


def _due_day_in_month(month: date, day: int) -> date:
    """``day`` of ``month``, clamped to the month's last day."""
    return month + relativedelta(day=day)


def monthly_due_date(start_date: date, now: datetime) -> date:
    """Next monthly due date strictly after today.

    Due dates fall on the start date's day of month.
    """
    today = as_date(now)
    due = _due_day_in_month(month_start(today), start_date.day)
    if due <= today:
        due = _due_day_in_month(add_months(month_start(today), 1), start_date.day)
    return due


def interest_rate_schedule(loan: InterestRateLoan, now: datetime) -> InterestSchedule:
    """Compute balance, next due date and schedule status at ``now``.

    Parameters
    ----------
    loan : InterestRateLoan
        Loan to evaluate.
    now : datetime
        Evaluation instant.

    Returns
    -------
    InterestSchedule
        Balance (never negative), next due date (None once settled) and
        Overdue if any closed month left interest unpaid, else Active;
        Completed once the balance is below one cent.
    """
    loan_amount = to_decimal(loan.loan_amount)
    if loan_amount <= ZERO and not loan.transactions:
        return InterestSchedule(balance=ZERO, next_due_date=None, status=LoanStatus.COMPLETED)

    steps = accrue_months(loan, now)
    principal = steps[-1].closing_principal if steps else loan_amount
    has_overdue_interest = any(step.unpaid > ZERO for step in steps)

    open_month_start = as_datetime(month_start(now))
    principal -= _paid_between(loan.transactions, open_month_start, as_datetime(now))

    balance = max(ZERO, principal)
    if balance < SETTLEMENT_EPSILON:
        return InterestSchedule(balance=ZERO, next_due_date=None, status=LoanStatus.COMPLETED)

    next_due_date = monthly_due_date(loan.start_date, now) if loan.start_date else None
    status = LoanStatus.OVERDUE if has_overdue_interest else LoanStatus.ACTIVE
    return InterestSchedule(balance=balance, next_due_date=next_due_date, status=status)
