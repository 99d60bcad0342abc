"""Investor profit calculations.

Investor profit accrues flat: every fully elapsed month earns the same
percentage of the original investment, and unpaid profit never compounds.
The investment type is informational and does not change the calculation.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from loan_ledger.engine.amounts import SETTLEMENT_EPSILON, ZERO, percent, to_decimal, total
from loan_ledger.engine.dates import full_months_between, resolve_now
from loan_ledger.models.enums import InvestorStatus
from loan_ledger.models.investor import Investor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvestorMetrics:
    """Derived figures for one investor."""

    current_balance: Decimal
    accumulated_profit: Decimal
    total_paid: Decimal
    pending_profit: Decimal
    missed_months: int
    monthly_profit: Decimal
    months_completed: int
    status: InvestorStatus


@dataclass(frozen=True)
class InvestorSummary:
    """Totals across a collection of investors."""

    total_investors: int
    total_investment: Decimal
    total_profit_earned: Decimal
    total_paid_to_investors: Decimal
    total_pending_profit: Decimal
    overall_profit_loss: Decimal


def _closed_metrics(investor: Investor) -> InvestorMetrics:
    """Closed investors stop accruing; only what was paid matters."""
    total_paid = total(payment.amount for payment in investor.payments)
    accumulated = max(ZERO, total_paid - to_decimal(investor.investment_amount))
    return InvestorMetrics(
        current_balance=ZERO,
        accumulated_profit=accumulated,
        total_paid=total_paid,
        pending_profit=ZERO,
        missed_months=0,
        monthly_profit=ZERO,
        months_completed=0,
        status=InvestorStatus.CLOSED,
    )


def investor_metrics(investor: Investor, now: datetime | None = None) -> InvestorMetrics:
    """Compute accrued profit, payments and status for an investor.

    Parameters
    ----------
    investor : Investor
        Investor snapshot.
    now : datetime | None
        Evaluation instant. Defaults to the system clock.

    Returns
    -------
    InvestorMetrics
        Closed investors short-circuit with a zero balance. Otherwise the
        investor is Delayed while more than one cent of accrued profit is
        unpaid, and On Track when not.
    """
    if investor.status == InvestorStatus.CLOSED:
        return _closed_metrics(investor)

    now = resolve_now(now)
    investment = to_decimal(investor.investment_amount)
    monthly_profit = investment * percent(investor.profit_rate)

    if investor.start_date is None:
        logger.debug("Investor %s has no start date; nothing accrued", investor.investor_id)
        months_completed = 0
    else:
        months_completed = full_months_between(investor.start_date, now)

    accumulated = monthly_profit * months_completed
    total_paid = total(payment.amount for payment in investor.payments)
    pending = accumulated - total_paid
    outstanding = max(ZERO, pending)

    missed_months = int(outstanding // monthly_profit) if monthly_profit > ZERO else 0
    status = InvestorStatus.DELAYED if pending > SETTLEMENT_EPSILON else InvestorStatus.ON_TRACK

    return InvestorMetrics(
        current_balance=investment + outstanding,
        accumulated_profit=accumulated,
        total_paid=total_paid,
        pending_profit=pending,
        missed_months=missed_months,
        monthly_profit=monthly_profit,
        months_completed=months_completed,
        status=status,
    )


def investor_summary(investors: Iterable[Investor], now: datetime | None = None) -> InvestorSummary:
    """Aggregate investor metrics.

    Pending profit is counted per investor and never goes below zero, so an
    investor paid ahead does not offset another who is behind. The overall
    profit/loss is what has been paid out minus what was invested.
    """
    now = resolve_now(now)
    count = 0
    investment = ZERO
    earned = ZERO
    paid = ZERO
    pending = ZERO

    for investor in investors:
        metrics = investor_metrics(investor, now)
        count += 1
        investment += to_decimal(investor.investment_amount)
        earned += metrics.accumulated_profit
        paid += metrics.total_paid
        pending += max(ZERO, metrics.accumulated_profit - metrics.total_paid)

    return InvestorSummary(
        total_investors=count,
        total_investment=investment,
        total_profit_earned=earned,
        total_paid_to_investors=paid,
        total_pending_profit=pending,
        overall_profit_loss=paid - investment,
    )
