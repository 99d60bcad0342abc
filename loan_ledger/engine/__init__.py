"""Pure calculation engine for loans and investors."""

from loan_ledger.engine.investor import (
    InvestorMetrics,
    InvestorSummary,
    investor_metrics,
    investor_summary,
)
from loan_ledger.engine.loan import (
    LoanFigures,
    amount_paid,
    balance,
    evaluate_loan,
    final_due_date,
    loan_status,
    next_due_date,
    profit,
    total_amount,
)
from loan_ledger.engine.portfolio import (
    PortfolioSummary,
    filter_loans,
    open_loans,
    portfolio_summary,
)
from loan_ledger.engine.schedule import (
    InterestSchedule,
    MonthlyAccrual,
    accrue_months,
    interest_rate_schedule,
)

__all__ = [
    "InterestSchedule",
    "InvestorMetrics",
    "InvestorSummary",
    "LoanFigures",
    "MonthlyAccrual",
    "PortfolioSummary",
    "accrue_months",
    "amount_paid",
    "balance",
    "evaluate_loan",
    "filter_loans",
    "final_due_date",
    "interest_rate_schedule",
    "investor_metrics",
    "investor_summary",
    "loan_status",
    "next_due_date",
    "open_loans",
    "portfolio_summary",
    "profit",
    "total_amount",
]
