"""Enumeration types for loan and investor records."""

from enum import Enum


class LoanType(str, Enum):
    FINANCE = "Finance"
    TENDER = "Tender"
    INTEREST_RATE = "InterestRate"


class DurationUnit(str, Enum):
    DAYS = "Days"
    WEEKS = "Weeks"
    MONTHS = "Months"


class LoanStatus(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class InvestmentType(str, Enum):
    FINANCE = "Finance"
    TENDER = "Tender"
    INTEREST_RATE_PLAN = "InterestRatePlan"


class InvestorStatus(str, Enum):
    ON_TRACK = "On Track"
    DELAYED = "Delayed"
    CLOSED = "Closed"


class PaymentType(str, Enum):
    PRINCIPAL = "Principal"
    PROFIT = "Profit"
    INTEREST = "Interest"
