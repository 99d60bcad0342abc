"""Tests for record models."""

from datetime import date, datetime
from decimal import Decimal

from loan_ledger.models import (
    LOAN_CLASSES,
    DurationUnit,
    FinanceLoan,
    InterestRateLoan,
    InvestmentType,
    Investor,
    InvestorPayment,
    InvestorStatus,
    Loan,
    LoanStatus,
    LoanType,
    PaymentType,
    TenderLoan,
    Transaction,
)


class TestEnums:
    """Enum values match the stored record values."""

    def test_loan_type_values(self) -> None:
        assert [t.value for t in LoanType] == ["Finance", "Tender", "InterestRate"]

    def test_loan_status_values(self) -> None:
        assert [s.value for s in LoanStatus] == ["Active", "Completed", "Overdue"]

    def test_investor_status_values(self) -> None:
        assert InvestorStatus("On Track") is InvestorStatus.ON_TRACK
        assert InvestorStatus.CLOSED == "Closed"

    def test_duration_unit_values(self) -> None:
        assert {u.value for u in DurationUnit} == {"Days", "Weeks", "Months"}

    def test_investment_and_payment_types(self) -> None:
        assert InvestmentType("InterestRatePlan") is InvestmentType.INTEREST_RATE_PLAN
        assert {p.value for p in PaymentType} == {"Principal", "Profit", "Interest"}


class TestLoanVariants:
    """Tests for the loan variants."""

    def test_finance_loan_creation(self) -> None:
        loan = FinanceLoan(
            loan_id="loan-001",
            customer_name="Ravi Kumar",
            loan_amount=Decimal("10000"),
            given_amount=Decimal("9500"),
            start_date=date(2024, 1, 1),
            interest_rate=Decimal("2"),
            duration_in_months=6,
        )

        assert loan.loan_type is LoanType.FINANCE
        assert loan.duration_in_months == 6
        assert loan.status is LoanStatus.ACTIVE
        assert loan.transactions == []
        assert loan.phone == ""

    def test_tender_loan_has_only_day_duration(self) -> None:
        loan = TenderLoan(
            loan_id="loan-002",
            customer_name="Anita Rao",
            loan_amount=Decimal("5000"),
            given_amount=Decimal("4500"),
            start_date=date(2024, 1, 1),
            duration_in_days=30,
        )

        assert loan.loan_type is LoanType.TENDER
        assert not hasattr(loan, "interest_rate")
        assert not hasattr(loan, "duration_in_months")

    def test_interest_rate_loan_defaults(self) -> None:
        loan = InterestRateLoan(
            loan_id="loan-003",
            customer_name="Suresh Iyer",
            loan_amount=Decimal("1000"),
            given_amount=Decimal("1000"),
            start_date=date(2024, 1, 1),
        )

        assert loan.loan_type is LoanType.INTEREST_RATE
        assert loan.interest_rate is None
        assert loan.duration_value is None
        assert loan.duration_unit is None

    def test_base_loan_is_untagged(self) -> None:
        loan = Loan(
            loan_id="loan-004",
            customer_name="Unknown",
            loan_amount=None,
            given_amount=None,
            start_date=None,
        )

        assert loan.loan_type is None

    def test_transactions_are_not_shared(self) -> None:
        first = TenderLoan("a", "A", Decimal("1"), Decimal("1"), date(2024, 1, 1))
        second = TenderLoan("b", "B", Decimal("1"), Decimal("1"), date(2024, 1, 1))
        first.transactions.append(
            Transaction(transaction_id="t1", amount=Decimal("1"), payment_date=datetime(2024, 1, 2))
        )

        assert second.transactions == []

    def test_loan_classes_cover_every_type(self) -> None:
        assert set(LOAN_CLASSES) == set(LoanType)
        for loan_type, cls in LOAN_CLASSES.items():
            assert cls.loan_type is loan_type


class TestInvestor:
    """Tests for Investor and InvestorPayment."""

    def test_investor_creation(self) -> None:
        investor = Investor(
            investor_id="inv-001",
            name="Meera Nair",
            investment_amount=Decimal("100000"),
            investment_type=InvestmentType.TENDER,
            profit_rate=Decimal("1.5"),
            start_date=date(2024, 1, 15),
        )

        assert investor.status is InvestorStatus.ON_TRACK
        assert investor.payments == []

    def test_payment_creation(self) -> None:
        payment = InvestorPayment(
            payment_id="pay-001",
            amount=Decimal("1500"),
            payment_date=datetime(2024, 2, 15, 10, 0),
            payment_type=PaymentType.PROFIT,
        )

        assert payment.remarks is None
        assert payment.created_at is None
