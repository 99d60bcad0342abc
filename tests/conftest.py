"""Pytest configuration and fixtures."""

from datetime import date, datetime
from decimal import Decimal

import pytest
from faker import Faker

from loan_ledger.models import (
    FinanceLoan,
    InterestRateLoan,
    InvestmentType,
    Investor,
    InvestorPayment,
    PaymentType,
    TenderLoan,
    Transaction,
)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def fake(seed: int) -> Faker:
    """Seeded Faker for names and ids."""
    faker = Faker("en_IN")
    faker.seed_instance(seed)
    return faker


@pytest.fixture
def now() -> datetime:
    """Pinned evaluation instant."""
    return datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def txn(fake: Faker):
    """Build a transaction with a generated id."""

    def _make(amount: str, when: datetime) -> Transaction:
        return Transaction(transaction_id=fake.uuid4(), amount=Decimal(amount), payment_date=when)

    return _make


@pytest.fixture
def finance_loan(fake: Faker):
    """Build a Finance loan; keyword arguments override the defaults."""

    def _make(**overrides) -> FinanceLoan:
        fields = {
            "loan_id": fake.uuid4(),
            "customer_name": fake.name(),
            "phone": fake.msisdn(),
            "loan_amount": Decimal("10000"),
            "given_amount": Decimal("10000"),
            "start_date": date(2024, 3, 1),
            "interest_rate": Decimal("2"),
            "duration_in_months": 3,
        }
        fields.update(overrides)
        return FinanceLoan(**fields)

    return _make


@pytest.fixture
def tender_loan(fake: Faker):
    """Build a Tender loan; keyword arguments override the defaults."""

    def _make(**overrides) -> TenderLoan:
        fields = {
            "loan_id": fake.uuid4(),
            "customer_name": fake.name(),
            "phone": fake.msisdn(),
            "loan_amount": Decimal("5000"),
            "given_amount": Decimal("4500"),
            "start_date": date(2024, 6, 1),
            "duration_in_days": 30,
        }
        fields.update(overrides)
        return TenderLoan(**fields)

    return _make


@pytest.fixture
def interest_loan(fake: Faker):
    """Build an InterestRate loan; keyword arguments override the defaults."""

    def _make(**overrides) -> InterestRateLoan:
        fields = {
            "loan_id": fake.uuid4(),
            "customer_name": fake.name(),
            "phone": fake.msisdn(),
            "loan_amount": Decimal("1000"),
            "given_amount": Decimal("1000"),
            "start_date": date(2024, 4, 15),
            "interest_rate": Decimal("5"),
        }
        fields.update(overrides)
        return InterestRateLoan(**fields)

    return _make


@pytest.fixture
def investor(fake: Faker):
    """Build an investor; keyword arguments override the defaults."""

    def _make(**overrides) -> Investor:
        fields = {
            "investor_id": fake.uuid4(),
            "name": fake.name(),
            "investment_amount": Decimal("100000"),
            "investment_type": InvestmentType.FINANCE,
            "profit_rate": Decimal("1"),
            "start_date": date(2024, 1, 15),
        }
        fields.update(overrides)
        return Investor(**fields)

    return _make


@pytest.fixture
def payment(fake: Faker):
    """Build an investor payment with a generated id."""

    def _make(
        amount: str,
        when: datetime,
        payment_type: PaymentType = PaymentType.PROFIT,
    ) -> InvestorPayment:
        return InvestorPayment(
            payment_id=fake.uuid4(),
            amount=Decimal(amount),
            payment_date=when,
            payment_type=payment_type,
        )

    return _make
