"""In-memory record store that keeps cached statuses in step with the engine."""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from loan_ledger.config import LedgerConfig
from loan_ledger.engine.investor import investor_metrics
from loan_ledger.engine.loan import loan_status
from loan_ledger.exceptions import (
    DuplicateRecordError,
    InvalidRecordStateError,
    RecordNotFoundError,
)
from loan_ledger.models.enums import InvestorStatus
from loan_ledger.models.investor import Investor, InvestorPayment
from loan_ledger.models.loan import Loan, Transaction

logger = logging.getLogger(__name__)


@dataclass
class LedgerStore:
    """Store for loans and investors.

    Every transaction or payment mutation re-runs the engine and writes the
    derived status back onto the record, unless ``config.sync_status`` is off.
    Removing a record drops it from the active set.
    """

    config: LedgerConfig = field(default_factory=LedgerConfig)

    _loans: dict[str, Loan] = field(default_factory=dict)
    _investors: dict[str, Investor] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "LedgerStore":
        """Build a store from environment configuration and apply its logging setup."""
        config = LedgerConfig.from_env()
        config.configure_logging()
        logger.debug("Ledger store configured (as_of=%s, sync_status=%s)", config.as_of, config.sync_status)
        return cls(config=config)

    # --- loans ---------------------------------------------------------------

    def loans(self) -> list[Loan]:
        """Active loans in insertion order."""
        return list(self._loans.values())

    def add_loan(self, loan: Loan) -> Loan:
        """Add a loan to the store."""
        if loan.loan_id in self._loans:
            raise DuplicateRecordError(f"Loan {loan.loan_id} already exists")

        if loan.created_at is None:
            loan.created_at = self.config.now()
        self._loans[loan.loan_id] = loan
        return self._after_loan_mutation(loan)

    def get_loan(self, loan_id: str) -> Loan:
        """Look up a loan by id."""
        try:
            return self._loans[loan_id]
        except KeyError:
            logger.warning("Loan %s not found", loan_id)
            raise RecordNotFoundError(f"Loan {loan_id} not found") from None

    def remove_loans(self, loan_ids: Iterable[str]) -> int:
        """Remove loans; unknown ids are skipped. Returns how many were removed."""
        removed = 0
        for loan_id in loan_ids:
            if self._loans.pop(loan_id, None) is not None:
                removed += 1
        logger.info("Removed %d loan(s)", removed)
        return removed

    def add_transaction(self, loan_id: str, transaction: Transaction) -> Loan:
        """Record a repayment against a loan."""
        loan = self.get_loan(loan_id)
        if any(txn.transaction_id == transaction.transaction_id for txn in loan.transactions):
            raise DuplicateRecordError(
                f"Transaction {transaction.transaction_id} already exists on loan {loan_id}"
            )

        if transaction.created_at is None:
            transaction.created_at = self.config.now()
        loan.transactions.append(transaction)
        return self._after_loan_mutation(loan)

    def update_transaction(
        self,
        loan_id: str,
        transaction_id: str,
        amount: Decimal | None = None,
        payment_date: datetime | None = None,
    ) -> Loan:
        """Change the amount and/or date of a recorded repayment."""
        loan = self.get_loan(loan_id)
        index = self._transaction_index(loan, transaction_id)
        current = loan.transactions[index]
        loan.transactions[index] = replace(
            current,
            amount=current.amount if amount is None else amount,
            payment_date=current.payment_date if payment_date is None else payment_date,
        )
        return self._after_loan_mutation(loan)

    def remove_transaction(self, loan_id: str, transaction_id: str) -> Loan:
        """Delete a recorded repayment."""
        loan = self.get_loan(loan_id)
        del loan.transactions[self._transaction_index(loan, transaction_id)]
        return self._after_loan_mutation(loan)

    def sync_loan_status(self, loan_id: str) -> Loan:
        """Write the engine's status back onto the stored loan."""
        loan = self.get_loan(loan_id)
        now = self.config.now()
        status = loan_status(loan, now)
        if loan.status != status:
            logger.info(
                "Loan %s status %s -> %s",
                loan.loan_id,
                loan.status.value,
                status.value,
                extra={
                    "loan_id": loan.loan_id,
                    "old_status": loan.status.value,
                    "new_status": status.value,
                },
            )
            loan.status = status
            loan.updated_at = now
        return loan

    def _after_loan_mutation(self, loan: Loan) -> Loan:
        loan.updated_at = self.config.now()
        if self.config.sync_status:
            return self.sync_loan_status(loan.loan_id)
        return loan

    @staticmethod
    def _transaction_index(loan: Loan, transaction_id: str) -> int:
        for index, txn in enumerate(loan.transactions):
            if txn.transaction_id == transaction_id:
                return index
        raise RecordNotFoundError(f"Transaction {transaction_id} not found on loan {loan.loan_id}")

    # --- investors -----------------------------------------------------------

    def investors(self) -> list[Investor]:
        """Active investors in insertion order."""
        return list(self._investors.values())

    def add_investor(self, investor: Investor) -> Investor:
        """Add an investor to the store."""
        if investor.investor_id in self._investors:
            raise DuplicateRecordError(f"Investor {investor.investor_id} already exists")

        if investor.created_at is None:
            investor.created_at = self.config.now()
        self._investors[investor.investor_id] = investor
        return self._after_investor_mutation(investor)

    def get_investor(self, investor_id: str) -> Investor:
        """Look up an investor by id."""
        try:
            return self._investors[investor_id]
        except KeyError:
            logger.warning("Investor %s not found", investor_id)
            raise RecordNotFoundError(f"Investor {investor_id} not found") from None

    def remove_investors(self, investor_ids: Iterable[str]) -> int:
        """Remove investors; unknown ids are skipped. Returns how many were removed."""
        removed = 0
        for investor_id in investor_ids:
            if self._investors.pop(investor_id, None) is not None:
                removed += 1
        logger.info("Removed %d investor(s)", removed)
        return removed

    def add_payment(self, investor_id: str, payment: InvestorPayment) -> Investor:
        """Record a payment made to an investor."""
        investor = self.get_investor(investor_id)
        if any(p.payment_id == payment.payment_id for p in investor.payments):
            raise DuplicateRecordError(
                f"Payment {payment.payment_id} already exists for investor {investor_id}"
            )

        if payment.created_at is None:
            payment.created_at = self.config.now()
        investor.payments.append(payment)
        return self._after_investor_mutation(investor)

    def update_payment(
        self,
        investor_id: str,
        payment_id: str,
        amount: Decimal | None = None,
        payment_date: datetime | None = None,
        remarks: str | None = None,
    ) -> Investor:
        """Change a recorded investor payment."""
        investor = self.get_investor(investor_id)
        index = self._payment_index(investor, payment_id)
        current = investor.payments[index]
        investor.payments[index] = replace(
            current,
            amount=current.amount if amount is None else amount,
            payment_date=current.payment_date if payment_date is None else payment_date,
            remarks=current.remarks if remarks is None else remarks,
        )
        return self._after_investor_mutation(investor)

    def remove_payment(self, investor_id: str, payment_id: str) -> Investor:
        """Delete a recorded investor payment."""
        investor = self.get_investor(investor_id)
        del investor.payments[self._payment_index(investor, payment_id)]
        return self._after_investor_mutation(investor)

    def close_investor(self, investor_id: str) -> Investor:
        """Mark an investor Closed; accrual stops from then on."""
        investor = self.get_investor(investor_id)
        if investor.status == InvestorStatus.CLOSED:
            raise InvalidRecordStateError(f"Investor {investor_id} is already closed")

        logger.info("Investor %s closed", investor_id, extra={"investor_id": investor_id})
        investor.status = InvestorStatus.CLOSED
        investor.updated_at = self.config.now()
        return investor

    def reopen_investor(self, investor_id: str) -> Investor:
        """Lift a manual close and re-derive the status from accrual."""
        investor = self.get_investor(investor_id)
        if investor.status != InvestorStatus.CLOSED:
            raise InvalidRecordStateError(f"Investor {investor_id} is not closed")

        investor.status = InvestorStatus.ON_TRACK
        logger.info("Investor %s reopened", investor_id, extra={"investor_id": investor_id})
        return self._after_investor_mutation(investor)

    def sync_investor_status(self, investor_id: str) -> Investor:
        """Write the engine's status back onto the stored investor.

        Closed investors are left untouched.
        """
        investor = self.get_investor(investor_id)
        if investor.status == InvestorStatus.CLOSED:
            return investor

        now = self.config.now()
        status = investor_metrics(investor, now).status
        if investor.status != status:
            logger.info(
                "Investor %s status %s -> %s",
                investor.investor_id,
                investor.status.value,
                status.value,
                extra={
                    "investor_id": investor.investor_id,
                    "old_status": investor.status.value,
                    "new_status": status.value,
                },
            )
            investor.status = status
            investor.updated_at = now
        return investor

    def _after_investor_mutation(self, investor: Investor) -> Investor:
        investor.updated_at = self.config.now()
        if self.config.sync_status:
            return self.sync_investor_status(investor.investor_id)
        return investor

    @staticmethod
    def _payment_index(investor: Investor, payment_id: str) -> int:
        for index, payment in enumerate(investor.payments):
            if payment.payment_id == payment_id:
                return index
        raise RecordNotFoundError(
            f"Payment {payment_id} not found for investor {investor.investor_id}"
        )
