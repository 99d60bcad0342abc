"""In-memory record store for loans and investors."""

from loan_ledger.store.ledger import LedgerStore

__all__ = ["LedgerStore"]
