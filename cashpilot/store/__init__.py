"""In-memory application state."""

from cashpilot.store.transactions import PendingEdit, TransactionStore

__all__ = ["PendingEdit", "TransactionStore"]
