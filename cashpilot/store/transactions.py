"""In-memory transaction store with optimistic edits and change subscriptions."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable
from uuid import uuid4

from cashpilot.exceptions import EntityNotFoundError, InvalidEntityStateError
from cashpilot.logging import get_logger
from cashpilot.models import ChangeEvent
from cashpilot.models.financial import (
    EditOperation,
    Transaction,
    TransactionSource,
    TransactionType,
)
from cashpilot.sinks.serialization import dataclass_to_dict

logger = get_logger(__name__)

EDITABLE_FIELDS = frozenset({"category", "tags"})

Subscriber = Callable[[ChangeEvent], None]


def _check_changes(changes: dict) -> None:
    illegal = set(changes) - EDITABLE_FIELDS
    if illegal:
        raise InvalidEntityStateError(
            f"Only {', '.join(sorted(EDITABLE_FIELDS))} can be edited, got {', '.join(sorted(illegal))}"
        )


@dataclass
class PendingEdit:
    """Edit applied optimistically until the authoritative list reflects it."""

    op: EditOperation
    target: str  # Transaction ID
    payload: dict = field(default_factory=dict)
    edit_id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    def is_reflected_in(self, authoritative: dict[str, Transaction]) -> bool:
        """Whether the authoritative state already shows this edit."""
        current = authoritative.get(self.target)
        if self.op == EditOperation.CREATE:
            return current is not None
        if self.op == EditOperation.DELETE:
            return current is None
        # Unless its create is still pending, an update to a missing transaction can never apply
        if current is None:
            return True
        return all(getattr(current, name) == value for name, value in self.payload.items())

    def apply(self, transactions: dict[str, Transaction]) -> None:
        if self.op == EditOperation.CREATE:
            transactions[self.target] = self.payload["transaction"]
        elif self.op == EditOperation.DELETE:
            transactions.pop(self.target, None)
        elif self.target in transactions:
            transactions[self.target] = replace(transactions[self.target], **self.payload)


@dataclass
class TransactionStore:
    """Explicitly passed application state for one user's transactions.

    ``confirmed`` holds what the authoritative source has acknowledged,
    ``pending`` the ordered log of optimistic edits. Readers call
    :meth:`snapshot` and pass the list to the analytics functions.
    """

    confirmed: dict[str, Transaction] = field(default_factory=dict)
    pending: list[PendingEdit] = field(default_factory=list)
    _subscribers: list[Subscriber] = field(default_factory=list)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change listener and return its unsubscribe handle."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _emit(self, operation: EditOperation, tx: Transaction) -> None:
        event = ChangeEvent(operation, tx.id, dataclass_to_dict(tx))
        for callback in list(self._subscribers):
            callback(event)

    def get(self, transaction_id: str) -> Transaction:
        """Get a confirmed transaction by id."""
        try:
            return self.confirmed[transaction_id]
        except KeyError:
            raise EntityNotFoundError(f"Transaction {transaction_id} not found") from None

    def add(self, tx: Transaction) -> Transaction:
        """Add a confirmed transaction and return the stored copy."""
        if tx.id in self.confirmed:
            raise InvalidEntityStateError(f"Transaction {tx.id} already exists")
        stored = tx if tx.created_at is not None else replace(tx, created_at=datetime.now())
        self.confirmed[tx.id] = stored
        self._emit(EditOperation.CREATE, stored)
        return stored

    def update(self, transaction_id: str, **changes) -> Transaction:
        """Edit the category or tags of a confirmed transaction."""
        _check_changes(changes)
        updated = replace(self.get(transaction_id), **changes, updated_at=datetime.now())
        self.confirmed[transaction_id] = updated
        self._emit(EditOperation.UPDATE, updated)
        return updated

    def remove(self, transaction_id: str) -> Transaction:
        """Delete a confirmed transaction."""
        tx = self.get(transaction_id)
        del self.confirmed[transaction_id]
        self._emit(EditOperation.DELETE, tx)
        return tx

    def stage_create(self, tx: Transaction) -> PendingEdit:
        """Queue an optimistic create."""
        edit = PendingEdit(EditOperation.CREATE, tx.id, {"transaction": tx})
        self.pending.append(edit)
        return edit

    def stage_update(self, transaction_id: str, **changes) -> PendingEdit:
        """Queue an optimistic category or tag edit."""
        _check_changes(changes)
        if transaction_id not in self.confirmed and not any(
            e.op == EditOperation.CREATE and e.target == transaction_id for e in self.pending
        ):
            raise EntityNotFoundError(f"Transaction {transaction_id} not found")
        edit = PendingEdit(EditOperation.UPDATE, transaction_id, dict(changes))
        self.pending.append(edit)
        return edit

    def stage_delete(self, transaction_id: str) -> PendingEdit:
        """Queue an optimistic delete."""
        edit = PendingEdit(EditOperation.DELETE, transaction_id)
        self.pending.append(edit)
        return edit

    def snapshot(self) -> list[Transaction]:
        """Confirmed transactions with the pending log applied in order."""
        view = dict(self.confirmed)
        for edit in self.pending:
            edit.apply(view)
        return list(view.values())

    def reconcile(self, authoritative: list[Transaction]) -> list[PendingEdit]:
        """Replace confirmed state and drop the edits it already reflects.

        Returns
        -------
        list[PendingEdit]
            Edits still pending after reconciliation.
        """
        self.confirmed = {tx.id: tx for tx in authoritative}
        before = len(self.pending)
        remaining: list[PendingEdit] = []
        awaiting_create: set[str] = set()
        for edit in self.pending:
            # Later edits to a transaction whose create is still pending wait for it
            if edit.op != EditOperation.CREATE and edit.target in awaiting_create:
                remaining.append(edit)
                continue
            if edit.is_reflected_in(self.confirmed):
                continue
            if edit.op == EditOperation.CREATE:
                awaiting_create.add(edit.target)
            remaining.append(edit)
        self.pending = remaining
        logger.debug("Reconciled %d pending edits, %d remain", before - len(self.pending), len(self.pending))
        return list(self.pending)

    def by_type(self, transaction_type: TransactionType) -> list[Transaction]:
        return [tx for tx in self.snapshot() if tx.type == transaction_type]

    def by_source(self, source: TransactionSource) -> list[Transaction]:
        return [tx for tx in self.snapshot() if tx.source == source]

    def between(self, start: datetime, end: datetime) -> list[Transaction]:
        """Transactions dated within ``[start, end]``."""
        return [tx for tx in self.snapshot() if start <= tx.date <= end]

    def get_stats(self) -> dict[str, int]:
        """Get store statistics."""
        return {
            "confirmed": len(self.confirmed),
            "pending": len(self.pending),
            "subscribers": len(self._subscribers),
        }
