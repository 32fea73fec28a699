"""Change notifications emitted by stateful components."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from cashpilot.models.financial.enums import EditOperation

_PAST_TENSE = {
    EditOperation.CREATE: "created",
    EditOperation.UPDATE: "updated",
    EditOperation.DELETE: "deleted",
}


@dataclass
class ChangeEvent:
    """Notification sent to store subscribers after a confirmed change.

    ``data`` is the serialized transaction after the change, or as it was
    before removal for deletes.
    """

    operation: EditOperation
    subject: str  # Transaction ID
    data: dict
    source: str = "transaction_store"
    event_id: str = field(default_factory=lambda: str(uuid4()))
    event_time: datetime = field(default_factory=datetime.now)

    @property
    def event_type(self) -> str:
        """Dotted name such as ``transaction.created``."""
        return f"transaction.{_PAST_TENSE[self.operation]}"
