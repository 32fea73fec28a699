"""Transaction model for financial domain."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from cashpilot.models.financial.enums import (
    TransactionSource,
    TransactionStatus,
    TransactionType,
)


@dataclass
class Transaction:
    """One financial event.

    ``amount`` is signed as recorded by the source. Aggregations use its
    magnitude and take the direction from ``type``.
    """

    id: str
    date: datetime
    amount: Decimal
    type: TransactionType
    description: str = ""
    category: str = ""
    user_id: str = ""
    currency: str = "USD"
    source: TransactionSource = TransactionSource.MANUAL
    status: TransactionStatus = TransactionStatus.COMPLETED
    tags: list[str] = field(default_factory=list)
    source_id: str | None = None  # Shopify order id, QuickBooks doc id

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def magnitude(self) -> Decimal:
        """Absolute amount, direction comes from ``type``."""
        return abs(self.amount)

    @property
    def period(self) -> str:
        """Calendar-month bucket label (``YYYY-MM``)."""
        return self.date.strftime("%Y-%m")
