"""Generator for manually entered small-business transactions."""

import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterator

from cashpilot.generators.base import BaseGenerator
from cashpilot.models.financial import (
    Transaction,
    TransactionSource,
    TransactionStatus,
    TransactionType,
)


class TransactionGenerator(BaseGenerator):
    """Generate manual-entry transactions with realistic descriptions."""

    TRANSACTION_TYPES = [TransactionType.INCOME, TransactionType.EXPENSE]
    TRANSACTION_WEIGHTS = [0.40, 0.60]

    # category -> (description templates, amount range)
    INCOME_PROFILES = {
        "Client Services": (["Consulting project for {company}", "Client work - {company}"], (500, 5000)),
        "Product Sales": (["Product sale to {company}", "Merchandise order {company}"], (50, 800)),
        "Subscription": (["Monthly subscription - {company}", "Annual membership {company}"], (99, 299)),
        "Investment": (["Dividend payment", "Interest on savings"], (20, 400)),
    }
    EXPENSE_PROFILES = {
        "Technology": (["Software license", "Web hosting", "Laptop purchase"], (20, 1500)),
        "Marketing": (["Advertising campaign", "Social media promotion", "SEO services"], (100, 2000)),
        "Office & Supplies": (["Office supplies", "Printer ink and paper"], (15, 300)),
        "Travel": (["Flight to client site", "Hotel stay", "Uber rides"], (30, 900)),
        "Meals": (["Client lunch", "Team coffee"], (10, 150)),
        "Professional Services": (["Accounting services", "Legal review"], (200, 2500)),
        "Rent": (["Office rent", "Warehouse lease"], (800, 3000)),
        "Utilities": (["Electricity bill", "Water utility"], (50, 400)),
        "Salaries": (["Payroll run", "Staff salary"], (2000, 8000)),
        "Inventory": (["Inventory restock", "Materials for production"], (300, 4000)),
    }

    def __init__(self, seed: int | None = None, user_id: str = "") -> None:
        super().__init__(seed)
        self.user_id = user_id

    def generate(
        self,
        tx_type: TransactionType | None = None,
        date: datetime | None = None,
        category: str | None = None,
        amount: Decimal | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> Transaction:
        """Generate a single manual transaction.

        Parameters
        ----------
        tx_type : TransactionType | None
            Income or expense. Random when omitted.
        date : datetime | None
            Transaction date. Within the last 90 days when omitted.
        category : str | None
            Category from the type's profiles. Random when omitted.
        amount : Decimal | None
            Magnitude. Drawn from the category's range when omitted.
        description : str | None
            Overrides the templated description.
        tags : list[str] | None
            Tags to attach.

        Returns
        -------
        Transaction
            Transaction whose amount sign follows its type.
        """
        tx_type = tx_type or random.choices(self.TRANSACTION_TYPES, weights=self.TRANSACTION_WEIGHTS, k=1)[0]
        profiles = self.INCOME_PROFILES if tx_type == TransactionType.INCOME else self.EXPENSE_PROFILES
        category = category or random.choice(list(profiles))
        templates, (low, high) = profiles.get(category, (["{company}"], (10, 1000)))

        magnitude = abs(amount) if amount is not None else self.money(low, high)
        date = date or datetime.now() - timedelta(days=random.randint(0, 90), hours=random.randint(0, 23))

        return Transaction(
            id=self.fake.uuid4(),
            user_id=self.user_id,
            date=date,
            amount=magnitude if tx_type == TransactionType.INCOME else -magnitude,
            type=tx_type,
            description=description or random.choice(templates).format(company=self.fake.company()),
            category=category,
            source=TransactionSource.MANUAL,
            status=TransactionStatus.COMPLETED,
            tags=list(tags or []),
            created_at=date,
            updated_at=date,
        )

    def generate_batch(self, count: int, tx_type: TransactionType | None = None) -> Iterator[Transaction]:
        """Generate multiple transactions.

        Yields
        ------
        Transaction
            Generated transactions.
        """
        for _ in range(count):
            yield self.generate(tx_type=tx_type)
