"""Subscription software business with QuickBooks-managed bills."""

import random
from datetime import datetime
from decimal import Decimal

from cashpilot.generators import QuickBooksGenerator, TransactionGenerator
from cashpilot.models.financial import TransactionType
from cashpilot.scenarios.base import BaseScenario


class SubscriptionBusinessScenario(BaseScenario):
    """Steady monthly subscribers, occasional setup work, predictable bills.

    Each subscriber pays the same plan price every month, so recurring
    revenue dominates income.
    """

    name = "subscription"

    PLAN_PRICES = [Decimal("99.00"), Decimal("149.00"), Decimal("199.00"), Decimal("299.00")]

    # description -> monthly amount range
    MONTHLY_BILLS = {
        "Monthly rent": (900, 1200),
        "Software subscription": (30, 400),
    }

    def __init__(
        self,
        months: int = 6,
        num_customers: int = 25,
        start_date: datetime | None = None,
        seed: int | None = None,
    ) -> None:
        super().__init__(months, num_customers, start_date, seed)
        self._tx_gen = TransactionGenerator(seed=seed)
        self._qb_gen = QuickBooksGenerator(seed=seed)
        self._subscribers = [
            (self._tx_gen.fake.company(), random.choice(self.PLAN_PRICES)) for _ in range(num_customers)
        ]

    def _generate_month(self, month_start: datetime, index: int) -> None:
        for company, price in self._subscribers:
            self.store.add(
                self._tx_gen.generate(
                    tx_type=TransactionType.INCOME,
                    date=self._tx_gen.moment_in_month(month_start),
                    category="Subscription",
                    amount=price,
                    description=f"Monthly subscription - {company}",
                    tags=["subscription"],
                )
            )

        # One-off onboarding work
        self.store.add(
            self._tx_gen.generate(
                tx_type=TransactionType.INCOME,
                date=self._tx_gen.moment_in_month(month_start),
                category="Client Services",
                amount=self._tx_gen.money(200, 600),
            )
        )

        for description, (low, high) in self.MONTHLY_BILLS.items():
            self.request.quickbooks_bills.append(
                self._qb_gen.generate_bill(
                    self._qb_gen.moment_in_month(month_start),
                    description=description,
                    amount=self._qb_gen.money(low, high),
                )
            )
