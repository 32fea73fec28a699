"""Online shop selling through Shopify."""

import random
from datetime import datetime

from cashpilot.generators import ShopifyOrderGenerator, TransactionGenerator
from cashpilot.models.financial import ShopifyCustomer, TransactionType
from cashpilot.scenarios.base import BaseScenario


class EcommerceScenario(BaseScenario):
    """A Shopify store whose customer base grows every month.

    Orders come from Shopify; inventory, marketing and hosting costs are
    entered manually.
    """

    name = "ecommerce"

    ORDERS_PER_MONTH = (20, 40)

    # category -> (description, amount range)
    MONTHLY_EXPENSES = {
        "Inventory": ("Inventory restock", (800, 1500)),
        "Marketing": ("Social media advertising", (200, 600)),
        "Technology": ("Web hosting and apps", (50, 150)),
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
        self._order_gen = ShopifyOrderGenerator(seed=seed)
        self._customers: list[ShopifyCustomer] = []
        self._joins_per_month = max(1, num_customers // max(1, months))

    def _generate_month(self, month_start: datetime, index: int) -> None:
        joining = [self._order_gen.generate_customer() for _ in range(self._joins_per_month)]
        self._customers.extend(joining)

        # Every newcomer orders in the month they join
        buyers = joining + [
            random.choice(self._customers)
            for _ in range(random.randint(*self.ORDERS_PER_MONTH) - len(joining))
        ]
        for customer in buyers:
            self.request.shopify_orders.append(
                self._order_gen.generate(self._order_gen.moment_in_month(month_start), customer=customer)
            )

        for category, (description, (low, high)) in self.MONTHLY_EXPENSES.items():
            self.store.add(
                self._tx_gen.generate(
                    tx_type=TransactionType.EXPENSE,
                    date=self._tx_gen.moment_in_month(month_start),
                    category=category,
                    amount=self._tx_gen.money(low, high),
                    description=description,
                )
            )
