"""Generator for Shopify orders."""

import random
from datetime import datetime
from decimal import Decimal

from cashpilot.generators.base import BaseGenerator
from cashpilot.models.financial import (
    ShopifyCustomer,
    ShopifyFinancialStatus,
    ShopifyLineItem,
    ShopifyOrder,
)

ORDER_ID_BASE = 5_200_000_000


class ShopifyOrderGenerator(BaseGenerator):
    """Generate Shopify orders for a small online shop."""

    # title -> price range
    PRODUCT_CATALOG = {
        "Organic Cotton Shirt": (25, 45),
        "Linen Summer Dress": (60, 120),
        "Canvas Tote Bag": (15, 30),
        "Digital Pattern Download": (8, 15),
        "Styling Consulting Session": (80, 150),
        "Monthly Subscription Box": (35, 55),
    }

    FINANCIAL_STATUSES = [
        ShopifyFinancialStatus.PAID,
        ShopifyFinancialStatus.PENDING,
        ShopifyFinancialStatus.REFUNDED,
        ShopifyFinancialStatus.PARTIALLY_REFUNDED,
    ]
    FINANCIAL_STATUS_WEIGHTS = [0.90, 0.04, 0.04, 0.02]

    def __init__(self, seed: int | None = None, first_order_number: int = 1001) -> None:
        super().__init__(seed)
        self._next_number = first_order_number

    def generate_customer(self) -> ShopifyCustomer:
        """Generate a shop customer."""
        return ShopifyCustomer(
            customer_id=str(self.fake.random_number(digits=10, fix_len=True)),
            email=self.fake.email(),
            first_name=self.fake.first_name(),
            last_name=self.fake.last_name(),
        )

    def generate(
        self,
        created_at: datetime,
        customer: ShopifyCustomer | None = None,
        financial_status: ShopifyFinancialStatus | None = None,
    ) -> ShopifyOrder:
        """Generate one order with one to three line items.

        Parameters
        ----------
        created_at : datetime
            Order timestamp.
        customer : ShopifyCustomer | None
            Buyer. A new customer is generated when omitted.
        financial_status : ShopifyFinancialStatus | None
            Payment state. Mostly paid when omitted.

        Returns
        -------
        ShopifyOrder
            Order whose total is the sum of its lines.
        """
        titles = random.sample(list(self.PRODUCT_CATALOG), k=random.randint(1, 3))
        line_items = []
        for title in titles:
            low, high = self.PRODUCT_CATALOG[title]
            line_items.append(
                ShopifyLineItem(
                    title=title,
                    quantity=random.randint(1, 3),
                    price=self.money(low, high),
                    product_id=str(list(self.PRODUCT_CATALOG).index(title) + 1),
                )
            )

        order_number = self._next_number
        self._next_number += 1
        return ShopifyOrder(
            order_id=str(ORDER_ID_BASE + order_number),
            order_number=order_number,
            created_at=created_at,
            total_price=sum((item.price * item.quantity for item in line_items), Decimal("0")),
            financial_status=financial_status
            or random.choices(self.FINANCIAL_STATUSES, weights=self.FINANCIAL_STATUS_WEIGHTS, k=1)[0],
            customer=customer or self.generate_customer(),
            line_items=line_items,
            updated_at=created_at,
        )
