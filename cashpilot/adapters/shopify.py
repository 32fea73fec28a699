"""Adapter for Shopify orders and the transactions synced from them."""

from cashpilot.adapters.base import (
    BaseDataAdapter,
    CustomerActivity,
    summarize_customers,
    summarize_products,
)
from cashpilot.config import AnalysisConfig
from cashpilot.models.financial import (
    CustomerData,
    DataSource,
    ProductData,
    ProductSales,
    ShopifyOrder,
    Transaction,
    TransactionSource,
)


class ShopifyDataAdapter(BaseDataAdapter):
    """Revenue from Shopify transactions, customers and products from orders."""

    source = DataSource.SHOPIFY

    def __init__(
        self,
        transactions: list[Transaction],
        orders: list[ShopifyOrder] | None = None,
        config: AnalysisConfig | None = None,
    ) -> None:
        super().__init__(config)
        self.transactions = [tx for tx in transactions if tx.source == TransactionSource.SHOPIFY]
        self.orders = list(orders or [])

    def get_transactions(self) -> list[Transaction]:
        return list(self.transactions)

    def get_customer_data(self) -> CustomerData:
        activity = [
            CustomerActivity(order.customer.customer_id, order.created_at, order.total_price)
            for order in self.orders
            if order.customer is not None and order.customer.customer_id
        ]
        return summarize_customers(activity, self.config)

    def get_product_data(self) -> ProductData:
        return summarize_products(
            ProductSales(item.title, item.price * item.quantity, item.quantity)
            for order in self.orders
            for item in order.line_items
        )

    def is_data_available(self) -> bool:
        return bool(self.transactions or self.orders)
