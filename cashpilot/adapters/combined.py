"""Adapter merging the views of several per-source adapters."""

from decimal import Decimal

from cashpilot.adapters.base import (
    ZERO,
    BaseDataAdapter,
    summarize_products,
    to_cents,
)
from cashpilot.models.financial import (
    CustomerData,
    DataSource,
    ExpenseData,
    ProductData,
    RevenueData,
    Transaction,
)


def _merge_buckets(buckets: list[dict], chronological: bool = False) -> dict:
    merged: dict = {}
    for bucket in buckets:
        for key, value in bucket.items():
            merged[key] = merged.get(key, 0) + value
    return dict(sorted(merged.items())) if chronological else merged


class CombinedDataAdapter(BaseDataAdapter):
    """Sums per-source views.

    Each child only sees its own source, so totals add without double
    counting. Customer ids live in separate namespaces per source and are
    not deduplicated across sources.
    """

    source = DataSource.COMBINED

    def __init__(self, adapters: list[BaseDataAdapter]) -> None:
        super().__init__(adapters[0].config if adapters else None)
        self.adapters = list(adapters)

    def get_transactions(self) -> list[Transaction]:
        return [tx for adapter in self.adapters for tx in adapter.get_transactions()]

    def get_revenue_data(self) -> RevenueData:
        parts = [adapter.get_revenue_data() for adapter in self.adapters]
        total = sum((p.total_revenue for p in parts), ZERO)
        recurring = sum((p.recurring_revenue for p in parts), ZERO)
        count = sum(p.transaction_count for p in parts)
        return RevenueData(
            total_revenue=total,
            recurring_revenue=recurring,
            one_time_revenue=total - recurring,
            average_order_value=to_cents(total / count) if count else ZERO,
            revenue_by_period=_merge_buckets([p.revenue_by_period for p in parts], chronological=True),
            revenue_by_category=_merge_buckets([p.revenue_by_category for p in parts]),
            transaction_count=count,
        )

    def get_expense_data(self) -> ExpenseData:
        parts = [adapter.get_expense_data() for adapter in self.adapters]
        return ExpenseData(
            total_expenses=sum((p.total_expenses for p in parts), ZERO),
            operating_expenses=sum((p.operating_expenses for p in parts), ZERO),
            cost_of_goods=sum((p.cost_of_goods for p in parts), ZERO),
            expenses_by_category=_merge_buckets([p.expenses_by_category for p in parts]),
            expenses_by_period=_merge_buckets([p.expenses_by_period for p in parts], chronological=True),
            transaction_count=sum(p.transaction_count for p in parts),
        )

    def get_customer_data(self) -> CustomerData:
        parts = [adapter.get_customer_data() for adapter in self.adapters]
        total = sum(p.total_customers for p in parts)
        if total == 0:
            return CustomerData()

        # CLV and churn are per-customer means, weight them by customer count
        clv = sum((p.customer_lifetime_value * p.total_customers for p in parts), ZERO) / Decimal(total)
        churn = sum(p.churn_rate * p.total_customers for p in parts) / total
        return CustomerData(
            total_customers=total,
            active_customers=sum(p.active_customers for p in parts),
            new_customers=sum(p.new_customers for p in parts),
            customer_lifetime_value=to_cents(clv),
            churn_rate=churn,
            customers_by_period=_merge_buckets([p.customers_by_period for p in parts], chronological=True),
        )

    def get_product_data(self) -> ProductData:
        return summarize_products(
            product
            for adapter in self.adapters
            for product in adapter.get_product_data().product_performance.values()
        )

    def is_data_available(self) -> bool:
        return any(adapter.is_data_available() for adapter in self.adapters)
