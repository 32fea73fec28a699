"""Base data adapter and the aggregation helpers shared by every source."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from cashpilot.config import AnalysisConfig
from cashpilot.models.financial import (
    CustomerData,
    DataSource,
    ExpenseData,
    ProductData,
    ProductSales,
    RevenueData,
    Transaction,
    TransactionType,
)

CENT = Decimal("0.01")
ZERO = Decimal("0")
TOP_PRODUCTS_LIMIT = 10

RECURRING_TAG = "subscription"
RECURRING_CATEGORIES = frozenset({"subscription", "subscriptions", "retainer", "recurring"})
RECURRING_DESCRIPTION_MARKERS = ("subscription", "retainer")
COST_OF_GOODS_CATEGORIES = frozenset({"product sales", "inventory", "materials", "cost of goods"})


@dataclass
class CustomerActivity:
    """One dated purchase by an identified customer."""

    customer_id: str
    occurred_at: datetime
    amount: Decimal


def to_cents(value: Decimal) -> Decimal:
    """Round a money value to cents."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def is_recurring(tx: Transaction) -> bool:
    """Tagged ``subscription``, or a recurring category or description."""
    if RECURRING_TAG in {tag.lower() for tag in tx.tags}:
        return True
    if tx.category.strip().lower() in RECURRING_CATEGORIES:
        return True
    description = tx.description.lower()
    return any(marker in description for marker in RECURRING_DESCRIPTION_MARKERS)


def _add_to(bucket: dict[str, Decimal], key: str, amount: Decimal) -> None:
    bucket[key] = bucket.get(key, ZERO) + amount


def _chronological(bucket: dict[str, Decimal]) -> dict[str, Decimal]:
    return dict(sorted(bucket.items()))


def summarize_revenue(transactions: Iterable[Transaction]) -> RevenueData:
    """Aggregate the income transactions of a set."""
    income = [tx for tx in transactions if tx.type == TransactionType.INCOME]
    total = ZERO
    recurring = ZERO
    by_period: dict[str, Decimal] = {}
    by_category: dict[str, Decimal] = {}

    for tx in income:
        total += tx.magnitude
        if is_recurring(tx):
            recurring += tx.magnitude
        _add_to(by_period, tx.period, tx.magnitude)
        _add_to(by_category, tx.category or "Uncategorized", tx.magnitude)

    return RevenueData(
        total_revenue=total,
        recurring_revenue=recurring,
        one_time_revenue=total - recurring,
        average_order_value=to_cents(total / len(income)) if income else ZERO,
        revenue_by_period=_chronological(by_period),
        revenue_by_category=by_category,
        transaction_count=len(income),
    )


def summarize_expenses(transactions: Iterable[Transaction]) -> ExpenseData:
    """Aggregate the expense transactions of a set."""
    expenses = [tx for tx in transactions if tx.type == TransactionType.EXPENSE]
    total = ZERO
    cost_of_goods = ZERO
    by_period: dict[str, Decimal] = {}
    by_category: dict[str, Decimal] = {}

    for tx in expenses:
        total += tx.magnitude
        if tx.category.strip().lower() in COST_OF_GOODS_CATEGORIES:
            cost_of_goods += tx.magnitude
        _add_to(by_period, tx.period, tx.magnitude)
        _add_to(by_category, tx.category or "Uncategorized", tx.magnitude)

    return ExpenseData(
        total_expenses=total,
        operating_expenses=total - cost_of_goods,
        cost_of_goods=cost_of_goods,
        expenses_by_category=by_category,
        expenses_by_period=_chronological(by_period),
        transaction_count=len(expenses),
    )


def _month_index(value: date) -> int:
    return value.year * 12 + value.month


def summarize_customers(
    activity: Iterable[CustomerActivity],
    config: AnalysisConfig,
) -> CustomerData:
    """Derive customer metrics from identified purchases.

    Parameters
    ----------
    activity : Iterable[CustomerActivity]
        Purchases carrying a customer identifier.
    config : AnalysisConfig
        Supplies the reference date, the active window in days and the
        number of inactive months after which a customer counts as churned.

    Returns
    -------
    CustomerData
        ``new_customers`` counts first purchases in the reference month,
        ``churn_rate`` is a percentage.
    """
    reference = config.reference_date()
    first_seen: dict[str, date] = {}
    last_seen: dict[str, date] = {}
    spend: dict[str, Decimal] = defaultdict(lambda: ZERO)
    by_period: dict[str, set[str]] = defaultdict(set)

    for item in activity:
        day = item.occurred_at.date()
        cid = item.customer_id
        if cid not in first_seen or day < first_seen[cid]:
            first_seen[cid] = day
        if cid not in last_seen or day > last_seen[cid]:
            last_seen[cid] = day
        spend[cid] += abs(item.amount)
        by_period[day.strftime("%Y-%m")].add(cid)

    total = len(first_seen)
    if total == 0:
        return CustomerData()

    reference_month = _month_index(reference)
    new = sum(1 for day in first_seen.values() if _month_index(day) == reference_month)
    active = sum(
        1 for day in last_seen.values() if 0 <= (reference - day).days <= config.active_customer_days
    )
    churned = sum(
        1
        for day in last_seen.values()
        if reference_month - _month_index(day) > config.churn_inactive_months
    )

    return CustomerData(
        total_customers=total,
        active_customers=active,
        new_customers=new,
        customer_lifetime_value=to_cents(sum(spend.values(), ZERO) / total),
        churn_rate=churned / total * 100,
        customers_by_period={period: len(ids) for period, ids in sorted(by_period.items())},
    )


def summarize_products(sales: Iterable[ProductSales]) -> ProductData:
    """Merge product lines by name and rank them by revenue."""
    performance: dict[str, ProductSales] = {}
    for line in sales:
        current = performance.get(line.name)
        if current is None:
            performance[line.name] = ProductSales(line.name, line.revenue, line.quantity)
        else:
            current.revenue += line.revenue
            current.quantity += line.quantity

    # sorted() is stable, equal revenues keep first-seen order
    ranked = sorted(performance.values(), key=lambda p: p.revenue, reverse=True)
    return ProductData(
        total_products=len(performance),
        top_selling_products=ranked[:TOP_PRODUCTS_LIMIT],
        product_performance=performance,
    )


class BaseDataAdapter(ABC):
    """Normalizes one source's records into the four summary views.

    Adapters are pure: every getter recomputes from the records given at
    construction and never raises on missing optional fields.
    """

    source: DataSource

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self.config = config or AnalysisConfig()

    @abstractmethod
    def get_transactions(self) -> list[Transaction]:
        """Transactions this adapter aggregates."""

    def get_revenue_data(self) -> RevenueData:
        return summarize_revenue(self.get_transactions())

    def get_expense_data(self) -> ExpenseData:
        return summarize_expenses(self.get_transactions())

    def get_customer_data(self) -> CustomerData:
        return CustomerData()

    def get_product_data(self) -> ProductData:
        return ProductData()

    def is_data_available(self) -> bool:
        return bool(self.get_transactions())
