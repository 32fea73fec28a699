"""Aggregate views derived from a transaction set."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class RevenueData:
    """Income summary."""

    total_revenue: Decimal = Decimal("0")
    recurring_revenue: Decimal = Decimal("0")
    one_time_revenue: Decimal = Decimal("0")
    average_order_value: Decimal = Decimal("0")
    revenue_by_period: dict[str, Decimal] = field(default_factory=dict)
    revenue_by_category: dict[str, Decimal] = field(default_factory=dict)
    transaction_count: int = 0


@dataclass
class ExpenseData:
    """Expense summary."""

    total_expenses: Decimal = Decimal("0")
    operating_expenses: Decimal = Decimal("0")
    cost_of_goods: Decimal = Decimal("0")
    expenses_by_category: dict[str, Decimal] = field(default_factory=dict)
    expenses_by_period: dict[str, Decimal] = field(default_factory=dict)
    transaction_count: int = 0


@dataclass
class CustomerData:
    """Customer summary. ``churn_rate`` is a percentage (0-100)."""

    total_customers: int = 0
    active_customers: int = 0
    new_customers: int = 0
    customer_lifetime_value: Decimal = Decimal("0")
    churn_rate: float = 0.0
    customers_by_period: dict[str, int] = field(default_factory=dict)


@dataclass
class ProductSales:
    """Revenue and units sold for one product."""

    name: str
    revenue: Decimal
    quantity: int


@dataclass
class ProductData:
    """Product summary, ``top_selling_products`` ordered by revenue."""

    total_products: int = 0
    top_selling_products: list[ProductSales] = field(default_factory=list)
    product_performance: dict[str, ProductSales] = field(default_factory=dict)
