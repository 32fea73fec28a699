"""Pytest configuration and fixtures."""

from datetime import date, datetime
from decimal import Decimal
from itertools import count
from typing import Callable

import pytest

from cashpilot.config import AnalysisConfig
from cashpilot.models.financial import (
    QuickBooksBill,
    QuickBooksInvoice,
    QuickBooksLine,
    ShopifyCustomer,
    ShopifyFinancialStatus,
    ShopifyLineItem,
    ShopifyOrder,
    Transaction,
    TransactionSource,
    TransactionType,
)

_ids = count(1)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def as_of() -> date:
    """Reference date used for customer and recency metrics."""
    return date(2024, 6, 15)


@pytest.fixture
def analysis_config(as_of: date) -> AnalysisConfig:
    """Analysis config pinned to the reference date."""
    return AnalysisConfig(as_of=as_of)


@pytest.fixture
def make_tx() -> Callable[..., Transaction]:
    """Factory for transactions with a description and category filled in."""

    def _make(
        amount: str | int,
        tx_type: TransactionType = TransactionType.INCOME,
        when: datetime = datetime(2024, 1, 10),
        description: str | None = None,
        category: str = "Client Services",
        source: TransactionSource = TransactionSource.MANUAL,
        tags: list[str] | None = None,
        tx_id: str | None = None,
    ) -> Transaction:
        number = next(_ids)
        return Transaction(
            id=tx_id or f"tx-{number}",
            date=when,
            amount=Decimal(str(amount)),
            type=tx_type,
            description=description if description is not None else f"Test transaction {number}",
            category=category,
            source=source,
            tags=list(tags or []),
        )

    return _make


@pytest.fixture
def sample_order() -> ShopifyOrder:
    """Paid Shopify order with two line items."""
    return ShopifyOrder(
        order_id="5200001001",
        order_number=1001,
        created_at=datetime(2024, 6, 3, 10, 30),
        total_price=Decimal("115.00"),
        customer=ShopifyCustomer(customer_id="cust-001", email="ana@example.com"),
        line_items=[
            ShopifyLineItem(title="Organic Cotton Shirt", quantity=2, price=Decimal("35.00")),
            ShopifyLineItem(title="Canvas Tote Bag", quantity=1, price=Decimal("45.00")),
        ],
    )


@pytest.fixture
def sample_invoice() -> QuickBooksInvoice:
    """Paid QuickBooks invoice with one consulting line."""
    return QuickBooksInvoice(
        invoice_id="1001",
        doc_number="1001",
        txn_date=datetime(2024, 6, 5),
        total_amount=Decimal("450.00"),
        customer_id="58",
        customer_name="Acme Corp",
        lines=[
            QuickBooksLine(
                description="Consulting hours",
                amount=Decimal("450.00"),
                item_name="Consulting Services",
                quantity=3,
                unit_price=Decimal("150.00"),
            )
        ],
    )


@pytest.fixture
def sample_bill() -> QuickBooksBill:
    """Paid QuickBooks bill for office rent."""
    return QuickBooksBill(
        bill_id="2001",
        doc_number="B-2001",
        txn_date=datetime(2024, 6, 1),
        total_amount=Decimal("1200.00"),
        vendor_id="77",
        vendor_name="Downtown Properties",
        lines=[QuickBooksLine(description="Monthly rent", amount=Decimal("1200.00"))],
    )


@pytest.fixture
def refunded_order(sample_order: ShopifyOrder) -> ShopifyOrder:
    """The sample order after a full refund."""
    return ShopifyOrder(
        order_id="5200001002",
        order_number=1002,
        created_at=datetime(2024, 6, 4),
        total_price=Decimal("35.00"),
        financial_status=ShopifyFinancialStatus.REFUNDED,
        customer=sample_order.customer,
        line_items=[ShopifyLineItem(title="Organic Cotton Shirt", quantity=1, price=Decimal("35.00"))],
    )
