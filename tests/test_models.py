"""Tests for domain models."""

from datetime import datetime
from decimal import Decimal

import pytest

from cashpilot.models import ChangeEvent
from cashpilot.models.financial import (
    CustomerData,
    EditOperation,
    ExpenseData,
    HealthScore,
    InsightCategory,
    ProductData,
    RevenueData,
    ShopifyFinancialStatus,
    ShopifyOrder,
    Transaction,
    TransactionSource,
    TransactionStatus,
    TransactionType,
)


class TestTransaction:
    """Tests for Transaction."""

    def test_defaults(self) -> None:
        """Optional fields take manual-entry defaults."""
        tx = Transaction(
            id="tx-1",
            date=datetime(2024, 1, 10),
            amount=Decimal("100.00"),
            type=TransactionType.INCOME,
        )

        assert tx.currency == "USD"
        assert tx.source == TransactionSource.MANUAL
        assert tx.status == TransactionStatus.COMPLETED
        assert tx.tags == []
        assert tx.source_id is None

    def test_magnitude_ignores_sign(self) -> None:
        """Magnitude is the absolute amount."""
        tx = Transaction(
            id="tx-1",
            date=datetime(2024, 1, 10),
            amount=Decimal("-1300.00"),
            type=TransactionType.EXPENSE,
        )
        assert tx.magnitude == Decimal("1300.00")

    def test_period(self) -> None:
        """Period is the calendar month."""
        tx = Transaction(
            id="tx-1",
            date=datetime(2024, 3, 31, 23, 59),
            amount=Decimal("1"),
            type=TransactionType.INCOME,
        )
        assert tx.period == "2024-03"

    def test_tags_not_shared(self) -> None:
        """Each transaction gets its own tag list."""
        a = Transaction(id="a", date=datetime(2024, 1, 1), amount=Decimal("1"), type=TransactionType.INCOME)
        b = Transaction(id="b", date=datetime(2024, 1, 1), amount=Decimal("1"), type=TransactionType.INCOME)
        a.tags.append("subscription")
        assert b.tags == []


class TestEnums:
    """Tests for string enums."""

    def test_values_are_strings(self) -> None:
        assert TransactionType.INCOME == "income"
        assert InsightCategory.CASH_FLOW.value == "cash-flow"
        assert ShopifyFinancialStatus("partially_refunded") == ShopifyFinancialStatus.PARTIALLY_REFUNDED


class TestSummaries:
    """Tests for the empty summary views."""

    def test_empty_views(self) -> None:
        """Every summary view defaults to zero."""
        assert RevenueData().total_revenue == Decimal("0")
        assert ExpenseData().expenses_by_category == {}
        assert CustomerData().churn_rate == 0.0
        assert ProductData().top_selling_products == []


class TestExternalRecords:
    """Tests for raw synced records."""

    def test_order_defaults(self) -> None:
        """Orders default to paid USD with no customer."""
        order = ShopifyOrder(
            order_id="1",
            order_number=1001,
            created_at=datetime(2024, 1, 1),
            total_price=Decimal("10"),
        )
        assert order.financial_status == ShopifyFinancialStatus.PAID
        assert order.currency == "USD"
        assert order.customer is None
        assert order.line_items == []


class TestHealthScore:
    """Tests for HealthScore."""

    def test_optional_sections(self) -> None:
        score = HealthScore(score=85, grade="B")
        assert score.issues == []
        assert score.breakdown is None
        assert score.factors is None


class TestChangeEvent:
    """Tests for ChangeEvent."""

    @pytest.mark.parametrize(
        "operation,event_type",
        [
            (EditOperation.CREATE, "transaction.created"),
            (EditOperation.UPDATE, "transaction.updated"),
            (EditOperation.DELETE, "transaction.deleted"),
        ],
    )
    def test_event_type(self, operation: EditOperation, event_type: str) -> None:
        event = ChangeEvent(operation, "tx-1", {"id": "tx-1"})

        assert event.event_type == event_type
        assert event.source == "transaction_store"

    def test_defaults(self) -> None:
        first = ChangeEvent(EditOperation.CREATE, "tx-1", {})
        second = ChangeEvent(EditOperation.CREATE, "tx-1", {})

        assert first.event_id != second.event_id
        assert first.event_time <= datetime.now()
