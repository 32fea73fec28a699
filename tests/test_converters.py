"""Tests for converting synced records into transactions."""

from decimal import Decimal

import pytest

from cashpilot.models.financial import (
    QuickBooksBill,
    QuickBooksInvoice,
    QuickBooksLine,
    ShopifyFinancialStatus,
    ShopifyLineItem,
    ShopifyOrder,
    TransactionSource,
    TransactionStatus,
    TransactionType,
)
from cashpilot.transactions import (
    convert_external_records,
    quickbooks_bill_to_transaction,
    quickbooks_invoice_to_transaction,
    shopify_order_to_transaction,
)


class TestShopifyOrderToTransaction:
    """Tests for shopify_order_to_transaction."""

    def test_paid_order(self, sample_order: ShopifyOrder) -> None:
        """A paid order becomes completed income."""
        tx = shopify_order_to_transaction(sample_order, user_id="user-1")

        assert tx.id == "shopify_5200001001"
        assert tx.user_id == "user-1"
        assert tx.type == TransactionType.INCOME
        assert tx.amount == Decimal("115.00")
        assert tx.source == TransactionSource.SHOPIFY
        assert tx.source_id == "5200001001"
        assert tx.status == TransactionStatus.COMPLETED
        assert tx.description == "Shopify Order #1001 - Organic Cotton Shirt + 1 more items"
        assert tx.category == "Product Sales"
        assert tx.tags == ["shopify", "ecommerce", "order"]
        assert tx.date == sample_order.created_at

    def test_refunded_order(self, refunded_order: ShopifyOrder) -> None:
        """Refunds become negative expenses."""
        tx = shopify_order_to_transaction(refunded_order)

        assert tx.type == TransactionType.EXPENSE
        assert tx.amount == Decimal("-35.00")
        assert tx.status == TransactionStatus.PENDING
        assert tx.description == "Shopify Order #1002 - Organic Cotton Shirt"

    def test_partially_refunded_is_expense(self, sample_order: ShopifyOrder) -> None:
        sample_order.financial_status = ShopifyFinancialStatus.PARTIALLY_REFUNDED
        assert shopify_order_to_transaction(sample_order).type == TransactionType.EXPENSE

    def test_pending_order(self, sample_order: ShopifyOrder) -> None:
        sample_order.financial_status = ShopifyFinancialStatus.PENDING
        tx = shopify_order_to_transaction(sample_order)

        assert tx.type == TransactionType.INCOME
        assert tx.status == TransactionStatus.PENDING

    def test_order_without_items(self, sample_order: ShopifyOrder) -> None:
        sample_order.line_items = []
        tx = shopify_order_to_transaction(sample_order)

        assert tx.description == "Shopify Order #1001 - Unknown Product"
        assert tx.category == "Product Sales"

    def test_subscription_order_tagged(self, sample_order: ShopifyOrder) -> None:
        """Subscription orders carry the subscription tag."""
        sample_order.line_items = [
            ShopifyLineItem(title="Monthly Subscription Box", quantity=1, price=Decimal("45.00"))
        ]
        tx = shopify_order_to_transaction(sample_order)

        assert tx.category == "Subscription"
        assert "subscription" in tx.tags


class TestQuickBooksInvoiceToTransaction:
    """Tests for quickbooks_invoice_to_transaction."""

    def test_paid_invoice(self, sample_invoice: QuickBooksInvoice) -> None:
        tx = quickbooks_invoice_to_transaction(sample_invoice)

        assert tx.id == "quickbooks_invoice_1001"
        assert tx.type == TransactionType.INCOME
        assert tx.amount == Decimal("450.00")
        assert tx.source == TransactionSource.QUICKBOOKS
        assert tx.status == TransactionStatus.COMPLETED
        assert tx.category == "Client Services"
        assert tx.description == "QuickBooks Invoice #1001 - Acme Corp"

    def test_open_balance_pending(self, sample_invoice: QuickBooksInvoice) -> None:
        sample_invoice.balance = Decimal("450.00")
        assert quickbooks_invoice_to_transaction(sample_invoice).status == TransactionStatus.PENDING

    def test_unknown_customer(self, sample_invoice: QuickBooksInvoice) -> None:
        sample_invoice.customer_name = None
        tx = quickbooks_invoice_to_transaction(sample_invoice)
        assert tx.description.endswith("Unknown Customer")

    def test_item_name_used_for_category(self, sample_invoice: QuickBooksInvoice) -> None:
        """The sales item name is matched along with the description."""
        sample_invoice.lines = [
            QuickBooksLine(description="June", amount=Decimal("99"), item_name="Subscription Plan")
        ]
        tx = quickbooks_invoice_to_transaction(sample_invoice)

        assert tx.category == "Subscription"
        assert "subscription" in tx.tags


class TestQuickBooksBillToTransaction:
    """Tests for quickbooks_bill_to_transaction."""

    def test_bill(self, sample_bill: QuickBooksBill) -> None:
        tx = quickbooks_bill_to_transaction(sample_bill)

        assert tx.id == "quickbooks_bill_2001"
        assert tx.type == TransactionType.EXPENSE
        assert tx.amount == Decimal("-1200.00")
        assert tx.category == "Rent & Utilities"
        assert tx.description == "QuickBooks Bill #B-2001 - Downtown Properties"
        assert tx.tags == ["quickbooks", "bill", "expense"]

    @pytest.mark.parametrize(
        "description,category",
        [
            ("Office supplies", "Office Supplies"),
            ("Payroll processing", "Payroll"),
            ("Advertising placement", "Marketing & Advertising"),
            ("Software subscription", "Software & Subscriptions"),
            ("Business insurance", "Insurance"),
            ("Accounting services", "Professional Services"),
            ("Snow removal", "Other Expenses"),
        ],
    )
    def test_bill_categories(self, sample_bill: QuickBooksBill, description: str, category: str) -> None:
        sample_bill.lines = [QuickBooksLine(description=description, amount=Decimal("10"))]
        assert quickbooks_bill_to_transaction(sample_bill).category == category


class TestConvertExternalRecords:
    """Tests for convert_external_records."""

    def test_order_of_sources(
        self,
        sample_order: ShopifyOrder,
        sample_invoice: QuickBooksInvoice,
        sample_bill: QuickBooksBill,
    ) -> None:
        """Shopify orders first, then invoices, then bills."""
        converted = convert_external_records([sample_order], [sample_invoice], [sample_bill])

        assert [tx.id for tx in converted] == [
            "shopify_5200001001",
            "quickbooks_invoice_1001",
            "quickbooks_bill_2001",
        ]

    def test_nothing_to_convert(self) -> None:
        assert convert_external_records() == []
