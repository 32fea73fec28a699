"""Conversion of synced Shopify and QuickBooks records into transactions."""

from cashpilot.models.financial import (
    QuickBooksBill,
    QuickBooksInvoice,
    QuickBooksLine,
    ShopifyFinancialStatus,
    ShopifyOrder,
    Transaction,
    TransactionSource,
    TransactionStatus,
    TransactionType,
)
from cashpilot.transactions.categorizer import (
    QUICKBOOKS_BILL_RULES,
    QUICKBOOKS_INVOICE_RULES,
    SHOPIFY_LINE_RULES,
    categorize_line_items,
)

REFUND_STATUSES = (ShopifyFinancialStatus.REFUNDED, ShopifyFinancialStatus.PARTIALLY_REFUNDED)


def _line_text(line: QuickBooksLine) -> str:
    return f"{line.description} {line.item_name or ''}"


def shopify_order_to_transaction(order: ShopifyOrder, user_id: str = "") -> Transaction:
    """Convert a Shopify order.

    Refunded and partially refunded orders become expenses with a negative
    amount. Only paid orders are completed.
    """
    is_refund = order.financial_status in REFUND_STATUSES
    tx_type = TransactionType.EXPENSE if is_refund else TransactionType.INCOME
    amount = -abs(order.total_price) if is_refund else abs(order.total_price)

    first_item = order.line_items[0].title if order.line_items else "Unknown Product"
    description = f"Shopify Order #{order.order_number} - {first_item}"
    if len(order.line_items) > 1:
        description += f" + {len(order.line_items) - 1} more items"

    category = categorize_line_items(
        (item.title for item in order.line_items), SHOPIFY_LINE_RULES, "Product Sales"
    )
    tags = ["shopify", "ecommerce", "order"]
    if category == "Subscription":
        tags.append("subscription")

    return Transaction(
        id=f"shopify_{order.order_id}",
        user_id=user_id,
        date=order.created_at,
        amount=amount,
        currency=order.currency,
        description=description,
        category=category,
        type=tx_type,
        source=TransactionSource.SHOPIFY,
        source_id=order.order_id,
        status=(
            TransactionStatus.COMPLETED
            if order.financial_status == ShopifyFinancialStatus.PAID
            else TransactionStatus.PENDING
        ),
        tags=tags,
        created_at=order.created_at,
        updated_at=order.updated_at or order.created_at,
    )


def quickbooks_invoice_to_transaction(invoice: QuickBooksInvoice, user_id: str = "") -> Transaction:
    """Convert a QuickBooks invoice. An open balance leaves it pending."""
    category = categorize_line_items(
        (_line_text(line) for line in invoice.lines), QUICKBOOKS_INVOICE_RULES, "Client Services"
    )
    tags = ["quickbooks", "invoice", "income"]
    if category == "Subscription":
        tags.append("subscription")

    return Transaction(
        id=f"quickbooks_invoice_{invoice.invoice_id}",
        user_id=user_id,
        date=invoice.txn_date,
        amount=abs(invoice.total_amount),
        description=f"QuickBooks Invoice #{invoice.doc_number} - {invoice.customer_name or 'Unknown Customer'}",
        category=category,
        type=TransactionType.INCOME,
        source=TransactionSource.QUICKBOOKS,
        source_id=invoice.invoice_id,
        status=TransactionStatus.PENDING if invoice.balance > 0 else TransactionStatus.COMPLETED,
        tags=tags,
        created_at=invoice.created_at or invoice.txn_date,
        updated_at=invoice.updated_at or invoice.txn_date,
    )


def quickbooks_bill_to_transaction(bill: QuickBooksBill, user_id: str = "") -> Transaction:
    """Convert a QuickBooks bill into a negative-amount expense."""
    category = categorize_line_items(
        (_line_text(line) for line in bill.lines), QUICKBOOKS_BILL_RULES, "Other Expenses"
    )

    return Transaction(
        id=f"quickbooks_bill_{bill.bill_id}",
        user_id=user_id,
        date=bill.txn_date,
        amount=-abs(bill.total_amount),
        description=f"QuickBooks Bill #{bill.doc_number} - {bill.vendor_name or 'Unknown Vendor'}",
        category=category,
        type=TransactionType.EXPENSE,
        source=TransactionSource.QUICKBOOKS,
        source_id=bill.bill_id,
        status=TransactionStatus.PENDING if bill.balance > 0 else TransactionStatus.COMPLETED,
        tags=["quickbooks", "bill", "expense"],
        created_at=bill.created_at or bill.txn_date,
        updated_at=bill.updated_at or bill.txn_date,
    )


def convert_external_records(
    shopify_orders: list[ShopifyOrder] | None = None,
    quickbooks_invoices: list[QuickBooksInvoice] | None = None,
    quickbooks_bills: list[QuickBooksBill] | None = None,
    user_id: str = "",
) -> list[Transaction]:
    """Convert every raw record, Shopify first, then invoices, then bills."""
    converted = [shopify_order_to_transaction(o, user_id) for o in shopify_orders or []]
    converted.extend(quickbooks_invoice_to_transaction(i, user_id) for i in quickbooks_invoices or [])
    converted.extend(quickbooks_bill_to_transaction(b, user_id) for b in quickbooks_bills or [])
    return converted
