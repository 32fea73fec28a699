"""Raw records from external commerce and accounting systems."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from cashpilot.models.financial.enums import ShopifyFinancialStatus


@dataclass
class ShopifyCustomer:
    """Customer attached to a Shopify order."""

    customer_id: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""


@dataclass
class ShopifyLineItem:
    """Single product line of a Shopify order."""

    title: str
    quantity: int
    price: Decimal
    product_id: str | None = None
    total_discount: Decimal = Decimal("0")


@dataclass
class ShopifyOrder:
    """Shopify order as returned by the Admin API."""

    order_id: str
    order_number: int
    created_at: datetime
    total_price: Decimal
    currency: str = "USD"
    financial_status: ShopifyFinancialStatus = ShopifyFinancialStatus.PAID
    customer: ShopifyCustomer | None = None
    line_items: list[ShopifyLineItem] = field(default_factory=list)
    updated_at: datetime | None = None


@dataclass
class QuickBooksLine:
    """Invoice or bill line.

    ``item_name``, ``quantity`` and ``unit_price`` are only present on
    item-based lines (sales items on invoices, expense items on bills).
    """

    description: str
    amount: Decimal
    item_name: str | None = None
    quantity: int | None = None
    unit_price: Decimal | None = None


@dataclass
class QuickBooksInvoice:
    """Customer invoice (income)."""

    invoice_id: str
    doc_number: str
    txn_date: datetime
    total_amount: Decimal
    balance: Decimal = Decimal("0")
    customer_id: str | None = None
    customer_name: str | None = None
    lines: list[QuickBooksLine] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class QuickBooksBill:
    """Vendor bill (expense)."""

    bill_id: str
    doc_number: str
    txn_date: datetime
    total_amount: Decimal
    balance: Decimal = Decimal("0")
    vendor_id: str | None = None
    vendor_name: str | None = None
    lines: list[QuickBooksLine] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
