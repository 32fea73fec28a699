"""Typed analysis request."""

from dataclasses import dataclass, field

from cashpilot.models.financial.external import QuickBooksBill, QuickBooksInvoice, ShopifyOrder
from cashpilot.models.financial.transaction import Transaction


@dataclass
class AnalysisRequest:
    """Transactions plus the raw synced records they may be missing."""

    transactions: list[Transaction] = field(default_factory=list)
    shopify_orders: list[ShopifyOrder] = field(default_factory=list)
    quickbooks_invoices: list[QuickBooksInvoice] = field(default_factory=list)
    quickbooks_bills: list[QuickBooksBill] = field(default_factory=list)
