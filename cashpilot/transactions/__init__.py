"""Transaction categorization and conversion of synced records."""

from cashpilot.transactions.categorizer import (
    Categorizer,
    categorize_transaction,
    get_available_categories,
    get_categories_by_type,
    suggest_categories,
)
from cashpilot.transactions.converters import (
    convert_external_records,
    quickbooks_bill_to_transaction,
    quickbooks_invoice_to_transaction,
    shopify_order_to_transaction,
)

__all__ = [
    "Categorizer",
    "categorize_transaction",
    "convert_external_records",
    "get_available_categories",
    "get_categories_by_type",
    "quickbooks_bill_to_transaction",
    "quickbooks_invoice_to_transaction",
    "shopify_order_to_transaction",
    "suggest_categories",
]
