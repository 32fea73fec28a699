"""Data adapters turning transactions and synced records into summary views."""

from cashpilot.adapters.base import BaseDataAdapter
from cashpilot.adapters.combined import CombinedDataAdapter
from cashpilot.adapters.manual import ManualDataAdapter
from cashpilot.adapters.quickbooks import QuickBooksDataAdapter
from cashpilot.adapters.shopify import ShopifyDataAdapter
from cashpilot.config import AnalysisConfig
from cashpilot.logging import get_logger
from cashpilot.models.financial import (
    QuickBooksBill,
    QuickBooksInvoice,
    ShopifyOrder,
    Transaction,
    TransactionSource,
)
from cashpilot.transactions.converters import convert_external_records

logger = get_logger(__name__)


def merge_transactions(transactions: list[Transaction], extra: list[Transaction]) -> list[Transaction]:
    """Append ``extra`` transactions whose id is not already present."""
    seen = {tx.id for tx in transactions}
    merged = list(transactions)
    for tx in extra:
        if tx.id not in seen:
            seen.add(tx.id)
            merged.append(tx)
    return merged


def create_data_adapter(
    transactions: list[Transaction],
    shopify_orders: list[ShopifyOrder] | None = None,
    quickbooks_invoices: list[QuickBooksInvoice] | None = None,
    quickbooks_bills: list[QuickBooksBill] | None = None,
    config: AnalysisConfig | None = None,
) -> BaseDataAdapter:
    """Build the adapter matching the sources present.

    Raw external records are converted and merged into the transaction list
    first. One source yields its own adapter, several yield a
    :class:`CombinedDataAdapter`, none yields an empty manual adapter.
    """
    shopify_orders = shopify_orders or []
    quickbooks_invoices = quickbooks_invoices or []
    quickbooks_bills = quickbooks_bills or []

    merged = merge_transactions(
        transactions,
        convert_external_records(shopify_orders, quickbooks_invoices, quickbooks_bills),
    )
    sources = {tx.source for tx in merged}

    adapters: list[BaseDataAdapter] = []
    if TransactionSource.MANUAL in sources:
        adapters.append(ManualDataAdapter(merged, config))
    if TransactionSource.SHOPIFY in sources or shopify_orders:
        adapters.append(ShopifyDataAdapter(merged, shopify_orders, config))
    if TransactionSource.QUICKBOOKS in sources or quickbooks_invoices or quickbooks_bills:
        adapters.append(QuickBooksDataAdapter(merged, quickbooks_invoices, quickbooks_bills, config))

    logger.debug(
        "Building adapter for %d transactions from %s",
        len(merged),
        [adapter.source.value for adapter in adapters],
    )

    if not adapters:
        return ManualDataAdapter([], config)
    if len(adapters) == 1:
        return adapters[0]
    return CombinedDataAdapter(adapters)


__all__ = [
    "BaseDataAdapter",
    "CombinedDataAdapter",
    "ManualDataAdapter",
    "QuickBooksDataAdapter",
    "ShopifyDataAdapter",
    "create_data_adapter",
    "merge_transactions",
]
