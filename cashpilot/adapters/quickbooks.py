"""Adapter for QuickBooks invoices and bills."""

from cashpilot.adapters.base import (
    BaseDataAdapter,
    CustomerActivity,
    summarize_customers,
    summarize_products,
)
from cashpilot.config import AnalysisConfig
from cashpilot.models.financial import (
    CustomerData,
    DataSource,
    ProductData,
    ProductSales,
    QuickBooksBill,
    QuickBooksInvoice,
    Transaction,
    TransactionSource,
)


class QuickBooksDataAdapter(BaseDataAdapter):
    """Customers come from invoice CustomerRefs, products from sales-item lines."""

    source = DataSource.QUICKBOOKS

    def __init__(
        self,
        transactions: list[Transaction],
        invoices: list[QuickBooksInvoice] | None = None,
        bills: list[QuickBooksBill] | None = None,
        config: AnalysisConfig | None = None,
    ) -> None:
        super().__init__(config)
        self.transactions = [tx for tx in transactions if tx.source == TransactionSource.QUICKBOOKS]
        self.invoices = list(invoices or [])
        self.bills = list(bills or [])

    def get_transactions(self) -> list[Transaction]:
        return list(self.transactions)

    def get_customer_data(self) -> CustomerData:
        activity = [
            CustomerActivity(invoice.customer_id, invoice.txn_date, invoice.total_amount)
            for invoice in self.invoices
            if invoice.customer_id
        ]
        return summarize_customers(activity, self.config)

    def get_product_data(self) -> ProductData:
        return summarize_products(
            ProductSales(line.item_name, abs(line.amount), line.quantity or 1)
            for invoice in self.invoices
            for line in invoice.lines
            if line.item_name
        )

    def is_data_available(self) -> bool:
        return bool(self.transactions or self.invoices or self.bills)
