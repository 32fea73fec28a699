"""Adapter for manually entered transactions."""

from cashpilot.adapters.base import BaseDataAdapter
from cashpilot.config import AnalysisConfig
from cashpilot.models.financial import DataSource, Transaction, TransactionSource


class ManualDataAdapter(BaseDataAdapter):
    """Manual entries carry no customer or line-item data.

    Customer and product views are therefore always empty.
    """

    source = DataSource.MANUAL

    def __init__(self, transactions: list[Transaction], config: AnalysisConfig | None = None) -> None:
        super().__init__(config)
        self.transactions = [tx for tx in transactions if tx.source == TransactionSource.MANUAL]

    def get_transactions(self) -> list[Transaction]:
        return list(self.transactions)
