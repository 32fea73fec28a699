"""Shared plumbing for synthetic business scenarios."""

import random
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from cashpilot.logging import get_logger
from cashpilot.models.financial import AnalysisRequest
from cashpilot.store import TransactionStore

logger = get_logger(__name__)


def month_starts(first: datetime, months: int) -> list[datetime]:
    """First day of ``months`` consecutive months starting at ``first``."""
    starts = []
    year, month = first.year, first.month
    for _ in range(months):
        starts.append(datetime(year, month, 1))
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return starts


def default_start(months: int) -> datetime:
    """Start date that makes the last generated month the current one."""
    today = datetime.now()
    index = today.year * 12 + (today.month - 1) - (months - 1)
    return datetime(index // 12, index % 12 + 1, 1)


class BaseScenario(ABC):
    """Generates a business's records month by month.

    Manual transactions go through a :class:`TransactionStore`; raw synced
    records are kept as lists, the way they arrive from their APIs.
    """

    name: str

    def __init__(
        self,
        months: int = 6,
        num_customers: int = 25,
        start_date: datetime | None = None,
        seed: int | None = None,
    ) -> None:
        self.months = months
        self.num_customers = num_customers
        self.start_date = start_date or default_start(months)
        self.seed = seed

        if seed is not None:
            random.seed(seed)

        self.store = TransactionStore()
        self.request = AnalysisRequest()

    @abstractmethod
    def _generate_month(self, month_start: datetime, index: int) -> None:
        """Generate one month of activity."""

    def generate(self) -> AnalysisRequest:
        """Generate all months and return the analysis request.

        Returns
        -------
        AnalysisRequest
            Store snapshot plus any raw Shopify or QuickBooks records.
        """
        logger.info("Starting %s scenario: %d months", self.name, self.months)

        for index, month_start in enumerate(month_starts(self.start_date, self.months)):
            self._generate_month(month_start, index)

        self.request.transactions = self.store.snapshot()
        logger.info(
            "Generated %s: %d transactions, %d shopify orders, %d invoices, %d bills",
            self.name,
            len(self.request.transactions),
            len(self.request.shopify_orders),
            len(self.request.quickbooks_invoices),
            len(self.request.quickbooks_bills),
        )
        return self.request

    def export(self, sinks: list[Any]) -> None:
        """Export generated records to sinks.

        Parameters
        ----------
        sinks : list[Any]
            Sink instances (ConsoleSink, JsonFileSink).
        """
        for sink in sinks:
            sink.write_batch("transactions", self.request.transactions)
            if self.request.shopify_orders:
                sink.write_batch("shopify_orders", self.request.shopify_orders)
            if self.request.quickbooks_invoices:
                sink.write_batch("quickbooks_invoices", self.request.quickbooks_invoices)
            if self.request.quickbooks_bills:
                sink.write_batch("quickbooks_bills", self.request.quickbooks_bills)

        logger.info("Exported %s data to %d sinks", self.name, len(sinks))
