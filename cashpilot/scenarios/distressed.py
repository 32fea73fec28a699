"""Service business whose revenue is shrinking below its fixed costs."""

from datetime import datetime
from decimal import Decimal

from cashpilot.generators import TransactionGenerator
from cashpilot.models.financial import TransactionType
from cashpilot.scenarios.base import BaseScenario


class DistressedBusinessScenario(BaseScenario):
    """Two anchor clients paying less every month against flat overhead.

    Monthly expenses always exceed monthly income, so net cash flow is
    negative for any seed.
    """

    name = "distressed"

    CLIENT_BASE_FEE = 5000
    MONTHLY_DECLINE = Decimal("0.10")

    # category -> (description, amount range)
    MONTHLY_EXPENSES = {
        "Rent": ("Office lease", (3000, 3200)),
        "Salaries": ("Payroll run", (6000, 6500)),
        "Marketing": ("Advertising campaign", (1500, 2000)),
    }

    def __init__(
        self,
        months: int = 6,
        num_customers: int = 2,
        start_date: datetime | None = None,
        seed: int | None = None,
    ) -> None:
        super().__init__(months, num_customers, start_date, seed)
        self._tx_gen = TransactionGenerator(seed=seed)
        self._clients = [self._tx_gen.fake.company() for _ in range(num_customers)]

    def _generate_month(self, month_start: datetime, index: int) -> None:
        factor = max(Decimal("0.1"), 1 - self.MONTHLY_DECLINE * index)
        for client in self._clients:
            fee = self._tx_gen.money(self.CLIENT_BASE_FEE * 0.95, self.CLIENT_BASE_FEE * 1.05) * factor
            self.store.add(
                self._tx_gen.generate(
                    tx_type=TransactionType.INCOME,
                    date=self._tx_gen.moment_in_month(month_start),
                    category="Client Services",
                    amount=fee.quantize(Decimal("0.01")),
                    description=f"Consulting project for {client}",
                )
            )

        for category, (description, (low, high)) in self.MONTHLY_EXPENSES.items():
            self.store.add(
                self._tx_gen.generate(
                    tx_type=TransactionType.EXPENSE,
                    date=self._tx_gen.moment_in_month(month_start),
                    category=category,
                    amount=self._tx_gen.money(low, high),
                    description=description,
                )
            )
