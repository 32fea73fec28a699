"""Tests for scenarios."""

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from cashpilot.adapters import create_data_adapter
from cashpilot.config import AnalysisConfig, CashPilotConfig, ScenarioConfig
from cashpilot.exceptions import ConfigurationError
from cashpilot.models.financial import DataSource, TransactionSource, TransactionType
from cashpilot.pipeline import build_report
from cashpilot.scenarios import (
    SCENARIOS,
    DistressedBusinessScenario,
    EcommerceScenario,
    SubscriptionBusinessScenario,
    build_scenario,
)
from cashpilot.scenarios.base import default_start, month_starts
from cashpilot.sinks import JsonFileSink

START = datetime(2024, 1, 1)


def _report(request, as_of: date = date(2024, 6, 30)):
    return build_report(request, CashPilotConfig(analysis=AnalysisConfig(as_of=as_of)))


class TestMonthHelpers:
    """Tests for month_starts and default_start."""

    def test_month_starts_rolls_over_year(self) -> None:
        assert month_starts(datetime(2023, 11, 15), 3) == [
            datetime(2023, 11, 1),
            datetime(2023, 12, 1),
            datetime(2024, 1, 1),
        ]

    def test_default_start_ends_in_current_month(self) -> None:
        today = datetime.now()
        last = month_starts(default_start(6), 6)[-1]

        assert (last.year, last.month) == (today.year, today.month)

    @pytest.mark.parametrize("months", [1, 12, 25])
    def test_default_start_is_first_of_month(self, months: int) -> None:
        assert default_start(months).day == 1


class TestBuildScenario:
    """Tests for the scenario registry."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("subscription", SubscriptionBusinessScenario),
            ("ecommerce", EcommerceScenario),
            ("distressed", DistressedBusinessScenario),
        ],
    )
    def test_known_names(self, name: str, expected: type, seed: int) -> None:
        scenario = build_scenario(ScenarioConfig(name=name, months=3, start_date=START, num_customers=4, seed=seed))

        assert isinstance(scenario, expected)
        assert scenario.months == 3
        assert scenario.start_date == START
        assert scenario.num_customers == 4

    def test_registry_covers_all(self) -> None:
        assert set(SCENARIOS) == {"subscription", "ecommerce", "distressed"}

    def test_unknown_name(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown scenario 'bakery'"):
            build_scenario(ScenarioConfig(name="bakery"))


class TestSubscriptionBusinessScenario:
    """Tests for SubscriptionBusinessScenario."""

    def test_generate(self, seed: int) -> None:
        request = SubscriptionBusinessScenario(months=6, num_customers=20, start_date=START, seed=seed).generate()

        # Twenty subscribers plus one onboarding job per month
        assert len(request.transactions) == 126
        assert len(request.quickbooks_bills) == 12
        assert request.shopify_orders == []
        assert all(tx.type == TransactionType.INCOME for tx in request.transactions)

    def test_recurring_revenue_dominates(self, seed: int) -> None:
        request = SubscriptionBusinessScenario(months=6, num_customers=20, start_date=START, seed=seed).generate()
        revenue = create_data_adapter(request.transactions).get_revenue_data()

        assert revenue.recurring_revenue / revenue.total_revenue > Decimal("0.7")

    def test_report(self, seed: int) -> None:
        request = SubscriptionBusinessScenario(months=6, num_customers=20, start_date=START, seed=seed).generate()

        report = _report(request)

        assert {s.source for s in report.data_sources} == {DataSource.MANUAL, DataSource.QUICKBOOKS}
        assert "Strong Recurring Revenue" in [i.title for i in report.insights]
        assert report.cash_flow.total_expenses > 0


class TestDistressedBusinessScenario:
    """Tests for DistressedBusinessScenario."""

    def test_income_declines(self, seed: int) -> None:
        request = DistressedBusinessScenario(months=6, start_date=START, seed=seed).generate()
        by_period = create_data_adapter(request.transactions).get_revenue_data().revenue_by_period

        monthly = list(by_period.values())
        assert len(monthly) == 6
        assert all(earlier > later for earlier, later in zip(monthly, monthly[1:]))

    def test_negative_cash_flow(self, seed: int) -> None:
        request = DistressedBusinessScenario(months=6, start_date=START, seed=seed).generate()

        report = _report(request)

        assert report.cash_flow.net_cash_flow < 0
        assert "Negative Cash Flow" in report.health_score.issues
        assert report.health_score.grade != "A"

    def test_no_customer_records(self, seed: int) -> None:
        request = DistressedBusinessScenario(months=2, start_date=START, seed=seed).generate()

        assert create_data_adapter(request.transactions).get_customer_data().total_customers == 0
        assert {tx.source for tx in request.transactions} == {TransactionSource.MANUAL}


class TestEcommerceScenario:
    """Tests for EcommerceScenario."""

    def test_generate(self, seed: int) -> None:
        request = EcommerceScenario(months=6, num_customers=24, start_date=START, seed=seed).generate()

        assert 6 * 20 <= len(request.shopify_orders) <= 6 * 40
        assert len(request.transactions) == 6 * len(EcommerceScenario.MONTHLY_EXPENSES)
        assert all(tx.type == TransactionType.EXPENSE for tx in request.transactions)

    def test_new_customers_every_month(self, seed: int) -> None:
        request = EcommerceScenario(months=6, num_customers=24, start_date=START, seed=seed).generate()
        adapter = create_data_adapter(
            request.transactions,
            request.shopify_orders,
            config=AnalysisConfig(as_of=date(2024, 6, 30)),
        )

        customers = adapter.get_customer_data()
        assert customers.new_customers == 4
        assert customers.total_customers >= 20
        assert adapter.get_product_data().top_selling_products

    def test_report(self, seed: int) -> None:
        request = EcommerceScenario(months=3, num_customers=9, start_date=START, seed=seed).generate()

        report = _report(request, as_of=date(2024, 3, 31))

        assert {s.source for s in report.data_sources} == {DataSource.MANUAL, DataSource.SHOPIFY}
        assert report.cash_flow.total_revenue > 0


class TestScenarioExport:
    """Tests for exporting scenario output."""

    def test_export_to_json(self, seed: int, tmp_path: Path) -> None:
        scenario = SubscriptionBusinessScenario(months=2, num_customers=3, start_date=START, seed=seed)
        request = scenario.generate()
        sink = JsonFileSink(tmp_path)

        scenario.export([sink])

        written = sorted(p.name for p in tmp_path.iterdir())
        assert written == ["quickbooks_bills.json", "transactions.json"]
        transactions = json.loads((tmp_path / "transactions.json").read_text(encoding="utf-8"))
        assert len(transactions) == len(request.transactions)
