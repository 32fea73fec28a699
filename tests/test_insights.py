"""Tests for the insight engine."""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Callable

import pytest

from cashpilot.adapters import ShopifyDataAdapter, create_data_adapter
from cashpilot.config import AnalysisConfig
from cashpilot.generators import TransactionGenerator
from cashpilot.insights import calculate_health_score, generate_insights, generate_recommendations
from cashpilot.insights.data_quality import analyze_data_sources
from cashpilot.insights.engine import (
    MAX_RECOMMENDATIONS,
    cash_flow_insights,
    customer_insights,
    data_quality_insights,
    expense_insights,
    product_insights,
    revenue_insights,
)
from cashpilot.models.financial import (
    Insight,
    InsightCategory,
    InsightImpact,
    InsightType,
    ShopifyCustomer,
    ShopifyLineItem,
    ShopifyOrder,
    Transaction,
    TransactionSource,
    TransactionType,
)

EXPENSE = TransactionType.EXPENSE


def _titles(insights: list[Insight]) -> list[str]:
    return [insight.title for insight in insights]


def _monthly(make_tx: Callable[..., Transaction], amounts: list[int], **kwargs) -> list[Transaction]:
    return [make_tx(amount, when=datetime(2024, month, 10), **kwargs) for month, amount in enumerate(amounts, 1)]


def _insight(kind: InsightType, impact: InsightImpact = InsightImpact.MEDIUM, actions: int = 0) -> Insight:
    return Insight(
        id="x",
        type=kind,
        title="t",
        description="d",
        impact=impact,
        category=InsightCategory.REVENUE,
        actionable=bool(actions),
        confidence=80,
        created_at=datetime(2024, 1, 1),
        action_items=[f"step {i}" for i in range(actions)],
    )


class TestWorkedExamples:
    """End-to-end examples over a small transaction list."""

    def test_positive_cash_flow(self, make_tx: Callable[..., Transaction]) -> None:
        """Income 2500 against expense 1300: no critical insight and a perfect score."""
        transactions = [
            make_tx(2500, when=datetime(2024, 1, 10)),
            make_tx(-1300, EXPENSE, when=datetime(2024, 1, 11), category="Rent"),
        ]
        adapter = create_data_adapter(transactions)

        analysis = generate_insights(transactions, adapter)

        net = adapter.get_revenue_data().total_revenue - adapter.get_expense_data().total_expenses
        assert net == Decimal("1200")
        assert analysis.summary.critical_insights == 0
        assert analysis.health_score == 100

    def test_expense_ratio_critical(self, make_tx: Callable[..., Transaction]) -> None:
        """Revenue 1000 against expenses 900 yields exactly one critical expense insight."""
        transactions = [make_tx(1000), make_tx(-900, EXPENSE, category="Rent")]

        analysis = generate_insights(transactions, create_data_adapter(transactions))

        critical = [i for i in analysis.insights if i.type == InsightType.CRITICAL]
        assert len(critical) == 1
        assert critical[0].category == InsightCategory.EXPENSES
        assert critical[0].data["expense_ratio"] == pytest.approx(90)

    def test_empty_input(self) -> None:
        """No transactions: no insights, baseline score, no data sources."""
        analysis = generate_insights([], create_data_adapter([]))

        assert analysis.insights == []
        assert analysis.recommendations == []
        assert analysis.health_score == 100
        assert analysis.data_quality.score == 0
        assert analysis.data_quality.issues == ["No data sources available"]
        assert analysis.data_sources == []

    def test_zero_income(self, make_tx: Callable[..., Transaction]) -> None:
        """Without income the ratio rules are skipped instead of dividing by zero."""
        transactions = [make_tx(-500, EXPENSE, category="Rent")]

        analysis = generate_insights(transactions, create_data_adapter(transactions))

        assert not any(i.id.startswith(("recurring_revenue", "expense_ratio")) for i in analysis.insights)
        assert _titles(analysis.insights) == ["Negative Cash Flow"]


class TestRecommendationLimit:
    """The recommendation list never exceeds ten entries."""

    def test_capped(self, make_tx: Callable[..., Transaction]) -> None:
        income = _monthly(make_tx, [1000, 1000, 1000, 500, 500, 500], description="", category="")
        expenses = [
            make_tx(-2000, EXPENSE, when=datetime(2024, month, 12), description="", category="")
            for month in range(1, 7)
        ]
        transactions = income + expenses

        analysis = generate_insights(transactions, create_data_adapter(transactions))

        assert len(analysis.recommendations) == MAX_RECOMMENDATIONS
        assert analysis.recommendations[:3] == [
            "Investigate the cause of decline",
            "Review customer retention strategies",
            "Consider new revenue streams",
        ]

    @pytest.mark.parametrize("seed", [1, 7, 42, 1234])
    def test_random_inputs(self, seed: int) -> None:
        """Score and recommendations stay in bounds for generated data."""
        transactions = list(TransactionGenerator(seed=seed).generate_batch(200))

        analysis = generate_insights(transactions, create_data_adapter(transactions))

        assert 0 <= analysis.health_score <= 100
        assert len(analysis.recommendations) <= MAX_RECOMMENDATIONS


class TestRevenueInsights:
    """Tests for revenue_insights."""

    def test_growth(self, make_tx: Callable[..., Transaction]) -> None:
        adapter = create_data_adapter(_monthly(make_tx, [100, 100, 100, 200, 200, 200]))

        insights = revenue_insights(adapter)

        assert _titles(insights) == ["Strong Revenue Growth", "Opportunity: Increase Recurring Revenue"]
        assert insights[0].data["growth_rate"] == pytest.approx(100)

    def test_decline(self, make_tx: Callable[..., Transaction]) -> None:
        adapter = create_data_adapter(_monthly(make_tx, [200, 200, 200, 100, 100, 100]))
        assert _titles(revenue_insights(adapter))[0] == "Revenue Decline Detected"

    def test_flat(self, make_tx: Callable[..., Transaction]) -> None:
        adapter = create_data_adapter(_monthly(make_tx, [100, 100, 100, 105, 105, 105], tags=["subscription"]))
        assert _titles(revenue_insights(adapter)) == ["Strong Recurring Revenue"]

    def test_too_few_periods(self, make_tx: Callable[..., Transaction]) -> None:
        """Growth needs at least four periods."""
        adapter = create_data_adapter(_monthly(make_tx, [100, 500, 900], tags=["subscription"]))
        assert _titles(revenue_insights(adapter)) == ["Strong Recurring Revenue"]

    def test_middle_recurring_share_silent(self, make_tx: Callable[..., Transaction]) -> None:
        adapter = create_data_adapter([make_tx(50, tags=["subscription"]), make_tx(50)])
        assert revenue_insights(adapter) == []


class TestExpenseInsights:
    """Tests for expense_insights."""

    def test_efficient(self, make_tx: Callable[..., Transaction]) -> None:
        adapter = create_data_adapter([make_tx(1000), make_tx(-300, EXPENSE, category="Rent")])
        assert _titles(expense_insights(adapter)) == ["Efficient Cost Management"]

    def test_concentration(self, make_tx: Callable[..., Transaction]) -> None:
        adapter = create_data_adapter(
            [
                make_tx(10000),
                make_tx(-500, EXPENSE, category="Rent"),
                make_tx(-100, EXPENSE, category="Marketing"),
            ]
        )

        insights = expense_insights(adapter)

        assert _titles(insights) == ["Efficient Cost Management", "Expense Concentration Risk"]
        assert insights[1].data["category"] == "Rent"

    def test_single_category_not_concentrated(self, make_tx: Callable[..., Transaction]) -> None:
        adapter = create_data_adapter([make_tx(-500, EXPENSE, category="Rent")])
        assert expense_insights(adapter) == []


class TestCashFlowInsights:
    """Tests for cash_flow_insights."""

    def test_negative(self, make_tx: Callable[..., Transaction]) -> None:
        insights = cash_flow_insights(create_data_adapter([make_tx(100), make_tx(-200, EXPENSE)]))

        assert insights[0].type == InsightType.CRITICAL
        assert insights[0].confidence == 95
        assert insights[0].category == InsightCategory.CASH_FLOW

    def test_strong_margin(self, make_tx: Callable[..., Transaction]) -> None:
        insights = cash_flow_insights(create_data_adapter([make_tx(100), make_tx(-60, EXPENSE)]))
        assert _titles(insights) == ["Strong Cash Flow"]

    def test_thin_margin_silent(self, make_tx: Callable[..., Transaction]) -> None:
        assert cash_flow_insights(create_data_adapter([make_tx(100), make_tx(-80, EXPENSE)])) == []

    def test_break_even_silent(self) -> None:
        assert cash_flow_insights(create_data_adapter([])) == []


class TestCustomerInsights:
    """Tests for customer_insights."""

    @staticmethod
    def _order(number: int, customer_id: str, when: datetime, total: str) -> ShopifyOrder:
        return ShopifyOrder(
            order_id=str(number),
            order_number=number,
            created_at=when,
            total_price=Decimal(total),
            customer=ShopifyCustomer(customer_id=customer_id),
        )

    def test_growth_clv_and_churn(self) -> None:
        orders = [
            self._order(1, "a", datetime(2024, 1, 5), "100"),
            self._order(2, "b", datetime(2024, 6, 5), "100"),
        ]
        adapter = ShopifyDataAdapter([], orders, AnalysisConfig(as_of=date(2024, 6, 15)))

        assert _titles(customer_insights(adapter)) == [
            "Strong Customer Growth",
            "High Customer Lifetime Value",
            "High Customer Churn Rate",
        ]

    def test_no_customers(self, make_tx: Callable[..., Transaction]) -> None:
        assert customer_insights(create_data_adapter([make_tx(100)])) == []


class TestProductInsights:
    """Tests for product_insights."""

    def test_concentration(self, sample_order: ShopifyOrder) -> None:
        insights = product_insights(ShopifyDataAdapter([], [sample_order]))

        assert _titles(insights) == ["Product Concentration Risk"]
        assert insights[0].data["product"] == "Organic Cotton Shirt"

    def test_balanced(self, sample_order: ShopifyOrder) -> None:
        sample_order.line_items = [
            ShopifyLineItem(title="A", quantity=1, price=Decimal("50")),
            ShopifyLineItem(title="B", quantity=1, price=Decimal("50")),
        ]
        assert product_insights(ShopifyDataAdapter([], [sample_order])) == []


class TestDataQualityInsights:
    """Tests for data_quality_insights."""

    def test_low_quality_and_coverage(self, make_tx: Callable[..., Transaction]) -> None:
        transactions = [
            make_tx(1, description="", category=""),
            make_tx(2, source=TransactionSource.SHOPIFY),
            make_tx(3, source=TransactionSource.SHOPIFY),
        ]

        insights = data_quality_insights(analyze_data_sources(transactions))

        assert _titles(insights) == [
            "Data Quality Issues in Manual Entry",
            "Improve Manual Entry Data Coverage",
        ]
        assert insights[0].type == InsightType.WARNING
        assert insights[1].type == InsightType.OPPORTUNITY


class TestHealthScore:
    """Tests for calculate_health_score."""

    def test_penalties_and_bonuses(self) -> None:
        insights = [
            _insight(InsightType.CRITICAL),
            _insight(InsightType.WARNING),
            _insight(InsightType.POSITIVE),
            _insight(InsightType.OPPORTUNITY),
        ]
        assert calculate_health_score(insights, []) == 100 - 15 - 5 + 3

    def test_clamped_low(self) -> None:
        assert calculate_health_score([_insight(InsightType.CRITICAL)] * 10, []) == 0

    def test_clamped_high(self) -> None:
        assert calculate_health_score([_insight(InsightType.POSITIVE)] * 10, []) == 100

    def test_low_quality_source_penalty(self, make_tx: Callable[..., Transaction]) -> None:
        sources = analyze_data_sources([make_tx(1, description="", category="")])
        assert calculate_health_score([], sources) == 90


class TestGenerateRecommendations:
    """Tests for generate_recommendations."""

    def test_priority_order(self, make_tx: Callable[..., Transaction]) -> None:
        sources = analyze_data_sources([make_tx(1, description="", category="")])
        insights = [
            _insight(InsightType.OPPORTUNITY, InsightImpact.LOW, actions=2),
            _insight(InsightType.WARNING, InsightImpact.MEDIUM, actions=3),
            _insight(InsightType.CRITICAL, InsightImpact.HIGH, actions=2),
        ]

        assert generate_recommendations(insights, sources) == [
            "step 0",
            "step 1",
            "Improve data quality in Manual Entry: Categorize uncategorized transactions for better insights",
            "step 0",
        ]


class TestInsightRecords:
    """Tests for the shape of generated insights."""

    def test_ids_and_actionable(self, make_tx: Callable[..., Transaction]) -> None:
        transactions = [make_tx(100), make_tx(-200, EXPENSE)]
        analysis = generate_insights(transactions, create_data_adapter(transactions))

        for insight in analysis.insights:
            assert re.fullmatch(r"[a-z_]+_[0-9a-f]{12}", insight.id)
            assert insight.actionable == bool(insight.action_items)
            assert 0 <= insight.confidence <= 100

    def test_summary_counts(self, make_tx: Callable[..., Transaction]) -> None:
        transactions = [make_tx(100), make_tx(-200, EXPENSE)]
        analysis = generate_insights(transactions, create_data_adapter(transactions))

        summary = analysis.summary
        assert summary.total_insights == len(analysis.insights)
        assert summary.critical_insights == 2
        assert summary.opportunities == 1
