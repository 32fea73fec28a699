"""Threshold rules turning summary views into insights.

Every rule looks at the adapter's views independently and may emit zero or
more insights. The health score and the recommendation list are derived from
the emitted insights and the per-source data-quality analyses.
"""

from datetime import datetime
from typing import Callable
from uuid import uuid4

from cashpilot.adapters.base import BaseDataAdapter
from cashpilot.insights.data_quality import (
    LOW_COVERAGE_THRESHOLD,
    LOW_QUALITY_THRESHOLD,
    analyze_data_sources,
    assess_overall_data_quality,
)
from cashpilot.logging import get_logger
from cashpilot.models.financial import (
    DataSourceAnalysis,
    Insight,
    InsightAnalysis,
    InsightCategory,
    InsightImpact,
    InsightSummary,
    InsightType,
    Transaction,
)

logger = get_logger(__name__)

MAX_RECOMMENDATIONS = 10

CRITICAL_PENALTY = 15
WARNING_PENALTY = 5
POSITIVE_BONUS = 3
LOW_QUALITY_SOURCE_PENALTY = 10

Rule = Callable[[BaseDataAdapter], list[Insight]]


def _insight(
    slug: str,
    type: InsightType,
    title: str,
    description: str,
    impact: InsightImpact,
    category: InsightCategory,
    confidence: int,
    action_items: list[str] | None = None,
    data: dict | None = None,
) -> Insight:
    return Insight(
        id=f"{slug}_{uuid4().hex[:12]}",
        type=type,
        title=title,
        description=description,
        impact=impact,
        category=category,
        actionable=bool(action_items),
        confidence=confidence,
        created_at=datetime.now(),
        action_items=list(action_items or []),
        data=data,
    )


def revenue_insights(adapter: BaseDataAdapter) -> list[Insight]:
    """Growth of the last three periods against the three before, and recurring share."""
    insights = []
    revenue = adapter.get_revenue_data()
    if revenue.total_revenue <= 0:
        return insights

    monthly = [float(value) for value in revenue.revenue_by_period.values()]
    recent, previous = monthly[-3:], monthly[-6:-3]
    if recent and previous:
        recent_avg = sum(recent) / len(recent)
        previous_avg = sum(previous) / len(previous)
        if previous_avg > 0:
            growth = (recent_avg - previous_avg) / previous_avg * 100
            if growth > 10:
                insights.append(
                    _insight(
                        "revenue_growth",
                        InsightType.POSITIVE,
                        "Strong Revenue Growth",
                        f"Your revenue has grown by {growth:.1f}% in the last 3 months "
                        "compared to the previous 3 months.",
                        InsightImpact.HIGH,
                        InsightCategory.REVENUE,
                        85,
                        [
                            "Analyze what's driving this growth",
                            "Consider scaling successful strategies",
                            "Plan for continued growth",
                        ],
                        {"growth_rate": growth},
                    )
                )
            elif growth < -10:
                insights.append(
                    _insight(
                        "revenue_decline",
                        InsightType.WARNING,
                        "Revenue Decline Detected",
                        f"Your revenue has declined by {abs(growth):.1f}% in the last 3 months.",
                        InsightImpact.HIGH,
                        InsightCategory.REVENUE,
                        80,
                        [
                            "Investigate the cause of decline",
                            "Review customer retention strategies",
                            "Consider new revenue streams",
                        ],
                        {"growth_rate": growth},
                    )
                )

    recurring_share = float(revenue.recurring_revenue / revenue.total_revenue * 100)
    if recurring_share > 70:
        insights.append(
            _insight(
                "recurring_revenue_high",
                InsightType.POSITIVE,
                "Strong Recurring Revenue",
                f"{recurring_share:.1f}% of your revenue is recurring, providing stable cash flow.",
                InsightImpact.MEDIUM,
                InsightCategory.REVENUE,
                90,
            )
        )
    elif recurring_share < 30:
        insights.append(
            _insight(
                "recurring_revenue_low",
                InsightType.OPPORTUNITY,
                "Opportunity: Increase Recurring Revenue",
                f"Only {recurring_share:.1f}% of your revenue is recurring. "
                "Consider subscription models or retainer agreements.",
                InsightImpact.MEDIUM,
                InsightCategory.REVENUE,
                75,
                [
                    "Explore subscription-based services",
                    "Consider retainer agreements with clients",
                    "Implement recurring billing for existing services",
                ],
            )
        )
    return insights


def expense_insights(adapter: BaseDataAdapter) -> list[Insight]:
    """Expense ratio against revenue and concentration in one category."""
    insights = []
    expenses = adapter.get_expense_data()
    revenue = adapter.get_revenue_data()

    if expenses.total_expenses > 0 and revenue.total_revenue > 0:
        ratio = float(expenses.total_expenses / revenue.total_revenue * 100)
        if ratio > 80:
            insights.append(
                _insight(
                    "expense_ratio_high",
                    InsightType.CRITICAL,
                    "High Expense Ratio",
                    f"Your expenses are {ratio:.1f}% of revenue, which may impact profitability.",
                    InsightImpact.HIGH,
                    InsightCategory.EXPENSES,
                    85,
                    [
                        "Review and reduce unnecessary expenses",
                        "Negotiate better rates with suppliers",
                        "Consider cost-cutting measures",
                    ],
                    {"expense_ratio": ratio},
                )
            )
        elif ratio < 50:
            insights.append(
                _insight(
                    "expense_ratio_low",
                    InsightType.POSITIVE,
                    "Efficient Cost Management",
                    f"Your expenses are only {ratio:.1f}% of revenue, indicating good cost control.",
                    InsightImpact.MEDIUM,
                    InsightCategory.EXPENSES,
                    90,
                    data={"expense_ratio": ratio},
                )
            )

    # A single category is always 100% of spend, nothing to diversify
    if len(expenses.expenses_by_category) >= 2 and expenses.total_expenses > 0:
        top_category, top_amount = max(expenses.expenses_by_category.items(), key=lambda item: item[1])
        share = float(top_amount / expenses.total_expenses * 100)
        if share > 40:
            insights.append(
                _insight(
                    "expense_concentration",
                    InsightType.WARNING,
                    "Expense Concentration Risk",
                    f"{top_category} represents {share:.1f}% of your total expenses.",
                    InsightImpact.MEDIUM,
                    InsightCategory.EXPENSES,
                    80,
                    [
                        "Diversify expense categories",
                        "Negotiate better rates for this category",
                        "Explore alternative suppliers",
                    ],
                    {"category": top_category, "share": share},
                )
            )
    return insights


def cash_flow_insights(adapter: BaseDataAdapter) -> list[Insight]:
    """Sign of net cash flow and its margin."""
    revenue = adapter.get_revenue_data().total_revenue
    net = revenue - adapter.get_expense_data().total_expenses

    if net < 0:
        return [
            _insight(
                "negative_cash_flow",
                InsightType.CRITICAL,
                "Negative Cash Flow",
                "Your expenses exceed your revenue, creating negative cash flow.",
                InsightImpact.HIGH,
                InsightCategory.CASH_FLOW,
                95,
                [
                    "Immediately reduce expenses",
                    "Increase revenue through new sales",
                    "Consider short-term financing options",
                ],
                {"net_cash_flow": float(net)},
            )
        ]
    if net > 0:
        margin = float(net / revenue * 100)
        if margin > 30:
            return [
                _insight(
                    "strong_cash_flow",
                    InsightType.POSITIVE,
                    "Strong Cash Flow",
                    f"You have a healthy {margin:.1f}% cash flow margin.",
                    InsightImpact.MEDIUM,
                    InsightCategory.CASH_FLOW,
                    90,
                    data={"margin": margin},
                )
            ]
    return []


def customer_insights(adapter: BaseDataAdapter) -> list[Insight]:
    """New-customer share, lifetime value against order value, and churn."""
    insights = []
    customers = adapter.get_customer_data()
    if customers.total_customers == 0:
        return insights

    growth = customers.new_customers / customers.total_customers * 100
    if growth > 20:
        insights.append(
            _insight(
                "customer_growth",
                InsightType.POSITIVE,
                "Strong Customer Growth",
                f"You've added {customers.new_customers} new customers, a {growth:.1f}% growth rate.",
                InsightImpact.MEDIUM,
                InsightCategory.CUSTOMERS,
                85,
            )
        )

    average_order_value = adapter.get_revenue_data().average_order_value
    if customers.customer_lifetime_value > 0 and customers.customer_lifetime_value > average_order_value * 5:
        insights.append(
            _insight(
                "high_clv",
                InsightType.POSITIVE,
                "High Customer Lifetime Value",
                f"Your customers have a high lifetime value of ${customers.customer_lifetime_value:.2f}.",
                InsightImpact.MEDIUM,
                InsightCategory.CUSTOMERS,
                80,
                [
                    "Focus on customer retention",
                    "Develop loyalty programs",
                    "Cross-sell to existing customers",
                ],
            )
        )

    if customers.churn_rate > 10:
        insights.append(
            _insight(
                "high_churn",
                InsightType.WARNING,
                "High Customer Churn Rate",
                f"Your churn rate is {customers.churn_rate:.1f}%, "
                "which may indicate customer satisfaction issues.",
                InsightImpact.HIGH,
                InsightCategory.CUSTOMERS,
                75,
                [
                    "Survey customers about their experience",
                    "Improve customer support",
                    "Review product/service quality",
                ],
                {"churn_rate": customers.churn_rate},
            )
        )
    return insights


def product_insights(adapter: BaseDataAdapter) -> list[Insight]:
    """Share of the best-selling product within the top sellers."""
    products = adapter.get_product_data().top_selling_products
    if not products:
        return []
    total = sum(p.revenue for p in products)
    if total <= 0:
        return []

    top = products[0]
    share = float(top.revenue / total * 100)
    if share <= 50:
        return []
    return [
        _insight(
            "product_concentration",
            InsightType.WARNING,
            "Product Concentration Risk",
            f"{top.name} represents {share:.1f}% of your product revenue.",
            InsightImpact.MEDIUM,
            InsightCategory.OPERATIONS,
            80,
            [
                "Diversify your product portfolio",
                "Develop new products or services",
                "Reduce dependency on single product",
            ],
            {"product": top.name, "share": share},
        )
    ]


def data_quality_insights(sources: list[DataSourceAnalysis]) -> list[Insight]:
    """Warn about low-quality sources and point out thin coverage."""
    insights = []
    for source in sources:
        if source.data_quality < LOW_QUALITY_THRESHOLD:
            insights.append(
                _insight(
                    f"data_quality_{source.source.value}",
                    InsightType.WARNING,
                    f"Data Quality Issues in {source.label}",
                    f"Your {source.label} data has quality issues that may affect insights accuracy.",
                    InsightImpact.MEDIUM,
                    InsightCategory.OPERATIONS,
                    70,
                    source.recommendations,
                )
            )
        if source.coverage < LOW_COVERAGE_THRESHOLD:
            insights.append(
                _insight(
                    f"data_coverage_{source.source.value}",
                    InsightType.OPPORTUNITY,
                    f"Improve {source.label} Data Coverage",
                    f"Only {source.coverage:.1f}% of your transactions come from {source.label}.",
                    InsightImpact.LOW,
                    InsightCategory.OPERATIONS,
                    85,
                    [
                        "Import more data from this source",
                        "Connect additional accounts",
                        "Consider manual entry for missing data",
                    ],
                )
            )
    return insights


RULES: list[Rule] = [
    revenue_insights,
    expense_insights,
    cash_flow_insights,
    customer_insights,
    product_insights,
]


def calculate_health_score(insights: list[Insight], sources: list[DataSourceAnalysis]) -> int:
    """Additive score: 100, minus penalties, plus bonuses, clamped to 0-100."""
    score = 100
    score -= CRITICAL_PENALTY * sum(1 for i in insights if i.type == InsightType.CRITICAL)
    score -= WARNING_PENALTY * sum(1 for i in insights if i.type == InsightType.WARNING)
    score += POSITIVE_BONUS * sum(1 for i in insights if i.type == InsightType.POSITIVE)
    score -= LOW_QUALITY_SOURCE_PENALTY * sum(1 for s in sources if s.data_quality < LOW_QUALITY_THRESHOLD)
    return max(0, min(100, score))


def generate_recommendations(insights: list[Insight], sources: list[DataSourceAnalysis]) -> list[str]:
    """Collect action items in priority order, keeping the first ten."""
    recommendations: list[str] = []
    for insight in insights:
        if insight.impact == InsightImpact.HIGH and insight.actionable:
            recommendations.extend(insight.action_items)

    for source in sources:
        if source.data_quality < LOW_QUALITY_THRESHOLD and source.recommendations:
            recommendations.append(f"Improve data quality in {source.label}: {source.recommendations[0]}")

    for insight in insights:
        if insight.type == InsightType.OPPORTUNITY and insight.action_items:
            recommendations.append(insight.action_items[0])

    return recommendations[:MAX_RECOMMENDATIONS]


def summarize_insights(insights: list[Insight]) -> InsightSummary:
    def count(kind: InsightType) -> int:
        return sum(1 for i in insights if i.type == kind)

    return InsightSummary(
        total_insights=len(insights),
        positive_insights=count(InsightType.POSITIVE),
        warning_insights=count(InsightType.WARNING),
        critical_insights=count(InsightType.CRITICAL),
        opportunities=count(InsightType.OPPORTUNITY),
    )


def generate_insights(transactions: list[Transaction], adapter: BaseDataAdapter) -> InsightAnalysis:
    """Run every rule over the adapter's views.

    Parameters
    ----------
    transactions : list[Transaction]
        Full transaction set, used for per-source data-quality analysis.
    adapter : BaseDataAdapter
        Source of the revenue, expense, customer and product views.

    Returns
    -------
    InsightAnalysis
        Insights in rule order, their summary, recommendations, the health
        score, overall data quality and the per-source analyses.
    """
    sources = analyze_data_sources(transactions)

    insights: list[Insight] = []
    for rule in RULES:
        insights.extend(rule(adapter))
    insights.extend(data_quality_insights(sources))

    health_score = calculate_health_score(insights, sources)
    logger.info(
        "Generated %d insights from %d transactions, health score %d",
        len(insights),
        len(transactions),
        health_score,
    )

    return InsightAnalysis(
        insights=insights,
        summary=summarize_insights(insights),
        recommendations=generate_recommendations(insights, sources),
        health_score=health_score,
        data_quality=assess_overall_data_quality(sources),
        data_sources=sources,
    )
