"""Weighted health breakdown, trend analysis and risk assessment."""

from datetime import datetime
from decimal import Decimal

from cashpilot.adapters.base import BaseDataAdapter
from cashpilot.models.financial import (
    CustomerData,
    ExpenseData,
    FinancialHealthScore,
    HealthBreakdown,
    HealthFactors,
    ProductData,
    RevenueData,
    RiskAssessment,
    RiskLevel,
    Transaction,
    TrendAnalysis,
    TrendDirection,
)

CATEGORY_WEIGHTS = {
    "revenue": 0.25,
    "expenses": 0.25,
    "cash_flow": 0.25,
    "customers": 0.15,
    "operations": 0.10,
}


def _clamp(score: float) -> int:
    return int(max(0, min(100, round(score))))


def _percent(part: Decimal, whole: Decimal) -> float:
    return float(part / whole * 100)


def period_change(series: dict[str, Decimal]) -> float | None:
    """Percent change of the last three periods' mean over the three before.

    ``None`` when either window is empty or the earlier mean is zero.
    """
    values = [float(v) for v in series.values()]
    recent, previous = values[-3:], values[-6:-3]
    if not recent or not previous:
        return None
    previous_avg = sum(previous) / len(previous)
    if previous_avg == 0:
        return None
    recent_avg = sum(recent) / len(recent)
    return (recent_avg - previous_avg) / previous_avg * 100


def top_product_share(products: ProductData) -> float | None:
    """Top seller's share of top-seller revenue, ``None`` without sales."""
    if not products.top_selling_products:
        return None
    total = sum(p.revenue for p in products.top_selling_products)
    if total <= 0:
        return None
    return _percent(products.top_selling_products[0].revenue, total)


def score_revenue(revenue: RevenueData) -> int:
    score = 100
    if revenue.total_revenue > 0:
        growth = period_change(revenue.revenue_by_period)
        if growth is not None:
            if growth > 10:
                score += 20
            elif growth > 0:
                score += 10
            elif growth < -10:
                score -= 20
            elif growth < 0:
                score -= 10

        recurring = _percent(revenue.recurring_revenue, revenue.total_revenue)
        if recurring > 70:
            score += 15
        elif recurring > 50:
            score += 10
        elif recurring < 30:
            score -= 10

    categories = len(revenue.revenue_by_category)
    if categories >= 3:
        score += 10
    elif categories == 1:
        score -= 15
    return _clamp(score)


def score_expenses(expenses: ExpenseData, revenue: RevenueData) -> int:
    score = 100
    if revenue.total_revenue > 0:
        ratio = _percent(expenses.total_expenses, revenue.total_revenue)
        if ratio < 50:
            score += 20
        elif ratio < 70:
            score += 10
        elif ratio > 90:
            score -= 30
        elif ratio > 80:
            score -= 20

    categories = len(expenses.expenses_by_category)
    if categories >= 5:
        score += 10
    elif categories <= 2:
        score -= 10

    if expenses.total_expenses > 0:
        operating = _percent(expenses.operating_expenses, expenses.total_expenses)
        if operating < 60:
            score += 10
        elif operating > 80:
            score -= 10
    return _clamp(score)


def score_cash_flow(revenue: RevenueData, expenses: ExpenseData) -> int:
    score = 100
    if revenue.total_revenue > 0:
        margin = _percent(revenue.total_revenue - expenses.total_expenses, revenue.total_revenue)
        if margin > 30:
            score += 25
        elif margin > 20:
            score += 15
        elif margin > 10:
            score += 5
        elif margin < 0:
            score -= 40
        elif margin < 5:
            score -= 15

    # Consistency over periods that have both income and expenses
    shared = [p for p in revenue.revenue_by_period if p in expenses.expenses_by_period]
    if len(shared) >= 3:
        positive = sum(1 for p in shared if revenue.revenue_by_period[p] > expenses.expenses_by_period[p])
        consistency = positive / len(shared)
        if consistency > 0.8:
            score += 15
        elif consistency > 0.6:
            score += 5
        elif consistency < 0.4:
            score -= 20
    return _clamp(score)


def score_customers(customers: CustomerData) -> int:
    score = 100
    if customers.total_customers > 0:
        growth = customers.new_customers / customers.total_customers * 100
        if growth > 20:
            score += 20
        elif growth > 10:
            score += 10
        elif growth < 5:
            score -= 10

    clv = customers.customer_lifetime_value
    if clv > 0:
        if clv > 1000:
            score += 15
        elif clv > 500:
            score += 10
        elif clv < 100:
            score -= 10

    churn = customers.churn_rate
    if churn > 0:
        if churn < 5:
            score += 15
        elif churn < 10:
            score += 5
        elif churn > 20:
            score -= 25
        elif churn > 15:
            score -= 15
    return _clamp(score)


def score_operations(products: ProductData) -> int:
    score = 100
    if products.total_products >= 5:
        score += 15
    elif products.total_products >= 3:
        score += 10
    elif products.total_products == 1:
        score -= 15

    share = top_product_share(products)
    if share is not None:
        if share < 30:
            score += 10
        elif share > 70:
            score -= 15
    return _clamp(score)


def identify_health_factors(
    revenue: RevenueData,
    expenses: ExpenseData,
    customers: CustomerData,
) -> HealthFactors:
    factors = HealthFactors()

    if revenue.total_revenue > 0:
        recurring = _percent(revenue.recurring_revenue, revenue.total_revenue)
        if recurring > 70:
            factors.positive.append("Strong recurring revenue stream")
        elif recurring < 30:
            factors.negative.append("Low recurring revenue")
            factors.recommendations.append(
                "Consider implementing subscription models or retainer agreements"
            )

        ratio = _percent(expenses.total_expenses, revenue.total_revenue)
        if ratio < 60:
            factors.positive.append("Efficient cost management")
        elif ratio > 80:
            factors.negative.append("High expense ratio")
            factors.recommendations.append("Review and optimize your expense structure")

    net = revenue.total_revenue - expenses.total_expenses
    if net > 0:
        margin = _percent(net, revenue.total_revenue)
        if margin > 20:
            factors.positive.append("Healthy cash flow margin")
        elif margin < 5:
            factors.negative.append("Low cash flow margin")
            factors.recommendations.append("Focus on increasing revenue or reducing expenses")
    elif net < 0:
        factors.negative.append("Negative cash flow")
        factors.recommendations.append("Immediate action needed: reduce expenses or increase revenue")

    if 0 < customers.churn_rate < 5:
        factors.positive.append("Low customer churn rate")
    elif customers.churn_rate > 15:
        factors.negative.append("High customer churn rate")
        factors.recommendations.append("Investigate customer satisfaction and retention strategies")

    if customers.customer_lifetime_value > 500:
        factors.positive.append("High customer lifetime value")
    return factors


def calculate_financial_health_score(adapter: BaseDataAdapter) -> FinancialHealthScore:
    """Score each area 0-100 and combine them with fixed weights.

    Parameters
    ----------
    adapter : BaseDataAdapter
        Source of the summary views.

    Returns
    -------
    FinancialHealthScore
        Per-area breakdown with the weighted overall, and the narrative
        factors behind it.
    """
    revenue = adapter.get_revenue_data()
    expenses = adapter.get_expense_data()
    customers = adapter.get_customer_data()
    products = adapter.get_product_data()

    scores = {
        "revenue": score_revenue(revenue),
        "expenses": score_expenses(expenses, revenue),
        "cash_flow": score_cash_flow(revenue, expenses),
        "customers": score_customers(customers),
        "operations": score_operations(products),
    }
    overall = _clamp(sum(scores[name] * weight for name, weight in CATEGORY_WEIGHTS.items()))

    return FinancialHealthScore(
        breakdown=HealthBreakdown(overall=overall, **scores),
        factors=identify_health_factors(revenue, expenses, customers),
        last_updated=datetime.now(),
    )


def _direction(change: float | None, threshold: float) -> TrendDirection:
    if change is None:
        return TrendDirection.STABLE
    if change > threshold:
        return TrendDirection.INCREASING
    if change < -threshold:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def cash_flow_trend(revenue: RevenueData, expenses: ExpenseData) -> TrendDirection:
    """Compare net flow of the last three periods with the three before."""
    periods = sorted(set(revenue.revenue_by_period) | set(expenses.expenses_by_period))
    if len(periods) < 2:
        return TrendDirection.STABLE

    net = [
        float(revenue.revenue_by_period.get(p, 0) - expenses.expenses_by_period.get(p, 0))
        for p in periods
    ]
    recent, previous = sum(net[-3:]), sum(net[-6:-3])
    if not net[-6:-3]:
        return TrendDirection.STABLE
    if previous == 0:
        if recent > 0:
            return TrendDirection.INCREASING
        if recent < 0:
            return TrendDirection.DECREASING
        return TrendDirection.STABLE
    return _direction((recent - previous) / abs(previous) * 100, 10)


def customer_trend(customers: CustomerData) -> TrendDirection:
    if customers.total_customers == 0:
        return TrendDirection.STABLE
    growth = customers.new_customers / customers.total_customers * 100
    if growth > 10:
        return TrendDirection.INCREASING
    if growth < 5:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def trend_confidence(transaction_count: int) -> int:
    """Confidence grows with the number of transactions behind the trend."""
    if transaction_count < 10:
        return 30
    if transaction_count < 50:
        return 60
    if transaction_count < 100:
        return 80
    return 90


def _trend_insights(
    revenue: TrendDirection,
    expenses: TrendDirection,
    cash_flow: TrendDirection,
    customers: TrendDirection,
) -> list[str]:
    insights = []
    if revenue == TrendDirection.INCREASING and expenses == TrendDirection.STABLE:
        insights.append("Revenue is growing while expenses remain stable - excellent trend")
    elif revenue == TrendDirection.INCREASING and expenses == TrendDirection.INCREASING:
        insights.append("Both revenue and expenses are increasing - monitor profit margins")
    elif revenue == TrendDirection.DECREASING and expenses == TrendDirection.INCREASING:
        insights.append("Revenue is declining while expenses are rising - immediate action needed")

    if cash_flow == TrendDirection.INCREASING:
        insights.append("Cash flow is improving - good financial health indicator")
    elif cash_flow == TrendDirection.DECREASING:
        insights.append("Cash flow is declining - review revenue and expense management")

    if customers == TrendDirection.INCREASING:
        insights.append("Customer base is growing - positive for long-term sustainability")
    elif customers == TrendDirection.DECREASING:
        insights.append("Customer growth is slowing - focus on customer acquisition and retention")
    return insights


def analyze_trends(transactions: list[Transaction], adapter: BaseDataAdapter) -> TrendAnalysis:
    """Classify the direction of revenue, expenses, cash flow and customers."""
    revenue = adapter.get_revenue_data()
    expenses = adapter.get_expense_data()

    revenue_trend = _direction(period_change(revenue.revenue_by_period), 5)
    expense_trend = _direction(period_change(expenses.expenses_by_period), 5)
    flow_trend = cash_flow_trend(revenue, expenses)
    customers_trend = customer_trend(adapter.get_customer_data())

    return TrendAnalysis(
        period="Last 6 months",
        revenue=revenue_trend,
        expenses=expense_trend,
        cash_flow=flow_trend,
        customers=customers_trend,
        confidence=trend_confidence(len(transactions)),
        insights=_trend_insights(revenue_trend, expense_trend, flow_trend, customers_trend),
    )


def cash_flow_risk(revenue: RevenueData, expenses: ExpenseData) -> int:
    net = revenue.total_revenue - expenses.total_expenses
    if net < 0:
        return 90
    if revenue.total_revenue == 0:
        return 50
    margin = _percent(net, revenue.total_revenue)
    if margin < 5:
        return 70
    if margin < 10:
        return 50
    if margin < 20:
        return 30
    return 10


def customer_concentration_risk(customers: CustomerData) -> int:
    if customers.total_customers < 5:
        return 80
    if customers.total_customers < 10:
        return 60
    if customers.total_customers < 20:
        return 40
    return 20


def expense_risk(expenses: ExpenseData, revenue: RevenueData) -> int:
    if revenue.total_revenue == 0:
        return 100
    ratio = _percent(expenses.total_expenses, revenue.total_revenue)
    if ratio > 90:
        return 90
    if ratio > 80:
        return 70
    if ratio > 70:
        return 50
    if ratio > 60:
        return 30
    return 10


def revenue_risk(revenue: RevenueData, products: ProductData) -> int:
    risk = 0
    share = top_product_share(products)
    if share is not None:
        if share > 70:
            risk += 40
        elif share > 50:
            risk += 20

    if revenue.total_revenue > 0:
        recurring = _percent(revenue.recurring_revenue, revenue.total_revenue)
        if recurring < 30:
            risk += 30
        elif recurring < 50:
            risk += 15
    return min(100, risk)


def risk_level(average: float) -> RiskLevel:
    if average < 25:
        return RiskLevel.LOW
    if average < 50:
        return RiskLevel.MEDIUM
    if average < 75:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL


def assess_business_risks(adapter: BaseDataAdapter) -> RiskAssessment:
    """Rate four risk factors 0-100 and derive the overall level from their mean."""
    revenue = adapter.get_revenue_data()
    expenses = adapter.get_expense_data()

    flow = cash_flow_risk(revenue, expenses)
    concentration = customer_concentration_risk(adapter.get_customer_data())
    spend = expense_risk(expenses, revenue)
    income = revenue_risk(revenue, adapter.get_product_data())

    recommendations = []
    if flow > 70:
        recommendations.append(
            "Immediate action needed: improve cash flow through cost reduction or revenue increase"
        )
    if concentration > 60:
        recommendations.append("Diversify customer base to reduce concentration risk")
    if spend > 70:
        recommendations.append("Review and optimize expense structure to improve profitability")
    if income > 60:
        recommendations.append("Diversify revenue streams and increase recurring revenue")

    return RiskAssessment(
        level=risk_level((flow + concentration + spend + income) / 4),
        cash_flow_risk=flow,
        customer_concentration_risk=concentration,
        expense_risk=spend,
        revenue_risk=income,
        recommendations=recommendations,
    )
