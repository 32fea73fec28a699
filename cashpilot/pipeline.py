"""End-to-end analysis: request in, insight report out."""

from datetime import datetime
from typing import Any

from cashpilot.adapters import create_data_adapter
from cashpilot.config import CashPilotConfig
from cashpilot.insights import (
    analyze_data_sources_for_insights,
    analyze_trends,
    assess_business_risks,
    calculate_financial_health_score,
    generate_insights,
)
from cashpilot.logging import get_logger, request_context
from cashpilot.models.financial import (
    AnalysisRequest,
    CashFlowSummary,
    HealthScore,
    InsightReport,
    InsightType,
)
from cashpilot.payload import parse_request
from cashpilot.sinks.serialization import to_dict

logger = get_logger(__name__)


def build_report(request: AnalysisRequest, config: CashPilotConfig | None = None) -> InsightReport:
    """Analyze a typed request.

    Raw Shopify and QuickBooks records are converted and merged into the
    transaction list (ids already present are kept as given) before any
    aggregation runs.

    Parameters
    ----------
    request : AnalysisRequest
        Transactions and optional raw synced records.
    config : CashPilotConfig | None
        Grade scale, churn window and reference date. Defaults apply when
        omitted.

    Returns
    -------
    InsightReport
        Insights, health score, trends, risks, strategy and cash-flow totals.
    """
    config = config or CashPilotConfig()
    adapter = create_data_adapter(
        request.transactions,
        request.shopify_orders,
        request.quickbooks_invoices,
        request.quickbooks_bills,
        config=config.analysis,
    )
    transactions = adapter.get_transactions()

    analysis = generate_insights(transactions, adapter)
    breakdown = calculate_financial_health_score(adapter)
    revenue = adapter.get_revenue_data().total_revenue
    expenses = adapter.get_expense_data().total_expenses

    health_score = HealthScore(
        score=analysis.health_score,
        grade=config.analysis.grade_scale.grade_for(analysis.health_score),
        issues=[
            insight.title
            for insight in analysis.insights
            if insight.type in (InsightType.CRITICAL, InsightType.WARNING)
        ],
        suggestions=list(analysis.recommendations),
        breakdown=breakdown.breakdown,
        factors=breakdown.factors,
        last_updated=datetime.now(),
    )

    logger.info(
        "Report for %d transactions: score %d (%s), %d insights",
        len(transactions),
        health_score.score,
        health_score.grade,
        len(analysis.insights),
    )

    return InsightReport(
        insights=analysis.insights,
        summary=analysis.summary,
        recommendations=analysis.recommendations,
        health_score=health_score,
        data_quality=analysis.data_quality,
        trends=analyze_trends(transactions, adapter),
        risks=assess_business_risks(adapter),
        adaptive_strategy=analyze_data_sources_for_insights(transactions, config.analysis),
        cash_flow=CashFlowSummary(
            total_revenue=revenue,
            total_expenses=expenses,
            net_cash_flow=revenue - expenses,
        ),
        data_sources=analysis.data_sources,
    )


def analyze_payload(body: Any, config: CashPilotConfig | None = None, request_id: str | None = None) -> dict:
    """Parse a JSON request body and return the camelCase response dict.

    Log records emitted along the way carry ``request_id`` (random when
    omitted).

    Raises
    ------
    InvalidPayloadError
        When the body fails validation.
    """
    with request_context(request_id):
        request = parse_request(body)
        return to_dict(build_report(request, config), camel_case=True)
