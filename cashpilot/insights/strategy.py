"""Choosing which data source to trust for insight generation."""

from datetime import date

from cashpilot.config import AnalysisConfig
from cashpilot.insights.data_quality import analyze_data_sources, has_missing_description, is_uncategorized
from cashpilot.models.financial import (
    AdaptiveInsightStrategy,
    ConfidenceLevel,
    DataSource,
    DataSourceAnalysis,
    DataSourceProfile,
    Transaction,
)

RECENT_DAYS = 30
MAX_PLAUSIBLE_AMOUNT = 1_000_000

BASE_INSIGHT_TYPES = ["cash-flow-analysis", "basic-financial-metrics"]

SOURCE_INSIGHT_TYPES: dict[DataSource, list[str]] = {
    DataSource.MANUAL: ["custom-analysis", "flexible-reporting", "manual-tracking"],
    DataSource.SHOPIFY: [
        "e-commerce-performance",
        "customer-behavior",
        "product-analytics",
        "sales-trends",
        "inventory-insights",
    ],
    DataSource.QUICKBOOKS: [
        "accounting-insights",
        "expense-analysis",
        "tax-planning",
        "financial-reporting",
        "compliance-monitoring",
    ],
}

SOURCE_STRENGTHS: dict[DataSource, list[str]] = {
    DataSource.SHOPIFY: [
        "Automated data collection",
        "Real-time sales data",
        "Customer information included",
        "Consistent data format",
    ],
    DataSource.QUICKBOOKS: [
        "Professional accounting data",
        "Comprehensive expense tracking",
        "Tax-ready information",
        "High data accuracy",
    ],
}

SOURCE_WEAKNESSES: dict[DataSource, list[str]] = {
    DataSource.SHOPIFY: [
        "Limited to e-commerce activities",
        "No expense tracking",
        "May miss cash transactions",
    ],
    DataSource.QUICKBOOKS: [
        "Limited real-time updates",
        "Accounting-focused view",
        "May miss operational insights",
    ],
}

SOURCE_LIMITATIONS: dict[DataSource, list[str]] = {
    DataSource.MANUAL: [
        "Manual data entry may have inconsistencies",
        "Limited historical data available",
    ],
    DataSource.SHOPIFY: [
        "E-commerce focused - may miss other business activities",
        "Limited expense tracking capabilities",
    ],
    DataSource.QUICKBOOKS: [
        "Accounting focused - may miss operational insights",
        "Limited real-time data availability",
    ],
}

NEXT_STEPS: dict[DataSource, list[str]] = {
    DataSource.MANUAL: [
        "Consider connecting Shopify for e-commerce insights",
        "Connect QuickBooks for comprehensive accounting data",
    ],
    DataSource.SHOPIFY: [
        "Add manual transactions for non-e-commerce activities",
        "Connect QuickBooks for expense tracking and accounting",
    ],
    DataSource.QUICKBOOKS: [
        "Connect Shopify for e-commerce sales data",
        "Add manual transactions for cash transactions",
    ],
}


def calculate_recency(transactions: list[Transaction], reference: date) -> float:
    """Percent of transactions dated within 30 days before ``reference``."""
    if not transactions:
        return 0.0
    recent = sum(1 for tx in transactions if 0 <= (reference - tx.date.date()).days <= RECENT_DAYS)
    return recent / len(transactions) * 100


def calculate_accuracy(transactions: list[Transaction], reference: date) -> float:
    """Percent of transactions without an obvious error.

    Zero amounts, implausibly large amounts and future dates count as errors.
    """
    if not transactions:
        return 0.0
    errors = sum(
        1
        for tx in transactions
        if tx.amount == 0 or tx.magnitude > MAX_PLAUSIBLE_AMOUNT or tx.date.date() > reference
    )
    return max(0.0, 100 - errors / len(transactions) * 100)


def _manual_strengths(transactions: list[Transaction]) -> list[str]:
    strengths = []
    if len(transactions) > 50:
        strengths.append("Comprehensive transaction history")
    categorized = sum(1 for tx in transactions if not is_uncategorized(tx))
    if categorized / len(transactions) > 0.8:
        strengths.append("Well-categorized transactions")
    return strengths


def _manual_weaknesses(transactions: list[Transaction]) -> list[str]:
    weaknesses = []
    uncategorized = sum(1 for tx in transactions if is_uncategorized(tx))
    if uncategorized:
        weaknesses.append(f"{uncategorized} uncategorized transactions")
    poor = sum(1 for tx in transactions if has_missing_description(tx))
    if poor:
        weaknesses.append(f"{poor} transactions with poor descriptions")
    return weaknesses


def build_profile(
    analysis: DataSourceAnalysis,
    transactions: list[Transaction],
    reference: date,
) -> DataSourceProfile:
    """Extend a source's quality analysis with recency, accuracy and traits."""
    subset = [tx for tx in transactions if tx.source.value == analysis.source.value]
    if analysis.source == DataSource.MANUAL:
        strengths = _manual_strengths(subset)
        weaknesses = _manual_weaknesses(subset)
    else:
        strengths = list(SOURCE_STRENGTHS.get(analysis.source, []))
        weaknesses = list(SOURCE_WEAKNESSES.get(analysis.source, []))

    return DataSourceProfile(
        source=analysis.source,
        data_quality=analysis.data_quality,
        coverage=analysis.coverage,
        completeness=analysis.completeness,
        recency=calculate_recency(subset, reference),
        accuracy=calculate_accuracy(subset, reference),
        strengths=strengths,
        weaknesses=weaknesses,
        recommendations=list(analysis.recommendations),
    )


def determine_primary_source(profiles: list[DataSourceProfile]) -> DataSource:
    """Highest of 0.4 quality + 0.3 coverage + 0.3 completeness, manual when empty."""
    if not profiles:
        return DataSource.MANUAL
    best = profiles[0]
    best_score = None
    for profile in profiles:
        score = profile.data_quality * 0.4 + profile.coverage * 0.3 + profile.completeness * 0.3
        if best_score is None or score > best_score:
            best, best_score = profile, score
    return best.source


def calculate_confidence_level(profiles: list[DataSourceProfile]) -> ConfidenceLevel:
    if not profiles:
        return ConfidenceLevel.LOW
    avg_quality = sum(p.data_quality for p in profiles) / len(profiles)
    avg_coverage = sum(p.coverage for p in profiles) / len(profiles)
    overall = (avg_quality + avg_coverage) / 2
    if overall >= 80:
        return ConfidenceLevel.HIGH
    if overall >= 60:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def identify_limitations(primary: DataSourceProfile | None) -> list[str]:
    if primary is None:
        return ["No primary data source available"]
    limitations = []
    if primary.coverage < 50:
        limitations.append(f"Limited data coverage ({primary.coverage:.1f}%)")
    if primary.data_quality < 70:
        limitations.append("Data quality issues may affect insight accuracy")
    if primary.completeness < 80:
        limitations.append("Incomplete data may limit analysis depth")
    limitations.extend(SOURCE_LIMITATIONS.get(primary.source, []))
    return limitations


def adaptive_recommendations(primary: DataSourceProfile | None) -> list[str]:
    if primary is None:
        return ["Start by adding some transactions manually"]
    recommendations = []
    if primary.data_quality < 80:
        recommendations.extend(primary.recommendations)
    if primary.coverage < 70:
        recommendations.append("Connect additional data sources for comprehensive insights")
    recommendations.extend(NEXT_STEPS.get(primary.source, []))
    return recommendations


def analyze_data_sources_for_insights(
    transactions: list[Transaction],
    config: AnalysisConfig | None = None,
) -> AdaptiveInsightStrategy:
    """Profile every source and pick the strategy for insight generation.

    Parameters
    ----------
    transactions : list[Transaction]
        Full transaction set.
    config : AnalysisConfig | None
        Supplies the reference date for recency and accuracy.

    Returns
    -------
    AdaptiveInsightStrategy
        Primary and secondary sources, the insight types the primary source
        supports, a confidence level, limitations and recommendations.
    """
    reference = (config or AnalysisConfig()).reference_date()
    profiles = [build_profile(a, transactions, reference) for a in analyze_data_sources(transactions)]
    primary_source = determine_primary_source(profiles)
    primary = next((p for p in profiles if p.source == primary_source), None)

    return AdaptiveInsightStrategy(
        primary_source=primary_source,
        secondary_sources=[p.source for p in profiles if p.source != primary_source],
        insight_types=BASE_INSIGHT_TYPES + SOURCE_INSIGHT_TYPES.get(primary_source, []),
        confidence_level=calculate_confidence_level(profiles),
        limitations=identify_limitations(primary),
        recommendations=adaptive_recommendations(primary),
        profiles=profiles,
    )
