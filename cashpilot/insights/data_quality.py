"""Per-source data-quality metrics."""

from cashpilot.models.financial import (
    DataQualityAssessment,
    DataSource,
    DataSourceAnalysis,
    Transaction,
    TransactionSource,
)

LOW_QUALITY_THRESHOLD = 70
LOW_COVERAGE_THRESHOLD = 50
MIN_DESCRIPTION_LENGTH = 3

MISSING_DESCRIPTION_WEIGHT = 30
UNCATEGORIZED_WEIGHT = 25
DUPLICATE_WEIGHT = 20

SOURCE_LABELS: dict[TransactionSource, str] = {
    TransactionSource.MANUAL: "Manual Entry",
    TransactionSource.SHOPIFY: "Shopify",
    TransactionSource.QUICKBOOKS: "QuickBooks",
}

STANDING_RECOMMENDATIONS: dict[TransactionSource, str] = {
    TransactionSource.MANUAL: "Record transactions regularly to keep trends accurate",
    TransactionSource.SHOPIFY: "Consider connecting additional Shopify stores for comprehensive data",
    TransactionSource.QUICKBOOKS: "Sync more historical data from QuickBooks for better trend analysis",
}


def has_missing_description(tx: Transaction) -> bool:
    return len(tx.description.strip()) < MIN_DESCRIPTION_LENGTH


def is_uncategorized(tx: Transaction) -> bool:
    category = tx.category.strip()
    return not category or category.lower() == "uncategorized"


def find_duplicate_transactions(transactions: list[Transaction]) -> list[Transaction]:
    """Return every repeat of an earlier (day, amount, description) triple.

    The first occurrence of a triple is not reported.
    """
    seen: set[tuple] = set()
    duplicates = []
    for tx in transactions:
        key = (tx.date.date(), tx.amount, tx.description)
        if key in seen:
            duplicates.append(tx)
        else:
            seen.add(key)
    return duplicates


def calculate_data_quality(transactions: list[Transaction]) -> float:
    """Score a source 0-100 from its missing, uncategorized and duplicate ratios."""
    if not transactions:
        return 0.0
    count = len(transactions)
    missing = sum(1 for tx in transactions if has_missing_description(tx))
    uncategorized = sum(1 for tx in transactions if is_uncategorized(tx))
    duplicates = len(find_duplicate_transactions(transactions))

    score = 100.0
    score -= missing / count * MISSING_DESCRIPTION_WEIGHT
    score -= uncategorized / count * UNCATEGORIZED_WEIGHT
    score -= duplicates / count * DUPLICATE_WEIGHT
    return max(0.0, score)


def calculate_coverage(source_transactions: list[Transaction], all_transactions: list[Transaction]) -> float:
    if not all_transactions:
        return 0.0
    return len(source_transactions) / len(all_transactions) * 100


def calculate_completeness(transactions: list[Transaction]) -> float:
    """Share of transactions with a description, a category and a non-zero amount."""
    if not transactions:
        return 0.0
    incomplete = sum(
        1 for tx in transactions if not tx.description or not tx.category or not tx.amount
    )
    return max(0.0, 100 - incomplete / len(transactions) * 100)


def _issues(transactions: list[Transaction], duplicates: int) -> list[str]:
    issues = []
    missing = sum(1 for tx in transactions if has_missing_description(tx))
    if missing:
        issues.append(f"{missing} transactions have missing or short descriptions")
    uncategorized = sum(1 for tx in transactions if is_uncategorized(tx))
    if uncategorized:
        issues.append(f"{uncategorized} transactions are not categorized")
    if duplicates:
        issues.append(f"{duplicates} transactions look like duplicates")
    return issues


def _recommendations(source: TransactionSource, transactions: list[Transaction], duplicates: int) -> list[str]:
    recommendations = []
    if any(is_uncategorized(tx) for tx in transactions):
        recommendations.append("Categorize uncategorized transactions for better insights")
    if any(has_missing_description(tx) for tx in transactions):
        recommendations.append("Add descriptions to transactions for better tracking")
    if duplicates:
        recommendations.append("Review and remove duplicate transactions")
    recommendations.append(STANDING_RECOMMENDATIONS[source])
    return recommendations


def analyze_data_sources(transactions: list[Transaction]) -> list[DataSourceAnalysis]:
    """Analyze each source present, in manual, Shopify, QuickBooks order."""
    analyses = []
    for source in TransactionSource:
        subset = [tx for tx in transactions if tx.source == source]
        if not subset:
            continue
        duplicates = len(find_duplicate_transactions(subset))
        analyses.append(
            DataSourceAnalysis(
                source=DataSource(source.value),
                label=SOURCE_LABELS[source],
                data_quality=calculate_data_quality(subset),
                coverage=calculate_coverage(subset, transactions),
                completeness=calculate_completeness(subset),
                transaction_count=len(subset),
                duplicate_count=duplicates,
                issues=_issues(subset, duplicates),
                recommendations=_recommendations(source, subset, duplicates),
            )
        )
    return analyses


def assess_overall_data_quality(sources: list[DataSourceAnalysis]) -> DataQualityAssessment:
    """Roll per-source analyses into one score with issues and suggestions."""
    if not sources:
        return DataQualityAssessment(
            score=0,
            issues=["No data sources available"],
            suggestions=["Start by adding some transactions manually or connecting integrations"],
        )

    avg_quality = sum(s.data_quality for s in sources) / len(sources)
    avg_coverage = sum(s.coverage for s in sources) / len(sources)
    issues: list[str] = []
    suggestions: list[str] = []

    if avg_quality < LOW_QUALITY_THRESHOLD:
        issues.append("Overall data quality is below recommended levels")
        suggestions.append("Review and clean your transaction data")
    if avg_coverage < LOW_COVERAGE_THRESHOLD:
        issues.append("Limited data coverage across sources")
        suggestions.append("Connect more data sources or add manual transactions")

    for source in sources:
        if source.issues:
            issues.append(f"{source.label}: {source.issues[0]}")
        if source.recommendations:
            suggestions.append(f"{source.label}: {source.recommendations[0]}")

    return DataQualityAssessment(
        score=round((avg_quality + avg_coverage) / 2),
        issues=issues,
        suggestions=suggestions,
    )
