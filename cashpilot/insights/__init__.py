"""Insight generation, health scoring and data-source strategy."""

from cashpilot.insights.data_quality import (
    analyze_data_sources,
    assess_overall_data_quality,
    calculate_data_quality,
    find_duplicate_transactions,
)
from cashpilot.insights.engine import (
    calculate_health_score,
    generate_insights,
    generate_recommendations,
)
from cashpilot.insights.scoring import (
    analyze_trends,
    assess_business_risks,
    calculate_financial_health_score,
)
from cashpilot.insights.strategy import analyze_data_sources_for_insights

__all__ = [
    "analyze_data_sources",
    "analyze_data_sources_for_insights",
    "analyze_trends",
    "assess_business_risks",
    "assess_overall_data_quality",
    "calculate_data_quality",
    "calculate_financial_health_score",
    "calculate_health_score",
    "find_duplicate_transactions",
    "generate_insights",
    "generate_recommendations",
]
