"""Insight records and the analysis that groups them."""

from dataclasses import dataclass, field
from datetime import datetime

from cashpilot.models.financial.enums import (
    DataSource,
    InsightCategory,
    InsightImpact,
    InsightType,
)


@dataclass
class Insight:
    """Generated advisory record."""

    id: str
    type: InsightType
    title: str
    description: str
    impact: InsightImpact
    category: InsightCategory
    actionable: bool
    confidence: int  # 0-100
    created_at: datetime
    action_items: list[str] = field(default_factory=list)
    data: dict | None = None


@dataclass
class DataSourceAnalysis:
    """Data-quality metrics for the transactions of one source."""

    source: DataSource
    label: str
    data_quality: float
    coverage: float
    completeness: float
    transaction_count: int
    duplicate_count: int = 0
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass
class DataQualityAssessment:
    """Overall data quality across sources."""

    score: int
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


@dataclass
class InsightSummary:
    """Insight counts by type."""

    total_insights: int = 0
    positive_insights: int = 0
    warning_insights: int = 0
    critical_insights: int = 0
    opportunities: int = 0


@dataclass
class InsightAnalysis:
    """Everything the insight engine derives from one request."""

    insights: list[Insight]
    summary: InsightSummary
    recommendations: list[str]
    health_score: int
    data_quality: DataQualityAssessment
    data_sources: list[DataSourceAnalysis] = field(default_factory=list)
