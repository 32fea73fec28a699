"""Health, trend, risk and strategy results returned to callers."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from cashpilot.models.financial.enums import (
    ConfidenceLevel,
    DataSource,
    RiskLevel,
    TrendDirection,
)
from cashpilot.models.financial.insight import (
    DataQualityAssessment,
    DataSourceAnalysis,
    Insight,
    InsightSummary,
)


@dataclass
class HealthBreakdown:
    """Per-area scores (0-100) and their weighted overall."""

    overall: int
    revenue: int
    expenses: int
    cash_flow: int
    customers: int
    operations: int


@dataclass
class HealthFactors:
    """Narrative factors behind the health breakdown."""

    positive: list[str] = field(default_factory=list)
    negative: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass
class HealthScore:
    """Additive 0-100 health score with its letter grade."""

    score: int
    grade: str
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    breakdown: HealthBreakdown | None = None
    factors: HealthFactors | None = None
    last_updated: datetime | None = None


@dataclass
class FinancialHealthScore:
    """Weighted category scoring of the summary views."""

    breakdown: HealthBreakdown
    factors: HealthFactors
    last_updated: datetime


@dataclass
class TrendAnalysis:
    """Direction of the main series over the last six periods."""

    period: str
    revenue: TrendDirection
    expenses: TrendDirection
    cash_flow: TrendDirection
    customers: TrendDirection
    confidence: int
    insights: list[str] = field(default_factory=list)


@dataclass
class RiskAssessment:
    """Risk factors (0-100) and the overall level."""

    level: RiskLevel
    cash_flow_risk: int
    customer_concentration_risk: int
    expense_risk: int
    revenue_risk: int
    recommendations: list[str] = field(default_factory=list)


@dataclass
class DataSourceProfile:
    """Strengths and weaknesses of one source for insight generation."""

    source: DataSource
    data_quality: float
    coverage: float
    completeness: float
    recency: float
    accuracy: float
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass
class AdaptiveInsightStrategy:
    """Which sources to trust and what insights they can support."""

    primary_source: DataSource
    secondary_sources: list[DataSource]
    insight_types: list[str]
    confidence_level: ConfidenceLevel
    limitations: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    profiles: list[DataSourceProfile] = field(default_factory=list)


@dataclass
class CashFlowSummary:
    """Revenue, expenses and their difference."""

    total_revenue: Decimal
    total_expenses: Decimal
    net_cash_flow: Decimal


@dataclass
class InsightReport:
    """Full response for one analysis request."""

    insights: list[Insight]
    summary: InsightSummary
    recommendations: list[str]
    health_score: HealthScore
    data_quality: DataQualityAssessment
    trends: TrendAnalysis
    risks: RiskAssessment
    adaptive_strategy: AdaptiveInsightStrategy
    cash_flow: CashFlowSummary
    data_sources: list[DataSourceAnalysis] = field(default_factory=list)
