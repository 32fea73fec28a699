"""Financial domain models."""

from cashpilot.models.financial.enums import (
    ConfidenceLevel,
    DataSource,
    EditOperation,
    InsightCategory,
    InsightImpact,
    InsightType,
    RiskLevel,
    ShopifyFinancialStatus,
    TransactionSource,
    TransactionStatus,
    TransactionType,
    TrendDirection,
)
from cashpilot.models.financial.external import (
    QuickBooksBill,
    QuickBooksInvoice,
    QuickBooksLine,
    ShopifyCustomer,
    ShopifyLineItem,
    ShopifyOrder,
)
from cashpilot.models.financial.insight import (
    DataQualityAssessment,
    DataSourceAnalysis,
    Insight,
    InsightAnalysis,
    InsightSummary,
)
from cashpilot.models.financial.report import (
    AdaptiveInsightStrategy,
    CashFlowSummary,
    DataSourceProfile,
    FinancialHealthScore,
    HealthBreakdown,
    HealthFactors,
    HealthScore,
    InsightReport,
    RiskAssessment,
    TrendAnalysis,
)
from cashpilot.models.financial.request import AnalysisRequest
from cashpilot.models.financial.summaries import (
    CustomerData,
    ExpenseData,
    ProductData,
    ProductSales,
    RevenueData,
)
from cashpilot.models.financial.transaction import Transaction

__all__ = [
    "AnalysisRequest",
    "AdaptiveInsightStrategy",
    "CashFlowSummary",
    "ConfidenceLevel",
    "CustomerData",
    "DataQualityAssessment",
    "DataSource",
    "DataSourceAnalysis",
    "DataSourceProfile",
    "EditOperation",
    "ExpenseData",
    "FinancialHealthScore",
    "HealthBreakdown",
    "HealthFactors",
    "HealthScore",
    "Insight",
    "InsightAnalysis",
    "InsightCategory",
    "InsightImpact",
    "InsightReport",
    "InsightSummary",
    "InsightType",
    "ProductData",
    "ProductSales",
    "QuickBooksBill",
    "QuickBooksInvoice",
    "QuickBooksLine",
    "RevenueData",
    "RiskAssessment",
    "RiskLevel",
    "ShopifyCustomer",
    "ShopifyFinancialStatus",
    "ShopifyLineItem",
    "ShopifyOrder",
    "Transaction",
    "TransactionSource",
    "TransactionStatus",
    "TransactionType",
    "TrendAnalysis",
]
