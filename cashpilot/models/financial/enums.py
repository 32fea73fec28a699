"""Enumeration types for financial domain entities."""

from enum import Enum


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class TransactionSource(str, Enum):
    MANUAL = "manual"
    SHOPIFY = "shopify"
    QUICKBOOKS = "quickbooks"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DataSource(str, Enum):
    MANUAL = "manual"
    SHOPIFY = "shopify"
    QUICKBOOKS = "quickbooks"
    COMBINED = "combined"


class ShopifyFinancialStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


class InsightType(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"
    CRITICAL = "critical"
    OPPORTUNITY = "opportunity"
    TREND = "trend"


class InsightImpact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class InsightCategory(str, Enum):
    REVENUE = "revenue"
    EXPENSES = "expenses"
    CASH_FLOW = "cash-flow"
    CUSTOMERS = "customers"
    OPERATIONS = "operations"
    GROWTH = "growth"


class TrendDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EditOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
