"""Tests for shared serialization utilities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

import pytest

from cashpilot.models.financial import InsightType, TrendDirection
from cashpilot.sinks.serialization import camelize, dataclass_to_dict, serialize_value, to_dict


@dataclass
class _SampleSummary:
    total_revenue: Decimal
    revenue_by_period: dict[str, Decimal] = field(default_factory=dict)
    last_updated: datetime | None = None


@dataclass
class _SampleReport:
    health_score: int
    revenue_trend: TrendDirection
    summary: _SampleSummary


class TestCamelize:
    """Tests for camelize."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("score", "score"),
            ("health_score", "healthScore"),
            ("customer_concentration_risk", "customerConcentrationRisk"),
        ],
    )
    def test_camelize(self, name: str, expected: str) -> None:
        assert camelize(name) == expected


class TestToDict:
    """Tests for to_dict function."""

    def test_dataclass(self) -> None:
        obj = _SampleSummary(total_revenue=Decimal("100.50"), last_updated=datetime(2024, 1, 1))
        result = to_dict(obj)
        assert result == {"total_revenue": 100.5, "revenue_by_period": {}, "last_updated": "2024-01-01T00:00:00"}

    def test_dict_passthrough(self) -> None:
        d = {"key": "value"}
        assert to_dict(d) == d

    def test_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}

    def test_camel_case_renames_fields_only(self) -> None:
        """Dict keys are data (periods, categories) and keep their spelling."""
        report = _SampleReport(
            health_score=85,
            revenue_trend=TrendDirection.INCREASING,
            summary=_SampleSummary(
                total_revenue=Decimal("10"),
                revenue_by_period={"2024-01": Decimal("4"), "client_services": Decimal("6")},
            ),
        )

        result = dataclass_to_dict(report, camel_case=True)

        assert result == {
            "healthScore": 85,
            "revenueTrend": "increasing",
            "summary": {
                "totalRevenue": 10.0,
                "revenueByPeriod": {"2024-01": 4.0, "client_services": 6.0},
                "lastUpdated": None,
            },
        }


class TestSerializeValue:
    """Tests for serialize_value."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("1300.25"), 1300.25),
            (InsightType.CRITICAL, "critical"),
            (datetime(2024, 6, 1, 9, 30), "2024-06-01T09:30:00"),
            (date(2024, 6, 1), "2024-06-01"),
            (("a", Decimal("1")), ["a", 1.0]),
            (None, None),
            ("plain", "plain"),
        ],
    )
    def test_scalars(self, value: object, expected: object) -> None:
        assert serialize_value(value) == expected

    def test_nested_lists_of_dataclasses(self) -> None:
        result = serialize_value([_SampleSummary(total_revenue=Decimal("5"))], camel_case=True)
        assert result == [{"totalRevenue": 5.0, "revenueByPeriod": {}, "lastUpdated": None}]
