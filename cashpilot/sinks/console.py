"""Console sink for debugging and development."""

import json
from typing import Any

from cashpilot.models.financial import InsightReport
from cashpilot.sinks.serialization import to_dict

RULE = "=" * 60


class ConsoleSink:
    """Print records and reports to stdout.

    Parameters
    ----------
    pretty : bool
        Indent JSON output.
    max_records : int | None
        Records shown per batch, ``None`` shows all.
    camel_case : bool
        Emit camelCase field names.
    readable_reports : bool
        Print an :class:`InsightReport` as a short text summary instead of
        JSON.
    """

    def __init__(
        self,
        pretty: bool = True,
        max_records: int | None = None,
        camel_case: bool = False,
        readable_reports: bool = False,
    ) -> None:
        self.pretty = pretty
        self.max_records = max_records
        self.camel_case = camel_case
        self.readable_reports = readable_reports
        self._written: dict[str, int] = {}

    @staticmethod
    def _banner(title: str) -> None:
        print(f"\n{RULE}\n{title}\n{RULE}")

    def _json(self, obj: Any) -> str:
        return json.dumps(
            to_dict(obj, self.camel_case),
            indent=2 if self.pretty else None,
            ensure_ascii=False,
            default=str,
        )

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Print a batch, truncated to ``max_records``."""
        self._banner(f"Entity: {entity_type} ({len(records)} records)")

        shown = records[: self.max_records] if self.max_records else records
        for record in shown:
            print(self._json(record))
        if len(shown) < len(records):
            print(f"... and {len(records) - len(shown)} more records")

        self._written[entity_type] = self._written.get(entity_type, 0) + len(records)

    def write_document(self, name: str, document: Any) -> None:
        """Print a single object, such as an insight report."""
        self._banner(f"Document: {name}")
        if self.readable_reports and isinstance(document, InsightReport):
            print(render_report(document))
        else:
            print(self._json(document))
        self._written[name] = self._written.get(name, 0) + 1

    def close(self) -> None:
        """Print how much was written."""
        self._banner("Console Sink Summary")
        for entity_type, count in self._written.items():
            print(f"  {entity_type}: {count} records")


def render_report(report: InsightReport) -> str:
    """Plain-text summary of a report: score, cash flow, insights, next steps."""
    health = report.health_score
    cash = report.cash_flow
    lines = [
        f"Health score: {health.score}/100 ({health.grade})",
        f"Revenue ${cash.total_revenue:,.2f} | Expenses ${cash.total_expenses:,.2f} | Net ${cash.net_cash_flow:,.2f}",
        f"Data quality: {report.data_quality.score}/100",
    ]
    if report.insights:
        lines.append("Insights:")
        lines.extend(f"  [{i.type.value}] {i.title}: {i.description}" for i in report.insights)
    if report.recommendations:
        lines.append("Recommendations:")
        lines.extend(f"  - {r}" for r in report.recommendations)
    return "\n".join(lines)
