"""Structured evaluation report builder.

Aggregates the acceptance catalog run, randomized roundtrip results and the
substitution-table analysis into one serializable report, exportable as
JSON, CSV or HTML.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import csv
import html
import io
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .catalog import CatalogRun
from .roundtrip import RoundtripResult
from .table_analysis import TableAnalysisResult

CSV_COLUMNS = [
    "No.", "TC ID", "TEST SCENARIO", "PRE CONDITION", "POST CONDITION",
    "PRIORITY", "STATUS", "COMMENTS",
]


@dataclass
class EvaluationReport:
    """Complete evaluation report aggregating all analysis results."""
    timestamp: str = ""
    catalog: CatalogRun = field(default_factory=CatalogRun)
    roundtrip_results: List[RoundtripResult] = field(default_factory=list)
    table_analysis: Optional[TableAnalysisResult] = None

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    @property
    def all_passed(self) -> bool:
        tables_ok = self.table_analysis is None or (
            self.table_analysis.is_bijective and self.table_analysis.inverse_consistent
        )
        return (
            self.catalog.failed == 0
            and all(r.is_perfect for r in self.roundtrip_results)
            and tables_ok
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "catalog": [o.to_dict() for o in self.catalog.outcomes],
            "roundtrip": [r.to_dict() for r in self.roundtrip_results],
            "tables": self.table_analysis.to_dict() if self.table_analysis else None,
            "summary": {
                **self.catalog.summary(),
                "roundtrip_all_pass": all(r.is_perfect for r in self.roundtrip_results),
                "failing_cases": self.failing_cases(),
                "all_passed": self.all_passed,
            },
        }

    def to_summary(self) -> str:
        """Human-readable summary for console output."""
        lines = [f"Evaluation Report - {self.timestamp}", "=" * 50]

        summary = self.catalog.summary()
        lines.append(
            f"\nTest cases: {summary['passed']}/{summary['total']} passed"
        )
        for i, o in enumerate(self.catalog.outcomes, start=1):
            lines.append(f"  {i}. [{o.status}] {o.case.id} - {o.case.name}")
            if not o.passed:
                lines.append(f"     Error: {o.message}")

        if self.roundtrip_results:
            rt_pass = sum(1 for r in self.roundtrip_results if r.is_perfect)
            lines.append(f"\nRoundtrip: {rt_pass}/{len(self.roundtrip_results)} engines pass")
            for r in self.roundtrip_results:
                lines.append(f"  {r.summary()}")

        if self.table_analysis:
            lines.append(f"\nTables: {self.table_analysis.summary()}")

        return "\n".join(lines)

    def failing_cases(self) -> List[str]:
        return [o.case.id for o in self.catalog.outcomes if not o.passed]

    def to_csv(self) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        for i, o in enumerate(self.catalog.outcomes, start=1):
            writer.writerow([
                i,
                o.case.id,
                o.case.scenario,
                o.case.precondition,
                o.case.postcondition,
                o.case.priority,
                o.status,
                o.comments,
            ])
        return buf.getvalue()

    def to_html(self) -> str:
        summary = self.catalog.summary()
        rows = []
        for i, o in enumerate(self.catalog.outcomes, start=1):
            cells = [
                str(i), o.case.id, o.case.scenario, o.case.precondition,
                o.case.postcondition, o.case.priority,
            ]
            tds = "".join(f"<td>{html.escape(c)}</td>" for c in cells)
            status_class = "pass" if o.passed else "fail"
            rows.append(
                f"<tr>{tds}<td class=\"{status_class}\">{o.status}</td>"
                f"<td>{html.escape(o.comments)}</td></tr>"
            )
        header = "".join(f"<th>{html.escape(c)}</th>" for c in CSV_COLUMNS)

        return "\n".join([
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            "<title>Encryption Algorithm Test Report</title>",
            "<style>",
            "body { font-family: Arial, sans-serif; margin: 20px; }",
            "table { border-collapse: collapse; width: 100%; margin-top: 20px; }",
            "th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }",
            "th { background-color: #4CAF50; color: white; }",
            ".pass { color: green; font-weight: bold; }",
            ".fail { color: red; font-weight: bold; }",
            "</style>",
            "</head>",
            "<body>",
            "<h1>Encryption Algorithm Test Report</h1>",
            f"<p>Generated: {html.escape(self.timestamp)}</p>",
            f"<p>Total Tests: {summary['total']}</p>",
            f"<p>Passed: <span class=\"pass\">{summary['passed']}</span></p>",
            f"<p>Failed: <span class=\"fail\">{summary['failed']}</span></p>",
            f"<table><tr>{header}</tr>",
            *rows,
            "</table>",
            "</body>",
            "</html>",
        ])
