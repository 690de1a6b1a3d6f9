"""Deterministic evaluation: acceptance catalog, roundtrip and table analysis.

Research / education only. Do NOT use in production.
"""

from .catalog import CaseOutcome, CatalogCase, CatalogRun, TEST_CASES, run_catalog
from .report import CSV_COLUMNS, EvaluationReport
from .roundtrip import RoundtripFailure, RoundtripResult, run_all_engines, run_roundtrip_tests
from .table_analysis import TableAnalysisResult, analyze_tables, ddt

__all__ = [
    "CaseOutcome",
    "CatalogCase",
    "CatalogRun",
    "TEST_CASES",
    "run_catalog",
    "CSV_COLUMNS",
    "EvaluationReport",
    "RoundtripFailure",
    "RoundtripResult",
    "run_all_engines",
    "run_roundtrip_tests",
    "TableAnalysisResult",
    "analyze_tables",
    "ddt",
]
