import csv
import io
import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from cipherchain.cipher.registry import EngineRegistry
from cipherchain.cipher.tables import INV_SBOX, SBOX
from cipherchain.evaluation import (
    CSV_COLUMNS,
    TEST_CASES,
    CatalogCase,
    EvaluationReport,
    analyze_tables,
    ddt,
    run_all_engines,
    run_catalog,
    run_roundtrip_tests,
)
from cipherchain.utils.repro import make_report_paths, read_json, write_json


@pytest.fixture
def registry():
    return EngineRegistry(block_mode="codebook")


# ---------------------------------------------------------------------------
# Acceptance catalog
# ---------------------------------------------------------------------------

def test_catalog_ids_are_unique_and_grouped():
    ids = [c.id for c in TEST_CASES]
    assert len(ids) == len(set(ids))
    assert {i.split("-")[0] for i in ids} == {"TAES", "TAUT", "TVIG", "TPIP"}


def test_catalog_passes():
    run = run_catalog()
    failing = [(o.case.id, o.message) for o in run.outcomes if not o.passed]
    assert failing == []
    assert run.total == len(TEST_CASES)
    assert run.summary() == {"total": run.total, "passed": run.total, "failed": 0}


def test_catalog_counts_exceptions_as_failures():
    def boom():
        raise RuntimeError("kaput")

    broken = CatalogCase(
        id="TX-001", name="broken", scenario="s", precondition="p",
        postcondition="q", priority="Low", comments="", execute=boom,
    )
    run = run_catalog([broken])
    assert run.failed == 1
    assert run.outcomes[0].status == "FAIL"
    assert "kaput" in run.outcomes[0].message


# ---------------------------------------------------------------------------
# Roundtrip vectors
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("stage_type", ["block", "running-key", "repeating-key"])
def test_roundtrip_is_perfect(stage_type, registry):
    result = run_roundtrip_tests(stage_type, num_vectors=40, seed=7, registry=registry)
    assert result.failures == []
    assert result.is_perfect
    assert result.passed == 40
    assert result.success_rate == 1.0


def test_single_block_mode_roundtrip_expects_truncation():
    result = run_roundtrip_tests("block", num_vectors=40, seed=3, registry=EngineRegistry(block_mode="single"))
    assert result.is_perfect


def test_roundtrip_is_reproducible(registry):
    a = run_roundtrip_tests("block", num_vectors=5, seed=99, registry=registry)
    b = run_roundtrip_tests("block", num_vectors=5, seed=99, registry=registry)
    assert (a.passed, a.failed, a.seed) == (b.passed, b.failed, b.seed)


def test_run_all_engines_covers_registry(registry):
    seen = []
    results = run_all_engines(
        num_vectors=5, seed=1, registry=registry,
        progress_callback=lambda t, i, n: seen.append((t, i, n)),
    )
    assert [r.stage_type for r in results] == ["block", "repeating-key", "running-key"]
    assert len(seen) == 3
    assert all(r.is_perfect for r in results)


# ---------------------------------------------------------------------------
# Table analysis
# ---------------------------------------------------------------------------

def test_substitution_tables_are_sound():
    result = analyze_tables()
    assert result.table_size == 256
    assert result.is_bijective
    assert result.inverse_consistent
    assert result.fixed_points == 0
    assert result.ddt_max == 4
    assert result.differential_uniformity == "good"


def test_ddt_rows_sum_to_table_size():
    table = ddt(SBOX)
    assert table.shape == (256, 256)
    assert table[0, 0] == 256
    assert all(int(row.sum()) == 256 for row in table)


def test_analysis_flags_broken_inverse():
    broken = list(INV_SBOX)
    broken[0], broken[1] = broken[1], broken[0]
    result = analyze_tables(SBOX, broken)
    assert result.is_bijective
    assert not result.inverse_consistent


def test_identity_table_is_poor():
    identity = list(range(256))
    result = analyze_tables(identity, identity)
    assert result.fixed_points == 256
    assert result.differential_uniformity == "poor"


# ---------------------------------------------------------------------------
# Report export
# ---------------------------------------------------------------------------

@pytest.fixture
def report(registry):
    return EvaluationReport(
        catalog=run_catalog(),
        roundtrip_results=run_all_engines(num_vectors=5, registry=registry),
        table_analysis=analyze_tables(),
    )


def test_report_summary_dict(report):
    data = report.to_dict()
    assert data["summary"]["all_passed"] is True
    assert data["summary"]["failing_cases"] == []
    assert data["summary"]["failed"] == 0
    assert len(data["catalog"]) == len(TEST_CASES)
    assert data["tables"]["ddt_max"] == 4


def test_report_csv_layout(report):
    rows = list(csv.reader(io.StringIO(report.to_csv())))
    assert rows[0] == CSV_COLUMNS
    assert len(rows) == len(TEST_CASES) + 1
    assert rows[1][0] == "1"
    assert rows[1][1] == TEST_CASES[0].id
    assert {r[6] for r in rows[1:]} == {"PASS"}


def test_report_html_escapes_and_lists_cases(report):
    page = report.to_html()
    assert page.startswith("<!DOCTYPE html>")
    assert TEST_CASES[0].id in page
    assert f"Total Tests: {len(TEST_CASES)}" in page


def test_report_text_summary(report):
    text = report.to_summary()
    assert "Evaluation Report" in text
    assert "Roundtrip: 3/3 engines pass" in text


def test_report_files_roundtrip(report, tmp_path):
    paths = make_report_paths(tmp_path / "reports")
    assert paths.report_dir.is_dir()
    assert paths.csv.name == "encryption-test-report.csv"
    write_json(paths.json, report.to_dict())
    assert read_json(paths.json)["summary"]["all_passed"] is True
