"""Tests for JSON report generation."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Add scripts directory to path
SCRIPTS_DIR = str(Path(__file__).resolve().parent.parent.parent / "scripts")
if SCRIPTS_DIR not in sys.path:
    sys.path.insert(0, SCRIPTS_DIR)

PROJECT_ROOT = str(Path(__file__).resolve().parent.parent.parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from analysis.set_comparison import compute_intersection_lattice  # noqa: E402
from analysis.truth_validation import validate_private_calls  # noqa: E402
from models.truth import TruthMutation  # noqa: E402
from reporting.json_report import (  # noqa: E402
    REPORT_VERSION,
    compute_report_checksum,
    generate_json_report,
    serialize_report,
)

CALLERS = ["bcftools", "haplotypecaller", "freebayes"]


@pytest.fixture
def lattice():
    return compute_intersection_lattice({
        "bcftools": ["1_100_A_G", "1_300_C_T"],
        "haplotypecaller": ["1_300_C_T"],
        "freebayes": ["1_300_C_T", "1_500_T_C"],
    })


@pytest.fixture
def truth_results():
    truth = [TruthMutation(100, "A", "G"), TruthMutation(500, "T", "A")]
    return {
        "bcftools": validate_private_calls(["1_100_A_G"], truth, caller="bcftools"),
        "haplotypecaller": validate_private_calls([], truth, caller="haplotypecaller"),
        "freebayes": validate_private_calls(["1_500_T_C"], truth, caller="freebayes"),
    }


class TestGenerateJsonReport:
    def test_metadata(self, lattice):
        report = generate_json_report("SIM01", CALLERS, comparisons={"all": lattice})
        assert report["report_type"] == "caller_overlap"
        assert report["report_version"] == REPORT_VERSION
        assert report["sample"] == "SIM01"
        assert report["callers"] == CALLERS
        assert "generated_at" in report

    def test_lattice_formatting(self, lattice):
        report = generate_json_report("SIM01", CALLERS, comparisons={"all": lattice})
        all_scope = report["comparisons"]["all"]
        assert all_scope["status"] == "ok"
        assert all_scope["total"] == 3
        assert all_scope["set_sizes"] == {"bcftools": 2, "haplotypecaller": 1, "freebayes": 2}
        assert sum(g["count"] for g in all_scope["groups"]) == 3
        shared = [g for g in all_scope["groups"] if g["degree"] == 3]
        assert shared[0]["callers"] == CALLERS
        assert shared[0]["membership"] == [True, True, True]
        assert shared[0]["vids"] == ["1_300_C_T"]
        only_fb = [g for g in all_scope["groups"] if g["callers"] == ["freebayes"]]
        assert only_fb[0]["vids"] == ["1_500_T_C"]

    def test_no_data_scope(self):
        report = generate_json_report("SIM01", CALLERS, comparisons={"complex": None})
        assert report["comparisons"]["complex"] == {
            "status": "no_data", "total": None, "groups": [],
        }

    def test_truth_validation_statuses(self, truth_results):
        report = generate_json_report(
            "SIM01", CALLERS, truth_validation=truth_results, truth_log="truth.tsv",
        )
        tv = report["truth_validation"]
        assert tv["bcftools"]["status"] == "evaluated"
        assert tv["bcftools"]["percentage"] == 100.0
        assert tv["bcftools"]["join_policy"] == "position_only"
        assert tv["freebayes"]["percentage"] == 0.0
        assert tv["haplotypecaller"]["status"] == "not_applicable"
        assert tv["haplotypecaller"]["percentage"] is None

    def test_truth_not_configured(self):
        report = generate_json_report("SIM01", CALLERS)
        for caller in CALLERS:
            assert report["truth_validation"][caller]["status"] == "not_configured"


class TestSerializeReport:
    def test_valid_json_without_nan(self, lattice, truth_results):
        report = generate_json_report(
            "SIM01", CALLERS,
            comparisons={"all": lattice, "complex": None},
            truth_validation=truth_results,
            truth_log="truth.tsv",
        )
        parsed = json.loads(serialize_report(report))
        assert parsed["sample"] == "SIM01"
        assert parsed["truth_validation"]["haplotypecaller"]["percentage"] is None

    def test_rejects_nan(self):
        with pytest.raises(ValueError):
            serialize_report({"x": float("nan")})


class TestComputeReportChecksum:
    def test_deterministic(self):
        json_str = '{"a": 1}'
        assert compute_report_checksum(json_str) == compute_report_checksum(json_str)

    def test_different_content(self):
        assert compute_report_checksum('{"a": 1}') != compute_report_checksum('{"b": 2}')
