"""Tests for report storage utilities."""

from __future__ import annotations

import hashlib
import sys
from datetime import UTC, datetime
from pathlib import Path

# Add scripts directory to path
SCRIPTS_DIR = str(Path(__file__).resolve().parent.parent.parent / "scripts")
if SCRIPTS_DIR not in sys.path:
    sys.path.insert(0, SCRIPTS_DIR)

from reporting.report_storage import (  # noqa: E402
    compute_file_checksum,
    compute_input_checksums,
    generate_report_name,
    sanitize_name,
    save_report,
    unique_file_stems,
)


class TestGenerateReportName:
    def test_default_json(self):
        name = generate_report_name(
            "SIM01", date=datetime(2026, 2, 7, 10, 30, 0, tzinfo=UTC),
        )
        assert name == "SIM01_20260207_103000_caller_overlap.json"

    def test_tsv_extension(self):
        name = generate_report_name(
            "SIM01", "membership", extension="tsv",
            date=datetime(2026, 2, 7, 10, 30, 0, tzinfo=UTC),
        )
        assert name == "SIM01_20260207_103000_membership.tsv"

    def test_sanitizes_sample_name(self):
        name = generate_report_name(
            "sample/with spaces",
            date=datetime(2026, 2, 7, 10, 30, 0, tzinfo=UTC),
        )
        assert " " not in name
        assert "/" not in name

    def test_default_date(self):
        name = generate_report_name("SIM01")
        assert name.startswith("SIM01_")
        assert name.endswith("_caller_overlap.json")


class TestSanitizeName:
    def test_keeps_safe_characters(self):
        assert sanitize_name("gatk-4.5_hc") == "gatk-4.5_hc"

    def test_replaces_unsafe(self):
        assert sanitize_name("free bayes/v1") == "free_bayes_v1"

    def test_empty(self):
        assert sanitize_name("   ") == "unnamed"


class TestUniqueFileStems:
    def test_distinct_names_unchanged(self):
        assert unique_file_stems(["bcftools", "free bayes"]) == {
            "bcftools": "bcftools", "free bayes": "free_bayes",
        }

    def test_colliding_names_suffixed(self):
        stems = unique_file_stems(["a b", "a/b", "c"])
        assert stems == {"a b": "a_b_1", "a/b": "a_b_2", "c": "c"}

    def test_suffix_does_not_clash_with_existing_name(self):
        stems = unique_file_stems(["a b", "a/b", "a_b_2"])
        assert len(set(stems.values())) == 3


class TestComputeFileChecksum:
    def test_sha256(self, tmp_path):
        f = tmp_path / "test.txt"
        f.write_bytes(b"hello world")
        assert compute_file_checksum(f) == hashlib.sha256(b"hello world").hexdigest()

    def test_different_content(self, tmp_path):
        f1 = tmp_path / "a.txt"
        f2 = tmp_path / "b.txt"
        f1.write_text("content A")
        f2.write_text("content B")
        assert compute_file_checksum(f1) != compute_file_checksum(f2)


class TestComputeInputChecksums:
    def test_labels_and_paths(self, tmp_path):
        a = tmp_path / "a.vcf"
        a.write_text("x")
        result = compute_input_checksums({"caller:a": a})
        assert result["caller:a"]["path"] == str(a)
        assert result["caller:a"]["sha256"] == hashlib.sha256(b"x").hexdigest()


class TestSaveReport:
    def test_save_creates_dir(self, tmp_path):
        out = tmp_path / "nested" / "reports"
        path = save_report('{"a": 1}', out, "r.json")
        assert Path(path).exists()
        assert Path(path).read_text() == '{"a": 1}'
