"""Tests for scripts/utils.py utility functions."""

from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

# Add scripts directory to path
SCRIPTS_DIR = str(Path(__file__).resolve().parent.parent / "scripts")
sys.path.insert(0, SCRIPTS_DIR)

from utils import format_vid, nan_to_none, parse_vid, percentage, safe_int
from validators.base import ValidationError, VidFormatError


class TestSafeInt:
    """Tests for safe_int function."""

    def test_valid_int(self):
        assert safe_int("42") == 42
        assert safe_int(7) == 7
        assert safe_int(" 100 ") == 100

    def test_invalid_returns_default(self):
        assert safe_int("abc") is None
        assert safe_int("abc", default=0) == 0
        assert safe_int(None) is None
        assert safe_int("") is None

    def test_fractional_string_rejected(self):
        """Positions are whole numbers; '3.14' is not truncated."""
        assert safe_int("3.14") is None

    def test_integral_float_accepted(self):
        assert safe_int(100.0) == 100
        assert safe_int(1.5) is None

    def test_python_literal_forms_rejected(self):
        assert safe_int("1_00") is None
        assert safe_int("\u0661\u0662") is None  # Arabic-Indic digits
        assert safe_int("0x10") is None
        assert safe_int("-5") == -5

    def test_nan_and_bool_rejected(self):
        assert safe_int(float("nan")) is None
        assert safe_int(True) is None


class TestFormatVid:
    def test_snv_scenario(self):
        assert format_vid("1", 100, "A", "G") == "1_100_A_G"

    def test_deterministic(self):
        assert format_vid("chr2", 5, "AT", "A") == format_vid("chr2", 5, "AT", "A")


class TestParseVid:
    def test_round_trip(self):
        for chrom, pos, ref, alt in [
            ("1", 100, "A", "G"),
            ("chrX", 155000000, "ACGT", "A"),
            ("MT", 1, "C", "CTTT"),
        ]:
            assert parse_vid(format_vid(chrom, pos, ref, alt)) == (chrom, pos, ref, alt)

    def test_delimiter_in_chrom_raises(self):
        vid = format_vid("chrUn_gl000220", 100, "A", "G")
        with pytest.raises(VidFormatError, match="expected 4"):
            parse_vid(vid)

    def test_too_few_parts_raises(self):
        with pytest.raises(VidFormatError):
            parse_vid("1_100_A")

    def test_non_integer_pos_raises(self):
        with pytest.raises(VidFormatError, match="not an integer"):
            parse_vid("1_abc_A_G")

    def test_is_validation_error(self):
        with pytest.raises(ValidationError):
            parse_vid("bad")


class TestPercentage:
    def test_simple(self):
        assert percentage(1, 4) == 25.0
        assert percentage(3, 3) == 100.0
        assert percentage(0, 5) == 0.0

    def test_zero_denominator_is_nan(self):
        assert math.isnan(percentage(0, 0))


class TestNanToNone:
    def test_nan(self):
        assert nan_to_none(math.nan) is None

    def test_values_pass_through(self):
        assert nan_to_none(12.5) == 12.5
        assert nan_to_none(None) is None
        assert nan_to_none(0) == 0
