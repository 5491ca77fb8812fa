"""Shared test fixtures for pipeline script tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pysam
import pytest

# Add scripts directory and project root to path so all tests can import
SCRIPTS_DIR = str(Path(__file__).resolve().parent.parent / "scripts")
if SCRIPTS_DIR not in sys.path:
    sys.path.insert(0, SCRIPTS_DIR)

PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def variant_line(chrom, pos, ref, alt, vid=".", sample="0/1") -> str:
    """Build one 10-column variant line."""
    return "\t".join([str(chrom), str(pos), vid, ref, alt, "50", "PASS", "DP=20", "GT", sample])


@pytest.fixture
def variant_file(tmp_path) -> Callable:
    """Factory fixture for flat variant files.

    Example:
        >>> path = variant_file([("1", 100, "A", "G"), ("1", 200, "AT", "A")])
    """
    def _create(
        variants: list[tuple],
        filename: str = "calls.vcf",
        header: bool = True,
        extra_lines: list[str] | None = None,
    ) -> Path:
        path = tmp_path / filename
        lines = []
        if header:
            lines.append("##fileformat=VCFv4.2")
            lines.append("#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tSAMPLE")
        lines.extend(variant_line(*v) for v in variants)
        lines.extend(extra_lines or [])
        path.write_text("\n".join(lines) + "\n")
        return path

    return _create


@pytest.fixture
def truth_file(tmp_path) -> Callable:
    """Factory fixture for truth logs (pos, ref, alt; no header)."""
    def _create(rows: list[tuple], filename: str = "truth.tsv") -> Path:
        path = tmp_path / filename
        path.write_text("".join(f"{pos}\t{ref}\t{alt}\n" for pos, ref, alt in rows))
        return path

    return _create


@pytest.fixture
def bgzipped_vcf(tmp_path) -> Callable:
    """Factory fixture for real bgzipped VCFs written with pysam.

    Example:
        >>> vcf_path = bgzipped_vcf([
        ...     {"chrom": "chr1", "pos": 100, "ref": "A", "alt": "T"},
        ... ], samples=["NA12878"])
    """
    def _create(
        variants: list[dict],
        samples: list[str] | None = None,
        name: str = "test",
    ) -> Path:
        samples = samples or ["SAMPLE"]
        vcf_path = tmp_path / f"{name}.vcf"

        header = pysam.VariantHeader()
        for sample in samples:
            header.add_sample(sample)
        header.add_line('##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">')
        for chrom in sorted(set(v["chrom"] for v in variants)):
            header.add_line(f'##contig=<ID={chrom}>')

        with pysam.VariantFile(str(vcf_path), 'w', header=header) as vcf:
            for variant in variants:
                rec = vcf.new_record()
                rec.chrom = variant["chrom"]
                rec.pos = variant["pos"]
                rec.ref = variant["ref"]
                rec.alts = (variant["alt"],)
                for sample in samples:
                    rec.samples[sample]["GT"] = (0, 1)
                vcf.write(rec)

        bgz_path = tmp_path / f"{name}.vcf.gz"
        pysam.tabix_compress(str(vcf_path), str(bgz_path), force=True)
        return bgz_path

    return _create
