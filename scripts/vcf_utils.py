"""VCF-specific utility functions for pipeline scripts.

This module provides helpers for reading flat, single-sample variant files:
variant type classification, comment handling, transparent decompression and
header inspection with pysam.
"""

import gzip
from pathlib import Path
from typing import IO, Iterator

import pysam

from constants import COMMENT_PREFIX, VariantType

GZIP_MAGIC = b"\x1f\x8b"
ENCODING = "utf-8"


class LineDecodeError(ValueError):
    """A line of a variant file is not valid UTF-8 text."""

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}")


def determine_variant_type(ref: str, alt: str) -> str:
    """Determine variant type from REF and ALT alleles.

    Args:
        ref: Reference allele
        alt: Alternate allele

    Returns:
        "snv", "ins", "del", or "complex"

    Examples:
        >>> determine_variant_type("A", "G")
        'snv'
        >>> determine_variant_type("AT", "A")
        'del'
        >>> determine_variant_type("A", "AT")
        'ins'
        >>> determine_variant_type("AT", "GC")
        'complex'
    """
    if len(ref) == 1 and len(alt) == 1:
        return VariantType.SNV
    elif len(ref) > 1 and len(alt) == 1:
        return VariantType.DEL
    elif len(ref) == 1 and len(alt) > 1:
        return VariantType.INS
    else:
        return VariantType.COMPLEX


def is_comment_line(line: str) -> bool:
    """Return True for header/comment lines ("##..." and "#CHROM...")."""
    return line.startswith(COMMENT_PREFIX)


def is_gzipped(path: str | Path) -> bool:
    """Check the gzip magic bytes (plain gzip and bgzip share them)."""
    with open(path, "rb") as f:
        return f.read(2) == GZIP_MAGIC


def open_variant_text(path: str | Path) -> IO[str]:
    """Open a variant file for text reading, decompressing if needed."""
    if is_gzipped(path):
        return gzip.open(path, "rt", encoding=ENCODING)
    return open(path, "r", encoding=ENCODING)


def open_variant_bytes(path: str | Path) -> IO[bytes]:
    """Open a variant file for binary reading, decompressing if needed."""
    if is_gzipped(path):
        return gzip.open(path, "rb")
    return open(path, "rb")


def iter_data_lines(path: str | Path) -> Iterator[tuple[int, str]]:
    """Yield (1-based line number, line) for every non-comment, non-blank line.

    Trailing newline characters are stripped; tabs inside the line are kept.
    Lines are decoded one at a time so a bad byte is reported with its line.

    Raises:
        LineDecodeError: If a line is not valid UTF-8
    """
    with open_variant_bytes(path) as handle:
        for line_number, raw in enumerate(handle, start=1):
            try:
                line = raw.decode(ENCODING).rstrip("\r\n")
            except UnicodeDecodeError as e:
                raise LineDecodeError(line_number, f"not valid UTF-8 text ({e.reason})") from e
            if not line.strip() or is_comment_line(line):
                continue
            yield line_number, line


def has_vcf_header(path: str | Path) -> bool:
    """Return True if the file starts with a ##fileformat meta line.

    Compares raw bytes, so binary or non-UTF-8 content is simply not a VCF.
    """
    with open_variant_bytes(path) as handle:
        first = handle.readline()
    return first.startswith(b"##fileformat=VCF")


def read_header_samples(path: str | Path) -> list[str]:
    """Return the sample names declared in a VCF header.

    Args:
        path: Path to a VCF (plain or bgzipped) with a proper header

    Returns:
        List of sample names in header order
    """
    with pysam.VariantFile(str(path)) as vcf:
        return list(vcf.header.samples)
