"""Validation for input files (variant tables, truth logs).

This module provides pre-flight validators that check inputs exist and have
the expected column layout before the loaders read them in full.
"""

from pathlib import Path

from constants import INTEGER_PATTERN, MIN_VARIANT_FIELDS, TRUTH_COLUMNS
from vcf_utils import (
    LineDecodeError,
    has_vcf_header,
    iter_data_lines,
    open_variant_text,
    read_header_samples,
)

from .base import ValidationError, validate_file_exists


def validate_variant_file(variant_path: str | Path) -> None:
    """Validate a variant file exists and its first data line has 10 columns.

    Only the first data line is inspected; the loader checks every line.

    Args:
        variant_path: Path to tab-delimited variant file (optionally gzipped)

    Raises:
        ValidationError: If file is missing, unreadable or the first data
            line has the wrong shape

    Example:
        >>> validate_variant_file("bcftools.vcf")
    """
    path = validate_file_exists(variant_path, "Variant file")

    try:
        for line_number, line in iter_data_lines(path):
            cols = line.split("\t")
            if len(cols) < MIN_VARIANT_FIELDS:
                raise ValidationError(
                    f"Variant file {path.name} line {line_number} has {len(cols)} columns, "
                    f"expected at least {MIN_VARIANT_FIELDS} "
                    f"(chrom, pos, id, ref, alt, qual, filter, info, format, sample)"
                )
            if not INTEGER_PATTERN.fullmatch(cols[1].strip()):
                raise ValidationError(
                    f"Variant file {path.name} line {line_number} has non-numeric "
                    f"position '{cols[1]}'"
                )
            break
    except LineDecodeError as e:
        raise ValidationError(f"Variant file {path.name} {e}")
    except OSError as e:
        raise ValidationError(f"Variant file {path.name} could not be read: {e}")


def validate_single_sample_vcf(variant_path: str | Path) -> None:
    """Reject VCFs whose header declares more than one sample.

    Files without a ##fileformat header are flat tables and are accepted
    as-is.

    Args:
        variant_path: Path to variant file

    Raises:
        ValidationError: If the header declares multiple samples or cannot
            be parsed
    """
    path = validate_file_exists(variant_path, "Variant file")
    try:
        headed = has_vcf_header(path)
    except OSError as e:
        raise ValidationError(f"Variant file {path.name} could not be read: {e}")
    if not headed:
        return

    try:
        samples = read_header_samples(path)
    except (OSError, ValueError) as e:
        raise ValidationError(
            f"VCF file {path.name} cannot be opened or has invalid header: {e}"
        )

    if len(samples) > 1:
        raise ValidationError(
            f"VCF file {path.name} declares {len(samples)} samples "
            f"({', '.join(samples)}); only single-sample files are supported"
        )


def validate_truth_log_format(truth_path: str | Path) -> None:
    """Validate the truth log has the 3-column (pos, ref, alt) layout.

    Args:
        truth_path: Path to tab-separated truth log

    Raises:
        ValidationError: If the first non-blank line has the wrong shape
    """
    path = validate_file_exists(truth_path, "Truth log")

    try:
        with open_variant_text(path) as f:
            for i, raw in enumerate(f):
                line = raw.rstrip("\r\n")
                if not line.strip():
                    continue

                cols = line.split("\t")
                if len(cols) != len(TRUTH_COLUMNS):
                    raise ValidationError(
                        f"Truth log {path.name} line {i+1} has {len(cols)} columns, "
                        f"expected {len(TRUTH_COLUMNS)} ({', '.join(TRUTH_COLUMNS)})"
                    )
                if not INTEGER_PATTERN.fullmatch(cols[0].strip()):
                    raise ValidationError(
                        f"Truth log {path.name} line {i+1} has non-numeric "
                        f"position '{cols[0]}'"
                    )
                break
    except ValidationError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(f"Truth log {path.name} could not be read: {e}")
