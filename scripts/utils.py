"""Shared utility functions for pipeline scripts.

This module provides common helper functions used across multiple
pipeline scripts to avoid code duplication and ensure consistency.
"""

import math
from typing import Any

from constants import INTEGER_PATTERN, VID_DELIMITER, VID_PARTS
from validators.base import VidFormatError


def safe_int(val: Any, default: int | None = None) -> int | None:
    """Convert value to int, returning default for invalid values.

    Fractional values ("3.14") are rejected rather than truncated. Strings
    must be plain ASCII digits with an optional sign, so Python literal forms
    such as "1_00" are rejected too.

    Args:
        val: Value to convert to int
        default: Default value to return if conversion fails

    Returns:
        Integer value or default if conversion fails

    Examples:
        >>> safe_int("42")
        42
        >>> safe_int("3.14")
        None
        >>> safe_int("invalid", default=0)
        0
    """
    if isinstance(val, bool):
        return default
    if isinstance(val, float):
        if math.isnan(val) or math.isinf(val) or not val.is_integer():
            return default
        return int(val)
    if isinstance(val, int):
        return val
    if isinstance(val, str):
        text = val.strip()
        if INTEGER_PATTERN.fullmatch(text):
            return int(text)
    return default


def format_vid(chrom: str, pos: int, ref: str, alt: str) -> str:
    """Format variant coordinates into a variant identifier.

    Args:
        chrom: Chromosome name
        pos: 1-based position
        ref: Reference allele
        alt: Alternate allele

    Returns:
        Identifier string joined by underscores

    Examples:
        >>> format_vid("1", 100, "A", "G")
        '1_100_A_G'
    """
    return VID_DELIMITER.join((str(chrom), str(pos), ref, alt))


def parse_vid(vid: str) -> tuple[str, int, str, str]:
    """Parse a variant identifier into its components.

    Args:
        vid: Identifier in format "chrom_pos_ref_alt"

    Returns:
        Tuple of (chrom, pos, ref, alt)

    Raises:
        VidFormatError: If the identifier does not split into exactly four
            parts or the position is not an integer

    Examples:
        >>> parse_vid("chr1_12345_A_T")
        ('chr1', 12345, 'A', 'T')
    """
    parts = vid.split(VID_DELIMITER)
    if len(parts) != VID_PARTS:
        raise VidFormatError(
            f"Invalid variant identifier '{vid}': expected {VID_PARTS} "
            f"'{VID_DELIMITER}'-separated parts, got {len(parts)}"
        )
    chrom, pos_str, ref, alt = parts
    pos = safe_int(pos_str)
    if pos is None:
        raise VidFormatError(
            f"Invalid variant identifier '{vid}': position '{pos_str}' is not an integer"
        )
    return chrom, pos, ref, alt


def percentage(numerator: int, denominator: int) -> float:
    """Return 100 * numerator / denominator, or NaN when undefined.

    NaN rather than 0 or 100 keeps "nothing to evaluate" distinguishable
    from a real result.

    Examples:
        >>> percentage(1, 4)
        25.0
        >>> math.isnan(percentage(0, 0))
        True
    """
    if denominator == 0:
        return math.nan
    return 100.0 * numerator / denominator


def nan_to_none(val: float | None) -> float | None:
    """Map NaN to None for JSON output."""
    if val is None:
        return None
    if isinstance(val, float) and math.isnan(val):
        return None
    return val
