"""Constants and enumerations for the caller-overlap pipeline.

Centralizes magic strings into named constants for type safety and IDE support.
"""

import re


class VariantType:
    """Coarse variant type classifications derived from REF/ALT lengths."""

    SNV = "snv"
    INS = "ins"
    DEL = "del"
    COMPLEX = "complex"

    # Display/report order
    ORDERED = (SNV, INS, DEL, COMPLEX)
    ALL = set(ORDERED)


class TruthJoinPolicy:
    """How private calls are joined to the truth log.

    The truth log carries no chromosome, so the only available key is the
    position. Variants on different chromosomes that share a position are
    compared against the same truth rows.
    """

    POSITION_ONLY = "position_only"

    ALL = {POSITION_ONLY}


class ComparisonStatus:
    """Outcome of a single set comparison in the report."""

    OK = "ok"
    NO_DATA = "no_data"

    ALL = {OK, NO_DATA}


class TruthStatus:
    """Outcome of a truth validation in the report."""

    EVALUATED = "evaluated"
    NOT_APPLICABLE = "not_applicable"
    NOT_CONFIGURED = "not_configured"

    ALL = {EVALUATED, NOT_APPLICABLE, NOT_CONFIGURED}


# Join delimiter for variant identifiers (chrom_pos_ref_alt)
VID_DELIMITER = "_"
VID_PARTS = 4

COMMENT_PREFIX = "#"

# Whole-number field (pos); ASCII digits only, no "_" separators
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Fixed column layout of a single-sample variant file
VARIANT_COLUMNS = (
    "chrom",
    "pos",
    "id",
    "ref",
    "alt",
    "qual",
    "filter",
    "info",
    "format",
    "sample",
)
MIN_VARIANT_FIELDS = len(VARIANT_COLUMNS)

TRUTH_COLUMNS = ("pos", "ref", "alt")

# Scope label for the unfiltered comparison
ALL_TYPES_SCOPE = "all"

# Separator for identifier lists in TSV cells
VIDS_SEPARATOR = ","

# Fixed columns of the membership and intersections tables; caller names
# become sibling columns and must not reuse these
RESERVED_COLUMN_NAMES = frozenset({
    "vid", "type", "scope", "status", "combination", "degree", "count", "vids",
})
