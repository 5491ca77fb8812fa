"""Load a flat, single-sample variant file into VariantRecord objects.

Reads the ten fixed tab-separated columns (chrom, pos, id, ref, alt, qual,
filter, info, format, sample). Header and comment lines starting with "#"
are skipped. Any malformed data line aborts the whole load: downstream set
comparisons rely on exact identifiers, so a partially loaded file is never
returned.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from constants import MIN_VARIANT_FIELDS, VARIANT_COLUMNS, VariantType
from models.variant import VariantRecord
from utils import safe_int
from validators.base import MalformedRecord, validate_file_exists
from vcf_utils import LineDecodeError, iter_data_lines

log = logging.getLogger(__name__)

FRAME_COLUMNS = ["vid", "type", *VARIANT_COLUMNS]


def parse_variant_line(line: str, file_name: str, line_number: int) -> VariantRecord:
    """Parse one tab-separated data line.

    Fields beyond the tenth are ignored.

    Raises:
        MalformedRecord: If the line has fewer than ten fields, a non-integer
            position or an empty REF/ALT
    """
    cols = line.split("\t")
    if len(cols) < MIN_VARIANT_FIELDS:
        raise MalformedRecord(
            file_name,
            line_number,
            f"expected at least {MIN_VARIANT_FIELDS} tab-separated fields, got {len(cols)}",
        )

    chrom, pos_str, vid_col, ref, alt, qual, filt, info, fmt, sample = cols[:MIN_VARIANT_FIELDS]

    pos = safe_int(pos_str)
    if pos is None:
        raise MalformedRecord(file_name, line_number, f"position '{pos_str}' is not an integer")
    if not chrom:
        raise MalformedRecord(file_name, line_number, "empty chromosome")
    if not ref or not alt:
        raise MalformedRecord(file_name, line_number, "empty REF or ALT allele")

    return VariantRecord(
        chrom=chrom,
        pos=pos,
        id=vid_col,
        ref=ref,
        alt=alt,
        qual=qual,
        filter=filt,
        info=info,
        format=fmt,
        sample=sample,
    )


def load_variants(variant_path: str | Path) -> list[VariantRecord]:
    """Load every data line of a variant file.

    Args:
        variant_path: Path to tab-delimited variant file (plain or gzipped)

    Returns:
        Records in file order; duplicates are kept

    Raises:
        ValidationError: If the file does not exist
        MalformedRecord: On the first line that cannot be decoded or parsed
    """
    path = validate_file_exists(variant_path, "Variant file")
    try:
        records = [
            parse_variant_line(line, path.name, line_number)
            for line_number, line in iter_data_lines(path)
        ]
    except LineDecodeError as e:
        raise MalformedRecord(path.name, e.line_number, e.reason) from e

    log.info("Loaded %d variants from %s", len(records), path)
    return records


def vids(records: Iterable[VariantRecord], variant_type: str | None = None) -> list[str]:
    """Return the identifiers of ``records``, optionally restricted to one type.

    Args:
        records: Loaded variant records
        variant_type: One of snv/ins/del/complex, or None for all

    Returns:
        Identifiers in record order (not deduplicated)
    """
    if variant_type is not None and variant_type not in VariantType.ALL:
        raise ValueError(
            f"Unknown variant type '{variant_type}'. "
            f"Valid options are: {sorted(VariantType.ALL)}"
        )
    return [r.vid for r in records if variant_type is None or r.type == variant_type]


def count_by_type(records: Iterable[VariantRecord]) -> dict[str, int]:
    """Count records per variant type, reporting every type (zeros included)."""
    counts = Counter(r.type for r in records)
    return {t: counts.get(t, 0) for t in VariantType.ORDERED}


def records_to_frame(records: Iterable[VariantRecord]) -> pd.DataFrame:
    """Tabulate records as a DataFrame with vid and type leading."""
    rows = [
        {
            "vid": r.vid,
            "type": r.type,
            "chrom": r.chrom,
            "pos": r.pos,
            "id": r.id,
            "ref": r.ref,
            "alt": r.alt,
            "qual": r.qual,
            "filter": r.filter,
            "info": r.info,
            "format": r.format,
            "sample": r.sample,
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
