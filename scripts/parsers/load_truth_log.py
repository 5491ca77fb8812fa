"""Load the ground-truth mutation log.

The log is a headerless, tab-separated file with three columns: pos, ref,
alt. No comment handling is applied.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from constants import TRUTH_COLUMNS
from models.truth import TruthMutation
from utils import safe_int
from validators.base import MalformedRecord, validate_file_exists
from vcf_utils import is_gzipped

log = logging.getLogger(__name__)


def read_truth_table(truth_path: str | Path) -> pd.DataFrame:
    """Read the raw truth log as strings.

    Raises:
        MalformedRecord: If the file cannot be parsed as a 3-column table
    """
    path = validate_file_exists(truth_path, "Truth log")

    try:
        df = pd.read_csv(
            path,
            sep="\t",
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            compression="gzip" if is_gzipped(path) else None,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=list(TRUTH_COLUMNS))
    except pd.errors.ParserError as e:
        raise MalformedRecord(path.name, None, f"not a {len(TRUTH_COLUMNS)}-column table: {e}")
    except UnicodeDecodeError as e:
        raise MalformedRecord(path.name, None, f"not valid UTF-8 text ({e.reason})") from e

    if df.shape[1] != len(TRUTH_COLUMNS):
        raise MalformedRecord(
            path.name,
            None,
            f"expected {len(TRUTH_COLUMNS)} columns ({', '.join(TRUTH_COLUMNS)}), got {df.shape[1]}",
        )
    df.columns = list(TRUTH_COLUMNS)
    return df


def load_truth_log(truth_path: str | Path) -> list[TruthMutation]:
    """Load the truth log into TruthMutation rows.

    Args:
        truth_path: Path to tab-separated truth log

    Returns:
        Truth rows in file order

    Raises:
        ValidationError: If the file does not exist
        MalformedRecord: If a row has a missing field or non-integer position
    """
    path = Path(truth_path)
    df = read_truth_table(path)

    mutations = []
    for row_number, row in enumerate(df.itertuples(index=False), start=1):
        if pd.isna(row.ref) or pd.isna(row.alt) or not row.ref or not row.alt:
            raise MalformedRecord(path.name, row_number, "missing ref or alt")
        pos = safe_int(row.pos)
        if pos is None:
            raise MalformedRecord(path.name, row_number, f"position '{row.pos}' is not an integer")
        mutations.append(TruthMutation(pos=pos, ref=row.ref, alt=row.alt))

    log.info("Loaded %d truth mutations from %s", len(mutations), path)
    return mutations
