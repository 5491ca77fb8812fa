"""Tabular outputs for the overlap-chart collaborator.

Writes the membership table (boolean column per caller plus type), the
flattened intersection counts for every comparison scope and the per-caller
private-call truth matches as tab-separated files.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from constants import ComparisonStatus

log = logging.getLogger(__name__)


def write_tsv(df: pd.DataFrame, output_path: str | Path) -> str:
    """Write a DataFrame as TSV, creating parent directories."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, sep="\t", index=False)
    log.info("Wrote %d rows to %s", len(df), path)
    return str(path)


def write_membership_table(membership: pd.DataFrame, output_path: str | Path) -> str:
    return write_tsv(membership, output_path)


def intersections_frame(comparisons: dict, callers: list[str]) -> pd.DataFrame:
    """Flatten lattices for every scope into one table.

    Scopes without data get a single row with status "no_data" and no
    membership flags.
    """
    columns = ["scope", "status", *callers, "combination", "degree", "count", "vids"]
    frames = []
    for scope, lattice in comparisons.items():
        if lattice is None:
            frames.append(pd.DataFrame([{"scope": scope, "status": ComparisonStatus.NO_DATA}]))
            continue
        df = lattice.to_frame()
        df.insert(0, "status", ComparisonStatus.OK)
        df.insert(0, "scope", scope)
        frames.append(df)

    if not frames:
        return pd.DataFrame(columns=columns)
    return pd.concat(frames, ignore_index=True).reindex(columns=columns)


def write_intersections_table(
    comparisons: dict, callers: list[str], output_path: str | Path
) -> str:
    return write_tsv(intersections_frame(comparisons, callers), output_path)


def write_private_calls(result, output_path: str | Path) -> str:
    """Write one caller's private calls with their truth-log match."""
    return write_tsv(result.to_frame(), output_path)
