"""Truth-log validation of caller-private calls.

Decomposes each private identifier, joins it to the truth log on position
(the log has no chromosome column) and reports the percentage of private
calls whose REF/ALT match a truth row at that position.

A private call at a position with no truth row counts as not real; it stays
in the denominator.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from constants import TruthJoinPolicy
from models.truth import TruthMutation
from utils import parse_vid, percentage

log = logging.getLogger(__name__)

MATCH_COLUMNS = ["vid", "chrom", "pos", "ref", "alt", "truth_ref", "truth_alt", "is_real"]


@dataclass(frozen=True)
class PrivateCallMatch:
    """Outcome of joining one private call to the truth log."""

    vid: str
    chrom: str
    pos: int
    ref: str
    alt: str
    truth_ref: str | None
    truth_alt: str | None
    is_real: bool


@dataclass(frozen=True)
class TruthValidationResult:
    caller: str | None
    total: int
    real: int
    matches: tuple[PrivateCallMatch, ...]
    join_policy: str = TruthJoinPolicy.POSITION_ONLY

    @property
    def percentage(self) -> float:
        """100 * real / total; NaN when there were no private calls."""
        return percentage(self.real, self.total)

    @property
    def applicable(self) -> bool:
        return self.total > 0

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {
                "vid": m.vid,
                "chrom": m.chrom,
                "pos": m.pos,
                "ref": m.ref,
                "alt": m.alt,
                "truth_ref": m.truth_ref,
                "truth_alt": m.truth_alt,
                "is_real": m.is_real,
            }
            for m in self.matches
        ]
        return pd.DataFrame(rows, columns=MATCH_COLUMNS)


def index_truth_by_position(
    truth: Iterable[TruthMutation],
) -> dict[int, list[TruthMutation]]:
    """Group truth rows by position, keeping file order within a position."""
    by_pos: dict[int, list[TruthMutation]] = defaultdict(list)
    for t in truth:
        by_pos[t.pos].append(t)
    return dict(by_pos)


def match_private_call(
    vid: str, truth_by_pos: dict[int, list[TruthMutation]]
) -> PrivateCallMatch:
    """Join one private identifier to the truth index by position.

    Raises:
        VidFormatError: If the identifier does not decompose into four parts
    """
    chrom, pos, ref, alt = parse_vid(vid)
    candidates = truth_by_pos.get(pos, [])

    matched = next((t for t in candidates if t.alleles == (ref, alt)), None)
    shown = matched or (candidates[0] if candidates else None)

    return PrivateCallMatch(
        vid=vid,
        chrom=chrom,
        pos=pos,
        ref=ref,
        alt=alt,
        truth_ref=shown.ref if shown else None,
        truth_alt=shown.alt if shown else None,
        is_real=matched is not None,
    )


def validate_private_calls(
    private: Iterable[str],
    truth: Iterable[TruthMutation],
    caller: str | None = None,
) -> TruthValidationResult:
    """Compute the fraction of private calls confirmed by the truth log.

    Args:
        private: Identifiers private to one caller (duplicates collapsed)
        truth: Truth-log rows
        caller: Caller name, carried through for reporting

    Returns:
        TruthValidationResult; ``percentage`` is NaN for an empty private set

    Raises:
        VidFormatError: If any identifier cannot be decomposed
    """
    truth_by_pos = index_truth_by_position(truth)
    matches = tuple(match_private_call(vid, truth_by_pos) for vid in sorted(set(private)))
    real = sum(1 for m in matches if m.is_real)

    result = TruthValidationResult(
        caller=caller,
        total=len(matches),
        real=real,
        matches=matches,
    )

    if result.applicable:
        log.info(
            "Truth validation (%s): %d/%d private calls real (%.2f%%)",
            caller or "unnamed", real, result.total, result.percentage,
        )
    else:
        log.warning(
            "Truth validation (%s): no private calls, percentage not applicable",
            caller or "unnamed",
        )
    return result


def real_percentage(private: Iterable[str], truth: Iterable[TruthMutation]) -> float:
    """Shortcut returning only the percentage (NaN if no private calls)."""
    return validate_private_calls(private, truth).percentage
