"""JSON report generation.

Produces a structured, versioned JSON report containing run metadata,
input checksums, per-caller variant counts, intersection lattices for each
comparison scope, pairwise concordance and truth validation of private calls.
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import UTC, datetime

from constants import ComparisonStatus, TruthStatus
from utils import nan_to_none

log = logging.getLogger(__name__)

REPORT_VERSION = "1.0"


def generate_json_report(
    sample: str,
    callers: list[str],
    input_checksums: dict | None = None,
    variant_counts: dict | None = None,
    comparisons: dict | None = None,
    pairwise_concordance: dict | None = None,
    truth_validation: dict | None = None,
    truth_log: str | None = None,
) -> dict:
    """Generate a structured JSON report.

    Args:
        sample: Sample identifier
        callers: Caller names in panel order
        input_checksums: Dict of input labels to {"path", "sha256"}
        variant_counts: Dict caller -> {type: count}
        comparisons: Dict scope -> IntersectionLattice, or None for a scope
            with no data
        pairwise_concordance: Output of pairwise_concordance()
        truth_validation: Dict caller -> TruthValidationResult
        truth_log: Path of the truth log, if one was configured

    Returns:
        Complete JSON report as a dict
    """
    report = {
        "report_type": "caller_overlap",
        "report_version": REPORT_VERSION,
        "generated_at": datetime.now(UTC).isoformat(),
        "sample": sample,
        "callers": list(callers),
        "input_checksums": input_checksums or {},
        "variant_counts": variant_counts or {},
        "comparisons": {
            scope: _format_lattice(lattice)
            for scope, lattice in (comparisons or {}).items()
        },
        "pairwise_concordance": pairwise_concordance or {},
        "truth_validation": _format_truth_validation(
            callers, truth_validation, configured=truth_log is not None
        ),
    }

    log.info(
        "Generated JSON report for %s (version=%s, %d comparison scopes)",
        sample,
        REPORT_VERSION,
        len(report["comparisons"]),
    )
    return report


def _format_lattice(lattice) -> dict:
    """Format an intersection lattice (or its absence) for JSON output."""
    if lattice is None:
        return {"status": ComparisonStatus.NO_DATA, "total": None, "groups": []}

    return {
        "status": ComparisonStatus.OK,
        "total": lattice.total,
        "set_sizes": dict(lattice.set_sizes),
        "groups": [
            {
                "callers": list(g.callers),
                "membership": list(g.membership),
                "degree": g.degree,
                "count": g.count,
                "vids": list(g.vids),
            }
            for g in lattice.groups
        ],
    }


def _format_truth_validation(
    callers: list[str], results: dict | None, configured: bool
) -> dict:
    """Format per-caller truth validation for JSON output."""
    formatted = {}
    for caller in callers:
        result = (results or {}).get(caller)
        if result is None:
            status = TruthStatus.NOT_CONFIGURED if not configured else TruthStatus.NOT_APPLICABLE
            formatted[caller] = {"status": status, "private": None, "real": None, "percentage": None}
            continue

        formatted[caller] = {
            "status": TruthStatus.EVALUATED if result.applicable else TruthStatus.NOT_APPLICABLE,
            "private": result.total,
            "real": result.real,
            "percentage": nan_to_none(result.percentage),
            "join_policy": result.join_policy,
        }
    return formatted


def serialize_report(report: dict) -> str:
    """Serialize a report dict to a JSON string.

    Args:
        report: Report dict

    Returns:
        Pretty-printed JSON string
    """
    return json.dumps(report, indent=2, default=str, allow_nan=False)


def compute_report_checksum(report_json: str) -> str:
    """Compute SHA-256 checksum of a serialized report.

    Args:
        report_json: JSON string

    Returns:
        Hex digest
    """
    return hashlib.sha256(report_json.encode()).hexdigest()
